#      _
#   __| |__ _ _ __  ___
#  / _` / _` | '_ \(_-<
#  \__,_\__,_| .__//__/
#            |_|
#
# daps: AWS Parameter Store CLI
# Copyright 2025 daps contributors
#

import json
import logging
from typing import Dict, List, Optional, Tuple

from . import codec
from .constants import DEFAULT_PARAMETER_TYPE, PARAMETERS_FILE_PREFIX, VALUES_FILE_PREFIX
from .error import CacheLoadError, RemoteError
from .params import DapsParams
from .storage import PathIndex, RecordStore, format_record, record_matcher


def encode_children(children):    # type: (List[str]) -> str
    return json.dumps(children, ensure_ascii=False)


def decode_children(text):    # type: (str) -> List[str]
    try:
        children = json.loads(text)
    except ValueError as e:
        raise CacheLoadError(f'Invalid child list "{text}": {e}')
    if not isinstance(children, list) or not all(isinstance(x, str) for x in children):
        raise CacheLoadError(f'Invalid child list "{text}"')
    return children


class SyncEngine:
    """Keeps the in-memory cache, the cache files and Parameter Store in step.

    Cache files for a base path:
        parameters_<base>.txt   path index, ``<path>: ["child", ...]``
        values_<base>.txt       values, ``<path>: <encoded value>``
    """

    def __init__(self, params, remote=None):    # type: (DapsParams, Optional[object]) -> None
        self.params = params
        self.remote = remote or params.remote
        self.codec = codec.get_codec(params)
        self.parameter_records = RecordStore(params.store_dir, PARAMETERS_FILE_PREFIX, params.patch_mode)
        self.value_records = RecordStore(params.store_dir, VALUES_FILE_PREFIX, params.patch_mode)

    @property
    def base_path(self):
        return self.params.base_path

    def load(self, refresh=False):    # type: (bool) -> bool
        """Load the cache. Returns True when it came from the cache files, False after a remote reload."""
        if not refresh:
            logging.debug('Checking for existing parameters and values files...')
            try:
                index, values = self.load_from_files()
            except CacheLoadError as e:
                logging.debug('Cache miss: %s', e)
            else:
                self.params.cache.replace(index, values)
                logging.debug('Loaded %d parameter paths and %d values from file', len(index), len(values))
                return True

        self.load_from_remote()
        return False

    def load_from_files(self):    # type: () -> Tuple[PathIndex, Dict[str, str]]
        index_records = self.parameter_records.read(self.base_path)
        value_records = self.value_records.read(self.base_path)

        index = PathIndex()
        index.insert(self.base_path)
        index.load_entries((path, decode_children(children)) for path, children in index_records.items())
        values = {path: self.codec.decode(value) for path, value in value_records.items()}
        return index, values

    def load_from_remote(self):    # type: () -> int
        logging.info('Loading parameters from Parameter Store from path %s ...', self.base_path)
        index = PathIndex()
        index.insert(self.base_path)
        values = {}    # type: Dict[str, str]

        total = 0
        next_token = None
        while True:
            page = self.remote.list_by_prefix(self.base_path, recursive=True, page_size=self.params.page_size,
                                              next_token=next_token)
            total += len(page.entries)
            logging.debug('Fetched %d parameters, total %d', len(page.entries), total)
            for param in page.entries:
                index.insert(param.path)
                values[param.path] = param.value
            next_token = page.next_token
            if not next_token:
                break

        self.params.cache.replace(index, values)

        logging.debug('Writing parameters and values to file...')
        self.write_index()
        self.value_records.write_all(self.base_path, ((k, self.codec.encode(v)) for k, v in values.items()))
        logging.info('Loaded %d parameters', total)
        return total

    def write_index(self):
        entries = self.params.cache.index_entries()
        self.parameter_records.write_all(self.base_path, ((path, encode_children(children))
                                                          for path, children in entries))

    def insert_new(self, path, value, param_type=None):    # type: (str, str, Optional[str]) -> str
        self.remote.put_one(path, value, param_type or DEFAULT_PARAMETER_TYPE, overwrite=True)
        logging.debug('Inserted parameter: %s', path)
        self._commit(path, value)
        return value

    def set_existing(self, path, value):    # type: (str, str) -> str
        param = self.remote.get_one(path, with_decryption=True)
        if param is None:
            raise RemoteError('ParameterNotFound', f'Parameter "{path}" does not exist')
        self.remote.put_one(path, value, param.type, overwrite=True)
        logging.debug('Updated parameter: %s', path)
        self._commit(path, value)
        return value

    def reload_one(self, path):    # type: (str) -> str
        param = self.remote.get_one(path, with_decryption=True)
        if param is None:
            logging.debug('Parameter not found: %s', path)
            return ''
        self._commit(path, param.value)
        return param.value

    def _commit(self, path, value):
        """Store the value in memory and write it through to the cache files."""
        is_new = self.params.cache.put(path, value)
        encoded = self.codec.encode(value)
        if is_new:
            self.value_records.append(self.base_path, path, encoded)
            self.write_index()
        elif not self.value_records.patch_matching(self.base_path, record_matcher(path),
                                                   format_record(path, encoded)):
            self.value_records.append(self.base_path, path, encoded)

    def migrate_encryption(self):    # type: () -> int
        """Encode every value stored in the values file with the current codec and rewrite the file.

        The stored text is taken as it is: the file is expected to hold plain text.
        Running this on a file that is already encoded encodes every value a second
        time, and a single decode no longer gives the original value back.
        """
        if not self.value_records.exists(self.base_path):
            logging.info('Values file does not exist, nothing to migrate')
            return 0

        logging.warning('Encoding every value in %s. Do not run the migration twice on the same file.',
                        self.value_records.get_file_path(self.base_path))
        records = self.value_records.read(self.base_path)
        count = self.value_records.write_all(self.base_path,
                                             ((k, self.codec.encode(v)) for k, v in records.items()))
        for path, value in records.items():
            self.params.cache.put(path, value)
        logging.debug('Migration completed, %d values encoded', count)
        return count
