#      _
#   __| |__ _ _ __  ___
#  / _` / _` | '_ \(_-<
#  \__,_\__,_| .__//__/
#            |_|
#
# daps: AWS Parameter Store CLI
# Copyright 2025 daps contributors
#

import logging
import os
import re
from typing import Callable, Dict, Iterable, Mapping, Optional, Tuple, Union

from .. import utils
from ..constants import CACHE_FILE_EXTENSION, PATCH_MODE_IN_PLACE, PATCH_MODE_REWRITE, PATCH_MODES, RECORD_SEPARATOR
from ..error import CacheLoadError, CacheWriteError

Records = Union[Mapping[str, str], Iterable[Tuple[str, str]]]
LineMatcher = Callable[[str], bool]


_ESCAPES = {'\\': '\\\\', '\n': '\\n', '\r': '\\r', '\t': '\\t'}
_UNESCAPES = {'\\': '\\', 'n': '\n', 'r': '\r', 't': '\t', 's': ' '}
_ESCAPED_CHAR = re.compile(r'\\(.)', re.DOTALL)


def escape_value(value):    # type: (str) -> str
    """Keep a value on one line. Spaces at either end are escaped so they survive line padding."""
    text = ''.join(_ESCAPES.get(x, x) for x in value)
    body = text.lstrip(' ')
    leading = len(text) - len(body)
    stripped = body.rstrip(' ')
    trailing = len(body) - len(stripped)
    return '\\s' * leading + stripped + '\\s' * trailing


def unescape_value(text):    # type: (str) -> str
    return _ESCAPED_CHAR.sub(lambda m: _UNESCAPES.get(m.group(1), m.group(1)), text)


def format_record(path, value):    # type: (str, str) -> str
    return f'{path}{RECORD_SEPARATOR} {escape_value(value)}'


def parse_record(line):    # type: (str) -> Optional[Tuple[str, str]]
    """Split a record line on its first separator. Padding around key and value is dropped."""
    key, sep, value = line.partition(RECORD_SEPARATOR)
    if not sep:
        return None
    key = key.strip()
    if not key:
        return None
    return key, unescape_value(value.rstrip('\r\n').strip(' '))


def record_matcher(path):    # type: (str) -> LineMatcher
    prefix = format_record(path, '')
    return lambda line: line.lstrip().startswith(prefix)


class RecordStore:
    """One line-oriented cache file per base path: ``<store_dir>/<prefix><sanitized base path>.txt``

    Every line is a record ``<path>: <value>``.  Backslashes, line breaks and tabs in
    the value are escaped, as are spaces at either end of it, so a record never spans
    more than one line and line padding is never mistaken for the value.

    Records are written in bulk with ``write_all``, added with ``append`` and
    replaced one at a time with ``patch``.
    An in-place patch overwrites the matching line at its byte offset and pads a
    shorter replacement with spaces before the newline, so the file length and the
    other lines stay unchanged.  A replacement that does not fit the original line,
    or any patch when ``patch_mode`` is ``rewrite``, rewrites the whole file.

    Writes are not atomic.  A failure in the middle of ``write_all`` leaves a
    truncated file behind, which the next load treats as a cache miss only if it
    cannot be parsed.
    """

    def __init__(self, store_dir, prefix, patch_mode=PATCH_MODE_IN_PLACE):
        # type: (str, str, str) -> None
        if patch_mode not in PATCH_MODES:
            raise ValueError(f'Unsupported patch mode "{patch_mode}"')
        self.store_dir = store_dir
        self.prefix = prefix
        self.patch_mode = patch_mode

    def get_file_path(self, base_path):    # type: (str) -> str
        file_name = f'{self.prefix}{utils.sanitize_base_path(base_path)}{CACHE_FILE_EXTENSION}'
        return os.path.join(self.store_dir, file_name)

    def exists(self, base_path):    # type: (str) -> bool
        return os.path.isfile(self.get_file_path(base_path))

    def read(self, base_path):    # type: (str) -> Dict[str, str]
        file_path = self.get_file_path(base_path)
        logging.debug('Loading records from file: %s', file_path)
        records = {}    # type: Dict[str, str]
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                for line in f:
                    record = parse_record(line)
                    if record:
                        key, value = record
                        records[key] = value
        except (OSError, UnicodeDecodeError) as e:
            raise CacheLoadError(f'Cannot read cache file "{file_path}": {e}')
        return records

    def write_all(self, base_path, records):    # type: (str, Records) -> int
        file_path = self.get_file_path(base_path)
        items = records.items() if isinstance(records, Mapping) else records
        count = 0
        try:
            with open(file_path, 'w', encoding='utf-8', newline='\n') as f:
                for key, value in items:
                    f.write(format_record(key, value) + '\n')
                    count += 1
        except OSError as e:
            raise CacheWriteError(f'Cannot write cache file "{file_path}": {e}')
        utils.set_file_permissions(file_path)
        logging.debug('%d records written to file: %s', count, file_path)
        return count

    def append(self, base_path, path, encoded_value):    # type: (str, str, str) -> None
        file_path = self.get_file_path(base_path)
        try:
            with open(file_path, 'a', encoding='utf-8', newline='\n') as f:
                f.write(format_record(path, encoded_value) + '\n')
        except OSError as e:
            raise CacheWriteError(f'Cannot append to cache file "{file_path}": {e}')
        logging.debug('Record "%s" appended to file: %s', path, file_path)

    def patch(self, base_path, match_text, replacement_line):    # type: (str, str, str) -> bool
        """Replace the first line containing ``match_text``. Returns False when no line matches."""
        return self.patch_matching(base_path, lambda line: match_text in line, replacement_line)

    def patch_matching(self, base_path, line_matcher, replacement_line):
        # type: (str, LineMatcher, str) -> bool
        file_path = self.get_file_path(base_path)
        body = replacement_line.rstrip('\r\n').encode('utf-8')
        if b'\n' in body:
            raise ValueError('Replacement must be a single line')

        if self.patch_mode == PATCH_MODE_REWRITE:
            return self._rewrite_matching(file_path, line_matcher, body)

        try:
            with open(file_path, 'r+b') as f:
                offset = 0
                while True:
                    line = f.readline()
                    if not line:
                        return False
                    if line_matcher(line.decode('utf-8', errors='replace')):
                        break
                    offset += len(line)

                has_newline = line.endswith(b'\n')
                available = len(line) - 1 if has_newline else len(line)
                if len(body) > available:
                    logging.debug('Replacement for line at offset %d is longer than the line, rewriting %s',
                                  offset, file_path)
                else:
                    f.seek(offset)
                    f.write(body + b' ' * (available - len(body)) + (b'\n' if has_newline else b''))
                    return True
        except FileNotFoundError:
            logging.debug('Cache file "%s" does not exist', file_path)
            return False
        except OSError as e:
            raise CacheWriteError(f'Cannot patch cache file "{file_path}": {e}')

        return self._rewrite_matching(file_path, line_matcher, body)

    @staticmethod
    def _rewrite_matching(file_path, line_matcher, body):    # type: (str, LineMatcher, bytes) -> bool
        try:
            with open(file_path, 'rb') as f:
                lines = f.readlines()
        except FileNotFoundError:
            logging.debug('Cache file "%s" does not exist', file_path)
            return False
        except OSError as e:
            raise CacheWriteError(f'Cannot read cache file "{file_path}": {e}')

        index = next((i for i, x in enumerate(lines) if line_matcher(x.decode('utf-8', errors='replace'))), None)
        if index is None:
            return False
        lines[index] = body + b'\n'
        try:
            with open(file_path, 'wb') as f:
                f.writelines(lines)
        except OSError as e:
            raise CacheWriteError(f'Cannot write cache file "{file_path}": {e}')
        return True
