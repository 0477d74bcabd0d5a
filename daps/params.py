#      _
#   __| |__ _ _ __  ___
#  / _` / _` | '_ \(_-<
#  \__,_\__,_| .__//__/
#            |_|
#
# daps: AWS Parameter Store CLI
# Copyright 2025 daps contributors
#

import threading
from typing import Dict, List, Optional

from .cache import ParameterCache
from .constants import (DEFAULT_BASE_PATH, DEFAULT_PAGE_SIZE, DEFAULT_REGION, DEFAULT_STORE_DIR,
                        PATCH_MODE_IN_PLACE, SELECTED_PATH)


class SessionMetadata:
    """ Transient state of the interactive session. Never persisted. """

    def __init__(self):
        self._lock = threading.Lock()
        self._data = {}             # type: Dict[str, str]
        self._search_result = []    # type: List[str]

    def get(self, key, default=None):    # type: (str, Optional[str]) -> Optional[str]
        with self._lock:
            return self._data.get(key, default)

    def set(self, key, value):    # type: (str, str) -> None
        with self._lock:
            self._data[key] = value

    @property
    def selected(self):    # type: () -> str
        return self.get(SELECTED_PATH) or ''

    @selected.setter
    def selected(self, value):    # type: (str) -> None
        self.set(SELECTED_PATH, value)

    @property
    def search_result(self):    # type: () -> List[str]
        with self._lock:
            return list(self._search_result)

    @search_result.setter
    def search_result(self, value):    # type: (List[str]) -> None
        with self._lock:
            self._search_result = list(value)


class DapsParams:
    """ Global storage of data during the session """

    def __init__(self, config_filename='', config=None):
        self.config_filename = config_filename
        self.config = config or {}
        self.region = DEFAULT_REGION
        self.base_path = DEFAULT_BASE_PATH
        self.refresh = False
        self.store_dir = DEFAULT_STORE_DIR
        self.debug = False
        self.batch_mode = False
        self.encryption = True
        self.encryption_key = ''
        self.page_size = DEFAULT_PAGE_SIZE
        self.patch_mode = PATCH_MODE_IN_PLACE
        self.commands = []    # type: List[str]
        self.remote = None
        self.cache = ParameterCache()
        self.metadata = SessionMetadata()
