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
from typing import Dict, List, Optional, Tuple

from .storage import PathIndex


class ParameterCache:
    """ In-memory mirror of the parameters under the base path: path index and plain text values.

    Both maps sit behind a single lock and every change to them is made under one
    acquisition, so a reader never sees a path without its value or the reverse.
    The lock is only held for the map operation itself.
    """

    def __init__(self):
        self._lock = threading.RLock()
        self._index = PathIndex()
        self._values = {}    # type: Dict[str, str]

    def replace(self, index, values):    # type: (PathIndex, Dict[str, str]) -> None
        with self._lock:
            self._index = index
            self._values = values

    def put(self, path, value):    # type: (str, str) -> bool
        """Store a value and register its path. Returns True when the path had no value before."""
        with self._lock:
            is_new = path not in self._values
            self._index.insert(path)
            self._values[path] = value
            return is_new

    def get_value(self, path):    # type: (str) -> Optional[str]
        with self._lock:
            return self._values.get(path)

    def children(self, path):    # type: (str) -> List[str]
        with self._lock:
            return self._index.children(path)

    def index_entries(self):    # type: () -> List[Tuple[str, List[str]]]
        with self._lock:
            return list(self._index.entries())

    def values(self):    # type: () -> Dict[str, str]
        with self._lock:
            return dict(self._values)

    def search(self, term):    # type: (str) -> List[str]
        term = term.lower()
        with self._lock:
            return sorted(x for x in self._values if term in x.lower())

    @property
    def value_count(self):
        with self._lock:
            return len(self._values)
