#      _
#   __| |__ _ _ __  ___
#  / _` / _` | '_ \(_-<
#  \__,_\__,_| .__//__/
#            |_|
#
# daps: AWS Parameter Store CLI
# Copyright 2025 daps contributors
#

from typing import Dict, Iterable, Iterator, List, Tuple

from ..constants import PATH_DELIMITER


def split_path(path):    # type: (str) -> List[str]
    return [x for x in path.split(PATH_DELIMITER) if x]


def join_path(parent, name):    # type: (str, str) -> str
    if parent.endswith(PATH_DELIMITER):
        return parent + name
    return parent + PATH_DELIMITER + name


class PathIndex:
    """Tree of parameter paths, stored as a map from a path to its immediate child names.

    The root path is always present, and every other path's parent is present too.
    A child name is registered once per parent; children keep first-insertion order.
    """

    def __init__(self, root=PATH_DELIMITER):
        self.root = root
        self._children = {root: {}}    # type: Dict[str, Dict[str, None]]

    def insert(self, full_path):    # type: (str) -> str
        current_path = self.root
        for part in split_path(full_path):
            self._children.setdefault(current_path, {})[part] = None
            current_path = join_path(current_path, part)
            self._children.setdefault(current_path, {})
        return current_path

    def insert_all(self, paths):    # type: (Iterable[str]) -> None
        for path in paths:
            self.insert(path)

    def load_entries(self, entries):    # type: (Iterable[Tuple[str, Iterable[str]]]) -> None
        for path, children in entries:
            parent = self.insert(path)
            for child in children:
                self.insert(join_path(parent, child))

    def children(self, path):    # type: (str) -> List[str]
        return list(self._children.get(path) or ())

    def entries(self):    # type: () -> Iterator[Tuple[str, List[str]]]
        for path, children in self._children.items():
            yield path, list(children)

    def paths(self):
        return list(self._children)

    def clear(self):
        self._children.clear()
        self._children[self.root] = {}

    def __contains__(self, path):
        return path in self._children

    def __len__(self):
        return len(self._children)
