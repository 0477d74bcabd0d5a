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
import platform
import stat
from pathlib import Path

from .constants import PATH_DELIMITER


def get_default_path():    # type: () -> Path
    """Directory for the default configuration file, ``~/.daps``"""
    default_path = Path.home().joinpath('.daps')
    default_path.mkdir(parents=True, exist_ok=True)
    return default_path


def resolve_store_dir(store_dir):    # type: (str) -> str
    """Absolute store directories are used as they are. Relative ones live under the home directory."""
    store_dir = os.path.expanduser(store_dir)
    if not os.path.isabs(store_dir):
        store_dir = os.path.join(str(Path.home()), store_dir)
    return store_dir


def ensure_store_dir(store_dir):    # type: (str) -> None
    try:
        os.makedirs(store_dir, exist_ok=True)
    except OSError as e:
        logging.warning('Failed to create directory %s: %s', store_dir, e)


def sanitize_base_path(base_path):    # type: (str) -> str
    return base_path.replace(PATH_DELIMITER, '_')


def set_file_permissions(file_path):     # type: (str) -> None
    """
    Restrict a cache file to its owner (600). Cache files may hold parameter values in plain text.
    """
    if platform.system() == 'Windows':
        return
    try:
        if os.path.islink(file_path):
            logging.warning('Skipping permission setting on symbolic link: %s', file_path)
            return
        os.chmod(file_path, stat.S_IRUSR | stat.S_IWUSR)
    except OSError:
        logging.warning('Failed to set file permissions for %s', file_path)
