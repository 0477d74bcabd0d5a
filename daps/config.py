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
import os
from typing import List, Optional, Tuple, Union

from . import utils
from .constants import CONFIG_FILE_ENV, DEBUG_ENV, ENCRYPTION_KEY_ENV, PATCH_MODES, PATH_DELIMITER
from .error import ConfigError
from .params import DapsParams

STRING_PROPERTIES = ['region', ('path', 'base_path'), 'store_dir', 'patch_mode']   # type: List[Union[str, Tuple[str, str]]]
BOOL_PROPERTIES = ['debug', 'refresh', 'encryption', 'batch_mode']
INT_PROPERTIES = ['page_size']
CONFIG_FILE_NAME = 'config.json'


def split_name(name):   # type: (Union[str, Tuple[str, str]]) -> Tuple[str, str]
    if isinstance(name, tuple):
        return name
    return name, name


def load_config_properties(params):    # type: (DapsParams) -> None
    if not isinstance(params.config, dict):
        return

    for name in STRING_PROPERTIES:
        config_name, params_name = split_name(name)
        value = params.config.get(config_name)
        if value is None:
            continue
        if isinstance(value, str) and value:
            setattr(params, params_name, value)
        else:
            logging.warning('Configuration property "%s" is expected to be a string', config_name)

    for name in BOOL_PROPERTIES:
        config_name, params_name = split_name(name)
        value = params.config.get(config_name)
        if value is None:
            continue
        if isinstance(value, bool):
            setattr(params, params_name, value)
        else:
            logging.warning('Configuration property "%s" is expected to be true or false', config_name)

    for name in INT_PROPERTIES:
        config_name, params_name = split_name(name)
        value = params.config.get(config_name)
        if value is None:
            continue
        if isinstance(value, int) and not isinstance(value, bool) and value > 0:
            setattr(params, params_name, value)
        else:
            logging.warning('Configuration property "%s" is expected to be a positive number', config_name)


def find_config_file(config_filename=None):    # type: (Optional[str]) -> str
    config_filename = config_filename or os.getenv(CONFIG_FILE_ENV)
    if config_filename:
        return os.path.expanduser(config_filename)
    if os.path.isfile(CONFIG_FILE_NAME):
        return os.path.join(os.getcwd(), CONFIG_FILE_NAME)
    return os.path.join(utils.get_default_path(), CONFIG_FILE_NAME)


def get_params_from_config(config_filename=None):    # type: (Optional[str]) -> DapsParams
    if os.getenv(DEBUG_ENV):
        logging.getLogger().setLevel(logging.DEBUG)
        logging.info('Debug ON')

    params = DapsParams()
    params.config_filename = find_config_file(config_filename)
    if os.path.exists(params.config_filename):
        try:
            with open(params.config_filename) as config_file:
                params.config = json.load(config_file)
            load_config_properties(params)
        except ValueError as e:
            logging.error('Unable to parse JSON configuration file "%s": %s',
                          os.path.abspath(params.config_filename), e)
        except IOError as ioe:
            logging.warning('Error: Unable to open config file %s: %s', params.config_filename, ioe)

    if os.getenv(DEBUG_ENV):
        params.debug = True

    encryption_key = os.getenv(ENCRYPTION_KEY_ENV)
    if encryption_key:
        params.encryption_key = encryption_key

    return params


def validate_params(params):    # type: (DapsParams) -> None
    if not params.base_path.startswith(PATH_DELIMITER):
        raise ConfigError(f'Base path must start with \'{PATH_DELIMITER}\'')
    if params.patch_mode not in PATCH_MODES:
        raise ConfigError(f'Patch mode must be one of: {", ".join(PATCH_MODES)}')
    params.store_dir = utils.resolve_store_dir(params.store_dir)
    utils.ensure_store_dir(params.store_dir)
