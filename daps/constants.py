#      _
#   __| |__ _ _ __  ___
#  / _` / _` | '_ \(_-<
#  \__,_\__,_| .__//__/
#            |_|
#
# daps: AWS Parameter Store CLI
# Copyright 2025 daps contributors
#

PATH_DELIMITER = '/'
RECORD_SEPARATOR = ':'

PARAMETERS_FILE_PREFIX = 'parameters_'
VALUES_FILE_PREFIX = 'values_'
CACHE_FILE_EXTENSION = '.txt'

DEFAULT_REGION = 'us-east-1'
DEFAULT_BASE_PATH = PATH_DELIMITER
DEFAULT_STORE_DIR = 'parameters'
DEFAULT_PAGE_SIZE = 10
DEFAULT_PARAMETER_TYPE = 'String'
DEFAULT_ENCRYPTION_KEY = 'default_key'

PATCH_MODE_IN_PLACE = 'in-place'
PATCH_MODE_REWRITE = 'rewrite'
PATCH_MODES = (PATCH_MODE_IN_PLACE, PATCH_MODE_REWRITE)

ENCRYPTION_KEY_ENV = 'DAPS_ENCRYPTION_KEY'
CONFIG_FILE_ENV = 'DAPS_CONFIG_FILE'
DEBUG_ENV = 'DAPS_DEBUG'

# session metadata keys
SELECTED_PATH = 'selected'

# commands that rebuild their own argument line from the selected parameter
STATEFUL_VERBS = ('set', 'insert')

SHELL_COMMANDS = ('exit', 'refresh', 'reload', 'set', 'select', 'insert', 'search', 'migration')
