#      _
#   __| |__ _ _ __  ___
#  / _` / _` | '_ \(_-<
#  \__,_\__,_| .__//__/
#            |_|
#
# daps: AWS Parameter Store CLI
# Copyright 2025 daps contributors
#

import abc
import logging
from collections import OrderedDict
from typing import Dict, Optional, Tuple

from .display import colorize, format_search_result
from .error import CommandError, FormatError
from .params import DapsParams
from .sync import SyncEngine

commands = OrderedDict()     # type: Dict[str, Command]
command_info = OrderedDict()


def register_commands(commands, command_info):
    commands['refresh'] = RefreshCommand()
    commands['reload'] = ReloadCommand()
    commands['set'] = SetCommand()
    commands['select'] = SelectCommand()
    commands['insert'] = InsertCommand()
    commands['search'] = SearchCommand()
    commands['migration'] = MigrationCommand()

    command_info['refresh'] = 'Reload all parameters from Parameter Store'
    command_info['reload'] = 'Re-fetch the selected parameter'
    command_info['set'] = 'Update the selected parameter: set <value>'
    command_info['select'] = 'Select a parameter from the last search: select <index>'
    command_info['insert'] = 'Create a parameter: insert <path>:<value>[:<type>]'
    command_info['search'] = 'Search cached parameter paths: search <term>'
    command_info['migration'] = 'Encode every cached value with the current encryption setting. Run it once.'


def parse_insert_args(args):    # type: (str) -> Tuple[str, str, Optional[str]]
    """``<path>:<value>[:<type>]``. A type is present only when the text holds two or more colons."""
    first = args.find(':')
    if first < 0:
        raise FormatError('insert', 'Invalid format. Expected <path>:<value>[:<type>]')
    last = args.rfind(':')
    path = args[:first].strip()
    if not path:
        raise FormatError('insert', 'Parameter path cannot be empty')
    if last == first:
        return path, args[first + 1:], None
    return path, args[first + 1:last], args[last + 1:].strip() or None


def get_selected(params, command):    # type: (DapsParams, str) -> str
    selected = params.metadata.selected
    if not selected:
        raise CommandError(command, 'No parameter selected')
    return selected


def format_result(value):    # type: (str) -> str
    return f'Result value: {colorize(value, "red")}'


class Command(abc.ABC):
    @abc.abstractmethod
    def execute_args(self, params, args):    # type: (DapsParams, str) -> Optional[str]
        pass


class RefreshCommand(Command):
    def execute_args(self, params, args):
        SyncEngine(params).load(refresh=True)
        logging.info('Parameters refreshed')


class ReloadCommand(Command):
    def execute_args(self, params, args):
        path = get_selected(params, 'reload')
        logging.info('Reloading parameter: %s', path)
        value = SyncEngine(params).reload_one(path)
        if not value:
            logging.info('Parameter "%s" not found', path)
        return format_result(value)


class SetCommand(Command):
    def execute_args(self, params, args):
        path = get_selected(params, 'set')
        logging.info('Setting parameter: %s', path)
        value = SyncEngine(params).set_existing(path, args)
        return format_result(value)


class SelectCommand(Command):
    def execute_args(self, params, args):
        args = args.strip()
        if not args:
            raise CommandError('select', 'No parameter selected')
        try:
            index = int(args)
        except ValueError:
            raise CommandError('select', f'"{args}" is not a search result index')
        search_result = params.metadata.search_result
        if index < 0 or index >= len(search_result):
            raise CommandError('select', 'Invalid index selected')
        params.metadata.selected = search_result[index]
        return f'Selected parameter: {colorize(search_result[index], "green")}'


class InsertCommand(Command):
    def execute_args(self, params, args):
        path, value, param_type = parse_insert_args(args)
        logging.info('Inserting parameter: %s', path)
        value = SyncEngine(params).insert_new(path, value, param_type)
        return format_result(value)


class SearchCommand(Command):
    def execute_args(self, params, args):
        keys = params.cache.search(args.strip())
        params.metadata.search_result = keys
        if not keys:
            logging.info('No matching parameters found')
            return
        rows = [(no, key, params.cache.get_value(key) or '') for no, key in enumerate(keys)]
        return format_search_result(rows)


class MigrationCommand(Command):
    def execute_args(self, params, args):
        count = SyncEngine(params).migrate_encryption()
        logging.info('Migration completed: %d values encoded', count)


def select_path(params, path):    # type: (DapsParams, str) -> Optional[str]
    """Any other input selects that literal path and shows its cached value."""
    params.metadata.selected = path
    value = params.cache.get_value(path)
    if value is None:
        logging.info('Parameter "%s" is not cached', path)
        return
    return f'You selected: {colorize(path, "green")}\nValue: {colorize(value, "red")}'
