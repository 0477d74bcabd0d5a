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
from typing import Optional, Tuple

from prompt_toolkit import PromptSession
from prompt_toolkit.enums import EditingMode
from prompt_toolkit.shortcuts import CompleteStyle

from . import display
from .autocomplete import ParameterCompleter
from .commands import commands, command_info, register_commands, select_path
from .display import bcolors
from .error import CacheWriteError, CommandError, Error, RemoteError
from .params import DapsParams
from .remote import ParameterStore
from .sync import SyncEngine

register_commands(commands, command_info)

EXIT_COMMANDS = {'exit', 'quit', 'q'}


def display_command_help():
    print(f'\n{bcolors.BOLD}Commands:{bcolors.ENDC}')
    width = max(len(x) for x in command_info)
    for cmd, description in command_info.items():
        print(f'  {bcolors.BOLD}{cmd:<{width}}{bcolors.ENDC}   {description}')
    print(f'  {bcolors.BOLD}{"exit":<{width}}{bcolors.ENDC}   Quit.')
    print('\nAny other input selects that parameter path and shows its cached value.')


def command_and_args_from_cmd(command_line):    # type: (str) -> Tuple[str, str]
    args = ''
    pos = command_line.find(' ')
    if pos > 0:
        cmd = command_line[:pos]
        args = command_line[pos + 1:]
    else:
        cmd = command_line.strip()

    return cmd, args


def do_command(params, command_line):    # type: (DapsParams, str) -> Optional[str]
    command_line = command_line.lstrip()
    if command_line.strip().lower() in ('help', '?'):
        display_command_help()
        return

    cmd, args = command_and_args_from_cmd(command_line)
    command = commands.get(cmd.lower())
    if command:
        return command.execute_args(params, args)

    return select_path(params, command_line.strip())


def loop(params):    # type: (DapsParams) -> int
    error_no = 0

    logging.getLogger().setLevel(logging.DEBUG if params.debug else logging.WARNING if params.batch_mode else logging.INFO)
    if params.remote is None:
        params.remote = ParameterStore(params.region)

    try:
        SyncEngine(params).load(refresh=params.refresh)
    except RemoteError as e:
        logging.error('Error loading parameters: %s', e)
        return 1
    except CacheWriteError as e:
        logging.error('Error writing parameter cache: %s', e)

    prompt_session = None
    if not params.batch_mode:
        if os.isatty(0) and os.isatty(1):
            prompt_session = PromptSession(multiline=False,
                                           editing_mode=EditingMode.VI,
                                           completer=ParameterCompleter(params),
                                           complete_style=CompleteStyle.MULTI_COLUMN,
                                           complete_while_typing=False)
        display.welcome()

    while True:
        command = ''
        if len(params.commands) > 0:
            command = params.commands[0]
            params.commands = params.commands[1:]
        elif params.batch_mode:
            break

        try:
            if not command:
                prompt = '' if params.batch_mode else '>> '
                if prompt_session is not None:
                    command = prompt_session.prompt(prompt)
                else:
                    command = input(prompt)

            if not command.strip():
                continue
            if command.strip().lower() in EXIT_COMMANDS:
                break

            if params.batch_mode:
                logging.info('> %s', command)
            error_no = 1
            result = do_command(params, command)
            error_no = 0
            if result:
                print(result)
        except EOFError:
            break
        except KeyboardInterrupt:
            print('CTRL-C')
            break
        except CommandError as e:
            logging.warning('%s', e)
        except RemoteError as e:
            logging.error('Parameter Store error: %s', e)
        except CacheWriteError as e:
            logging.error('Error writing parameter cache: %s', e.message)
        except Error as e:
            logging.error('%s', e.message)
        except Exception as e:
            logging.debug(e, exc_info=True)
            logging.error('An unexpected error occurred: %s. Use --verbose for more details', e)

        if params.batch_mode and error_no != 0:
            break

    if not params.batch_mode:
        logging.info('\nGoodbye.\n')

    return error_no
