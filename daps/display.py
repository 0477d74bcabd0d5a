#      _
#   __| |__ _ _ __  ___
#  / _` / _` | '_ \(_-<
#  \__,_\__,_| .__//__/
#            |_|
#
# daps: AWS Parameter Store CLI
# Copyright 2025 daps contributors
#

from typing import List, Sequence, Tuple

from colorama import init, Fore, Style
from tabulate import tabulate

from . import __version__

init()


class bcolors:
    ENDC = '\033[0m'
    BOLD = '\033[1m'


def colorize(text, color):
    if color == 'red':
        return f'{Fore.RED}{text}{Fore.RESET}'
    if color == 'green':
        return f'{Fore.GREEN}{text}{Fore.RESET}'
    if color == 'blue':
        return f'{Fore.BLUE}{text}{Fore.RESET}'
    if color == 'yellow':
        return f'{Fore.YELLOW}{text}{Fore.RESET}'
    return text


def welcome():
    print(Style.RESET_ALL)
    print(f'{bcolors.BOLD}AWS Parameter Store CLI{bcolors.ENDC} ' + Fore.LIGHTBLACK_EX + f'v{__version__}' + Style.RESET_ALL)
    print(f'Type a parameter path and use {colorize("Tab", "red")} for completion')
    print(f'Type \'{colorize("exit", "yellow")}\' to quit\n')


def format_search_result(rows, headers=('#', 'Path', 'Value')):
    # type: (List[Tuple[int, str, str]], Sequence[str]) -> str
    table = [[colorize(str(no), 'yellow'), path, colorize(value, 'red')] for no, path, value in rows]
    return tabulate(table, headers=headers)
