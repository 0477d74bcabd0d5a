# -*- coding: utf-8 -*-
#      _
#   __| |__ _ _ __  ___
#  / _` / _` | '_ \(_-<
#  \__,_\__,_| .__//__/
#            |_|
#
# daps: AWS Parameter Store CLI
# Copyright 2025 daps contributors
#

import argparse
import logging
import sys

from . import __version__
from . import cli
from .config import get_params_from_config, validate_params
from .error import ConfigError


parser = argparse.ArgumentParser(prog='daps', description='AWS Parameter Store CLI with tab completion',
                                 allow_abbrev=False)
parser.add_argument('--region', dest='region', action='store', help='AWS Region')
parser.add_argument('--path', '-p', dest='path', action='store',
                    help='Starting path for parameter store (e.g., /prod/)')
parser.add_argument('--refresh', '-r', dest='refresh', action='store_true', help='Refresh parameter cache')
parser.add_argument('--store-dir', dest='store_dir', action='store',
                    help='Store directory for parameters and values')
parser.add_argument('--verbose', dest='verbose', action='store_true', help='Verbose output')
parser.add_argument('--no-encryption', dest='no_encryption', action='store_true',
                    help='Store cached values without encryption')
parser.add_argument('--config', dest='config', action='store', help='Config file to use')
parser.add_argument('--batch-mode', dest='batch_mode', action='store_true', help='Run commands without a prompt')
parser.add_argument('--version', dest='version', action='store_true', help='Display version')
parser.add_argument('command', nargs='*', type=str, action='store', help='Commands to run')


def main():
    logging.basicConfig(format='%(message)s')

    opts = parser.parse_args(sys.argv[1:])
    if opts.version:
        print(f'daps, version {__version__}')
        return

    params = get_params_from_config(opts.config)
    if opts.region:
        params.region = opts.region
    if opts.path:
        params.base_path = opts.path
    if opts.refresh:
        params.refresh = True
    if opts.store_dir:
        params.store_dir = opts.store_dir
    if opts.verbose:
        params.debug = True
    if opts.no_encryption:
        params.encryption = False
    if opts.batch_mode:
        params.batch_mode = True
    if opts.command:
        params.commands.extend(opts.command)
        params.commands.append('exit')
        params.batch_mode = True

    try:
        validate_params(params)
    except ConfigError as e:
        logging.error(e.message)
        sys.exit(1)

    sys.exit(cli.loop(params))


if __name__ == '__main__':
    main()
