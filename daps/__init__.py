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

__version__ = '1.0.0'
