#      _
#   __| |__ _ _ __  ___
#  / _` / _` | '_ \(_-<
#  \__,_\__,_| .__//__/
#            |_|
#
# daps: AWS Parameter Store CLI
# Copyright 2025 daps contributors
#

from .path_index import PathIndex, join_path, split_path
from .record_store import RecordStore, format_record, parse_record, record_matcher

__all__ = ['PathIndex', 'RecordStore', 'join_path', 'split_path', 'format_record',
           'parse_record', 'record_matcher']
