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
from typing import List, NamedTuple, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from .constants import DEFAULT_PAGE_SIZE
from .error import RemoteError

logging.getLogger('botocore').setLevel(logging.WARNING)

PARAMETER_NOT_FOUND = 'ParameterNotFound'


class Parameter(NamedTuple):
    path: str
    value: str
    type: Optional[str] = None


class ParameterPage(NamedTuple):
    entries: List[Parameter]
    next_token: Optional[str] = None


def _to_remote_error(e):    # type: (Exception) -> RemoteError
    if isinstance(e, ClientError):
        error = e.response.get('Error') or {}
        return RemoteError(error.get('Code') or 'ClientError', error.get('Message') or str(e))
    return RemoteError(type(e).__name__, str(e))


class ParameterStore:
    """ AWS Systems Manager Parameter Store client """

    def __init__(self, region, client=None):
        self.region = region
        self._client = client

    @property
    def client(self):
        if self._client is None:
            try:
                session = boto3.session.Session()
                self._client = session.client(service_name='ssm', region_name=self.region)
            except BotoCoreError as e:
                raise _to_remote_error(e)
        return self._client

    def get_one(self, path, with_decryption=True):    # type: (str, bool) -> Optional[Parameter]
        logging.debug('Fetching parameter: %s', path)
        try:
            rs = self.client.get_parameter(Name=path, WithDecryption=with_decryption)
        except ClientError as e:
            if (e.response.get('Error') or {}).get('Code') == PARAMETER_NOT_FOUND:
                return None
            raise _to_remote_error(e)
        except BotoCoreError as e:
            raise _to_remote_error(e)

        param = rs.get('Parameter')
        if not param or 'Value' not in param:
            return None
        return Parameter(param.get('Name') or path, param['Value'], param.get('Type'))

    def list_by_prefix(self, path, recursive=True, page_size=DEFAULT_PAGE_SIZE, next_token=None):
        # type: (str, bool, int, Optional[str]) -> ParameterPage
        rq = {
            'Path': path,
            'Recursive': recursive,
            'WithDecryption': True,
            'MaxResults': page_size,
        }
        if next_token:
            rq['NextToken'] = next_token
        try:
            rs = self.client.get_parameters_by_path(**rq)
        except (ClientError, BotoCoreError) as e:
            raise _to_remote_error(e)

        entries = [Parameter(x['Name'], x.get('Value') or '', x.get('Type'))
                   for x in rs.get('Parameters') or [] if x.get('Name')]
        return ParameterPage(entries, rs.get('NextToken') or None)

    def put_one(self, path, value, param_type=None, overwrite=True):
        # type: (str, str, Optional[str], bool) -> int
        rq = {
            'Name': path,
            'Value': value,
            'Overwrite': overwrite,
        }
        if param_type:
            rq['Type'] = param_type
        try:
            rs = self.client.put_parameter(**rq)
        except (ClientError, BotoCoreError) as e:
            raise _to_remote_error(e)
        return rs.get('Version') or 0
