from collections import OrderedDict

from daps.params import DapsParams
from daps.remote import Parameter, ParameterPage

ENCRYPTION_KEY = 'unit-test-passphrase'


class FakeParameterStore:
    """In-memory stand-in for ParameterStore that records every call"""

    def __init__(self, parameters=None):
        self.parameters = OrderedDict()
        for path, value in (parameters or {}).items():
            if isinstance(value, tuple):
                self.parameters[path] = value
            else:
                self.parameters[path] = (value, 'String')
        self.calls = []

    @property
    def call_count(self):
        return len(self.calls)

    def calls_to(self, method):
        return [x for x in self.calls if x[0] == method]

    def get_one(self, path, with_decryption=True):
        self.calls.append(('get_one', path))
        if path not in self.parameters:
            return None
        value, param_type = self.parameters[path]
        return Parameter(path, value, param_type)

    def list_by_prefix(self, path, recursive=True, page_size=10, next_token=None):
        self.calls.append(('list_by_prefix', path, next_token))
        prefix = path.rstrip('/') + '/'
        paths = [x for x in self.parameters if x.startswith(prefix)]
        start = int(next_token) if next_token else 0
        end = start + page_size
        entries = [Parameter(x, self.parameters[x][0], self.parameters[x][1]) for x in paths[start:end]]
        return ParameterPage(entries, str(end) if end < len(paths) else None)

    def put_one(self, path, value, param_type=None, overwrite=True):
        self.calls.append(('put_one', path, value, param_type))
        self.parameters[path] = (value, param_type)
        return 1


SAMPLE_PARAMETERS = OrderedDict([
    ('/prod/app/db/password', 's3cr3t'),
    ('/prod/app/db/user', 'admin'),
    ('/prod/app/url', 'https://example.com:8443/app'),
    ('/prod/web/Token', ('tok3n', 'SecureString')),
    ('/dev/app/db/password', 'dev-password'),
])


def get_params(store_dir, base_path='/', encryption=False, remote=None, page_size=10):
    params = DapsParams()
    params.store_dir = str(store_dir)
    params.base_path = base_path
    params.encryption = encryption
    params.encryption_key = ENCRYPTION_KEY
    params.page_size = page_size
    params.remote = remote if remote is not None else FakeParameterStore(SAMPLE_PARAMETERS)
    return params
