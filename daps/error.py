#      _
#   __| |__ _ _ __  ___
#  / _` / _` | '_ \(_-<
#  \__,_\__,_| .__//__/
#            |_|
#
# daps: AWS Parameter Store CLI
# Copyright 2025 daps contributors
#

class Error(Exception):
    """Base class for exceptions in this module."""
    def __init__(self, message):
        super().__init__(message)
        self.message = message

    def __str__(self):
        return self.message


class ConfigError(Error):
    pass


class RemoteError(Error):
    """Exception raised when a Parameter Store request fails
    """

    def __init__(self, code, message):
        super().__init__(message)
        self.code = code

    def __str__(self):
        return f'{self.code or ""}: {self.message or ""}'


class CacheLoadError(Error):
    pass


class CacheWriteError(Error):
    pass


class CommandError(Error):
    def __init__(self, command, message):
        super().__init__(message)
        self.command = command

    def __str__(self):
        if self.command:
            return f'{self.command}: {self.message}'
        else:
            return super().__str__()


class FormatError(CommandError):
    pass


class DecryptionError(Error):
    """A stored value could not be decoded.

    ``sentinel`` is the text shown in place of the value, so that a corrupted
    cache entry is visible instead of fatal.
    """
    sentinel = 'decryption error'

    def __init__(self, message=None):
        super().__init__(message or self.sentinel)


class InvalidEncoding(DecryptionError):
    sentinel = 'decryption error: invalid base64'


class PayloadTooShort(DecryptionError):
    sentinel = 'decryption error: data too short'


class AuthenticationFailed(DecryptionError):
    sentinel = 'decryption error: authentication failed'


class InvalidText(DecryptionError):
    sentinel = 'decryption error: invalid utf8'
