#      _
#   __| |__ _ _ __  ___
#  / _` / _` | '_ \(_-<
#  \__,_\__,_| .__//__/
#            |_|
#
# daps: AWS Parameter Store CLI
# Copyright 2025 daps contributors
#

"""Value codecs applied to parameter values before they are written to the cache files.

Two codecs share one interface and are chosen by configuration, never by the
shape of the stored text:

* ``NullCodec`` stores values as they are.
* ``AesGcmCodec`` stores ``base64(nonce || ciphertext || tag)``, AES-256-GCM with a
  key derived from the passphrase by SHA-256 and a fresh 96-bit nonce per value.

Stored text is read through a small tagged envelope.  Besides the AES-GCM
envelope, the legacy ``encrypted(<value>)`` wrapper written by early versions is
recognized and unwrapped without any cryptographic processing.
"""

import abc
import base64
import binascii
import logging
import re
from typing import NamedTuple

from cryptography.exceptions import InvalidTag

from . import crypto
from .constants import DEFAULT_ENCRYPTION_KEY
from .error import AuthenticationFailed, DecryptionError, InvalidEncoding, InvalidText, PayloadTooShort

ENVELOPE_LEGACY = 'legacy'
ENVELOPE_AES_GCM = 'aes-gcm'

_LEGACY_PATTERN = re.compile(r'^encrypted\((.*)\)$', re.DOTALL)


class Envelope(NamedTuple):
    version: str
    payload: str


def parse_envelope(blob):    # type: (str) -> Envelope
    match = _LEGACY_PATTERN.match(blob)
    if match:
        return Envelope(ENVELOPE_LEGACY, match.group(1))
    return Envelope(ENVELOPE_AES_GCM, blob)


class ValueCodec(abc.ABC):
    enabled = False

    @abc.abstractmethod
    def encode(self, value):    # type: (str) -> str
        pass

    @abc.abstractmethod
    def decode_strict(self, blob):    # type: (str) -> str
        """Decode stored text or raise a DecryptionError subclass."""
        pass

    def decode(self, blob):    # type: (str) -> str
        """Decode stored text. A value that cannot be decoded comes back as its sentinel text."""
        try:
            return self.decode_strict(blob)
        except DecryptionError as e:
            logging.debug('Cannot decode cached value: %s', e.sentinel)
            return e.sentinel


class NullCodec(ValueCodec):
    def encode(self, value):
        return value

    def decode_strict(self, blob):
        return blob


class AesGcmCodec(ValueCodec):
    enabled = True

    def __init__(self, passphrase):    # type: (str) -> None
        self._key = crypto.derive_key_sha256(passphrase)

    def encode(self, value):
        encrypted = crypto.encrypt_aes_v2(value.encode('utf-8'), self._key)
        return base64.b64encode(encrypted).decode('ascii')

    def decode_strict(self, blob):
        envelope = parse_envelope(blob)
        if envelope.version == ENVELOPE_LEGACY:
            return envelope.payload

        try:
            data = base64.b64decode(envelope.payload, validate=True)
        except (binascii.Error, ValueError):
            raise InvalidEncoding()

        if len(data) <= crypto.GCM_NONCE_SIZE:
            raise PayloadTooShort()

        try:
            decrypted = crypto.decrypt_aes_v2(data, self._key)
        except (InvalidTag, ValueError):
            raise AuthenticationFailed()

        try:
            return decrypted.decode('utf-8')
        except UnicodeDecodeError:
            raise InvalidText()


def get_codec(params):    # type: (...) -> ValueCodec
    if not params.encryption:
        return NullCodec()
    passphrase = params.encryption_key
    if not passphrase:
        logging.warning('Encryption key is not set, using default')
        passphrase = DEFAULT_ENCRYPTION_KEY
    return AesGcmCodec(passphrase)
