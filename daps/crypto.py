#      _
#   __| |__ _ _ __  ___
#  / _` / _` | '_ \(_-<
#  \__,_\__,_| .__//__/
#            |_|
#
# daps: AWS Parameter Store CLI
# Copyright 2025 daps contributors
#

import secrets

from cryptography.hazmat.backends import default_backend
from cryptography.hazmat.primitives.ciphers import Cipher
from cryptography.hazmat.primitives.ciphers.algorithms import AES
from cryptography.hazmat.primitives.ciphers.modes import GCM
from cryptography.hazmat.primitives.hashes import Hash, SHA256

_CRYPTO_BACKEND = default_backend()

GCM_NONCE_SIZE = 12
GCM_TAG_SIZE = 16


def get_random_bytes(length):
    return secrets.token_bytes(length)


def derive_key_sha256(passphrase):    # type: (str) -> bytes
    digest = Hash(SHA256(), backend=_CRYPTO_BACKEND)
    digest.update(passphrase.encode('utf-8'))
    return digest.finalize()


def encrypt_aes_v2(data, key, nonce=None):
    nonce = nonce or get_random_bytes(GCM_NONCE_SIZE)
    cipher = Cipher(AES(key), GCM(nonce), backend=_CRYPTO_BACKEND)
    encrypter = cipher.encryptor()
    encrypted_data = encrypter.update(data) + encrypter.finalize()
    return nonce + encrypted_data + encrypter.tag


def decrypt_aes_v2(data, key):
    """Raises cryptography.exceptions.InvalidTag when the tag does not verify."""
    nonce = data[:GCM_NONCE_SIZE]
    if len(data) < GCM_NONCE_SIZE + GCM_TAG_SIZE:
        raise ValueError('AES-GCM payload is shorter than nonce and tag')
    cipher = Cipher(AES(key), GCM(nonce), backend=_CRYPTO_BACKEND)
    decrypter = cipher.decryptor()
    decrypted_data = decrypter.update(data[GCM_NONCE_SIZE:-GCM_TAG_SIZE]) + \
        decrypter.finalize_with_tag(data[-GCM_TAG_SIZE:])
    return decrypted_data
