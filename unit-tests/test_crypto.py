from unittest import TestCase

from cryptography.exceptions import InvalidTag

from daps import crypto


class TestCrypto(TestCase):
    def test_derive_key(self):
        key = crypto.derive_key_sha256('passphrase')
        self.assertEqual(len(key), 32)
        self.assertEqual(key, crypto.derive_key_sha256('passphrase'))
        self.assertNotEqual(key, crypto.derive_key_sha256('Passphrase'))
        self.assertEqual(crypto.derive_key_sha256('').hex(),
                         'e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855')

    def test_encrypt_aes_v2(self):
        key = crypto.derive_key_sha256('passphrase')
        nonce = b'\x00' * crypto.GCM_NONCE_SIZE
        data = b'parameter value'

        encrypted = crypto.encrypt_aes_v2(data, key, nonce)
        self.assertEqual(encrypted[:crypto.GCM_NONCE_SIZE], nonce)
        self.assertEqual(len(encrypted), crypto.GCM_NONCE_SIZE + len(data) + crypto.GCM_TAG_SIZE)
        self.assertEqual(crypto.decrypt_aes_v2(encrypted, key), data)
        self.assertEqual(encrypted, crypto.encrypt_aes_v2(data, key, nonce))

    def test_random_nonce(self):
        key = crypto.derive_key_sha256('passphrase')
        first = crypto.encrypt_aes_v2(b'data', key)
        second = crypto.encrypt_aes_v2(b'data', key)
        self.assertNotEqual(first[:crypto.GCM_NONCE_SIZE], second[:crypto.GCM_NONCE_SIZE])

    def test_decrypt_errors(self):
        key = crypto.derive_key_sha256('passphrase')
        encrypted = bytearray(crypto.encrypt_aes_v2(b'data', key))
        encrypted[-1] ^= 0x80
        with self.assertRaises(InvalidTag):
            crypto.decrypt_aes_v2(bytes(encrypted), key)
        with self.assertRaises(ValueError):
            crypto.decrypt_aes_v2(b'\x00' * 20, key)
