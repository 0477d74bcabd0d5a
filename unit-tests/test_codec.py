import base64
from unittest import TestCase

import pytest

from daps import codec, crypto
from daps.error import AuthenticationFailed, InvalidEncoding, InvalidText, PayloadTooShort
from daps.params import DapsParams

PASSPHRASE = 'correct horse battery staple'

sample_values = (
    '',
    's3cr3t',
    'https://example.com:8443/path?a=b',
    'value with trailing spaces   ',
    'многоязычный 値 🔑',
    'x' * 4096,
)


class TestAesGcmCodec(TestCase):
    def setUp(self):
        self.codec = codec.AesGcmCodec(PASSPHRASE)

    def test_round_trip(self):
        for value in sample_values:
            encoded = self.codec.encode(value)
            self.assertNotEqual(encoded, value)
            self.assertEqual(self.codec.decode(encoded), value)
            self.assertEqual(self.codec.decode_strict(encoded), value)

    def test_encoded_layout(self):
        encoded = self.codec.encode('s3cr3t')
        data = base64.b64decode(encoded)
        self.assertEqual(len(data), crypto.GCM_NONCE_SIZE + len('s3cr3t') + crypto.GCM_TAG_SIZE)
        self.assertNotIn(':', encoded)
        self.assertNotIn('\n', encoded)

    def test_fresh_nonce_per_encode(self):
        self.assertNotEqual(self.codec.encode('same'), self.codec.encode('same'))

    def test_invalid_base64(self):
        self.assertEqual(self.codec.decode('not base64!'), InvalidEncoding.sentinel)
        with self.assertRaises(InvalidEncoding):
            self.codec.decode_strict('not base64!')

    def test_payload_too_short(self):
        for size in (0, 1, crypto.GCM_NONCE_SIZE):
            blob = base64.b64encode(b'\x01' * size).decode()
            self.assertEqual(self.codec.decode(blob), PayloadTooShort.sentinel)
        with self.assertRaises(PayloadTooShort):
            self.codec.decode_strict(base64.b64encode(b'\x01' * crypto.GCM_NONCE_SIZE).decode())

    def test_tampered_ciphertext(self):
        data = bytearray(base64.b64decode(self.codec.encode('s3cr3t')))
        data[crypto.GCM_NONCE_SIZE] ^= 0x01
        blob = base64.b64encode(bytes(data)).decode()
        self.assertEqual(self.codec.decode(blob), AuthenticationFailed.sentinel)
        with self.assertRaises(AuthenticationFailed):
            self.codec.decode_strict(blob)

    def test_payload_shorter_than_tag(self):
        blob = base64.b64encode(b'\x02' * (crypto.GCM_NONCE_SIZE + 4)).decode()
        self.assertEqual(self.codec.decode(blob), AuthenticationFailed.sentinel)

    def test_wrong_passphrase(self):
        encoded = codec.AesGcmCodec('another passphrase').encode('s3cr3t')
        self.assertEqual(self.codec.decode(encoded), AuthenticationFailed.sentinel)

    def test_invalid_text(self):
        key = crypto.derive_key_sha256(PASSPHRASE)
        blob = base64.b64encode(crypto.encrypt_aes_v2(b'\xff\xfe\xfd', key)).decode()
        self.assertEqual(self.codec.decode(blob), InvalidText.sentinel)
        with self.assertRaises(InvalidText):
            self.codec.decode_strict(blob)

    def test_sentinels_are_distinct(self):
        sentinels = {InvalidEncoding.sentinel, PayloadTooShort.sentinel, AuthenticationFailed.sentinel,
                     InvalidText.sentinel}
        self.assertEqual(len(sentinels), 4)

    def test_legacy_envelope(self):
        self.assertEqual(self.codec.decode('encrypted(plain value)'), 'plain value')
        self.assertEqual(self.codec.decode('encrypted()'), '')
        self.assertEqual(self.codec.decode('encrypted(f(x))'), 'f(x)')


class TestNullCodec(TestCase):
    def test_identity(self):
        null_codec = codec.NullCodec()
        for value in sample_values + ('encrypted(x)', 'not base64!'):
            self.assertEqual(null_codec.encode(value), value)
            self.assertEqual(null_codec.decode(value), value)


@pytest.mark.parametrize('blob, expected', [
    ('encrypted(abc)', codec.Envelope(codec.ENVELOPE_LEGACY, 'abc')),
    ('encrypted(abc', codec.Envelope(codec.ENVELOPE_AES_GCM, 'encrypted(abc')),
    ('AAAA', codec.Envelope(codec.ENVELOPE_AES_GCM, 'AAAA')),
])
def test_parse_envelope(blob, expected):
    assert codec.parse_envelope(blob) == expected


def test_get_codec_follows_configuration():
    params = DapsParams()
    params.encryption = False
    assert isinstance(codec.get_codec(params), codec.NullCodec)

    params.encryption = True
    params.encryption_key = PASSPHRASE
    selected = codec.get_codec(params)
    assert isinstance(selected, codec.AesGcmCodec)
    assert codec.AesGcmCodec(PASSPHRASE).decode(selected.encode('v')) == 'v'


def test_get_codec_without_passphrase_uses_default_key():
    params = DapsParams()
    params.encryption = True
    params.encryption_key = ''
    encoded = codec.get_codec(params).encode('v')
    assert codec.AesGcmCodec('default_key').decode(encoded) == 'v'
