import struct

import pytest
from Crypto.Cipher import ChaCha20
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms

from ccsh import chacha


# RFC 8439, 2.3.2
RFC_KEY = bytes(range(32))
RFC_NONCE = bytes.fromhex('000000090000004a00000000')
RFC_COUNTER = 1

RFC_BLOCK_OUT = [
    0xe4e7f110, 0x15593bd1, 0x1fdd0f50, 0xc47120a3,
    0xc7f4d1c7, 0x0368c033, 0x9aaa2204, 0x4e6cd4c3,
    0x466482d2, 0x09aa9f07, 0x05d7c214, 0xa2028bd9,
    0xd19c12b5, 0xb94e16de, 0xe883d0cb, 0x4e3c50a2,
]


def rfc_state(key, counter, nonce):
    return (chacha.bytes_to_words(chacha.SIGMA) +
            chacha.bytes_to_words(key) +
            [counter] +
            chacha.bytes_to_words(nonce))


def test_quarter_round_rfc_vector():
    # RFC 8439, 2.1.1
    x = [0x11111111, 0x01020304, 0x9b8d6f43, 0x01234567]
    chacha.quarter_round(x, 0, 1, 2, 3)
    assert x == [0xea2a92f4, 0xcb1cf8ce, 0x4581472e, 0x5881c4bb]


def test_quarter_round_touches_only_its_words():
    x = list(range(16))
    chacha.quarter_round(x, 2, 7, 8, 13)
    for i in set(range(16)) - {2, 7, 8, 13}:
        assert x[i] == i


def test_block_rfc_vector():
    state = rfc_state(RFC_KEY, RFC_COUNTER, RFC_NONCE)
    assert chacha.chacha_block(state) == RFC_BLOCK_OUT


def test_block_does_not_modify_input():
    state = rfc_state(RFC_KEY, RFC_COUNTER, RFC_NONCE)
    saved = state[:]
    chacha.chacha_block(state)
    assert state == saved


def test_block_words_fit_32_bits():
    out = chacha.chacha_block([0xFFFFFFFF] * 16)
    assert all(0 <= w <= 0xFFFFFFFF for w in out)


@pytest.mark.parametrize('counter,nonce_words', [
    (0, (0, 0, 0)),
    (3, (0, 0, 0)),
    (0x7FFFFFFF, (0, 7, 0)),
    (0x12345678, (0xdeadbeef, 0x01020304, 0xcafebabe)),
])
def test_block_matches_pycryptodome(counter, nonce_words):
    key = bytes((i * 7 + 3) & 0xFF for i in range(32))
    nonce = struct.pack('<3L', *nonce_words)

    cipher = ChaCha20.new(key=key, nonce=nonce)
    cipher.seek(counter * chacha.BLOCK_SIZE)
    key_stream = cipher.encrypt(bytes(chacha.BLOCK_SIZE))

    out = chacha.chacha_block(rfc_state(key, counter, nonce))
    assert chacha.words_to_bytes(out) == key_stream


def test_block_matches_cryptography():
    key = b'0123456789abcdef0123456789abcdef'
    nonce = struct.pack('<4L', 5, 0, 9, 0)

    encryptor = Cipher(algorithms.ChaCha20(key, nonce), mode=None).encryptor()
    key_stream = encryptor.update(bytes(chacha.BLOCK_SIZE))

    state = (chacha.bytes_to_words(chacha.SIGMA) +
             chacha.bytes_to_words(key) +
             chacha.bytes_to_words(nonce))
    assert chacha.words_to_bytes(chacha.chacha_block(state)) == key_stream


def test_reduced_rounds_differ():
    state = rfc_state(RFC_KEY, RFC_COUNTER, RFC_NONCE)
    assert chacha.chacha_block(state, 8) != chacha.chacha_block(state, 20)
    assert chacha.chacha_block(state, 12) != chacha.chacha_block(state, 20)


@pytest.mark.parametrize('rounds', [0, -2, 7])
def test_block_rejects_bad_rounds(rounds):
    with pytest.raises(ValueError):
        chacha.chacha_block([0] * 16, rounds)


def test_block_rejects_bad_state_size():
    with pytest.raises(ValueError):
        chacha.chacha_block([0] * 15)


def test_words_bytes_conversion():
    assert chacha.bytes_to_words(chacha.SIGMA) == [
        0x61707865, 0x3320646e, 0x79622d32, 0x6b206574
    ]
    assert chacha.words_to_bytes([0x61707865]) == b'expa'
    with pytest.raises(ValueError):
        chacha.bytes_to_words(b'abc')
