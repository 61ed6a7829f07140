# MIT License
#
# Copyright (c) 2024 Andrey Zhdanov (rivitna)
# https://github.com/rivitna
#
# Permission is hereby granted, free of charge, to any person obtaining
# a copy of this software and associated documentation files
# (the "Software"), to deal in the Software without restriction, including
# without limitation the rights to use, copy, modify, merge, publish,
# distribute, sublicense, and/or sell copies of the Software, and to permit
# persons to whom the Software is furnished to do so, subject to
# the following conditions:
#
# The above copyright notice and this permission notice shall be included
# in all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL
# THE AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING
# FROM, OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER
# DEALINGS IN THE SOFTWARE.

import struct


BLOCK_WORDS = 16

BLOCK_SIZE = 4 * BLOCK_WORDS

ROUNDS = 20


# Standard ChaCha constants
SIGMA = b'expand 32-byte k'


MASK32 = 0xFFFFFFFF

_add32 = lambda x, y: (x + y) & MASK32

_xor32 = lambda x, y: (x ^ y) & MASK32

_rol32 = lambda v, s: ((v << s) & MASK32) | ((v & MASK32) >> (32 - s))


def quarter_round(x, a, b, c, d):
    """Perform a ChaCha quarter round on the words a, b, c, d of x"""

    x[a] = _add32(x[a], x[b])
    x[d] = _rol32(_xor32(x[d], x[a]), 16)

    x[c] = _add32(x[c], x[d])
    x[b] = _rol32(_xor32(x[b], x[c]), 12)

    x[a] = _add32(x[a], x[b])
    x[d] = _rol32(_xor32(x[d], x[a]), 8)

    x[c] = _add32(x[c], x[d])
    x[b] = _rol32(_xor32(x[b], x[c]), 7)


def double_round(x):
    """Perform two rounds of ChaCha (column and diagonal)"""

    # Columns
    quarter_round(x, 0, 4, 8, 12)
    quarter_round(x, 1, 5, 9, 13)
    quarter_round(x, 2, 6, 10, 14)
    quarter_round(x, 3, 7, 11, 15)
    # Diagonals
    quarter_round(x, 0, 5, 10, 15)
    quarter_round(x, 1, 6, 11, 12)
    quarter_round(x, 2, 7, 8, 13)
    quarter_round(x, 3, 4, 9, 14)


def words_to_bytes(words):
    """Convert words to little endian bytestream"""

    return struct.pack('<' + str(len(words)) + 'L', *words)


def bytes_to_words(data):
    """Convert a little endian bytestream to array of word sized ints"""

    if len(data) % 4 != 0:
        raise ValueError('Data length must be a multiple of 4')

    return list(struct.unpack('<' + str(len(data) // 4) + 'L', data))


def chacha_block(state, rounds=ROUNDS):
    """ChaCha block function.

    Mixes a 16-word input block and returns the 16 output words. Each
    output word is the working word after all rounds plus the input word
    (mod 2^32).
    """

    if len(state) != BLOCK_WORDS:
        raise ValueError('State must be 16 words long')

    if (rounds <= 0) or (rounds % 2 != 0):
        raise ValueError('Number of rounds must be a positive even number')

    working_state = list(state)

    for _ in range(rounds // 2):
        double_round(working_state)

    for i in range(BLOCK_WORDS):
        working_state[i] = _add32(state[i], working_state[i])

    return working_state
