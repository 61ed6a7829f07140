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

"""Counter ChaCha Stream Hash (CCSH).

Keyless 512-bit hash built on the ChaCha20 block function. The input is
cut into blocks of up to 32 bytes. Every block is placed in the key words
of a ChaCha state together with the running byte counter (word 12) and
the block index (word 14), and the block function outputs are XOR-folded
into the 16-word hash state.

Splitting the input over several update() calls gives the same digest as
a single call only when every split falls on a 32-byte boundary.

Not a cryptographic hash: no collision or length extension resistance is
claimed. Instances are not thread-safe.
"""

import struct
from ccsh import chacha


# Constant words of the reference implementation: "expa", "nd 3", "2 by",
# "te k" as big-endian words, i.e. 0x65787061, 0x6E642033, 0x32206279,
# 0x7465206B
CONSTANTS = b'apxe3 dnyb 2k et'

CONSTANTS_SIZE = 16

BLOCK_SIZE = 32

DIGEST_SIZE = 64

# File read size (multiple of BLOCK_SIZE)
BUF_SIZE = 0x40000


MASK32 = 0xFFFFFFFF
MASK64 = 0xFFFFFFFFFFFFFFFF


def _to_bytes(data) -> bytes:
    """Get hash input as bytes"""

    if isinstance(data, str):
        return data.encode('utf-8')

    try:
        view = memoryview(data)
    except TypeError:
        raise TypeError('Data must be a bytes-like object or str, not ' +
                        type(data).__name__) from None

    return view.tobytes()


class StreamHasher(object):

    """Counter ChaCha Stream Hash"""

    name = 'ccsh'
    digest_size = DIGEST_SIZE
    block_size = BLOCK_SIZE


    def __init__(self, data=None, constants: bytes = CONSTANTS):
        """Set the initial (empty) hash state"""

        if len(constants) != CONSTANTS_SIZE:
            raise ValueError('Constants must be 16 bytes long')

        self._constants = chacha.bytes_to_words(bytes(constants))

        self._state = [0] * 16
        self._counter = 0
        self._nonce = 0
        self._initialized = False

        if data is not None:
            self.start(data)


    @property
    def constants(self) -> bytes:
        return chacha.words_to_bytes(self._constants)


    @property
    def counter(self) -> int:
        """Number of bytes absorbed in the current session"""
        return self._counter


    @property
    def nonce(self) -> int:
        """Number of blocks absorbed in the current session"""
        return self._nonce


    @property
    def initialized(self) -> bool:
        return self._initialized


    def start(self, data=b'') -> None:
        """Begin a new hashing session with data"""

        self._state = [0] * 16
        self._counter = 0
        self._nonce = 0
        self._initialized = False
        self.update(data)


    def update(self, data) -> None:
        """Absorb data into the hash state"""

        data = _to_bytes(data)

        block = self._constants + [0] * 12

        for pos in range(0, len(data), BLOCK_SIZE):

            chunk = data[pos : pos + BLOCK_SIZE]

            # Payload (zero padded)
            block[4:12] = struct.unpack('<8L', chunk.ljust(BLOCK_SIZE, b'\0'))

            # Running byte counter, including this block
            self._counter = (self._counter + len(chunk)) & MASK64
            block[12] = self._counter & MASK32

            # Block index
            block[14] = self._nonce & MASK32
            self._nonce = (self._nonce + 1) & MASK64

            out = chacha.chacha_block(block, chacha.ROUNDS)

            if not self._initialized:
                self._state = out
                self._initialized = True
            else:
                for i in range(16):
                    self._state[i] ^= out[i]


    def update_file(self, f, chunk_size: int = BUF_SIZE) -> None:
        """Absorb the rest of a binary file object"""

        if (chunk_size <= 0) or (chunk_size % BLOCK_SIZE != 0):
            raise ValueError('Read size must be a positive multiple of 32')

        pending = b''

        while True:

            data = f.read(chunk_size)
            if not data:
                break

            # Short reads must not move block boundaries
            pending += data
            aligned_size = len(pending) - len(pending) % BLOCK_SIZE
            if aligned_size != 0:
                self.update(pending[:aligned_size])
                pending = pending[aligned_size:]

        if pending:
            self.update(pending)


    def words(self) -> tuple:
        """Get the 16 hash state words"""

        return tuple(self._state)


    def digest(self) -> str:
        """Get the hash state as 128 lowercase hex digits"""

        return ''.join('%08x' % w for w in self._state)


    hexdump = digest


    def digest_bytes(self) -> bytes:
        """Get the hash state as 64 bytes (big endian words)"""

        return struct.pack('>16L', *self._state)


    def copy(self):
        """Get an independent copy of the hasher"""

        h = type(self)(constants=self.constants)
        h._state = self._state[:]
        h._counter = self._counter
        h._nonce = self._nonce
        h._initialized = self._initialized
        return h


def ccsh_hex(data, constants: bytes = CONSTANTS) -> str:
    """Get CCSH digest of data"""

    h = StreamHasher(constants=constants)
    h.start(data)
    return h.digest()
