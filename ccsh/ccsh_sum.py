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

import sys
import io
import os
from ccsh import ccsh


def hash_file(filename: str) -> str:
    """Get CCSH digest of file contents"""

    h = ccsh.StreamHasher()

    if filename == '-':
        h.update_file(sys.stdin.buffer, ccsh.BUF_SIZE)
    else:
        with io.open(filename, 'rb') as f:
            h.update_file(f, ccsh.BUF_SIZE)

    return h.digest()


def main(argv=None) -> int:
    """Print CCSH digests of files"""

    if argv is None:
        argv = sys.argv

    if len(argv) < 2:
        print('Usage:', os.path.basename(argv[0]), 'filename [filename ...]')
        return 0

    res = 0

    for filename in argv[1:]:

        try:
            digest = hash_file(filename)
        except OSError as e:
            print('Error: %s: %s' % (filename, e.strerror or e))
            res = 1
            continue

        print('%s  %s' % (digest, filename))

    return res


if __name__ == '__main__':
    sys.exit(main())
