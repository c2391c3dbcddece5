# famidisk/stream.py
#
# Sequential byte reader/writer used to walk and emit disk sides.
#
# Written & released by Keir Fraser <keir.xen@gmail.com>
#
# This is free and unencumbered software released into the public domain.
# See the file COPYING for more details, or visit <http://unlicense.org>.

from __future__ import annotations
from typing import BinaryIO

import io

from famidisk import error

class Reader:
    """Reads a binary stream front to back. Bytes that have been read can
    be pushed back with unread(), so a block can be classified before it
    is consumed."""

    def __init__(self, f: BinaryIO) -> None:
        self.f = f
        self.pos = 0
        self.lookahead = bytearray()

    @classmethod
    def from_bytes(cls, dat: bytes) -> Reader:
        return cls(io.BytesIO(dat))

    def read(self, n: int) -> bytes:
        """Read up to n bytes. A short result means end of stream."""
        dat = bytes(self.lookahead[:n])
        del self.lookahead[:n]
        if len(dat) < n:
            dat += self.f.read(n - len(dat))
        self.pos += len(dat)
        return dat

    def read_exact(self, n: int, what: str) -> bytes:
        off = self.pos
        dat = self.read(n)
        if len(dat) != n:
            raise error.truncated(what, off)
        return dat

    def unread(self, dat: bytes) -> None:
        self.lookahead[:0] = dat
        self.pos -= len(dat)


class Writer:
    """Writes a binary stream front to back. Already-written bytes can be
    patched in place once their final value is known."""

    def __init__(self, f: BinaryIO) -> None:
        self.f = f
        self.base = f.tell()
        self.pos = 0

    def write(self, dat: bytes) -> None:
        self.f.write(dat)
        self.pos += len(dat)

    def pad(self, n: int) -> None:
        if n > 0:
            self.write(bytes(n))

    def patch(self, off: int, dat: bytes) -> None:
        assert off + len(dat) <= self.pos
        self.f.seek(self.base + off)
        self.f.write(dat)
        self.f.seek(self.base + self.pos)

# Local variables:
# python-indent: 4
# End:
