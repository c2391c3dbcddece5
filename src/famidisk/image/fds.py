# famidisk/image/fds.py
#
# Written & released by Keir Fraser <keir.xen@gmail.com>
#
# This is free and unencumbered software released into the public domain.
# See the file COPYING for more details, or visit <http://unlicense.org>.

from __future__ import annotations
from typing import Optional

import struct

from famidisk import error
from famidisk.stream import Reader
from .image import Image

class Header:
    """16-byte FDS file header: magic, side count, 11 reserved zero bytes."""

    magic = b'FDS\x1a'

    def __init__(self, sides: int = 0, raw: Optional[bytes] = None) -> None:
        self.sides = sides
        self.raw = raw

    @classmethod
    def from_bytes(cls, dat: bytes) -> Optional[Header]:
        if len(dat) != FDS.header_len:
            return None
        magic, sides, rsvd = struct.unpack('<4sB11s', dat)
        if magic != cls.magic or any(rsvd):
            return None
        return cls(sides, raw=dat)

    def to_bytes(self) -> bytes:
        error.check(0 <= self.sides <= 255,
                    'FDS: Too many sides for header (%d)' % self.sides)
        if self.raw is None:
            return struct.pack('<4sB11x', self.magic, self.sides)
        return self.raw[:4] + bytes([self.sides]) + self.raw[5:]


class FDS(Image):
    """FDS image: 65500 bytes per side with no CRCs, optionally preceded
    by a 16-byte header."""

    name = 'FDS'
    side_len = 65500
    header_len = 16
    has_header = True

    # Offset of the side count within the header.
    sides_off = 4

    @classmethod
    def read_header(cls, rd: Reader, length: int) -> Optional[Header]:
        """Probe for a header at the start of an image of @length bytes.
        If none is found nothing is consumed from @rd."""
        if length % cls.side_len != cls.header_len:
            return None
        dat = rd.read(cls.header_len)
        header = Header.from_bytes(dat)
        if header is None:
            rd.unread(dat)
        return header

# Local variables:
# python-indent: 4
# End:
