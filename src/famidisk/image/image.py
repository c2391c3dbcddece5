# famidisk/image/image.py
#
# Written & released by Keir Fraser <keir.xen@gmail.com>
#
# This is free and unencumbered software released into the public domain.
# See the file COPYING for more details, or visit <http://unlicense.org>.

from __future__ import annotations
from typing import Optional, Type

import os, struct

from famidisk import error
from famidisk.stream import Reader, Writer

class Image:
    """A disk image representation: a sequence of fixed-length sides, each
    holding blocks optionally followed by a CRC. Subclasses define the
    layout; all methods are class methods operating on a Reader/Writer."""

    name = ''
    side_len = 0
    has_crc = False
    has_header = False

    @classmethod
    def block_len(cls, n: int) -> int:
        return n + 2 if cls.has_crc else n

    @classmethod
    def read_crc(cls, rd: Reader, what: str) -> Optional[int]:
        if not cls.has_crc:
            return None
        crc, = struct.unpack('<H', rd.read_exact(2, what + ' CRC'))
        return crc

    @classmethod
    def write_block(cls, wr: Writer, dat: bytes,
                    crc: Optional[int] = None) -> None:
        wr.write(dat)
        if cls.has_crc:
            assert crc is not None
            wr.write(struct.pack('<H', crc))


def detect(length: int) -> Type[Image]:
    """Classify an image by its total length."""
    from famidisk.image.fds import FDS
    from famidisk.image.qd import QD
    error.check(length != 0, 'Image file is empty')
    if length % QD.side_len == 0:
        return QD
    if length % FDS.side_len in (0, FDS.header_len):
        return FDS
    raise error.Fatal('Image is not in QD or FDS format (%d bytes)' % length)


def stream_length(f) -> int:
    pos = f.tell()
    length = f.seek(0, os.SEEK_END)
    f.seek(pos)
    return length - pos


class ImageFile:
    """Output image file. Opened on entry; closed on exit. If the block
    exits with an exception the partially-written file is removed."""

    def __init__(self, name: str, noclobber: bool = False) -> None:
        self.filename = name
        self.noclobber = noclobber

    def __enter__(self) -> Writer:
        try:
            self.file = open(self.filename, ('wb','xb')[self.noclobber])
        except FileExistsError:
            raise error.Fatal('%s: Output file exists (see --overwrite)'
                              % self.filename)
        return Writer(self.file)

    def __exit__(self, type, value, tb):
        # Always close the file.
        self.file.close()
        if type is not None:
            # An error occurred: We remove the target file.
            os.remove(self.filename)

# Local variables:
# python-indent: 4
# End:
