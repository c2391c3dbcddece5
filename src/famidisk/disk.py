# famidisk/disk.py
#
# Blocks making up one side of a Famicom Disk System disk.
#
# Written & released by Keir Fraser <keir.xen@gmail.com>
#
# This is free and unencumbered software released into the public domain.
# See the file COPYING for more details, or visit <http://unlicense.org>.

from __future__ import annotations
from typing import Optional

import struct

from famidisk import codes

# Every side starts with this. The leading 0x01 is the disk info block code.
disk_info_sig = b'\x01*NINTENDO-HVC*'

class BlockCode:
    DiskInfo   = 0x01
    FileCount  = 0x02
    FileHeader = 0x03
    FileData   = 0x04


class Block:
    """One block of a side, excluding any trailing CRC. @offset is the
    block's position in the input stream; @crc is the CRC stored after it,
    or None if the input representation carries no CRCs."""

    code: Optional[int] = None
    name = 'block'

    def __init__(self, dat: bytes, offset: int,
                 crc: Optional[int] = None) -> None:
        self.dat = dat
        self.offset = offset
        self.crc = crc
        self.side = 0

    def __len__(self) -> int:
        return len(self.dat)

    def __repr__(self) -> str:
        return '%s(side=%d, offset=0x%X, len=%d)' % (
            self.__class__.__name__, self.side, self.offset, len(self))


class DiskInfo(Block):

    code = BlockCode.DiskInfo
    name = 'disk info block'
    length = 56

    @property
    def manufacturer(self) -> codes.Code:
        return codes.manufacturer(self.dat[15])

    @property
    def game_name(self) -> str:
        return codes.printable(self.dat[16:19])

    @property
    def game_type(self) -> codes.Code:
        return codes.game_type(self.dat[19])

    @property
    def revision(self) -> Optional[int]:
        return None if self.dat[20] == 0xff else self.dat[20]

    @property
    def side_nr(self) -> int:
        return self.dat[21]

    @property
    def disk_nr(self) -> int:
        return self.dat[22]

    @property
    def disk_type(self) -> codes.Code:
        return codes.disk_type(self.dat[23])

    # Meaning unconfirmed.
    @property
    def boot_file(self) -> int:
        return self.dat[25]

    @property
    def mfg_date(self) -> Optional[str]:
        return codes.bcd_date(self.dat[31:34])

    @property
    def country(self) -> codes.Code:
        return codes.country(self.dat[34])

    @property
    def rewrite_date(self) -> Optional[str]:
        return codes.bcd_date(self.dat[44:47])

    # Format unknown: passed through as raw bytes.
    @property
    def writer_serial(self) -> bytes:
        return self.dat[49:51]

    @property
    def rewrite_count(self) -> int:
        return self.dat[52]

    @property
    def actual_side(self) -> int:
        return self.dat[53]

    @property
    def price(self) -> codes.Code:
        return codes.price(self.dat[55], rewritten=self.rewrite_count != 0)


class FileCount(Block):

    code = BlockCode.FileCount
    name = 'file amount block'
    length = 2

    @property
    def count(self) -> int:
        return self.dat[1]


class FileHeader(Block):

    code = BlockCode.FileHeader
    name = 'file header block'
    length = 16

    def __init__(self, dat: bytes, offset: int,
                 crc: Optional[int] = None) -> None:
        super().__init__(dat, offset, crc)
        (_, self.number, self.file_id, self.raw_name, self.address,
         self.size, self.kind_code) = struct.unpack('<3B8s2HB', dat)
        self.hidden = False

    @property
    def file_name(self) -> str:
        return codes.printable(self.raw_name)

    @property
    def kind(self) -> codes.Code:
        return codes.file_kind(self.kind_code)


class FileData(Block):

    code = BlockCode.FileData
    name = 'file data block'

    @property
    def payload(self) -> bytes:
        return self.dat[1:]


class Padding(Block):
    """End of side. Carries the number of filler bytes consumed from the
    input; no data or CRC is kept."""

    name = 'padding'

    def __init__(self, offset: int, nbytes: int) -> None:
        super().__init__(b'', offset)
        self.nbytes = nbytes

# Local variables:
# python-indent: 4
# End:
