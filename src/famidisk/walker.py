# famidisk/walker.py
#
# Block-by-block parser for the sides of a disk image.
#
# Written & released by Keir Fraser <keir.xen@gmail.com>
#
# This is free and unencumbered software released into the public domain.
# See the file COPYING for more details, or visit <http://unlicense.org>.

from typing import Iterator, Optional, Type

from enum import Enum

from famidisk import error
from famidisk.disk import disk_info_sig, BlockCode
from famidisk.disk import Block, DiskInfo, FileCount, FileHeader, FileData
from famidisk.disk import Padding
from famidisk.image.image import Image
from famidisk.stream import Reader

class State(Enum):
    DiskInfo   = 1
    FileCount  = 2
    FileHeader = 3
    FileData   = 4
    Padding    = 5
    Done       = 6


class SideWalker:
    """Walks an image one block at a time.

    Each side is: disk info block, file amount block, any number of file
    header/data pairs, then padding up to the representation's side length.
    The file header/data loop ends at the first 16-byte chunk whose code is
    not a file header; that chunk is pushed back and the side is padded out.
    A Padding block is yielded at the end of every side.
    """

    def __init__(self, rd: Reader, fmt: Type[Image]) -> None:
        self.rd = rd
        self.fmt = fmt
        self.state = State.DiskInfo
        self.nr_sides = 0
        self.side_start = 0
        self.nr_files = 0
        self.file_size = 0

    def __iter__(self) -> Iterator[Block]:
        while True:
            blk = self.step()
            if blk is None:
                return
            yield blk

    def step(self) -> Optional[Block]:
        """Parse and return the next block, or None at end of image."""
        if self.state is State.DiskInfo:
            return self.disk_info()
        if self.state is State.FileCount:
            return self.file_count()
        if self.state is State.FileHeader:
            blk = self.file_header()
            return self.padding() if blk is None else blk
        if self.state is State.FileData:
            return self.file_data()
        if self.state is State.Padding:
            return self.padding()
        return None

    def _read(self, n: int, what: str):
        off = self.rd.pos
        dat = self.rd.read_exact(n, what)
        return dat, off

    def disk_info(self) -> Optional[Block]:
        off = self.rd.pos
        dat = self.rd.read(DiskInfo.length)
        if len(dat) == 0:
            self.state = State.Done
            return None
        if len(dat) != DiskInfo.length:
            raise error.truncated(DiskInfo.name, off)
        if dat[:len(disk_info_sig)] != disk_info_sig:
            raise error.bad_block(self.fmt.name, DiskInfo.name, off)
        blk = DiskInfo(dat, off, self.fmt.read_crc(self.rd, DiskInfo.name))
        self.nr_sides += 1
        self.side_start = off
        self.state = State.FileCount
        return self._tag(blk)

    def file_count(self) -> Block:
        dat, off = self._read(FileCount.length, FileCount.name)
        if dat[0] != BlockCode.FileCount:
            raise error.bad_block(self.fmt.name, FileCount.name, off)
        blk = FileCount(dat, off, self.fmt.read_crc(self.rd, FileCount.name))
        self.nr_files = blk.count
        self.state = State.FileHeader
        return self._tag(blk)

    def file_header(self) -> Optional[Block]:
        off = self.rd.pos
        dat = self.rd.read(FileHeader.length)
        if len(dat) < FileHeader.length or dat[0] != BlockCode.FileHeader:
            # Not a file header: the rest of the side is padding.
            self.rd.unread(dat)
            self.state = State.Padding
            return None
        crc = self.fmt.read_crc(self.rd, FileHeader.name)
        blk = FileHeader(dat, off, crc)
        blk.hidden = blk.number >= self.nr_files
        self.file_size = blk.size
        self.state = State.FileData
        return self._tag(blk)

    def file_data(self) -> Block:
        dat, off = self._read(1 + self.file_size, FileData.name)
        if dat[0] != BlockCode.FileData:
            raise error.bad_block(self.fmt.name, FileData.name, off)
        blk = FileData(dat, off, self.fmt.read_crc(self.rd, FileData.name))
        self.state = State.FileHeader
        return self._tag(blk)

    def padding(self) -> Block:
        off = self.rd.pos
        used = off - self.side_start
        error.check(used <= self.fmt.side_len,
                    '%s: Side %d overruns side length (%d > %d bytes)'
                    % (self.fmt.name, self.nr_sides, used, self.fmt.side_len))
        n = self.fmt.side_len - used
        self.rd.read_exact(n, 'end of side')
        self.state = State.DiskInfo
        return self._tag(Padding(off, n))

    def _tag(self, blk: Block) -> Block:
        blk.side = self.nr_sides
        return blk

# Local variables:
# python-indent: 4
# End:
