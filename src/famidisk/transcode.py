# famidisk/transcode.py
#
# Conversion between the QD and FDS image representations.
#
# Written & released by Keir Fraser <keir.xen@gmail.com>
#
# This is free and unencumbered software released into the public domain.
# See the file COPYING for more details, or visit <http://unlicense.org>.

from typing import Iterator, Optional, Tuple, Type

import io

from famidisk import error
from famidisk.crc import crc16
from famidisk.diag import Diagnostics, CRCMismatch, SideCountMismatch
from famidisk.disk import Block, DiskInfo, Padding
from famidisk.image.image import Image, detect
from famidisk.image.fds import FDS, Header
from famidisk.image.qd import QD
from famidisk.stream import Reader, Writer
from famidisk.walker import SideWalker

class Options:
    """add_header: Write an FDS header (FDS -> FDS).
    remove_header: Write no FDS header.
    recompute_crc: Regenerate every CRC (QD -> QD).
    zero_dib_crc: Store 0x0000 as the disk info block CRC (QD output).
    verify_crc: Check CRCs read from a QD image.
    """

    def __init__(self, add_header: bool = False,
                 remove_header: bool = False,
                 recompute_crc: bool = False,
                 zero_dib_crc: bool = False,
                 verify_crc: bool = True) -> None:
        self.add_header = add_header
        self.remove_header = remove_header
        self.recompute_crc = recompute_crc
        self.zero_dib_crc = zero_dib_crc
        self.verify_crc = verify_crc


def output_format(in_fmt: Type[Image], opts: Options) -> Type[Image]:
    """Choose the output representation for @in_fmt and validate @opts."""
    error.check(not (opts.add_header and opts.remove_header),
                'Cannot both add and remove the FDS header')
    out_fmt: Type[Image]
    if opts.recompute_crc:
        error.check(in_fmt is QD,
                    'Cannot recompute CRCs: source is %s' % in_fmt.name)
        error.check(not (opts.add_header or opts.remove_header),
                    'FDS header options are invalid for QD output')
        out_fmt = QD
    elif in_fmt is QD:
        error.check(not opts.add_header,
                    'Cannot add FDS header: source is QD')
        out_fmt = FDS
    elif opts.add_header or opts.remove_header:
        out_fmt = FDS
    else:
        out_fmt = QD
    error.check(not opts.zero_dib_crc or out_fmt.has_crc,
                'Cannot zero disk info block CRC for %s output'
                % out_fmt.name)
    return out_fmt


def block_crc_ok(blk: Block, expected: int) -> bool:
    # Some official images store a null disk info block CRC.
    if isinstance(blk, DiskInfo) and blk.crc == 0:
        return True
    return blk.crc == expected


class Transcoder:
    """Walks the image on @rd (in representation @in_fmt) and re-emits it
    on @wr in representation @out_fmt. With no @wr the image is only
    walked and verified."""

    def __init__(self, rd: Reader, in_fmt: Type[Image], length: int,
                 wr: Optional[Writer] = None,
                 out_fmt: Optional[Type[Image]] = None,
                 opts: Optional[Options] = None,
                 diag: Optional[Diagnostics] = None) -> None:
        self.rd, self.in_fmt, self.length = rd, in_fmt, length
        self.wr, self.out_fmt = wr, out_fmt
        self.opts = opts or Options()
        self.diag = diag if diag is not None else Diagnostics()
        assert (wr is None) == (out_fmt is None)
        self.header: Optional[Header] = None
        self.out_header: Optional[Header] = None
        self.nr_sides = 0
        if in_fmt.has_header:
            self.header = FDS.read_header(rd, length)

    def run(self) -> Diagnostics:
        for _ in self.blocks():
            pass
        return self.diag

    def blocks(self) -> Iterator[Block]:
        """Convert the image, yielding each input block once it has been
        verified and emitted."""
        self.start_output()
        walker = SideWalker(self.rd, self.in_fmt)
        side_start = 0
        for blk in walker:
            if isinstance(blk, DiskInfo) and self.wr is not None:
                side_start = self.wr.pos
            self.verify(blk)
            if self.wr is not None:
                self.emit(blk, side_start)
            yield blk
        self.nr_sides = walker.nr_sides
        self.finish_output()
        # A zero side count in the header means the count is not recorded.
        if (self.header is not None and self.header.sides
            and self.header.sides != self.nr_sides):
            self.diag.add(SideCountMismatch(self.header.sides, self.nr_sides))

    def verify(self, blk: Block) -> None:
        if (not self.in_fmt.has_crc or not self.opts.verify_crc
            or isinstance(blk, Padding)):
            return
        assert blk.crc is not None
        expected = crc16(blk.dat)
        if not block_crc_ok(blk, expected):
            self.diag.add(CRCMismatch(blk.name, blk.side,
                                      blk.offset + len(blk),
                                      blk.crc, expected))

    def out_crc(self, blk: Block) -> int:
        if isinstance(blk, DiskInfo) and self.opts.zero_dib_crc:
            return 0
        if blk.crc is not None and not self.opts.recompute_crc:
            return blk.crc
        return crc16(blk.dat)

    def emit(self, blk: Block, side_start: int) -> None:
        wr, out_fmt = self.wr, self.out_fmt
        assert wr is not None and out_fmt is not None
        if isinstance(blk, Padding):
            used = wr.pos - side_start
            error.check(used <= out_fmt.side_len,
                        '%s: Side %d too large for output (%d > %d bytes)'
                        % (out_fmt.name, blk.side, used, out_fmt.side_len))
            wr.pad(out_fmt.side_len - used)
            return
        crc = self.out_crc(blk) if out_fmt.has_crc else None
        out_fmt.write_block(wr, blk.dat, crc)

    def start_output(self) -> None:
        if self.wr is None or not self.out_fmt.has_header:
            return
        if self.opts.remove_header:
            return
        # Side count is patched in once all sides are walked.
        if self.header is not None:
            self.out_header = Header(0, raw=self.header.raw)
        else:
            self.out_header = Header(0)
        self.wr.write(self.out_header.to_bytes())

    def finish_output(self) -> None:
        if self.out_header is None:
            return
        assert self.wr is not None
        self.out_header.sides = self.nr_sides
        hdr = self.out_header.to_bytes()
        self.wr.patch(FDS.sides_off, hdr[FDS.sides_off:FDS.sides_off+1])


def convert_bytes(dat: bytes, opts: Optional[Options] = None,
                  diag: Optional[Diagnostics] = None
                  ) -> Tuple[bytes, Type[Image], Diagnostics]:
    """Convert an in-memory image. Returns the output image, its
    representation, and the diagnostics recorded."""
    opts = opts or Options()
    in_fmt = detect(len(dat))
    out_fmt = output_format(in_fmt, opts)
    out = io.BytesIO()
    t = Transcoder(Reader.from_bytes(dat), in_fmt, len(dat),
                   Writer(out), out_fmt, opts, diag)
    diag = t.run()
    return out.getvalue(), out_fmt, diag

# Local variables:
# python-indent: 4
# End:
