# famidisk/tools/info.py
#
# famidisk control script: Display the contents of a disk image.
#
# Written & released by Keir Fraser <keir.xen@gmail.com>
#
# This is free and unencumbered software released into the public domain.
# See the file COPYING for more details, or visit <http://unlicense.org>.

description = "Display detailed information about a disk image."

from typing import Optional

from famidisk.tools import util
from famidisk.diag import Diagnostics
from famidisk.disk import Block, DiskInfo, FileCount, FileHeader
from famidisk.stream import Reader
from famidisk.transcode import Options, Transcoder

def print_info_line(name: str, value: str, tab=2) -> None:
    print(''.ljust(tab) + name + ': ' + value)

def side_label(side: int) -> str:
    return 'Disk %d Side %s' % ((side+1)//2, 'AB'[(side+1)%2])

def opt_str(x) -> str:
    return '<unknown>' if x is None else str(x)

def print_disk_info(blk: DiskInfo) -> None:
    print(side_label(blk.side))
    print_info_line('Manufacturer', str(blk.manufacturer))
    print_info_line('Game name', blk.game_name)
    print_info_line('Game type', str(blk.game_type))
    print_info_line('Game revision', opt_str(blk.revision))
    print_info_line('Side number', 'Side ' + 'AB'[blk.side_nr != 0])
    print_info_line('Disk number', '%d' % (blk.disk_nr + 1))
    print_info_line('Disk type', str(blk.disk_type))
    print_info_line('Boot read file code', '%d' % blk.boot_file)
    print_info_line('Manufacturing date', opt_str(blk.mfg_date))
    print_info_line('Country code', str(blk.country))
    print_info_line('"Rewritten disk" date (speculative)',
                    opt_str(blk.rewrite_date))
    print_info_line('Disk writer serial number (speculative)',
                    blk.writer_serial.hex().upper())
    print_info_line('Disk rewrite count', '%d' % blk.rewrite_count)
    print_info_line('Actual disk side', 'Side ' + 'AB'[blk.actual_side != 0])
    print_info_line('Price', str(blk.price))

def print_file_header(blk: FileHeader) -> None:
    print_info_line('File number', '%d%s' % (blk.number,
                                             ' (hidden)' if blk.hidden
                                             else ''))
    print_info_line('File indicate code', '%d' % blk.file_id, tab=4)
    print_info_line('File name', blk.file_name, tab=4)
    print_info_line('File address', '$%04X' % blk.address, tab=4)
    print_info_line('File size', '%d bytes' % blk.size, tab=4)
    print_info_line('File kind', str(blk.kind), tab=4)

def print_block(blk: Block) -> None:
    if isinstance(blk, DiskInfo):
        print_disk_info(blk)
    elif isinstance(blk, FileCount):
        print_info_line('File amount', '%d' % blk.count)
    elif isinstance(blk, FileHeader):
        print_file_header(blk)

def report(f, opts: Optional[Options] = None) -> Diagnostics:
    """Walk the image open on @f, printing every side and file."""
    in_fmt, length = util.identify(f)
    print('Source is in %s format' % in_fmt.name)
    t = Transcoder(Reader(f), in_fmt, length, opts=opts)
    if in_fmt.has_header:
        if t.header is None:
            print('No FDS header found')
        else:
            print('Found FDS header with %d side%s'
                  % (t.header.sides, 's' if t.header.sides != 1 else ''))
    for blk in t.blocks():
        print_block(blk)
    print('%d side%s, %d warning%s' % (t.nr_sides, 's'[:t.nr_sides!=1],
                                       len(t.diag), 's'[:len(t.diag)!=1]))
    return t.diag

def main(argv) -> int:

    parser = util.ArgumentParser(usage='%(prog)s [options] in_file')
    parser.add_argument("--no-verify", action="store_true",
                        help="do not check QD block CRCs")
    parser.add_argument("in_file", help="input filename")
    parser.description = description
    parser.prog += ' ' + argv[1]
    args = parser.parse_args(argv[2:])

    with open(args.in_file, 'rb') as f:
        diag = report(f, Options(verify_crc=not args.no_verify))
    return diag.status


# Local variables:
# python-indent: 4
# End:
