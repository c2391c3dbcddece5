# famidisk/tools/convert.py
#
# Written & released by Keir Fraser <keir.xen@gmail.com>
#
# This is free and unencumbered software released into the public domain.
# See the file COPYING for more details, or visit <http://unlicense.org>.

description = "Convert between QD and FDS image formats."

from famidisk import error
from famidisk.tools import util
from famidisk.tools import info
from famidisk.image.image import ImageFile
from famidisk.stream import Reader
from famidisk.transcode import Options, Transcoder, output_format

epilog = """\
Conversion direction:
  QD  -> FDS          :: Default for QD input (header written unless -r)
  FDS -> QD           :: Default for FDS input
  FDS -> FDS          :: With -a or -r: add/copy or remove the FDS header
  QD  -> QD           :: With -c: regenerate every block CRC
If out_file is omitted, information about in_file is displayed instead.
"""

def convert(args, opts: Options) -> int:

    with open(args.in_file, 'rb') as f:
        in_fmt, length = util.identify(f)
        out_fmt = output_format(in_fmt, opts)
        print("Converting %s -> %s" % (in_fmt.name, out_fmt.name))
        with ImageFile(args.out_file, not args.overwrite) as wr:
            t = Transcoder(Reader(f), in_fmt, length, wr, out_fmt, opts)
            if t.header is not None:
                print('Found FDS header with %d sides' % t.header.sides)
            diag = t.run()
        if t.out_header is not None:
            print('Wrote FDS header (%d sides)' % t.out_header.sides)
        print("Converted %d sides" % t.nr_sides)

    return diag.status


def main(argv) -> int:

    parser = util.ArgumentParser(usage='%(prog)s [options] in_file [out_file]',
                                 epilog=epilog)
    parser.add_argument("-a", "--add-header", action="store_true",
                        help="add (or copy) an FDS header: FDS -> FDS")
    parser.add_argument("-r", "--remove-header", action="store_true",
                        help="write no FDS header")
    parser.add_argument("-c", "--recompute-crc", action="store_true",
                        help="regenerate all block CRCs: QD -> QD")
    parser.add_argument("-z", "--zero-dib-crc", action="store_true",
                        help="write a null disk info block CRC (QD output)")
    parser.add_argument("-o", "--overwrite", action="store_true",
                        help="overwrite out_file if it exists")
    parser.add_argument("--no-verify", action="store_true",
                        help="do not check QD block CRCs")
    parser.add_argument("in_file", help="input filename")
    parser.add_argument("out_file", nargs='?', help="output filename")
    parser.description = description
    parser.prog += ' ' + argv[1]
    args = parser.parse_args(argv[2:])

    opts = Options(add_header=args.add_header,
                   remove_header=args.remove_header,
                   recompute_crc=args.recompute_crc,
                   zero_dib_crc=args.zero_dib_crc,
                   verify_crc=not args.no_verify)

    if args.out_file is None:
        error.check(not (args.add_header or args.remove_header
                         or args.recompute_crc or args.zero_dib_crc),
                    'Conversion options require out_file')
        error.check(not args.overwrite, 'Cannot overwrite: no out_file')
        with open(args.in_file, 'rb') as f:
            return info.report(f, opts).status

    return convert(args, opts)


# Local variables:
# python-indent: 4
# End:
