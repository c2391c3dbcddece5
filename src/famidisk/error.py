# famidisk/error.py
#
# Error management and reporting.
#
# Written & released by Keir Fraser <keir.xen@gmail.com>
#
# This is free and unencumbered software released into the public domain.
# See the file COPYING for more details, or visit <http://unlicense.org>.

class Fatal(Exception):
    pass

def check(pred, desc):
    if not pred:
        raise Fatal(desc)

def truncated(what: str, off: int) -> Fatal:
    return Fatal('Unexpected end of file reading %s at offset 0x%X'
                 % (what, off))

def bad_block(fmt: str, what: str, off: int) -> Fatal:
    return Fatal('%s: Invalid %s at offset 0x%X' % (fmt, what, off))
    
# Local variables:
# python-indent: 4
# End:
