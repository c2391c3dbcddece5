# famidisk/crc.py
#
# Block CRC used by the QuickDisk (QD) representation.
#
# Written & released by Keir Fraser <keir.xen@gmail.com>
#
# This is free and unencumbered software released into the public domain.
# See the file COPYING for more details, or visit <http://unlicense.org>.

import struct
import crcmod

# The drive computes the CRC bit-serially: a reflected CCITT register
# seeded to 0x8000, with each block followed by two zero bytes. Shifting
# the seed through those 16 zero bits gives 0x8408, which is the initial
# value of the equivalent table-driven (non-augmented) CRC below.
_crc16 = crcmod.mkCrcFun(0x11021, initCrc=0x8408, rev=True, xorOut=0)

def crc16(dat) -> int:
    """Return the 16-bit QD CRC of a block."""
    return _crc16(bytes(dat))

def crc16_bytes(dat) -> bytes:
    """Return the QD CRC of a block as it is stored on disk (little endian)."""
    return struct.pack('<H', crc16(dat))

# Local variables:
# python-indent: 4
# End:
