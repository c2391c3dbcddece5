"""Builders for in-memory FDS and QD disk images.

CRCs are computed here with a straightforward bit-serial routine so that
the tests do not depend on the table-driven implementation under test.
"""

import struct

SIG = b'\x01*NINTENDO-HVC*'
FDS_SIDE = 65500
QD_SIDE = 65536


def ref_crc(dat):
    crc = 0x8000
    for x in bytes(dat) + b'\x00\x00':
        for i in range(8):
            bit = (x >> i) & 1
            carry = crc & 1
            crc = (crc >> 1) | (bit << 15)
            if carry:
                crc ^= 0x8408
    return crc


def disk_info(side=0, disk=0, manufacturer=0x01, name=b'ZEL',
              rewrites=0, price=0x01):
    dat = bytearray(56)
    dat[0:15] = SIG
    dat[15] = manufacturer
    dat[16:19] = name
    dat[19] = 0x20
    dat[20] = 0
    dat[21] = side
    dat[22] = disk
    dat[23] = 0
    dat[25] = 0x0f
    dat[31:34] = b'\x61\x02\x21'
    dat[34] = 0x49
    dat[44:47] = b'\x61\x02\x21'
    dat[52] = rewrites
    dat[53] = side
    dat[55] = price
    return bytes(dat)


def file_count(n):
    return bytes([2, n])


def file_header(number, size, name=b'KYODAKU-', address=0x2800, kind=0):
    return struct.pack('<3B8s2HB', 3, number, number, name, address, size,
                       kind)


def file_data(payload):
    return b'\x04' + payload


def side_blocks(files=(), nr_files=None, side=0):
    """Return the blocks of one side. @files is a list of payloads."""
    if nr_files is None:
        nr_files = len(files)
    blocks = [disk_info(side=side), file_count(nr_files)]
    for i, payload in enumerate(files):
        blocks.append(file_header(i, len(payload)))
        blocks.append(file_data(payload))
    return blocks


def fds_side(blocks):
    dat = b''.join(blocks)
    return dat + bytes(FDS_SIDE - len(dat))


def qd_side(blocks, crcs=None):
    """@crcs optionally overrides the CRC stored after each block. Blocks
    past the end of @crcs get their correct CRC."""
    dat = bytearray()
    for i, blk in enumerate(blocks):
        crc = ref_crc(blk)
        if crcs is not None and i < len(crcs) and crcs[i] is not None:
            crc = crcs[i]
        dat += blk + struct.pack('<H', crc)
    return bytes(dat) + bytes(QD_SIDE - len(dat))


def fds_header(sides):
    return b'FDS\x1a' + bytes([sides]) + bytes(11)
