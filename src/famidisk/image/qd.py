# famidisk/image/qd.py
#
# Written & released by Keir Fraser <keir.xen@gmail.com>
#
# This is free and unencumbered software released into the public domain.
# See the file COPYING for more details, or visit <http://unlicense.org>.

from .image import Image

class QD(Image):
    """QuickDisk image: 64kB per side, every block followed by its CRC."""
    name = 'QD'
    side_len = 65536
    has_crc = True

# Local variables:
# python-indent: 4
# End:
