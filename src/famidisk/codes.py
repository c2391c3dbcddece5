# famidisk/codes.py
#
# Decoding of disk info and file header code bytes for display.
#
# Written & released by Keir Fraser <keir.xen@gmail.com>
#
# This is free and unencumbered software released into the public domain.
# See the file COPYING for more details, or visit <http://unlicense.org>.

from typing import Dict, NamedTuple, Optional

class Code(NamedTuple):
    """A code byte and its description. Unrecognised codes have no name
    and render with their raw value."""
    value: int
    name: Optional[str]

    @property
    def known(self) -> bool:
        return self.name is not None

    def __str__(self) -> str:
        if self.name is None:
            return '<unknown> (0x%02X)' % self.value
        return self.name

def lookup(table: Dict[int,str], value: int) -> Code:
    return Code(value, table.get(value))

manufacturers = {
    0x00: '<unlicensed>',
    0x01: 'Nintendo',
    0x08: 'Capcom',
    0x0a: 'Jaleco',
    0x18: 'Hudson Soft',
    0x49: 'Irem',
    0x4a: 'Gakken',
    0x8b: 'BulletProof Software (BPS)',
    0x99: 'Pack-In-Video',
    0x9b: 'Tecmo',
    0x9c: 'Imagineer',
    0xa2: 'Scorpion Soft',
    0xa4: 'Konami',
    0xa6: 'Kawada Co., Ltd.',
    0xa7: 'Takara',
    0xa8: 'Royal Industries',
    0xac: 'Toei Animation',
    0xaf: 'Namco',
    0xb1: 'ASCII Corporation',
    0xb2: 'Bandai',
    0xb3: 'Soft Pro Inc.',
    0xb6: 'HAL Laboratory',
    0xbb: 'Sunsoft',
    0xbc: 'Toshiba EMI',
    0xc0: 'Taito',
    0xc1: 'Sunsoft / Ask Co., Ltd.',
    0xc2: 'Kemco',
    0xc3: 'Square',
    0xc4: 'Tokuma Shoten',
    0xc5: 'Data East',
    0xc6: 'Tonkin House/Tokyo Shoseki',
    0xc7: 'East Cube',
    0xca: 'Konami / Ultra / Palcom',
    0xcb: 'NTVIC / VAP',
    0xcc: 'Use Co., Ltd.',
    0xce: 'Pony Canyon / FCI',
    0xd1: 'Sofel',
    0xd2: 'Bothtec, Inc.',
    0xdb: 'Hiro Co., Ltd.',
    0xe7: 'Athena',
    0xeb: 'Atlus'
}

game_types = {
    0x20: 'Normal disk',
    0x45: 'Event',
    0x52: 'Reduction in price via advertising'
}

disk_types = {
    0x00: 'Normal card',
    0x01: 'Card with shutter'
}

countries = {
    0x49: 'Japan'
}

file_kinds = {
    0x00: 'Program (PRAM)',
    0x01: 'Character (CRAM)',
    0x02: 'Name table (VRAM)'
}

# Only a handful of price codes are documented.
new_prices = {
    0x01: '3400 yen',
    0x03: '3400 yen (includes peripherals)'
}

rewrite_prices = {
    0x00: '500 yen',
    0x01: '600 yen'
}

months = [ 'January', 'February', 'March', 'April', 'May', 'June', 'July',
           'August', 'September', 'October', 'November', 'December' ]

def manufacturer(x: int) -> Code:
    return lookup(manufacturers, x)

def game_type(x: int) -> Code:
    return lookup(game_types, x)

def disk_type(x: int) -> Code:
    return lookup(disk_types, x)

def country(x: int) -> Code:
    return lookup(countries, x)

def file_kind(x: int) -> Code:
    return lookup(file_kinds, x)

def price(x: int, rewritten: bool) -> Code:
    return lookup(rewrite_prices if rewritten else new_prices, x)

def bcd(x: int) -> int:
    return (x >> 4) * 10 + (x & 15)

def bcd_date(dat: bytes) -> Optional[str]:
    """Decode a 3-byte BCD year/month/day. Years before 83 are counted
    from the start of the Showa era (1925). Returns None if the date is
    not set or the month is invalid."""
    y, m, d = dat[0], dat[1], dat[2]
    if y in (0x00, 0xff):
        return None
    if (m & 15) > 9:
        return None
    m = bcd(m)
    if not 1 <= m <= 12:
        return None
    year = bcd(y)
    year += 1925 if year < 83 else 1900
    return '%s %d, %d' % (months[m-1], bcd(d), year)

def printable(dat: bytes) -> str:
    return ''.join(chr(x) if 0x20 <= x <= 0x7e else '?' for x in dat)

# Local variables:
# python-indent: 4
# End:
