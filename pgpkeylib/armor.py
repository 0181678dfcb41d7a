# vim: set ts=8 sw=4 sts=4 et ai tw=79:
"""
pgpkeylib -- OpenPGP Public-Key packet codec (Library)
Copyright (C) 2013,2015,2017,2018,2024  Walter Doekes <wdoekes>, OSSO B.V.

    This library is free software; you can redistribute it and/or modify it
    under the terms of the GNU Lesser General Public License as published by
    the Free Software Foundation; either version 3 of the License, or (at
    your option) any later version.

    This library is distributed in the hope that it will be useful, but
    WITHOUT ANY WARRANTY; without even the implied warranty of
    MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the GNU
    Lesser General Public License for more details.

    You should have received a copy of the GNU Lesser General Public
    License along with this library; if not, write to the Free Software
    Foundation, Inc., 59 Temple Place, Suite 330, Boston, MA 02111-1307,
    USA.

ASCII armor, RFC 4880 section 6: the '-----BEGIN PGP ...' wrapping around
base64 encoded packets, with a CRC-24 checksum line.
"""
import binascii
from base64 import b64decode, b64encode

from pgpkeylib.exceptions import ArmorError


__all__ = ('armor', 'crc24', 'dearmor')

CRC24_INIT = 0x00b704ce
# x24 + x23 + x18 + x17 + x14 + x11 + x10 + x7 + x6
#   + x5 + x4 + x3 + x + 1
CRC24_POLY = 0x01864cfb


def _make_crc24_table():
    table = []
    for byte in range(256):
        crc = byte << 16
        for _bit in range(8):
            crc <<= 1
            if crc & 0x01000000:
                crc ^= CRC24_POLY
        table.append(crc & 0x00ffffff)
    return tuple(table)


# 256 values corresponding to each possible byte
CRC24_TABLE = _make_crc24_table()


def crc24(data):
    """
    Implementation of the CRC-24 algorithm used by OpenPGP.
    """
    crc = CRC24_INIT
    # this saves a bunch of slower global accesses
    crc_table = CRC24_TABLE
    for byte in data:
        tbl_idx = ((crc >> 16) ^ byte) & 0xff
        crc = (crc_table[tbl_idx] ^ (crc << 8)) & 0x00ffffff
    return crc


def _armor_lines(data):
    """
    Return the stripped lines between the BEGIN and END markers of the
    first armored block that is not a cleartext signed message.
    """
    magic = b'-----BEGIN PGP '
    ignore = b'-----BEGIN PGP SIGNED '

    lines = [line.strip() for line in data.splitlines()]
    for begin, line in enumerate(lines):
        if line.startswith(magic) and not line.startswith(ignore):
            break
    else:
        raise ArmorError('could not find armor header line')

    for end in range(begin + 1, len(lines)):
        if lines[end].startswith(b'-----END PGP '):
            break
    else:
        raise ArmorError('could not find armor tail line')

    return lines[begin + 1:end]


def dearmor(data):
    """
    Strip away the '-----BEGIN PGP PUBLIC KEY BLOCK-----' and related cruft,
    base64 decode the remainder and check it against the CRC if there is
    one. Returns the binary data.
    """
    if not isinstance(data, bytes):
        data = data.encode()
    lines = _armor_lines(data)

    # Skip the armor headers ("Version: ..."); they end at a blank line.
    while lines and b': ' in lines[0]:
        lines.pop(0)
    while lines and not lines[0]:
        lines.pop(0)

    # The Radix-64 format appends any CRC checksum to the end of the data
    # block, in the form '=alph', where there are always 4 ASCII characters
    # corresponding to 3 digits (24 bits).
    known_crc = None
    if lines and lines[-1].startswith(b'=') and len(lines[-1]) == 5:
        known_crc = int.from_bytes(b64decode(lines.pop()[1:]), 'big')

    try:
        binary = b64decode(b''.join(lines), validate=True)
    except binascii.Error as e:
        raise ArmorError('base64 decode failed', str(e)) from None
    if not binary:
        raise ArmorError('no data in armor')

    if known_crc is not None:
        # verify it if we could find it
        actual_crc = crc24(binary)
        if known_crc != actual_crc:
            raise ArmorError(
                'CRC failure: known 0x%x, actual 0x%x' % (
                    known_crc, actual_crc))
    return binary


def armor(data, kind='PUBLIC KEY BLOCK', headers=()):
    """
    Armor binary data. headers is a sequence of (key, value) tuples.
    """
    encoded = b64encode(bytes(data)).decode('ascii')
    lines = ['-----BEGIN PGP %s-----' % (kind,)]
    lines.extend('%s: %s' % (key, value) for key, value in headers)
    lines.append('')
    lines.extend(encoded[i:i + 64] for i in range(0, len(encoded), 64))
    checksum = crc24(data).to_bytes(3, 'big')
    lines.append('=' + b64encode(checksum).decode('ascii'))
    lines.append('-----END PGP %s-----' % (kind,))
    return '\n'.join(lines) + '\n'
