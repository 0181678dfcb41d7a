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

Packet framing, RFC 4880 section 4.2: splitting a binary key file into
packets, and wrapping an encoded packet body in a packet header.

Only Public-Key and Public-Subkey packets are decoded; everything else is
passed on as a RawPacket.
"""
import logging
from collections import namedtuple

from pgpkeylib.exceptions import InvalidArgument, PacketError, TruncatedInput
from pgpkeylib.mpi import get_int1, get_int2, get_int4
from pgpkeylib.packet import PublicKeyPacket, PublicSubkeyPacket


__all__ = ('RawPacket', 'TAG_NAMES', 'TAG_TYPES', 'construct_packet',
           'frame_packet', 'iter_packets', 'new_tag_length', 'old_tag_length',
           'read_packets')

logger = logging.getLogger('pgpkeylib.stream')

binary_tag_flag = 0x80

TAG_NAMES = {
    1: 'Public-Key Encrypted Session Key Packet',
    2: 'Signature Packet',
    3: 'Symmetric-Key Encrypted Session Key Packet',
    4: 'One-Pass Signature Packet',
    5: 'Secret-Key Packet',
    6: 'Public-Key Packet',
    7: 'Secret-Subkey Packet',
    8: 'Compressed Data Packet',
    9: 'Symmetrically Encrypted Data Packet',
    10: 'Marker Packet',
    11: 'Literal Data Packet',
    12: 'Trust Packet',
    13: 'User ID Packet',
    14: 'Public-Subkey Packet',
    17: 'User Attribute Packet',
    18: 'Sym. Encrypted and Integrity Protected Data Packet',
    19: 'Modification Detection Code Packet',
}

# Severely trimmed down: these are the only bodies we decode.
TAG_TYPES = {
    6: PublicKeyPacket,
    14: PublicSubkeyPacket,
}


class RawPacket(namedtuple('RawPacket', ('tag', 'name', 'body'))):
    """
    A packet we do not decode; body holds the packet body.
    """
    __slots__ = ()

    def __repr__(self):
        return '<%s: %s (%d), length %d>' % (
            self.__class__.__name__, self.name, self.tag, len(self.body))


def new_tag_length(data, start):
    """
    Takes a bytearray of data as input, as well as an offset of where to
    look. Returns a derived (offset, length, partial) tuple.
    Reference: http://tools.ietf.org/html/rfc4880#section-4.2.2
    """
    first = get_int1(data, start, 'new format length')
    offset = length = 0
    partial = False

    # one-octet
    if first < 192:
        offset = 1
        length = first

    # two-octet
    elif first < 224:
        offset = 2
        length = (((first - 192) << 8)
                  + get_int1(data, start + 1, 'new format length') + 192)

    # five-octet
    elif first == 255:
        offset = 5
        length = get_int4(data, start + 1, 'new format length')

    # Partial Body Length header, one octet long
    else:
        offset = 1
        # partial length, 224 <= l < 255
        length = 1 << (first & 0x1f)
        partial = True

    return (offset, length, partial)


def old_tag_length(data, start):
    """
    Takes a bytearray of data as input, as well as an offset of where to
    look (the tag octet). Returns a derived (offset, length) tuple.
    """
    offset = length = 0
    temp_len = data[start] & 0x03

    if temp_len == 0:
        offset = 1
        length = get_int1(data, start + 1, 'old format length')
    elif temp_len == 1:
        offset = 2
        length = get_int2(data, start + 1, 'old format length')
    elif temp_len == 2:
        offset = 4
        length = get_int4(data, start + 1, 'old format length')
    elif temp_len == 3:
        # Indeterminate length: the packet runs to the end of the data.
        length = len(data) - start - 1

    return (offset, length)


def _take(data, start, length):
    end = start + length
    if end > len(data):
        raise TruncatedInput(
            'packet body needs %d bytes at offset %d, got %d' % (
                length, start, len(data) - start))
    return data[start:end], end


def construct_packet(data, header_start):
    """
    Returns a (length, tag, body) tuple constructed from 'data' at index
    'header_start'. If there is a next packet, it will be found at
    header_start + length.
    """
    first = data[header_start]
    if not first & binary_tag_flag:
        raise PacketError(
            'incorrect binary data: no packet tag at offset %d' % (
                header_start,))

    # tag encoded in bits 5-0 (new packet format)
    # 0x3f == 111111b
    tag = first & 0x3f

    # the header is in new format if bit 6 is set
    # 0x40 == 1000000b
    new = bool(first & 0x40)

    if new:
        # length is encoded in the second (and following) octet
        data_offset, data_length, partial = new_tag_length(
            data, header_start + 1)
    else:
        # tag encoded in bits 5-2, discard bits 1-0
        tag >>= 2
        data_offset, data_length = old_tag_length(data, header_start)
        partial = False

    # first octet of the packet header handled
    data_offset += 1

    # The new format might encode data with Partial Body Length headers.
    # Then a packet consists of alternating header and data regions. The
    # last header of a packet is not a Partial Body Length header.
    body = bytearray()
    offset = header_start + data_offset
    while True:
        chunk, offset = _take(data, offset, data_length)
        body += chunk
        if not partial:
            break
        data_offset, data_length, partial = new_tag_length(data, offset)
        offset += data_offset

    return offset - header_start, tag, bytes(body)


def iter_packets(data):
    """
    A generator function returning (tag, body) tuples for every packet in
    binary data.
    """
    data = bytes(data)
    if not data:
        raise PacketError('no data to parse')
    offset = 0
    while offset < len(data):
        length, tag, body = construct_packet(data, offset)
        offset += length
        yield tag, body


def read_packets(data):
    """
    A generator function returning PublicKeyPacket, PublicSubkeyPacket and
    RawPacket objects.
    """
    for tag, body in iter_packets(data):
        packet_type = TAG_TYPES.get(tag)
        if packet_type is None:
            yield RawPacket(tag, TAG_NAMES.get(tag, 'Unknown'), body)
            continue

        packet, remainder = packet_type.decode(body)
        if remainder:
            # Not part of the fingerprinted span. Keep going; gpg does too.
            logger.warning('ignoring %d trailing bytes after %r',
                           len(remainder), packet)
        yield packet


def frame_packet(tag, body):
    """
    Prepend a new format packet header to body.
    """
    if not 0 <= tag <= 0x3f:
        raise InvalidArgument('packet tag out of range', tag)
    length = len(body)
    if length < 192:
        header = bytes((0xc0 | tag, length))
    elif length < 8384:
        length -= 192
        header = bytes((0xc0 | tag, (length >> 8) + 192, length & 0xff))
    elif length <= 0xffffffff:
        header = bytes((0xc0 | tag, 0xff)) + length.to_bytes(4, 'big')
    else:
        raise InvalidArgument('packet of %d bytes is too long' % (length,))
    return header + bytes(body)
