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

Multi-precision integers (MPI) as per RFC 4880 section 3.2, and the small
fixed-width big-endian integers used by the packet headers.

An MPI is a two-octet bit count followed by just enough octets to hold that
many bits; the bit count starts at the most significant non-zero bit:

    >>> encode_mpi(511).hex()
    '000901ff'
    >>> decode_mpi(bytes.fromhex('000901ffaa'))[0]
    511
"""
from Crypto.Util.number import long_to_bytes

from pgpkeylib.exceptions import InvalidArgument, TruncatedInput


__all__ = ('decode_mpi', 'encode_mpi', 'get_int1', 'get_int2', 'get_int4',
           'get_mpi', 'mpi_span')

# The bit count is a two-octet number.
MPI_MAX_BITS = 0xffff


def _need(data, offset, byte_count, what):
    if offset + byte_count > len(data):
        raise TruncatedInput(
            '%s needs %d bytes at offset %d, got %d' % (
                what, byte_count, offset, max(len(data) - offset, 0)))


def get_int1(data, offset, what='octet'):
    """
    Pull one byte from data at offset and return it as an integer.
    """
    _need(data, offset, 1, what)
    return data[offset]


def get_int2(data, offset, what='two-octet number'):
    """
    Pull two bytes from data at offset and return as an integer.
    """
    _need(data, offset, 2, what)
    return (data[offset] << 8) + data[offset + 1]


def get_int4(data, offset, what='four-octet number'):
    """
    Pull four bytes from data at offset and return as an integer.
    """
    _need(data, offset, 4, what)
    return ((data[offset] << 24) + (data[offset + 1] << 16)
            + (data[offset + 2] << 8) + data[offset + 3])


def mpi_span(data, offset):
    """
    Return the (body_start, body_end) offsets of the MPI at offset, without
    converting it to an integer.
    """
    bit_count = get_int2(data, offset, 'MPI bit count')
    offset += 2
    to_process = (bit_count + 7) // 8
    _need(data, offset, to_process, 'MPI of %d bits' % (bit_count,))
    return offset, offset + to_process


def get_mpi(data, offset):
    """
    Gets a multi-precision integer as per RFC-4880.
    Returns the MPI and the new offset.
    See: http://tools.ietf.org/html/rfc4880#section-3.2
    """
    start, end = mpi_span(data, offset)
    # Taken verbatim; a non-minimal (zero padded) body still yields the
    # right value.
    mpi = int.from_bytes(data[start:end], byteorder='big')
    return mpi, end


def decode_mpi(data):
    """
    Decode the MPI at the start of data. Returns (value, remainder).
    """
    mpi, offset = get_mpi(data, 0)
    return mpi, data[offset:]


def encode_mpi(value):
    """
    Encode a non-negative integer as a minimal MPI.

    Zero has a bit count of zero and no body at all.
    """
    if value < 0:
        raise InvalidArgument('MPI cannot be negative', value)
    bit_count = value.bit_length()
    if bit_count > MPI_MAX_BITS:
        raise InvalidArgument(
            'MPI of %d bits exceeds %d bits' % (bit_count, MPI_MAX_BITS))
    if not bit_count:
        return b'\x00\x00'
    return bit_count.to_bytes(2, 'big') + long_to_bytes(value)
