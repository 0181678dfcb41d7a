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

The version dependent head of a Public-Key packet body, RFC 4880 5.5.2.

    v2, v3:  00 01 02 03 04 05 06 07 08 ...
             |  [  ctime  ] [days] |  [material..]
             |-version      pub_algo-|

    v4:      00 01 02 03 04 05 06 ...
             |  [  ctime  ] |  [material..]
             |-version      |-pub_algo
"""
import calendar
from datetime import datetime, timezone

from pgpkeylib.exceptions import (EncodeNotImplemented, InvalidArgument,
                                  UnsupportedVersion)
from pgpkeylib.mpi import get_int1, get_int2, get_int4


__all__ = ('LAYOUTS', 'LegacyLayout', 'ModernLayout', 'decode_header',
           'encode_header', 'from_timestamp', 'get_header', 'get_layout',
           'to_timestamp')


def from_timestamp(timestamp):
    return datetime.fromtimestamp(timestamp, timezone.utc)


def to_timestamp(created_at):
    """
    Seconds since the epoch for a datetime (naive datetimes are taken to be
    UTC) or for a number of seconds.
    """
    if isinstance(created_at, datetime):
        timestamp = calendar.timegm(created_at.utctimetuple())
    else:
        timestamp = int(created_at)
    if not 0 <= timestamp <= 0xffffffff:
        raise InvalidArgument(
            'creation time %d does not fit in four octets' % (timestamp,))
    return timestamp


class Layout(object):
    versions = ()
    # Offset of the key material, i.e. the header length.
    length = 0

    @classmethod
    def decode(cls, data, offset):
        raise NotImplementedError()

    @classmethod
    def encode(cls, packet):
        raise NotImplementedError()


class LegacyLayout(Layout):
    """
    V3 keys are deprecated; an implementation MUST NOT generate a V3 key,
    but MAY accept it. V2 keys are identical to V3 keys except for the
    version number.
    """
    versions = (2, 3)
    length = 8

    @classmethod
    def decode(cls, data, offset):
        version = get_int1(data, offset, 'version')
        offset += 1
        raw_creation_time = get_int4(data, offset, 'creation time')
        offset += 4
        # Zero means it does not expire.
        days_valid = get_int2(data, offset, 'validity period')
        offset += 2
        algorithm = get_int1(data, offset, 'public key algorithm')
        offset += 1
        return version, raw_creation_time, days_valid, algorithm, offset

    @classmethod
    def encode(cls, packet):
        raise EncodeNotImplemented(
            'version %d public key packets are decode-only' % (
                packet.version,))


class ModernLayout(Layout):
    """
    The version 4 format is similar to the version 3 format except for the
    absence of a validity period. This has been moved to the Signature
    packet.
    """
    versions = (4,)
    length = 6

    @classmethod
    def decode(cls, data, offset):
        version = get_int1(data, offset, 'version')
        offset += 1
        raw_creation_time = get_int4(data, offset, 'creation time')
        offset += 4
        algorithm = get_int1(data, offset, 'public key algorithm')
        offset += 1
        return version, raw_creation_time, None, algorithm, offset

    @classmethod
    def encode(cls, packet):
        if packet.expires is not None:
            raise InvalidArgument(
                'version 4 keys carry no validity period', packet.expires)
        algorithm = packet.algorithm[0]
        if not 0 <= algorithm <= 0xff:
            raise InvalidArgument('algorithm tag out of range', algorithm)
        timestamp = to_timestamp(packet.created_at)
        return (bytes((4,)) + timestamp.to_bytes(4, 'big')
                + bytes((algorithm,)))


LAYOUTS = {
    2: LegacyLayout,
    3: LegacyLayout,
    4: ModernLayout,
}


def get_layout(version):
    try:
        return LAYOUTS[version]
    except KeyError:
        raise UnsupportedVersion(
            'unsupported public key packet, version %d' % (version,)
        ) from None


def get_header(data, offset=0):
    """
    Parse the header at offset. Returns (version, raw_creation_time,
    expires, algorithm_tag, new_offset).
    """
    version = get_int1(data, offset, 'version')
    return get_layout(version).decode(data, offset)


def decode_header(data):
    """
    Decode the header at the start of data. Returns (version, created_at,
    expires, algorithm_tag, remainder).
    """
    version, raw_creation_time, expires, algorithm, offset = get_header(data)
    return (version, from_timestamp(raw_creation_time), expires, algorithm,
            data[offset:])


def encode_header(packet):
    return get_layout(packet.version).encode(packet)
