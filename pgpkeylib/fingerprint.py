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

Key fingerprints and key IDs, RFC 4880 section 12.2.

Both are taken from the bytes the packet occupied in its source, never from
a re-encoded copy: a non-minimal MPI in the source must end up in the hash
as it was sent, or nobody else will agree on the fingerprint.
"""
import hashlib
import logging

from pgpkeylib.exceptions import InvalidArgument
from pgpkeylib.header import get_layout
from pgpkeylib.mpi import mpi_span


__all__ = ('build_key_id', 'consumed_payload', 'legacy_key_id', 'v3_key_id',
           'v4_key_id')

logger = logging.getLogger('pgpkeylib.fingerprint')


def consumed_payload(original, remainder):
    """
    The leading part of original that was consumed when decoding left
    remainder.
    """
    payload_length = len(original) - len(remainder)
    if payload_length < 0:
        raise ValueError('remainder is longer than the original data')
    return bytes(original[:payload_length])


def v4_key_id(payload):
    """
    A V4 fingerprint is the 160-bit SHA-1 hash of the octet 0x99, followed
    by the two-octet packet length, followed by the entire Public-Key packet
    starting with the version field. The Key ID is the low-order 64 bits of
    the fingerprint.
    """
    length = len(payload)
    if length > 0xffff:
        raise InvalidArgument(
            'packet of %d bytes is too long to fingerprint' % (length,))
    sha1 = hashlib.sha1()
    sha1.update(bytes((0x99, (length >> 8) & 0xff, length & 0xff)))
    sha1.update(payload)
    fingerprint = sha1.digest()
    return fingerprint[-8:], fingerprint


def v3_key_id(payload, header_length):
    """
    The fingerprint of a V3 key is formed by hashing the body (but not the
    two-octet length) of the MPIs that form the key material with MD5. As
    for V4 keys, the Key ID returned here is the tail of the fingerprint;
    see legacy_key_id() for the modulus based V3 Key ID.
    """
    md5 = hashlib.md5()
    offset = header_length
    if offset >= len(payload):
        raise InvalidArgument('no key material to fingerprint')
    while offset < len(payload):
        start, offset = mpi_span(payload, offset)
        md5.update(payload[start:offset])
    fingerprint = md5.digest()
    return fingerprint[-8:], fingerprint


def legacy_key_id(modulus):
    """
    The RFC 4880 V3 Key ID: the low 64 bits of the public modulus.
    """
    return (modulus & 0xffffffffffffffff).to_bytes(8, 'big')


def build_key_id(original, remainder, version=4):
    """
    Return (key_id, fingerprint) for the packet that was decoded from
    original, leaving remainder.
    """
    payload = consumed_payload(original, remainder)
    if version == 4:
        return v4_key_id(payload)
    layout = get_layout(version)
    logger.debug('using the legacy v%d fingerprint for %d bytes',
                 version, len(payload))
    return v3_key_id(payload, layout.length)
