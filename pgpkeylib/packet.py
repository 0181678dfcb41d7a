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

The Public-Key packet, RFC 4880 section 5.5.2.

Decoding reads the header, then the algorithm's key material, then derives
the fingerprint from the bytes that were consumed. Encoding only produces
version 4 RSA keys; older versions and other algorithms are read-only.
"""
import logging
from collections import namedtuple
from datetime import timedelta

from pgpkeylib.algorithms import (encode_material, get_family, get_material,
                                  lookup_algorithm)
from pgpkeylib.exceptions import UnsupportedAlgorithm, UnsupportedVersion
from pgpkeylib.fingerprint import build_key_id, legacy_key_id
from pgpkeylib.header import (encode_header, from_timestamp, get_header,
                              to_timestamp)


__all__ = ('PublicKeyPacket', 'PublicSubkeyPacket', 'decode', 'encode')

logger = logging.getLogger('pgpkeylib.packet')

DEFAULT_VERSIONS = (2, 3, 4)

# Version 2 and 3 keys are RSA or Elgamal.
LEGACY_ALGORITHMS = (1, 2, 3, 16, 20)


class PublicKeyPacket(namedtuple('PublicKeyPacket', (
        'version', 'created_at', 'expires', 'algorithm', 'material',
        'key_id', 'fingerprint'))):
    """
    A decoded (or to be encoded) Public-Key packet body.

    The algorithm is a (tag, name) tuple; material is a tuple of ints whose
    meaning depends on the algorithm, see algorithms.FAMILIES. key_id and
    fingerprint are binary strings, set when decoding only.
    """
    __slots__ = ()

    tag = 6
    name = 'Public Key Packet'

    @classmethod
    def create(cls, created_at, algorithm, material, version=4,
               expires=None):
        """
        Build a packet for encoding. created_at may be a datetime (naive
        datetimes are taken to be UTC) or a unix timestamp, algorithm a tag or
        a (tag, name) tuple.
        """
        created_at = from_timestamp(to_timestamp(created_at))
        if isinstance(algorithm, int):
            algorithm = lookup_algorithm(algorithm)
        return cls(version, created_at, expires, tuple(algorithm),
                   tuple(material), None, None)

    @classmethod
    def decode(cls, data, versions=DEFAULT_VERSIONS):
        """
        Decode the packet body at the start of data. Returns the packet and
        the remaining data.
        """
        version, raw_creation_time, expires, algo, offset = get_header(data)
        if version not in versions:
            raise UnsupportedVersion(
                'version %d public key packets are not accepted' % (
                    version,))

        algorithm = lookup_algorithm(algo)
        if version != 4 and algo not in LEGACY_ALGORITHMS:
            raise UnsupportedAlgorithm(
                'invalid non-RSA v%d public key' % (version,))
        material, offset = get_material(algo, data, offset)
        remainder = data[offset:]
        key_id, fingerprint = build_key_id(data, remainder, version)

        packet = cls(
            version=version,
            created_at=from_timestamp(raw_creation_time),
            expires=expires,
            algorithm=algorithm,
            material=material,
            key_id=key_id,
            fingerprint=fingerprint)
        if version != 4:
            logger.debug('decoded legacy v%d key %s', version,
                         packet.key_id_hex)
        else:
            logger.debug('decoded %r', packet)
        return packet, remainder

    def encode(self):
        header = encode_header(self)
        material = encode_material(self.algorithm[0], self.material)
        return header + material

    @property
    def raw_creation_time(self):
        return to_timestamp(self.created_at)

    @property
    def expiration_time(self):
        if not self.expires:
            return None
        return self.created_at + timedelta(days=self.expires)

    @property
    def pub_algorithm(self):
        return self.algorithm[1]

    @property
    def family(self):
        return get_family(self.algorithm[0])

    @property
    def bitlen(self):
        return self.family.bitlen(self.material)

    @property
    def key_id_hex(self):
        if self.key_id is None:
            return None
        return self.key_id.hex().upper()

    @property
    def fingerprint_hex(self):
        if self.fingerprint is None:
            return None
        return self.fingerprint.hex().upper()

    @property
    def legacy_key_id(self):
        """
        The RFC 4880 Key ID of a version 2 or 3 RSA key, taken from the
        modulus. None for other keys.
        """
        if self.version == 4 or self.algorithm[0] not in (1, 2, 3):
            return None
        return legacy_key_id(self.material[0])

    def named_material(self):
        """
        The key material as a dictionary, e.g. {'n': ..., 'e': ...} for RSA.
        """
        return self.family.named(self.material)

    def to_crypto_key(self):
        """
        Construct a Crypto.PublicKey key object from the key material.
        """
        return self.family.to_crypto_key(self.material)

    def __repr__(self):
        return '<%s: 0x%s, %s, v%d>' % (
            self.__class__.__name__, self.key_id_hex or '?',
            self.pub_algorithm, self.version)


class PublicSubkeyPacket(PublicKeyPacket):
    """
    A Public-Subkey packet (tag 14) has exactly the same format as a
    Public-Key packet, but denotes a subkey.
    """
    __slots__ = ()

    tag = 14
    name = 'Public Subkey Packet'


def decode(data, versions=DEFAULT_VERSIONS):
    return PublicKeyPacket.decode(data, versions=versions)


def encode(packet):
    return packet.encode()
