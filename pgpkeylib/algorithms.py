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

Public key algorithm vocabulary and the shape of each algorithm's key
material, see RFC 4880 sections 5.5.2 and 9.1.
"""
from Crypto.PublicKey import DSA, ElGamal, RSA

from pgpkeylib.exceptions import (ArityMismatch, EncodeNotImplemented,
                                  UnsupportedAlgorithm)
from pgpkeylib.mpi import encode_mpi, get_mpi


__all__ = ('ALGORITHMS', 'FAMILIES', 'DSAMaterial', 'ElgamalMaterial',
           'RSAMaterial', 'decode_material', 'encode_material', 'get_family',
           'get_material', 'lookup_algorithm')


ALGORITHMS = {
    1: 'RSA (Encrypt or Sign)',
    2: 'RSA Encrypt-Only',
    3: 'RSA Sign-Only',
    16: 'Elgamal (Encrypt-Only)',
    17: 'DSA (Digital Signature Algorithm)',
    18: 'Reserved for Elliptic Curve',
    19: 'Reserved for ECDSA',
    20: 'Reserved (formerly Elgamal Encrypt or Sign)',
    21: 'Reserved for Diffie-Hellman (X9.42, as defined for IETF-S/MIME)',
}


def lookup_algorithm(tag):
    """
    Return the (tag, name) tuple for a public key algorithm tag.

    There is no "Unknown" default: an unlisted tag raises
    UnsupportedAlgorithm.
    """
    if 100 <= tag <= 110:
        return (tag, 'Private/Experimental algorithm')
    try:
        return (tag, ALGORITHMS[tag])
    except KeyError:
        raise UnsupportedAlgorithm(
            'unknown public key algorithm %d' % (tag,)) from None


class KeyMaterial(object):
    """
    The MPIs of one algorithm family, in wire order. Subclasses only
    declare their fields; the material itself is a plain tuple of ints.
    """
    type = None
    fields = ()
    # Whether we produce this material on encode, or only read it.
    can_generate = False

    @classmethod
    def arity(cls):
        return len(cls.fields)

    @classmethod
    def decode(cls, data, offset):
        material = []
        for _field in cls.fields:
            value, offset = get_mpi(data, offset)
            material.append(value)
        return tuple(material), offset

    @classmethod
    def encode(cls, material):
        return b''.join(encode_mpi(value) for value in material)

    @classmethod
    def named(cls, material):
        return dict(zip(cls.fields, material))

    @classmethod
    def bitlen(cls, material):
        # The length of the first MPI (modulus or prime) in bits.
        return material[0].bit_length()

    @classmethod
    def to_crypto_key(cls, material):
        raise NotImplementedError()


class RSAMaterial(KeyMaterial):
    type = 'rsa'
    fields = ('n', 'e')  # modulus, exponent
    can_generate = True

    @classmethod
    def to_crypto_key(cls, material):
        n, e = material
        return RSA.construct((n, e))


class DSAMaterial(KeyMaterial):
    type = 'dsa'
    fields = ('p', 'q', 'g', 'y')  # prime, group order, generator, key value

    @classmethod
    def to_crypto_key(cls, material):
        p, q, g, y = material
        return DSA.construct((y, g, p, q))


class ElgamalMaterial(KeyMaterial):
    type = 'elg'
    fields = ('p', 'g', 'y')  # prime, generator, key value

    @classmethod
    def to_crypto_key(cls, material):
        p, g, y = material
        return ElGamal.construct((p, g, y))


# Tags with a name but without an entry here (ECC, experimental, ...) have
# no known material shape.
FAMILIES = {
    1: RSAMaterial,
    2: RSAMaterial,
    3: RSAMaterial,
    16: ElgamalMaterial,
    17: DSAMaterial,
    20: ElgamalMaterial,
}


def get_family(tag):
    try:
        return FAMILIES[tag]
    except KeyError:
        name = ALGORITHMS.get(tag, 'unknown')
        raise UnsupportedAlgorithm(
            'no key material known for algorithm %d (%s)' % (
                tag, name)) from None


def get_material(tag, data, offset):
    """
    Read the key material of algorithm tag from data at offset. Returns the
    material tuple and the new offset.
    """
    return get_family(tag).decode(data, offset)


def decode_material(tag, data):
    """
    Decode the key material at the start of data. Returns (material,
    remainder).
    """
    material, offset = get_material(tag, data, 0)
    return material, data[offset:]


def encode_material(tag, material):
    family = get_family(tag)
    material = tuple(material)
    if len(material) != family.arity():
        raise ArityMismatch(
            'algorithm %d takes %d MPIs (%s), got %d' % (
                tag, family.arity(), ', '.join(family.fields),
                len(material)))
    if not family.can_generate:
        raise EncodeNotImplemented(
            'refusing to encode %s key material' % (family.type,))
    return family.encode(material)
