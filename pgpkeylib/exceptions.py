# vim: set ts=8 sw=4 sts=4 et ai tw=79:
"""
pgpkeylib -- OpenPGP Public-Key packet codec (Library)
Copyright (C) 2012,2013,2015,2024  Walter Doekes <wdoekes>, OSSO B.V.

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
"""


class PacketError(ValueError):
    """
    Base exception class raised by any parsing errors, etc.

    The first argument is always the error class; the rest are the arguments
    passed by the raiser, or the class description if there were none.
    """
    class_ = 'packet error'
    description = 'undefined'

    def __init__(self, *args):
        super(PacketError, self).__init__(*args)
        if self.args or not self.description:
            self.args = tuple((self.class_,) + self.args)
        else:
            self.args = (self.class_, self.description)


class UnsupportedVersion(PacketError):
    class_ = 'unsupported version'
    description = 'public key packet version is not 2, 3 or 4'


class TruncatedInput(PacketError):
    class_ = 'truncated input'
    description = 'declared length exceeds the remaining data'


class UnsupportedAlgorithm(PacketError):
    class_ = 'unsupported algorithm'
    description = 'public key algorithm has no known key material'


class ArityMismatch(PacketError):
    class_ = 'arity mismatch'
    description = 'key material count does not match the algorithm'


class InvalidArgument(PacketError):
    class_ = 'invalid argument'
    description = 'value cannot be represented on the wire'


class ArmorError(PacketError):
    class_ = 'armor error'
    description = 'bad or missing ASCII armor'


class EncodeNotImplemented(PacketError, NotImplementedError):
    """
    Raised when asked to generate something we only ever read: legacy v2/v3
    key packets and non-RSA key material.
    """
    class_ = 'not implemented'
    description = 'encoding is not implemented for this packet'
