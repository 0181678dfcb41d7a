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
"""
from pgpkeylib.armor import dearmor
from pgpkeylib.stream import read_packets


__all__ = ('get_fingerprint', 'get_pubkey_id', 'get_pubkeys')


def _get_binary(data):
    if isinstance(data, str) and data.lstrip().startswith('-----BEGIN PGP '):
        return dearmor(data)  # from string
    elif data and isinstance(data[0], int) and data.lstrip().startswith(
            b'-----BEGIN PGP '):
        return dearmor(data)  # from binstring
    return data


def get_pubkeys(data):
    """
    Return the Public-Key and Public-Subkey packets in armored or binary
    data, in file order.
    """
    return [packet for packet in read_packets(_get_binary(data))
            if packet.tag in (6, 14)]


def _get_primary(data):
    for packet in read_packets(_get_binary(data)):
        if packet.tag == 6:
            return packet
    return None


def get_pubkey_id(data):
    packet = _get_primary(data)
    if packet is None:
        return None
    return packet.key_id_hex


def get_fingerprint(data):
    packet = _get_primary(data)
    if packet is None:
        return None
    return packet.fingerprint_hex
