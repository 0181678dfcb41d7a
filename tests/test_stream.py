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
from unittest import TestCase

from pgpkeylib.exceptions import PacketError, TruncatedInput
from pgpkeylib.packet import PublicKeyPacket, PublicSubkeyPacket
from pgpkeylib.stream import (RawPacket, frame_packet, iter_packets,
                              new_tag_length, old_tag_length, read_packets)

from keydata import (HARM_KEY_ID, HARM_PUBKEY_BINARY, HARM_PUBKEY_BODY,
                     HARM_SUBKEY_ID)


class TagLengthTest(TestCase):
    def test_new_tag_length(self):
        self.assertEqual(new_tag_length(bytes((100,)), 0), (1, 100, False))
        self.assertEqual(new_tag_length(bytes((0xc5, 0xfb)), 0),
                         (2, 1723, False))
        self.assertEqual(new_tag_length(bytes((0xff, 0, 0, 0x12, 0x34)), 0),
                         (5, 0x1234, False))
        self.assertEqual(new_tag_length(bytes((0xe1,)), 0), (1, 2, True))

    def test_new_tag_length_truncated(self):
        self.assertRaises(TruncatedInput, new_tag_length, bytes((0xc5,)), 0)
        self.assertRaises(TruncatedInput, new_tag_length,
                          bytes((0xff, 0, 0)), 0)

    def test_old_tag_length(self):
        self.assertEqual(old_tag_length(bytes((0x98, 0x8d)), 0), (1, 141))
        self.assertEqual(old_tag_length(bytes((0x89, 0x01, 0x3d)), 0),
                         (2, 317))
        self.assertEqual(old_tag_length(bytes((0x8b, 1, 2, 3)), 0), (0, 3))


class IterPacketsTest(TestCase):
    def test_frame_and_split(self):
        for length in (0, 10, 191, 192, 1000, 8383, 8384, 10000):
            body = length * b'\x5a'
            framed = frame_packet(13, body)
            self.assertEqual(list(iter_packets(framed)), [(13, body)])

    def test_frame_header_sizes(self):
        self.assertEqual(len(frame_packet(6, 191 * b'x')), 2 + 191)
        self.assertEqual(len(frame_packet(6, 192 * b'x')), 3 + 192)
        self.assertEqual(len(frame_packet(6, 8384 * b'x')), 6 + 8384)
        self.assertEqual(frame_packet(6, b'ab'), b'\xc6\x02ab')

    def test_partial_body_lengths(self):
        data = bytes((0xc0 | 11, 0xe1)) + b'ab' + bytes((3,)) + b'cde'
        self.assertEqual(list(iter_packets(data)), [(11, b'abcde')])

    def test_truncated_body(self):
        framed = frame_packet(13, 10 * b'x')[:-1]
        self.assertRaises(TruncatedInput, list, iter_packets(framed))

    def test_not_binary(self):
        self.assertRaises(PacketError, list, iter_packets(b'\x01abc'))
        self.assertRaises(PacketError, list, iter_packets(b''))

    def test_known_key(self):
        tags = [tag for tag, body in iter_packets(HARM_PUBKEY_BINARY)]
        self.assertEqual(tags, [6, 13, 2, 14, 2])


class ReadPacketsTest(TestCase):
    def test_known_key(self):
        packets = list(read_packets(HARM_PUBKEY_BINARY))
        self.assertEqual([packet.tag for packet in packets],
                         [6, 13, 2, 14, 2])

        primary, user_id, signature, subkey, binding = packets
        self.assertIsInstance(primary, PublicKeyPacket)
        self.assertEqual(primary.key_id_hex, HARM_KEY_ID)
        self.assertIsInstance(user_id, RawPacket)
        self.assertEqual(user_id.name, 'User ID Packet')
        self.assertEqual(user_id.body,
                         b'Harm Geerts (TEST) <harm@example.com>')
        self.assertIsInstance(subkey, PublicSubkeyPacket)
        self.assertEqual(subkey.key_id_hex, HARM_SUBKEY_ID)
        self.assertEqual(subkey.fingerprint_hex,
                         'AB933A9DF55AA0313450C524DD070DB4AF37FBFF')

    def test_reframed_key(self):
        packets = list(read_packets(frame_packet(6, HARM_PUBKEY_BODY)))
        self.assertEqual(len(packets), 1)
        self.assertEqual(packets[0].key_id_hex, HARM_KEY_ID)

    def test_trailing_bytes(self):
        data = frame_packet(6, HARM_PUBKEY_BODY + b'junk')
        with self.assertLogs('pgpkeylib.stream', 'WARNING'):
            packets = list(read_packets(data))
        # The junk is not part of the fingerprint.
        self.assertEqual(packets[0].key_id_hex, HARM_KEY_ID)
