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

from pgpkeylib.exceptions import InvalidArgument, TruncatedInput
from pgpkeylib.mpi import (decode_mpi, encode_mpi, get_int1, get_int2,
                           get_int4, get_mpi, mpi_span)


class IntTest(TestCase):
    def test_get_ints(self):
        data = bytes((0x01, 0x02, 0x03, 0x04, 0x05))
        self.assertEqual(get_int1(data, 4), 5)
        self.assertEqual(get_int2(data, 0), 0x0102)
        self.assertEqual(get_int4(data, 1), 0x02030405)

    def test_get_ints_truncated(self):
        data = bytes((0x01, 0x02, 0x03))
        self.assertRaises(TruncatedInput, get_int1, data, 3)
        self.assertRaises(TruncatedInput, get_int2, data, 2)
        self.assertRaises(TruncatedInput, get_int4, data, 0)


class MpiTest(TestCase):
    def test_encode_known_values(self):
        self.assertEqual(encode_mpi(0), b'\x00\x00')
        self.assertEqual(encode_mpi(1), b'\x00\x01\x01')
        self.assertEqual(encode_mpi(511), b'\x00\x09\x01\xff')
        self.assertEqual(encode_mpi(65537), b'\x00\x11\x01\x00\x01')

    def test_decode_known_values(self):
        self.assertEqual(decode_mpi(b'\x00\x00rest'), (0, b'rest'))
        self.assertEqual(decode_mpi(b'\x00\x09\x01\xff'), (511, b''))
        self.assertEqual(decode_mpi(b'\x00\x11\x01\x00\x01\xaa'),
                         (65537, b'\xaa'))

    def test_minimal_and_reversible(self):
        for value in (0, 1, 2, 127, 128, 255, 256, 65535, 65537,
                      (1 << 64) - 1, 1 << 64, (1 << 2048) - 159):
            encoded = encode_mpi(value)
            self.assertEqual(get_int2(encoded, 0), value.bit_length())
            self.assertEqual(len(encoded), 2 + (value.bit_length() + 7) // 8)
            if value:
                self.assertNotEqual(encoded[2], 0)
            self.assertEqual(decode_mpi(encoded), (value, b''))

    def test_non_minimal_input_is_read_as_is(self):
        # 16 bits declared, but the value only needs 3.
        self.assertEqual(decode_mpi(b'\x00\x10\x00\x05'), (5, b''))

    def test_negative(self):
        self.assertRaises(InvalidArgument, encode_mpi, -1)
        # All packet errors are ValueErrors.
        self.assertRaises(ValueError, encode_mpi, -(1 << 100))

    def test_too_large(self):
        self.assertRaises(InvalidArgument, encode_mpi, 1 << 0xffff)
        self.assertEqual(len(encode_mpi((1 << 0xffff) - 1)), 2 + 8192)

    def test_truncated(self):
        self.assertRaises(TruncatedInput, decode_mpi, b'')
        self.assertRaises(TruncatedInput, decode_mpi, b'\x00')
        self.assertRaises(TruncatedInput, decode_mpi, b'\x00\x09\x01')
        self.assertRaises(TruncatedInput, decode_mpi, b'\x08\x00' + 255 * b'x')

    def test_truncated_message(self):
        try:
            decode_mpi(b'\x00\x09\x01')
        except TruncatedInput as e:
            self.assertEqual(e.args[0], 'truncated input')
            self.assertIn('MPI of 9 bits', e.args[1])
        else:
            self.fail('no exception raised')

    def test_get_mpi_offset(self):
        data = b'xx' + encode_mpi(511) + encode_mpi(3)
        value, offset = get_mpi(data, 2)
        self.assertEqual((value, offset), (511, 6))
        self.assertEqual(get_mpi(data, offset), (3, 9))
        self.assertEqual(mpi_span(data, 2), (4, 6))
