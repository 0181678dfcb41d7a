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
import errno
import logging
import sys
from getopt import GetoptError, gnu_getopt

from pgpkeylib import VERSION_STRING
from pgpkeylib.exceptions import PacketError
from pgpkeylib.keyinfo import get_pubkeys


class UsageError(Exception):
    pass


def parse_options(args):
    try:
        optlist, args = gnu_getopt(
            args[1:], 'hVv', ('help', 'version', 'verbose'))
    except GetoptError as e:
        raise UsageError(str(e))

    config = {
        'verbose': False,
    }

    command = None
    for option, arg in optlist:
        if option in ('--help', '-h'):
            command = 'help'  # always allow -h
        elif option in ('--version', '-V'):
            if command != 'help':
                command = 'version'  # override all but -h
        elif option in ('--verbose', '-v'):
            config['verbose'] = True
        else:
            raise NotImplementedError(option)

    return command, args, config


def setup_logging(verbose):
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
    logger = logging.getLogger('pgpkeylib')
    if not logger.handlers:
        logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


def silenced_sigpipe(callable, *args, **kwargs):
    try:
        ret = callable(*args, **kwargs)
    except IOError as e:
        if e.errno != errno.EPIPE:
            raise
        sys.exit(0)
    return ret


def read_input(filename):
    if filename == '-':
        return sys.stdin.buffer.read()
    with open(filename, 'rb') as file:
        return file.read()


def print_keys(packets):
    for packet in packets:
        kind = ('pub', 'sub')[packet.tag == 14]
        print('%-5s v%d %s, %d bits, created %s' % (
            kind, packet.version, packet.pub_algorithm, packet.bitlen,
            packet.created_at.strftime('%Y-%m-%d %H:%M:%S')))
        if packet.expiration_time:
            print('      expires %s' % (
                packet.expiration_time.strftime('%Y-%m-%d %H:%M:%S'),))
        print('      key id      %s' % (packet.key_id_hex,))
        print('      fingerprint %s' % (packet.fingerprint_hex,))


def run_usage():
    print('''pgpkeyinfo %s

Usage:
  pgpkeyinfo [FILE...]
    (show key IDs and fingerprints of the public keys in armored or binary
     files, or in stdin if there are none)

Options:
  --help, -h            Show help and exit
  --verbose, -v         Log packet details to stderr
  --version, -V         Print version''' % (VERSION_STRING,))


def run_version():
    print('pgpkeyinfo %s' % (VERSION_STRING,))


def pgpkeyinfo(args):
    command, args, config = parse_options(args)

    if command == 'help':
        silenced_sigpipe(run_usage)
        sys.exit(0)
    elif command == 'version':
        run_version()
        sys.exit(0)

    setup_logging(config['verbose'])
    for filename in (args or ['-']):
        packets = get_pubkeys(read_input(filename))
        if len(args) > 1:
            print('%s:' % (filename,))
        silenced_sigpipe(print_keys, packets)


def main():
    try:
        pgpkeyinfo(sys.argv)
    except KeyboardInterrupt:
        sys.exit(130)  # 128+SIGINT
    except UsageError as e:
        sys.stderr.write('%s\n' % (e,))
        sys.exit(2)
    except PacketError as e:
        sys.stderr.write(': '.join(str(i) for i in e.args) + '\n')
        sys.exit(1)
    except IOError as e:
        sys.stderr.write('%s\n' % (e,))
        sys.exit(1)


if __name__ == '__main__':
    main()
