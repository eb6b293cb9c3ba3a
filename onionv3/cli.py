#!/usr/bin/env python3
"""
Onion v3 command line interface

Commands:
  generate   create (or re-derive) an identity and print its address
  verify     check an address and print the embedded public key
  vanity     search for an address starting with a prefix
"""

import argparse
import logging
import sys
import threading

from .config import LOG_FORMAT, LOG_LEVEL, VANITY_WORKERS
from .crypto import verify_address
from .exceptions import InvalidKeyError, VanityPrefixError
from .identity import OnionIdentity, generate_onion_v3
from .vanity import VanitySearch, expected_attempts

logger = logging.getLogger(__name__)


def print_identity(identity: OnionIdentity):
    print(f"Address     : {identity.address}")
    print(f"Public Key  : {identity.public_key.hex()}")
    print(f"Private Key : {identity.private_key.hex()}")
    print(f"Verified    : {identity.verified}")


def save_identity(identity: OnionIdentity, filename):
    # --save without a value gives "", meaning the default file name
    if filename is not None:
        path = identity.save_to_file(filename or None)
        print(f"Saved to    : {path}")


def cmd_generate(args) -> int:
    private_key = None
    if args.private_key:
        try:
            private_key = bytes.fromhex(args.private_key)
        except ValueError:
            print("Error: private key must be hex encoded", file=sys.stderr)
            return 2

    try:
        identity = generate_onion_v3(private_key)
    except InvalidKeyError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    print_identity(identity)
    save_identity(identity, args.save)
    return 0 if identity.verified else 1


def cmd_verify(args) -> int:
    result = verify_address(args.address)
    if not result:
        print(f"{args.address}: invalid")
        return 1
    print(f"{args.address}: valid")
    print(f"Public Key  : {result.public_key.hex()}")
    return 0


def cmd_vanity(args) -> int:
    try:
        search = VanitySearch(args.prefix, workers=args.workers, max_attempts=args.max_attempts)
    except (VanityPrefixError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    print(f"Searching for '{search.prefix}' (~{expected_attempts(search.prefix)} attempts expected)...")
    stop_event = threading.Event()
    try:
        identity = search.run(stop_event)
    except KeyboardInterrupt:
        stop_event.set()
        print(f"\nCancelled after {search.attempts} attempts")
        return 130

    if identity is None:
        print(f"No match after {search.attempts} attempts")
        return 1

    print(f"Found after {search.attempts} attempts")
    print_identity(identity)
    save_identity(identity, args.save)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='onionv3', description='Onion v3 address toolkit')
    parser.add_argument('--log-level', default=LOG_LEVEL,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help=f'Logging level (default: {LOG_LEVEL})')
    subparsers = parser.add_subparsers(dest='command', required=True)

    generate = subparsers.add_parser('generate', help='Generate an identity and its address')
    generate.add_argument('--private-key', help='Hex encoded 32 byte seed or 64 byte secret key')
    generate.add_argument('--save', nargs='?', const='', metavar='FILE',
                          help='Save the identity (default file: onion_HOSTNAME.json)')
    generate.set_defaults(func=cmd_generate)

    verify = subparsers.add_parser('verify', help='Verify an address')
    verify.add_argument('address')
    verify.set_defaults(func=cmd_verify)

    vanity = subparsers.add_parser('vanity', help='Search for an address with a prefix')
    vanity.add_argument('prefix')
    vanity.add_argument('--workers', type=int, default=VANITY_WORKERS,
                        help=f'Worker threads (default: {VANITY_WORKERS})')
    vanity.add_argument('--max-attempts', type=int, default=None,
                        help='Give up after this many attempts')
    vanity.add_argument('--save', nargs='?', const='', metavar='FILE',
                        help='Save the identity (default file: onion_HOSTNAME.json)')
    vanity.set_defaults(func=cmd_vanity)

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level, format=LOG_FORMAT)
    return args.func(args)


if __name__ == '__main__':
    sys.exit(main())
