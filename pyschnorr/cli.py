#!/usr/bin/env python3
"""
Command line front end: sign, verify and aggregate messages given as strings.

Messages are hashed with SHA256 before signing. Keys and signatures are hex.
"""
import argparse
import sys

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec

from .utils import *
from .schnorr import schnorr_sign, schnorr_verify
from .aggregate import aggregate_signatures, aggregate_pubkey


def build_parser():
    parser = argparse.ArgumentParser(prog='pyschnorr', description=__doc__)
    parser.add_argument('--sign', action='store_true', help='flag for signing a message')
    parser.add_argument('--verify', action='store_true', help='flag for verifying a signature')
    parser.add_argument('--aggregate', action='store_true',
                        help='sign the message with every --privkey and aggregate the signatures')
    parser.add_argument('--genkey', action='store_true', help='generate secret and compressed public keys')
    parser.add_argument('--message', default='', help='message to be signed')
    parser.add_argument('--privkey', action='append', default=[],
                        help='private key to sign the message with, repeat for --aggregate')
    parser.add_argument('--pubkey', default='', help='public key to verify the signature with')
    parser.add_argument('--sig', default='', help='signature to verify')
    parser.add_argument('--pubkey-file', default='', help='file path to a PEM public key file')
    parser.add_argument('--seed', default='', help='32-byte hex seed for deterministic --genkey')
    parser.add_argument('--count', type=int, default=1, help='number of keys for --genkey')
    return parser


def load_pubkey_file(path):
    """Read a PEM public key and return its 33-byte compressed point."""

    with open(path, 'rb') as f:
        data = f.read()
    try:
        key = serialization.load_pem_public_key(data)
    except (ValueError, UnsupportedAlgorithm) as e:
        raise PointDecodeError('failed to decode PEM block containing public key: {}'.format(e)) from e
    if not isinstance(key, ec.EllipticCurvePublicKey) or key.curve.name != SECP256K1.name:
        raise PointDecodeError('the PEM public key is not a secp256k1 key')
    return key.public_bytes(serialization.Encoding.X962, serialization.PublicFormat.CompressedPoint)


def message_hash(message):
    return hash_sha256(message.encode())


def cmd_sign(args):
    seckey = int_from_bytes(bytes_from_hex(args.privkey[0], 32))
    msg = message_hash(args.message)
    sig = schnorr_sign(msg, seckey)
    print(sig.hex())
    if not schnorr_verify(msg, pubkey_gen(seckey), sig):
        print('signing has failed validation')


def cmd_verify(args, pubkey):
    if args.pubkey:
        pubkey = bytes_from_hex(args.pubkey, 33)
    if pubkey is None:
        raise PointDecodeError('no public key given, use --pubkey or --pubkey-file')
    sig = bytes_from_hex(args.sig, 64)
    result = schnorr_verify(message_hash(args.message), pubkey, sig)
    print('Signature Verified?', result.valid)
    if not result:
        print(result.reason)


def cmd_aggregate(args):
    seckeys = [int_from_bytes(bytes_from_hex(privkey, 32)) for privkey in args.privkey]
    msg = message_hash(args.message)
    sig = aggregate_signatures(msg, seckeys)
    print(aggregate_pubkey(seckeys).hex())
    print(sig.hex())


def cmd_genkey(args):
    if args.seed:
        seckeys = derive_seckeys(bytes_from_hex(args.seed, 32), args.count)
        pairs = [(seckey, pubkey_gen(seckey)) for seckey in seckeys]
    else:
        pairs = [create_key_pair() for _ in range(args.count)]
    for seckey, pubkey in pairs:
        print(bytes_from_int(seckey).hex(), pubkey.hex())


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.sign and len(args.privkey) != 1:
        parser.error('--sign takes exactly one --privkey')
    pubkey = None
    try:
        if args.pubkey_file:
            try:
                pubkey = load_pubkey_file(args.pubkey_file)
            except OSError as e:
                print('failed to read specified public key because {}'.format(e), file=sys.stderr)
                return 1
            print(SECP256K1.name, pubkey.hex())

        if args.sign:
            cmd_sign(args)
        elif args.verify:
            cmd_verify(args, pubkey)
        elif args.aggregate:
            cmd_aggregate(args)
        elif args.genkey:
            cmd_genkey(args)
        elif not args.pubkey_file:
            parser.print_help()
    except SchnorrError as e:
        print(e, file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
