#!/usr/bin/env python3

import collections

from .utils import *


class VerifyResult(collections.namedtuple('VerifyResult', 'valid reason')):
    """Outcome of a verification. Truthy only for a valid signature; `reason` holds the error otherwise."""
    __slots__ = ()

    def __bool__(self):
        return self.valid


def derive_nonce(seckey, msg, curve=SECP256K1):
    """k0 = SHA256(seckey || msg) mod n. Untagged, so not BIP340 compatible."""
    k0 = int_from_bytes(hash_sha256(bytes_from_int(seckey) + msg)) % curve.n
    if k0 == 0:
        raise ZeroNonceError()
    return k0

def nonce_parity(k0, R, curve=SECP256K1):
    """Negate the nonce unless R has a square y, so the signed R is always the square-y one."""
    return k0 if has_square_y(R, curve) else curve.n - k0

def challenge(rx_bytes, P, msg, curve=SECP256K1):
    """e = SHA256(Rx || compressed P || msg) mod n"""
    return int_from_bytes(hash_sha256(rx_bytes + marshal_compressed(P) + msg)) % curve.n


def schnorr_sign(msg, seckey, curve=SECP256K1):
    """Sign a 32-byte message with an integer secret key."""

    if len(msg) != 32:
        raise ValueError('The message must be a 32-byte array.')
    if curve.is_secret_overflow(seckey):
        raise InvalidKeyRangeError()
    k0 = derive_nonce(seckey, msg, curve)
    R = curve.scalar_base_mult(k0)
    k = nonce_parity(k0, R, curve)
    P = curve.scalar_base_mult(seckey)
    e = challenge(bytes_from_int(x(R)), P, msg, curve)
    return bytes_from_int(x(R)) + bytes_from_int((k + e * seckey) % curve.n)


def check_signature(msg, pubkey, sig, curve=SECP256K1):
    """
    Verify a signature against a 33-byte compressed public key.

    Raises the VerificationError subclass naming the first check that failed.
    """

    if len(msg) != 32:
        raise ValueError('The message must be a 32-byte array.')
    if len(sig) != 64:
        raise ValueError('The signature must be a 64-byte array.')
    P = unmarshal_compressed(pubkey, curve)
    if not curve.is_on_curve(P):
        raise NotOnCurveError()
    r = int_from_bytes(sig[0:32])
    s = int_from_bytes(sig[32:64])
    if (r >= curve.p or s >= curve.n):
        raise RangeError()
    e = challenge(sig[0:32], P, msg, curve)
    # s*G - e*P
    R = curve.point_add(curve.scalar_base_mult(s), curve.point_neg(curve.point_mul(P, e)))
    if is_infinity(R):
        raise ZeroPointError()
    if curve.jacobi(y(R)) != 1:
        raise JacobiMismatchError()
    if x(R) != r:
        raise RValueMismatchError()


def schnorr_verify(msg, pubkey, sig, curve=SECP256K1):
    """Verify a signature. Returns a VerifyResult instead of raising on an invalid signature."""

    try:
        check_signature(msg, pubkey, sig, curve)
    except VerificationError as e:
        return VerifyResult(False, e)
    return VerifyResult(True, None)
