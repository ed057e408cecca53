#!/usr/bin/env python3
"""
Naive Schnorr signature aggregation.

Every signer's nonce point and public key are summed, one challenge is computed
against the sums and the partial signatures k_i + e*d_i are added together.
The result verifies with schnorr_verify against the sum of the public keys.

This is NOT MuSig: there is no nonce commitment round and no key coefficients,
so it is open to rogue-key and key-cancellation attacks.
"""
import collections
from functools import reduce

from .utils import *
from .schnorr import derive_nonce, nonce_parity, challenge

Contribution = collections.namedtuple('Contribution', 'seckey k0 R P')


def contribution(seckey, msg, curve=SECP256K1):
    """Nonce, nonce point and public point of a single signer."""

    if curve.is_secret_overflow(seckey):
        raise InvalidKeyRangeError()
    k0 = derive_nonce(seckey, msg, curve)
    return Contribution(seckey, k0, curve.scalar_base_mult(k0), curve.scalar_base_mult(seckey))


def combine_points(points, curve=SECP256K1):
    return reduce(curve.point_add, points, None)


def combine_pubkeys(pubkeys, curve=SECP256K1):
    """Sum of 33-byte compressed public keys, compressed again."""

    if len(pubkeys) == 0:
        raise EmptyKeySetError('No public keys supplied.')
    P = combine_points([unmarshal_compressed(pubkey, curve) for pubkey in pubkeys], curve)
    if is_infinity(P):
        raise ZeroPointError('The public keys cancel each other out.')
    return marshal_compressed(P)


def aggregate_pubkey(seckeys, curve=SECP256K1):
    if len(seckeys) == 0:
        raise EmptyKeySetError()
    for seckey in seckeys:
        if curve.is_secret_overflow(seckey):
            raise InvalidKeyRangeError()
    P = combine_points([curve.scalar_base_mult(seckey) for seckey in seckeys], curve)
    if is_infinity(P):
        raise ZeroPointError('The public keys cancel each other out.')
    return marshal_compressed(P)


def aggregate_signatures(msg, seckeys, curve=SECP256K1):
    """Sign one 32-byte message with every secret key and fold the results into one signature."""

    if len(msg) != 32:
        raise ValueError('The message must be a 32-byte array.')
    if len(seckeys) == 0:
        raise EmptyKeySetError()
    contributions = [contribution(seckey, msg, curve) for seckey in seckeys]
    R = combine_points([c.R for c in contributions], curve)
    P = combine_points([c.P for c in contributions], curve)
    if is_infinity(R) or is_infinity(P):
        raise ZeroPointError('The aggregate point is the point at infinity.')
    rx = bytes_from_int(x(R))
    e = challenge(rx, P, msg, curve)
    # Each nonce is corrected against the aggregate R, not its own R_i.
    s = reduce(lambda acc, c: (acc + nonce_parity(c.k0, R, curve) + e * c.seckey) % curve.n,
               contributions, 0)
    return rx + bytes_from_int(s)
