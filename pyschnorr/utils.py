#!/usr/bin/env python3

import collections
import hashlib
import os
from chacha20poly1305 import ChaCha


class SchnorrError(Exception):
    default_message = 'Schnorr signature failure.'

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def __str__(self):
        return self.message

class InvalidKeyRangeError(SchnorrError, ValueError):
    default_message = 'The secret key must be an integer in the range 1..n-1.'

class ZeroNonceError(SchnorrError, RuntimeError):
    default_message = 'Failure. This happens only with negligible probability.'

class EmptyKeySetError(SchnorrError, ValueError):
    default_message = 'No secret keys supplied.'

class EncodingError(SchnorrError, ValueError):
    default_message = 'Malformed hex input.'

class VerificationError(SchnorrError):
    default_message = 'Signature verification failed.'

class PointDecodeError(VerificationError):
    default_message = 'The public key could not be decoded.'

class NotOnCurveError(VerificationError):
    default_message = 'The public key is not on the curve.'

class RangeError(VerificationError):
    default_message = 'r must be below the field size and s below the group order.'

class ZeroPointError(VerificationError):
    default_message = 'The reconstructed nonce point is the point at infinity.'

class JacobiMismatchError(VerificationError):
    default_message = 'The reconstructed nonce point does not have a square y.'

class RValueMismatchError(VerificationError):
    default_message = 'r does not match the reconstructed nonce point.'


def jacobi_symbol(a, n):
    """Jacobi symbol (a/n) for an odd positive n."""
    if n <= 0 or n % 2 == 0:
        raise ValueError('n must be an odd positive integer.')
    a %= n
    result = 1
    while a != 0:
        while a % 2 == 0:
            a //= 2
            if n % 8 in (3, 5):
                result = -result
        a, n = n, a
        if a % 4 == 3 and n % 4 == 3:
            result = -result
        a %= n
    return result if n == 1 else 0


_CurveParams = collections.namedtuple('CurveContext', 'name p G n h')

class CurveContext(_CurveParams):
    """
    Immutable short Weierstrass curve y^2 = x^3 + 7 with its group operations.

    Points are (x, y) tuples, the point at infinity is None.
    """
    __slots__ = ()

    def point_add(self, P1, P2):
        if (P1 is None):
            return P2
        if (P2 is None):
            return P1
        if (P1[0] == P2[0] and P1[1] != P2[1]):
            return None
        if (P1 == P2):
            lam = (3 * P1[0] * P1[0] * pow(2 * P1[1], self.p - 2, self.p)) % self.p
        else:
            lam = ((P2[1] - P1[1]) * pow(P2[0] - P1[0], self.p - 2, self.p)) % self.p
        x3 = (lam * lam - P1[0] - P2[0]) % self.p
        return (x3, (lam * (P1[0] - x3) - P1[1]) % self.p)

    def point_mul(self, P, k):
        R = None
        for i in range(k.bit_length()):
            if ((k >> i) & 1):
                R = self.point_add(R, P)
            P = self.point_add(P, P)
        return R

    def scalar_base_mult(self, k):
        return self.point_mul(self.G, k)

    def point_neg(self, P):
        if (P is None):
            return None
        return (x(P), (self.p - y(P)) % self.p)

    def is_on_curve(self, P):
        if (P is None):
            return False
        if not (0 <= x(P) < self.p and 0 <= y(P) < self.p):
            return False
        return (pow(y(P), 2, self.p) - pow(x(P), 3, self.p) - 7) % self.p == 0

    def jacobi(self, a):
        return jacobi_symbol(a, self.p)

    def is_secret_overflow(self, k):
        return not (1 <= k <= self.n - 1)


SECP256K1 = CurveContext(
    'secp256k1',
    # Field characteristic.
    p=0xfffffffffffffffffffffffffffffffffffffffffffffffffffffffefffffc2f,
    # Base point.
    G=(0x79be667ef9dcbbac55a06295ce870b07029bfcdb2dce28d959f2815b16f81798,
       0x483ada7726a3c4655da4fbfc0e1108a8fd17b448a68554199c47d08ffb10d4b8),
    # Subgroup order.
    n=0xfffffffffffffffffffffffffffffffebaaedce6af48a03bbfd25e8cd0364141,
    # Subgroup cofactor.
    h=1,
)


def x(P):
    return P[0]

def y(P):
    return P[1]

def is_infinity(P):
    return P is None

def has_square_y(P, curve=SECP256K1):
    return not is_infinity(P) and curve.jacobi(y(P)) == 1

def bytes_from_int(x):
    return x.to_bytes(32, byteorder="big")

def int_from_bytes(b):
    return int.from_bytes(b, byteorder="big")

def bytes_from_hex(s, length=None):
    try:
        b = bytes.fromhex(s)
    except (TypeError, ValueError) as e:
        raise EncodingError('Malformed hex input: {}'.format(e)) from e
    if length is not None and len(b) != length:
        raise EncodingError('Expected {} bytes, got {}.'.format(length, len(b)))
    return b

def hash_sha256(b):
    return hashlib.sha256(b).digest()

def marshal_compressed(P):
    """SEC1 compressed form: 02 for an even y, 03 for an odd y, then x."""
    return bytes([2 + (y(P) & 1)]) + bytes_from_int(x(P))

def unmarshal_compressed(b, curve=SECP256K1):
    if len(b) != 33:
        raise PointDecodeError('The public key must be a 33-byte array.')
    if b[0] not in (2, 3):
        raise PointDecodeError('Unknown public key prefix {:#04x}.'.format(b[0]))
    x0 = int_from_bytes(b[1:])
    y_sq = (pow(x0, 3, curve.p) + 7) % curve.p
    # p = 3 mod 4, so the square root is a single exponentiation.
    y0 = pow(y_sq, (curve.p + 1) // 4, curve.p)
    if pow(y0, 2, curve.p) != y_sq:
        raise PointDecodeError('x is not the coordinate of a curve point.')
    if (y0 & 1) != (b[0] & 1):
        y0 = curve.p - y0
    return (x0, y0)

def chacha20_prng(key, counter, curve=SECP256K1):
    nonce = bytes(12)
    chacha20 = ChaCha(key, nonce)
    key_stream = chacha20.key_stream(counter)
    r1 = int_from_bytes(key_stream[:32])
    r2 = int_from_bytes(key_stream[32:])
    if curve.is_secret_overflow(r1):
        raise InvalidKeyRangeError('r1 outside of the group order.')
    if curve.is_secret_overflow(r2):
        raise InvalidKeyRangeError('r2 outside of the group order.')
    return [r1, r2]

def derive_seckeys(seed, count, curve=SECP256K1):
    """Expand a 32-byte seed into `count` secret keys with the ChaCha20 key stream."""
    if len(seed) != 32:
        raise ValueError('The seed must be a 32-byte array.')
    seckeys = []
    counter = 0
    while len(seckeys) < count:
        seckeys.extend(chacha20_prng(seed, counter, curve))
        counter += 1
    return seckeys[:count]

def pubkey_gen(seckey, curve=SECP256K1):
    if curve.is_secret_overflow(seckey):
        raise InvalidKeyRangeError()
    return marshal_compressed(curve.scalar_base_mult(seckey))

def create_key_pair(curve=SECP256K1):
    seckey = int_from_bytes(os.urandom(32)) % curve.n
    while curve.is_secret_overflow(seckey):
        seckey = int_from_bytes(os.urandom(32)) % curve.n
    return seckey, pubkey_gen(seckey, curve)
