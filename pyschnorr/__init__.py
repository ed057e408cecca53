"""
Schnorr signatures over secp256k1 for Python

Single signer signing and verification plus a naive aggregation of several
signers into one signature that verifies against the sum of their public keys.

The nonce and the challenge use plain SHA256 without BIP340 tags, so the
signatures are not compatible with BIP340.
"""
from .aggregate import aggregate_signatures, aggregate_pubkey, combine_pubkeys

from .schnorr import schnorr_sign, schnorr_verify, check_signature, VerifyResult

from .utils import SECP256K1, CurveContext, SchnorrError

from .version import __version__
