#!/usr/bin/env python3
"""
Naive aggregation: the combined signature must verify against the sum of the public keys.
"""
import pytest

from pyschnorr import aggregate_signatures, aggregate_pubkey, combine_pubkeys, schnorr_sign, schnorr_verify
from pyschnorr.aggregate import contribution
from pyschnorr.utils import *

N_SIGNERS = 3


@pytest.mark.parametrize('seckeys, msg, pubkey, sig', [
    ([1, 2],
     bytes(32),
     '02f9308a019258c31049344f85f89d5229b531c845836f99b08601f113bce036f9',
     '91ed52f29ff899f79bbd30e8bcc92d564d8a4731cc8ef7c4b6c395c279e20cfd'
     '2801994e4006fc99196b6bc899114c58d3597aa4b0fed4f70805152467b178fb'),
    ([1, 2, 3],
     hash_sha256(b'hello world'),
     '03fff97bd5755eeea420453a14355235d382f6472f8568a18b2f057a1460297556',
     '9ff5127858b85e227cf0a98846e806bb383f6cc61ab34fd22ba1730c0efcc02b'
     '08b84cd00ec9b936feedea2cc985a75e6a2c01f6a3e82447ada88b32107a87b0'),
])
def test_aggregate_vectors(seckeys, msg, pubkey, sig):
    assert aggregate_pubkey(seckeys).hex() == pubkey
    assert aggregate_signatures(msg, seckeys).hex() == sig
    assert schnorr_verify(msg, bytes.fromhex(pubkey), bytes.fromhex(sig))


def test_aggregate_verifies_against_combined_pubkey():
    seckeys = derive_seckeys(hash_sha256(b'aggregate'), N_SIGNERS)
    pubkeys = [pubkey_gen(seckey) for seckey in seckeys]
    msg = hash_sha256(b'Test')
    combined = combine_pubkeys(pubkeys)
    assert combined == aggregate_pubkey(seckeys)
    sig = aggregate_signatures(msg, seckeys)
    assert schnorr_verify(msg, combined, sig)
    # no single signer's key verifies it
    for pubkey in pubkeys:
        assert not schnorr_verify(msg, pubkey, sig)
    assert not schnorr_verify(hash_sha256(b'Test2'), combined, sig)


def test_aggregate_is_order_independent():
    msg = hash_sha256(b'order')
    assert aggregate_signatures(msg, [5, 6, 7]) == aggregate_signatures(msg, [7, 5, 6])


def test_single_signer_matches_schnorr_sign():
    msg = hash_sha256(b'single')
    seckey, pubkey = create_key_pair()
    assert aggregate_signatures(msg, [seckey]) == schnorr_sign(msg, seckey)
    assert aggregate_pubkey([seckey]) == pubkey


def test_contribution():
    msg = bytes(32)
    c = contribution(1, msg)
    assert c.P == SECP256K1.G
    assert c.k0 == 0x58e8f2a1f78f0a591feb75aebecaaa81076e4290894b1c445cc32953604db089
    assert c.R == SECP256K1.scalar_base_mult(c.k0)


def test_empty_key_set():
    with pytest.raises(EmptyKeySetError):
        aggregate_signatures(bytes(32), [])
    with pytest.raises(EmptyKeySetError):
        aggregate_pubkey([])
    with pytest.raises(EmptyKeySetError):
        combine_pubkeys([])


@pytest.mark.parametrize('bad', [0, SECP256K1.n])
def test_key_out_of_range(bad):
    with pytest.raises(InvalidKeyRangeError):
        aggregate_signatures(bytes(32), [1, bad])
    with pytest.raises(InvalidKeyRangeError):
        aggregate_pubkey([bad, 1])


def test_cancelling_keys():
    # d and n - d sum to the point at infinity
    with pytest.raises(ZeroPointError):
        aggregate_pubkey([5, SECP256K1.n - 5])
    with pytest.raises(ZeroPointError):
        aggregate_signatures(bytes(32), [5, SECP256K1.n - 5])
    with pytest.raises(ZeroPointError):
        combine_pubkeys([pubkey_gen(5), pubkey_gen(SECP256K1.n - 5)])
