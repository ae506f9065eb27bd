#!/usr/bin/env python3

# Copyright (C) The seedtree developers
#
# This file is part of seedtree. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of seedtree including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"Tests for the `seedtree.ed25519` module."

import pytest

from seedtree import ed25519
from seedtree.exceptions import (
    SeedTreeTypeError,
    SeedTreeValueError,
    SignatureParsingError,
    SignatureVerificationError,
)
from seedtree.x25519 import ExchangeKey

# RFC 8032, section 7.1, test 1
PRV_KEY = "9d61b19deffd5a60ba844af492ec2cc44449c5697b326919703bac031cae7f60"
PUB_KEY = "d75a980182b10ab7d54bfed3c964073a0ee172f3daa62325af021a68f707511a"
SIG = (
    "e5564300c360ac729086e2cc806e828a84877f1eb8e5d974d873e06522490155"
    "5fb8821590a33bacc61e39701cf9b46bd25bf5f0595bbe24655141438e7a100b"
)

# y = p, not canonical
P_ENCODING = (2**255 - 19).to_bytes(32, byteorder="little", signed=False)
INVALID_POINTS = (P_ENCODING, b"\xff" * 32)


def test_rfc8032() -> None:
    prv_key, pub_key = ed25519.keys_from_seed(PRV_KEY)
    assert pub_key.serialize().hex() == PUB_KEY
    assert ed25519.pub_key_from_prv_key(prv_key) == pub_key

    sig = ed25519.sign(b"", prv_key)
    assert sig.serialize().hex() == SIG
    ed25519.assert_as_valid(b"", pub_key, sig)
    ed25519.assert_as_valid(b"", PUB_KEY, SIG)
    assert ed25519.verify(b"", pub_key, sig)
    assert not ed25519.verify(b"\x00", pub_key, sig)


def test_sign_verify() -> None:
    prv_key, pub_key = ed25519.gen_keys()
    assert len(prv_key) == ed25519.PRV_KEY_SIZE

    msg = "Satoshi Nakamoto"
    sig = ed25519.sign(msg, prv_key)
    # text messages are utf-8 encoded
    assert ed25519.verify(msg.encode(), pub_key, sig)
    # deterministic signature
    assert ed25519.sign(msg, prv_key) == sig
    assert len(sig.serialize()) == ed25519.SIG_SIZE
    assert ed25519.Sig.parse(sig.serialize()) == sig

    # wrong message
    err_msg = "signature verification failed"
    with pytest.raises(SignatureVerificationError, match=err_msg):
        ed25519.assert_as_valid("Satoshi Nakamoto!", pub_key, sig)
    assert not ed25519.verify("Satoshi Nakamoto!", pub_key, sig)

    # wrong key
    _, other_pub_key = ed25519.gen_keys()
    with pytest.raises(SignatureVerificationError, match=err_msg):
        ed25519.assert_as_valid(msg, other_pub_key, sig)

    # tampered signature, still well-formed
    tampered = bytearray(sig.serialize())
    tampered[32] ^= 1
    with pytest.raises(SignatureVerificationError, match=err_msg):
        ed25519.assert_as_valid(msg, pub_key, bytes(tampered))
    assert not ed25519.verify(msg, pub_key, bytes(tampered))


def test_malformed_public_key() -> None:
    _, pub_key = ed25519.gen_keys()
    sig = ed25519.sign(b"msg", ed25519.gen_keys()[0])

    for data in INVALID_POINTS:
        assert not ed25519.is_point(data)
        err_msg = "invalid public key: not a curve point"
        with pytest.raises(SignatureParsingError, match=err_msg):
            ed25519.PubKey(data)
        # parsing errors are not verification failures
        with pytest.raises(SignatureParsingError):
            ed25519.assert_as_valid(b"msg", data, sig)
        assert not ed25519.verify(b"msg", data, sig)

    assert ed25519.is_point(pub_key.key)
    assert not ed25519.is_point(pub_key.key[:-1])

    with pytest.raises(SignatureParsingError, match="invalid public key: invalid size"):
        ed25519.PubKey.parse(pub_key.key[:-1])
    with pytest.raises(SignatureParsingError, match="invalid public key"):
        ed25519.PubKey.parse("not a hex-string")


def test_malformed_signature() -> None:
    prv_key, pub_key = ed25519.gen_keys()
    sig = ed25519.sign(b"msg", prv_key)

    with pytest.raises(SignatureParsingError, match="invalid signature: invalid size"):
        ed25519.Sig.parse(sig.serialize()[:-1])
    with pytest.raises(SignatureParsingError, match="invalid signature: invalid size"):
        ed25519.assert_as_valid(b"msg", pub_key, sig.serialize() + b"\x00")

    err_msg = "invalid signature: R is not a curve point"
    for data in INVALID_POINTS:
        with pytest.raises(SignatureParsingError, match=err_msg):
            ed25519.Sig(data, sig.s)
        with pytest.raises(SignatureParsingError, match=err_msg):
            ed25519.Sig.parse(data + sig.serialize()[32:])

    err_msg = "invalid signature: scalar s not in 0..L-1"
    with pytest.raises(SignatureParsingError, match=err_msg):
        ed25519.Sig(sig.r, ed25519.L)
    with pytest.raises(SignatureParsingError, match=err_msg):
        ed25519.Sig(sig.r, -1)
    non_canonical = sig.r + ed25519.L.to_bytes(32, byteorder="little", signed=False)
    with pytest.raises(SignatureParsingError, match=err_msg):
        ed25519.assert_as_valid(b"msg", pub_key, non_canonical)
    assert not ed25519.verify(b"msg", pub_key, non_canonical)


def test_keys() -> None:
    prv_key1, pub_key1 = ed25519.keys_from_seed(b"\x01" * 32)
    prv_key2, pub_key2 = ed25519.keys_from_seed(b"\x01" * 32)
    assert prv_key1.expose_secret() == prv_key2.expose_secret()
    assert pub_key1 == pub_key2
    _, pub_key3 = ed25519.keys_from_seed(b"\x02" * 32)
    assert pub_key1 != pub_key3

    err_msg = "invalid SigningKey size: 31 bytes instead of 32"
    with pytest.raises(SeedTreeValueError, match=err_msg):
        ed25519.keys_from_seed(b"\x01" * 31)

    # an X25519 key is not a signing key
    with pytest.raises(SeedTreeTypeError, match="not a SigningKey: ExchangeKey"):
        ed25519.sign(b"msg", ExchangeKey(b"\x01" * 32))  # type: ignore

    prv_key1.wipe()
    with pytest.raises(SeedTreeValueError, match="SigningKey has been wiped"):
        ed25519.sign(b"msg", prv_key1)


def test_dataclasses_json() -> None:
    prv_key, pub_key = ed25519.keys_from_seed(PRV_KEY)
    sig = ed25519.sign(b"", prv_key)

    pub_key_dict = pub_key.to_dict()
    assert pub_key_dict == {"key": PUB_KEY}
    assert ed25519.PubKey.from_dict(pub_key_dict) == pub_key
    assert ed25519.PubKey.from_json(pub_key.to_json()) == pub_key

    sig_dict = sig.to_dict()
    assert sig_dict == {"r": SIG[:64], "s": SIG[64:]}
    assert ed25519.Sig.from_dict(sig_dict) == sig
    assert ed25519.Sig.from_json(sig.to_json()) == sig

    with pytest.raises(SignatureParsingError, match="not a curve point"):
        ed25519.PubKey.from_dict({"key": P_ENCODING.hex()})
    with pytest.raises(SeedTreeValueError, match="not a lowercase hex-string"):
        ed25519.PubKey.from_dict({"key": PUB_KEY.upper()})
    with pytest.raises(SeedTreeValueError, match="odd-length hex-string"):
        ed25519.Sig.from_dict({"r": SIG[:63], "s": SIG[64:]})
