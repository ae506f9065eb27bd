#!/usr/bin/env python3

# Copyright (C) The seedtree developers
#
# This file is part of seedtree. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of seedtree including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"Tests for the `seedtree.derivation` module."

import pytest

from seedtree import aead, derivation, ed25519
from seedtree.exceptions import (
    DecryptionError,
    KeyDerivationError,
    SeedTreeTypeError,
    SeedTreeValueError,
)
from seedtree.hashes import content_id
from seedtree.mnemonic import seed_from_mnemonic
from seedtree.secret import (
    ContentMasterKey,
    MasterSeed,
    RootIdentitySecret,
    SymmetricContentKey,
)


def test_hkdf_sha256() -> None:
    # RFC 5869, test case 1
    ikm = b"\x0b" * 22
    salt = bytes.fromhex("000102030405060708090a0b0c")
    info = bytes.fromhex("f0f1f2f3f4f5f6f7f8f9")
    okm = (
        "3cb25f25faacd57a90434f64d0362f2a2d2d0a90cf1a5a4c5db02d56ecc4c5bf"
        "34007208d5b887185865"
    )
    assert derivation.hkdf_sha256(ikm, salt, info, 42).hex() == okm
    assert derivation.hkdf_sha256(ikm, salt, info).hex() == okm[:64]

    for size in (0, -1, 255 * 32 + 1):
        with pytest.raises(KeyDerivationError, match=f"invalid output size: {size}"):
            derivation.hkdf_sha256(ikm, salt, info, size)
    assert len(derivation.hkdf_sha256(ikm, salt, info, 255 * 32)) == 255 * 32


def test_root_identity() -> None:
    seed = MasterSeed(b"\x01" * 64)
    rik = derivation.root_identity_from_seed(seed)
    assert isinstance(rik, RootIdentitySecret)
    okm = derivation.hkdf_sha256(b"\x01" * 64, b"master", b"root-identity")
    assert rik.expose_secret() == okm
    # deterministic
    rik2 = derivation.root_identity_from_seed(seed)
    assert rik.expose_secret() == rik2.expose_secret()

    other_rik = derivation.root_identity_from_seed(MasterSeed(b"\x02" * 64))
    assert rik.expose_secret() != other_rik.expose_secret()

    scheme = derivation.DerivationScheme(master_salt=b"other")
    other_rik = derivation.root_identity_from_seed(seed, scheme)
    assert rik.expose_secret() != other_rik.expose_secret()

    with pytest.raises(SeedTreeTypeError, match="not a MasterSeed: RootIdentitySecret"):
        derivation.root_identity_from_seed(rik)  # type: ignore
    with pytest.raises(SeedTreeTypeError, match="not a MasterSeed: bytes"):
        derivation.root_identity_from_seed(b"\x01" * 64)  # type: ignore

    seed.wipe()
    with pytest.raises(SeedTreeValueError, match="MasterSeed has been wiped"):
        derivation.root_identity_from_seed(seed)


def test_identity_signing_keys() -> None:
    rik = RootIdentitySecret(b"\x03" * 32)
    prv_key, pub_key = derivation.identity_signing_keys(rik, "login")
    okm = derivation.hkdf_sha256(b"\x03" * 32, b"identity-signing", b"login")
    assert prv_key.expose_secret() == okm

    # deterministic, text and bytes purposes are the same
    _, pub_key2 = derivation.identity_signing_keys(rik, b"login")
    assert pub_key == pub_key2

    # independent purposes
    _, other_pub_key = derivation.identity_signing_keys(rik, "profile")
    assert pub_key != other_pub_key

    sig = ed25519.sign(b"challenge", prv_key)
    assert ed25519.verify(b"challenge", pub_key, sig)
    assert not ed25519.verify(b"challenge", other_pub_key, sig)

    cmk = ContentMasterKey(b"\x03" * 32)
    err_msg = "not a RootIdentitySecret: ContentMasterKey"
    with pytest.raises(SeedTreeTypeError, match=err_msg):
        derivation.identity_signing_keys(cmk, "login")  # type: ignore


def test_content_keys() -> None:
    rik = RootIdentitySecret(b"\x04" * 32)
    cid1 = content_id(b"content 1")
    cid2 = content_id(b"content 2")

    cmk1 = derivation.content_master_key(rik, cid1)
    assert isinstance(cmk1, ContentMasterKey)
    okm = derivation.hkdf_sha256(b"\x04" * 32, b"content-key-derivation", cid1)
    assert cmk1.expose_secret() == okm
    assert derivation.content_master_key(rik, cid1).expose_secret() == okm
    cmk2 = derivation.content_master_key(rik, cid2)
    assert cmk1.expose_secret() != cmk2.expose_secret()

    other_rik = RootIdentitySecret(b"\x05" * 32)
    other_cmk = derivation.content_master_key(other_rik, cid1)
    assert cmk1.expose_secret() != other_cmk.expose_secret()

    sck = derivation.symmetric_content_key(cmk1)
    assert isinstance(sck, SymmetricContentKey)
    okm = derivation.hkdf_sha256(
        cmk1.expose_secret(), b"symmetric-encryption", b"slice-encryption"
    )
    assert sck.expose_secret() == okm
    assert sck.expose_secret() != cmk1.expose_secret()

    token_prv_key, token_pub_key = derivation.token_signing_keys(cmk1)
    okm = derivation.hkdf_sha256(
        cmk1.expose_secret(), b"token-signing", b"transactable-key-token"
    )
    assert token_prv_key.expose_secret() == okm
    # siblings are independent
    assert token_prv_key.expose_secret() != sck.expose_secret()

    sig = ed25519.sign(b"token", token_prv_key)
    assert ed25519.verify(b"token", token_pub_key, sig)

    payload = aead.seal(sck, b"content 1")
    sck2 = derivation.symmetric_content_key(derivation.content_master_key(rik, cid1))
    assert aead.unseal(sck2, payload) == b"content 1"
    other_sck = derivation.symmetric_content_key(cmk2)
    with pytest.raises(DecryptionError):
        aead.unseal(other_sck, payload)

    with pytest.raises(SeedTreeTypeError, match="not a ContentMasterKey"):
        derivation.symmetric_content_key(rik)  # type: ignore
    with pytest.raises(SeedTreeTypeError, match="not a ContentMasterKey"):
        derivation.token_signing_keys(sck)  # type: ignore
    with pytest.raises(SeedTreeTypeError, match="not a RootIdentitySecret"):
        derivation.content_master_key(cmk1, cid1)  # type: ignore


def test_whole_hierarchy() -> None:
    mnemonic = " ".join(["abandon"] * 11 + ["about"])

    pub_keys = []
    for _ in range(2):
        with seed_from_mnemonic(mnemonic) as seed:
            rik = derivation.root_identity_from_seed(seed)
        _, pub_key = derivation.identity_signing_keys(rik, "login")
        cmk = derivation.content_master_key(rik, content_id(b"content"))
        _, token_pub_key = derivation.token_signing_keys(cmk)
        pub_keys.append((pub_key, token_pub_key))
    assert pub_keys[0] == pub_keys[1]

    with seed_from_mnemonic(mnemonic, "passphrase") as seed:
        rik = derivation.root_identity_from_seed(seed)
    _, pub_key = derivation.identity_signing_keys(rik, "login")
    assert pub_key != pub_keys[0][0]
