#!/usr/bin/env python3

# Copyright (C) The seedtree developers
#
# This file is part of seedtree. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of seedtree including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Hierarchical deterministic key derivation.

A deterministic key hierarchy is a tree of secrets that derives from
a single root, the master seed, which is the only element requiring
backup: every other secret is recomputed on demand.

Each edge of the tree is HKDF-SHA256 (RFC 5869) of the parent secret,
with a fixed salt for each kind of edge and a label (info) that is
either fixed or provided by the caller:

    master seed
    └── root identity secret        salt "master", info "root-identity"
        ├── identity signing keys   salt "identity-signing", info purpose
        └── content master key      salt "content-key-derivation", info content id
            ├── symmetric content key  salt "symmetric-encryption",
            │                          info "slice-encryption"
            └── token signing keys     salt "token-signing",
                                       info "transactable-key-token"

Fixed salts separate unrelated kinds of derivation from the same parent,
while labels let a single parent fan out into unboundedly many
independent children: without the parent,
knowledge of a child does not help recover a sibling.

Signing key pairs are Ed25519 keys whose 32 bytes secret seed
is the derived output.
"""

from dataclasses import dataclass
from typing import Tuple

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.hkdf import HKDF

from seedtree import ed25519
from seedtree.alias import String
from seedtree.exceptions import KeyDerivationError
from seedtree.secret import (
    ContentMasterKey,
    MasterSeed,
    RootIdentitySecret,
    SymmetricContentKey,
    assert_secret_type,
)
from seedtree.utils import bytes_from_string

KEY_SIZE = 32
# RFC 5869: L <= 255 * HashLen
_MAX_OUTPUT_SIZE = 255 * 32


@dataclass(frozen=True)
class DerivationScheme:
    """Salts and labels of the key hierarchy.

    The defaults are the ones of DEFAULT_SCHEME: changing any of them
    results in a completely different (and incompatible) hierarchy.
    """

    master_salt: bytes = b"master"
    root_identity_info: bytes = b"root-identity"

    identity_signing_salt: bytes = b"identity-signing"

    content_key_salt: bytes = b"content-key-derivation"

    symmetric_salt: bytes = b"symmetric-encryption"
    symmetric_info: bytes = b"slice-encryption"

    token_signing_salt: bytes = b"token-signing"
    token_signing_info: bytes = b"transactable-key-token"


DEFAULT_SCHEME = DerivationScheme()


def hkdf_sha256(ikm: bytes, salt: bytes, info: bytes, size: int = KEY_SIZE) -> bytes:
    """Return size bytes of HKDF-SHA256 output key material.

    HKDF-Extract with the salt, then HKDF-Expand with the info.
    """

    if not 0 < size <= _MAX_OUTPUT_SIZE:
        raise KeyDerivationError(f"invalid output size: {size} bytes")
    hkdf = HKDF(algorithm=hashes.SHA256(), length=size, salt=salt, info=info)
    try:
        return hkdf.derive(ikm)
    except ValueError as e:
        raise KeyDerivationError("key derivation failed") from e


def root_identity_from_seed(
    seed: MasterSeed, scheme: DerivationScheme = DEFAULT_SCHEME
) -> RootIdentitySecret:
    "Return the root identity secret of the master seed."

    assert_secret_type(seed, MasterSeed)
    okm = hkdf_sha256(
        seed.expose_secret(), scheme.master_salt, scheme.root_identity_info
    )
    return RootIdentitySecret(okm)


def identity_signing_keys(
    rik: RootIdentitySecret,
    purpose: String,
    scheme: DerivationScheme = DEFAULT_SCHEME,
) -> Tuple[ed25519.SigningKey, ed25519.PubKey]:
    """Return the identity signing key pair for the given purpose.

    The purpose is a caller-chosen label, e.g. "login" or "profile";
    a text purpose is utf-8 encoded.
    """

    assert_secret_type(rik, RootIdentitySecret)
    okm = hkdf_sha256(
        rik.expose_secret(), scheme.identity_signing_salt, bytes_from_string(purpose)
    )
    return ed25519.keys_from_seed(okm)


def content_master_key(
    rik: RootIdentitySecret,
    content_id: String,
    scheme: DerivationScheme = DEFAULT_SCHEME,
) -> ContentMasterKey:
    """Return the content master key for the given content identifier.

    The content identifier is usually seedtree.hashes.content_id
    of the content itself.
    """

    assert_secret_type(rik, RootIdentitySecret)
    okm = hkdf_sha256(
        rik.expose_secret(), scheme.content_key_salt, bytes_from_string(content_id)
    )
    return ContentMasterKey(okm)


def symmetric_content_key(
    cmk: ContentMasterKey, scheme: DerivationScheme = DEFAULT_SCHEME
) -> SymmetricContentKey:
    "Return the key encrypting the content of the content master key."

    assert_secret_type(cmk, ContentMasterKey)
    okm = hkdf_sha256(cmk.expose_secret(), scheme.symmetric_salt, scheme.symmetric_info)
    return SymmetricContentKey(okm)


def token_signing_keys(
    cmk: ContentMasterKey, scheme: DerivationScheme = DEFAULT_SCHEME
) -> Tuple[ed25519.SigningKey, ed25519.PubKey]:
    "Return the key pair signing tokens of the content master key."

    assert_secret_type(cmk, ContentMasterKey)
    okm = hkdf_sha256(
        cmk.expose_secret(), scheme.token_signing_salt, scheme.token_signing_info
    )
    return ed25519.keys_from_seed(okm)
