#!/usr/bin/env python3

# Copyright (C) The seedtree developers
#
# This file is part of seedtree. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of seedtree including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Seed-based wallet workflow.

A Wallet ties together the injected secure-storage capability
and the derived key hierarchy:
only the master seed (and its mnemonic, for backup)
are stored, every other key is derived again when requested
and never cached by the wallet.
The optional BIP39 passphrase is never stored:
users must keep it, together with the mnemonic,
to recover the key tree.

    wallet = Wallet(store)
    mnemonic = wallet.create()  # or wallet.import_mnemonic(mnemonic)
    prv_key, pub_key = wallet.identity_keys("login")
"""

import logging
from typing import Optional, Tuple

from seedtree import aead, derivation, ed25519
from seedtree.derivation import DEFAULT_SCHEME, DerivationScheme
from seedtree.exceptions import SeedTreeTypeError, WalletNotInitializedError
from seedtree.hashes import content_id as _content_id
from seedtree.mnemonic import (
    Entropy,
    Mnemonic,
    mnemonic_from_entropy,
    normalize_mnemonic,
    seed_from_mnemonic,
)
from seedtree.secret import (
    ContentMasterKey,
    MasterSeed,
    RootIdentitySecret,
    SymmetricContentKey,
)
from seedtree.storage import SecretStore

log = logging.getLogger(__name__)


class Wallet:
    def __init__(
        self, store: SecretStore, scheme: DerivationScheme = DEFAULT_SCHEME
    ) -> None:
        if not isinstance(store, SecretStore):
            err_msg = f"not a SecretStore: {type(store).__name__}"
            raise SeedTreeTypeError(err_msg)
        self._store = store
        self.scheme = scheme

    def create(
        self, entropy: Optional[Entropy] = None, passphrase: str = ""
    ) -> Mnemonic:
        """Initialize the wallet with a new mnemonic and return it.

        If not provided, 128 bits of CSPRNG entropy are used.
        The passphrase is not stored: the key tree can be recovered
        only from both the mnemonic and the passphrase.
        """

        mnemonic = mnemonic_from_entropy(entropy)
        self.import_mnemonic(mnemonic, passphrase)
        log.info("created new wallet")
        return mnemonic

    def import_mnemonic(self, mnemonic: Mnemonic, passphrase: str = "") -> None:
        """Initialize the wallet from an existing BIP39 mnemonic.

        Nothing is stored if the mnemonic is not valid.
        Any previously stored seed and mnemonic are replaced;
        if storing the seed fails, the previous mnemonic is written back,
        so that the stored mnemonic always matches the stored seed.
        The passphrase is not stored.
        """

        mnemonic = normalize_mnemonic(mnemonic)
        with seed_from_mnemonic(mnemonic, passphrase) as seed:
            new_seed = seed.expose_secret()

        old_mnemonic = self._store.retrieve_mnemonic()
        # the seed makes the wallet initialized: it is written last
        self._store.store_mnemonic(mnemonic)
        try:
            self._store.store_seed(new_seed)
        except Exception:
            log.warning("seed storage failed, restoring previous mnemonic")
            if old_mnemonic is not None:
                self._store.store_mnemonic(old_mnemonic)
            raise
        log.debug("imported %d words mnemonic", len(mnemonic.split()))

    def is_initialized(self) -> bool:
        return self._store.retrieve_seed() is not None

    def mnemonic(self) -> Mnemonic:
        mnemonic = self._store.retrieve_mnemonic()
        if mnemonic is None:
            raise WalletNotInitializedError("no mnemonic in storage")
        return mnemonic

    def master_seed(self) -> MasterSeed:
        seed = self._store.retrieve_seed()
        if seed is None:
            raise WalletNotInitializedError("no master seed in storage")
        return MasterSeed(seed)

    def root_identity(self) -> RootIdentitySecret:
        with self.master_seed() as seed:
            return derivation.root_identity_from_seed(seed, self.scheme)

    def identity_keys(
        self, purpose: str
    ) -> Tuple[ed25519.SigningKey, ed25519.PubKey]:
        with self.root_identity() as rik:
            keys = derivation.identity_signing_keys(rik, purpose, self.scheme)
        log.debug("derived identity keys for purpose %r", purpose)
        return keys

    def public_identity(self, purpose: str) -> ed25519.PubKey:
        prv_key, pub_key = self.identity_keys(purpose)
        prv_key.wipe()
        return pub_key

    def content_master_key(self, content_id: bytes) -> ContentMasterKey:
        with self.root_identity() as rik:
            return derivation.content_master_key(rik, content_id, self.scheme)

    def content_encryption_key(self, content_id: bytes) -> SymmetricContentKey:
        with self.content_master_key(content_id) as cmk:
            return derivation.symmetric_content_key(cmk, self.scheme)

    def token_signing_keys(
        self, content_id: bytes
    ) -> Tuple[ed25519.SigningKey, ed25519.PubKey]:
        with self.content_master_key(content_id) as cmk:
            return derivation.token_signing_keys(cmk, self.scheme)

    def encrypt_content(
        self, content: bytes, aad: Optional[bytes] = None
    ) -> Tuple[bytes, aead.EncryptedPayload]:
        """Return content identifier and sealed content.

        The content is encrypted with its own symmetric content key,
        derived from the content identifier (SHA3-256 of the content):
        the identifier is needed to decrypt it.
        """

        cid = _content_id(content)
        with self.content_encryption_key(cid) as key:
            payload = aead.seal(key, content, aad)
        log.debug("encrypted %d bytes content", len(content))
        return cid, payload

    def decrypt_content(
        self,
        content_id: bytes,
        payload: aead.EncryptedPayload,
        aad: Optional[bytes] = None,
    ) -> bytes:
        with self.content_encryption_key(content_id) as key:
            return aead.unseal(key, payload, aad)
