#!/usr/bin/env python3

# Copyright (C) The seedtree developers
#
# This file is part of seedtree. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of seedtree including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Authenticated symmetric encryption with ChaCha20-Poly1305.

https://datatracker.ietf.org/doc/html/rfc8439

- 256-bit key (SymmetricKey, e.g. a derived SymmetricContentKey)
- 96-bit nonce, that must never be reused under the same key:
  use generate_nonce for every encryption, or just seal/unseal
- ciphertext is returned with the 16 bytes Poly1305 tag appended

Optional associated data is authenticated, but not encrypted:
it must be provided unchanged at decryption time.

Decryption failures are deliberately undifferentiated:
wrong key, wrong nonce, wrong associated data, tampered or truncated
ciphertext all raise the same DecryptionError with the same message,
so that failures can not be used as an oracle.
"""

import secrets
from dataclasses import dataclass, field
from typing import Optional, Type, TypeVar

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import ChaCha20Poly1305
from dataclasses_json import DataClassJsonMixin, config

from seedtree.alias import Octets
from seedtree.exceptions import (
    DecryptionError,
    EncryptionError,
    SeedTreeTypeError,
    SeedTreeValueError,
)
from seedtree.secret import SymmetricKey, assert_secret_type
from seedtree.utils import bytes_from_hex, bytes_from_octets, hex_from_bytes

KEY_SIZE = 32
NONCE_SIZE = 12
TAG_SIZE = 16


def generate_key() -> SymmetricKey:
    "Return a random (non derived) symmetric key."
    return SymmetricKey(ChaCha20Poly1305.generate_key())


def generate_nonce() -> bytes:
    "Return a fresh 12 bytes nonce from the system CSPRNG."
    return secrets.token_bytes(NONCE_SIZE)


def _bytes_payload(data: bytes, name: str) -> bytes:
    # text is not accepted: hex-string or utf-8 would both be guesses
    if isinstance(data, str):
        raise SeedTreeTypeError(f"{name} must be bytes-like, not str")
    return bytes(data)


def _cipher(key: SymmetricKey) -> ChaCha20Poly1305:
    assert_secret_type(key, SymmetricKey)
    return ChaCha20Poly1305(key.expose_secret())


def encrypt(
    key: SymmetricKey,
    plaintext: bytes,
    nonce: Octets,
    aad: Optional[bytes] = None,
) -> bytes:
    "Return ciphertext || tag for the plaintext."

    nonce = bytes_from_octets(nonce, NONCE_SIZE)
    plaintext = _bytes_payload(plaintext, "plaintext")
    if aad is not None:
        aad = _bytes_payload(aad, "associated data")
    cipher = _cipher(key)
    try:
        return cipher.encrypt(nonce, plaintext, aad)
    except (ValueError, OverflowError) as e:
        raise EncryptionError("encryption failed") from e


def decrypt(
    key: SymmetricKey,
    ciphertext: bytes,
    nonce: Octets,
    aad: Optional[bytes] = None,
) -> bytes:
    "Return the plaintext, after tag verification."

    nonce = bytes_from_octets(nonce, NONCE_SIZE)
    ciphertext = _bytes_payload(ciphertext, "ciphertext")
    if aad is not None:
        aad = _bytes_payload(aad, "associated data")
    cipher = _cipher(key)
    if len(ciphertext) < TAG_SIZE:
        raise DecryptionError("decryption failed")
    try:
        return cipher.decrypt(nonce, ciphertext, aad)
    except InvalidTag:
        raise DecryptionError("decryption failed") from None


_EncryptedPayload = TypeVar("_EncryptedPayload", bound="EncryptedPayload")


@dataclass(frozen=True)
class EncryptedPayload(DataClassJsonMixin):
    """Nonce and ciphertext (tag included) of a sealed message.

    Serialized with to_dict/from_dict as lowercase hex-strings.
    """

    nonce: bytes = field(
        metadata=config(
            encoder=hex_from_bytes, decoder=lambda v: bytes_from_hex(v, NONCE_SIZE)
        )
    )
    ciphertext: bytes = field(
        metadata=config(encoder=hex_from_bytes, decoder=bytes_from_hex)
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "nonce", bytes_from_octets(self.nonce, NONCE_SIZE))
        ciphertext = _bytes_payload(self.ciphertext, "ciphertext")
        object.__setattr__(self, "ciphertext", ciphertext)

    def serialize(self) -> bytes:
        return self.nonce + self.ciphertext

    @classmethod
    def parse(cls: Type[_EncryptedPayload], data: Octets) -> _EncryptedPayload:
        data = bytes_from_octets(data)
        if len(data) < NONCE_SIZE:
            err_msg = f"invalid size: {len(data)} bytes, less than nonce size"
            raise SeedTreeValueError(err_msg)
        return cls(data[:NONCE_SIZE], data[NONCE_SIZE:])


def seal(
    key: SymmetricKey, plaintext: bytes, aad: Optional[bytes] = None
) -> EncryptedPayload:
    "Encrypt the plaintext under a fresh random nonce."

    nonce = generate_nonce()
    return EncryptedPayload(nonce, encrypt(key, plaintext, nonce, aad))


def unseal(
    key: SymmetricKey, payload: EncryptedPayload, aad: Optional[bytes] = None
) -> bytes:
    return decrypt(key, payload.ciphertext, payload.nonce, aad)
