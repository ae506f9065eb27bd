#!/usr/bin/env python3

# Copyright (C) The seedtree developers
#
# This file is part of seedtree. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of seedtree including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""X25519 Diffie-Hellman key agreement scheme.

https://datatracker.ietf.org/doc/html/rfc7748

A key agreement scheme is used by two entities to establish
a shared secret, which will be later utilized
(usually after a key derivation function) as symmetric key material.

Static key pairs are generated at random, they are not part of the
derived key hierarchy. Every agreement is checked against the all-zero
shared secret, that results from a low order (i.e. malicious or invalid)
public key.
"""

from dataclasses import dataclass, field
from typing import Tuple, Type, TypeVar, Union

from cryptography.hazmat.primitives.asymmetric import x25519
from cryptography.hazmat.primitives.serialization import (
    Encoding,
    NoEncryption,
    PrivateFormat,
    PublicFormat,
)
from dataclasses_json import DataClassJsonMixin, config

from seedtree.alias import Octets
from seedtree.exceptions import KeyExchangeError
from seedtree.secret import SecretBytes, assert_secret_type
from seedtree.utils import (
    bytes_from_hex,
    bytes_from_octets,
    hex_from_bytes,
    is_all_zero,
)

PRV_KEY_SIZE = 32
PUB_KEY_SIZE = 32
SHARED_SECRET_SIZE = 32


class ExchangeKey(SecretBytes):
    "X25519 private key."

    sizes = (PRV_KEY_SIZE,)
    __slots__ = ()


class SharedSecret(SecretBytes):
    "Raw X25519 shared secret, never all-zero."

    sizes = (SHARED_SECRET_SIZE,)
    __slots__ = ()


_PubKey = TypeVar("_PubKey", bound="PubKey")


@dataclass(frozen=True)
class PubKey(DataClassJsonMixin):
    """X25519 public key (u-coordinate).

    Any 32 bytes string is a structurally valid X25519 public key:
    low order points are only detected at agreement time.
    """

    key: bytes = field(
        metadata=config(
            encoder=hex_from_bytes, decoder=lambda v: bytes_from_hex(v, PUB_KEY_SIZE)
        )
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "key", bytes_from_octets(self.key, PUB_KEY_SIZE))

    def serialize(self) -> bytes:
        return self.key

    @classmethod
    def parse(cls: Type[_PubKey], data: Octets) -> _PubKey:
        return cls(bytes_from_octets(data, PUB_KEY_SIZE))


def _private_key(prv_key: ExchangeKey) -> x25519.X25519PrivateKey:
    assert_secret_type(prv_key, ExchangeKey)
    return x25519.X25519PrivateKey.from_private_bytes(prv_key.expose_secret())


def _pub_key_from_private(private_key: x25519.X25519PrivateKey) -> PubKey:
    raw = private_key.public_key().public_bytes(
        encoding=Encoding.Raw, format=PublicFormat.Raw
    )
    return PubKey(raw)


def gen_keys() -> Tuple[ExchangeKey, PubKey]:
    "Return a CSPRNG private/public key pair."

    private_key = x25519.X25519PrivateKey.generate()
    raw = private_key.private_bytes(
        encoding=Encoding.Raw,
        format=PrivateFormat.Raw,
        encryption_algorithm=NoEncryption(),
    )
    return ExchangeKey(raw), _pub_key_from_private(private_key)


def pub_key_from_prv_key(prv_key: ExchangeKey) -> PubKey:
    return _pub_key_from_private(_private_key(prv_key))


def diffie_hellman(
    prv_key: ExchangeKey, pub_key: Union[PubKey, Octets]
) -> SharedSecret:
    """Diffie-Hellman X25519 key agreement scheme.

    It is symmetric: diffie_hellman(a, B) == diffie_hellman(b, A).
    KeyExchangeError is raised if the shared secret is all-zero.
    """

    if not isinstance(pub_key, PubKey):
        pub_key = PubKey.parse(pub_key)
    private_key = _private_key(prv_key)
    peer_key = x25519.X25519PublicKey.from_public_bytes(pub_key.key)
    try:
        shared = private_key.exchange(peer_key)
    except ValueError:
        # OpenSSL refuses the all-zero result itself
        raise KeyExchangeError("invalid public key: all-zero shared secret") from None
    if is_all_zero(shared):
        raise KeyExchangeError("invalid public key: all-zero shared secret")
    return SharedSecret(shared)
