#!/usr/bin/env python3

# Copyright (C) The seedtree developers
#
# This file is part of seedtree. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of seedtree including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Ed25519 digital signature scheme.

https://datatracker.ietf.org/doc/html/rfc8032

Signing and verification are delegated to the cryptography package;
this module adds the typed key/signature wrappers and the structural
validation of public keys and signatures, so that a malformed value
is rejected with SignatureParsingError when the wrapper is built,
while a well-formed signature that does not match raises
SignatureVerificationError.

The private key is the RFC 8032 32 bytes secret seed,
hence any 32 bytes string (e.g. a derived one) is a valid private key.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple, Type, TypeVar, Union

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric import ed25519
from cryptography.hazmat.primitives.serialization import (
    Encoding,
    NoEncryption,
    PrivateFormat,
    PublicFormat,
)
from dataclasses_json import DataClassJsonMixin, config

from seedtree.alias import Octets, String
from seedtree.exceptions import (
    SeedTreeRuntimeError,
    SeedTreeValueError,
    SignatureParsingError,
    SignatureVerificationError,
)
from seedtree.secret import SecretBytes, assert_secret_type
from seedtree.utils import (
    bytes_from_hex,
    bytes_from_octets,
    bytes_from_string,
    hex_from_bytes,
)

PRV_KEY_SIZE = 32
PUB_KEY_SIZE = 32
SIG_SIZE = 64

# field prime
_P = 2**255 - 19
# twisted Edwards curve -x^2 + y^2 = 1 + d x^2 y^2
_D = -121665 * pow(121666, _P - 2, _P) % _P
# prime order of the base point
L = 2**252 + 27742317777372353535851937790883648493
# square root of -1
_SQRT_M1 = pow(2, (_P - 1) // 4, _P)


def _x_recover(y: int, sign: int) -> Optional[int]:
    "Return the x-coordinate for y and sign bit, None if not on curve."

    # RFC 8032, section 5.1.3
    y2 = y * y % _P
    u = (y2 - 1) % _P
    v = (_D * y2 + 1) % _P
    x = u * pow(v, 3, _P) * pow(u * pow(v, 7, _P), (_P - 5) // 8, _P) % _P
    vx2 = v * x * x % _P
    if vx2 == (-u) % _P:
        x = x * _SQRT_M1 % _P
    elif vx2 != u:
        return None
    if x == 0 and sign:
        return None
    if x & 1 != sign:
        x = _P - x
    return x


def is_point(data: bytes) -> bool:
    "Return True if data is the canonical encoding of a curve point."

    if len(data) != PUB_KEY_SIZE:
        return False
    y = int.from_bytes(data, byteorder="little", signed=False)
    sign = y >> 255
    y &= (1 << 255) - 1
    if y >= _P:
        return False
    return _x_recover(y, sign) is not None


def _parse_octets(data: Octets, size: int, what: str) -> bytes:
    try:
        return bytes_from_octets(data, size)
    except SeedTreeValueError as e:
        raise SignatureParsingError(f"invalid {what}: {e}") from None


class SigningKey(SecretBytes):
    "Ed25519 private key (RFC 8032 secret seed)."

    sizes = (PRV_KEY_SIZE,)
    __slots__ = ()


_PubKey = TypeVar("_PubKey", bound="PubKey")


@dataclass(frozen=True)
class PubKey(DataClassJsonMixin):
    "Ed25519 public key, i.e. the encoding of a curve point."

    key: bytes = field(
        metadata=config(
            encoder=hex_from_bytes, decoder=lambda v: bytes_from_hex(v, PUB_KEY_SIZE)
        )
    )

    def __post_init__(self) -> None:
        key = _parse_octets(self.key, PUB_KEY_SIZE, "public key")
        object.__setattr__(self, "key", key)
        self.assert_valid()

    def assert_valid(self) -> None:
        if not is_point(self.key):
            raise SignatureParsingError("invalid public key: not a curve point")

    def serialize(self) -> bytes:
        return self.key

    @classmethod
    def parse(cls: Type[_PubKey], data: Octets) -> _PubKey:
        return cls(_parse_octets(data, PUB_KEY_SIZE, "public key"))


def _hex_from_scalar(s: int) -> str:
    return s.to_bytes(32, byteorder="little", signed=False).hex()


def _scalar_from_hex(v: str) -> int:
    return int.from_bytes(bytes_from_hex(v, 32), byteorder="little", signed=False)


_Sig = TypeVar("_Sig", bound="Sig")


@dataclass(frozen=True)
class Sig(DataClassJsonMixin):
    """Ed25519 signature.

    - r is the 32 bytes encoding of the curve point R
    - s is a scalar, 0 <= s < L

    (L is the prime order of the base point)
    """

    r: bytes = field(
        metadata=config(
            encoder=hex_from_bytes, decoder=lambda v: bytes_from_hex(v, PUB_KEY_SIZE)
        )
    )
    # little-endian, as in the serialized signature
    s: int = field(metadata=config(encoder=_hex_from_scalar, decoder=_scalar_from_hex))

    def __post_init__(self) -> None:
        r = _parse_octets(self.r, PUB_KEY_SIZE, "signature R")
        object.__setattr__(self, "r", r)
        self.assert_valid()

    def assert_valid(self) -> None:
        if not is_point(self.r):
            raise SignatureParsingError("invalid signature: R is not a curve point")
        if not isinstance(self.s, int) or not 0 <= self.s < L:
            raise SignatureParsingError("invalid signature: scalar s not in 0..L-1")

    def serialize(self) -> bytes:
        return self.r + self.s.to_bytes(32, byteorder="little", signed=False)

    @classmethod
    def parse(cls: Type[_Sig], data: Octets) -> _Sig:
        data = _parse_octets(data, SIG_SIZE, "signature")
        s = int.from_bytes(data[32:], byteorder="little", signed=False)
        return cls(data[:32], s)


def _private_key(prv_key: SigningKey) -> ed25519.Ed25519PrivateKey:
    assert_secret_type(prv_key, SigningKey)
    return ed25519.Ed25519PrivateKey.from_private_bytes(prv_key.expose_secret())


def _pub_key_from_private(private_key: ed25519.Ed25519PrivateKey) -> PubKey:
    raw = private_key.public_key().public_bytes(
        encoding=Encoding.Raw, format=PublicFormat.Raw
    )
    return PubKey(raw)


def gen_keys() -> Tuple[SigningKey, PubKey]:
    "Return a CSPRNG private/public key pair."

    private_key = ed25519.Ed25519PrivateKey.generate()
    raw = private_key.private_bytes(
        encoding=Encoding.Raw,
        format=PrivateFormat.Raw,
        encryption_algorithm=NoEncryption(),
    )
    return SigningKey(raw), _pub_key_from_private(private_key)


def keys_from_seed(seed: Octets) -> Tuple[SigningKey, PubKey]:
    "Return the private/public key pair for the 32 bytes secret seed."

    prv_key = SigningKey(seed)
    return prv_key, pub_key_from_prv_key(prv_key)


def pub_key_from_prv_key(prv_key: SigningKey) -> PubKey:
    return _pub_key_from_private(_private_key(prv_key))


def sign(msg: String, prv_key: SigningKey) -> Sig:
    """Return the (deterministic) Ed25519 signature of the message.

    A text message is utf-8 encoded.
    """

    msg = bytes_from_string(msg)
    return Sig.parse(_private_key(prv_key).sign(msg))


def _to_pub_key(pub_key: Union[PubKey, Octets]) -> PubKey:
    if isinstance(pub_key, PubKey):
        return pub_key
    return PubKey.parse(pub_key)


def _to_sig(sig: Union[Sig, Octets]) -> Sig:
    if isinstance(sig, Sig):
        return sig
    return Sig.parse(sig)


def assert_as_valid(
    msg: String, pub_key: Union[PubKey, Octets], sig: Union[Sig, Octets]
) -> None:
    """Raise an error if the signature is not valid.

    SignatureParsingError is raised for a malformed public key or
    signature, SignatureVerificationError for a well-formed signature
    that does not match message and public key.
    """

    msg = bytes_from_string(msg)
    pub_key = _to_pub_key(pub_key)
    sig = _to_sig(sig)
    try:
        public_key = ed25519.Ed25519PublicKey.from_public_bytes(pub_key.key)
    except ValueError:
        raise SignatureParsingError("invalid public key") from None
    try:
        public_key.verify(sig.serialize(), msg)
    except InvalidSignature:
        raise SignatureVerificationError("signature verification failed") from None


def verify(
    msg: String, pub_key: Union[PubKey, Octets], sig: Union[Sig, Octets]
) -> bool:
    "Return True if the signature is valid."

    try:
        assert_as_valid(msg, pub_key, sig)
    except (SeedTreeValueError, SeedTreeRuntimeError):
        return False
    return True
