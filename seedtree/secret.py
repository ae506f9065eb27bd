#!/usr/bin/env python3

# Copyright (C) The seedtree developers
#
# This file is part of seedtree. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of seedtree including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Wrappers for secret key material.

Each kind of secret in the key hierarchy is a distinct class,
so that e.g. a ContentMasterKey can not be passed where a
RootIdentitySecret is expected: functions check the wrapper class
of their secret inputs and raise SeedTreeTypeError otherwise.
Re-wrapping raw bytes is the only (explicit and fallible) conversion:

    rik = RootIdentitySecret(cmk.expose_secret())

Secret wrappers:

- hold their key material in a mutable buffer that is zeroed
  by wipe(), when leaving a with block, and when garbage collected
- do not implement equality, hashing, copying, or pickling
- have a redacted repr

Python gives no guarantee that no other copy of the key material
survives in memory (e.g. the bytes returned by expose_secret),
wiping only shortens the window of exposure.
"""

from typing import Any, Tuple, Type, TypeVar, Union

from seedtree.alias import Octets
from seedtree.exceptions import SeedTreeTypeError, SeedTreeValueError
from seedtree.utils import bytes_from_octets

_SecretBytes = TypeVar("_SecretBytes", bound="SecretBytes")


class SecretBytes:
    """Fixed-size secret byte string.

    Subclasses set the allowed sizes (in bytes) of the key material.
    """

    sizes: Tuple[int, ...] = ()

    __slots__ = ("_buffer", "__weakref__")

    def __init__(self, octets: Union[Octets, bytearray]) -> None:
        data = bytes_from_octets(octets)
        if len(data) not in self.sizes:
            err_msg = f"invalid {type(self).__name__} size: "
            err_msg += f"{len(data)} bytes instead of {_sizes_str(self.sizes)}"
            raise SeedTreeValueError(err_msg)
        self._buffer = bytearray(data)

    def expose_secret(self) -> bytes:
        "Return the raw key material."
        if self.is_wiped:
            raise SeedTreeValueError(f"{type(self).__name__} has been wiped")
        return bytes(self._buffer)

    def wipe(self) -> None:
        "Overwrite the key material with zeros."
        buffer = getattr(self, "_buffer", None)
        if buffer is None:
            return
        for i in range(len(buffer)):
            buffer[i] = 0
        self._buffer = bytearray()

    @property
    def is_wiped(self) -> bool:
        return not self._buffer

    def __len__(self) -> int:
        return len(self._buffer)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(<redacted>)"

    __str__ = __repr__

    # no equality: identity only, and unhashable to avoid dict/set leaks
    __hash__ = None  # type: ignore

    def __copy__(self) -> Any:
        raise SeedTreeTypeError(f"{type(self).__name__} can not be copied")

    def __deepcopy__(self, memo: Any) -> Any:
        raise SeedTreeTypeError(f"{type(self).__name__} can not be copied")

    def __reduce__(self) -> Any:
        raise SeedTreeTypeError(f"{type(self).__name__} can not be pickled")

    def __enter__(self: _SecretBytes) -> _SecretBytes:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.wipe()

    def __del__(self) -> None:
        self.wipe()


def _sizes_str(sizes: Tuple[int, ...]) -> str:
    if len(sizes) == 1:
        return str(sizes[0])
    return f"{sizes[0]}..{sizes[-1]}"


def assert_secret_type(secret: Any, secret_type: Type[SecretBytes]) -> None:
    "Raise SeedTreeTypeError if secret is not a secret_type instance."

    if not isinstance(secret, secret_type):
        err_msg = f"not a {secret_type.__name__}: {type(secret).__name__}"
        raise SeedTreeTypeError(err_msg)
    if secret.is_wiped:
        raise SeedTreeValueError(f"{type(secret).__name__} has been wiped")


class MasterSeed(SecretBytes):
    """Root of the whole key hierarchy.

    64 bytes when obtained from a BIP39 mnemonic,
    but any size in 16..64 bytes is accepted.
    """

    sizes = tuple(range(16, 65))
    __slots__ = ()


class RootIdentitySecret(SecretBytes):
    sizes = (32,)
    __slots__ = ()


class ContentMasterKey(SecretBytes):
    sizes = (32,)
    __slots__ = ()


class SymmetricKey(SecretBytes):
    "256-bit ChaCha20-Poly1305 key."

    sizes = (32,)
    __slots__ = ()


class SymmetricContentKey(SymmetricKey):
    __slots__ = ()
