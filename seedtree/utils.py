#!/usr/bin/env python3

# Copyright (C) The seedtree developers
#
# This file is part of seedtree. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of seedtree including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Assorted conversion utilities.

bytes_from_octets is the permissive internal conversion,
while hex_from_bytes and bytes_from_hex implement the strict
lowercase fixed-width hex-string convention used at the boundary
with other processes.
"""

import hmac
import string
from collections.abc import Iterable as IterableCollection
from typing import Iterable, Optional, Union

from seedtree.alias import Octets, String
from seedtree.exceptions import SeedTreeValueError

NoneOneOrMoreInt = Optional[Union[int, Iterable[int]]]

_LOWER_HEX_DIGITS = frozenset(string.hexdigits.lower())


def _assert_size(data: bytes, out_size: NoneOneOrMoreInt) -> bytes:
    if (
        out_size is None
        or isinstance(out_size, int)
        and len(data) == out_size
        or isinstance(out_size, IterableCollection)
        and len(data) in out_size
    ):
        return data

    err_msg = f"invalid size: {len(data)} bytes instead of {out_size}"
    raise SeedTreeValueError(err_msg)


def bytes_from_octets(octets: Octets, out_size: NoneOneOrMoreInt = None) -> bytes:
    """Return bytes from a hex-string, stripping leading/trailing spaces.

    If the input is not a string, then it is only converted to bytes
    (e.g. from bytearray or memoryview).
    Optionally, it also ensures required output size.
    """

    if isinstance(octets, str):  # hex string
        try:
            octets = bytes.fromhex(octets)
        except ValueError as e:
            raise SeedTreeValueError("invalid hex-string") from e
    elif isinstance(octets, (bytes, bytearray, memoryview)):
        octets = bytes(octets)
    else:
        raise SeedTreeValueError(f"not octets: {type(octets).__name__}")

    return _assert_size(octets, out_size)


def bytes_from_string(data: String) -> bytes:
    "Return bytes from bytes or text string, encoding text as utf-8."

    if isinstance(data, str):
        return data.encode("utf-8")
    return bytes(data)


def hex_from_bytes(data: bytes) -> str:
    "Return the lowercase hex-string of the input bytes."

    return bytes(data).hex()


def bytes_from_hex(hex_str: str, out_size: NoneOneOrMoreInt = None) -> bytes:
    """Return bytes from a strict lowercase hex-string.

    Unlike bytes_from_octets, whitespaces and uppercase digits
    are rejected: this is the decoding used for values crossing
    the process boundary, which must be rejected before
    any cryptographic operation is attempted.
    """

    if not isinstance(hex_str, str):
        raise SeedTreeValueError(f"not a hex-string: {type(hex_str).__name__}")
    if len(hex_str) % 2:
        raise SeedTreeValueError(f"odd-length hex-string: {len(hex_str)} digits")
    if not _LOWER_HEX_DIGITS.issuperset(hex_str):
        raise SeedTreeValueError("not a lowercase hex-string")
    return _assert_size(bytes.fromhex(hex_str), out_size)


def is_all_zero(data: bytes) -> bool:
    "Return True if data is made of zero bytes only (constant time)."

    return hmac.compare_digest(bytes(data), b"\x00" * len(data))
