#!/usr/bin/env python3

# Copyright (C) The seedtree developers
#
# This file is part of seedtree. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of seedtree including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Entropy conversion functions.

BIP39 entropy is handled as a binary 0/1 string (BinStr),
as its bit length matters: leading zeros are entropy too,
never padding to be dropped.

Entropy can also be provided as bytes-like or integer;
only integers, that can not carry leading zeros,
are front-padded up to the next allowed bit length.
When more bits than allowed are provided,
the leftmost ones are kept.
"""

import math
import secrets
from hashlib import sha512
from typing import Iterable, List, Optional, Union

from seedtree.alias import Octets
from seedtree.exceptions import SeedTreeValueError
from seedtree.utils import bytes_from_octets

# BIP39 entropy sizes
_bits = 128, 160, 192, 224, 256

BinStr = str
Entropy = Union[BinStr, int, bytes]

OneOrMoreInt = Union[int, Iterable[int]]


def _allowed_bits(bits: OneOrMoreInt) -> List[int]:
    return sorted({bits} if isinstance(bits, int) else set(bits))


def _invalid_bits(n_bits: int, bits: Iterable[int]) -> SeedTreeValueError:
    return SeedTreeValueError(f"invalid number of bits: {n_bits} instead of {bits}")


def wordlist_indexes_from_bin_str_entropy(entropy: BinStr, base: int) -> List[int]:
    "Return the base-digits (e.g. word-list indexes) of the raw entropy."

    bits_per_digit = base.bit_length() - 1
    n_digits = math.ceil(len(entropy) / bits_per_digit)
    value = int(entropy, 2)
    indexes = [0] * n_digits
    for i in reversed(range(n_digits)):
        value, indexes[i] = divmod(value, base)
    return indexes


def bin_str_entropy_from_wordlist_indexes(indexes: List[int], base: int) -> BinStr:
    "Return the raw entropy of the base-digits (e.g. word-list indexes)."

    value = 0
    for index in indexes:
        value = value * base + index
    n_bits = len(indexes) * (base.bit_length() - 1)
    return format(value, "b").zfill(n_bits)


def bin_str_entropy_from_entropy(entr: Entropy, bits: OneOrMoreInt = _bits) -> BinStr:
    """Return raw entropy from raw, bytes-like, or integer entropy.

    A string is always raw entropy, never a hex-string.
    """

    if isinstance(entr, str):
        return bin_str_entropy_from_str(entr, bits)
    if isinstance(entr, int):
        return bin_str_entropy_from_int(entr, bits)
    return bin_str_entropy_from_bytes(entr, bits)


def bin_str_entropy_from_bytes(
    bytes_entropy: Octets, bits: OneOrMoreInt = _bits
) -> BinStr:
    "Return raw entropy from bytes-like or hex-string entropy."

    data = bytes_from_octets(bytes_entropy)
    allowed = _allowed_bits(bits)

    n_bits = min(len(data) * 8, allowed[-1])
    if n_bits not in allowed:
        raise _invalid_bits(n_bits, allowed)

    value = int.from_bytes(data, byteorder="big", signed=False)
    value >>= len(data) * 8 - n_bits
    return format(value, "b").zfill(n_bits)


def bytes_entropy_from_str(bin_str_entropy: BinStr) -> bytes:
    n_bits = len(bin_str_entropy)
    if n_bits not in _bits:
        raise _invalid_bits(n_bits, _bits)
    return int(bin_str_entropy, 2).to_bytes(n_bits // 8, byteorder="big", signed=False)


def bin_str_entropy_from_int(int_entropy: int, bits: OneOrMoreInt = _bits) -> BinStr:
    "Return raw entropy from integer entropy, front-padded with zeros."

    if int_entropy < 0:
        raise SeedTreeValueError("negative entropy")

    allowed = _allowed_bits(bits)
    bin_str = format(int_entropy, "b")
    if len(bin_str) >= allowed[-1]:
        return bin_str[: allowed[-1]]
    n_bits = next(n for n in allowed if n >= len(bin_str))
    return bin_str.zfill(n_bits)


def bin_str_entropy_from_str(str_entropy: str, bits: OneOrMoreInt = _bits) -> BinStr:
    "Return raw entropy from raw entropy, checking its bit length."

    if not str_entropy or not set(str_entropy) <= {"0", "1"}:
        raise SeedTreeValueError("invalid raw entropy: not a binary 0/1 string")

    allowed = _allowed_bits(bits)
    if len(str_entropy) >= allowed[-1]:
        return str_entropy[: allowed[-1]]
    if len(str_entropy) not in allowed:
        raise _invalid_bits(len(str_entropy), allowed)
    return str_entropy


def bin_str_entropy_from_random(
    bits: int, entropy: Optional[BinStr] = None, to_be_hashed: bool = True
) -> BinStr:
    """Return raw entropy from the system CSPRNG.

    Optional raw entropy provided by the caller (e.g. from dice)
    is XOR-ed with the CSPRNG one, so that it can add to,
    but never weaken, the result.
    If to_be_hashed, the leftmost bits of SHA512 are returned.
    """

    if bits not in _bits:
        raise _invalid_bits(bits, _bits)

    value = secrets.randbits(bits)
    if entropy:
        value ^= int(entropy[:bits], 2)

    if to_be_hashed:
        n_bytes = math.ceil(value.bit_length() / 8)
        digest = sha512(value.to_bytes(n_bytes, byteorder="big", signed=False))
        value = int.from_bytes(digest.digest(), byteorder="big") >> (512 - bits)

    return bin_str_entropy_from_int(value, bits)
