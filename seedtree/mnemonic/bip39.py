#!/usr/bin/env python3

# Copyright (C) The seedtree developers
#
# This file is part of seedtree. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of seedtree including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""BIP39 mnemonic sentences and seeds.

https://github.com/bitcoin/bips/blob/master/bip-0039.mediawiki

The entropy (ENT bits) is extended with a checksum made of
the leftmost ENT/32 bits of its SHA256; the result is split in
11-bit word-list indexes, i.e. the mnemonic words:

    ENT: 128  160  192  224  256
    CS:    4    5    6    7    8
    MS:   12   15   18   21   24

The master seed, root of the whole key hierarchy,
is obtained from the mnemonic with PBKDF2-HMAC-SHA512.
Error messages never include mnemonic words or checksum bits.
"""

import unicodedata
from hashlib import pbkdf2_hmac, sha256
from typing import Optional, Tuple

from seedtree.exceptions import MnemonicValidationError, SeedConversionError
from seedtree.mnemonic.entropy import (
    BinStr,
    Entropy,
    bin_str_entropy_from_entropy,
    bin_str_entropy_from_random,
    bin_str_entropy_from_wordlist_indexes,
    bytes_entropy_from_str,
    wordlist_indexes_from_bin_str_entropy,
)
from seedtree.mnemonic.mnemonic import (
    WORDLISTS,
    Mnemonic,
    indexes_from_mnemonic,
    mnemonic_from_indexes,
    normalize_mnemonic,
)
from seedtree.secret import MasterSeed

WORD_COUNTS = (12, 15, 18, 21, 24)
SEED_SIZE = 64
PBKDF2_ROUNDS = 2048


def _entropy_checksum(entropy: Entropy) -> Tuple[BinStr, BinStr]:
    "Return raw entropy and its raw checksum."

    bin_str_entropy = bin_str_entropy_from_entropy(entropy)
    digest = sha256(bytes_entropy_from_str(bin_str_entropy)).digest()
    checksum = format(int.from_bytes(digest, byteorder="big"), "b").zfill(256)
    return bin_str_entropy, checksum[: len(bin_str_entropy) // 32]


def mnemonic_from_entropy(
    entropy: Optional[Entropy] = None, lang: str = "en"
) -> Mnemonic:
    """Return the checksummed mnemonic sentence of the entropy.

    Entropy (raw 0/1 string, bytes-like, or integer)
    must be 128, 160, 192, 224, or 256 bits;
    if not provided, 128 bits of CSPRNG entropy are used.
    """

    if entropy is None or entropy == "":
        entropy = bin_str_entropy_from_random(128)
    bin_str_entropy, checksum = _entropy_checksum(entropy)
    base = WORDLISTS.language_length(lang)
    indexes = wordlist_indexes_from_bin_str_entropy(bin_str_entropy + checksum, base)
    return mnemonic_from_indexes(indexes, lang)


def entropy_from_mnemonic(mnemonic: Mnemonic, lang: str = "en") -> BinStr:
    """Return the raw entropy of the checksummed mnemonic sentence.

    Word count, words, and checksum are all verified:
    MnemonicValidationError is raised for any failure.
    """

    mnemonic = normalize_mnemonic(mnemonic)
    nwords = len(mnemonic.split())
    if nwords not in WORD_COUNTS:
        err_msg = f"invalid number of words: {nwords} instead of {WORD_COUNTS}"
        raise MnemonicValidationError(err_msg)

    indexes = indexes_from_mnemonic(mnemonic, lang)
    base = WORDLISTS.language_length(lang)
    cs_entropy = bin_str_entropy_from_wordlist_indexes(indexes, base)

    # ENT + ENT/32 bits
    bits = len(cs_entropy) * 32 // 33
    bin_str_entropy, checksum = _entropy_checksum(cs_entropy[:bits])
    if cs_entropy[bits:] != checksum:
        raise MnemonicValidationError("invalid checksum")

    return bin_str_entropy


def validate(mnemonic: Mnemonic, lang: str = "en") -> None:
    "Raise MnemonicValidationError if the mnemonic is not valid BIP39."

    entropy_from_mnemonic(mnemonic, lang)


def is_valid(mnemonic: Mnemonic, lang: str = "en") -> bool:
    try:
        validate(mnemonic, lang)
    except MnemonicValidationError:
        return False
    return True


def seed_from_mnemonic(
    mnemonic: Mnemonic, passphrase: str = "", lang: str = "en"
) -> MasterSeed:
    """Return the 64 bytes master seed from the BIP39 mnemonic sentence.

    The mnemonic is always verified first:
    an invalid one raises SeedConversionError,
    with the same message reported by validate.
    """

    try:
        validate(mnemonic, lang)
    except MnemonicValidationError as e:
        raise SeedConversionError(str(e)) from e

    password = normalize_mnemonic(mnemonic).encode("utf-8")
    salt = unicodedata.normalize("NFKD", "mnemonic" + passphrase).encode("utf-8")
    seed = pbkdf2_hmac("sha512", password, salt, PBKDF2_ROUNDS, SEED_SIZE)
    return MasterSeed(seed)
