#!/usr/bin/env python3

# Copyright (C) The seedtree developers
#
# This file is part of seedtree. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of seedtree including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Module seedtree.mnemonic."""

from seedtree.mnemonic.bip39 import (
    entropy_from_mnemonic,
    is_valid,
    mnemonic_from_entropy,
    seed_from_mnemonic,
    validate,
)
from seedtree.mnemonic.entropy import (
    BinStr,
    Entropy,
    bin_str_entropy_from_bytes,
    bin_str_entropy_from_entropy,
    bin_str_entropy_from_int,
    bin_str_entropy_from_random,
    bin_str_entropy_from_str,
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

__all__ = [
    "entropy_from_mnemonic",
    "is_valid",
    "mnemonic_from_entropy",
    "seed_from_mnemonic",
    "validate",
    "BinStr",
    "Entropy",
    "bin_str_entropy_from_bytes",
    "bin_str_entropy_from_entropy",
    "bin_str_entropy_from_int",
    "bin_str_entropy_from_random",
    "bin_str_entropy_from_str",
    "bin_str_entropy_from_wordlist_indexes",
    "bytes_entropy_from_str",
    "wordlist_indexes_from_bin_str_entropy",
    "Mnemonic",
    "indexes_from_mnemonic",
    "mnemonic_from_indexes",
    "normalize_mnemonic",
    "WORDLISTS",
]
