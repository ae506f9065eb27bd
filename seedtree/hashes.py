#!/usr/bin/env python3

# Copyright (C) The seedtree developers
#
# This file is part of seedtree. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of seedtree including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Hash based helper functions."""

import hashlib

from seedtree.alias import Octets
from seedtree.exceptions import SeedTreeTypeError
from seedtree.utils import bytes_from_octets

HASH_SIZE = 32


def sha3_256(octets: Octets) -> bytes:
    """Return the SHA3-256 of the input octet sequence."""
    octets = bytes_from_octets(octets)
    return hashlib.sha3_256(octets).digest()


def content_id(content: bytes) -> bytes:
    """Return the identifier of a content, i.e. SHA3-256 of its raw bytes.

    Contrary to sha3_256, a string input is not interpreted as hex-string:
    only bytes-like content is accepted.
    """
    if isinstance(content, str):
        raise SeedTreeTypeError("content must be bytes-like, not str")
    return hashlib.sha3_256(bytes(content)).digest()
