#!/usr/bin/env python3

# Copyright (C) The seedtree developers
#
# This file is part of seedtree. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of seedtree including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Aliases

mypy aliases, documenting also coding input conventions.
"""

from typing import Union

# Octets are a sequence of eight-bit bytes or a hex-string (not text string)
#
# hex-strings are strings that can be converted to bytes using bytes.fromhex,
# e.g.:
# "d75a980182b10ab7d54bfed3c964073a0ee172f3daa62325af021a68f707511a"
# "d75a9801 82b10ab7 d54bfed3 c964073a 0ee172f3 daa62325 af021a68 f707511a"
#
# use seedtree.utils.bytes_from_octets to convert Octets to bytes
#
# Octets are used for public keys (32 bytes), signatures (64 bytes),
# nonces (12 bytes), seeds, raw secret key material, etc.
Octets = Union[bytes, str]

# bytes or text string (not hex-string)
#
# this is for string that can be
# converted to bytes using encode()
# e.g. a message to be signed or a derivation purpose label
#    if isinstance(msg, str):
#        msg = msg.encode()
String = Union[bytes, str]
