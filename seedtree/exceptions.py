#!/usr/bin/env python3

# Copyright (C) The seedtree developers
#
# This file is part of seedtree. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of seedtree including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Exception classes.

The three base classes are only meant to discriminate between Exceptions
being raised by seedtree from those raised by other codebase.
Users are usually better off just dealing with the regular
ValueError, TypeError, and RuntimeError
from which the seedtree versions are derived.

The other classes name the failure kinds of the key hierarchy.
Their messages never include secret material.
"""


class SeedTreeValueError(ValueError):
    pass


class SeedTreeTypeError(TypeError):
    pass


class SeedTreeRuntimeError(RuntimeError):
    pass


class MnemonicValidationError(SeedTreeValueError):
    "Malformed mnemonic: bad word count, unknown word, or bad checksum."


class SeedConversionError(MnemonicValidationError):
    "An invalid mnemonic could not be converted to a seed."


class EncryptionError(SeedTreeRuntimeError):
    pass


class DecryptionError(SeedTreeValueError):
    """Authenticated decryption failed.

    Wrong key, wrong nonce, wrong associated data, tampered or truncated
    ciphertext all end up here, with the very same message.
    """


class SignatureParsingError(SeedTreeValueError):
    "Malformed public key or signature."


class SignatureVerificationError(SeedTreeRuntimeError):
    "Well-formed signature that does not match message and public key."


class KeyExchangeError(SeedTreeRuntimeError):
    pass


class KeyDerivationError(SeedTreeRuntimeError):
    pass


class SecretStorageError(SeedTreeRuntimeError):
    pass


class WalletNotInitializedError(SeedTreeRuntimeError):
    pass
