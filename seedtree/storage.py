#!/usr/bin/env python3

# Copyright (C) The seedtree developers
#
# This file is part of seedtree. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of seedtree including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Secure-storage capability.

seedtree does not persist anything: the master seed and the mnemonic
are kept by a secure-storage backend (OS keychain, hardware module, etc.)
that is provided by the caller and injected where needed,
e.g. into seedtree.wallet.Wallet.

Retrieval returns None when nothing has been stored yet,
as an uninitialized wallet is a normal state, not a failure;
backends raise SecretStorageError for genuine failures.
"""

from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class SecretStore(Protocol):
    def store_seed(self, seed: bytes) -> None:
        ...

    def retrieve_seed(self) -> Optional[bytes]:
        ...

    def store_mnemonic(self, mnemonic: str) -> None:
        ...

    def retrieve_mnemonic(self) -> Optional[str]:
        ...
