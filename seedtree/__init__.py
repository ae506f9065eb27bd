#!/usr/bin/env python3

# Copyright (C) The seedtree developers
#
# This file is part of seedtree. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of seedtree including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"__init__ module for the seedtree package."

import logging

name = "seedtree"
__version__ = "2026.10.0"
__author__ = "The seedtree developers"
__author_email__ = "devs@seedtree.dev"
__copyright__ = "Copyright (C) 2026 The seedtree developers"
__license__ = "MIT License"

logging.getLogger(__name__).addHandler(logging.NullHandler())
