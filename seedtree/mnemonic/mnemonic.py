#!/usr/bin/env python3

# Copyright (C) The seedtree developers
#
# This file is part of seedtree. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of seedtree including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"Word-lists, and mnemonic sentences from/to word-list indexes."

import unicodedata
from typing import Dict, List, Optional, Sequence

from mnemonic import Mnemonic as _ReferenceWordlist

from seedtree.exceptions import MnemonicValidationError, SeedTreeValueError

WordList = List[str]

Mnemonic = str


class WordLists:
    """Lazily loaded word-lists, keyed by language code.

    The BIP39 word-lists are the ones shipped with the reference
    implementation (the mnemonic package), e.g.:

    * *en*: https://github.com/bitcoin/bips/blob/master/bip-0039/english.txt
    * *it*: https://github.com/bitcoin/bips/blob/master/bip-0039/italian.txt

    More word-lists can be added from file using the load_lang method.

    Word-lists are loaded only if needed and only once.
    """

    def __init__(self) -> None:

        self.language_names = {
            "en": "english",
            "it": "italian",
            "es": "spanish",
            "fr": "french",
            "cs": "czech",
            "pt": "portuguese",
            "ja": "japanese",
            "ko": "korean",
            "zh_hans": "chinese_simplified",
            "zh_hant": "chinese_traditional",
        }
        self.language_files: Dict[str, str] = {}
        self.languages = list(self.language_names)

        self._wordlist: Dict[str, WordList] = {}
        self._word_index: Dict[str, Dict[str, int]] = {}

    def load_lang(self, lang: str, filename: Optional[str] = None) -> None:
        """Make the word-list of the language available.

        Languages other than the BIP39 ones need the word-list file,
        one word per line.
        """

        new_language = lang not in self.languages
        if new_language and filename is None:
            raise SeedTreeValueError(f"Missing file for language '{lang}'")

        # language has already been loaded
        if lang in self._wordlist:
            return

        if new_language:
            filename_ = filename
        else:
            filename_ = self.language_files.get(lang)
        if filename_ is not None:
            with open(filename_, "r", encoding="utf-8") as file_:
                words = [line.strip() for line in file_ if line.strip()]
        else:
            words = list(_ReferenceWordlist(self.language_names[lang]).wordlist)

        nwords = len(words)
        # http://www.graphics.stanford.edu/~seander/bithacks.html
        if nwords == 0 or nwords & (nwords - 1) != 0:
            err_msg = f"invalid wordlist length: {nwords}, not a power of two"
            raise SeedTreeValueError(err_msg)

        # registered only once its word-list is known to be valid
        if new_language:
            self.languages.append(lang)
            if filename_ is not None:
                self.language_files[lang] = filename_
        self._wordlist[lang] = words
        # lookup by NFKD normalized word, as mnemonics are normalized too
        self._word_index[lang] = {
            unicodedata.normalize("NFKD", word): i for i, word in enumerate(words)
        }

    def wordlist(self, lang: str) -> WordList:
        """Return the language word-list."""

        self.load_lang(lang)
        return self._wordlist[lang]

    def word_index(self, lang: str) -> Dict[str, int]:
        """Return the (NFKD normalized) word to word-list index mapping."""

        self.load_lang(lang)
        return self._word_index[lang]

    def language_length(self, lang: str) -> int:
        """Return the number of words in the language word-list."""

        return len(self.wordlist(lang))


# singleton
WORDLISTS = WordLists()


def normalize_mnemonic(mnemonic: Mnemonic) -> Mnemonic:
    "Return the NFKD normalized mnemonic, with single spaces between words."

    if not isinstance(mnemonic, str):
        raise MnemonicValidationError("mnemonic must be a text string")
    return " ".join(unicodedata.normalize("NFKD", mnemonic).split())


def mnemonic_from_indexes(indexes: Sequence[int], lang: str) -> Mnemonic:
    "Return the mnemonic sentence made of the indexed words."

    wordlist = WORDLISTS.wordlist(lang)
    return " ".join(wordlist[i] for i in indexes)


def indexes_from_mnemonic(mnemonic: Mnemonic, lang: str) -> List[int]:
    """Return the word-list indexes of the mnemonic words.

    Unknown words are reported by position only,
    as mnemonic words are secret.
    """

    words = normalize_mnemonic(mnemonic).split()
    word_index = WORDLISTS.word_index(lang)
    indexes = []
    for position, word in enumerate(words, 1):
        index = word_index.get(word)
        if index is None:
            raise MnemonicValidationError(f"unknown word at position {position}")
        indexes.append(index)
    return indexes
