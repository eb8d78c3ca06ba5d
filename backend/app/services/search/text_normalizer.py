"""
Singular/plural folding for keyword search.

A deliberately small rule table, not a linguistic stemmer. It covers the
regular English forms that appear in service descriptions and keywords:

- "-ies" <-> "-y" after a consonant (emergencies / emergency)
- "-es" after sibilants (classes, lunches, boxes) and after "o" (potatoes, tomatoes)
- plain "-s" (services / service)

Words ending in "ss", "us", or "is" are treated as already singular.
"""

from __future__ import annotations

from functools import lru_cache
import re
from typing import FrozenSet, Tuple

VOWELS = frozenset("aeiou")
SIBILANT_PLURAL_SUFFIXES = ("sses", "ches", "shes", "xes", "zes")
SIBILANT_SUFFIXES = ("s", "x", "z", "ch", "sh")
SINGULAR_S_SUFFIXES = ("ss", "us", "is")
MIN_FOLD_LENGTH = 4

_WORD_SPLIT = re.compile(r"\s+")


def singularize(word: str) -> str:
    if len(word) < MIN_FOLD_LENGTH:
        return word
    if word.endswith("ies") and len(word) > MIN_FOLD_LENGTH:
        return word[:-3] + "y"
    if word.endswith(SIBILANT_PLURAL_SUFFIXES):
        return word[:-2]
    if word.endswith("oes") and len(word) > MIN_FOLD_LENGTH + 1:
        return word[:-2]
    if word.endswith(SINGULAR_S_SUFFIXES):
        return word
    if word.endswith("s"):
        return word[:-1]
    return word


def pluralize(word: str) -> str:
    if len(word) >= 2 and word.endswith("y") and word[-2] not in VOWELS:
        return word[:-1] + "ies"
    if word.endswith(SIBILANT_SUFFIXES):
        return word + "es"
    return word + "s"


@lru_cache(maxsize=4096)
def variants(term: str) -> FrozenSet[str]:
    """Return the lowercased term with its singular and plural forms."""
    word = term.strip().lower()
    if not word:
        return frozenset()
    singular = singularize(word)
    forms = {word, singular, pluralize(singular)}
    if word.endswith("oes") and singular != word:
        # canoes -> canoe as well as potatoes -> potato
        forms.add(word[:-1])
    return frozenset(forms)


def split_terms(text: str) -> Tuple[str, ...]:
    """Split free text on whitespace into lowercased words."""
    return tuple(w for w in _WORD_SPLIT.split(text.strip().lower()) if w)
