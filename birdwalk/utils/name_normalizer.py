"""Species name normalization for Wikipedia title lookups.

English Wikipedia titles bird articles in sentence case: only the first
word is capitalized ("Common raven", "Lesser scaup", "Corvus corax").
Field guides and the eBird taxonomy use title case for common names
("Common Raven"), and a direct title query with the wrong case misses the
page.  ``normalize_species_name`` folds a name into the encyclopedia's
convention before it is used as a lookup title or as a cache key.

The folding is deliberately simple: words are split on single spaces and
no trimming, Unicode normalization or punctuation handling is applied.
Names with meaningful internal capitals are mis-cased; the image provider
retries the untouched original string to cover that case.
"""

from __future__ import annotations


def normalize_species_name(name: str) -> str:
    """Convert *name* to Wikipedia sentence case.

    The first word gets an upper-case first character and a lower-case
    remainder; every later word is lower-cased entirely.

    >>> normalize_species_name("Common Raven")
    'Common raven'
    >>> normalize_species_name("LESSER SCAUP")
    'Lesser scaup'
    """
    words = name.split(" ")
    folded = [
        word[:1].upper() + word[1:].lower() if index == 0 else word.lower()
        for index, word in enumerate(words)
    ]
    return " ".join(folded)


def candidate_names(species_name: str | None, scientific_name: str | None = None) -> list[str]:
    """Return the lookup candidates for a bird in priority order.

    The scientific name comes first because it is unambiguous on Wikipedia;
    the common name follows.  Missing or empty names are dropped.
    """
    return [name for name in (scientific_name, species_name) if name]
