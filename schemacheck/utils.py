# File: schemacheck/utils.py
"""
SchemaCheck - Name Helpers
===========================
Small, pure string predicates shared by the validation rules.

The singular/plural heuristics are cached with a bounded ``@lru_cache``
because every validation pass (re-run on each editor keystroke) compares
the same handful of model names again and again.

No external dependencies beyond the Python standard library.
"""

from __future__ import annotations

import functools
import logging
import re
from typing import Callable, Dict, FrozenSet, Hashable, Iterable, List, Optional, Tuple, TypeVar

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("schemacheck.utils")

T = TypeVar("T")
K = TypeVar("K", bound=Hashable)

# ---------------------------------------------------------------------------
# Pre-compiled regex patterns
# ---------------------------------------------------------------------------

_LEADING_DIGIT_RE: re.Pattern[str] = re.compile(r"^[0-9]")

# Entries kept by the to_singular cache.
_SINGULAR_CACHE_SIZE: int = 1024

# Irregular plurals that show up in database schemas (plural -> singular)
_IRREGULAR_SINGULARS: Dict[str, str] = {
    "people": "person",
    "children": "child",
    "men": "man",
    "women": "woman",
    "mice": "mouse",
    "geese": "goose",
    "teeth": "tooth",
    "feet": "foot",
    "data": "datum",
    "indices": "index",
    "matrices": "matrix",
    "vertices": "vertex",
    "axes": "axis",
    "crises": "crisis",
    "analyses": "analysis",
    "statuses": "status",
    "addresses": "address",
    "buses": "bus",
}

_IRREGULAR_SINGULAR_FORMS: FrozenSet[str] = frozenset(_IRREGULAR_SINGULARS.values())

# Endings that are already singular and must not lose their trailing "s"
_SINGULAR_S_ENDINGS: Tuple[str, ...] = ("ss", "us", "is")

# Endings that pluralise with "es"
_ES_PLURAL_ENDINGS: Tuple[str, ...] = ("sses", "shes", "ches", "xes", "zes")


# ---------------------------------------------------------------------------
# Singular / plural
# ---------------------------------------------------------------------------


@functools.lru_cache(maxsize=_SINGULAR_CACHE_SIZE)
def to_singular(name: str) -> str:
    """
    Naive English singularisation used to detect "Order" / "Orders" clashes.

    Rules, first match wins:
        1. irregular plurals (``people`` -> ``person``);
        2. known singulars and words ending in ``ss``/``us``/``is`` are kept;
        3. ``ies`` -> ``y`` (``Categories`` -> ``Category``);
        4. ``sses``/``shes``/``ches``/``xes``/``zes`` drop ``es``;
        5. any other trailing ``s`` is dropped.

    It is a heuristic, not a grammar: ``Series`` becomes ``Sery`` and
    ``Heroes`` becomes ``Heroe``.  Casing of the input is preserved.

        >>> to_singular("Orders")
        'Order'
        >>> to_singular("Boxes")
        'Box'
        >>> to_singular("Address")
        'Address'
    """
    if not name:
        return ""

    lower: str = name.lower()

    if lower in _IRREGULAR_SINGULARS:
        singular: str = _IRREGULAR_SINGULARS[lower]
        if name[0].isupper():
            return singular[0].upper() + singular[1:]
        return singular

    if lower in _IRREGULAR_SINGULAR_FORMS or lower.endswith(_SINGULAR_S_ENDINGS):
        return name
    if lower.endswith("ies") and len(name) > 3:
        return name[:-3] + ("Y" if name[-3].isupper() else "y")
    if lower.endswith(_ES_PLURAL_ENDINGS):
        return name[:-2]
    if lower.endswith("s") and len(name) > 1:
        return name[:-1]

    return name


# ---------------------------------------------------------------------------
# Name predicates
# ---------------------------------------------------------------------------


def name_empty(name: Optional[str]) -> bool:
    """True for ``None``, ``""`` and whitespace-only names."""
    return not name or not name.strip()


def name_starts_with_number(name: Optional[str]) -> bool:
    return bool(name) and _LEADING_DIGIT_RE.match(name) is not None


def name_longer_than(name: Optional[str], max_length: int) -> bool:
    return bool(name) and len(name) > max_length


def names_eq(a: Optional[str], b: Optional[str]) -> bool:
    """Case-insensitive equality."""
    return (a or "").lower() == (b or "").lower()


def names_eq_singular(a: Optional[str], b: Optional[str]) -> bool:
    """Case-insensitive equality after singularising both sides."""
    return to_singular(a or "").lower() == to_singular(b or "").lower()


# ---------------------------------------------------------------------------
# Collections
# ---------------------------------------------------------------------------


def array_to_lookup(items: Iterable[T], key: Callable[[T], K]) -> Dict[K, T]:
    """
    Index ``items`` by ``key`` in a single O(n) pass.

    Later items win on key collisions.
    """
    lookup: Dict[K, T] = {}
    for item in items:
        lookup[key(item)] = item
    return lookup


__all__: List[str] = [
    "to_singular",
    "name_empty",
    "name_starts_with_number",
    "name_longer_than",
    "names_eq",
    "names_eq_singular",
    "array_to_lookup",
]
