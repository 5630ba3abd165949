"""
Canonical parsing of free text into closed enumerations.

One lookup for every enum: matches member names and string values
case-insensitively after trimming, and returns None on a miss.
"""

from enum import Enum
from functools import lru_cache
from typing import Optional, TypeVar

E = TypeVar("E", bound=Enum)


@lru_cache(maxsize=None)
def _index(enum_cls: type[Enum]) -> dict[str, Enum]:
    index: dict[str, Enum] = {}
    for member in enum_cls:
        index[member.name.casefold()] = member
        if isinstance(member.value, str):
            index.setdefault(member.value.casefold(), member)
    return index


def parse_enum(enum_cls: type[E], value: Optional[str]) -> Optional[E]:
    """
    Parse ``value`` into a member of ``enum_cls``.

    Args:
        enum_cls: The enumeration to look up
        value: Free text, e.g. from a request body or token claim

    Returns:
        The matching member, or None if nothing matches
    """
    if value is None:
        return None
    return _index(enum_cls).get(value.strip().casefold())
