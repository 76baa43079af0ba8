# File: gormgen/naming.py
"""
gormgen - Naming Transformer
============================
Pure conversions between schema identifiers (snake_case, as stored in the
database) and the two Go identifier conventions used by the generated code:

    user_profile  ──to_type_name──────▶  UserProfile   (exported type name)
    user_profile  ──to_variable_name──▶  userProfile   (local variable name)
    UserProfile   ──to_delimited──────▶  user_profile  (file / route names)

All three layers (record, service, router) derive their names from these
functions, so a table name always yields the same Go names everywhere.

Known limitation: ``to_delimited`` is not an exact inverse.  Consecutive
capitals split letter by letter (``HTTPCode`` → ``h_t_t_p_code``) and
identifiers mixing ``_`` with capitals keep both (``User_Name`` →
``user__name``).
"""

from __future__ import annotations

import functools
import logging
from typing import List

logger: logging.Logger = logging.getLogger("gormgen.naming")

DELIMITER: str = "_"


@functools.lru_cache(maxsize=None)
def to_type_name(identifier: str) -> str:
    """
    Convert a snake_case identifier to an UpperCamel Go type name.

    Examples:
        >>> to_type_name("user_profile")
        'UserProfile'
        >>> to_type_name("USERS")
        'Users'
        >>> to_type_name("")
        ''
    """
    parts: List[str] = identifier.split(DELIMITER)
    return "".join(part[:1].upper() + part[1:].lower() for part in parts)


@functools.lru_cache(maxsize=None)
def to_variable_name(identifier: str) -> str:
    """
    Convert a snake_case identifier to a lowerCamel Go variable name.

    Examples:
        >>> to_variable_name("user_profile")
        'userProfile'
    """
    type_name: str = to_type_name(identifier)
    return type_name[:1].lower() + type_name[1:]


@functools.lru_cache(maxsize=None)
def to_delimited(identifier: str) -> str:
    """
    Insert ``_`` before every capital letter except the first, then lower-case.

    Examples:
        >>> to_delimited("UserProfile")
        'user_profile'
        >>> to_delimited("user_profile")
        'user_profile'
    """
    chars: List[str] = []
    for index, char in enumerate(identifier):
        if index > 0 and "A" <= char <= "Z":
            chars.append(DELIMITER)
        chars.append(char)
    return "".join(chars).lower()


__all__: List[str] = [
    "DELIMITER",
    "to_type_name",
    "to_variable_name",
    "to_delimited",
]
