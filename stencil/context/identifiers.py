"""Identifier validation for names loaded into a context."""

import re
from typing import Any, Optional, Sequence

from ..exceptions import ValidationError


IDENTIFIER_PATTERN = re.compile(r'[a-zA-Z0-9_]+')


def is_identifier(name: Any) -> bool:
    """Check a single name against the identifier pattern."""
    return isinstance(name, str) and IDENTIFIER_PATTERN.fullmatch(name) is not None


def check_identifiers(identifiers: Sequence[Any]) -> Optional[ValidationError]:
    """
    Validate that every name is a well-formed context identifier.

    Stops at the first invalid name.

    Args:
        identifiers: Candidate names

    Returns:
        ValidationError for the first offending name, or None if all are valid
    """
    for name in identifiers:
        if not is_identifier(name):
            return ValidationError(
                name,
                ValueError(f"context-key '{name}' is not a valid identifier"),
            )
    return None
