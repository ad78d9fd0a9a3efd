"""
Template, template set and token types seen by execution scopes.

Lexing, parsing and compiling live elsewhere; these classes carry only what
scopes need for diagnostics: a template's name, its owning set (which hosts
the logging sink), and token source positions.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Optional


logger = logging.getLogger(__name__)


@dataclass
class Token:
    """Lexical position of a piece of template source."""
    filename: str
    line: int
    col: int
    val: str = ""


class TemplateSet:
    """
    Group of templates sharing configuration and a diagnostics sink.

    logf() output is only emitted when the set is in debug mode.
    """

    def __init__(self, name: str, debug: bool = False, log: Optional[logging.Logger] = None):
        """
        Initialize template set.

        Args:
            name: Set name, used as log line prefix
            debug: Emit logf() diagnostics
            log: Logger receiving diagnostics (defaults to this module's logger)
        """
        self.name = name
        self.debug = debug
        self.log = log or logger

    def logf(self, format: str, *args: Any) -> None:
        """Emit a printf-style diagnostic line if debug is enabled."""
        if not self.debug:
            return
        message = format % args if args else format
        self.log.info(f"[template set: {self.name}] {message}")

    def __repr__(self) -> str:
        return f"TemplateSet({self.name!r}, debug={self.debug})"


DEFAULT_SET = TemplateSet("default")


@dataclass(eq=False)
class Template:
    """A compiled template as seen by execution scopes."""
    name: str
    template_set: TemplateSet = field(default=DEFAULT_SET)
