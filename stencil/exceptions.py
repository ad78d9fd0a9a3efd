"""Stencil exceptions."""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

# Sender tags identifying the stage that produced an error
SENDER_EXECUTION = "execution"
SENDER_IDENTIFIERS = "check_identifiers"
SENDER_LOADER = "loader"


class TemplateError(Exception):
    """Structured error raised (or returned) while rendering a template.

    Carries the owning template, best-effort source location, the token the
    error refers to (if any), a sender tag naming the stage that produced it,
    and the original error.
    """

    def __init__(
        self,
        orig_error: BaseException,
        sender: str = "",
        template: Optional[Any] = None,
        filename: str = "",
        line: int = 0,
        column: int = 0,
        token: Optional[Any] = None,
    ):
        self.orig_error = orig_error
        self.sender = sender
        self.template = template
        self.filename = filename
        self.line = line
        self.column = column
        self.token = token
        super().__init__(str(orig_error))

    def __str__(self) -> str:
        return self._format()

    @property
    def message(self) -> str:
        return str(self.orig_error)

    def _format(self) -> str:
        s = "[Error"
        if self.sender:
            s += f" (where: {self.sender})"
        if self.filename:
            s += f" in {self.filename}"
        if self.line > 0:
            s += f" | Line {self.line} Col {self.column}"
            if self.token is not None and getattr(self.token, "val", ""):
                s += f" near '{self.token.val}'"
        return f"{s}] {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for logging and state dumps."""
        result: Dict[str, Any] = {
            "sender": self.sender,
            "filename": self.filename,
            "line": self.line,
            "column": self.column,
            "message": self.message,
        }
        if self.template is not None:
            result["template"] = self.template.name
        return result


class ValidationError(TemplateError):
    """Raised (or returned) when a name is not a valid context identifier."""

    def __init__(self, name: Any, orig_error: BaseException):
        self.name = name
        super().__init__(orig_error, sender=SENDER_IDENTIFIERS)


class ContextLoaderError(TemplateError):
    """Raised when a context data file cannot be read or parsed."""

    def __init__(self, filename: str, orig_error: BaseException):
        super().__init__(orig_error, sender=SENDER_LOADER, filename=filename)


@dataclass
class ConfigIssue:
    """Single configuration problem."""
    message: str
    key: str = ""


class ConfigError(Exception):
    """Raised when a render configuration fails validation.

    All problems found are collected before raising so callers can report
    them together.
    """

    def __init__(self, issues: List[ConfigIssue]):
        self.issues = issues

        messages = []
        for issue in issues:
            messages.append(f"Config error: {issue.message}")

        super().__init__("\n".join(messages))
