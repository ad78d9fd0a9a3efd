"""
Stencil - execution scopes and variable resolution for template rendering.

Provides the layered stores a template body resolves names against and the
per-render execution scope that tags and filters receive.
"""

__version__ = "0.4.0"

from .exceptions import TemplateError, ValidationError, ConfigError, ContextLoaderError
from .config import RenderConfig
from .template import Token, Template, TemplateSet
from .context import (
    Store,
    FlatStore,
    ScopeView,
    Context,
    merge_stores,
    unique_identifiers,
    check_identifiers,
    ExecutionScope,
)
from .loader import ContextLoader
from .variables import VariableResolver

__all__ = [
    "__version__",
    "TemplateError",
    "ValidationError",
    "ConfigError",
    "ContextLoaderError",
    "RenderConfig",
    "Token",
    "Template",
    "TemplateSet",
    "Store",
    "FlatStore",
    "ScopeView",
    "Context",
    "merge_stores",
    "unique_identifiers",
    "check_identifiers",
    "ExecutionScope",
    "ContextLoader",
    "VariableResolver",
]
