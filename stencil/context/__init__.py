"""
Context module.
Layered stores, identifier validation and execution scopes.
"""

from .identifiers import check_identifiers, is_identifier
from .stores import Store, FlatStore, ScopeView, Context, merge_stores, unique_identifiers
from .execution import ExecutionScope, META_KEY

__all__ = [
    "check_identifiers",
    "is_identifier",
    "Store",
    "FlatStore",
    "ScopeView",
    "Context",
    "merge_stores",
    "unique_identifiers",
    "ExecutionScope",
    "META_KEY",
]
