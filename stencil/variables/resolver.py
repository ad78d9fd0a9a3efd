"""
Variable resolution against execution scopes.

Resolves dotted paths like 'user.name', 'items.0' or 'stencil.version'.
The first segment is looked up in the scope's private store, then its public
store; further segments walk into stores, mappings, sequences and object
attributes.
"""

from collections.abc import Mapping, Sequence
from typing import Any, List, Optional, Set, Tuple

from ..context.execution import ExecutionScope
from ..context.stores import Store
from ..template import Token


class VariableResolver:
    """
    Resolves variable paths through an ExecutionScope.

    A miss is not an error: resolve() returns (None, False) and records the
    path in undefined_vars, leaving the policy to the caller.
    """

    def __init__(self):
        """Initialize the resolver."""
        self.undefined_vars: Set[str] = set()

    def resolve(self, scope: ExecutionScope, var_path: str) -> Tuple[Any, bool]:
        """
        Resolve a dotted variable path.

        Args:
            scope: Scope to resolve against
            var_path: Path such as 'user.name'

        Returns:
            (value, True) when resolved, (None, False) otherwise
        """
        parts = var_path.split('.')
        value, found = self._lookup_root(scope, parts[0])
        if found:
            value, found = self._resolve_path(value, parts[1:])

        if not found:
            self.undefined_vars.add(var_path)
            return None, False
        return value, True

    def require(self, scope: ExecutionScope, var_path: str, token: Optional[Token] = None) -> Any:
        """
        Resolve a path, raising an execution error if it is undefined.

        Raises:
            TemplateError: If the path cannot be resolved
        """
        value, found = self.resolve(scope, var_path)
        if not found:
            raise scope.error(f"undefined variable '{var_path}'", token)
        return value

    def reset(self) -> None:
        """Forget previously recorded undefined paths."""
        self.undefined_vars.clear()

    def _lookup_root(self, scope: ExecutionScope, name: str) -> Tuple[Any, bool]:
        # Engine/tag values shadow user data
        value, found = scope.private.get_value(name)
        if not found:
            value, found = scope.public.get_value(name)
        return value, found

    def _resolve_path(self, obj: Any, path: List[str]) -> Tuple[Any, bool]:
        """
        Walk the remaining path segments.

        Args:
            obj: Object to traverse
            path: Path parts to follow

        Returns:
            (value, found)
        """
        current = obj
        for part in path:
            if not part:
                return None, False

            if isinstance(current, Store):
                current, found = current.get_value(part)
                if not found:
                    return None, False
            elif isinstance(current, Mapping):
                if part not in current:
                    return None, False
                current = current[part]
            elif isinstance(current, Sequence) and not isinstance(current, (str, bytes)):
                if not (part.isascii() and part.isdecimal()):
                    return None, False
                index = int(part)
                if index >= len(current):
                    return None, False
                current = current[index]
            elif not part.startswith('_') and hasattr(current, part):
                current = getattr(current, part)
            else:
                return None, False
        return current, True
