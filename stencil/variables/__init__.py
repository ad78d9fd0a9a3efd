"""
Variable resolution module.
Resolves dotted variable paths against an execution scope.
"""

from .resolver import VariableResolver

__all__ = ['VariableResolver']
