"""
Execution scopes.

An ExecutionScope holds everything a tag or filter needs about the current
rendering state:

- public: the caller's data, behind an empty overlay so writes made during
  rendering never reach the caller's store. One view is shared by the whole
  render tree.
- private: engine and tag bookkeeping (e.g. loop counters). Each child
  scope layers a fresh overlay on its parent's private store, so child
  writes stay invisible to the parent.
- shared: one store for the whole render tree, for data tags exchange
  with each other.

Tags entering a nested construct (loop body, block, include, macro call)
derive a child with ExecutionScope.new_child().
"""

import logging
from typing import Any, Optional

from .. import __version__
from ..config import RenderConfig
from ..exceptions import TemplateError, SENDER_EXECUTION
from ..template import Template, Token
from .stores import FlatStore, ScopeView, Store, as_store


logger = logging.getLogger(__name__)

# Reserved private key exposing engine metadata, e.g. {{ stencil.version }}
META_KEY = "stencil"


def _meta_store() -> FlatStore:
    return FlatStore({"version": __version__})


class ExecutionScope:
    """Per-render (or per nested construct) execution state."""

    def __init__(
        self,
        template: Template,
        public: Store,
        private: Store,
        shared: Store,
        autoescape: bool,
        config: RenderConfig,
        macro_depth: int = 0
    ):
        if template is None:
            raise ValueError("ExecutionScope requires a template")
        self.template = template
        self.public = public
        self.private = private
        self.shared = shared
        self.autoescape = autoescape
        self.config = config
        self.macro_depth = macro_depth

    @classmethod
    def create(
        cls,
        template: Template,
        data: Any = None,
        config: Optional[RenderConfig] = None,
        shared: Optional[Store] = None
    ) -> "ExecutionScope":
        """
        Build the root scope of a render tree.

        Args:
            template: Owning template
            data: User data (Store, dict or None); never written to
            config: Render configuration (defaults to RenderConfig())
            shared: Store shared by the whole render tree (fresh if omitted)

        Returns:
            Root ExecutionScope
        """
        config = config or RenderConfig()
        scope = cls(
            template=template,
            public=ScopeView(as_store(data), FlatStore()),
            private=FlatStore({META_KEY: _meta_store()}),
            shared=shared if shared is not None else FlatStore(),
            autoescape=config.autoescape,
            config=config,
        )
        logger.debug(f"Created root scope for template '{template.name}' (autoescape={scope.autoescape})")
        return scope

    @classmethod
    def new_child(cls, parent: "ExecutionScope", carry_macro_depth: bool = False) -> "ExecutionScope":
        """
        Derive a scope for a nested construct.

        Public and shared are the parent's objects; private gets a fresh
        overlay on top of the parent's private store. The macro depth
        restarts at zero unless carry_macro_depth is set.
        """
        return cls(
            template=parent.template,
            public=parent.public,
            private=ScopeView(parent.private, FlatStore()),
            shared=parent.shared,
            autoescape=parent.autoescape,
            config=parent.config,
            macro_depth=parent.macro_depth if carry_macro_depth else 0,
        )

    def child(self, carry_macro_depth: bool = False) -> "ExecutionScope":
        return type(self).new_child(self, carry_macro_depth=carry_macro_depth)

    def enter_macro(self, token: Optional[Token] = None) -> "ExecutionScope":
        """
        Derive the scope for a macro invocation, one level deeper.

        Raises:
            TemplateError: If the configured maximum macro depth is exceeded
        """
        depth = self.macro_depth + 1
        if depth > self.config.max_macro_depth:
            raise self.error(
                f"maximum recursive macro call depth reached (max is {self.config.max_macro_depth})",
                token
            )
        scope = self.child()
        scope.macro_depth = depth
        return scope

    @property
    def depth(self) -> int:
        """Nesting depth; 0 for a root scope."""
        if isinstance(self.private, ScopeView):
            return self.private.depth
        return 0

    def error(self, message: str, token: Optional[Token] = None) -> TemplateError:
        """Build an execution error for this scope's template."""
        return self._build_error(Exception(message), token)

    def wrap_error(self, cause: BaseException, token: Optional[Token] = None) -> TemplateError:
        """
        Wrap an underlying error as an execution error.

        Location comes from the token when given; otherwise the template name
        is used as filename and line/column stay 0.
        """
        error = self._build_error(cause, token)
        error.__cause__ = cause
        return error

    def _build_error(self, orig_error: BaseException, token: Optional[Token]) -> TemplateError:
        filename = self.template.name
        line = col = 0
        if token is not None:
            filename = token.filename
            line = token.line
            col = token.col

        return TemplateError(
            orig_error,
            sender=SENDER_EXECUTION,
            template=self.template,
            filename=filename,
            line=line,
            column=col,
            token=token,
        )

    def logf(self, format: str, *args: Any) -> None:
        """Forward a diagnostic line to the template set's sink."""
        self.template.template_set.logf(format, *args)

    def __repr__(self) -> str:
        return (
            f"ExecutionScope(template={self.template.name!r}, depth={self.depth}, "
            f"macro_depth={self.macro_depth}, autoescape={self.autoescape})"
        )
