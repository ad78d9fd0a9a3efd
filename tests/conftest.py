"""Shared fixtures for stencil tests."""

import pytest

from stencil.context import Context, ExecutionScope
from stencil.template import Template, TemplateSet


@pytest.fixture
def template_set():
    """Template set with diagnostics enabled."""
    return TemplateSet("test", debug=True)


@pytest.fixture
def template(template_set):
    """Template owned by the debug template set."""
    return Template("index.html", template_set)


@pytest.fixture
def user_data():
    """Caller-supplied data for a render."""
    return Context({
        "user": {"name": "alice", "roles": ["admin", "dev"]},
        "title": "Dashboard",
    })


@pytest.fixture
def root_scope(template, user_data):
    """Root execution scope over the user data."""
    return ExecutionScope.create(template, user_data)
