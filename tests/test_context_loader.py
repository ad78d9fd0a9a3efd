"""Tests for loading context data files."""

import json

import pytest
import yaml

from stencil.context import Context, ExecutionScope
from stencil.exceptions import ContextLoaderError, ValidationError
from stencil.loader import ContextLoader
from stencil.template import Template


class TestContextLoader:
    """Test YAML/JSON context loading with identifier checks."""

    @pytest.fixture(autouse=True)
    def _loader(self, tmp_path):
        self.workspace = tmp_path
        self.loader = ContextLoader(tmp_path)

    def write_yaml(self, name: str, content) -> str:
        path = self.workspace / name
        with open(path, 'w') as f:
            yaml.dump(content, f)
        return name

    def test_load_yaml(self):
        name = self.write_yaml("data.yaml", {"user": {"name": "bob"}, "count": 3})
        context = self.loader.load(name)

        assert isinstance(context, Context)
        assert context.get_value("count") == (3, True)
        assert context.get_value("user") == ({"name": "bob"}, True)

    def test_load_json(self):
        (self.workspace / "data.json").write_text(json.dumps({"items": [1, 2]}))
        context = self.loader.load("data.json")
        assert context.get_value("items") == ([1, 2], True)

    def test_absolute_path(self):
        self.write_yaml("abs.yml", {"x": 1})
        context = ContextLoader().load(self.workspace / "abs.yml")
        assert context.get_value("x") == (1, True)

    def test_on_off_keys_preserved_as_strings(self):
        (self.workspace / "flags.yaml").write_text("on: 1\noff: 2\nenabled: true\n")
        context = self.loader.load("flags.yaml")

        assert context.get_value("on") == (1, True)
        assert context.get_value("off") == (2, True)
        assert context.get_value("enabled") == (True, True)

    def test_empty_file_gives_empty_context(self):
        (self.workspace / "empty.yaml").write_text("")
        assert self.loader.load("empty.yaml").list_identifiers() == []

    def test_invalid_key_rejected(self):
        (self.workspace / "bad.yaml").write_text("good: 1\nbad-key: 2\nalso bad: 3\n")

        with pytest.raises(ValidationError) as exc_info:
            self.loader.load("bad.yaml")

        assert exc_info.value.name == "bad-key"
        assert exc_info.value.filename.endswith("bad.yaml")

    def test_top_level_must_be_mapping(self):
        (self.workspace / "list.yaml").write_text("- a\n- b\n")
        with pytest.raises(ContextLoaderError, match="must be a mapping"):
            self.loader.load("list.yaml")

    def test_missing_file(self):
        with pytest.raises(ContextLoaderError) as exc_info:
            self.loader.load("missing.yaml")
        assert exc_info.value.sender == "loader"
        assert isinstance(exc_info.value.orig_error, FileNotFoundError)

    def test_malformed_json(self):
        (self.workspace / "broken.json").write_text("{not json")
        with pytest.raises(ContextLoaderError):
            self.loader.load("broken.json")

    def test_unsupported_suffix(self):
        (self.workspace / "data.txt").write_text("a=1")
        with pytest.raises(ContextLoaderError, match="Unsupported"):
            self.loader.load("data.txt")

    def test_load_many_later_files_win(self):
        self.write_yaml("base.yaml", {"title": "Base", "lang": "en"})
        self.write_yaml("page.yaml", {"title": "Page"})

        context = self.loader.load_many("base.yaml", "page.yaml")

        assert context.get_value("title") == ("Page", True)
        assert context.get_value("lang") == ("en", True)

    def test_loaded_context_protected_during_render(self):
        self.write_yaml("data.yaml", {"title": "Original"})
        context = self.loader.load("data.yaml")
        scope = ExecutionScope.create(Template("page.html"), context)

        scope.child().public.set_value("title", "Overwritten")

        assert context.get_value("title") == ("Original", True)
