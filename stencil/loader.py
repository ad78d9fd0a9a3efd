"""Context data loading from YAML and JSON files."""

import json
import logging
from pathlib import Path
from typing import Any, Optional, Union

import yaml

from .context.identifiers import check_identifiers
from .context.stores import Context
from .exceptions import ContextLoaderError


logger = logging.getLogger(__name__)


class PreservingLoader(yaml.SafeLoader):
    """Custom YAML loader that preserves string keys like 'on' instead of converting to bool."""
    pass


BOOL_WORD_INITIALS = ('o', 'O', 'y', 'Y', 'n', 'N')

# Drop the implicit bool resolvers for 'on'/'off'/'yes'/'no' so they stay strings.
# 'true'/'false' still resolve to booleans.
PreservingLoader.yaml_implicit_resolvers = {
    first: [
        (tag, regexp) for tag, regexp in resolvers
        if not (tag == 'tag:yaml.org,2002:bool' and first in BOOL_WORD_INITIALS)
    ]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


class ContextLoader:
    """Loads user data files into a Context, rejecting keys that are not identifiers."""

    YAML_SUFFIXES = {".yaml", ".yml"}
    JSON_SUFFIXES = {".json"}

    def __init__(self, base_dir: Optional[Path] = None):
        """Initialize loader with the directory relative paths resolve against."""
        self.base_dir = (base_dir or Path.cwd()).resolve()

    def load(self, path: Union[str, Path], into: Optional[Context] = None) -> Context:
        """
        Load a data file.

        Args:
            path: YAML or JSON file whose top level is a mapping
            into: Existing context to update (a new one is created otherwise)

        Returns:
            Context holding the file's top-level entries

        Raises:
            ContextLoaderError: If the file cannot be read or parsed
            ValidationError: If a top-level key is not a valid identifier
        """
        data_path = self._resolve_path(path)
        data = self._read(data_path)

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ContextLoaderError(
                str(data_path),
                ValueError(f"Context data must be a mapping, got {type(data).__name__}")
            )

        error = check_identifiers(list(data.keys()))
        if error is not None:
            error.filename = str(data_path)
            raise error

        context = into if into is not None else Context()
        context.update(data)
        logger.debug(f"Loaded {len(data)} context entries from {data_path}")
        return context

    def load_many(self, *paths: Union[str, Path]) -> Context:
        """Load several files into one context; later files win on conflicts."""
        context = Context()
        for path in paths:
            self.load(path, into=context)
        return context

    def _resolve_path(self, path: Union[str, Path]) -> Path:
        data_path = Path(path)
        if not data_path.is_absolute():
            data_path = self.base_dir / data_path
        return data_path

    def _read(self, data_path: Path) -> Any:
        suffix = data_path.suffix.lower()
        if suffix not in self.YAML_SUFFIXES and suffix not in self.JSON_SUFFIXES:
            raise ContextLoaderError(str(data_path), ValueError(f"Unsupported context file type '{suffix}'"))

        try:
            with open(data_path, 'r') as f:
                if suffix in self.JSON_SUFFIXES:
                    return json.load(f)
                return yaml.load(f, Loader=PreservingLoader)
        except (OSError, ValueError, yaml.YAMLError) as e:
            raise ContextLoaderError(str(data_path), e) from e
