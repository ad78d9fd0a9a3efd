"""
Render configuration.

Replaces process-wide toggles with an explicit value passed into root scope
construction.
"""

from dataclasses import dataclass, fields, asdict
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml

from .exceptions import ConfigError, ConfigIssue


DEFAULT_MAX_MACRO_DEPTH = 1000


@dataclass(frozen=True)
class RenderConfig:
    """
    Settings applied when a root execution scope is built.

    Attributes:
        autoescape: Default autoescape flag copied into every new root scope
        max_macro_depth: Upper bound on nested macro invocations
    """
    autoescape: bool = True
    max_macro_depth: int = DEFAULT_MAX_MACRO_DEPTH

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RenderConfig":
        """
        Build a config from a plain dict, rejecting unknown keys and bad types.

        Raises:
            ConfigError: With every problem found
        """
        if not isinstance(data, dict):
            raise ConfigError([ConfigIssue("Config must be a dictionary")])

        issues: List[ConfigIssue] = []
        known = {f.name for f in fields(cls)}

        for key in data:
            if key not in known:
                issues.append(ConfigIssue(f"Unknown field '{key}'", key=str(key)))

        if 'autoescape' in data and not isinstance(data['autoescape'], bool):
            issues.append(ConfigIssue(
                f"'autoescape' must be a boolean, got {type(data['autoescape']).__name__}",
                key='autoescape'
            ))

        if 'max_macro_depth' in data:
            depth = data['max_macro_depth']
            # bool is an int subclass
            if isinstance(depth, bool) or not isinstance(depth, int):
                issues.append(ConfigIssue(
                    f"'max_macro_depth' must be an integer, got {type(depth).__name__}",
                    key='max_macro_depth'
                ))
            elif depth < 1:
                issues.append(ConfigIssue("'max_macro_depth' must be at least 1", key='max_macro_depth'))

        if issues:
            raise ConfigError(issues)

        return cls(**data)

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "RenderConfig":
        """Load a config from a YAML file; an empty file yields the defaults."""
        try:
            with open(path, 'r') as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError([ConfigIssue(f"Failed to load config: {e}")]) from e

        if data is None:
            return cls()
        return cls.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict."""
        return asdict(self)
