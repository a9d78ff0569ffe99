"""Configuration for the type generator.

Settings come from defaults, optionally overridden by a JSON file.
"""

import json
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter, ValidationError

from .ir import TypegenError


class ConfigError(TypegenError):
    """Exception raised for configuration-related errors."""


@dataclass
class GeneratorConfig:
    """Settings for TypeScript resolver type generation."""

    # Runtime client import
    namespace: str = "Prisma"
    client_module: str = "@prisma/client"
    context_module: str = "./context"

    # Output types whose resolvers receive an empty parent shape
    root_types: list[str] = field(default_factory=lambda: ["Query", "Mutation"])

    # Extra scalar name -> TypeScript type mappings
    scalars: dict[str, str] = field(default_factory=dict)

    # Templates here override the built-in ones
    template_dir: str | None = None
    output_file: str = "resolversTypes.ts"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GeneratorConfig":
        """Build a config from a mapping, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")
        try:
            return TypeAdapter(cls).validate_python(data)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration: {e}") from e

    @classmethod
    def from_file(cls, path: str | Path) -> "GeneratorConfig":
        """Load a config from a JSON file."""
        path = Path(path)
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except OSError as e:
            raise ConfigError(f"Cannot read config file {path}: {e}") from e
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in config file {path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a JSON object")
        return cls.from_dict(data)
