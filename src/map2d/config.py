import json
import logging
import tomllib
from dataclasses import asdict, dataclass, fields
from os import PathLike
from pathlib import Path
from typing import Any, Callable, Mapping, cast

import yaml

from map2d.errors import ConfigError


@dataclass(frozen=True)
class Map2DSettings:
    """Settings applied to maps created through :func:`map2d.create_instance`.

    Attributes
    ----------
    prune_empty_rows:
        Drop a row as soon as its last value is removed. When false, emptied
        rows stay visible to ``has_row`` and ``row_map_view``.
    log_level:
        Name of the ``logging`` level used by the demonstration CLI.
    """

    prune_empty_rows: bool = True
    log_level: str = 'WARNING'

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> 'Map2DSettings':
        """Build settings from a plain mapping, e.g. a loaded config file.

        Raises
        ------
        ConfigError
            When ``values`` holds unknown keys, values of the wrong type, or
            an unknown log level.
        """
        expected_types = {field.name: field.type for field in fields(cls)}

        unknown = sorted(set(values) - set(expected_types))
        if unknown:
            raise ConfigError(f'Unknown settings: {", ".join(unknown)}')

        for name, value in values.items():
            expected = cast(type, expected_types[name])
            if not isinstance(value, expected):
                raise ConfigError(
                    f'Setting "{name}" must be of type {expected.__name__}, '
                    f'got {type(value).__name__}'
                )

        settings = cls(**values)
        if settings.log_level.upper() not in logging.getLevelNamesMapping():
            raise ConfigError(f'Unknown log level: {settings.log_level}')
        return settings

    def merged(self, overrides: Mapping[str, Any]) -> 'Map2DSettings':
        """Return a copy with ``overrides`` applied on top of these settings."""
        return Map2DSettings.from_mapping({**asdict(self), **overrides})


# Parsers for the supported settings file suffixes.
_PARSERS: dict[str, Callable[[str], Any]] = {
    '.yaml': yaml.safe_load,
    '.yml': yaml.safe_load,
    '.json': json.loads,
    '.toml': tomllib.loads,
}


def load_config_file(path: str | PathLike[str] | Path) -> Mapping[str, Any]:
    """Read a settings mapping from a YAML, JSON or TOML file.

    Raises
    ------
    FileNotFoundError
        When ``path`` does not exist.
    RuntimeError
        When the suffix is not supported or the file does not hold a mapping.
    """
    path = Path(path)
    parse = _PARSERS.get(path.suffix.lower())
    if parse is None:
        raise RuntimeError(
            f'Unsupported config file type: {path.suffix}, '
            f'supported extensions: {", ".join(_PARSERS)}'
        )
    if not path.is_file():
        raise FileNotFoundError(f'Config file not found: {path}')

    config = parse(path.read_text(encoding='utf-8'))
    if not isinstance(config, Mapping):
        raise RuntimeError('Config file must contain a mapping at the top level')
    return cast(Mapping[str, Any], config)


def load_settings(path: str | PathLike[str] | Path) -> Map2DSettings:
    return Map2DSettings.from_mapping(load_config_file(path))
