"""Configuration: ``.swivl-sniffs.yml`` loading and sniff options."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

import yaml

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_NAME = ".swivl-sniffs.yml"
DEFAULT_SNIFF_CODE = "Swivl.Commenting.DoctrineEntity"
SUPPORTED_SCHEMA_VERSIONS: frozenset[int] = frozenset({1})

_DOCTRINE_KEYS = frozenset(
    {"concrete_type_to_base_type_map", "use_dynamical_calculation_for_enum_column_type"}
)


@dataclass(frozen=True)
class SniffConfig:
    """Options of the Doctrine entity sniff."""

    # Concrete association type -> base type accepted on accessor type-hints.
    concrete_type_to_base_type_map: Mapping[str, str] = field(
        default_factory=lambda: MappingProxyType({})
    )
    # Derive enum class names from "<prefix>_enum_<name>" column types.
    use_dynamical_calculation_for_enum_column_type: bool = False
    sniff_code: str = DEFAULT_SNIFF_CODE


def parse_config(data: object, source: str = DEFAULT_CONFIG_NAME) -> SniffConfig:
    """Validate loaded YAML *data* and build a :class:`SniffConfig`.

    Raises ``ValueError`` on schema errors.
    """
    if data is None:
        return SniffConfig()
    if not isinstance(data, dict):
        msg = f"{source} must be a YAML mapping"
        raise ValueError(msg)

    version = data.get("version")
    if version is None:
        msg = f"{source}: missing required 'version' field"
        raise ValueError(msg)
    if version not in SUPPORTED_SCHEMA_VERSIONS:
        expected = sorted(SUPPORTED_SCHEMA_VERSIONS)
        msg = f"{source}: unsupported version {version}, expected one of {expected}"
        raise ValueError(msg)

    section = data.get("doctrine_entity") or {}
    if not isinstance(section, dict):
        msg = f"{source}: 'doctrine_entity' must be a mapping"
        raise ValueError(msg)

    unknown = sorted(str(key) for key in section if key not in _DOCTRINE_KEYS)
    if unknown:
        msg = f"{source}: unknown 'doctrine_entity' options: {', '.join(unknown)}"
        raise ValueError(msg)

    type_map = section.get("concrete_type_to_base_type_map") or {}
    if not isinstance(type_map, dict) or not all(
        isinstance(key, str) and isinstance(value, str) for key, value in type_map.items()
    ):
        msg = f"{source}: 'concrete_type_to_base_type_map' must map type names to type names"
        raise ValueError(msg)

    dynamic_enum = section.get("use_dynamical_calculation_for_enum_column_type", False)
    if not isinstance(dynamic_enum, bool):
        msg = f"{source}: 'use_dynamical_calculation_for_enum_column_type' must be a boolean"
        raise ValueError(msg)

    return SniffConfig(
        concrete_type_to_base_type_map=MappingProxyType(dict(type_map)),
        use_dynamical_calculation_for_enum_column_type=dynamic_enum,
    )


def load_config(config_path: Path) -> SniffConfig:
    """Read *config_path*; a missing file yields the defaults.

    Raises ``ValueError`` when the file is unreadable or invalid.
    """
    if not config_path.is_file():
        logger.debug("No config at %s, using defaults", config_path)
        return SniffConfig()

    try:
        with config_path.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError) as exc:
        msg = f"Cannot read {config_path}: {exc}"
        raise ValueError(msg) from exc

    return parse_config(data, config_path.name)
