import logging
from pathlib import Path

import yaml

from .property_parser import parse_properties
from .unit_format import UnitFormat


logger = logging.getLogger("units_loader")


class UnitConfigError(ValueError):
    pass


def _string_mapping(data: dict, section: str) -> dict[str, str]:
    values = data.get(section) or {}
    if not isinstance(values, dict):
        raise UnitConfigError(f"'{section}' must be a mapping")
    for name, definition in values.items():
        if not isinstance(definition, str):
            raise UnitConfigError(f"{section}.{name} must be a property string, got {type(definition).__name__}")
    return {str(name): definition for name, definition in values.items()}


class UnitRegistry:
    """Units and their display formats.

    A unit definition is a property string mapping format names to sort keys,
    e.g. ``celsius=1;fahrenheit=2;``. Each format name refers to a format
    definition, itself a property string parsed by :class:`UnitFormat`.
    """

    def __init__(self, units: dict[str, str] | None = None, formats: dict[str, str] | None = None) -> None:
        self._units = dict(units or {})
        self._formats = dict(formats or {})
        self._cache: dict[str, list[UnitFormat]] = {}

    @classmethod
    def from_yaml(cls, path: str | Path) -> "UnitRegistry":
        path = Path(path)
        try:
            with path.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except FileNotFoundError:
            raise UnitConfigError(f"Units file not found: {path}") from None
        except yaml.YAMLError as e:
            raise UnitConfigError(f"Failed to parse units file {path}: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise UnitConfigError(f"Units file {path} does not contain a YAML mapping")

        registry = cls(_string_mapping(data, "units"), _string_mapping(data, "formats"))
        logger.info("Loaded %d units and %d formats from %s", len(registry._units), len(registry._formats), path)
        return registry

    @property
    def unit_names(self) -> list[str]:
        return sorted(self._units)

    def has_unit(self, unit: str) -> bool:
        return unit in self._units

    def formats_for(self, unit: str) -> list[UnitFormat]:
        cached = self._cache.get(unit)
        if cached is not None:
            return cached

        unit_def = self._units.get(unit)
        if unit_def is None:
            raise UnitConfigError(f"Units not defined for: {unit}")

        ordered = sorted(parse_properties(unit_def).items(), key=lambda item: (item[1], item[0]))
        format_list = []
        for format_name, _sort_key in ordered:
            format_def = self._formats.get(format_name)
            if format_def is None:
                raise UnitConfigError(f"Unit format not defined: {format_name} (unit {unit})")
            try:
                format_list.append(UnitFormat(format_name, format_def))
            except ValueError as e:
                raise UnitConfigError(f"Invalid unit format {format_name} (unit {unit}): {e}") from e

        self._cache[unit] = format_list
        return format_list

    def default_format(self, unit: str | None) -> UnitFormat:
        if unit is None:
            return UnitFormat.DEFAULT
        if unit not in self._units:
            logger.warning("Unknown unit %r, using default format", unit)
            return UnitFormat.DEFAULT
        format_list = self.formats_for(unit)
        if not format_list:
            return UnitFormat.DEFAULT
        return format_list[0]
