from pathlib import Path

import pytest

from opdi.unit_format import UnitFormat
from opdi.units_loader import UnitConfigError, UnitRegistry


UNITS_YAML = """
units:
  temperature: "deciCelsius=2;celsius=1;"
  empty: ""
  broken: "missing=1;"
formats:
  celsius: "label=°C;formatString=%.1f °C;denominator=10;"
  deciCelsius: "label=1/10 °C;"
"""


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "units.yaml"
    path.write_text(text, encoding="utf-8")
    return path


def test_formats_sorted_by_sort_key(tmp_path: Path):
    registry = UnitRegistry.from_yaml(_write(tmp_path, UNITS_YAML))
    formats = registry.formats_for("temperature")
    assert [f.name for f in formats] == ["celsius", "deciCelsius"]
    assert registry.default_format("temperature").format(215) == "21.5 °C"


def test_formats_are_cached():
    registry = UnitRegistry({"t": "a=1;"}, {"a": "label=A;"})
    assert registry.formats_for("t") is registry.formats_for("t")


def test_default_format_fallbacks(tmp_path: Path):
    registry = UnitRegistry.from_yaml(_write(tmp_path, UNITS_YAML))
    assert registry.default_format(None) is UnitFormat.DEFAULT
    assert registry.default_format("empty") is UnitFormat.DEFAULT
    assert registry.default_format("unknown") is UnitFormat.DEFAULT


def test_undefined_format_raises(tmp_path: Path):
    registry = UnitRegistry.from_yaml(_write(tmp_path, UNITS_YAML))
    with pytest.raises(UnitConfigError, match="missing"):
        registry.formats_for("broken")


def test_unknown_unit_raises():
    with pytest.raises(UnitConfigError, match="nope"):
        UnitRegistry().formats_for("nope")


def test_missing_file_raises(tmp_path: Path):
    with pytest.raises(UnitConfigError, match="not found"):
        UnitRegistry.from_yaml(tmp_path / "missing.yaml")


@pytest.mark.parametrize("text", ["- a\n- b\n", "units: [1, 2]\n", "units:\n  t: 5\n", "units: {a: [\n"])
def test_invalid_content_raises(tmp_path: Path, text):
    with pytest.raises(UnitConfigError):
        UnitRegistry.from_yaml(_write(tmp_path, text))


def test_empty_file_gives_empty_registry(tmp_path: Path):
    registry = UnitRegistry.from_yaml(_write(tmp_path, ""))
    assert registry.unit_names == []


def test_bundled_units_file_loads():
    import config

    registry = UnitRegistry.from_yaml(config.UNITS_CONFIG_PATH)
    for unit in registry.unit_names:
        assert registry.formats_for(unit)


def test_invalid_format_definition_raises_config_error():
    registry = UnitRegistry({"t": "f=1;"}, {"f": "numerator=abc;"})
    with pytest.raises(UnitConfigError, match="numerator"):
        registry.formats_for("t")
