import json
from pathlib import Path

import main


def test_cli_parse(capsys):
    assert main.main(["parse", "a=1;b=x\\;y"]) == 0
    assert json.loads(capsys.readouterr().out) == {"a": "1", "b": "x;y"}


def test_cli_format(capsys):
    assert main.main(["format", "a=1", "b=x;y"]) == 0
    assert capsys.readouterr().out.strip() == "a=1;b=x\\;y;"


def test_cli_format_rejects_pair_without_equals():
    assert main.main(["format", "novalue"]) == 1


def test_cli_unit(tmp_path: Path, capsys):
    units = tmp_path / "units.yaml"
    units.write_text(
        'units:\n  temperature: "celsius=1;"\nformats:\n  celsius: "formatString=%.1f C;denominator=10;"\n',
        encoding="utf-8",
    )
    assert main.main(["unit", "temperature", "215", "--units-file", str(units)]) == 0
    assert capsys.readouterr().out.strip() == "21.5 C"


def test_cli_unit_missing_file(tmp_path: Path):
    assert main.main(["unit", "temperature", "1", "--units-file", str(tmp_path / "none.yaml")]) == 1


def _units_file(tmp_path: Path, format_def: str) -> str:
    units = tmp_path / "units.yaml"
    units.write_text(f'units:\n  t: "f=1;"\nformats:\n  f: "{format_def}"\n', encoding="utf-8")
    return str(units)


def test_cli_unit_invalid_factor(tmp_path: Path):
    assert main.main(["unit", "t", "5", "--units-file", _units_file(tmp_path, "numerator=abc;")]) == 1


def test_cli_unit_format_string_without_specifier(tmp_path: Path):
    units_file = _units_file(tmp_path, "formatString=plain;denominator=10;")
    assert main.main(["unit", "t", "5", "--units-file", units_file]) == 1


def test_cli_unit_timestamp_out_of_range(tmp_path: Path):
    units_file = _units_file(tmp_path, "conversion=unixSecondsLocal;")
    assert main.main(["unit", "t", "99999999999999", "--units-file", units_file]) == 1
