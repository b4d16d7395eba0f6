import math
from datetime import datetime, timezone

from .property_parser import parse_properties


_INT_MAX = 2**31 - 1
_DEFAULT_DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def _parse_int(value: str, context: str, min_value: int, max_value: int) -> int:
    try:
        result = int(value.strip())
    except ValueError:
        raise ValueError(f"{context}: not an integer: {value!r}") from None
    if result < min_value or result > max_value:
        raise ValueError(f"{context}: {result} is out of range [{min_value}, {max_value}]")
    return result


class UnitFormat:
    """Display format of a port value, defined by a property string.

    Recognized properties:

    - ``label``: user friendly label for the format selection
    - ``conversion``: ``unixSeconds`` formats the value as a local timestamp,
      ``unixSecondsLocal`` treats it as a wall clock value (shown as UTC)
    - ``formatString``: how the value is displayed, ``%``-style, or a
      ``strftime`` pattern for conversions
    - ``valueString``: how the value is displayed in input fields
    - ``numerator`` / ``denominator``: factor applied to the raw value

    Other properties can be queried with :meth:`get_property`.
    """

    DEFAULT: "UnitFormat"

    def __init__(self, name: str, format_def: str = "") -> None:
        self.name = name
        self.config = parse_properties(format_def)

        self.label = self.config.get("label", name)
        self.conversion = self.config.get("conversion")
        default_format = _DEFAULT_DATETIME_FORMAT if self.conversion else "%s"
        self.format_string = self.config.get("formatString", default_format)
        self.value_string = self.config.get("valueString", "%.0f")
        self.numerator = 1
        self.denominator = 1
        if "numerator" in self.config:
            self.numerator = _parse_int(self.config["numerator"], f"Unit numerator: {name}", 1, _INT_MAX)
        if "denominator" in self.config:
            self.denominator = _parse_int(self.config["denominator"], f"Unit denominator: {name}", 1, _INT_MAX)

    def __repr__(self) -> str:
        return f"<UnitFormat(name='{self.name}', label='{self.label}')>"

    def get_property(self, name: str, default: str | None = None) -> str | None:
        return self.config.get(name, default)

    @property
    def is_scaled(self) -> bool:
        return self.numerator != 1 or self.denominator != 1

    def _scale(self, value: int) -> float:
        return value * self.numerator / self.denominator

    def format(self, value: int) -> str:
        if self.conversion == "unixSeconds":
            return datetime.fromtimestamp(value).strftime(self.format_string)
        if self.conversion == "unixSecondsLocal":
            return datetime.fromtimestamp(value, timezone.utc).strftime(self.format_string)
        if self.is_scaled:
            return self.format_string % self._scale(value)
        return str(value)

    def format_input(self, value: int) -> str:
        return self.value_string % self._scale(value)

    def parse_input(self, text: str) -> int:
        """Convert a number entered by the user back to a raw port value."""
        try:
            entered = float(text.strip())
        except ValueError:
            raise ValueError(f"Unit {self.name}: not a number: {text!r}") from None
        if not math.isfinite(entered):
            raise ValueError(f"Unit {self.name}: not a finite number: {text!r}")
        return round(entered * self.denominator / self.numerator)


UnitFormat.DEFAULT = UnitFormat("Default", "")
