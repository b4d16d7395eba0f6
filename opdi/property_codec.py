from collections.abc import Mapping


def escape(s: str) -> str:
    return (
        s.replace("\\", "\\\\")
        .replace("=", "\\=")
        .replace(";", "\\;")
        .replace("\t", "\\t")
        .replace("\n", "\\n")
        .replace("\r", "\\r")
    )


def format_properties(properties: Mapping[str, str]) -> str:
    """Join a mapping into a property string readable by ``parse_properties``."""
    parts = []
    for key, value in properties.items():
        if not key or key != key.strip():
            raise ValueError(f"Property key must be non-empty without surrounding whitespace: {key!r}")
        if value == "":
            # "key=;" reads back as a syntax error, omit the key instead
            raise ValueError(f"Property value is empty: {key!r}")
        parts.append(f"{escape(key)}={escape(value)};")
    return "".join(parts)
