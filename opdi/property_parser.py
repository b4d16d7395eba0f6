import logging


logger = logging.getLogger("property_parser")

_ESCAPES = {
    "\\": "\\",
    "=": "=",
    ";": ";",
    "t": "\t",
    "n": "\n",
    "r": "\r",
}


def parse_properties(text: str) -> dict[str, str]:
    """Split a property string (``prop1=val1;prop2=val2;...``) into a dict.

    Never raises: syntax errors are absorbed. A ``=`` or ``;`` starting a
    segment is ignored, segments without a key are dropped and a trailing
    backslash is discarded. Keys are stripped of surrounding whitespace,
    values are kept as they are.
    """
    result: dict[str, str] = {}
    part: str | None = None
    key: str | None = None

    pos = 0
    length = len(text)
    while pos < length:
        ch = text[pos]
        lookahead = text[pos + 1] if pos + 1 < length else None

        if part is None:
            part = ""
            if ch == "=" or ch == ";":
                # syntax error, ignore
                pos += 1
                continue
        elif ch == "=":
            key = part.strip()
            part = None
            pos += 1
            continue
        elif ch == ";":
            if key is not None:
                result[key] = part
            else:
                logger.debug("Dropping property segment without key: %r", part)
            key = None
            part = None
            pos += 1
            continue

        if ch == "\\":
            if lookahead is not None:
                part += _ESCAPES.get(lookahead, lookahead)
                pos += 1
        else:
            part += ch
        pos += 1

    # last property unterminated?
    if key is not None:
        result[key] = "" if part is None else part
    elif part is not None:
        logger.debug("Dropping trailing property segment without key: %r", part)

    return result
