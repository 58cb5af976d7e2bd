"""Escaping between PO string literals and runtime strings."""

import re

_ESCAPES = {
    "\n": "\\n",
    "\t": "\\t",
    "\r": "\\r",
    "\b": "\\b",
    "\f": "\\f",
    '"': '\\"',
    "'": "\\'",
    "\\": "\\\\",
}

_UNESCAPES = {value[1]: key for key, value in _ESCAPES.items()}

_ESCAPE_SEQUENCE = re.compile(r"\\(u[0-9A-Fa-f]{4}|.)", re.DOTALL)

_SURROGATE_PAIR = re.compile("[\ud800-\udbff][\udc00-\udfff]")


def _join_surrogates(match: re.Match) -> str:
    high, low = (ord(c) for c in match.group(0))
    return chr(0x10000 + ((high - 0xD800) << 10) + (low - 0xDC00))


def _needs_unicode_escape(c: str) -> bool:
    code = ord(c)
    return code < 0x20 or 0x7F <= code <= 0x9F or 0xD800 <= code <= 0xDFFF


def escape(s: str) -> str:
    """Escape a runtime string for use inside a quoted PO literal."""
    result = []
    for c in s:
        if c in _ESCAPES:
            result.append(_ESCAPES[c])
        elif _needs_unicode_escape(c):
            result.append(f"\\u{ord(c):04x}")
        else:
            result.append(c)
    return "".join(result)


def unescape(s: str) -> str:
    """Unescape the content of a quoted PO literal.

    Raises:
        ValueError: On an escape sequence the literal grammar does not allow.
    """
    def substitute(match: re.Match) -> str:
        sequence = match.group(1)
        if len(sequence) == 5:
            return chr(int(sequence[1:], 16))
        if sequence in _UNESCAPES:
            return _UNESCAPES[sequence]
        raise ValueError(f"Unknown escape sequence: '\\{sequence}'")

    result = _ESCAPE_SEQUENCE.sub(substitute, s)
    # \uXXXX pairs may encode a character outside the BMP; lone surrogates stay as is
    return _SURROGATE_PAIR.sub(_join_surrogates, result)
