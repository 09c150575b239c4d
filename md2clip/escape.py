"""
Convert Markdown to Confluence wiki markup or storage format.

Copyright 2022-2026, Levente Hunyadi
"""

import re
import sys

# named character references recognized in plain-text output
_NAMED_ENTITIES = {
    "amp": "&",
    "colon": ":",
    "gt": ">",
    "lt": "<",
    "quot": '"',
}

_ENTITY_PATTERN = re.compile(r"&(#[0-9]+|#x[0-9a-f]+|\w+);?", flags=re.IGNORECASE)


def _unescape_entity(m: re.Match[str]) -> str:
    name = m.group(1).lower()
    if (char := _NAMED_ENTITIES.get(name)) is not None:
        return char

    if name.startswith("#x"):
        code_point = int(name[2:], base=16)
    elif name.startswith("#"):
        code_point = int(name[1:])
    else:
        return m.group(0)

    # out of range or a surrogate, which cannot be encoded on its own
    if code_point > sys.maxunicode or 0xD800 <= code_point <= 0xDFFF:
        return m.group(0)
    return chr(code_point)


def unescape_html(text: str) -> str:
    """
    Replaces HTML character references with the characters they stand for.

    Recognizes the named references `&amp;`, `&lt;`, `&gt;`, `&quot;` and `&colon;`, as well as decimal (`&#58;`) and
    hexadecimal (`&#x3A;`) numeric references. The terminating semicolon is optional. Any other reference is left
    unchanged.
    """

    return _ENTITY_PATTERN.sub(_unescape_entity, text)


def escape_html(text: str) -> str:
    "Escapes characters that are unsafe in XHTML text and attribute values."

    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;").replace('"', "&quot;").replace("'", "&#39;")
