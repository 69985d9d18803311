"""
Turns the virtual filesystem into an object literal that can sit inside an
inline <script> block.

Values go through a single escape pass:

    \\  ->  \\\\        "  ->  \\"
    LF  ->  \\n         CR ->  \\r        TAB -> \\t
    other code points < 32          ->  \\u00XX
    U+2028 / U+2029                 ->  \\\\u2028 / \\\\u2029  (kept as text)
    <                               ->  \\u003c

Everything else, non-ASCII included, is written as is; the document is saved
as UTF-8. Keys and values are escaped the same way.
"""
from __future__ import annotations

from typing import Mapping

_SIMPLE_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    # Line/paragraph separators end a statement in older script parsers. They
    # are embedded as the six-character text \u2028, not as the character.
    "\u2028": "\\\\u2028",
    "\u2029": "\\\\u2029",
    # no "</script" or "<!--" can reach the HTML tokenizer
    "<": "\\u003c",
}


def escape_js_string(value: str) -> str:
    """Returns value as a double-quoted string literal."""
    out = ['"']
    for ch in value:
        if ch in _SIMPLE_ESCAPES:
            out.append(_SIMPLE_ESCAPES[ch])
        elif ord(ch) < 32:
            out.append(f"\\u{ord(ch):04x}")
        else:
            out.append(ch)
    out.append('"')
    return "".join(out)


def serialize_embedded_map(vfs: Mapping[str, str]) -> str:
    """{"path":"content",...} in the mapping's iteration order."""
    entries = [f"{escape_js_string(path)}:{escape_js_string(content)}" for path, content in vfs.items()]
    return "{" + ",".join(entries) + "}"
