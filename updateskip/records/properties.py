# Copyright 2025 Roger Cibrian
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Key-value text format used by the daemon's record files.

The daemon writes plain ``.properties`` text, for example::

    #Written by the daemon
    lastUpdateSuccess=true
    lastUpdateTime=1700000000000

Only the subset of the format that can appear in these files is handled:

- Blank lines and lines starting with ``#`` or ``!`` are ignored
- Keys end at the first unescaped ``=``, ``:`` or whitespace
- Whitespace around the separator is dropped
- A trailing odd backslash joins the next line (continuation)
- Common escapes (``\\t``, ``\\n``, ``\\r``, ``\\f``, ``\\uXXXX``) are decoded
- Later duplicates of a key win

The functions are pure: they take and return strings.
"""

from __future__ import annotations

import re

_LINE_BREAK = re.compile(r"\r\n|\r|\n")
_SEPARATORS = "=:"
_WHITESPACE = " \t\f"
_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}


def _logical_lines(text: str) -> list[str]:
    """Join continuation lines and drop comments and blanks."""
    lines: list[str] = []
    pending: str | None = None

    for raw in _LINE_BREAK.split(text):
        line = raw.lstrip(_WHITESPACE)
        if pending is None:
            if not line or line[0] in "#!":
                continue
        else:
            line = pending + line

        trailing = len(line) - len(line.rstrip("\\"))
        if trailing % 2 == 1:
            pending = line[:-1]
            continue

        pending = None
        lines.append(line)

    if pending is not None:
        lines.append(pending)
    return lines


def _unescape(value: str) -> str:
    out: list[str] = []
    i = 0
    while i < len(value):
        ch = value[i]
        if ch != "\\" or i + 1 >= len(value):
            out.append(ch)
            i += 1
            continue

        nxt = value[i + 1]
        if nxt == "u" and i + 6 <= len(value):
            try:
                out.append(chr(int(value[i + 2 : i + 6], 16)))
                i += 6
                continue
            except ValueError:
                pass
        out.append(_ESCAPES.get(nxt, nxt))
        i += 2
    return "".join(out)


def _split_line(line: str) -> tuple[str, str]:
    """Split a logical line into raw key and raw value."""
    i = 0
    while i < len(line):
        ch = line[i]
        if ch == "\\":
            i += 2
            continue
        if ch in _SEPARATORS or ch in _WHITESPACE:
            break
        i += 1

    key = line[:i]
    rest = line[i:].lstrip(_WHITESPACE)
    if rest and rest[0] in _SEPARATORS:
        rest = rest[1:].lstrip(_WHITESPACE)
    return key, rest


def parse_properties(text: str) -> dict[str, str]:
    """Parse ``.properties`` text into a dict.

    Args:
        text: File contents.

    Returns:
        Mapping of keys to (unescaped) values. Empty if nothing was defined.

    Example:
        ```python
        parse_properties("lastUpdateTime = 42\\n")
        # {"lastUpdateTime": "42"}
        ```
    """
    result: dict[str, str] = {}
    for line in _logical_lines(text):
        key, value = _split_line(line)
        result[_unescape(key)] = _unescape(value)
    return result


def format_properties(values: dict[str, str]) -> str:
    """Render a mapping as ``key=value`` lines with a trailing newline.

    Keys and values are written as-is; record files only ever contain
    identifier keys and decimal numbers.
    """
    return "".join(f"{key}={value}\n" for key, value in values.items())
