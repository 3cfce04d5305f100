"""Terminal output helpers: bordered boxes and colourised character diffs."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Final, Sequence, TextIO

ANSI_GREEN: Final[str] = "\x1b[32m"
ANSI_RED: Final[str] = "\x1b[31m"
ANSI_DEFAULT: Final[str] = "\x1b[39m"
ANSI_RESET: Final[str] = "\x1b[0m"

BOX_PADDING: Final[int] = 2


@dataclass(frozen=True, slots=True)
class DiffPart:
    """One span of a character diff."""

    value: str
    added: bool = False
    removed: bool = False


def _common_prefix(a: str, b: str) -> int:
    n = min(len(a), len(b))
    i = 0
    while i < n and a[i] == b[i]:
        i += 1
    return i


def _common_suffix(a: str, b: str) -> int:
    n = min(len(a), len(b))
    i = 0
    while i < n and a[-1 - i] == b[-1 - i]:
        i += 1
    return i


def _middle_snake(a: str, b: str) -> tuple[int, int] | None:
    """Find a split point on a shortest edit path (Myers, linear space).

    Returns ``None`` when ``a`` and ``b`` share no character.
    """
    n, m = len(a), len(b)
    max_d = (n + m + 1) // 2
    offset = max_d
    size = 2 * max_d
    v1 = [-1] * size
    v2 = [-1] * size
    v1[offset + 1] = 0
    v2[offset + 1] = 0
    delta = n - m
    # odd delta: the forward pass detects the overlap
    front = delta % 2 != 0
    k1start = k1end = k2start = k2end = 0

    for d in range(max_d):
        for k1 in range(-d + k1start, d + 1 - k1end, 2):
            k1_offset = offset + k1
            if k1 == -d or (k1 != d and v1[k1_offset - 1] < v1[k1_offset + 1]):
                x1 = v1[k1_offset + 1]
            else:
                x1 = v1[k1_offset - 1] + 1
            y1 = x1 - k1
            while x1 < n and y1 < m and a[x1] == b[y1]:
                x1 += 1
                y1 += 1
            v1[k1_offset] = x1
            if x1 > n:
                k1end += 2
            elif y1 > m:
                k1start += 2
            elif front:
                k2_offset = offset + delta - k1
                if 0 <= k2_offset < size and v2[k2_offset] != -1:
                    if x1 >= n - v2[k2_offset]:
                        return x1, y1

        for k2 in range(-d + k2start, d + 1 - k2end, 2):
            k2_offset = offset + k2
            if k2 == -d or (k2 != d and v2[k2_offset - 1] < v2[k2_offset + 1]):
                x2 = v2[k2_offset + 1]
            else:
                x2 = v2[k2_offset - 1] + 1
            y2 = x2 - k2
            while x2 < n and y2 < m and a[n - x2 - 1] == b[m - y2 - 1]:
                x2 += 1
                y2 += 1
            v2[k2_offset] = x2
            if x2 > n:
                k2end += 2
            elif y2 > m:
                k2start += 2
            elif not front:
                k1_offset = offset + delta - k2
                if 0 <= k1_offset < size and v1[k1_offset] != -1:
                    x1 = v1[k1_offset]
                    y1 = offset + x1 - k1_offset
                    if x1 >= n - x2:
                        return x1, y1

    return None


def _edit_script(a: str, b: str, ops: list[tuple[int, str]]) -> None:
    """Append ``(op, text)`` pairs of a shortest edit script; op is -1, 0 or 1."""
    prefix = _common_prefix(a, b)
    if prefix:
        ops.append((0, a[:prefix]))
        a, b = a[prefix:], b[prefix:]

    suffix = _common_suffix(a, b)
    tail = a[len(a) - suffix:]
    a, b = a[: len(a) - suffix], b[: len(b) - suffix]

    if not a:
        if b:
            ops.append((1, b))
    elif not b:
        ops.append((-1, a))
    else:
        _edit_changed(a, b, ops)

    if tail:
        ops.append((0, tail))


def _edit_changed(a: str, b: str, ops: list[tuple[int, str]]) -> None:
    # a and b are non-empty and differ at both ends
    longer, shorter = (a, b) if len(a) > len(b) else (b, a)
    op = -1 if len(a) > len(b) else 1
    index = longer.find(shorter)
    if index != -1:
        if index:
            ops.append((op, longer[:index]))
        ops.append((0, shorter))
        if index + len(shorter) < len(longer):
            ops.append((op, longer[index + len(shorter):]))
    elif len(shorter) == 1:
        ops.append((-1, a))
        ops.append((1, b))
    else:
        split = _middle_snake(a, b)
        if split is None:
            ops.append((-1, a))
            ops.append((1, b))
        else:
            x, y = split
            _edit_script(a[:x], b[:y], ops)
            _edit_script(a[x:], b[y:], ops)


def diff_chars(old: str, new: str) -> list[DiffPart]:
    """Compute a minimal character-level edit script turning ``old`` into ``new``.

    Within each changed run the removed text is reported before the added
    text, and adjacent parts of the same kind are merged.
    """
    ops: list[tuple[int, str]] = []
    _edit_script(old, new, ops)

    parts: list[DiffPart] = []
    removed: list[str] = []
    added: list[str] = []

    def flush() -> None:
        if removed:
            parts.append(DiffPart("".join(removed), removed=True))
        if added:
            parts.append(DiffPart("".join(added), added=True))
        removed.clear()
        added.clear()

    for op, text in ops:
        if op < 0:
            removed.append(text)
        elif op > 0:
            added.append(text)
        else:
            flush()
            if parts and not parts[-1].added and not parts[-1].removed:
                parts[-1] = DiffPart(parts[-1].value + text)
            else:
                parts.append(DiffPart(text))
    flush()
    return parts


def render_diff(parts: Sequence[DiffPart]) -> str:
    """Join diff parts with their ANSI colour codes and a trailing reset."""
    output = []
    for part in parts:
        if part.added:
            color = ANSI_GREEN
        elif part.removed:
            color = ANSI_RED
        else:
            color = ANSI_DEFAULT
        output.append(color + part.value)
    return "".join(output) + ANSI_RESET


def draw_table(text: str, stream: TextIO | None = None) -> None:
    """Print ``text`` inside a box drawn with box-drawing characters."""
    out = stream or sys.stdout
    lines = text.split("\n")
    max_length = max(len(line) for line in lines)
    total_width = max_length + BOX_PADDING * 2
    pad = " " * BOX_PADDING

    print("┌" + "─" * total_width + "┐", file=out)
    for line in lines:
        print("│" + pad + line.ljust(max_length) + pad + "│", file=out)
    print("└" + "─" * total_width + "┘", file=out)
