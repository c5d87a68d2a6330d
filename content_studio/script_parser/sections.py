"""Marker based section and key/value extraction."""
from __future__ import annotations

from collections.abc import Iterable, Sequence


def trimmed_lines(text: str) -> list[str]:
    return [line.strip() for line in text.splitlines()]


def extract_between(
    text: str,
    start_marker: str,
    end_marker: str | None = None,
    *,
    keep_blank_lines: bool = False,
) -> str:
    """Return the text after ``start_marker`` up to the next ``end_marker``.

    The end marker is only searched for after the start marker. When it is
    omitted or missing the section runs to the end of ``text``. A missing
    start marker yields an empty string.
    """

    start_index = text.find(start_marker)
    if start_index == -1:
        return ""
    begin = start_index + len(start_marker)
    end = len(text)
    if end_marker:
        end_index = text.find(end_marker, begin)
        if end_index != -1:
            end = end_index
    section = text[begin:end].strip()
    if keep_blank_lines:
        return section
    return "\n".join(line for line in section.splitlines() if line.strip())


def extract_keyed_line(lines: Iterable[str], key: str) -> str:
    for line in lines:
        if line.startswith(key):
            return line[len(key):].strip()
    return ""


def extract_first_keyed_line(lines: Sequence[str], keys: Iterable[str]) -> str:
    for key in keys:
        value = extract_keyed_line(lines, key)
        if value:
            return value
    return ""


def extract_multiline_block(
    lines: Iterable[str], start_key: str, end_key: str | None = None
) -> str:
    collected: list[str] = []
    capturing = False
    for line in lines:
        if not capturing:
            if line.startswith(start_key):
                capturing = True
                remainder = line[len(start_key):].strip()
                if remainder:
                    collected.append(remainder)
            continue
        if end_key and line.startswith(end_key):
            break
        if line:
            collected.append(line)
    return "\n".join(collected)
