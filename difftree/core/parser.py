from __future__ import annotations

import re
from collections.abc import Iterable, Iterator

from difftree.core.changes import RENAMED, ChangeRecord
from difftree.core.errors import missing_rename_destination


_LINE_RE = re.compile(r"^(.)\t(.+)$")
RENAME_SEPARATOR = " -> "


def _split_lines(source: str | Iterable[str]) -> Iterator[str]:
    lines = source.split("\n") if isinstance(source, str) else source
    for line in lines:
        if line.endswith("\n"):
            line = line[:-1]
        # CRLF input
        if line.endswith("\r"):
            line = line[:-1]
        yield line


def parse_line(line: str) -> tuple[ChangeRecord, str] | None:
    """Parse one diff line; ``None`` for blank or unrecognised lines."""
    if not line:
        return None
    match = _LINE_RE.match(line)
    if not match:
        return None

    kind, rest = match.group(1), match.group(2)
    if kind != RENAMED:
        return ChangeRecord(kind=kind), rest

    source, sep, destination = rest.partition(RENAME_SEPARATOR)
    if not sep:
        raise missing_rename_destination(line)
    return ChangeRecord(kind=kind, moved_to=destination), source


def iter_diff_lines(source: str | Iterable[str]) -> Iterator[tuple[ChangeRecord, str]]:
    """Yield ``(record, path)`` pairs lazily from diff text or a line stream."""
    for line in _split_lines(source):
        parsed = parse_line(line)
        if parsed is not None:
            yield parsed
