from __future__ import annotations

from typing import Any


class APIError(Exception):
    def __init__(
        self,
        status_code: int,
        code: str,
        message: str,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.code = code
        self.message = message
        self.details = details


class FormatError(ValueError):
    """Input that matches the line grammar but is internally inconsistent."""

    def __init__(self, code: str, message: str, subject: str):
        super().__init__(f"{message}: {subject!r}")
        self.code = code
        self.message = message
        self.subject = subject


def missing_rename_destination(line: str) -> FormatError:
    return FormatError("missing_rename_destination", "rename record missing destination", line)


def path_not_absolute(path: str) -> FormatError:
    return FormatError("path_not_absolute", "path is not absolute", path)
