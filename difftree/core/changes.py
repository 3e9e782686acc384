from __future__ import annotations

from dataclasses import dataclass


RENAMED = "R"
MODIFIED = "M"
ADDITION_KINDS = frozenset({"+", "A"})
DELETION_KINDS = frozenset({"-", "D"})


@dataclass(frozen=True)
class ChangeRecord:
    """One change to one path, as reported by a single diff line.

    ``kind`` is the raw single-character code from the diff. Only renames carry
    ``moved_to``.
    """

    kind: str
    moved_to: str | None = None

    @property
    def is_addition(self) -> bool:
        return self.kind in ADDITION_KINDS

    @property
    def is_deletion(self) -> bool:
        return self.kind in DELETION_KINDS


@dataclass(frozen=True)
class FilterConfig:
    include_renamed: bool
    include_modified: bool
    include_additions: bool
    include_deletions: bool
    include_add_del: bool

    @classmethod
    def permissive(cls) -> FilterConfig:
        return cls(True, True, True, True, True)

    def flags(self) -> tuple[bool, ...]:
        return (
            self.include_renamed,
            self.include_modified,
            self.include_additions,
            self.include_deletions,
            self.include_add_del,
        )

    def covers(self, other: FilterConfig) -> bool:
        """True when every flag enabled in ``other`` is also enabled here."""
        return all(mine or not theirs for mine, theirs in zip(self.flags(), other.flags()))
