"""Types for reporting the outcome of an operation."""

from dataclasses import dataclass, field
from typing import Set


@dataclass
class OperationReport:
    """Paths touched by an operation, grouped by what happened to them.

    Attributes:
        installed: Files written where none existed
        updated: Outdated or corrupt files replaced
        current: Files already matching the reference checksum
        outdated: Files found not to match (verification only)
        removed: Files deleted or moved to the recycle area
        failed: Paths that could not be processed
        cancelled: Whether the run was aborted early
    """

    installed: Set[str] = field(default_factory=set)
    updated: Set[str] = field(default_factory=set)
    current: Set[str] = field(default_factory=set)
    outdated: Set[str] = field(default_factory=set)
    removed: Set[str] = field(default_factory=set)
    failed: Set[str] = field(default_factory=set)
    cancelled: bool = False

    @property
    def total_changes(self) -> int:
        """Number of files written or removed."""
        return len(self.installed) + len(self.updated) + len(self.removed)
