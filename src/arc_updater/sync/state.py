"""State shared between the traversal engine and its visitors."""

from dataclasses import dataclass, field
from typing import Optional, Set


@dataclass
class ExecutionContext:
    """Mutable context for one traversal.

    Attributes:
        cancel: Set by a visitor to abort every remaining target. Never cleared.
        visited: Full paths already handled, or None when repeats are allowed.
    """

    cancel: bool = False
    visited: Optional[Set[str]] = None

    @classmethod
    def create(cls, ignore_repeats: bool = True) -> "ExecutionContext":
        return cls(visited=set() if ignore_repeats else None)

    def should_ignore_else_add(self, path: str) -> bool:
        """Return True if ``path`` was seen before, otherwise remember it."""
        if self.visited is None:
            return False
        if path in self.visited:
            return True
        self.visited.add(path)
        return False


@dataclass
class OperationState:
    """State handed to a visitor for a single path."""

    full_path: str
    context: ExecutionContext = field(default_factory=ExecutionContext)

    @property
    def cancel(self) -> bool:
        """Whether the whole traversal should stop."""
        return self.context.cancel

    @cancel.setter
    def cancel(self, value: bool) -> None:
        # one-way: a cancelled traversal stays cancelled
        if value:
            self.context.cancel = True

    def derive(self, full_path: str) -> "OperationState":
        """Create a state for a sub-path that shares this traversal's context."""
        return OperationState(full_path, self.context)
