"""File system operations driven by the traversal engine."""

from .clean import CleanOperation
from .report import OperationReport
from .update import UpdateOperation
from .verify import VerifyOperation

__all__ = ["CleanOperation", "OperationReport", "UpdateOperation", "VerifyOperation"]
