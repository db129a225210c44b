from .state import ExecutionContext, OperationState
from .target_operation import DirectoryQuery, TargetPathOperation
from .visitor import FileSystemVisitor

__all__ = [
    "DirectoryQuery",
    "ExecutionContext",
    "FileSystemVisitor",
    "OperationState",
    "TargetPathOperation",
]
