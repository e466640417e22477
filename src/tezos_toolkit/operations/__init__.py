"""Operation emission and tracking"""

from .types import OpKind, MANAGER_KINDS
from .operation import Operation
from .emitter import OperationEmitter, OPERATION_WATERMARK, collect_errors

__all__ = [
    "OpKind",
    "MANAGER_KINDS",
    "Operation",
    "OperationEmitter",
    "OPERATION_WATERMARK",
    "collect_errors",
]
