"""
Factory for handles on operations that were injected elsewhere.
"""

from __future__ import annotations
from typing import Optional, TYPE_CHECKING

from ..operations.operation import Operation

if TYPE_CHECKING:
    from ..context import Context


class OperationFactory:
    """Builds Operation handles bound to the context."""

    def __init__(self, context: Context):
        self.context = context

    def create_operation(self, hash: str, start_level: Optional[int] = None) -> Operation:
        """
        Track an already injected operation.

        Confirmation looks for the operation from ``start_level`` on, or in
        the last blocks before head when it is not given.

        Example:
            ```python
            op = toolkit.operation.create_operation("oo...")
            level = await op.confirmation(3)
            ```
        """
        return Operation(hash, None, None, self.context, start_level=start_level)
