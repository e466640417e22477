"""
Forger interface.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, TypedDict


class ForgeParams(TypedDict):
    branch: str
    contents: List[Dict[str, Any]]


class Forger(ABC):
    """Serializes an operation (branch and contents) to hex bytes."""

    @abstractmethod
    def forge(self, params: ForgeParams) -> str:
        pass


__all__ = [
    "ForgeParams",
    "Forger",
]
