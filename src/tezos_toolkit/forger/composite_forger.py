"""
Forger cross-checking several forgers.
"""

import logging
from typing import List

from ..runtime.errors import ForgingMismatchError
from .interface import Forger, ForgeParams

logger = logging.getLogger(__name__)


class CompositeForger(Forger):
    """
    Forge with every wrapped forger and require identical output.

    Useful when one of the forgers is a remote node that should not be
    trusted on its own.

    Raises:
        ValueError: If no forger is given
    """

    def __init__(self, forgers: List[Forger]):
        if not forgers:
            raise ValueError("At least one forger must be provided")
        self.forgers = list(forgers)

    def forge(self, params: ForgeParams) -> str:
        results = [forger.forge(params) for forger in self.forgers]
        first = results[0]
        for forger, result in zip(self.forgers[1:], results[1:]):
            if result != first:
                logger.warning("Forging mismatch between %r and %r", self.forgers[0], forger)
                raise ForgingMismatchError(details={"results": results})
        return first
