from __future__ import annotations

import logging
from typing import Callable, List, Tuple

from ..errors import TeardownError

logger = logging.getLogger(__name__)

Teardown = Callable[[], None]


class ResourceStack:
    """LIFO list of teardown actions for host resources.

    Push a teardown only after the resource has been acquired. Unwinding runs
    every action once, newest first; a failing action is logged and collected
    and the remaining actions still run.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._actions: List[Tuple[str, Teardown]] = []

    def __len__(self) -> int:
        return len(self._actions)

    def pending(self) -> list[str]:
        return [desc for desc, _ in self._actions]

    def push(self, description: str, teardown: Teardown) -> None:
        logger.debug("[%s] registered teardown: %s", self.name, description)
        self._actions.append((description, teardown))

    def unwind_all(self) -> list[TeardownError]:
        failures: list[TeardownError] = []
        while self._actions:
            description, teardown = self._actions.pop()
            logger.info("Teardown: %s", description)
            try:
                teardown()
            except Exception as e:
                err = TeardownError(description, e)
                logger.warning("%s", err)
                failures.append(err)
        return failures
