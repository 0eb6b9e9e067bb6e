# backend/src/wikitube/pipeline/gate.py
"""Completion gate.

Joins two independent signals before leaving the processing screen:

- the animator has reached its terminal step, and
- the generation request has produced data.

Either may arrive first. Once both are true the last step is marked
completed and, after a short settle delay, ``on_complete`` fires. A failure
aborts the gate instead: the animator is cancelled, any pending settle is
dropped, and ``on_abort`` fires. The gate never completes after an abort.
"""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Callable

from wikitube.constants.pipeline import SETTLE_DELAY_SECONDS
from wikitube.pipeline.animator import PipelineAnimator, Steps, is_terminal

logger = logging.getLogger(__name__)


class GateState(str, Enum):
    """Lifecycle of a completion gate."""

    WAITING = "waiting"
    SETTLING = "settling"
    COMPLETED = "completed"
    ABORTED = "aborted"


def should_transition(animation_terminal: bool, data_ready: bool, failed: bool = False) -> bool:
    """Decide whether the processing screen may be left for the wiki.

    Args:
        animation_terminal: The animator has reached its last step.
        data_ready: A successful generation result exists.
        failed: The generation request failed.

    Returns:
        True only when both signals are set and nothing failed.
    """
    return animation_terminal and data_ready and not failed


class CompletionGate:
    """AND-gate over animator progress and data readiness."""

    def __init__(
        self,
        animator: PipelineAnimator,
        on_complete: Callable[[], None],
        on_abort: Callable[[Exception], None] | None = None,
        settle_delay: float = SETTLE_DELAY_SECONDS,
    ):
        """Initialize the gate and subscribe to the animator.

        Args:
            animator: Animator whose terminal step is one of the two signals.
            on_complete: Called once, after the settle delay, on success.
            on_abort: Called once with the error on failure.
            settle_delay: Seconds between both signals being set and on_complete.
        """
        self.animator = animator
        self.on_complete = on_complete
        self.on_abort = on_abort
        self.settle_delay = settle_delay
        self.state = GateState.WAITING
        self._animation_terminal = animator.reached_terminal
        self._data_ready = False
        self._failed = False
        self._settle_task: asyncio.Task | None = None
        self._done = asyncio.Event()
        animator.add_listener(self._on_steps)

    @property
    def animation_terminal(self) -> bool:
        return self._animation_terminal

    @property
    def data_ready(self) -> bool:
        return self._data_ready

    @property
    def failed(self) -> bool:
        return self._failed

    def _on_steps(self, steps: Steps) -> None:
        if is_terminal(steps):
            self.mark_animation_terminal()

    def mark_animation_terminal(self) -> None:
        """Record that the animator reached its last step."""
        if self._animation_terminal:
            return
        self._animation_terminal = True
        self._evaluate()

    def mark_data_ready(self) -> None:
        """Record that generation produced data. Later calls are ignored."""
        if self._data_ready:
            return
        self._data_ready = True
        self._evaluate()

    def abort(self, error: Exception) -> None:
        """Fail the run: stop the animator and drop any pending transition."""
        if self.state in (GateState.COMPLETED, GateState.ABORTED):
            return
        self._failed = True
        self.state = GateState.ABORTED
        self._teardown()
        logger.info(f"Processing aborted: {error}")
        if self.on_abort is not None:
            self.on_abort(error)
        self._done.set()

    def close(self) -> None:
        """Tear down without firing callbacks (e.g. the user reset)."""
        if self.state is not GateState.COMPLETED:
            self.state = GateState.ABORTED
        self._teardown()
        self._done.set()

    async def wait(self) -> GateState:
        """Wait until the gate completes or aborts."""
        await self._done.wait()
        return self.state

    def _teardown(self) -> None:
        self.animator.cancel()
        if self._settle_task is not None and not self._settle_task.done():
            self._settle_task.cancel()

    def _evaluate(self) -> None:
        if self.state is not GateState.WAITING:
            return
        if not should_transition(self._animation_terminal, self._data_ready, self._failed):
            return
        self.animator.complete()
        self.state = GateState.SETTLING
        self._settle_task = asyncio.create_task(self._settle())

    async def _settle(self) -> None:
        await asyncio.sleep(self.settle_delay)
        if self.state is not GateState.SETTLING:
            return
        self.state = GateState.COMPLETED
        self.on_complete()
        self._done.set()
