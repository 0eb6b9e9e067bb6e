# backend/src/wikitube/pipeline/animator.py
"""Processing step animator.

The processing screen shows a fixed list of steps that advance on a timer.
The timer is purely presentational: it does not observe the generation
request. Each tick derives a new tuple of steps from the previous one, so
readers never see a step list being changed under them.

Timeline with the default 1.2s interval and five steps::

    t=1.2  step 1 active
    t=2.4  step 1 completed, step 2 active
    ...
    t=6.0  step 4 completed, step 5 active   <- terminal, ticking stops

Step 5 stays active until the completion gate confirms the data is ready.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable

from wikitube.constants.pipeline import PIPELINE_STEPS, TICK_INTERVAL_SECONDS

logger = logging.getLogger(__name__)


class StepStatus(str, Enum):
    """Status of one processing step."""

    PENDING = "pending"
    ACTIVE = "active"
    COMPLETED = "completed"


_STATUS_RANK = {
    StepStatus.PENDING: 0,
    StepStatus.ACTIVE: 1,
    StepStatus.COMPLETED: 2,
}


@dataclass(frozen=True)
class ProcessingStep:
    """One labelled step on the processing screen.

    Attributes:
        id: 1-based position.
        label: Short step name.
        details: One-line description of what the step stands for.
        status: Current status.
    """

    id: int
    label: str
    details: str
    status: StepStatus = StepStatus.PENDING


Steps = tuple[ProcessingStep, ...]

# Type alias for step change listeners
StepListener = Callable[[Steps], None]


def initial_steps() -> Steps:
    """Create the five pending steps for a new run."""
    return tuple(
        ProcessingStep(id=idx, label=label, details=details)
        for idx, (label, details) in enumerate(PIPELINE_STEPS, start=1)
    )


def _promote(step: ProcessingStep, status: StepStatus) -> ProcessingStep:
    """Raise a step's status; never lowers it."""
    if _STATUS_RANK[status] > _STATUS_RANK[step.status]:
        return replace(step, status=status)
    return step


def advance(steps: Steps, cursor: int) -> Steps:
    """Apply one tick at the given cursor.

    Marks the step before the cursor completed and the step at the cursor
    active. Cursors outside the list touch only the steps that exist.

    Args:
        steps: Current steps.
        cursor: 0-based index of the step becoming active.

    Returns:
        New tuple of steps.
    """
    updated = list(steps)
    if 0 < cursor <= len(updated):
        updated[cursor - 1] = _promote(updated[cursor - 1], StepStatus.COMPLETED)
    if 0 <= cursor < len(updated):
        updated[cursor] = _promote(updated[cursor], StepStatus.ACTIVE)
    return tuple(updated)


def complete_final(steps: Steps) -> Steps:
    """Mark the last step completed."""
    if not steps:
        return steps
    return steps[:-1] + (_promote(steps[-1], StepStatus.COMPLETED),)


def is_terminal(steps: Steps) -> bool:
    """True once the last step has been reached."""
    return bool(steps) and steps[-1].status is not StepStatus.PENDING


def is_finished(steps: Steps) -> bool:
    """True once the last step is completed."""
    return bool(steps) and steps[-1].status is StepStatus.COMPLETED


class PipelineAnimator:
    """Advances processing steps on a fixed interval.

    Must be started from a running event loop. Cancelling stops the timer and
    turns any later tick into a no-op.
    """

    def __init__(
        self,
        interval: float = TICK_INTERVAL_SECONDS,
        steps: Steps | None = None,
    ):
        """Initialize the animator.

        Args:
            interval: Seconds between ticks.
            steps: Starting steps (defaults to five pending steps).
        """
        self.interval = interval
        self._steps = steps if steps is not None else initial_steps()
        self._cursor = 0
        self._listeners: list[StepListener] = []
        self._task: asyncio.Task | None = None
        self._cancelled = False
        self._terminal = asyncio.Event()

    @property
    def steps(self) -> Steps:
        return self._steps

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def reached_terminal(self) -> bool:
        return is_terminal(self._steps)

    @property
    def finished(self) -> bool:
        return is_finished(self._steps)

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def add_listener(self, listener: StepListener) -> None:
        """Register a callback invoked with the new steps after every change."""
        self._listeners.append(listener)

    def start(self) -> None:
        """Start ticking on the running event loop.

        Raises:
            RuntimeError: If already started or cancelled.
        """
        if self._task is not None or self._cancelled:
            raise RuntimeError("Animator can only be started once")
        self._task = asyncio.create_task(self._run())

    async def _run(self) -> None:
        while self._cursor < len(self._steps):
            await asyncio.sleep(self.interval)
            self.tick()

    def tick(self) -> None:
        """Advance one step. Does nothing after cancel or past the last step."""
        if self._cancelled or self._cursor >= len(self._steps):
            return
        self._steps = advance(self._steps, self._cursor)
        self._cursor += 1
        logger.debug(f"Pipeline step {self._cursor}/{len(self._steps)} active")
        self._changed()

    def complete(self) -> None:
        """Mark the last step completed once the terminal step is reached."""
        if self._cancelled or not self.reached_terminal or self.finished:
            return
        self._steps = complete_final(self._steps)
        self._changed()

    def cancel(self) -> None:
        """Stop the timer. No step changes after this call."""
        self._cancelled = True
        if self._task is not None and not self._task.done():
            self._task.cancel()

    async def wait_terminal(self) -> None:
        """Wait until the last step is reached."""
        await self._terminal.wait()

    def _changed(self) -> None:
        if self.reached_terminal:
            self._terminal.set()
        for listener in list(self._listeners):
            listener(self._steps)
