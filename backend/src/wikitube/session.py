# backend/src/wikitube/session.py
"""Application session state machine.

The session is always on exactly one screen:

- ``EntryScreen``: waiting for a channel name, optionally showing an error.
- ``ProcessingScreen``: one run in flight (animator ticking, request pending).
- ``BrowsingScreen``: an encyclopaedia is loaded.

A browsing screen cannot exist without data, and a run's late result is only
applied while that same run is still the one on screen.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from dataclasses import dataclass
from functools import partial
from typing import Callable, ClassVar, Union

from wikitube.auth import MockAuthProvider
from wikitube.constants.pipeline import SETTLE_DELAY_SECONDS, TICK_INTERVAL_SECONDS
from wikitube.generation.errors import ConfigurationError, GenerationError
from wikitube.generation.generator import WikiGenerator
from wikitube.pipeline.animator import PipelineAnimator, Steps
from wikitube.pipeline.gate import CompletionGate, GateState
from wikitube.wiki.models import WikiData

logger = logging.getLogger(__name__)


class SessionStateError(Exception):
    """Raised when an action is not allowed on the current screen."""

    pass


@dataclass(frozen=True)
class EntryScreen:
    """Channel name input, with the last failure if any."""

    error: str | None = None
    name: ClassVar[str] = "entry"


@dataclass(frozen=True)
class ProcessingScreen:
    """A generation run in progress."""

    run_id: str
    channel_name: str
    name: ClassVar[str] = "processing"


@dataclass(frozen=True)
class BrowsingScreen:
    """A loaded encyclopaedia."""

    data: WikiData
    name: ClassVar[str] = "browsing"


Screen = Union[EntryScreen, ProcessingScreen, BrowsingScreen]

# Type alias for a callable building a configured generator
GeneratorFactory = Callable[[], WikiGenerator]


class WikiSession:
    """Owns the current screen and drives one run at a time."""

    def __init__(
        self,
        generator_factory: GeneratorFactory,
        tick_interval: float = TICK_INTERVAL_SECONDS,
        settle_delay: float = SETTLE_DELAY_SECONDS,
        auth: MockAuthProvider | None = None,
    ):
        """Initialize the session on the entry screen.

        Args:
            generator_factory: Builds the generator for each run.
            tick_interval: Seconds between processing step advances.
            settle_delay: Pause before switching to the loaded wiki.
            auth: Authentication provider (a fresh mock by default).
        """
        self.generator_factory = generator_factory
        self.tick_interval = tick_interval
        self.settle_delay = settle_delay
        self.auth = auth or MockAuthProvider()
        self._screen: Screen = EntryScreen()
        self._animator: PipelineAnimator | None = None
        self._gate: CompletionGate | None = None
        self._pending: WikiData | None = None
        self._saved: list[str] = []
        # Strong references to in-flight requests; they are never cancelled
        self._requests: set[asyncio.Task] = set()

    @property
    def screen(self) -> Screen:
        return self._screen

    @property
    def wiki_data(self) -> WikiData | None:
        if isinstance(self._screen, BrowsingScreen):
            return self._screen.data
        return None

    @property
    def steps(self) -> Steps:
        """Steps of the current run, empty when not processing."""
        if self._animator is None:
            return ()
        return self._animator.steps

    @property
    def data_ready(self) -> bool:
        return self._gate is not None and self._gate.data_ready

    @property
    def saved_articles(self) -> list[str]:
        return list(self._saved)

    def start(self, channel_name: str) -> Screen:
        """Begin processing a channel.

        Checks configuration before anything starts; on a missing credential
        the session stays on the entry screen with the error shown.

        Args:
            channel_name: Channel name as typed.

        Returns:
            The new processing screen.

        Raises:
            ValueError: If the name is blank.
            SessionStateError: If a run is already in progress.
            ConfigurationError: If the API credential is missing.
        """
        name = channel_name.strip()
        if not name:
            raise ValueError("channel_name must not be empty")
        if isinstance(self._screen, ProcessingScreen):
            raise SessionStateError("A channel is already being processed")

        self._discard_run()
        self._saved.clear()

        generator = self.generator_factory()
        try:
            generator.ensure_configured()
        except ConfigurationError as e:
            logger.error(f"Cannot start processing '{name}': {e}")
            self._screen = EntryScreen(error=str(e))
            raise

        run_id = str(uuid.uuid4())
        self._screen = ProcessingScreen(run_id=run_id, channel_name=name)

        animator = PipelineAnimator(interval=self.tick_interval)
        self._gate = CompletionGate(
            animator,
            on_complete=partial(self._on_complete, run_id),
            on_abort=partial(self._on_abort, run_id),
            settle_delay=self.settle_delay,
        )
        self._animator = animator
        animator.start()

        task = asyncio.create_task(self._request(run_id, generator, name))
        self._requests.add(task)
        task.add_done_callback(self._requests.discard)

        logger.info(f"Processing channel '{name}' (run {run_id})")
        return self._screen

    def reset(self) -> Screen:
        """Return to an empty entry screen, discarding any run or wiki.

        An in-flight request keeps running but its result is ignored.
        """
        self._discard_run()
        self._saved.clear()
        self._screen = EntryScreen()
        return self._screen

    async def wait_until_settled(self) -> Screen:
        """Wait for the current run (if any) to finish, then return the screen."""
        gate = self._gate
        if gate is not None:
            await gate.wait()
        return self._screen

    def toggle_saved(self, entry_id: str) -> bool:
        """Save or unsave an article for the signed-in user.

        Returns:
            True if the article is now saved.

        Raises:
            SessionStateError: If no encyclopaedia is loaded.
            KeyError: If the entry does not exist.
            PermissionError: If nobody is signed in.
        """
        data = self.wiki_data
        if data is None:
            raise SessionStateError("No encyclopaedia is loaded")
        if data.get_entry(entry_id) is None:
            raise KeyError(entry_id)
        if self.auth.current_user is None:
            raise PermissionError("Sign in to save articles")

        if entry_id in self._saved:
            self._saved.remove(entry_id)
            return False
        self._saved.append(entry_id)
        return True

    def _is_current(self, run_id: str) -> bool:
        return isinstance(self._screen, ProcessingScreen) and self._screen.run_id == run_id

    async def _request(self, run_id: str, generator: WikiGenerator, name: str) -> None:
        try:
            data = await generator.generate(name)
        except GenerationError as e:
            self._fail(run_id, e)
            return
        except Exception:
            logger.exception(f"Unexpected failure generating '{name}' (run {run_id})")
            self._fail(run_id, GenerationError())
            return

        if not self._is_current(run_id) or self._gate is None:
            logger.info(f"Ignoring result of superseded run {run_id}")
            return

        self._pending = data
        self._gate.mark_data_ready()

    def _fail(self, run_id: str, error: GenerationError) -> None:
        if self._is_current(run_id) and self._gate is not None:
            self._gate.abort(error)
        else:
            logger.info(f"Ignoring failure of superseded run {run_id}")

    def _on_complete(self, run_id: str) -> None:
        if not self._is_current(run_id) or self._pending is None:
            return
        data = self._pending
        self._release_run()
        self._screen = BrowsingScreen(data=data)
        logger.info(f"Encyclopaedia ready for '{data.channel_name}' ({data.total_videos} entries)")

    def _on_abort(self, run_id: str, error: Exception) -> None:
        if not self._is_current(run_id):
            return
        self._release_run()
        self._screen = EntryScreen(error=str(error))

    def _discard_run(self) -> None:
        if self._gate is not None and self._gate.state in (GateState.WAITING, GateState.SETTLING):
            self._gate.close()
        self._release_run()

    def _release_run(self) -> None:
        self._animator = None
        self._gate = None
        self._pending = None
