"""Pytest fixtures and shared test configuration.

Provides reusable fixtures for unit and integration tests.

Fixtures:
    - memory_store: Empty in-memory key-value store
    - repository: SessionRepository over memory_store, loaded
    - scheduler: Virtual clock with manually advanced timers
    - measurer: Height measurer with per-text heights
    - composer / shell: Core objects wired to the fakes above
    - async_client: HTTPX client for the FastAPI host
"""

from collections.abc import AsyncGenerator, Callable

import pytest
from httpx import ASGITransport, AsyncClient

from src.api import create_app
from src.chat.composer import ComposerController
from src.chat.repository import SessionRepository
from src.chat.shell import ChatShell
from src.storage.store import MemoryStore


class FakeTimer:
    """Timer handle returned by FakeScheduler."""

    def __init__(self, when: float, callback: Callable[[], None]) -> None:
        self.when = when
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeScheduler:
    """Scheduler with a virtual clock; timers fire only in ``advance``."""

    def __init__(self) -> None:
        self.time = 0.0
        self.timers: list[FakeTimer] = []

    def now(self) -> float:
        return self.time

    def call_later(self, delay: float, callback: Callable[[], None]) -> FakeTimer:
        timer = FakeTimer(self.time + delay, callback)
        self.timers.append(timer)
        return timer

    @property
    def pending(self) -> list[FakeTimer]:
        return [t for t in self.timers if not t.cancelled and not t.fired]

    def advance(self, seconds: float) -> None:
        """Move the clock forward, firing due timers in deadline order."""
        target = self.time + seconds
        while True:
            due = sorted(
                (t for t in self.pending if t.when <= target),
                key=lambda t: t.when,
            )
            if not due:
                break
            timer = due[0]
            self.time = timer.when
            timer.fired = True
            timer.callback()
        self.time = target


class StubMeasurer:
    """Returns fixed heights per draft text; empty text measures as baseline."""

    def __init__(self, baseline: float | None = 48.0) -> None:
        self.baseline = baseline
        self.heights: dict[str, float | None] = {}

    def measure(self, text: str) -> float | None:
        if text == "":
            return self.baseline
        return self.heights.get(text, self.baseline)


@pytest.fixture
def memory_store() -> MemoryStore:
    """Return an empty in-memory store."""
    return MemoryStore()


@pytest.fixture
def repository(memory_store: MemoryStore) -> SessionRepository:
    """Return a loaded repository holding one empty session."""
    repo = SessionRepository(memory_store)
    repo.load()
    return repo


@pytest.fixture
def scheduler() -> FakeScheduler:
    """Return a scheduler whose clock starts at zero."""
    return FakeScheduler()


@pytest.fixture
def measurer() -> StubMeasurer:
    """Return a measurer with a 48px baseline."""
    return StubMeasurer()


@pytest.fixture
def composer(
    repository: SessionRepository,
    scheduler: FakeScheduler,
    measurer: StubMeasurer,
) -> ComposerController:
    """Return a composer wired to the fake scheduler and measurer."""
    return ComposerController(repository, scheduler, measurer)


@pytest.fixture
def shell(repository: SessionRepository, composer: ComposerController) -> ChatShell:
    """Return a shell over the shared repository and composer."""
    return ChatShell(repository, composer)


@pytest.fixture
async def async_client() -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    Yields:
        Configured AsyncClient for making test requests.
    """
    transport = ASGITransport(app=create_app())
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
