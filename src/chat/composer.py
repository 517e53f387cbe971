"""Composer controller: draft text, auto-grow height and the empty-input hint.

Hint state machine::

    Hidden --submit with empty draft--> Visible(now + D)
    Visible --deadline | dismiss | typing | close--> Hidden

D is 2000 ms for the send button and 5000 ms for the Enter key. Only one
deadline timer is pending at a time; showing the hint again cancels the
previous timer before scheduling a new one.
"""

import logging
import math
from collections.abc import Callable
from typing import Protocol

from src.chat.config import EXPLICIT_HINT_MS, KEYBOARD_HINT_MS
from src.chat.repository import SessionRepository
from src.chat.timing import AsyncioScheduler, Scheduler, TimerHandle
from src.models.schemas import HIDDEN_HINT, HintState, TriggerSource, clean_text

logger = logging.getLogger(__name__)

MAX_HEIGHT = 192.0
FALLBACK_HEIGHT = 48.0
HINT_TEXT = "Try asking Thespis a question"


class HeightMeasurer(Protocol):
    def measure(self, text: str) -> float | None:
        """Natural rendered height of ``text`` in pixels, or None if unknown."""
        ...


class LineMetrics:
    """Estimates composer height from line count and wrap width.

    Used when no real layout engine is available to measure the textarea.
    """

    def __init__(
        self,
        line_height: float = 24.0,
        padding: float = 24.0,
        chars_per_line: int = 60,
    ) -> None:
        self.line_height = line_height
        self.padding = padding
        self.chars_per_line = max(1, chars_per_line)

    def measure(self, text: str) -> float:
        lines = sum(
            max(1, math.ceil(len(line) / self.chars_per_line)) for line in text.split("\n")
        )
        return self.padding + lines * self.line_height


def clamp_height(content_height: float, baseline: float, max_height: float = MAX_HEIGHT) -> float:
    """Clamp a content height to ``[baseline, max_height]``; baseline wins."""
    return max(baseline, min(content_height, max_height))


class ComposerController:
    """Owns the unsent draft for one composer.

    Non-empty submits go to ``SessionRepository.append_message``. Empty
    submits show the hint instead. Call ``close()`` (or use the controller
    as a context manager) to cancel any pending hint timer.
    """

    def __init__(
        self,
        repository: SessionRepository,
        scheduler: Scheduler | None = None,
        measurer: HeightMeasurer | None = None,
        *,
        explicit_hint_ms: int = EXPLICIT_HINT_MS,
        keyboard_hint_ms: int = KEYBOARD_HINT_MS,
        on_change: Callable[[], None] | None = None,
    ) -> None:
        """Initialize the controller and capture the baseline height.

        Args:
            repository: Receives submitted messages.
            scheduler: Clock and timers. Defaults to the running asyncio loop.
            measurer: Measures rendered draft height. Defaults to LineMetrics.
            explicit_hint_ms: Hint duration for send-button submits.
            keyboard_hint_ms: Hint duration for Enter submits.
            on_change: Called when state changes outside a method call, i.e.
                when the hint deadline elapses.
        """
        self._repository = repository
        self._scheduler = scheduler or AsyncioScheduler()
        self._measurer = measurer or LineMetrics()
        self._hint_seconds = {
            TriggerSource.EXPLICIT: explicit_hint_ms / 1000,
            TriggerSource.KEYBOARD: keyboard_hint_ms / 1000,
        }
        self.on_change = on_change

        self._draft = ""
        self._hint: HintState = HIDDEN_HINT
        self._timer: TimerHandle | None = None
        self._closed = False

        # Natural single-line height of the empty composer.
        measured = self._measurer.measure("")
        self._baseline = measured if measured and measured > 0 else FALLBACK_HEIGHT
        self._height = self._baseline

    @property
    def draft(self) -> str:
        return self._draft

    @property
    def height(self) -> float:
        return self._height

    @property
    def baseline_height(self) -> float:
        return self._baseline

    @property
    def hint(self) -> HintState:
        return self._hint

    @property
    def closed(self) -> bool:
        return self._closed

    def update_draft(self, text: str) -> None:
        """Replace the draft and recompute the composer height.

        Split or lone surrogates from the browser are cleaned up first. A
        draft with visible content hides the hint immediately.
        """
        text = clean_text(text)
        self._draft = text
        self._height = self._compute_height(text)
        if text.strip():
            self._hide_hint()

    def submit(self, trigger: TriggerSource = TriggerSource.EXPLICIT) -> bool:
        """Send the draft to the active session.

        Args:
            trigger: Source of the submit; selects the hint duration.

        Returns:
            True if a message was appended. False if the hint was shown or
            the message could not be stored, in which case the draft is kept.
        """
        text = self._draft.strip()
        if not text:
            self._show_hint(trigger)
            return False

        if not self._repository.append_message(text):
            return False
        self._draft = ""
        self._height = self._baseline
        return True

    def handle_key(self, key: str, shift: bool = False, cursor: int | None = None) -> bool:
        """Handle a key press in the composer.

        Enter submits via the keyboard path. Shift+Enter inserts a newline at
        ``cursor`` (end of the draft when omitted).

        Returns:
            True if the key was consumed and the view should suppress its
            default action.
        """
        if key != "Enter":
            return False

        if shift:
            pos = len(self._draft) if cursor is None else max(0, min(cursor, len(self._draft)))
            self.update_draft(self._draft[:pos] + "\n" + self._draft[pos:])
        else:
            self.submit(TriggerSource.KEYBOARD)
        return True

    def dismiss_hint(self) -> None:
        self._hide_hint()

    def reset(self) -> None:
        """Clear the draft, restore baseline height and hide the hint."""
        self._draft = ""
        self._height = self._baseline
        self._hide_hint()

    def close(self) -> None:
        """Cancel any pending timer. Later hint requests are ignored."""
        self._hide_hint()
        self._closed = True

    def __enter__(self) -> "ComposerController":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _compute_height(self, text: str) -> float:
        content = self._measurer.measure(text)
        if content is None:
            return self._baseline
        return clamp_height(content, self._baseline)

    def _show_hint(self, trigger: TriggerSource) -> None:
        if self._closed:
            return

        self._cancel_timer()
        delay = self._hint_seconds[trigger]
        self._hint = HintState(visible=True, expires_at=self._scheduler.now() + delay)
        self._timer = self._scheduler.call_later(delay, self._on_deadline)
        logger.debug(f"Showing empty-input hint for {delay:.1f}s ({trigger.value})")

    def _hide_hint(self) -> None:
        self._cancel_timer()
        self._hint = HIDDEN_HINT

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _on_deadline(self) -> None:
        self._timer = None
        if self._closed or not self._hint.visible:
            return
        self._hint = HIDDEN_HINT
        if self.on_change is not None:
            self.on_change()
