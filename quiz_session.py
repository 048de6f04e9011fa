# quiz_session.py
import logging
from dataclasses import dataclass, replace
from typing import Callable, List, Optional, Sequence, Tuple

from eurocountries import TargetCountry
from stopwatch import Timer, format_mmss

logger = logging.getLogger(__name__)

COMPLETION_MESSAGE = "Great Job! Time Taken:"


@dataclass(frozen=True)
class SessionState:
    """One immutable snapshot of a quiz session.

    remaining and found always partition the catalog: together they hold every
    country exactly once. found is in guess order, most recent last.
    """
    remaining: Tuple[TargetCountry, ...]
    found: Tuple[TargetCountry, ...] = ()
    is_active: bool = False
    show_hints: bool = False
    selected_info: Optional[TargetCountry] = None
    pending_guess: str = ""
    started: bool = False

    @property
    def score(self) -> int:
        return len(self.found)

    @property
    def catalog_size(self) -> int:
        return len(self.remaining) + len(self.found)

    @property
    def is_completed(self) -> bool:
        return self.started and not self.remaining

    @property
    def phase(self) -> str:
        if not self.started:
            return "not_started"
        if self.is_completed:
            return "completed"
        return "active" if self.is_active else "paused"


@dataclass(frozen=True)
class GuessResult:
    matched: bool
    country: Optional[TargetCountry]
    score: int
    remaining_count: int
    completed: bool
    state: SessionState


@dataclass(frozen=True)
class RenderSnapshot:
    """Everything the UI needs to draw one frame."""
    remaining: Tuple[TargetCountry, ...]
    found: Tuple[TargetCountry, ...]
    score: int
    catalog_size: int
    selected_info: Optional[TargetCountry]
    is_active: bool
    show_hints: bool
    pending_guess: str
    phase: str
    minutes: int
    seconds: int
    timer_running: bool
    elapsed_text: str
    progress_label: str
    selected_info_text: Optional[str]


# ---------- Display helpers ----------
def progress_label(score: int, catalog_size: int, minutes: int, seconds: int) -> str:
    if catalog_size and score == catalog_size:
        return f"{COMPLETION_MESSAGE} {format_mmss(minutes, seconds)}"
    return f"{score} / {catalog_size}"


def country_info_text(country: TargetCountry) -> str:
    return f"{country.name} | Capital: {country.capital}\nFun Fact: {country.fact}"


def _matches(country: TargetCountry, raw_text: str) -> bool:
    # Whole-string, case-insensitive; whitespace is significant
    return country.name.casefold() == raw_text.casefold()


# ---------- Engine ----------
class SessionEngine:
    """Quiz state machine: NotStarted -> Active <-> Paused -> Completed.

    Every operation runs to completion, stores a new SessionState and hands it
    to subscribers. The timer is only ever commanded (start/pause/reset) and
    read; it never calls back into the engine.

    check_guess does not look at is_active. Keeping guesses out while paused
    is the caller's job (the UI disables its input).
    """

    def __init__(self, catalog: Sequence[TargetCountry], timer: Timer) -> None:
        self.catalog: Tuple[TargetCountry, ...] = tuple(catalog)
        self.timer = timer
        self._listeners: List[Callable[[SessionState], None]] = []
        self._state = SessionState(remaining=self.catalog)

    @property
    def state(self) -> SessionState:
        return self._state

    def subscribe(self, listener: Callable[[SessionState], None]) -> Callable[[], None]:
        """Call `listener` with every new snapshot. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _commit(self, state: SessionState) -> SessionState:
        self._state = state
        for listener in list(self._listeners):
            listener(state)
        return state

    # --- lifecycle ---
    def start(self) -> SessionState:
        """Begin a fresh session, dropping any progress from the previous one."""
        self.timer.reset(0, auto_start=False)
        self.timer.start()
        logger.info("Session started with %d countries", len(self.catalog))
        return self._commit(replace(
            self._state,
            remaining=self.catalog,
            found=(),
            selected_info=None,
            pending_guess="",
            is_active=True,
            started=True,
        ))

    def pause_resume(self) -> SessionState:
        s = self._state
        if not s.is_completed:
            if s.is_active:
                self.timer.pause()
            else:
                self.timer.start()
        # A completed session only unlocks input; the final time stays frozen
        logger.debug("Session %s", "paused" if s.is_active else "resumed")
        return self._commit(replace(s, is_active=not s.is_active))

    def show_hide_unsolved(self) -> SessionState:
        return self._commit(replace(self._state, show_hints=not self._state.show_hints))

    # --- guessing ---
    def edit_guess(self, text: str) -> SessionState:
        return self._commit(replace(self._state, pending_guess=text))

    def check_guess(self, raw_text: Optional[str] = None) -> GuessResult:
        """Resolve a guess against the remaining pool.

        With no argument the pending input buffer is submitted. A miss changes
        nothing but the buffer, which keeps the submitted text.
        """
        s = self._state
        text = s.pending_guess if raw_text is None else raw_text

        index = next((i for i, c in enumerate(s.remaining) if _matches(c, text)), -1)
        if index == -1:
            logger.info("Guess %r did not match any remaining country", text)
            state = self._commit(replace(s, pending_guess=text))
            return GuessResult(False, None, state.score, len(state.remaining), state.is_completed, state)

        country = s.remaining[index]
        # Last country in the pool: stop the clock in this same step
        finishing = len(s.remaining) <= 1
        if finishing:
            self.timer.pause()

        state = self._commit(replace(
            s,
            remaining=s.remaining[:index] + s.remaining[index + 1:],
            found=s.found + (country,),
            pending_guess="",
            is_active=False if finishing else s.is_active,
        ))
        logger.info("Found %s (%d/%d)", country.name, state.score, state.catalog_size)
        if finishing:
            logger.info("All %d countries found in %s", state.score,
                        format_mmss(self.timer.minutes, self.timer.seconds))
        return GuessResult(True, country, state.score, len(state.remaining), state.is_completed, state)

    # --- found-country details ---
    def select_country(self, country: TargetCountry) -> SessionState:
        """Show the info panel for a found country, or hide it if already shown."""
        s = self._state
        if country not in s.found:
            logger.debug("Ignoring selection of %s: not found yet", country.name)
            return s
        selected = None if s.selected_info == country else country
        return self._commit(replace(s, selected_info=selected))

    def select_found(self, index: int) -> SessionState:
        if not 0 <= index < len(self._state.found):
            return self._state
        return self.select_country(self._state.found[index])

    # --- rendering ---
    def render(self) -> RenderSnapshot:
        s = self._state
        minutes, seconds = self.timer.minutes, self.timer.seconds
        return RenderSnapshot(
            remaining=s.remaining,
            found=s.found,
            score=s.score,
            catalog_size=s.catalog_size,
            selected_info=s.selected_info,
            is_active=s.is_active,
            show_hints=s.show_hints,
            pending_guess=s.pending_guess,
            phase=s.phase,
            minutes=minutes,
            seconds=seconds,
            timer_running=self.timer.is_running,
            elapsed_text=format_mmss(minutes, seconds),
            progress_label=progress_label(s.score, s.catalog_size, minutes, seconds),
            selected_info_text=country_info_text(s.selected_info) if s.selected_info else None,
        )
