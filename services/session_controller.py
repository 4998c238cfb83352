# services/session_controller.py
from __future__ import annotations
import logging
import time

from PySide6.QtCore import QObject, Signal

from app.calculation import Metrics, compute
from app.errors import DatabaseError, FailedPrecondition
from app.settings import GameSettings, SettingKind, SettingsChange
from app.state import Passage, Phase, SessionSnapshot, SessionState
from app.validation import parse_setting_change, validate_duration
from core.chrono import SessionClock
from services.passage_generator import PassageGenerator
from services.typing_engine import StepResult, TypingEngine

logger = logging.getLogger(__name__)


class SessionController(QObject):
    """
    Owns one typing session at a time: the passage, its state, the clock.
    Rendering listens to the signals; the store and feedback objects are
    plain collaborators.
    """

    stepped = Signal(object)      # StepResult
    ticked = Signal(int)          # seconds remaining
    finished = Signal(object)     # Metrics
    session_reset = Signal()
    theme_changed = Signal(str)
    best_changed = Signal(int)

    def __init__(
        self,
        store,
        generator: PassageGenerator | None = None,
        clock: SessionClock | None = None,
        feedback=None,
        strict: bool = False,
        now=time.monotonic,
        parent=None,
    ):
        super().__init__(parent)
        self.store = store
        self.generator = generator or PassageGenerator()
        self.clock = clock or SessionClock(parent=self)
        self.feedback = feedback
        self.strict = strict
        self._now = now

        self.settings = GameSettings()
        self.state = SessionState()
        self.passage: Passage | None = None
        self.engine = TypingEngine(self.state)
        self.samples: list[tuple[float, int, int]] = []
        self.metrics: Metrics | None = None
        self._started_mono = 0.0

        self.clock.on_tick(self._on_clock_tick)
        self.clock.started.connect(self._on_clock_started)
        self.clock.expired.connect(self._finish)
        self._handlers = {
            SettingKind.TIME: self._apply_time,
            SettingKind.DIFFICULTY: self._apply_difficulty,
            SettingKind.THEME: self._apply_theme,
        }

    # ---------------- Lifecycle ----------------
    def load_settings(self) -> GameSettings:
        """Defaults plus whatever theme was last saved."""
        try:
            theme = self.store.load_theme()
        except DatabaseError as e:
            logger.warning("Could not load saved theme: %s", e)
            theme = None
        if theme is None:
            return GameSettings()
        return GameSettings(theme=theme)

    def new_session(self, settings: GameSettings):
        # both raise InvalidConfiguration before the running session is touched
        validate_duration(settings.duration)
        passage = self.generator.for_difficulty(settings.difficulty)

        self.clock.cancel()
        self.clock.arm(settings.duration)

        self.settings = settings
        self.passage = passage
        self.state.reset(settings.duration)
        self.engine.bind(self.state, self.passage)
        self.samples = []
        self.metrics = None
        self._started_mono = 0.0
        logger.info(
            "New session: %ss, %s, %d chars",
            settings.duration, settings.difficulty.value, len(passage),
        )
        self.session_reset.emit()

    def reset(self, settings: GameSettings | None = None):
        self.new_session(settings or self.settings)

    def on_settings_changed(self, change: SettingsChange):
        change = parse_setting_change(change.kind, change.value)
        handler = self._handlers[change.kind]
        settings = handler(change.value)
        logger.info("Setting %s -> %s", change.kind.value, change.value)
        self.reset(settings)

    def _apply_time(self, value) -> GameSettings:
        return self.settings.with_duration(value)

    def _apply_difficulty(self, value) -> GameSettings:
        return self.settings.with_difficulty(value)

    def _apply_theme(self, value) -> GameSettings:
        settings = self.settings.with_theme(value)
        try:
            self.store.save_theme(settings.theme)
        except DatabaseError as e:
            logger.warning("Could not save theme: %s", e)
        self.theme_changed.emit(settings.theme.value)
        return settings

    # ---------------- Input ----------------
    def handle_input(self, previous_length: int, new_length: int, last_char: str) -> StepResult:
        was_idle = self.state.phase is Phase.IDLE
        try:
            result = self.engine.apply_input(previous_length, new_length, last_char)
        except FailedPrecondition:
            if self.strict:
                raise
            logger.exception("Input rejected, resetting session")
            self.reset()
            return StepResult.IGNORED

        if was_idle and self.state.phase is not Phase.IDLE:
            self.clock.start_on_first_event()

        self.notify_step(result)
        if result.is_completed:
            self._finish()
        return result

    def notify_step(self, result: StepResult):
        if self.feedback is not None and not result.is_ignored:
            self.feedback.on_step(result)
        self.stepped.emit(result)

    # ---------------- Clock ----------------
    def _on_clock_started(self):
        self._started_mono = self._now()

    def _on_clock_tick(self, _clock_remaining: int):
        # the clock emits expired right after its last tick; _finish runs there
        result = self.engine.tick()
        snap = self.engine.snapshot()
        self.samples.append((self._now() - self._started_mono, snap.cursor, snap.mistakes))
        self.ticked.emit(result.remaining)

    # ---------------- Finish ----------------
    def _finish(self):
        if self.metrics is not None:
            return
        self.clock.cancel()
        snap = self.engine.snapshot()
        self.metrics = compute(snap.cursor, snap.mistakes, self.settings.duration)
        logger.info(
            "Session finished: %d WPM, %d%% accuracy, %d mistakes",
            self.metrics.wpm, self.metrics.accuracy, self.metrics.mistakes,
        )
        self.record_result(self.metrics)
        self.finished.emit(self.metrics)

    def record_result(self, metrics: Metrics):
        try:
            best = self.store.record(metrics, self.settings.duration, self.settings.difficulty.value)
        except DatabaseError as e:
            logger.error("Could not record result: %s", e)
            return
        self.best_changed.emit(best)

    def best_wpm(self) -> int:
        try:
            return self.store.best_wpm()
        except DatabaseError as e:
            logger.warning("Could not load best WPM: %s", e)
            return 0

    def recent_results(self, limit: int = 5) -> list[dict]:
        try:
            return self.store.recent(limit)
        except DatabaseError as e:
            logger.warning("Could not load recent results: %s", e)
            return []

    def snapshot(self) -> SessionSnapshot:
        return self.engine.snapshot()
