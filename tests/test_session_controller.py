from __future__ import annotations

import pytest

from app.calculation import Metrics
from app.errors import DatabaseError, FailedPrecondition, InvalidConfiguration
from app.settings import Difficulty, GameSettings, SettingKind, SettingsChange, ThemeName
from app.state import Phase, Verdict
from services.passage_generator import PassageGenerator
from services.session_controller import SessionController
from services.typing_engine import Direction, StepResult
from utils.db_helper import ResultStore


class RecordingFeedback:
    def __init__(self) -> None:
        self.steps: list[StepResult] = []

    def on_step(self, result: StepResult) -> None:
        self.steps.append(result)


class BrokenStore:
    def load_theme(self):
        raise DatabaseError("disk gone")

    def save_theme(self, theme):
        raise DatabaseError("disk gone")

    def record(self, metrics, duration, difficulty):
        raise DatabaseError("disk gone")

    def best_wpm(self):
        raise DatabaseError("disk gone")

    def recent(self, limit):
        raise DatabaseError("disk gone")


class FakeClock:
    """Monotonic clock the test moves by hand."""

    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


def _make(store, generator, **kwargs) -> SessionController:
    return SessionController(store, generator=generator, **kwargs)


def _type_text(controller: SessionController, text: str) -> list[StepResult]:
    results = []
    for i, ch in enumerate(text):
        results.append(controller.handle_input(i, i + 1, ch))
    return results


def _tick(controller: SessionController, times: int = 1) -> None:
    for _ in range(times):
        controller.clock._on_timeout()


def test_new_session_builds_passage_and_arms_clock(store, generator) -> None:
    controller = _make(store, generator)
    resets = []
    controller.session_reset.connect(lambda: resets.append(True))

    controller.new_session(GameSettings(duration=15))

    assert controller.passage is not None
    assert len(controller.passage) > 0
    assert controller.state.phase is Phase.IDLE
    assert controller.state.time_remaining == 15
    assert controller.clock.is_armed
    assert not controller.clock.is_running
    assert controller.engine.passage is controller.passage
    assert controller.engine.state is controller.state
    assert resets == [True]


def test_first_keystroke_starts_clock(store, generator) -> None:
    controller = _make(store, generator)
    controller.new_session(GameSettings())
    first = controller.passage[0].expected

    controller.handle_input(0, 1, first)

    assert controller.state.phase is Phase.RUNNING
    assert controller.clock.is_running
    controller.clock.cancel()


def test_steps_reach_feedback_and_signal(store, generator) -> None:
    feedback = RecordingFeedback()
    controller = _make(store, generator, feedback=feedback)
    emitted = []
    controller.stepped.connect(emitted.append)
    controller.new_session(GameSettings())

    controller.handle_input(0, 1, "#")
    controller.handle_input(1, 0, "")

    assert feedback.steps == [
        StepResult.stepped(Direction.FORWARD, 1),
        StepResult.stepped(Direction.BACK, 0),
    ]
    assert emitted == feedback.steps
    assert controller.state.mistakes == 0


def test_completing_passage_finishes_and_records(store, generator) -> None:
    controller = _make(store, generator)
    finished, bests = [], []
    controller.finished.connect(finished.append)
    controller.best_changed.connect(bests.append)
    controller.new_session(GameSettings(duration=30))
    text = controller.passage.text

    results = _type_text(controller, text)

    assert results[-1] is StepResult.COMPLETED
    assert controller.state.phase is Phase.FINISHED
    assert controller.state.mistakes == 0
    assert not controller.clock.is_armed
    expected_wpm = int((len(text) / 5) / 0.5 + 0.5)
    assert finished == [Metrics(wpm=expected_wpm, accuracy=100, mistakes=0)]
    assert bests == [expected_wpm]
    assert store.best_wpm() == expected_wpm


def test_clock_expiry_finishes_session(store, generator) -> None:
    now = FakeClock()
    controller = _make(store, generator, now=now)
    finished, ticks = [], []
    controller.finished.connect(finished.append)
    controller.ticked.connect(ticks.append)
    controller.new_session(GameSettings(duration=3))

    controller.handle_input(0, 1, controller.passage[0].expected)
    for _ in range(3):
        now.now += 1.0
        _tick(controller)

    assert ticks == [2, 1, 0]
    assert controller.state.phase is Phase.FINISHED
    assert controller.state.cursor == 1
    # 1 char / 5 over 3 s
    assert finished == [Metrics(wpm=4, accuracy=100, mistakes=0)]
    assert [s[0] for s in controller.samples] == [1.0, 2.0, 3.0]
    assert controller.handle_input(1, 2, "x").is_ignored


def test_finish_happens_once(store, generator) -> None:
    controller = _make(store, generator)
    finished = []
    controller.finished.connect(finished.append)
    controller.new_session(GameSettings(duration=1))
    _type_text(controller, controller.passage.text)
    _tick(controller, 2)
    assert len(finished) == 1


def test_reset_discards_progress_and_cancels_clock(store, generator) -> None:
    controller = _make(store, generator)
    controller.new_session(GameSettings(duration=30))
    old_passage = controller.passage
    controller.handle_input(0, 1, "#")
    assert controller.clock.is_running

    controller.reset()

    assert controller.passage is not old_passage
    assert controller.state.cursor == 0
    assert controller.state.mistakes == 0
    assert controller.state.phase is Phase.IDLE
    assert controller.state.time_remaining == 30
    assert not controller.clock.is_running
    assert controller.clock.is_armed
    assert all(c.verdict is Verdict.PENDING for c in controller.passage)


def test_stale_tick_after_reset_does_not_touch_fresh_session(store, generator) -> None:
    controller = _make(store, generator)
    controller.new_session(GameSettings(duration=30))
    controller.handle_input(0, 1, "#")
    controller.reset()

    _tick(controller)

    assert controller.state.time_remaining == 30
    assert controller.state.phase is Phase.IDLE


def test_difficulty_change_mid_session_resets_with_new_pool(store, generator) -> None:
    controller = _make(store, generator)
    controller.new_session(GameSettings())
    _type_text(controller, "ab")

    controller.on_settings_changed(SettingsChange(SettingKind.DIFFICULTY, Difficulty.LONG))

    assert controller.settings.difficulty is Difficulty.LONG
    assert controller.state.cursor == 0
    assert controller.state.mistakes == 0
    words = set(controller.passage.text.split(" ")) - {""}
    assert words <= {"klawiatura", "monitor"}


def test_time_change_rearms_with_new_duration(store, generator) -> None:
    controller = _make(store, generator)
    controller.new_session(GameSettings())
    controller.on_settings_changed(SettingsChange(SettingKind.TIME, "60"))
    assert controller.settings.duration == 60
    assert controller.state.time_remaining == 60
    assert controller.clock.remaining == 60


def test_theme_change_is_saved_and_announced(store, generator) -> None:
    controller = _make(store, generator)
    themes = []
    controller.theme_changed.connect(themes.append)
    controller.new_session(GameSettings())

    controller.on_settings_changed(SettingsChange(SettingKind.THEME, "light"))

    assert themes == ["light"]
    assert controller.settings.theme is ThemeName.LIGHT
    assert store.load_theme() is ThemeName.LIGHT
    assert controller.load_settings() == GameSettings(theme=ThemeName.LIGHT)


def test_invalid_setting_keeps_running_session(store, generator) -> None:
    controller = _make(store, generator)
    controller.new_session(GameSettings())
    controller.handle_input(0, 1, "#")

    with pytest.raises(InvalidConfiguration):
        controller.on_settings_changed(SettingsChange(SettingKind.TIME, 0))

    assert controller.state.cursor == 1
    assert controller.clock.is_running
    controller.clock.cancel()


def test_empty_pool_aborts_session_start(store) -> None:
    controller = _make(store, PassageGenerator({Difficulty.SHORT: []}, word_count=3))
    with pytest.raises(InvalidConfiguration):
        controller.new_session(GameSettings())
    assert controller.passage is None


def test_input_before_session_raises_in_strict_mode(store, generator) -> None:
    controller = _make(store, generator, strict=True)
    with pytest.raises(FailedPrecondition):
        controller.handle_input(0, 1, "a")


def test_input_before_session_resets_silently(store, generator) -> None:
    controller = _make(store, generator)
    result = controller.handle_input(0, 1, "a")
    assert result.is_ignored
    assert controller.passage is not None
    assert controller.state.phase is Phase.IDLE


def test_best_score_only_increases_across_sessions(store, generator) -> None:
    controller = _make(store, generator)
    for wpm in (30, 20, 45, 44):
        controller.record_result(Metrics(wpm=wpm, accuracy=100, mistakes=0))
    assert store.best_wpm() == 45
    assert controller.best_wpm() == 45


def test_store_failures_do_not_break_session(generator) -> None:
    controller = _make(BrokenStore(), generator)
    assert controller.load_settings() == GameSettings()
    controller.new_session(GameSettings(duration=30))
    controller.on_settings_changed(SettingsChange(SettingKind.THEME, ThemeName.LIGHT))

    results = _type_text(controller, controller.passage.text)

    assert results[-1] is StepResult.COMPLETED
    assert controller.metrics is not None
    assert controller.best_wpm() == 0
    assert controller.recent_results() == []


def test_unwritable_store_folder_does_not_crash_last_keystroke(tmp_path, generator) -> None:
    (tmp_path / "data").write_text("not a folder")
    controller = _make(ResultStore(str(tmp_path / "data" / "sub" / "t.db")), generator)
    finished = []
    controller.finished.connect(finished.append)
    controller.new_session(GameSettings())

    results = _type_text(controller, controller.passage.text)

    assert results[-1] is StepResult.COMPLETED
    assert len(finished) == 1
    assert controller.recent_results() == []


def test_recent_results_lists_finished_sessions_newest_first(store, generator) -> None:
    controller = _make(store, generator)
    controller.new_session(GameSettings(duration=30))
    _type_text(controller, controller.passage.text)
    controller.new_session(GameSettings(duration=15, difficulty=Difficulty.LONG))
    controller.handle_input(0, 1, "#")
    _tick(controller, 15)

    rows = controller.recent_results()

    assert [(r["duration"], r["difficulty"]) for r in rows] == [(15, "long"), (30, "short")]
    assert rows[0]["mistakes"] == 1


def test_snapshot_tracks_typed_progress(store, generator) -> None:
    controller = _make(store, generator)
    controller.new_session(GameSettings())
    first = controller.passage[0].expected

    controller.handle_input(0, 1, first)
    controller.handle_input(1, 2, "#")
    snap = controller.snapshot()

    assert (snap.cursor, snap.mistakes) == (2, 1)
    assert snap.length == len(controller.passage)
    assert not snap.is_finished
    controller.clock.cancel()
