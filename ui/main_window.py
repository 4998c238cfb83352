# ui/main_window.py
import logging

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout,
    QLabel, QMessageBox, QPushButton
)
from PySide6.QtCore import Qt, Slot

from app.audio import AudioEngine
from app.errors import InvalidConfiguration
from app.settings import GameSettings
from app.themes import stylesheet, theme_for
from services.session_controller import SessionController
from ui.session_summary import SessionSummary
from ui.test_ui import TestUI
from ui.widgets import SettingsBar
from utils.db_helper import ResultStore

logger = logging.getLogger(__name__)


def window_title(metrics=None) -> str:
    if metrics is None:
        return "Typesprint"
    return f"Typesprint - {metrics.wpm} WPM"


class MainWindow(QMainWindow):
    def __init__(self, store: ResultStore | None = None):
        super().__init__()
        self.setWindowTitle(window_title())
        self.resize(1200, 720)

        self.store = store or ResultStore()
        self.audio = AudioEngine()
        self.controller = SessionController(self.store, feedback=self.audio, parent=self)

        root = QWidget(self)
        root_v = QVBoxLayout(root)
        root_v.setContentsMargins(16, 40, 16, 16)
        root_v.setSpacing(24)

        # --- Top bar: settings + best score + restart ---
        bar = QHBoxLayout()
        self.settings_bar = SettingsBar(root)
        self.settings_bar.changed.connect(self._on_setting_changed)
        bar.addWidget(self.settings_bar, 1)

        self.lblBest = QLabel("Best: 0 WPM", root)
        self.lblBest.setObjectName("lblBest")
        bar.addWidget(self.lblBest)

        btn_reset = QPushButton("Reset test", root)
        btn_reset.setObjectName("OptionBtn")
        btn_reset.setFocusPolicy(Qt.NoFocus)
        btn_reset.clicked.connect(self._reset_test)
        bar.addWidget(btn_reset)
        root_v.addLayout(bar)

        # --- Passage and result box share the centre ---
        self.test = TestUI(self.controller, root)
        self.summary = SessionSummary(root)
        self.summary.restartRequested.connect(self._reset_test)
        self.summary.setVisible(False)

        center = QHBoxLayout()
        center.addStretch(1)
        center.addWidget(self.test, 1)
        center.addWidget(self.summary, 1)
        center.addStretch(1)
        root_v.addLayout(center, 1)
        self.setCentralWidget(root)
        self.menuBar().setVisible(False)

        self.controller.finished.connect(self._on_finished)
        self.controller.session_reset.connect(self._on_session_reset)
        self.controller.theme_changed.connect(self._apply_theme)
        self.controller.best_changed.connect(self._show_best)

        settings = self.controller.load_settings()
        self._apply_theme(settings.theme.value)
        self._show_best(self.controller.best_wpm())
        self._start(settings)

    # ---------------- Session ----------------
    def _start(self, settings: GameSettings):
        try:
            self.controller.new_session(settings)
        except InvalidConfiguration as e:
            logger.error("Cannot start session: %s", e)
            QMessageBox.warning(self, "Typesprint", f"Cannot start session: {e}")

    def _reset_test(self):
        try:
            self.controller.reset()
        except InvalidConfiguration as e:
            logger.error("Cannot reset session: %s", e)
            QMessageBox.warning(self, "Typesprint", f"Cannot start session: {e}")

    @Slot(object)
    def _on_setting_changed(self, change):
        try:
            self.controller.on_settings_changed(change)
        except InvalidConfiguration as e:
            logger.error("Rejected setting change: %s", e)
            QMessageBox.warning(self, "Typesprint", str(e))
        self.settings_bar.set_active(self.controller.settings)

    @Slot()
    def _on_session_reset(self):
        self.setWindowTitle(window_title())
        self.summary.setVisible(False)
        self.test.setVisible(True)
        self.settings_bar.set_active(self.controller.settings)
        self.test.focus_input()

    @Slot(object)
    def _on_finished(self, metrics):
        self.summary.show_result(metrics, self.controller.samples, self.controller.recent_results())
        self.test.setVisible(False)
        self.summary.setVisible(True)
        self.setWindowTitle(window_title(metrics))

    # ---------------- Theme / best ----------------
    @Slot(str)
    def _apply_theme(self, name: str):
        theme = theme_for(name)
        self.setStyleSheet(stylesheet(theme))
        self.test.set_theme(theme)
        self.summary.set_theme(theme)

    @Slot(int)
    def _show_best(self, best: int):
        self.lblBest.setText(f"Best: {best} WPM")
