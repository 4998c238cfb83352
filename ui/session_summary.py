# ui/session_summary.py
from __future__ import annotations
from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton
import pyqtgraph as pg

from app.calculation import Metrics, progress_wpm, smooth
from app.themes import Theme
from utils.graph_helper import setup_wpm_plot, update_curve, recolor_curve


class SessionSummary(QWidget):
    """
    Result box shown in place of the passage when a session finishes:
    final WPM, accuracy and mistakes, a WPM-over-time line and the last few
    saved results.
    """

    restartRequested = Signal()

    def __init__(self, parent=None):
        super().__init__(parent)
        root = QVBoxLayout(self)
        root.setSpacing(18)

        row = QHBoxLayout()
        row.setSpacing(40)
        self.lblWPM = QLabel("0 WPM", self)
        self.lblWPM.setObjectName("lblWPM")
        self.lblAcc = QLabel("0 %", self)
        self.lblMistakes = QLabel("0 mistakes", self)
        for lab in (self.lblWPM, self.lblAcc, self.lblMistakes):
            lab.setAlignment(Qt.AlignCenter)
            lab.setStyleSheet("font-size: 28px;")
            row.addWidget(lab)
        root.addLayout(row)

        self.plot = pg.PlotWidget()
        self._curve = setup_wpm_plot(self.plot, "#eab308")
        root.addWidget(self.plot, stretch=1)

        self.lblRecent = QLabel("", self)
        self.lblRecent.setObjectName("lblRecent")
        self.lblRecent.setAlignment(Qt.AlignCenter)
        self.lblRecent.setStyleSheet("font-size: 14px;")
        root.addWidget(self.lblRecent)

        btn = QPushButton("Try again", self)
        btn.setObjectName("OptionBtn")
        btn.setFocusPolicy(Qt.NoFocus)
        btn.clicked.connect(lambda: self.restartRequested.emit())
        root.addWidget(btn, alignment=Qt.AlignHCenter)

    def show_result(self, metrics: Metrics, samples, recent=()):
        self.lblWPM.setText(f"{metrics.wpm} WPM")
        self.lblAcc.setText(f"{metrics.accuracy} %")
        self.lblMistakes.setText(f"{metrics.mistakes} mistakes")

        times, wpms = progress_wpm(samples)
        update_curve(self._curve, times, smooth(wpms))
        self.lblRecent.setText(format_recent(recent))

    def set_theme(self, theme: Theme):
        recolor_curve(self._curve, theme.accent)


def format_recent(rows) -> str:
    if not rows:
        return ""
    parts = [
        f"{r['wpm']} WPM · {r['accuracy']}% · {r['duration']}s {r['difficulty']}"
        for r in rows
    ]
    return "Recent: " + "   |   ".join(parts)
