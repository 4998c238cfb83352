# ui/widgets/settings_bar.py
import logging

from PySide6.QtCore import Signal
from PySide6.QtWidgets import QWidget, QHBoxLayout, QLabel, QButtonGroup

from app.errors import InvalidConfiguration
from app.settings import TIME_OPTIONS, Difficulty, GameSettings, SettingKind, ThemeName
from app.validation import parse_setting_change
from ui.widgets.option_button import OptionButton

logger = logging.getLogger(__name__)


class SettingsBar(QWidget):
    """Time / difficulty / theme option groups. Emits one SettingsChange per click."""

    changed = Signal(object)

    def __init__(self, parent=None):
        super().__init__(parent)
        h = QHBoxLayout(self)
        h.setContentsMargins(14, 16, 14, 16)
        h.setSpacing(10)

        self._groups: dict[SettingKind, QButtonGroup] = {}
        self._add_group(h, SettingKind.TIME, [(f"{t}s", t) for t in TIME_OPTIONS])
        h.addSpacing(24)
        self._add_group(h, SettingKind.DIFFICULTY, [(d.value, d.value) for d in Difficulty])
        h.addSpacing(24)
        self._add_group(h, SettingKind.THEME, [(t.value, t.value) for t in ThemeName])
        h.addStretch(1)

    def _add_group(self, layout, kind: SettingKind, options):
        layout.addWidget(QLabel(f"{kind.value}:", self))
        group = QButtonGroup(self)
        group.setExclusive(True)
        for label, value in options:
            btn = OptionButton(label, kind.value, value, self)
            group.addButton(btn)
            layout.addWidget(btn)
        group.buttonClicked.connect(self._on_clicked)
        self._groups[kind] = group

    def _on_clicked(self, btn: OptionButton):
        try:
            change = parse_setting_change(btn.kind, btn.value)
        except InvalidConfiguration as e:
            logger.warning("Ignoring option %s=%r: %s", btn.kind, btn.value, e)
            return
        self.changed.emit(change)

    def set_active(self, settings: GameSettings):
        current = {
            SettingKind.TIME: settings.duration,
            SettingKind.DIFFICULTY: settings.difficulty.value,
            SettingKind.THEME: settings.theme.value,
        }
        for kind, group in self._groups.items():
            for btn in group.buttons():
                btn.setChecked(btn.value == current[kind])
