from PySide6.QtWidgets import QPushButton
from PySide6.QtCore import Qt

class OptionButton(QPushButton):
    """Checkable chip for one setting value (e.g. "60" under time)."""

    def __init__(self, label: str, kind: str, value, parent=None):
        super().__init__(label, parent)
        self.kind = kind
        self.value = value
        self.setObjectName("OptionBtn")
        self.setCheckable(True)
        self.setCursor(Qt.PointingHandCursor)
        # keep keyboard focus on the typing input
        self.setFocusPolicy(Qt.NoFocus)
