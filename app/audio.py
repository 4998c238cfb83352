from PySide6.QtMultimedia import QSoundEffect
from PySide6.QtCore import QUrl

KEY_SFX = "assets/sfx/key_click.wav"


class AudioEngine:
    """Keypress click, fed every StepResult by the session controller."""

    def __init__(self, path: str = KEY_SFX):
        self.key = QSoundEffect()
        self.key.setSource(QUrl.fromLocalFile(path))
        self.key.setVolume(0.25)
        self.enabled = True

    def play_key(self):  self.enabled and self.key.play()

    def on_step(self, result):
        self.play_key()
