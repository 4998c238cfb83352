from ui.widgets.option_button import OptionButton
from ui.widgets.settings_bar import SettingsBar

__all__ = ["OptionButton", "SettingsBar"]
