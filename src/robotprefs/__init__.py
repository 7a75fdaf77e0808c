from .codec import decode_for_edit, encode_for_display, unescape
from .errors import RobotPrefsError
from .values import PreferenceType, PreferenceValue, PreferencesSnapshot

__version__ = "0.1.0"


__all__ = [
    "PreferenceType",
    "PreferenceValue",
    "PreferencesSnapshot",
    "RobotPrefsError",
    "decode_for_edit",
    "encode_for_display",
    "unescape",
]
