from __future__ import annotations
from collections.abc import Mapping
from datetime import timedelta
from typing import Any, TypeAlias

from PySubparse.Helpers.Localization import _
from PySubparse.Helpers.Parse import ParseTimeDelta
from PySubparse.TimeTypes import TimeDelta

SettingType: TypeAlias = str | int | float | bool | timedelta | TimeDelta | None

_BOOL_STRINGS = {'true': True, 'false': False}

class SettingsError(Exception):
    """Raised when a parse option has a value of the wrong type."""
    pass

class SettingsType(dict[str, SettingType]):
    """
    Parse options, with getters that convert each value to the type the parsers expect

    Recognised keys:
        encoding: text encoding of the subtitle data (sniffed when not set)
        fps: frame rate for frame-indexed formats
        idx_last_entry_duration: display time of the last entry of a VobSub index, in ms or "H:MM:SS.mmm"
        strict_decoding: fail when decoding produces replacement characters (default True)
    """
    def __init__(self, settings : Mapping[str,SettingType]|None = None):
        super().__init__(settings if isinstance(settings, SettingsType) else dict(settings or {}))

    def get_bool(self, key : str, default : bool|None = False) -> bool:
        value = self.get(key, default)
        if value is None or isinstance(value, bool):
            return bool(value)

        if isinstance(value, str) and value.lower() in _BOOL_STRINGS:
            return _BOOL_STRINGS[value.lower()]

        raise self._conversion_error(key, value, "bool")

    def get_float(self, key : str, default : float|None = None) -> float|None:
        value = self.get(key, default)
        if value is None:
            return None

        if isinstance(value, bool) or not isinstance(value, (int, float, str)):
            raise self._conversion_error(key, value, "float")

        try:
            return float(value)
        except ValueError:
            raise self._conversion_error(key, value, "float")

    def get_str(self, key : str, default : str|None = None) -> str|None:
        value = self.get(key, default)
        return value if value is None or isinstance(value, str) else str(value)

    def get_timedelta(self, key : str, default : TimeDelta) -> TimeDelta:
        """
        A duration given as a TimeDelta, a datetime.timedelta, milliseconds, or a string like "0:01:00.500"
        """
        value = self.get(key, default)
        if value is None:
            return default

        if isinstance(value, TimeDelta):
            return value

        if isinstance(value, timedelta):
            return TimeDelta.from_timedelta(value)

        duration = ParseTimeDelta(value) if isinstance(value, (int, float, str)) else None
        if duration is None:
            raise self._conversion_error(key, value, "duration")
        return duration

    @staticmethod
    def _conversion_error(key : str, value : Any, target : str) -> SettingsError:
        return SettingsError(_("Setting '{key}' has a {type} value {value}, which is not a valid {target}").format(
            key=key, type=type(value).__name__, value=repr(value), target=target))
