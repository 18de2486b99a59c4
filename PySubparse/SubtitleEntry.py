from __future__ import annotations

from dataclasses import dataclass

from PySubparse.TimeTypes import TimeSpan


@dataclass
class SubtitleEntry:
    """
    The timing and text of one subtitle, as read from or written to a subtitle file.

    line is None for image based formats. When passed to update_entries, a None line
    leaves the existing text untouched.
    """
    timespan : TimeSpan
    line : str|None = None

    @classmethod
    def from_timespan(cls, timespan : TimeSpan) -> SubtitleEntry:
        return cls(timespan, None)
