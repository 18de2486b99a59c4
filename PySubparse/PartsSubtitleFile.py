from __future__ import annotations

from abc import abstractmethod
from collections.abc import Sequence

from PySubparse.FileParts import CollectEntryPositions, FilePart, RenderParts
from PySubparse.SubtitleEntry import SubtitleEntry
from PySubparse.SubtitleFile import TextSubtitleFile
from PySubparse.TimeTypes import TimePoint, TimeSpan

class PartsSubtitleFile(TextSubtitleFile):
    """
    A text subtitle file held as a sequence of FileParts, where every entry is a start, end and text part.
    """
    def __init__(self, parts : list[FilePart], encoding : str|None = None):
        super().__init__(encoding)
        self.parts : list[FilePart] = parts

    @staticmethod
    @abstractmethod
    def format_time(time : TimePoint) -> str:
        """ Canonical rendering of a time point that was modified or created """
        pass

    def get_entries(self) -> list[SubtitleEntry]:
        return [
            SubtitleEntry(TimeSpan(self.parts[start].value, self.parts[end].value), self.parts[text].value)
            for start, end, text in CollectEntryPositions(self.parts)
        ]

    def update_entries(self, entries : Sequence[SubtitleEntry]) -> None:
        positions = CollectEntryPositions(self.parts)
        self.check_entry_count(len(positions), entries)

        for (start, end, text), entry in zip(positions, entries):
            self.parts[start].set_value(entry.timespan.start)
            self.parts[end].set_value(entry.timespan.end)
            if entry.line is not None:
                self.parts[text].set_value(entry.line)

    def to_string(self) -> str:
        return RenderParts(self.parts, self.format_time)
