from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

import regex

from PySubparse.FileParts import FilePart, FillerText, MergeFillers, PartKind, RenderParts
from PySubparse.Helpers import GetLinesNonDestructive, SplitBom
from PySubparse.Helpers.Localization import _
from PySubparse.Helpers.Parse import FormatTimePoint, ParseTimeComponents
from PySubparse.SettingsType import SettingsType
from PySubparse.SubtitleEntry import SubtitleEntry
from PySubparse.SubtitleError import SubtitleParseError
from PySubparse.SubtitleFile import TextSubtitleFile
from PySubparse.SubtitleFormat import SubtitleFormat
from PySubparse.TimeTypes import TimeDelta, TimePoint, TimeSpan

class IdxFile(TextSubtitleFile):
    """
    VobSub index files, where each subtitle is a line like "timestamp: 00:01:23:456, filepos: 000000000".

    The file only records when each subtitle starts. An entry lasts until the next one starts,
    and the last entry is shown for last_entry_duration.
    """
    FORMAT = SubtitleFormat.VobSubIdx
    SUPPORTED_EXTENSIONS = {'.idx': 10}

    DEFAULT_LAST_ENTRY_DURATION = TimeDelta.from_mins(1)

    _TIMESTAMP_LINE_PATTERN = regex.compile(r'^(?P<prefix>[ \t]*timestamp:[ \t]*)(?P<time>[0-9:]*)(?P<rest>.*)$')

    def __init__(self, parts : list[FilePart], encoding : str|None = None, last_entry_duration : TimeDelta|None = None):
        super().__init__(encoding)
        self.parts : list[FilePart] = parts
        self.last_entry_duration : TimeDelta = last_entry_duration if last_entry_duration is not None else self.DEFAULT_LAST_ENTRY_DURATION

    @classmethod
    def parse(cls, content : str, settings : Mapping[str,Any]|None = None) -> IdxFile:
        settings = SettingsType(settings)
        last_entry_duration = settings.get_timedelta('idx_last_entry_duration', cls.DEFAULT_LAST_ENTRY_DURATION)

        bom, content = SplitBom(content)
        parts : list[FilePart] = [FilePart.Filler(bom)]

        for line_number, (line, newline) in enumerate(GetLinesNonDestructive(content)):
            if line.lstrip().startswith("timestamp:"):
                parts.extend(cls._parse_timestamp_line(line_number, line))
            else:
                parts.append(FilePart.Filler(line))
            parts.append(FilePart.Filler(newline))

        return cls(MergeFillers(parts, FillerText), last_entry_duration=last_entry_duration)

    def get_entries(self) -> list[SubtitleEntry]:
        timestamps = self._timestamps()
        if not timestamps:
            return []

        ends = timestamps[1:] + [timestamps[-1] + self.last_entry_duration]
        return [SubtitleEntry.from_timespan(TimeSpan(start, end)) for start, end in zip(timestamps, ends)]

    def update_entries(self, entries : Sequence[SubtitleEntry]) -> None:
        """
        Overwrite the start times. End times and text cannot be represented and are ignored.
        """
        timestamp_parts = [part for part in self.parts if part.kind is PartKind.TIMESTAMP]
        self.check_entry_count(len(timestamp_parts), entries)

        for part, entry in zip(timestamp_parts, entries):
            part.set_value(entry.timespan.start)

    def to_string(self) -> str:
        return RenderParts(self.parts, self.format_time)

    @staticmethod
    def format_time(time : TimePoint) -> str:
        return FormatTimePoint(time, hours_width=2, fraction_separator=':')

    def _timestamps(self) -> list[TimePoint]:
        return [part.value for part in self.parts if part.kind is PartKind.TIMESTAMP]

    @classmethod
    def _parse_timestamp_line(cls, line_number : int, line : str) -> list[FilePart]:
        match = cls._TIMESTAMP_LINE_PATTERN.match(line)
        components = ParseTimeComponents(match.group('time'), ':', ':') if match else None
        if not match or components is None:
            raise SubtitleParseError(_("expected a timestamp like 'timestamp: 00:00:00:000', found '{line}'").format(line=line), line_number)

        return [
            FilePart.Filler(match.group('prefix')),
            FilePart(PartKind.TIMESTAMP, TimePoint.from_components(*components), source=match.group('time')),
            FilePart.Filler(match.group('rest')),
        ]
