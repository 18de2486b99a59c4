from __future__ import annotations

from collections.abc import Mapping, Sequence
from enum import Enum
from typing import Any

import regex

from PySubparse.FileParts import FilePart, FillerText, MergeFillers, PartKind
from PySubparse.Helpers import GetLinesNonDestructive, IsBlankLine, SplitBom, TrimNonDestructive
from PySubparse.Helpers.Localization import _
from PySubparse.Helpers.Parse import FormatTimePoint, ParseSignedInt, ParseTimeComponents
from PySubparse.PartsSubtitleFile import PartsSubtitleFile
from PySubparse.SubtitleError import SubtitleParseError
from PySubparse.SubtitleFormat import SubtitleFormat
from PySubparse.TimeTypes import TimePoint, TimeSpan

class _State(Enum):
    EXPECT_INDEX = 1
    EXPECT_TIMESTAMP = 2
    EXPECT_DIALOG_OR_EMPTY = 3

class SrtFile(PartsSubtitleFile):
    """
    SubRip subtitles: numbered records of a timespan line followed by dialog lines, separated by empty lines.

    Parsed with a line based state machine. Dialog lines of a record are kept together
    as a single text part, joined by their original line breaks.
    """
    FORMAT = SubtitleFormat.SubRip
    SUPPORTED_EXTENSIONS = {'.srt': 10}

    _TIMESPAN_PATTERN = regex.compile(
        r'^(?P<lead>[ \t]*)(?P<start>-?\d+:-?\d+:-?\d+,-?\d+)(?P<arrow>[ \t]*-->[ \t]*)(?P<end>-?\d+:-?\d+:-?\d+,-?\d+)(?P<trail>[ \t]*)$'
    )

    @classmethod
    def parse(cls, content : str, settings : Mapping[str,Any]|None = None) -> SrtFile:
        bom, content = SplitBom(content)
        parts : list[FilePart] = [FilePart.Filler(bom)]

        lines = GetLinesNonDestructive(content)
        # An empty line after the last one closes a record that runs to the end of the file
        lines.append(("", ""))

        state = _State.EXPECT_INDEX
        dialog : list[str] = []

        for line_number, (line, newline) in enumerate(lines):
            if state is _State.EXPECT_INDEX:
                if IsBlankLine(line):
                    parts.append(FilePart.Filler(line + newline))
                    continue

                parts.extend(cls._parse_index_line(line_number, line))
                parts.append(FilePart.Filler(newline))
                state = _State.EXPECT_TIMESTAMP

            elif state is _State.EXPECT_TIMESTAMP:
                if line_number == len(lines) - 1:
                    raise SubtitleParseError(_("expected SubRip timespan line, found end of file"), line_number)

                parts.extend(cls._parse_timespan_line(line_number, line))
                parts.append(FilePart.Filler(newline))
                state = _State.EXPECT_DIALOG_OR_EMPTY

            elif IsBlankLine(line):
                # Dialog line terminators are part of the text, except for the last one
                text = ''.join(dialog)
                trailing_newline = ""
                if dialog:
                    last_line = lines[line_number - 1]
                    text = text[:len(text) - len(last_line[1])]
                    trailing_newline = last_line[1]

                parts.append(FilePart.Text(text))
                parts.append(FilePart.Filler(trailing_newline + line + newline))
                dialog = []
                state = _State.EXPECT_INDEX

            else:
                dialog.append(line + newline)

        return cls(MergeFillers(parts, FillerText))

    @classmethod
    def create(cls, entries : Sequence[tuple[TimeSpan, str]]) -> SrtFile:
        """
        Build a new SubRip file from (timespan, text) pairs, numbering the records from 1.
        """
        parts : list[FilePart] = []
        for index, (timespan, text) in enumerate(entries):
            parts.extend([
                FilePart(PartKind.INDEX, index + 1),
                FilePart.Filler("\n"),
                FilePart(PartKind.START, timespan.start),
                FilePart.Filler(" --> "),
                FilePart(PartKind.END, timespan.end),
                FilePart.Filler("\n"),
                FilePart.Text(text),
                FilePart.Filler("\n\n"),
            ])

        return cls(MergeFillers(parts, FillerText))

    @staticmethod
    def format_time(time : TimePoint) -> str:
        return FormatTimePoint(time, hours_width=2, fraction_separator=',')

    @classmethod
    def _parse_index_line(cls, line_number : int, line : str) -> list[FilePart]:
        leading, core, trailing = TrimNonDestructive(line)
        index = ParseSignedInt(core)
        if index is None:
            raise SubtitleParseError(_("expected SubRip index line, found '{line}'").format(line=line), line_number)

        return [FilePart.Filler(leading), FilePart(PartKind.INDEX, index, source=core), FilePart.Filler(trailing)]

    @classmethod
    def _parse_timespan_line(cls, line_number : int, line : str) -> list[FilePart]:
        match = cls._TIMESPAN_PATTERN.match(line)
        start = cls._parse_timestamp(match.group('start')) if match else None
        end = cls._parse_timestamp(match.group('end')) if match else None
        if not match or start is None or end is None:
            raise SubtitleParseError(_("expected SubRip timespan line, found '{line}'").format(line=line), line_number)

        return [
            FilePart.Filler(match.group('lead')),
            FilePart(PartKind.START, start, source=match.group('start')),
            FilePart.Filler(match.group('arrow')),
            FilePart(PartKind.END, end, source=match.group('end')),
            FilePart.Filler(match.group('trail')),
        ]

    @classmethod
    def _parse_timestamp(cls, text : str) -> TimePoint|None:
        components = ParseTimeComponents(text, ':', ',')
        if components is None:
            return None
        return TimePoint.from_components(*components)
