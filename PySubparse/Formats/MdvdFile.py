from __future__ import annotations

import itertools
import os
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

import regex

from PySubparse.Helpers import GetLinesNonDestructive, IsBlankLine, SplitBom
from PySubparse.Helpers.Localization import _
from PySubparse.SettingsType import SettingsError, SettingsType
from PySubparse.SubtitleEntry import SubtitleEntry
from PySubparse.SubtitleError import SubtitleParseError
from PySubparse.SubtitleFile import TextSubtitleFile
from PySubparse.SubtitleFormat import SubtitleFormat
from PySubparse.TimeTypes import TimePoint, TimeSpan

default_fps = float(os.getenv('DEFAULT_FPS', '25'))

@dataclass
class MdvdLine:
    """
    One segment of a MicroDVD line, with the formatting that applies to it
    """
    start_frame : int
    end_frame : int
    text : str
    formatting : list[str] = field(default_factory=list)


def _lowercase_first(tag : str) -> str:
    return tag[:1].lower() + tag[1:]

def _uppercase_first(tag : str) -> str:
    return tag[:1].upper() + tag[1:]

class MdvdFile(TextSubtitleFile):
    """
    MicroDVD subtitles, with frame numbers instead of times, e.g. "{0}{25}{y:i}Line one|Line two".

    Each line holds one or more segments separated by '|'. Formatting tags starting with an
    uppercase letter apply to every segment of the line, lowercase tags only to their own segment.

    The file is not kept verbatim: serialize() regenerates it, grouping segments with identical
    frames onto one line and hoisting the formatting they share.
    """
    FORMAT = SubtitleFormat.MicroDVD
    SUPPORTED_EXTENSIONS = {'.sub': 10}

    _LINE_PATTERN = regex.compile(r'^\{(?P<start>-?\d+)\}\{(?P<end>-?\d+)\}(?P<segments>.*)$')
    _SEGMENT_PATTERN = regex.compile(r'(?P<tags>(?:\{[^}]*\})*)(?P<text>[^|]*)')
    _TAG_PATTERN = regex.compile(r'\{([^}]*)\}')

    def __init__(self, lines : list[MdvdLine], fps : float = default_fps, bom : str = "", encoding : str|None = None):
        super().__init__(encoding)
        self.lines : list[MdvdLine] = lines
        self.fps : float = fps
        self.bom : str = bom

    @classmethod
    def parse(cls, content : str, settings : Mapping[str,Any]|None = None) -> MdvdFile:
        settings = SettingsType(settings)
        fps = settings.get_float('fps', default_fps)
        if fps is None:
            fps = default_fps
        elif fps <= 0:
            raise SettingsError(_("Setting 'fps' must be a positive frame rate, not {value}").format(value=fps))

        bom, content = SplitBom(content)

        lines : list[MdvdLine] = []
        for line_number, (line, _newline) in enumerate(GetLinesNonDestructive(content)):
            if IsBlankLine(line):
                continue
            lines.extend(cls._parse_line(line_number, line))

        return cls(lines, fps=fps, bom=bom)

    def get_entries(self) -> list[SubtitleEntry]:
        return [
            SubtitleEntry(TimeSpan(self._frame_to_time(line.start_frame), self._frame_to_time(line.end_frame)), line.text)
            for line in self.lines
        ]

    def update_entries(self, entries : Sequence[SubtitleEntry]) -> None:
        self.check_entry_count(len(self.lines), entries)

        for line, entry in zip(self.lines, entries):
            line.start_frame = self._time_to_frame(entry.timespan.start)
            line.end_frame = self._time_to_frame(entry.timespan.end)
            if entry.line is not None:
                line.text = entry.line

    def to_string(self) -> str:
        sorted_lines = sorted(self.lines, key=lambda line: (line.start_frame, line.end_frame))

        output_lines = []
        for (start_frame, end_frame), group in itertools.groupby(sorted_lines, key=lambda line: (line.start_frame, line.end_frame)):
            output_lines.append(self._compose_group(start_frame, end_frame, list(group)))

        return self.bom + "\n".join(output_lines)

    def _frame_to_time(self, frame : int) -> TimePoint:
        return TimePoint.from_msecs(round(frame * 1000 / self.fps))

    def _time_to_frame(self, time : TimePoint) -> int:
        return round(time.secs_f64 * self.fps)

    @classmethod
    def _compose_group(cls, start_frame : int, end_frame : int, group : list[MdvdLine]) -> str:
        """
        Compose segments sharing the same frames into a single line
        """
        common : list[str] = []
        if len(group) > 1:
            common = [tag for tag in group[0].formatting if all(tag in line.formatting for line in group[1:])]

        output = f"{{{start_frame}}}{{{end_frame}}}"
        output += ''.join(f"{{{_uppercase_first(tag)}}}" for tag in common)

        segments = []
        for line in group:
            individual = [tag for tag in line.formatting if tag not in common]
            segments.append(''.join(f"{{{_lowercase_first(tag)}}}" for tag in individual) + line.text)

        return output + "|".join(segments)

    @classmethod
    def _parse_line(cls, line_number : int, line : str) -> list[MdvdLine]:
        match = cls._LINE_PATTERN.match(line)
        if not match:
            raise SubtitleParseError(_("expected MicroDVD subtitle line, found '{line}'").format(line=line), line_number)

        start_frame = int(match.group('start'))
        end_frame = int(match.group('end'))

        container_formatting : list[str] = []
        segments : list[tuple[list[str], str]] = []
        for tags, text in cls._split_segments(line_number, line, match.group('segments')):
            segment_formatting : list[str] = []
            for tag in tags:
                target = container_formatting if tag[:1].isupper() else segment_formatting
                tag = _lowercase_first(tag)
                if tag not in target:
                    target.append(tag)
            segments.append((segment_formatting, text))

        # Container formatting applies to every segment, wherever it appears on the line
        return [
            MdvdLine(start_frame, end_frame, text, container_formatting + [tag for tag in formatting if tag not in container_formatting])
            for formatting, text in segments
        ]

    @classmethod
    def _split_segments(cls, line_number : int, line : str, segments_text : str) -> list[tuple[list[str], str]]:
        """
        Split the body of a line into (tags, text) segments at each '|' outside a tag
        """
        segments : list[tuple[list[str], str]] = []
        position = 0
        while True:
            segment_match = cls._SEGMENT_PATTERN.match(segments_text, position)
            text = segment_match.group('text')    # type: ignore[union-attr]
            if text.startswith('{'):
                raise SubtitleParseError(_("unterminated formatting tag in MicroDVD subtitle line '{line}'").format(line=line), line_number)

            segments.append((cls._TAG_PATTERN.findall(segment_match.group('tags')), text))    # type: ignore[union-attr]

            position = segment_match.end()    # type: ignore[union-attr]
            if position >= len(segments_text):
                return segments

            # skip the separator
            position += 1
