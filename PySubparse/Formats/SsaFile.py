from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import regex

from PySubparse.FileParts import FilePart, FillerText, MergeFillers, PartKind
from PySubparse.Helpers import GetLinesNonDestructive, SplitBom, TrimNonDestructive
from PySubparse.Helpers.Localization import _
from PySubparse.Helpers.Parse import FormatTimePoint, ParseTimeComponents
from PySubparse.PartsSubtitleFile import PartsSubtitleFile
from PySubparse.SubtitleError import SubtitleParseError
from PySubparse.SubtitleFormat import SubtitleFormat
from PySubparse.TimeTypes import TimePoint

class SsaFieldsInfo:
    """
    Positions of the Start, End and Text fields, read from the Format line of the [Events] section,
    e.g. "Format: Layer, Start, End, Style, Name, MarginL, MarginR, MarginV, Effect, Text"
    """
    def __init__(self, start_index : int, end_index : int, text_index : int, num_fields : int):
        self.start_index = start_index
        self.end_index = end_index
        self.text_index = text_index
        self.num_fields = num_fields

    @classmethod
    def from_format_line(cls, line_number : int, line : str) -> SsaFieldsInfo:
        field_names = [name.strip() for name in line.strip()[len("Format:"):].split(',')]

        indices : dict[str, int] = {}
        for index, name in enumerate(field_names):
            if name in ('Start', 'End', 'Text'):
                if name in indices:
                    raise SubtitleParseError(_("the '{field}' field is twice in the field info").format(field=name), line_number)
                indices[name] = index

        for name in ('Text', 'Start', 'End'):
            if name not in indices:
                raise SubtitleParseError(_("the '{field}' field is missing in the field info").format(field=name), line_number)

        if indices['Text'] != len(field_names) - 1:
            raise SubtitleParseError(_("the field info has to have 'Text' as its last field"), line_number)

        return cls(indices['Start'], indices['End'], indices['Text'], len(field_names))


class SsaFile(PartsSubtitleFile):
    """
    SubStation Alpha and Advanced SubStation Alpha scripts.

    Only the timing and text of Dialogue lines in the [Events] section are interpreted,
    every other line (script info, styles, comments) is kept verbatim.
    """
    FORMAT = SubtitleFormat.SubStationAlpha
    SUPPORTED_EXTENSIONS = {'.ssa': 10, '.ass': 10}

    _SECTION_PATTERN = regex.compile(r'^\s*\[(?P<name>.*)\]\s*$')
    _DIALOGUE_PREFIX_PATTERN = regex.compile(r'^(?P<lead>[ \t]*)Dialogue:(?P<gap>[ \t]*)')

    @classmethod
    def parse(cls, content : str, settings : Mapping[str,Any]|None = None) -> SsaFile:
        bom, content = SplitBom(content)
        lines = GetLinesNonDestructive(content)

        fields_info = cls._find_fields_info(lines)

        parts : list[FilePart] = [FilePart.Filler(bom)]
        section : str|None = None
        for line_number, (line, newline) in enumerate(lines):
            section_match = cls._SECTION_PATTERN.match(line)
            if section_match:
                section = section_match.group('name')

            dialogue_match = cls._DIALOGUE_PREFIX_PATTERN.match(line) if section == 'Events' else None
            if dialogue_match:
                parts.append(FilePart.Filler(dialogue_match.group(0)))
                parts.extend(cls._parse_dialogue_fields(line_number, line[dialogue_match.end():], fields_info))
                parts.append(FilePart.Filler(newline))
            else:
                parts.append(FilePart.Filler(line + newline))

        return cls(MergeFillers(parts, FillerText))

    @staticmethod
    def format_time(time : TimePoint) -> str:
        return FormatTimePoint(time, hours_width=1, fraction_separator='.', fraction='cs')

    @classmethod
    def _find_fields_info(cls, lines : list[tuple[str, str]]) -> SsaFieldsInfo:
        """
        Find the first Format line in the [Events] section, which dictates how dialogue lines are parsed
        """
        section : str|None = None
        for line_number, (line, _newline) in enumerate(lines):
            section_match = cls._SECTION_PATTERN.match(line)
            if section_match:
                section = section_match.group('name')
                continue

            if section == 'Events' and line.strip().startswith("Format:"):
                return SsaFieldsInfo.from_format_line(line_number, line)

        raise SubtitleParseError(_("the file has no line beginning with 'Format:' in an [Events] section (fields info not found)"))

    @classmethod
    def _parse_dialogue_fields(cls, line_number : int, fields : str, fields_info : SsaFieldsInfo) -> list[FilePart]:
        """
        Split the comma separated fields of a dialogue line like
        "1,0:22:43.52,0:22:46.22,ED-Romaji,,0,0,0,,{\\fad(150,150)}some text".
        The text takes everything after the last separator, commas included.
        """
        cells = fields.split(',', fields_info.num_fields - 1)
        if len(cells) < fields_info.num_fields:
            raise SubtitleParseError(_("the dialog has incorrect number of fields"), line_number)

        parts : list[FilePart] = []
        for index, cell in enumerate(cells[:-1]):
            leading, value, trailing = TrimNonDestructive(cell)
            parts.append(FilePart.Filler(leading))
            if index == fields_info.start_index:
                parts.append(FilePart(PartKind.START, cls._parse_timepoint(line_number, value), source=value))
            elif index == fields_info.end_index:
                parts.append(FilePart(PartKind.END, cls._parse_timepoint(line_number, value), source=value))
            else:
                parts.append(FilePart.Filler(value))
            parts.append(FilePart.Filler(trailing + ','))

        parts.append(FilePart.Text(cells[-1]))
        return parts

    @classmethod
    def _parse_timepoint(cls, line_number : int, text : str) -> TimePoint:
        """ Something like "0:19:41.99", with '.' or ':' before the hundredths """
        components = ParseTimeComponents(text, ':', '.:')
        if components is None:
            raise SubtitleParseError(_("the timepoint '{time}' has wrong format").format(time=text), line_number)

        hours, minutes, seconds, csecs = components
        return TimePoint.from_components(hours, minutes, seconds, csecs * 10)
