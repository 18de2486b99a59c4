"""
PySubparse - Non-destructive subtitle parsing

A Python library for reading, retiming and re-writing subtitle files in SubRip (.srt),
SubStation Alpha (.ssa/.ass), VobSub (.idx/.sub) and MicroDVD (.sub) formats.
Everything that is not changed is written back exactly as it was read.

Basic Usage
-----------

with open("movie.srt", "rb") as f:
    data = f.read()

subtitle_format = get_subtitle_format_err("movie.srt", data)
subtitle_file = parse_bytes(subtitle_format, data)

# Shift every subtitle by five seconds
entries = subtitle_file.get_entries()
for entry in entries:
    entry.timespan = entry.timespan + TimeDelta.from_secs(5)
subtitle_file.update_entries(entries)

with open("movie.shifted.srt", "wb") as f:
    f.write(subtitle_file.serialize())
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from PySubparse.Formats import AnySubtitleFile, IdxFile, MdvdFile, SrtFile, SsaFile, VobFile
from PySubparse.Formats.VobFile import VobSubDecoder
from PySubparse.SettingsType import SettingsType, SettingType
from PySubparse.SubtitleEntry import SubtitleEntry
from PySubparse.SubtitleError import (
    SubtitleDecoderError,
    SubtitleDecodingError,
    SubtitleError,
    SubtitleParseError,
    TextFormatOnlyError,
    UnknownFormatError,
    UpdateNotSupportedError,
)
from PySubparse.SubtitleFile import SubtitleFile, TextSubtitleFile
from PySubparse.SubtitleFormat import SubtitleFormat
from PySubparse.SubtitleFormatRegistry import SubtitleFormatRegistry
from PySubparse.TimeTypes import TimeDelta, TimePoint, TimeSpan
from PySubparse.version import __version__

def parse_str(subtitle_format : SubtitleFormat, content : str, settings : Mapping[str,Any]|None = None) -> SubtitleFile:
    """
    Parse subtitles from text.

    Parameters
    ----------
    subtitle_format : SubtitleFormat
        The format of the content, e.g. from :func:`get_subtitle_format`.

    content : str
        The decoded subtitle text.

    settings : Mapping, optional
        Parse options, see :class:`SettingsType`. MicroDVD uses `fps`, VobSub index files use `idx_last_entry_duration`.

    Raises
    ------
    TextFormatOnlyError
        If the format is a binary format (VobSub .sub)
    SubtitleParseError
        If the content does not follow the format's grammar
    """
    if not subtitle_format.is_text_format:
        raise TextFormatOnlyError(subtitle_format)

    handler = SubtitleFormatRegistry.get_handler_by_format(subtitle_format)
    if not issubclass(handler, TextSubtitleFile):
        raise TextFormatOnlyError(subtitle_format)

    return handler.parse(content, settings)

def parse_bytes(subtitle_format : SubtitleFormat, data : bytes, settings : Mapping[str,Any]|None = None, decoder : VobSubDecoder|None = None) -> SubtitleFile:
    """
    Parse subtitles from raw file content.

    Text content is decoded with the `encoding` setting if given, otherwise the encoding is
    detected from a byte order mark or falls back to the default encodings.
    VobSub subtitles are decoded with `decoder`, or the decoder set with
    :meth:`SubtitleFormatRegistry.set_vobsub_decoder`.

    Raises
    ------
    SubtitleDecodingError
        If the content cannot be decoded as text
    SubtitleDecoderError
        If no VobSub decoder is available, or decoding failed
    SubtitleParseError
        If the content does not follow the format's grammar
    """
    if subtitle_format is SubtitleFormat.VobSubSub:
        return VobFile.parse(data, decoder)

    handler = SubtitleFormatRegistry.get_handler_by_format(subtitle_format)
    return handler.from_bytes(data, settings)

def get_subtitle_format_by_extension(ext_or_path : str) -> SubtitleFormat|None:
    """
    Deduce the format from a file extension or path. Returns None for unknown extensions and for '.sub',
    which needs the content to choose between VobSub and MicroDVD.
    """
    return SubtitleFormatRegistry.get_format_by_extension(ext_or_path)

def get_subtitle_format_by_extension_err(ext_or_path : str) -> SubtitleFormat:
    return SubtitleFormatRegistry.get_format_by_extension_err(ext_or_path)

def get_subtitle_format(ext_or_path : str, content : bytes|str) -> SubtitleFormat|None:
    """
    Deduce the format from a file extension or path, examining the content for '.sub' files.
    """
    return SubtitleFormatRegistry.get_format(ext_or_path, content)

def get_subtitle_format_err(ext_or_path : str, content : bytes|str) -> SubtitleFormat:
    return SubtitleFormatRegistry.get_format_err(ext_or_path, content)

def detect_subtitle_format(content : bytes|str) -> SubtitleFormat|None:
    """
    Guess the format from the content alone
    """
    return SubtitleFormatRegistry.detect_format_from_content(content)

__all__ = [
    '__version__',
    'AnySubtitleFile',
    'IdxFile',
    'MdvdFile',
    'SettingType',
    'SettingsType',
    'SrtFile',
    'SsaFile',
    'SubtitleDecoderError',
    'SubtitleDecodingError',
    'SubtitleEntry',
    'SubtitleError',
    'SubtitleFile',
    'SubtitleFormat',
    'SubtitleFormatRegistry',
    'SubtitleParseError',
    'TextFormatOnlyError',
    'TextSubtitleFile',
    'TimeDelta',
    'TimePoint',
    'TimeSpan',
    'UnknownFormatError',
    'UpdateNotSupportedError',
    'VobFile',
    'VobSubDecoder',
    'detect_subtitle_format',
    'get_subtitle_format',
    'get_subtitle_format_by_extension',
    'get_subtitle_format_by_extension_err',
    'get_subtitle_format_err',
    'parse_bytes',
    'parse_str',
]
