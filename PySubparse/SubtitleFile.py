from __future__ import annotations

import copy
import logging
import os
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import Any

from PySubparse.Helpers.Localization import _
from PySubparse.SettingsType import SettingsType
from PySubparse.SubtitleEntry import SubtitleEntry
from PySubparse.SubtitleError import SubtitleDecodingError, SubtitleError
from PySubparse.SubtitleFormat import SubtitleFormat

default_encoding = os.getenv('DEFAULT_ENCODING', 'utf-8')
fallback_encoding = os.getenv('FALLBACK_ENCODING', 'iso-8859-1')

# Checked longest first, UTF-32 LE starts with the UTF-16 LE mark
_BYTE_ORDER_MARKS : list[tuple[bytes, str]] = [
    (b'\xff\xfe\x00\x00', 'utf-32-le'),
    (b'\x00\x00\xfe\xff', 'utf-32-be'),
    (b'\xef\xbb\xbf', 'utf-8'),
    (b'\xff\xfe', 'utf-16-le'),
    (b'\xfe\xff', 'utf-16-be'),
]

class SubtitleFile(ABC):
    """
    Abstract interface shared by every subtitle format.

    A subtitle file exposes its entries (timespan and optional text) in source order,
    accepts an updated list of the same length and serializes back to bytes, leaving
    everything that was not updated exactly as it was read.
    """
    FORMAT : SubtitleFormat
    SUPPORTED_EXTENSIONS : dict[str, int] = {}

    @classmethod
    @abstractmethod
    def from_bytes(cls, data : bytes, settings : Mapping[str,Any]|None = None) -> SubtitleFile:
        """
        Parse raw file content.

        Raises:
            SubtitleError: If the content cannot be decoded or parsed
        """
        pass

    @abstractmethod
    def get_entries(self) -> list[SubtitleEntry]:
        """
        Returns:
            list[SubtitleEntry]: A new list of the file's entries in source order
        """
        pass

    @abstractmethod
    def update_entries(self, entries : Sequence[SubtitleEntry]) -> None:
        """
        Overwrite the timing of every entry, and the text of entries whose line is not None.

        The number of entries must match get_entries(), anything else is a programming error
        and raises AssertionError before the file is modified.
        """
        pass

    @abstractmethod
    def serialize(self) -> bytes:
        pass

    @property
    def format(self) -> SubtitleFormat:
        return self.FORMAT

    def clone(self) -> SubtitleFile:
        return copy.deepcopy(self)

    @classmethod
    def matches_content(cls, data : bytes) -> bool:
        """
        Check whether raw content could belong to this format, to choose between handlers sharing an extension.
        """
        return True

    @classmethod
    def get_file_extensions(cls) -> list[str]:
        """
        Get file extensions supported by this format.

        Returns:
            list[str]: List of file extensions (e.g., ['.srt'])
        """
        return list(cls.SUPPORTED_EXTENSIONS.keys())

    @classmethod
    def get_extension_priorities(cls) -> dict[str, int]:
        """
        Get priority for each supported extension.
        Higher priority formats are tried first when several share an extension.

        Returns:
            dict[str, int]: Mapping of extensions to priorities
        """
        return cls.SUPPORTED_EXTENSIONS.copy()

    @staticmethod
    def check_entry_count(expected : int, entries : Sequence[SubtitleEntry]) -> None:
        if len(entries) != expected:
            raise AssertionError(f"update_entries requires {expected} entries, got {len(entries)}")


class TextSubtitleFile(SubtitleFile):
    """
    Base class for formats stored as text.

    Remembers the encoding the content was decoded with so that serialize() writes it back the same way.
    """
    def __init__(self, encoding : str|None = None):
        self.encoding : str = encoding or default_encoding

    @classmethod
    @abstractmethod
    def parse(cls, content : str, settings : Mapping[str,Any]|None = None) -> TextSubtitleFile:
        """
        Parse decoded text content.

        Raises:
            SubtitleParseError: If the content does not follow the format's grammar
        """
        pass

    @abstractmethod
    def to_string(self) -> str:
        pass

    @classmethod
    def from_bytes(cls, data : bytes, settings : Mapping[str,Any]|None = None) -> TextSubtitleFile:
        settings = SettingsType(settings)
        text, encoding = DecodeSubtitleText(data, settings.get_str('encoding'), settings.get_bool('strict_decoding', True))
        subtitle_file = cls.parse(text, settings)
        subtitle_file.encoding = encoding
        return subtitle_file

    def serialize(self) -> bytes:
        try:
            return self.to_string().encode(self.encoding)
        except UnicodeEncodeError as e:
            raise SubtitleError(_("Subtitles cannot be encoded as {encoding}").format(encoding=self.encoding), e)


def DetectByteOrderMark(data : bytes) -> str|None:
    """
    Returns the encoding indicated by a leading byte order mark, or None
    """
    for bom, encoding in _BYTE_ORDER_MARKS:
        if data.startswith(bom):
            return encoding
    return None

def DecodeSubtitleText(data : bytes, encoding : str|None = None, strict : bool = True) -> tuple[str, str]:
    """
    Decode subtitle content, keeping any byte order mark as the first character.

    Without an explicit encoding the byte order mark decides, then default_encoding,
    then fallback_encoding if the content is not valid in the default encoding.

    Returns:
        tuple[str, str]: The text and the encoding that was used

    Raises:
        SubtitleDecodingError: If strict and the content contains undecodable bytes
    """
    if not encoding:
        encoding = DetectByteOrderMark(data)

    if not encoding:
        try:
            return data.decode(default_encoding), default_encoding
        except UnicodeDecodeError:
            logging.warning(_("Subtitles are not valid {encoding}, decoding as {fallback}").format(encoding=default_encoding, fallback=fallback_encoding))
            encoding = fallback_encoding

    try:
        text = data.decode(encoding, errors='replace')
    except LookupError as e:
        raise SubtitleDecodingError(encoding, e)

    if strict and '\ufffd' in text:
        raise SubtitleDecodingError(encoding)

    return text, encoding
