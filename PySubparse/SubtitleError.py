from __future__ import annotations

from typing import TYPE_CHECKING

from PySubparse.Helpers.Localization import _

if TYPE_CHECKING:
    from PySubparse.SubtitleFormat import SubtitleFormat


class SubtitleError(Exception):
    """
    Base class for recoverable errors raised by PySubparse.

    Internal contract violations are not SubtitleErrors: they raise AssertionError and indicate a bug.
    """
    def __init__(self, message : str|None = None, error : Exception|None = None):
        super().__init__(message)
        self.message : str|None = message
        self.error : Exception|None = error

    def __str__(self) -> str:
        if self.error:
            return str(self.error) if not self.message else f"{self.message} ({str(self.error)})"
        return self.message or super().__str__()


class UnknownFormatError(SubtitleError):
    """ The file extension or content does not match any supported subtitle format """
    def __init__(self, name : str|None = None, available : str|None = None):
        if available:
            message = _("Unknown subtitle format: {name}. Available formats: {available}").format(name=name or _("None"), available=available)
        else:
            message = _("Unknown subtitle format: {name}").format(name=name or _("None"))
        super().__init__(message)
        self.name = name


class SubtitleParseError(SubtitleError):
    """
    The content violates the grammar of its format. The whole file fails to parse.

    line_number is 0-based and is always set by the text format parsers.
    """
    def __init__(self, message : str|None = None, line_number : int|None = None, error : Exception|None = None):
        if line_number is not None and message:
            message = _("parse error at line {line}: {message}").format(line=line_number, message=message)
        super().__init__(message, error)
        self.line_number : int|None = line_number


class SubtitleDecodingError(SubtitleError):
    """ Converting bytes to text produced replacement characters """
    def __init__(self, encoding : str, error : Exception|None = None):
        super().__init__(_("Decoding subtitle content with encoding '{encoding}' produced invalid characters").format(encoding=encoding), error)
        self.encoding = encoding


class UpdateNotSupportedError(SubtitleError):
    """ The subtitle format does not support updating its entries """
    def __init__(self, subtitle_format : SubtitleFormat):
        super().__init__(_("Updating subtitle entries is not supported for {format} files").format(format=subtitle_format.display_name))
        self.subtitle_format = subtitle_format


class TextFormatOnlyError(SubtitleError):
    """ A binary-only subtitle format was passed to a text parsing function """
    def __init__(self, subtitle_format : SubtitleFormat):
        super().__init__(_("{format} is a binary format and cannot be parsed from text").format(format=subtitle_format.display_name))
        self.subtitle_format = subtitle_format


class SubtitleDecoderError(SubtitleError):
    """ The external image subtitle decoder is unavailable or failed """
    pass
