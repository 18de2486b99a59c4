from __future__ import annotations

import importlib
import inspect
import logging
import os
import pkgutil
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import pysubs2
import regex

from PySubparse.Formats.VobFile import VobFile, VobSubDecoder
from PySubparse.Helpers.Localization import _
from PySubparse.SubtitleError import UnknownFormatError
from PySubparse.SubtitleFile import DecodeSubtitleText, SubtitleFile
from PySubparse.SubtitleFormat import SubtitleFormat

_PYSUBS2_FORMATS : dict[str, SubtitleFormat] = {
    'srt': SubtitleFormat.SubRip,
    'ass': SubtitleFormat.SubStationAlpha,
    'ssa': SubtitleFormat.SubStationAlpha,
    'microdvd': SubtitleFormat.MicroDVD,
}

_IDX_TIMESTAMP_PATTERN = regex.compile(r'^[ \t]*timestamp:', regex.MULTILINE)

class SubtitleFormatRegistry:
    """
    Manages discovery and lookup of subtitle formats.

    Uses lazy discovery to find all subclasses of SubtitleFile in the Formats package.
    Formats are registered by their supported file extensions and priorities. Several formats
    can share an extension, in which case the content decides, highest priority first.
    """
    _handlers : dict[str, list[tuple[int, type[SubtitleFile]]]] = {}
    _formats : dict[SubtitleFormat, type[SubtitleFile]] = {}
    _discovered : bool = False

    @classmethod
    def register_handler(cls, handler_class : type[SubtitleFile]) -> None:
        """
        Register a subtitle file class for its format and supported extensions.
        """
        cls._formats[handler_class.FORMAT] = handler_class
        for ext, priority in handler_class.get_extension_priorities().items():
            candidates = [entry for entry in cls._handlers.get(ext.lower(), []) if entry[1] is not handler_class]
            candidates.append((priority, handler_class))
            candidates.sort(key=lambda entry: entry[0], reverse=True)
            cls._handlers[ext.lower()] = candidates

    @classmethod
    def get_handlers_by_extension(cls, extension : str) -> list[type[SubtitleFile]]:
        """
        Get the subtitle file classes registered for an extension, highest priority first.
        """
        cls._ensure_discovered()
        return [handler for _priority, handler in cls._handlers.get(cls.normalize_extension(extension), [])]

    @classmethod
    def get_handler_by_format(cls, subtitle_format : SubtitleFormat) -> type[SubtitleFile]:
        cls._ensure_discovered()
        if subtitle_format not in cls._formats:
            raise UnknownFormatError(str(subtitle_format), cls.list_available_formats())
        return cls._formats[subtitle_format]

    @classmethod
    def get_format_by_extension(cls, ext_or_path : str) -> SubtitleFormat|None:
        """
        Deduce the subtitle format from a file extension or path.

        Returns None if the extension is unknown, or is shared by several formats (e.g. '.sub').
        """
        handlers = cls.get_handlers_by_extension(ext_or_path)
        if len(handlers) != 1:
            return None
        return handlers[0].FORMAT

    @classmethod
    def get_format_by_extension_err(cls, ext_or_path : str) -> SubtitleFormat:
        subtitle_format = cls.get_format_by_extension(ext_or_path)
        if subtitle_format is None:
            raise UnknownFormatError(ext_or_path, cls.list_available_formats())
        return subtitle_format

    @classmethod
    def get_format(cls, ext_or_path : str, content : bytes|str) -> SubtitleFormat|None:
        """
        Deduce the subtitle format from a file extension or path, using the content to choose
        between formats sharing the extension.
        """
        data = content if isinstance(content, bytes) else content.encode('latin-1', errors='replace')
        for handler in cls.get_handlers_by_extension(ext_or_path):
            if handler.matches_content(data):
                return handler.FORMAT
        return None

    @classmethod
    def get_format_err(cls, ext_or_path : str, content : bytes|str) -> SubtitleFormat:
        subtitle_format = cls.get_format(ext_or_path, content)
        if subtitle_format is None:
            raise UnknownFormatError(ext_or_path, cls.list_available_formats())
        return subtitle_format

    @classmethod
    def detect_format_from_content(cls, content : bytes|str) -> SubtitleFormat|None:
        """
        Guess the subtitle format from the content alone, for files without a recognised extension.
        """
        if isinstance(content, bytes):
            if VobFile.matches_content(content):
                return SubtitleFormat.VobSubSub
            content, _encoding = DecodeSubtitleText(content, strict=False)

        if _IDX_TIMESTAMP_PATTERN.search(content):
            return SubtitleFormat.VobSubIdx

        try:
            identifier = pysubs2.formats.autodetect_format(content)
        except pysubs2.exceptions.Pysubs2Error as e:
            logging.debug(f"Subtitle format could not be detected from content: {str(e)}")
            return None

        subtitle_format = _PYSUBS2_FORMATS.get(identifier)
        if subtitle_format is None:
            logging.debug(f"Detected subtitle format '{identifier}' is not supported")
        return subtitle_format

    @classmethod
    def enumerate_formats(cls) -> list[str]:
        """
        List all supported file extensions.
        """
        cls._ensure_discovered()
        return sorted(cls._handlers.keys())

    @classmethod
    def list_available_formats(cls) -> str:
        """
        Get a comma-separated string of all supported file extensions.
        """
        formats = cls.enumerate_formats()
        return _("None") if not formats else ", ".join(formats)

    @classmethod
    def set_vobsub_decoder(cls, decoder : VobSubDecoder|None) -> None:
        """
        Set the process-wide decoder for VobSub image subtitles.
        """
        VobFile.set_default_decoder(decoder)

    @classmethod
    def load_file(cls, path : str, settings : Mapping[str,Any]|None = None, decoder : VobSubDecoder|None = None) -> SubtitleFile:
        """
        Load a subtitle file, detecting the format from the extension or the content.
        """
        with open(path, 'rb') as f:
            data = f.read()

        subtitle_format = cls.get_format(path, data)
        if subtitle_format is None:
            subtitle_format = cls.detect_format_from_content(data)
            if subtitle_format is None:
                raise UnknownFormatError(path, cls.list_available_formats())

        logging.info(_("Loading {path} as {format}").format(path=path, format=subtitle_format.display_name))

        if subtitle_format is SubtitleFormat.VobSubSub:
            return VobFile.parse(data, decoder)

        handler = cls.get_handler_by_format(subtitle_format)
        return handler.from_bytes(data, settings)

    @classmethod
    def save_file(cls, subtitle_file : SubtitleFile, path : str) -> None:
        """
        Write a subtitle file, in the format it was loaded or created with.
        """
        data = subtitle_file.serialize()
        with open(path, 'wb') as f:
            f.write(data)

        logging.info(_("Saved {count} subtitles to {path}").format(count=len(subtitle_file.get_entries()), path=path))

    @classmethod
    def normalize_extension(cls, ext_or_path : str) -> str:
        """
        Reduce a path, extension or bare format name ('movie.SRT', '.srt', 'srt') to a lowercase extension
        """
        _base, extension = os.path.splitext(ext_or_path)
        if extension:
            return extension.lower()
        if ext_or_path.startswith('.'):
            return ext_or_path.lower()
        return f".{ext_or_path.lower()}"

    @classmethod
    def disable_autodiscovery(cls) -> None:
        """ Disable automatic discovery of subtitle formats (for testing) """
        cls.clear()
        cls._discovered = True

    @classmethod
    def enable_autodiscovery(cls) -> None:
        """ Enable automatic discovery of subtitle formats (for testing) """
        cls._discovered = False

    @classmethod
    def discover(cls) -> None:
        """
        Discover and register all subtitle file classes in the Formats package.
        """
        package_path = Path(__file__).parent / "Formats"
        for _finder, module_name, _ispkg in pkgutil.iter_modules([str(package_path)]):
            module = importlib.import_module(f"PySubparse.Formats.{module_name}")
            for _name, obj in inspect.getmembers(module, inspect.isclass):
                if issubclass(obj, SubtitleFile) and not inspect.isabstract(obj) and obj.__module__ == module.__name__:
                    cls.register_handler(obj)
        cls._discovered = True
        logging.debug(f"Registered subtitle formats: {cls.list_available_formats()}")

    @classmethod
    def clear(cls) -> None:
        """
        Clear all registered formats
        """
        cls._handlers.clear()
        cls._formats.clear()
        cls._discovered = False

    @classmethod
    def _ensure_discovered(cls) -> None:
        if not cls._discovered:
            cls.discover()
