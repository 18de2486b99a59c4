from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Any, TypeAlias

from PySubparse.Helpers.Localization import _
from PySubparse.SubtitleEntry import SubtitleEntry
from PySubparse.SubtitleError import SubtitleDecoderError, SubtitleError, UpdateNotSupportedError
from PySubparse.SubtitleFile import SubtitleFile
from PySubparse.SubtitleFormat import SubtitleFormat
from PySubparse.TimeTypes import TimePoint, TimeSpan

DecodedTime : TypeAlias = float | int | TimePoint
VobSubDecoder : TypeAlias = Callable[[bytes], Iterable[tuple[DecodedTime, DecodedTime, Any]]]

VOBSUB_MAGIC = b'\x00\x00\x01\xba'

class VobFile(SubtitleFile):
    """
    VobSub image subtitles (.sub with an MPEG program stream header).

    The subtitle stream is decoded by an external decoder, a callable taking the raw bytes and
    yielding (start, end, payload) for each subtitle, with times in seconds or as TimePoints.
    Entries have no text and cannot be updated, serialize() returns the original data.
    """
    FORMAT = SubtitleFormat.VobSubSub
    SUPPORTED_EXTENSIONS = {'.sub': 20}

    _default_decoder : VobSubDecoder|None = None

    def __init__(self, data : bytes, timespans : list[TimeSpan]):
        self.data : bytes = data
        self.timespans : list[TimeSpan] = timespans

    @classmethod
    def set_default_decoder(cls, decoder : VobSubDecoder|None) -> None:
        """ Set the decoder used when none is passed to parse """
        cls._default_decoder = decoder

    @classmethod
    def parse(cls, data : bytes, decoder : VobSubDecoder|None = None) -> VobFile:
        decoder = decoder or cls._default_decoder
        if decoder is None:
            raise SubtitleDecoderError(_("No VobSub decoder is configured"))

        try:
            timespans = [TimeSpan(_to_timepoint(start), _to_timepoint(end)) for start, end, _payload in decoder(data)]
        except SubtitleError:
            raise
        except Exception as e:
            raise SubtitleDecoderError(_("Failed to decode VobSub subtitles: {error}").format(error=str(e)), e)

        logging.debug(f"Decoded {len(timespans)} VobSub subtitles")
        return cls(data, timespans)

    @classmethod
    def from_bytes(cls, data : bytes, settings : Mapping[str,Any]|None = None, decoder : VobSubDecoder|None = None) -> VobFile:
        return cls.parse(data, decoder)

    @classmethod
    def matches_content(cls, data : bytes) -> bool:
        return data[:len(VOBSUB_MAGIC)] == VOBSUB_MAGIC

    def get_entries(self) -> list[SubtitleEntry]:
        return [SubtitleEntry.from_timespan(TimeSpan(timespan.start, timespan.end)) for timespan in self.timespans]

    def update_entries(self, entries : Sequence[SubtitleEntry]) -> None:
        raise UpdateNotSupportedError(self.FORMAT)

    def serialize(self) -> bytes:
        return self.data


def _to_timepoint(value : DecodedTime) -> TimePoint:
    if isinstance(value, TimePoint):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return TimePoint.from_msecs(round(value * 1000))
    raise TypeError(f"Unsupported subtitle time from VobSub decoder: {value!r}")
