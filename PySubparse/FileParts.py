"""
Non-destructive representation of a text subtitle file as an ordered sequence of parts.

Filler parts hold text that is only stored to reconstruct the file (whitespace, separators,
headers, comments, unrecognised fields). Semantic parts hold a typed value (a time point,
an index or dialog text). Concatenating the rendering of every part reproduces the input.
"""
from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, TypeVar

from PySubparse.TimeTypes import TimePoint

class PartKind(Enum):
    FILLER = 'filler'
    INDEX = 'index'
    START = 'start'
    END = 'end'
    TEXT = 'text'
    TIMESTAMP = 'timestamp'


@dataclass
class FilePart:
    """
    A single tagged part of a subtitle file.

    source is the text the value was parsed from, so that an unmodified value is written back
    exactly as it was read. It is discarded when the value is changed.
    """
    kind : PartKind
    value : Any
    source : str|None = None

    @property
    def is_filler(self) -> bool:
        return self.kind is PartKind.FILLER

    def set_value(self, value : Any) -> None:
        if value != self.value:
            self.value = value
            self.source = None

    def render(self, format_time : Callable[[TimePoint], str]) -> str:
        if self.source is not None:
            return self.source
        if isinstance(self.value, TimePoint):
            return format_time(self.value)
        return str(self.value)

    @classmethod
    def Filler(cls, text : str) -> FilePart:
        return cls(PartKind.FILLER, text)

    @classmethod
    def Text(cls, text : str) -> FilePart:
        return cls(PartKind.TEXT, text)


T = TypeVar('T')

def MergeFillers(parts : Iterable[T], classify_fn : Callable[[T], str|None]) -> list[T]:
    """
    Merge consecutive mergeable parts into one, in a single stable left-to-right pass.

    classify_fn returns the text of a mergeable part, or None for parts that must be kept
    separate. Merged parts must be dataclasses with a `value` field holding their text.
    """
    result : list[T] = []
    for part in parts:
        if result:
            previous_text = classify_fn(result[-1])
            if previous_text is not None:
                text = classify_fn(part)
                if text is not None:
                    result[-1] = replace(result[-1], value=previous_text + text)     # type: ignore[type-var]
                    continue

        result.append(part)

    return result

def FillerText(part : FilePart) -> str|None:
    """ Classifier for MergeFillers that merges filler parts """
    return part.value if part.kind is PartKind.FILLER else None

def RenderParts(parts : Iterable[FilePart], format_time : Callable[[TimePoint], str]) -> str:
    return ''.join(part.render(format_time) for part in parts)

def CollectEntryPositions(parts : list[FilePart]) -> list[tuple[int, int, int]]:
    """
    Locate the (start, end, text) parts of every entry, in source order.

    The parsers guarantee that each text part is preceded by exactly one start and one end part,
    so any other arrangement is a bug and raises AssertionError.
    """
    positions : list[tuple[int, int, int]] = []
    start_index : int|None = None
    end_index : int|None = None

    for index, part in enumerate(parts):
        if part.kind is PartKind.START:
            if start_index is not None:
                raise AssertionError(f"Two start times without dialog in between (part {index})")
            start_index = index

        elif part.kind is PartKind.END:
            if end_index is not None:
                raise AssertionError(f"Two end times without dialog in between (part {index})")
            end_index = index

        elif part.kind is PartKind.TEXT:
            if start_index is None or end_index is None:
                raise AssertionError(f"Dialog without start or end time (part {index})")
            positions.append((start_index, end_index, index))
            start_index = end_index = None

    if start_index is not None or end_index is not None:
        raise AssertionError("Timestamp without dialog at the end of the file")

    return positions
