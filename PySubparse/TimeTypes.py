from __future__ import annotations

from datetime import timedelta
from functools import total_ordering

MSECS_PER_SECOND = 1000
MSECS_PER_MINUTE = 60 * MSECS_PER_SECOND
MSECS_PER_HOUR = 60 * MSECS_PER_MINUTE

def _truncated_div(value : int, divisor : int) -> int:
    """ Integer division rounding toward zero """
    quotient = abs(value) // divisor
    return -quotient if value < 0 else quotient


@total_ordering
class _Timing:
    """
    Shared implementation of TimePoint and TimeDelta: a signed, exact number of milliseconds.

    Values are plain Python integers, so arithmetic never wraps or overflows.
    Instances compare and hash only against the same type.
    """
    __slots__ = ('_msecs',)

    def __init__(self, msecs : int = 0):
        self._msecs : int = int(msecs)

    @classmethod
    def from_components(cls, hours : int, mins : int, secs : int, msecs : int):
        """
        Create from time components without bounds checking.

        Components may be negative or exceed their natural range,
        e.g. from_components(0, 0, 3, -2000) == from_components(0, 0, 1, 0).
        """
        return cls(msecs + 1000 * (secs + 60 * (mins + 60 * hours)))

    @classmethod
    def from_msecs(cls, msecs : int):
        return cls(msecs)

    @classmethod
    def from_csecs(cls, csecs : int):
        """ Create from hundredths of a second """
        return cls(csecs * 10)

    @classmethod
    def from_secs(cls, secs : int):
        return cls(secs * MSECS_PER_SECOND)

    @classmethod
    def from_mins(cls, mins : int):
        return cls(mins * MSECS_PER_MINUTE)

    @classmethod
    def from_hours(cls, hours : int):
        return cls(hours * MSECS_PER_HOUR)

    @classmethod
    def from_timedelta(cls, value : timedelta):
        """ Convert a datetime.timedelta, truncating toward zero to whole milliseconds """
        msecs = abs(value) // timedelta(milliseconds=1)
        return cls(-msecs if value < timedelta(0) else msecs)

    @property
    def msecs(self) -> int:
        return self._msecs

    @property
    def csecs(self) -> int:
        return _truncated_div(self._msecs, 10)

    @property
    def secs(self) -> int:
        return _truncated_div(self._msecs, MSECS_PER_SECOND)

    @property
    def secs_f64(self) -> float:
        return self._msecs / MSECS_PER_SECOND

    @property
    def mins(self) -> int:
        return _truncated_div(self._msecs, MSECS_PER_MINUTE)

    @property
    def hours(self) -> int:
        return _truncated_div(self._msecs, MSECS_PER_HOUR)

    @property
    def msecs_comp(self) -> int:
        """ Milliseconds component of the absolute value, in [0, 999] """
        return abs(self._msecs) % 1000

    @property
    def csecs_comp(self) -> int:
        """ Hundredths of a second component of the absolute value, in [0, 99] """
        return (abs(self._msecs) // 10) % 100

    @property
    def secs_comp(self) -> int:
        return (abs(self._msecs) // MSECS_PER_SECOND) % 60

    @property
    def mins_comp(self) -> int:
        return (abs(self._msecs) // MSECS_PER_MINUTE) % 60

    @property
    def hours_comp(self) -> int:
        """ Hours of the absolute value (unbounded) """
        return abs(self._msecs) // MSECS_PER_HOUR

    @property
    def is_negative(self) -> bool:
        return self._msecs < 0

    def abs(self):
        return type(self)(abs(self._msecs))

    def to_timedelta(self) -> timedelta:
        return timedelta(milliseconds=self._msecs)

    def __neg__(self):
        return type(self)(-self._msecs)

    def __eq__(self, other : object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._msecs == other._msecs      # type: ignore[attr-defined]

    def __lt__(self, other : object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._msecs < other._msecs       # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._msecs))

    def __str__(self) -> str:
        sign = "-" if self.is_negative else ""
        return f"{sign}{self.hours_comp}:{self.mins_comp:02d}:{self.secs_comp:02d}.{self.msecs_comp:03d}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self)})"


class TimeDelta(_Timing):
    """ A signed duration in milliseconds """
    __slots__ = ()

    def __add__(self, other):
        if isinstance(other, TimeDelta):
            return TimeDelta(self.msecs + other.msecs)
        if isinstance(other, TimePoint):
            return TimePoint(self.msecs + other.msecs)
        return NotImplemented

    def __sub__(self, other):
        if isinstance(other, TimeDelta):
            return TimeDelta(self.msecs - other.msecs)
        if isinstance(other, TimePoint):
            return TimePoint(self.msecs - other.msecs)
        return NotImplemented


class TimePoint(_Timing):
    """ An absolute instant, in milliseconds from an arbitrary zero """
    __slots__ = ()

    def __add__(self, other):
        if isinstance(other, TimeDelta):
            return TimePoint(self.msecs + other.msecs)
        return NotImplemented

    def __sub__(self, other):
        if isinstance(other, TimePoint):
            return TimeDelta(self.msecs - other.msecs)
        if isinstance(other, TimeDelta):
            return TimePoint(self.msecs - other.msecs)
        return NotImplemented


class TimeSpan:
    """
    The interval during which a subtitle is shown.

    The length may be negative, the span does not enforce start <= end.
    """
    __slots__ = ('start', 'end')

    def __init__(self, start : TimePoint, end : TimePoint):
        self.start : TimePoint = start
        self.end : TimePoint = end

    @property
    def length(self) -> TimeDelta:
        return self.end - self.start

    def __add__(self, delta : TimeDelta) -> TimeSpan:
        if not isinstance(delta, TimeDelta):
            return NotImplemented
        return TimeSpan(self.start + delta, self.end + delta)

    def __sub__(self, delta : TimeDelta) -> TimeSpan:
        if not isinstance(delta, TimeDelta):
            return NotImplemented
        return TimeSpan(self.start - delta, self.end - delta)

    def __eq__(self, other : object) -> bool:
        if not isinstance(other, TimeSpan):
            return NotImplemented
        return (self.start, self.end) == (other.start, other.end)

    def __hash__(self) -> int:
        return hash((self.start, self.end))

    def __repr__(self) -> str:
        return f"TimeSpan({str(self.start)} --> {str(self.end)})"
