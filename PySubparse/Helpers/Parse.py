import regex

from PySubparse.TimeTypes import TimeDelta, TimePoint

_SIGNED_INTEGER = r'-?[0-9]+'

_SIGNED_INTEGER_PATTERN = regex.compile(rf'^{_SIGNED_INTEGER}$')
_TIME_STRING_PATTERN = regex.compile(r'^(?:(?:(?P<hours>\d+):)?(?P<minutes>\d+):)?(?P<seconds>\d+)(?:[.,](?P<milliseconds>\d{1,3}))?$')

def ParseSignedInt(text : str) -> int|None:
    """
    Parse an optionally negative decimal integer (no surrounding whitespace or '+' sign)
    """
    if not _SIGNED_INTEGER_PATTERN.match(text):
        return None
    return int(text)

def ParseTimeComponents(text : str, separators : str, fraction_separators : str) -> tuple[int, int, int, int]|None:
    """
    Parse a timestamp of four signed integers, e.g. "00:24:45,670".

    Args:
        text: The timestamp to parse, without surrounding whitespace
        separators: Characters accepted between hours, minutes and seconds
        fraction_separators: Characters accepted before the fractional component

    Returns:
        tuple[int, int, int, int]|None: (hours, minutes, seconds, fraction) or None if the text does not match
    """
    sep = f"[{regex.escape(separators)}]"
    frac = f"[{regex.escape(fraction_separators)}]"
    match = regex.match(rf'^({_SIGNED_INTEGER}){sep}({_SIGNED_INTEGER}){sep}({_SIGNED_INTEGER}){frac}({_SIGNED_INTEGER})$', text)
    if not match:
        return None
    return int(match.group(1)), int(match.group(2)), int(match.group(3)), int(match.group(4))

def ParseTimeDelta(value : str|int|float) -> TimeDelta|None:
    """
    Interpret a setting as a duration: a number of milliseconds, or a string like "1:00", "0:01:00.500"
    """
    if isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        return TimeDelta.from_msecs(round(value))

    text = value.strip()
    if _SIGNED_INTEGER_PATTERN.match(text):
        return TimeDelta.from_msecs(int(text))

    match = _TIME_STRING_PATTERN.match(text)
    if not match:
        return None

    hours = int(match.group('hours') or 0)
    minutes = int(match.group('minutes') or 0)
    seconds = int(match.group('seconds') or 0)
    milliseconds = int((match.group('milliseconds') or '0').ljust(3, '0'))
    return TimeDelta.from_components(hours, minutes, seconds, milliseconds)

def FormatTimePoint(time : TimePoint, hours_width : int, fraction_separator : str, fraction : str = 'ms', separator : str = ':') -> str:
    """
    Render a time point with zero-padded components, prefixing negative values with '-'.

    fraction is 'ms' for milliseconds or 'cs' for centiseconds.
    """
    sign = "-" if time.is_negative else ""
    fraction_value = f"{time.msecs_comp:03d}" if fraction == 'ms' else f"{time.csecs_comp:02d}"
    return f"{sign}{time.hours_comp:0{hours_width}d}{separator}{time.mins_comp:02d}{separator}{time.secs_comp:02d}{fraction_separator}{fraction_value}"
