import os

import regex

_BOM = '\ufeff'
_LINE_BREAK_PATTERN = regex.compile(r'\r\n|\n|\r')
_LEADING_WHITESPACE_PATTERN = regex.compile(r'^[ \t]*')
_TRAILING_WHITESPACE_PATTERN = regex.compile(r'[ \t]*$')

def SplitBom(text : str) -> tuple[str, str]:
    """
    Split a leading byte order mark from the text so that it can be written back verbatim.

    Returns:
        tuple[str, str]: (bom, rest), where bom is empty if the text has no byte order mark
    """
    if text.startswith(_BOM):
        return _BOM, text[len(_BOM):]
    return "", text

def GetLinesNonDestructive(text : str) -> list[tuple[str, str]]:
    """
    Split text into (content, terminator) pairs.

    Accepts '\\r\\n', '\\n' and a bare '\\r' as line terminators. The final line has an empty
    terminator (and is omitted if the text ends with a terminator), so joining every content
    and terminator reproduces the input exactly.
    """
    lines : list[tuple[str, str]] = []
    position = 0
    for match in _LINE_BREAK_PATTERN.finditer(text):
        lines.append((text[position:match.start()], match.group(0)))
        position = match.end()

    if position < len(text):
        lines.append((text[position:], ""))

    return lines

def TrimNonDestructive(text : str) -> tuple[str, str, str]:
    """
    Split spaces and tabs from both ends of a string, keeping them.

    Returns:
        tuple[str, str, str]: (leading whitespace, trimmed text, trailing whitespace)
    """
    leading = _LEADING_WHITESPACE_PATTERN.match(text).group(0)       # type: ignore[union-attr]
    rest = text[len(leading):]
    trailing = _TRAILING_WHITESPACE_PATTERN.search(rest).group(0)   # type: ignore[union-attr]
    core = rest[:len(rest) - len(trailing)]
    return leading, core, trailing

def IsBlankLine(line : str) -> bool:
    return not line.strip()

def GetInputPath(filepath : str|None) -> str|None:
    """
    Normalize the input file path for cross-platform compatibility.
    """
    if not filepath:
        return None
    return os.path.normpath(filepath)

def GetOutputPath(filepath : str|None, suffix : str|None = None, format_extension : str|None = None) -> str|None:
    """
    Generate an output path alongside the input file.

    Args:
        filepath: Input file path to base output path on
        suffix: Suffix to add before the extension (defaults to "edited")
        format_extension: Target format extension (e.g., '.ass', '.srt'). If None, uses the input extension.

    Returns:
        str: Output path with format: "basename.suffix.extension"
        None: If filepath is None
    """
    if not filepath:
        return None

    directory = os.path.dirname(filepath)
    basename, current_extension = os.path.splitext(os.path.basename(filepath))

    if format_extension:
        target_extension = format_extension if format_extension.startswith('.') else f'.{format_extension}'
    else:
        target_extension = current_extension or '.srt'

    suffix = suffix or "edited"
    if not basename.endswith(f".{suffix}"):
        basename = f"{basename}.{suffix}"

    return os.path.normpath(os.path.join(directory, f"{basename}{target_extension}"))
