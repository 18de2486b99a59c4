import logging
import os
import sys

base_path = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, base_path)

from check_imports import check_required_imports
check_required_imports(['PySubparse', 'regex', 'pysubs2'])

from scripts.subparse_common import CreateArgParser, InitLogger

from PySubparse import SettingsType, SubtitleError, SubtitleFormatRegistry, TimeDelta
from PySubparse.Helpers import GetInputPath, GetOutputPath
from PySubparse.Helpers.Localization import initialize_localization
from PySubparse.Helpers.Parse import ParseTimeDelta

parser = CreateArgParser("Shifts every subtitle in a file by a fixed amount of time")
parser.add_argument('-s', '--shift', type=str, required=True, help="Time to shift by, in milliseconds or as [-]H:MM:SS.mmm")
parser.add_argument('-a', '--append', type=str, default=None, help="Text to append to every subtitle")
args = parser.parse_args()

logger_options = InitLogger("subshift", args.debug)
initialize_localization()

try:
    shift_text : str = args.shift
    negative = shift_text.startswith('-') and ':' in shift_text
    shift : TimeDelta|None = ParseTimeDelta(shift_text[1:] if negative else shift_text)
    if shift is None:
        raise SubtitleError(f"Invalid time shift: {shift_text}")
    if negative:
        shift = -shift

    settings = SettingsType()
    if args.encoding:
        settings['encoding'] = args.encoding
    if args.fps:
        settings['fps'] = args.fps

    input_path = GetInputPath(args.input)
    subtitle_file = SubtitleFormatRegistry.load_file(input_path, settings)

    entries = subtitle_file.get_entries()
    for entry in entries:
        entry.timespan = entry.timespan + shift
        if args.append and entry.line is not None:
            entry.line = entry.line + args.append

    subtitle_file.update_entries(entries)

    output_path = args.output or GetOutputPath(input_path, "shifted")
    SubtitleFormatRegistry.save_file(subtitle_file, output_path)
    logging.info(f"Shifted {len(entries)} subtitles by {str(shift)}")

except SubtitleError as e:
    print("Error:", e)
    sys.exit(1)
