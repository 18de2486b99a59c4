import os
import logging

from argparse import ArgumentParser, Namespace
from dataclasses import dataclass

from PySubparse.Helpers.Localization import _
from PySubparse.SubtitleFormatRegistry import SubtitleFormatRegistry

log_dir = os.getenv('PYSUBPARSE_LOG_DIR')

@dataclass
class LoggerOptions():
    file_handler: logging.FileHandler|None
    log_path: str|None

def InitLogger(logfilename: str, debug: bool = False) -> LoggerOptions:
    """ Initialise the logger, with a file handler if PYSUBPARSE_LOG_DIR is set """
    log_path = os.path.join(log_dir, f"{logfilename}.log") if log_dir else None
    file_handler = None

    if debug:
        logging_level = logging.DEBUG
    else:
        level_name = os.getenv('LOG_LEVEL', 'INFO').upper()
        logging_level = getattr(logging, level_name, logging.INFO)

    logging.basicConfig(format='%(levelname)s: %(message)s', encoding='utf-8', level=logging_level)

    if debug:
        logging.debug("Debug logging enabled")

    if log_path:
        try:
            os.makedirs(os.path.dirname(log_path), exist_ok=True)
            file_handler = logging.FileHandler(log_path, encoding='utf-8', mode='w')
            file_handler.setLevel(logging_level)
            file_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
            logging.getLogger('').addHandler(file_handler)
        except OSError as e:
            logging.warning(f"Unable to create log file at {log_path}: {e}")

    return LoggerOptions(file_handler=file_handler, log_path=log_path)

def HandleFormatListing(args: Namespace) -> None:
    """ Print the supported file extensions and exit """
    formats = SubtitleFormatRegistry.list_available_formats()
    print(_("Supported subtitle formats: {formats}").format(formats=formats))
    raise SystemExit(0)

def CreateArgParser(description : str) -> ArgumentParser:
    """
    Create new arg parser with the arguments shared by the scripts
    """
    pre_parser = ArgumentParser(add_help=False)
    pre_parser.add_argument('--list-formats', action='store_true')
    pre_args, _unknown = pre_parser.parse_known_args()
    if pre_args.list_formats:
        HandleFormatListing(pre_args)

    parser = ArgumentParser(description=description)
    parser.add_argument('input', help="Path to subtitle file (see --list-formats for supported formats)")
    parser.add_argument('-o', '--output', help="Output subtitle file path (defaults to <input>.edited.<ext>)")
    parser.add_argument('--list-formats', action='store_true', help="List supported subtitle formats and exit")
    parser.add_argument('--encoding', type=str, default=None, help="Text encoding of the input file (detected if not set)")
    parser.add_argument('--fps', type=float, default=None, help="Frame rate for MicroDVD subtitles")
    parser.add_argument('--debug', action='store_true', help="Run with DEBUG log level")
    return parser
