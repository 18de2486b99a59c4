from typing import TypeAlias

from PySubparse.Formats.IdxFile import IdxFile
from PySubparse.Formats.MdvdFile import MdvdFile
from PySubparse.Formats.SrtFile import SrtFile
from PySubparse.Formats.SsaFile import SsaFile
from PySubparse.Formats.VobFile import VobFile

AnySubtitleFile : TypeAlias = SrtFile | SsaFile | IdxFile | VobFile | MdvdFile

__all__ = [
    'AnySubtitleFile',
    'IdxFile',
    'MdvdFile',
    'SrtFile',
    'SsaFile',
    'VobFile',
]
