from enum import Enum


class SubtitleFormat(Enum):
    """
    The closed set of subtitle formats supported by PySubparse
    """
    SubRip = 'srt'
    SubStationAlpha = 'ssa'
    VobSubIdx = 'idx'
    VobSubSub = 'vobsub'
    MicroDVD = 'microdvd'

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @property
    def is_text_format(self) -> bool:
        return self is not SubtitleFormat.VobSubSub

_DISPLAY_NAMES = {
    SubtitleFormat.SubRip: "SubRip (.srt)",
    SubtitleFormat.SubStationAlpha: "SubStation Alpha (.ssa/.ass)",
    SubtitleFormat.VobSubIdx: "VobSub index (.idx)",
    SubtitleFormat.VobSubSub: "VobSub (.sub)",
    SubtitleFormat.MicroDVD: "MicroDVD (.sub)",
}
