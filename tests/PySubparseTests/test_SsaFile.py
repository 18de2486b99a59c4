from PySubparse.Formats.SsaFile import SsaFile
from PySubparse.Helpers.TestCases import ShiftEntries, SubtitleFileTestCase
from PySubparse.Helpers.Tests import log_input_expected_error, skip_if_debugger_attached
from PySubparse.SubtitleError import SubtitleParseError

SAMPLE = """[Script Info]
Title: Test Subtitles
ScriptType: v4.00+

[V4+ Styles]
Format: Name, Fontname, Fontsize, PrimaryColour, SecondaryColour, OutlineColour, BackColour, Bold, Italic, Underline, StrikeOut, ScaleX, ScaleY, Spacing, Angle, BorderStyle, Outline, Shadow, Alignment, MarginL, MarginR, MarginV, Encoding
Style: Default,Arial,50,&H00FFFFFF,&H0000FFFF,&H00000000,&H00000000,0,0,0,0,100,100,0,0,1,2,0,2,30,30,30,1

[Events]
Format: Layer, Start, End, Style, Name, MarginL, MarginR, MarginV, Effect, Text
Dialogue: 0,0:00:01.50,0:00:03.00,Default,,0,0,0,,First subtitle line
Comment: 0,0:00:03.00,0:00:04.00,Default,,0,0,0,,Not a dialogue
Dialogue: 0, 0:00:04.00 ,0:00:06.50,Default,,0,0,0,,Second line\\Nwith, commas
Dialogue: 1,0:22:43.52,0:22:46.22,ED-Romaji,,0,0,0,,{\\fad(150,150)\\blur0.5\\bord1}some text
"""

class TestSsaFile(SubtitleFileTestCase):
    def test_RoundTrip(self):
        cases = [
            SAMPLE,
            SAMPLE.replace("\n", "\r\n"),
            SAMPLE.replace("\n", "\r"),
            "\ufeff" + SAMPLE,
            SAMPLE.rstrip("\n"),
        ]
        for content in cases:
            with self.subTest(content=content[:40]):
                self.assertRoundTrip(SsaFile.parse(content), content)

    def test_GetEntries(self):
        entries = SsaFile.parse(SAMPLE).get_entries()

        self.assertEntryTimes(entries, [(1500, 3000), (4000, 6500), (1363520, 1366220)])
        self.assertLoggedSequenceEqual("text", [
            "First subtitle line",
            "Second line\\Nwith, commas",
            "{\\fad(150,150)\\blur0.5\\bord1}some text",
        ], [entry.line for entry in entries])

    def test_ColonBeforeHundredths(self):
        content = "[Events]\nFormat: Start, End, Text\nDialogue: 0:00:01:25,0:00:02:00,Text\n"
        entries = SsaFile.parse(content).get_entries()
        self.assertEntryTimes(entries, [(1250, 2000)])

    def test_FieldOrder(self):
        content = "[Events]\nFormat: End, Marked, Start, Text\nDialogue: 0:00:05.00, Marked=0, 0:00:01.00,Text, with comma\n"
        entries = SsaFile.parse(content).get_entries()
        self.assertEntryTimes(entries, [(1000, 5000)])
        self.assertLoggedEqual("text", "Text, with comma", entries[0].line)

    def test_DialogueOutsideEventsIsFiller(self):
        content = "[Script Info]\nDialogue: not, a, real, line\n[Events]\nFormat: Start, End, Text\n"
        subtitle_file = SsaFile.parse(content)
        self.assertLoggedEqual("entries", [], subtitle_file.get_entries())
        self.assertRoundTrip(subtitle_file, content)

    def test_UpdateEntries(self):
        subtitle_file = SsaFile.parse(SAMPLE)
        entries = ShiftEntries(subtitle_file.get_entries(), 10)
        entries[0].line = "Replaced"
        subtitle_file.update_entries(entries)

        expected = SAMPLE.replace(
            "Dialogue: 0,0:00:01.50,0:00:03.00,Default,,0,0,0,,First subtitle line",
            "Dialogue: 0,0:00:01.51,0:00:03.01,Default,,0,0,0,,Replaced",
        ).replace(
            "Dialogue: 0, 0:00:04.00 ,0:00:06.50,",
            "Dialogue: 0, 0:00:04.01 ,0:00:06.51,",
        ).replace(
            "0:22:43.52,0:22:46.22",
            "0:22:43.53,0:22:46.23",
        )
        self.assertRoundTrip(subtitle_file, expected)

    def test_UnchangedEntriesAreStable(self):
        for content in [SAMPLE, SAMPLE.replace("\n", "\r\n"), "[Events]\nFormat: Start, End, Text\nDialogue: 0:0:1.5,0:00:02:00,Text\n"]:
            with self.subTest(content=content[:40]):
                subtitle_file = SsaFile.parse(content)
                self.assertEntriesStable(subtitle_file)
                self.assertRoundTrip(subtitle_file, content)

    @skip_if_debugger_attached
    def test_UpdateWithWrongCount(self):
        subtitle_file = SsaFile.parse(SAMPLE)
        with self.assertRaises(AssertionError) as e:
            subtitle_file.update_entries(subtitle_file.get_entries()[:1])
        log_input_expected_error(SAMPLE, AssertionError, e.exception)

        self.assertRoundTrip(subtitle_file, SAMPLE)

    def test_NegativeTimes(self):
        content = "[Events]\nFormat: Start, End, Text\nDialogue: 0:00:00.50,0:00:01.00,Text\n"
        subtitle_file = SsaFile.parse(content)
        subtitle_file.update_entries(ShiftEntries(subtitle_file.get_entries(), -1000))
        self.assertRoundTrip(subtitle_file, "[Events]\nFormat: Start, End, Text\nDialogue: -0:00:00.50,0:00:00.00,Text\n")

    @skip_if_debugger_attached
    def test_HeaderErrors(self):
        error_cases = [
            ("[Script Info]\nTitle: no events\n", "fields info not found"),
            ("[Events]\nFormat: Start, End, Start, Text\n", "'Start' field is twice"),
            ("[Events]\nFormat: Start, Text\n", "'End' field is missing"),
            ("[Events]\nFormat: Start, End\n", "'Text' field is missing"),
            ("[Events]\nFormat: Start, End, Text, Style\n", "'Text' as its last field"),
        ]
        for content, expected_message in error_cases:
            with self.subTest(content=content):
                with self.assertRaises(SubtitleParseError) as e:
                    SsaFile.parse(content)
                log_input_expected_error(content, SubtitleParseError, e.exception)
                self.assertLoggedIn("message", expected_message, str(e.exception))

    @skip_if_debugger_attached
    def test_DialogueErrors(self):
        error_cases = [
            ("[Events]\nFormat: Layer, Start, End, Text\nDialogue: 0,0:00:01.00\n", 2, "incorrect number of fields"),
            ("[Events]\nFormat: Start, End, Text\n\nDialogue: 0:00:01,0:00:02.00,Text\n", 3, "wrong format"),
            ("[Events]\nFormat: Start, End, Text\nDialogue: 0:00:01.00,x,Text\n", 2, "wrong format"),
        ]
        for content, line_number, expected_message in error_cases:
            with self.subTest(content=content):
                with self.assertRaises(SubtitleParseError) as e:
                    SsaFile.parse(content)
                log_input_expected_error(content, SubtitleParseError, e.exception)
                self.assertLoggedEqual("line number", line_number, e.exception.line_number)
                self.assertLoggedIn("message", expected_message, str(e.exception))
