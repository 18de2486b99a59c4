import os
import tempfile

from PySubparse.Formats.IdxFile import IdxFile
from PySubparse.Formats.MdvdFile import MdvdFile
from PySubparse.Formats.SrtFile import SrtFile
from PySubparse.Formats.SsaFile import SsaFile
from PySubparse.Formats.VobFile import VOBSUB_MAGIC, VobFile
from PySubparse.Helpers.TestCases import LoggedTestCase
from PySubparse.Helpers.Tests import log_input_expected_error, skip_if_debugger_attached
from PySubparse.SubtitleError import UnknownFormatError
from PySubparse.SubtitleFormat import SubtitleFormat
from PySubparse.SubtitleFormatRegistry import SubtitleFormatRegistry

SRT_CONTENT = "1\n00:00:01,000 --> 00:00:02,000\nHello\n\n2\n00:00:03,000 --> 00:00:04,000\nWorld\n"
ASS_CONTENT = "[Script Info]\nScriptType: v4.00+\n\n[V4+ Styles]\nFormat: Name, Fontname\n\n[Events]\nFormat: Layer, Start, End, Style, Text\nDialogue: 0,0:00:01.00,0:00:02.00,Default,Hello\n"
IDX_CONTENT = "# VobSub index file, v7 (do not modify this line!)\nid: en, index: 0\ntimestamp: 00:00:01:000, filepos: 000000000\n"
MDVD_CONTENT = "{0}{25}Hello!\n{50}{75}World\n"
VOBSUB_DATA = VOBSUB_MAGIC + bytes(28)

def _fake_decoder(data : bytes):
    return [(1, 2, None)]

class PrioritySrtFile(SrtFile):
    SUPPORTED_EXTENSIONS = {'.srt': 50}

class TestSubtitleFormatRegistry(LoggedTestCase):
    def setUp(self) -> None:
        super().setUp()
        SubtitleFormatRegistry.clear()
        SubtitleFormatRegistry.discover()

    def tearDown(self) -> None:
        SubtitleFormatRegistry.clear()
        SubtitleFormatRegistry.set_vobsub_decoder(None)
        super().tearDown()

    def test_AutoDiscovery(self):
        self.assertLoggedSequenceEqual("formats", ['.ass', '.idx', '.srt', '.ssa', '.sub'], SubtitleFormatRegistry.enumerate_formats())
        self.assertLoggedIs("SubRip", SrtFile, SubtitleFormatRegistry.get_handler_by_format(SubtitleFormat.SubRip))
        self.assertLoggedIs("VobSub", VobFile, SubtitleFormatRegistry.get_handler_by_format(SubtitleFormat.VobSubSub))

    def test_SharedExtensionPriority(self):
        handlers = SubtitleFormatRegistry.get_handlers_by_extension('.sub')
        self.assertLoggedSequenceEqual("sub handlers", [VobFile, MdvdFile], handlers)
        self.assertLoggedSequenceEqual("ssa extensions", ['.ssa', '.ass'], SsaFile.get_file_extensions())
        self.assertLoggedEqual("vobsub priority", {'.sub': 20}, VobFile.get_extension_priorities())

    def test_FormatByExtension(self):
        extension_cases = [
            ('.srt', SubtitleFormat.SubRip),
            ('movie.SRT', SubtitleFormat.SubRip),
            ('srt', SubtitleFormat.SubRip),
            ('.ass', SubtitleFormat.SubStationAlpha),
            ('/path/to/movie.ssa', SubtitleFormat.SubStationAlpha),
            ('movie.idx', SubtitleFormat.VobSubIdx),
            ('movie.sub', None),
            ('.txt', None),
            ('movie', None),
        ]
        for ext_or_path, expected in extension_cases:
            with self.subTest(ext_or_path=ext_or_path):
                result = SubtitleFormatRegistry.get_format_by_extension(ext_or_path)
                self.assertLoggedEqual("format", expected, result, input_value=ext_or_path)

    @skip_if_debugger_attached
    def test_FormatByExtensionErr(self):
        self.assertLoggedEqual("known", SubtitleFormat.VobSubIdx, SubtitleFormatRegistry.get_format_by_extension_err('.idx'))

        for ext_or_path in ['.txt', 'movie.sub']:
            with self.subTest(ext_or_path=ext_or_path):
                with self.assertRaises(UnknownFormatError) as e:
                    SubtitleFormatRegistry.get_format_by_extension_err(ext_or_path)
                log_input_expected_error(ext_or_path, UnknownFormatError, e.exception)
                self.assertLoggedIn("available formats", ".srt", str(e.exception))

    def test_FormatWithContent(self):
        content_cases = [
            ('movie.sub', VOBSUB_DATA, SubtitleFormat.VobSubSub),
            ('movie.sub', MDVD_CONTENT.encode('utf-8'), SubtitleFormat.MicroDVD),
            ('movie.sub', MDVD_CONTENT, SubtitleFormat.MicroDVD),
            ('movie.srt', SRT_CONTENT, SubtitleFormat.SubRip),
            ('movie.txt', SRT_CONTENT, None),
        ]
        for ext_or_path, content, expected in content_cases:
            with self.subTest(ext_or_path=ext_or_path, content=content[:8]):
                result = SubtitleFormatRegistry.get_format(ext_or_path, content)
                self.assertLoggedEqual("format", expected, result, input_value=ext_or_path)

    @skip_if_debugger_attached
    def test_FormatWithContentErr(self):
        with self.assertRaises(UnknownFormatError) as e:
            SubtitleFormatRegistry.get_format_err('movie.txt', SRT_CONTENT)
        log_input_expected_error('movie.txt', UnknownFormatError, e.exception)

    def test_DetectFormatFromContent(self):
        content_cases = [
            (SRT_CONTENT, SubtitleFormat.SubRip),
            (ASS_CONTENT, SubtitleFormat.SubStationAlpha),
            (IDX_CONTENT, SubtitleFormat.VobSubIdx),
            (MDVD_CONTENT, SubtitleFormat.MicroDVD),
            (SRT_CONTENT.encode('utf-8'), SubtitleFormat.SubRip),
            (VOBSUB_DATA, SubtitleFormat.VobSubSub),
            ("Nothing to see here", None),
        ]
        for content, expected in content_cases:
            with self.subTest(content=content[:16]):
                result = SubtitleFormatRegistry.detect_format_from_content(content)
                self.assertLoggedEqual("detected format", expected, result, input_value=content[:16])

    def test_NormalizeExtension(self):
        for value, expected in [('.SRT', '.srt'), ('ass', '.ass'), ('C:/Movies/film.IDX', '.idx'), ('archive.tar.sub', '.sub')]:
            with self.subTest(value=value):
                self.assertLoggedEqual("extension", expected, SubtitleFormatRegistry.normalize_extension(value), input_value=value)

    def test_DuplicateRegistrationPriority(self):
        SubtitleFormatRegistry.disable_autodiscovery()

        SubtitleFormatRegistry.register_handler(SrtFile)
        SubtitleFormatRegistry.register_handler(PrioritySrtFile)
        self.assertLoggedSequenceEqual("priority", [PrioritySrtFile, SrtFile], SubtitleFormatRegistry.get_handlers_by_extension('.srt'))

        SubtitleFormatRegistry.register_handler(SrtFile)
        self.assertLoggedSequenceEqual("re-registered", [PrioritySrtFile, SrtFile], SubtitleFormatRegistry.get_handlers_by_extension('.srt'))
        self.assertLoggedIsNone("shared extension", SubtitleFormatRegistry.get_format_by_extension('.srt'))

    def test_DisableAutodiscovery(self):
        SubtitleFormatRegistry.disable_autodiscovery()
        self.assertLoggedSequenceEqual("no formats", [], SubtitleFormatRegistry.enumerate_formats())

        SubtitleFormatRegistry.enable_autodiscovery()
        self.assertLoggedIn("rediscovered", '.srt', SubtitleFormatRegistry.enumerate_formats())


class TestSubtitleFormatRegistryFiles(LoggedTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.temp_dir = tempfile.TemporaryDirectory()

    def tearDown(self) -> None:
        self.temp_dir.cleanup()
        SubtitleFormatRegistry.set_vobsub_decoder(None)
        super().tearDown()

    def _write(self, filename : str, data : bytes) -> str:
        path = os.path.join(self.temp_dir.name, filename)
        with open(path, 'wb') as f:
            f.write(data)
        return path

    def _read(self, path : str) -> bytes:
        with open(path, 'rb') as f:
            return f.read()

    def test_LoadFileByExtension(self):
        file_cases = [
            ('movie.srt', SRT_CONTENT, SrtFile),
            ('movie.ass', ASS_CONTENT, SsaFile),
            ('movie.idx', IDX_CONTENT, IdxFile),
            ('movie.sub', MDVD_CONTENT, MdvdFile),
        ]
        for filename, content, expected_type in file_cases:
            with self.subTest(filename=filename):
                path = self._write(filename, content.encode('utf-8'))
                subtitle_file = SubtitleFormatRegistry.load_file(path)
                self.assertLoggedIsInstance("loaded", subtitle_file, expected_type, input_value=filename)

    def test_LoadFileDetectsContent(self):
        path = self._write('movie.txt', SRT_CONTENT.encode('utf-8'))
        subtitle_file = SubtitleFormatRegistry.load_file(path)
        self.assertLoggedIsInstance("detected", subtitle_file, SrtFile)
        self.assertLoggedEqual("entries", 2, len(subtitle_file.get_entries()))

    def test_LoadVobSub(self):
        path = self._write('movie.sub', VOBSUB_DATA)

        subtitle_file = SubtitleFormatRegistry.load_file(path, decoder=_fake_decoder)
        self.assertLoggedIsInstance("explicit decoder", subtitle_file, VobFile)

        SubtitleFormatRegistry.set_vobsub_decoder(_fake_decoder)
        subtitle_file = SubtitleFormatRegistry.load_file(path)
        self.assertLoggedEqual("default decoder entries", 1, len(subtitle_file.get_entries()))

    def test_LoadWithSettings(self):
        path = self._write('movie.sub', b"{0}{30}Hello!\n")
        subtitle_file = SubtitleFormatRegistry.load_file(path, {'fps': 30})
        self.assertLoggedEqual("end", 1000, subtitle_file.get_entries()[0].timespan.end.msecs)

    @skip_if_debugger_attached
    def test_LoadUnknownFile(self):
        path = self._write('notes.txt', b"Nothing to see here\n")
        with self.assertRaises(UnknownFormatError) as e:
            SubtitleFormatRegistry.load_file(path)
        log_input_expected_error(path, UnknownFormatError, e.exception)

    def test_SaveFile(self):
        original = SRT_CONTENT.replace("\n", "\r\n").encode('utf-8')
        path = self._write('movie.srt', original)

        subtitle_file = SubtitleFormatRegistry.load_file(path)
        output_path = os.path.join(self.temp_dir.name, 'movie.edited.srt')
        SubtitleFormatRegistry.save_file(subtitle_file, output_path)

        self.assertLoggedEqual("saved bytes", original, self._read(output_path))
