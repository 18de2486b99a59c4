import unittest
from typing import Any

from PySubparse.Helpers.Tests import log_input_expected_result, log_test_name
from PySubparse.SubtitleEntry import SubtitleEntry
from PySubparse.TimeTypes import TimePoint, TimeSpan

class LoggedTestCase(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        super().setUpClass()
        log_test_name(f"{cls.__name__}")

    def setUp(self) -> None:
        super().setUp()
        log_test_name(self._testMethodName)

    def assertLoggedEqual(self, name : str, expected : Any, result : Any, input_value : Any = None) -> None:
        log_input_expected_result(input_value if input_value is not None else name, expected, result)
        self.assertEqual(expected, result, name)

    def assertLoggedTrue(self, name : str, result : bool, input_value : Any = None) -> None:
        log_input_expected_result(input_value if input_value is not None else name, True, result)
        self.assertTrue(result, name)

    def assertLoggedIsNone(self, name : str, result : Any, input_value : Any = None) -> None:
        log_input_expected_result(input_value if input_value is not None else name, None, result)
        self.assertIsNone(result, name)

    def assertLoggedIs(self, name : str, expected : Any, result : Any, input_value : Any = None) -> None:
        log_input_expected_result(input_value if input_value is not None else name, expected, result)
        self.assertIs(expected, result, name)

    def assertLoggedIn(self, name : str, member : Any, container : Any, input_value : Any = None) -> None:
        log_input_expected_result(input_value if input_value is not None else name, member, container)
        self.assertIn(member, container, name)

    def assertLoggedIsInstance(self, name : str, result : Any, expected_type : type, input_value : Any = None) -> None:
        log_input_expected_result(input_value if input_value is not None else name, expected_type.__name__, type(result).__name__)
        self.assertIsInstance(result, expected_type, name)

    def assertLoggedSequenceEqual(self, name : str, expected : Any, result : Any, input_value : Any = None) -> None:
        log_input_expected_result(input_value if input_value is not None else name, expected, result)
        self.assertSequenceEqual(expected, result, name)


class SubtitleFileTestCase(LoggedTestCase):
    """
    Shared checks for subtitle file tests
    """
    def assertRoundTrip(self, subtitle_file : Any, content : str) -> None:
        result = subtitle_file.to_string()
        log_input_expected_result(content, content, result)
        self.assertEqual(content, result)

    def assertEntryTimes(self, entries : list[SubtitleEntry], expected : list[tuple[int, int]]) -> None:
        result = [(entry.timespan.start.msecs, entry.timespan.end.msecs) for entry in entries]
        log_input_expected_result(len(entries), expected, result)
        self.assertSequenceEqual(expected, result)

    def assertEntriesStable(self, subtitle_file : Any) -> None:
        """ Writing back the entries a file reports must not change them """
        expected = subtitle_file.get_entries()
        subtitle_file.update_entries(subtitle_file.get_entries())
        result = subtitle_file.get_entries()
        log_input_expected_result(len(expected), len(expected), len(result))
        self.assertSequenceEqual(expected, result)


def MakeEntry(start_ms : int, end_ms : int, line : str|None = None) -> SubtitleEntry:
    """ Construct an entry from millisecond times """
    return SubtitleEntry(TimeSpan(TimePoint.from_msecs(start_ms), TimePoint.from_msecs(end_ms)), line)

def ShiftEntries(entries : list[SubtitleEntry], delta_ms : int) -> list[SubtitleEntry]:
    """ Move every entry by delta_ms, leaving the text untouched """
    return [
        SubtitleEntry(TimeSpan(TimePoint.from_msecs(entry.timespan.start.msecs + delta_ms), TimePoint.from_msecs(entry.timespan.end.msecs + delta_ms)), None)
        for entry in entries
    ]
