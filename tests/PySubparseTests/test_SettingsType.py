from datetime import timedelta

from PySubparse.Helpers.TestCases import LoggedTestCase
from PySubparse.Helpers.Tests import log_input_expected_error, skip_if_debugger_attached
from PySubparse.SettingsType import SettingsError, SettingsType
from PySubparse.TimeTypes import TimeDelta

class TestSettingsType(LoggedTestCase):
    def test_Construction(self):
        self.assertLoggedEqual("empty", {}, SettingsType())
        self.assertLoggedEqual("from None", {}, SettingsType(None))

        settings = SettingsType({'fps': 25})
        self.assertLoggedEqual("copied", settings, SettingsType(settings))

    def test_GetBool(self):
        settings = SettingsType({'yes': True, 'no': 'False', 'text': 'TRUE', 'none': None})
        self.assertLoggedEqual("bool", True, settings.get_bool('yes'))
        self.assertLoggedEqual("false string", False, settings.get_bool('no'))
        self.assertLoggedEqual("true string", True, settings.get_bool('text'))
        self.assertLoggedEqual("none", False, settings.get_bool('none'))
        self.assertLoggedEqual("default", True, settings.get_bool('missing', True))

    def test_GetFloat(self):
        settings = SettingsType({'int': 25, 'float': 23.976, 'str': "29.97"})
        self.assertLoggedEqual("int", 25.0, settings.get_float('int'))
        self.assertLoggedEqual("float", 23.976, settings.get_float('float'))
        self.assertLoggedEqual("str", 29.97, settings.get_float('str'))
        self.assertLoggedIsNone("missing", settings.get_float('missing'))

    def test_GetStr(self):
        settings = SettingsType({'encoding': 'cp1252', 'number': 5})
        self.assertLoggedEqual("str", 'cp1252', settings.get_str('encoding'))
        self.assertLoggedEqual("converted", '5', settings.get_str('number'))
        self.assertLoggedIsNone("missing", settings.get_str('missing'))

    def test_GetTimeDelta(self):
        default = TimeDelta.from_mins(1)
        settings = SettingsType({
            'delta': TimeDelta.from_secs(3),
            'timedelta': timedelta(seconds=4),
            'msecs': 5000,
            'string': "0:00:06",
            'none': None,
        })
        self.assertLoggedEqual("TimeDelta", TimeDelta.from_secs(3), settings.get_timedelta('delta', default))
        self.assertLoggedEqual("timedelta", TimeDelta.from_secs(4), settings.get_timedelta('timedelta', default))
        self.assertLoggedEqual("milliseconds", TimeDelta.from_secs(5), settings.get_timedelta('msecs', default))
        self.assertLoggedEqual("string", TimeDelta.from_secs(6), settings.get_timedelta('string', default))
        self.assertLoggedEqual("none", default, settings.get_timedelta('none', default))
        self.assertLoggedEqual("missing", default, settings.get_timedelta('missing', default))

    @skip_if_debugger_attached
    def test_InvalidValues(self):
        settings = SettingsType({'flag': 'maybe', 'fps': True, 'rate': 'fast', 'duration': 'forever', 'number_flag': 1})

        invalid_cases = [
            (lambda: settings.get_bool('flag'), 'flag'),
            (lambda: settings.get_bool('number_flag'), 'number_flag'),
            (lambda: settings.get_float('fps'), 'fps'),
            (lambda: settings.get_float('rate'), 'rate'),
            (lambda: settings.get_timedelta('duration', TimeDelta()), 'duration'),
            (lambda: settings.get_timedelta('flag', TimeDelta()), 'flag'),
        ]
        for getter, key in invalid_cases:
            with self.subTest(key=key):
                with self.assertRaises(SettingsError) as e:
                    getter()
                log_input_expected_error(settings[key], SettingsError, e.exception)
                self.assertLoggedIn("key in message", key, str(e.exception))
