import re
import unittest


class TestTimespec(unittest.TestCase):

    def test_translate(self):
        from accesslayout.timespec import translate
        assert translate("%Y-%m-%d") == r"\d{4}\-\d{2}\-\d{2}"

        regex = re.compile("^" + translate("%d/%b/%Y:%H:%M:%S %z") + "$")
        assert regex.match("24/Feb/2025:12:34:56 +0000")
        assert regex.match("24/Feb/2025:15:30:45 -0500")
        assert regex.match("24/February/2025:12:34:56 +0000") is None

        regex = re.compile("^" + translate("%a %b %e %H:%M:%S.%f %Z") + "$")
        assert regex.match("Mon Feb 3 12:34:56.012345 UTC")

    def test_literal(self):
        from accesslayout.timespec import translate
        regex = re.compile("^" + translate("%H.%M") + "$")
        assert regex.match("12.34")
        assert regex.match("12:34") is None

    def test_repeat(self):
        from accesslayout.timespec import translate
        regex = re.compile("^" + translate("%d%d") + "$")
        assert regex.match("0102")

    def test_unknown(self):
        from accesslayout.timespec import translate
        assert translate("%Q") == "%Q"
        assert translate("") == ""

        from accesslayout.format import LayoutFormat
        fmt = LayoutFormat("test", "[%{%Q}t]")
        assert fmt.process_line("[%Q]") == {"timestamp": "%Q"}
        assert fmt.process_line("[12]") is None
