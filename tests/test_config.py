import os
import tempfile
import unittest

_CONFIG = """
[general]
formats = timed, raw, common
null_value = -

[format.timed]
description = Common Log Format with ISO8601 timestamp and request time
layout = %h %l %u [%{%Y-%m-%dT%H:%M:%SZ}t] "%r" %>s %b %D

[format.raw]
regex = ^(?P<remote_addr>\\S+)
    \\s(?P<status>\\d{3})$
"""


class TestConfig(unittest.TestCase):

    def setUp(self):
        self._tmpdir = tempfile.TemporaryDirectory()

    def tearDown(self):
        self._tmpdir.cleanup()

    def _write(self, text):
        fp = os.path.join(self._tmpdir.name, "formats.conf")
        with open(fp, "w") as f:
            f.write(text)
        return fp

    def test_load_from_config(self):
        import accesslayout
        fp = self._write(_CONFIG)
        formats, null_value = accesslayout.load_from_config(fp)
        assert [fmt.name for fmt in formats] == ["timed", "raw", "common"]
        assert null_value == "-"
        assert isinstance(formats[0], accesslayout.LayoutFormat)
        assert isinstance(formats[1], accesslayout.RegexFormat)
        assert formats[1].regex == r"^(?P<remote_addr>\S+)\s(?P<status>\d{3})$"

        parser = accesslayout.load_parser_config(fp)
        d = parser.process_line('192.0.2.1 - - [2025-02-24T12:34:56Z] "GET / HTTP/1.1" 200 512 1043')
        assert d == {"remote_addr": "192.0.2.1",
                     "timestamp": "2025-02-24T12:34:56Z",
                     "request_method": "GET",
                     "request_uri": "/",
                     "server_protocol": "HTTP/1.1",
                     "status": "200",
                     "body_bytes_sent": "512",
                     "request_time_us": "1043"}
        assert parser.process_line("192.0.2.1 503") == {"remote_addr": "192.0.2.1",
                                                        "status": "503"}

    def test_errors(self):
        import accesslayout
        from accesslayout import LayoutDefinitionError, UnsupportedDirectiveError
        from accesslayout import load_from_config

        fp = self._write("[general]\nformats = mine\n\n"
                         "[format.mine]\nlayout = %h\nregex = ^(?P<a>.*)$\n")
        with self.assertRaises(LayoutDefinitionError):
            load_from_config(fp)

        fp = self._write("[general]\nformats = mine\n\n"
                         "[format.mine]\ndescription = nothing\n")
        with self.assertRaises(LayoutDefinitionError):
            load_from_config(fp)

        fp = self._write("[general]\nformats = unknown\n")
        with self.assertRaises(LayoutDefinitionError):
            load_from_config(fp)

        fp = self._write("[general]\nnull_value = -\n")
        with self.assertRaises(LayoutDefinitionError):
            load_from_config(fp)

        fp = self._write("[general]\nformats = , ,\n")
        with self.assertRaises(LayoutDefinitionError):
            load_from_config(fp)
        with self.assertRaises(LayoutDefinitionError):
            accesslayout.load_parser_config(fp)

        fp = self._write("[general]\nformats = mine\n\n"
                         "[format.mine]\nlayout = %h %{X-Forwarded-For}i\n")
        with self.assertRaises(UnsupportedDirectiveError):
            load_from_config(fp)

    def test_load_from_script(self):
        import accesslayout
        fp = os.path.join(os.path.dirname(accesslayout.__file__),
                          "default_script.py")
        formats = accesslayout.load_from_script(fp)
        assert [fmt.name for fmt in formats] == ["vhost_combined", "timed",
                                                 "apache_default"]

        parser = accesslayout.load_parser_script(fp)
        d = parser.process_line('www.example.com:443 192.0.2.1 - - '
                                '[24/Feb/2025:12:34:56 +0000] "GET / HTTP/1.1" '
                                '200 2326 "-" "curl/8.0"')
        assert d["server_name"] == "www.example.com"
        assert d["server_port"] == "443"
        assert d["bytes_sent"] == "2326"
