import unittest

_COMMON_LINE = ('127.0.0.1 - frank [10/Oct/2000:13:55:36 -0700] '
                '"GET /apache_pb.gif HTTP/1.0" 200 2326')
_COMBINED_LINE = (_COMMON_LINE + ' "http://www.example.com/start.html" '
                  '"Mozilla/4.08 [en] (Win98; I ;Nav)"')


class TestPreset(unittest.TestCase):

    def test_default(self):
        from accesslayout.preset import default_format
        fmt = default_format()

        d = fmt.process_line(_COMMON_LINE)
        assert d["remote_user"] == "frank"
        assert d["timestamp"] == "10/Oct/2000:13:55:36 -0700"
        assert d["body_bytes_sent"] == "2326"
        assert "http_referer" not in d
        assert "http_user_agent" not in d

        d = fmt.process_line(_COMBINED_LINE)
        assert d["http_referer"] == "http://www.example.com/start.html"
        assert d["http_user_agent"] == "Mozilla/4.08 [en] (Win98; I ;Nav)"

        d = fmt.process_line(_COMMON_LINE + ' "" ""')
        assert d["http_referer"] == ""
        assert d["http_user_agent"] == ""

    def test_layouts(self):
        from accesslayout.preset import get_preset
        common = get_preset("common")
        combined = get_preset("combined")

        d = common.process_line(_COMMON_LINE)
        assert d["request_uri"] == "/apache_pb.gif"
        # not anchored at the end
        assert common.process_line(_COMBINED_LINE) is not None

        assert combined.process_line(_COMMON_LINE) is None
        d = combined.process_line(_COMBINED_LINE)
        assert d["http_user_agent"] == "Mozilla/4.08 [en] (Win98; I ;Nav)"

    def test_catalog(self):
        from accesslayout import LayoutDefinitionError
        from accesslayout import preset
        assert set(preset.preset_names()) == {"common", "combined",
                                             "apache_default"}
        assert preset.get_preset("common").properties() == {
            "layout": preset.LAYOUT_COMMON}
        with self.assertRaises(LayoutDefinitionError):
            preset.get_preset("nginx")
        with self.assertRaises(TypeError):
            preset.PRESETS["mine"] = preset.get_preset("common")
