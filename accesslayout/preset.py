# coding: utf-8

"""accesslayout.preset is a submodule to provide some formats
for frequently used access log layouts."""

import types

from ._common import LayoutDefinitionError, LogParser
from .format import LayoutFormat, RegexFormat

LAYOUT_COMMON = r'%h %l %u %t "%r" %>s %b'
LAYOUT_COMBINED = r'%h %l %u %t "%r" %>s %b "%{Referer}i" "%{User-agent}i"'

# Common Log Format with an optional referer and user-agent pair
REGEX_DEFAULT = (r'^(?P<remote_addr>[^ ]*) (?P<remote_logname>[^ ]*) '
                 r'(?P<remote_user>[^ ]*) \[(?P<timestamp>[^\]]*)\] '
                 r'"(?P<request_method>\S+)(?: +(?P<request_uri>[^ ]+))?'
                 r'(?: +(?P<server_protocol>\S+))?" '
                 r'(?P<status>[^ ]*) (?P<body_bytes_sent>[^ ]*)'
                 r'(?: "(?P<http_referer>[^"]*)" "(?P<http_user_agent>[^"]*)")?$')

DEFAULT_NAME = "apache_default"

PRESETS = types.MappingProxyType({fmt.name: fmt for fmt in [
    LayoutFormat("common", LAYOUT_COMMON,
                 description="Apache Common Log Format"),
    LayoutFormat("combined", LAYOUT_COMBINED,
                 description="Apache Combined Log Format"),
    RegexFormat(DEFAULT_NAME, REGEX_DEFAULT,
                description=("A default regex format that covers both "
                             "Apache Common and Combined log formats.")),
]})
"""Read-only mapping from preset names to formats."""


def preset_names():
    return tuple(PRESETS)


def get_preset(name):
    """Get a preset format by name.

    Args:
        name (str): one of "common", "combined" and "apache_default".

    Returns:
        :class:`~accesslayout.format.LayoutFormat`
        or :class:`~accesslayout.format.RegexFormat`
    """
    try:
        return PRESETS[name]
    except KeyError:
        msg = "no preset format named {0}".format(name)
        raise LayoutDefinitionError(msg) from None


def default_format():
    """Get the "apache_default" preset,
    which accepts both Common and Combined Log Format.
    Referer and user-agent fields are not extracted
    if they do not appear in the line.

    | e.g., ``127.0.0.1 - - [10/Oct/2000:13:55:36 -0700] "GET /apache_pb.gif HTTP/1.0" 200 2326``

    | e.g., ``127.0.0.1 - frank [10/Oct/2000:13:55:36 -0700] "GET /apache_pb.gif HTTP/1.0"
        200 2326 "http://www.example.com/start.html" "Mozilla/4.08 [en] (Win98; I ;Nav)"``

    Returns:
        :class:`~accesslayout.format.RegexFormat`

    Reference:
        Log Files - Apache HTTP Server Version 2.4: https://httpd.apache.org/docs/2.4/en/logs.html
    """
    return PRESETS[DEFAULT_NAME]


def default(**kwargs):
    """Generate :class:`~accesslayout.LogParser` of default settings.
    :func:`~accesslayout.init_parser` generates same instance without any arguments.

    Returns:
        :class:`~accesslayout.LogParser`
    """
    return LogParser([default_format()], **kwargs)
