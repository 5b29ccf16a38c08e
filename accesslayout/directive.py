# coding: utf-8

"""accesslayout.directive defines the directives available
in Apache LogFormat layout strings, and the regular expression
patterns to capture the corresponding fields.

Reference:
    mod_log_config - Apache HTTP Server Version 2.4:
    https://httpd.apache.org/docs/2.4/mod/mod_log_config.html
"""

import re
import types

from . import _common

_re_named_group = re.compile(r"\(\?P<(?P<name>\w+)>")

# frequently used fragments
_NOT_SPACE = r"[^ ]*"
_NOT_QUOTE = r'[^"]*'


class Directive:
    """A directive in layout strings, such as :samp:`%h` or :samp:`%>s`.

    A directive corresponds to a regular expression pattern
    with zero or more named groups.
    The group names are used as the field names in parsed results.
    One directive can extract multiple fields (e.g., :samp:`%r`
    is split into request_method, request_uri and server_protocol).

    Args:
        token (str): Directive string as written in layouts.
        pattern (str): Regular expression pattern.
            Unnamed capturing groups are not allowed;
            use non-capturing groups :regexp:`(?:...)` instead.
        description (str, optional)
    """

    def __init__(self, token, pattern, description=""):
        self._token = token
        self._pattern = pattern
        self._description = description

        reobj = re.compile(pattern)
        if reobj.groups != len(reobj.groupindex):
            msg = "directive {0} includes unnamed groups".format(token)
            raise _common.LayoutDefinitionError(msg)
        self._field_names = tuple(sorted(reobj.groupindex,
                                         key=reobj.groupindex.get))

    def __repr__(self):
        return "Directive({0!r}, {1!r})".format(self._token, self._pattern)

    @property
    def token(self):
        return self._token

    @property
    def pattern(self):
        """str: Regular expression pattern string of this directive."""
        return self._pattern

    @property
    def description(self):
        return self._description

    @property
    def field_names(self):
        """tuple of str: Names of the fields captured by this directive."""
        return self._field_names

    def get_regex(self, exclude=()):
        """Get regular expression pattern string to embed in a layout.

        Python re does not accept duplicated group names in one pattern.
        Fields in exclude (usually already captured by preceding
        directives in the same layout) are matched
        with non-capturing groups instead.

        Args:
            exclude (iterable of str, optional): Field names not to capture.
        """
        if not exclude:
            return self._pattern

        def _replace(mo):
            if mo.group("name") in exclude:
                return "(?:"
            else:
                return mo.group(0)

        return _re_named_group.sub(_replace, self._pattern)

    def test(self, string):
        """Test this directive will match the input string or not.
        Note that this function is only for debugging your layouts
        (because it generates internal re.Pattern for every call).

        Args:
            string: Input string to test matching.

        Returns:
            re.Match or None
        """
        pattern = re.compile(r"^" + self._pattern + r"$")
        return pattern.match(string)


def _field(name, pattern=_NOT_SPACE):
    return r"(?P<" + name + r">" + pattern + r")"


_REQUEST = (_field("request_method", r"\S+")
            + r"(?: +" + _field("request_uri", r"[^ ]+") + r")?"
            + r"(?: +" + _field("server_protocol", r"\S+") + r")?")

_DIRECTIVE_LIST = [
    Directive("%%", r"%", "literal %"),
    Directive("%a", _field("remote_addr"), "client IP address"),
    Directive("%{c}a", _field("remote_addr"),
              "client IP address of the underlying connection"),
    Directive("%A", _field("local_addr"), "local IP address"),
    Directive("%b", _field("body_bytes_sent"),
              "size of response excluding headers, - if no bytes sent"),
    Directive("%B", _field("body_bytes_sent"),
              "size of response excluding headers, 0 if no bytes sent"),
    Directive("%D", _field("request_time_us"),
              "time taken to serve the request, in microseconds"),
    Directive("%f", _field("filename"), "filename"),
    Directive("%h", _field("remote_addr"),
              "remote hostname, or IP address if hostname unknown"),
    Directive("%{c}h", _field("remote_addr"),
              "remote hostname of the underlying connection"),
    Directive("%H", _field("server_protocol"), "request protocol"),
    Directive("%k", _field("keepalive_requests"),
              "number of keepalive requests handled on this connection"),
    Directive("%l", _field("remote_logname"),
              "remote logname from identd, almost always -"),
    Directive("%m", _field("request_method"), "request method"),
    Directive("%p", _field("server_port"), "canonical port of the server"),
    Directive("%{canonical}p", _field("server_port"),
              "canonical port of the server"),
    Directive("%{local}p", _field("apache_port"),
              "actual port the server is bound on"),
    Directive("%{remote}p", _field("client_port"), "client port"),
    Directive("%P", _field("pid"), "process ID of the child"),
    Directive("%{pid}P", _field("pid"), "process ID of the child"),
    Directive("%{tid}P", _field("thread_id"), "thread ID of the child"),
    Directive("%{hextid}P", _field("hex_thread_id"),
              "thread ID of the child in hexadecimal"),
    Directive("%q", _field("query_string"), "query string"),
    Directive("%r", _REQUEST,
              "first line of request (method, uri and protocol)"),
    Directive("%R", _field("handler"), "handler generating the response"),
    Directive("%s", _field("status"), "status"),
    Directive("%<s", _field("status"), "original status"),
    Directive("%>s", _field("status"), "final status"),
    Directive("%t", r"\[" + _field("timestamp", r"[^\]]*") + r"\]",
              "time the request was received, in brackets"),
    Directive("%T", _field("request_time"),
              "time taken to serve the request, in seconds"),
    Directive("%{s}T", _field("request_time"),
              "time taken to serve the request, in seconds"),
    Directive("%{ms}T", _field("request_time_ms"),
              "time taken to serve the request, in milliseconds"),
    Directive("%{us}T", _field("request_time_us"),
              "time taken to serve the request, in microseconds"),
    Directive("%u", _field("remote_user"), "remote user"),
    Directive("%<u", _field("remote_user"), "remote user"),
    Directive("%>u", _field("remote_user"), "remote user (final)"),
    Directive("%U", _field("request_uri"),
              "URL path requested, not including query string"),
    Directive("%v", _field("server_name"), "canonical server name"),
    Directive("%V", _field("server_name"),
              "server name according to UseCanonicalName"),
    Directive("%X", _field("connection_status"),
              "connection status when response is completed (X, + or -)"),
    Directive("%I", _field("bytes_received"),
              "bytes received, including request and headers"),
    Directive("%O", _field("bytes_sent"), "bytes sent, including headers"),
    Directive("%S", _field("bytes_transferred"),
              "bytes transferred (received and sent)"),
    Directive("%{Referer}i", _field("http_referer", _NOT_QUOTE),
              "Referer header"),
    Directive("%{User-agent}i", _field("http_user_agent", _NOT_QUOTE),
              "User-agent header"),
    Directive("%{User-Agent}i", _field("http_user_agent", _NOT_QUOTE),
              "User-Agent header"),
]

DIRECTIVES = types.MappingProxyType(
    {d.token: d for d in _DIRECTIVE_LIST})
"""Read-only mapping from directive tokens to :class:`Directive`."""


def lookup(token):
    """Get the :class:`Directive` for a token.

    Args:
        token (str): e.g., :samp:`%>s`.

    Returns:
        :class:`Directive`, or None if the token is not supported.
    """
    return DIRECTIVES.get(token)


def supported_tokens():
    return tuple(sorted(DIRECTIVES))
