# coding: utf-8

import logging
from collections.abc import Iterable

_logger = logging.getLogger(__name__)

# keys in public
KEY_TIMESTAMP = "timestamp"
IDENTIFIER = "apache_access_log"

# a single dash means "not present" in access log lines
NIL_VALUE = "-"


class LayoutDefinitionError(Exception):
    """LayoutDefinitionError is raised when the given format definitions
    are inappropriate (e.g., broken configuration files
    or raw regular expressions without named groups).
    """
    pass


class UnsupportedDirectiveError(LayoutDefinitionError):
    """UnsupportedDirectiveError is raised when a layout string
    includes a directive that is not defined in
    :data:`~directive.DIRECTIVES`.
    The format is not usable at all in such case.

    Args:
        token (str): The offending directive, e.g., :samp:`%{X-RANDOM-IP}i`.
    """

    def __init__(self, token):
        self.token = token
        super().__init__("unsupported token in format: {0}".format(token))


class LogParseFailure(Exception):
    """LogParseFailure is raised when the input log line
    not matched with all given formats.

    If you want to pass such mismatching log lines,
    use try-except with this exception.
    """
    pass


class LogParser:
    """Log parser object.

    LogParser tries one or more access log formats
    (:class:`~format.LayoutFormat` or :class:`~format.RegexFormat`)
    in order, and the first matched format is used for the line.
    Parsed results are returned in one dict object,
    with field names (e.g., "remote_addr", "status") as keys
    and the captured strings as values.
    Fields that did not participate in the match
    (e.g., optional referer in the default preset) are not included.

    Example:
        >>> line = ('192.168.1.1 - john [24/Feb/2025:12:34:56 +0000] '
        ...         '"GET /index.html HTTP/1.1" 200 1234')
        >>> parser = accesslayout.init_parser()  # apache_default preset
        >>> d = parser.process_line(line)
        >>> d["remote_addr"]
        '192.168.1.1'
        >>> d["timestamp"]
        '24/Feb/2025:12:34:56 +0000'
        >>> "http_referer" in d
        False

    Args:
        formats (format object or list of it):
            one or multiple formats to use.
        null_value (str, optional): If given, fields with this value
            (usually :data:`NIL_VALUE`) are removed from the results.
            Defaults to None, which keeps the captured text as is.
    """

    def __init__(self, formats, null_value=None):
        from .format import _FormatBase
        if isinstance(formats, _FormatBase):
            self.formats = [formats]
        elif isinstance(formats, Iterable) and not isinstance(formats, str):
            self.formats = list(formats)
        else:
            raise TypeError
        if not all(isinstance(fmt, _FormatBase) for fmt in self.formats):
            raise TypeError("formats must be LayoutFormat or RegexFormat")
        self.null_value = null_value

    def process_line(self, line, verbose=False):
        """Parse an access log line.

        Args:
            line (str): A log line. Line feed code will be removed.
            verbose (bool, optional): Log intermediate progress
                of applying formats (in DEBUG level).

        Returns:
            dict: parsed fields, or None for empty lines.
        """
        line = line.rstrip("\r\n")
        if line == "":
            return None
        for fmt in self.formats:
            ret = fmt.process_line(line)
            if ret is None:
                if verbose:
                    _logger.debug("format %s: mismatch", fmt.name)
            else:
                if verbose:
                    _logger.debug("format %s: match", fmt.name)
                break
        else:
            if len(line) > 50:
                tmp_msg = line[:50]
            else:
                tmp_msg = line
            msg = "access log format mismatch: {0}".format(tmp_msg)
            raise LogParseFailure(msg)

        if self.null_value is not None:
            ret = {key: val for key, val in ret.items()
                   if val != self.null_value}
        return ret


def init_parser(formats=None, **kwargs):
    """Generate :class:`LogParser` object.

    If no formats are given,
    this function generates LogParser with the "apache_default" preset,
    which accepts both Common and Combined Log Format.

    Args:
        formats (format object or list of it, optional):
            one or multiple formats to use.
        **kwargs: passed to :class:`LogParser`.
    """

    if formats is None:
        from . import preset
        formats = [preset.default_format()]
    return LogParser(formats, **kwargs)
