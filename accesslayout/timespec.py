# coding: utf-8

"""Translate strftime-like time formats in :samp:`%{...}t` directives
into regular expression patterns.

Unknown specifiers are not errors: they are matched literally
as written in the layout. A layout with such specifiers
fails to match the log lines instead of failing to compile.
"""

import re
import types

_re_specifier = re.compile(r"%.", re.DOTALL)

TIME_SPECIFIERS = types.MappingProxyType({
    "%a": r"[A-Za-z]+",  # weekday name (abbreviated)
    "%A": r"[A-Za-z]+",  # weekday name
    "%b": r"[A-Za-z]{3}",  # month name (abbreviated)
    "%B": r"[A-Za-z]+",  # month name
    "%c": r".+",  # locale datetime
    "%d": r"\d{2}",
    "%e": r"\d{1,2}",  # day without zero padding
    "%f": r"\d{6}",  # microsecond
    "%H": r"\d{2}",
    "%I": r"\d{2}",
    "%j": r"\d{3}",  # day of the year
    "%m": r"\d{2}",
    "%M": r"\d{2}",
    "%p": r"[APM]+",
    "%S": r"\d{2}",
    "%U": r"\d{2}",
    "%w": r"\d",
    "%W": r"\d{2}",
    "%x": r".+",  # locale date
    "%X": r".+",  # locale time
    "%y": r"\d{2}",
    "%Y": r"\d{4}",
    "%z": r"[+-]\d{4}",  # UTC offset
    "%Z": r"[A-Za-z]+",  # timezone name
})


def translate(time_format):
    """Convert a time format into a regular expression pattern string.

    Specifiers are replaced wherever they appear,
    and other characters are escaped to match literally.

    | e.g., :samp:`%Y-%m-%dT%H:%M:%SZ` ->
        :regexp:`\\d{4}\\-\\d{2}\\-\\d{2}T\\d{2}:\\d{2}:\\d{2}Z`

    Args:
        time_format (str): time format, e.g., :samp:`%d/%b/%Y:%H:%M:%S %z`.

    Returns:
        str: regular expression pattern (without groups).
    """
    l_pattern = []
    prev = 0
    for mo in _re_specifier.finditer(time_format):
        l_pattern.append(re.escape(time_format[prev:mo.start()]))
        specifier = mo.group(0)
        if specifier in TIME_SPECIFIERS:
            l_pattern.append(TIME_SPECIFIERS[specifier])
        else:
            l_pattern.append(re.escape(specifier))
        prev = mo.end()
    l_pattern.append(re.escape(time_format[prev:]))
    return "".join(l_pattern)
