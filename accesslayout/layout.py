# coding: utf-8

"""Compile Apache LogFormat layout strings into regular expressions.

A layout such as :samp:`%h %l %u %t "%r" %>s %b` consists of
directives (:samp:`%h`, :samp:`%>s`, ...) and literal characters
(white spaces, quotations, brackets, ...).
Directives are replaced with the patterns in
:data:`~directive.DIRECTIVES`, and time directives
(:samp:`%{...}t`) are translated with :func:`~timespec.translate`.
Literal characters are escaped to match as they are.
"""

import logging
import re

from . import _common
from . import directive
from . import timespec

_logger = logging.getLogger(__name__)

_KEY_TIMESTAMP = _common.KEY_TIMESTAMP

# %% is consumed first, so that %%h is a literal "%h"
_re_token = re.compile(r"%(?:%"
                       r"|\{(?P<param>[^}]+)\}(?P<letter>[a-zA-Z])"
                       r"|[<>]?[a-zA-Z])")
_TIME_LETTER = "t"


def _is_time_directive(mo):
    return mo.group("param") is not None and mo.group("letter") == _TIME_LETTER


def find_time_spans(layout):
    """Find time directives with formats (e.g., :samp:`%{%Y-%m-%d}t`).

    Returns:
        list of tuple: (start, end) of each time directive.
    """
    return [mo.span() for mo in _re_token.finditer(layout)
            if _is_time_directive(mo)]


def find_directive_spans(layout):
    """Find all directives in the layout, including time directives.

    Returns:
        list of tuple: (start, end) of each directive.
    """
    return [mo.span() for mo in _re_token.finditer(layout)]


def merge_spans(spans):
    """Merge overlapping spans. Adjacent spans are kept separate.

    Args:
        spans (iterable of tuple): (start, end) pairs in any order.

    Returns:
        list of tuple: sorted spans without overlaps.
    """
    merged = []
    for start, end in sorted(spans):
        if merged and start < merged[-1][1]:
            if end > merged[-1][1]:
                merged[-1] = (merged[-1][0], end)
        else:
            merged.append((start, end))
    return merged


def escape_layout(layout, spans, replace=None):
    """Escape literal characters in the layout.

    Characters in the given spans are not escaped.
    They are copied as they are, or replaced with
    the return value of replace if given.

    Args:
        layout (str): layout string.
        spans (list of tuple): (start, end) pairs to preserve.
            Overlapping spans are merged.
        replace (callable, optional): called with the string
            in each (merged) span.

    Returns:
        str
    """
    l_buf = []
    prev = 0
    for start, end in merge_spans(spans):
        l_buf.append(re.escape(layout[prev:start]))
        if replace is None:
            l_buf.append(layout[start:end])
        else:
            l_buf.append(replace(layout[start:end]))
        prev = end
    l_buf.append(re.escape(layout[prev:]))
    return "".join(l_buf)


def _check_directives(layout):
    for mo in _re_token.finditer(layout):
        if _is_time_directive(mo):
            continue
        token = mo.group(0)
        if directive.lookup(token) is None:
            raise _common.UnsupportedDirectiveError(token)


def compile_layout(layout):
    """Convert a layout string into a regular expression pattern string.

    The pattern is anchored at the start of lines, but not at the end:
    lines with additional fields after the layout also match.

    A field appearing twice in a layout (e.g., :samp:`%h` and :samp:`%a`)
    is captured at the first appearance only.
    This also applies to time directives:
    all of them are translated, and the first one is captured
    as "timestamp" (unless :samp:`%t` precedes it).

    Args:
        layout (str): e.g., :samp:`%h %l %u %t "%r" %>s %b`.

    Returns:
        str: regular expression pattern. Empty if layout is empty.

    Raises:
        UnsupportedDirectiveError: if layout includes unknown directives.
    """
    _check_directives(layout)

    captured = set()

    def _substitute(token):
        mo = _re_token.fullmatch(token)
        if _is_time_directive(mo):
            time_regex = timespec.translate(mo.group("param"))
            if _KEY_TIMESTAMP in captured:
                return r"(?:" + time_regex + r")"
            captured.add(_KEY_TIMESTAMP)
            return r"(?P<" + _KEY_TIMESTAMP + r">" + time_regex + r")"
        else:
            d = directive.lookup(token)
            ret = d.get_regex(exclude=captured)
            captured.update(d.field_names)
            return ret

    spans = merge_spans(find_time_spans(layout) + find_directive_spans(layout))
    restr = escape_layout(layout, spans, replace=_substitute)
    if restr != "":
        restr = "^" + restr
    _logger.debug("layout %r compiled into %r", layout, restr)
    return restr
