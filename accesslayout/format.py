# coding: utf-8

import re
from abc import ABC, abstractmethod

from . import _common
from . import layout as _layout


class _FormatBase(ABC):
    """Base class of access log formats.

    There are only two kinds of formats:
    :class:`LayoutFormat` (compiled from a layout string)
    and :class:`RegexFormat` (a raw regular expression).
    Both compile their patterns once in the constructor,
    and never change them afterward.
    The compiled patterns can be shared by multiple threads.
    """

    def __init__(self, name, description=""):
        self._name = name
        self._description = description
        self._reobj = None

    def __repr__(self):
        return "{0}({1!r})".format(self.__class__.__name__, self._name)

    @property
    def identifier(self):
        """str: Format type name, shared by all formats."""
        return _common.IDENTIFIER

    @property
    def name(self):
        return self._name

    @property
    def description(self):
        return self._description

    @property
    def pattern(self):
        """re.Pattern: Compiled regular expression of this format."""
        return self._reobj

    @property
    def regex(self):
        """str: Regular expression pattern string of this format."""
        return self._reobj.pattern

    @property
    def field_names(self):
        """tuple of str: Names of fields this format can extract."""
        groupindex = self._reobj.groupindex
        return tuple(sorted(groupindex, key=groupindex.get))

    @abstractmethod
    def properties(self):
        raise NotImplementedError

    def _compile(self, restr):
        try:
            return re.compile(restr)
        except re.error as e:
            msg = "format {0}: invalid regular expression: {1}".format(
                self._name, e)
            raise _common.LayoutDefinitionError(msg) from e

    def process_line(self, line):
        """Extract fields from a log line.

        Args:
            line (str): A log line without line feed code.

        Returns:
            dict: Field names and the captured strings.
            Fields that did not participate in the match are not included.
            None if the line does not match this format.
        """
        mo = self._reobj.match(line)
        if mo is None:
            return None
        return {key: val for key, val in mo.groupdict().items()
                if val is not None}


class LayoutFormat(_FormatBase):
    """Access log format given as an Apache LogFormat layout string.

    | e.g., :samp:`%h %l %u %t "%r" %>s %b`

    A field appearing twice in the layout is captured at the first
    appearance only. For example, :samp:`%<s %>s` gives the original
    status, not the final one.

    Args:
        name (str): format name.
        layout (str): layout string (see :mod:`~accesslayout.layout`).
        description (str, optional)

    Raises:
        UnsupportedDirectiveError: if layout includes unknown directives.
    """

    def __init__(self, name, layout, description=""):
        super().__init__(name, description)
        self._layout = layout
        self._reobj = self._compile(self.get_regex())

    @property
    def layout(self):
        return self._layout

    def get_regex(self):
        """Convert the layout into a regular expression pattern string."""
        return _layout.compile_layout(self._layout)

    def properties(self):
        return {"layout": self._layout}


class RegexFormat(_FormatBase):
    """Access log format given as a regular expression.
    Named groups in the regular expression are used as field names.

    Args:
        name (str): format name.
        regex (str): regular expression pattern string.
        description (str, optional)
    """

    def __init__(self, name, regex, description=""):
        super().__init__(name, description)
        self._reobj = self._compile(regex)
        if len(self._reobj.groupindex) == 0:
            msg = "format {0}: no named groups in regex".format(name)
            raise _common.LayoutDefinitionError(msg)

    def properties(self):
        return {"regex": self.regex}
