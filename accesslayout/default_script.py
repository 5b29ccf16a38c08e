#!/usr/bin/env python
# coding: utf-8

"""accesslayout loads following object from this script:
* formats (list of format objects)

Formats are evaluated in order, and the first matched one is used.
A format is one of the following:

- LayoutFormat(name, layout)
Apache LogFormat layout string, such as '%h %l %u %t "%r" %>s %b'.
Literal characters (quotations, brackets, ...) are matched as they are.
A time directive like %{%Y-%m-%d %H:%M:%S}t is captured as "timestamp".

- RegexFormat(name, regex)
Regular expression with named groups, used as field names.

Preset formats (common, combined, apache_default) are available
with accesslayout.preset.get_preset(name).
"""

from accesslayout.format import LayoutFormat
from accesslayout.preset import get_preset

_layout_vhost_combined = ('%v:%p %h %l %u %t "%r" %>s %O '
                          '"%{Referer}i" "%{User-Agent}i"')
_layout_timed = '%h %l %u [%{%Y-%m-%d %H:%M:%S}t] "%r" %>s %b %D'

formats = [LayoutFormat("vhost_combined", _layout_vhost_combined),
           LayoutFormat("timed", _layout_timed),
           get_preset("apache_default")]
