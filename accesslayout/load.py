#!/usr/bin/env python
# coding: utf-8

import logging

from . import _common

_logger = logging.getLogger(__name__)

_SECTION_GENERAL = "general"
_SECTION_PREFIX = "format."


def load_from_script(fp):
    """Load external python script that gives accesslayout formats.
    You can copy default_script.py, and extend it.
    Then this function can load the extended script by its file path.

    Args:
        fp (str): file path of external python script.

    Returns:
        formats (list): a list of format objects.
    """

    import os.path
    import sys
    from importlib import import_module
    path = os.path.dirname(fp)
    sys.path.append(os.path.abspath(path))
    libname = os.path.splitext(os.path.basename(fp))[0]
    script_mod = import_module(libname)

    return list(script_mod.formats)


def load_parser_script(fp, **kwargs):
    """Generate :class:`~accesslayout.LogParser` with formats
    given in an external python script (see :func:`load_from_script`)."""
    return _common.LogParser(load_from_script(fp), **kwargs)


def _format_from_section(name, section):
    from .format import LayoutFormat, RegexFormat
    description = section.get("description", "")
    has_layout = "layout" in section
    has_regex = "regex" in section
    if has_layout and has_regex:
        msg = "format {0}: give only one of layout and regex".format(name)
        raise _common.LayoutDefinitionError(msg)
    elif has_layout:
        return LayoutFormat(name, section["layout"], description=description)
    elif has_regex:
        # ignore line feed
        s = section["regex"].replace('\r\n', '').replace('\n', '')
        return RegexFormat(name, s, description=description)
    else:
        msg = "format {0}: layout or regex is required".format(name)
        raise _common.LayoutDefinitionError(msg)


def load_from_config(fp):
    """Load accesslayout formats from configparser text file.

    The [general] section lists the formats to use in order.
    Each name refers to a [format.NAME] section in the file,
    or to a preset format if no such section exists.
    A [format.NAME] section has either option layout
    or regex (in which line feed codes are ignored).
    Percent signs are not interpolated.

    Example:
        ::

            [general]
            formats = mine, combined
            null_value = -

            [format.mine]
            description = Common Log Format with request time
            layout = %h %l %u %t "%r" %>s %b %D

    Args:
        fp (str): file path of configparser text file.

    Returns:
        tuple: a list of format objects and the null value
        (None if not given).
    """

    def _get_list(conf, section, option):
        # ignore line feed
        s = conf[section][option].replace('\r\n', '').replace('\n', '')
        return [r.strip() for r in s.split(',') if r.strip() != ""]

    import configparser
    conf = configparser.ConfigParser(interpolation=None)
    with open(fp) as f:
        conf.read_file(f)

    if not conf.has_option(_SECTION_GENERAL, "formats"):
        msg = "{0}: option formats in [general] is required".format(fp)
        raise _common.LayoutDefinitionError(msg)

    from . import preset
    formats = []
    for name in _get_list(conf, _SECTION_GENERAL, "formats"):
        section_name = _SECTION_PREFIX + name
        if conf.has_section(section_name):
            fmt = _format_from_section(name, conf[section_name])
        else:
            fmt = preset.get_preset(name)
        _logger.debug("format %s loaded from %s", name, fp)
        formats.append(fmt)

    if len(formats) == 0:
        msg = "{0}: no formats given in [general]".format(fp)
        raise _common.LayoutDefinitionError(msg)

    null_value = conf.get(_SECTION_GENERAL, "null_value", fallback=None)
    return formats, null_value


def load_parser_config(fp):
    """Generate :class:`~accesslayout.LogParser` with formats
    given in a configparser text file (see :func:`load_from_config`)."""
    formats, null_value = load_from_config(fp)
    return _common.LogParser(formats, null_value=null_value)
