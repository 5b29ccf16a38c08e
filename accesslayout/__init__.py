# coding: utf-8

__version__ = '0.1.0'

from ._common import *
from .format import LayoutFormat, RegexFormat
from .layout import compile_layout
from .load import (load_from_config, load_from_script,
                   load_parser_config, load_parser_script)
