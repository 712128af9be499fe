# -*- encoding: utf-8 -*-
# @File   : consts.py
# @Time   : 2026/10/19 16:10:37
# @Author : iniscan maintainers

from enum import Enum


class IniToken(str, Enum):
    SECTION_START = '['
    SECTION_STOP = ']'
    COMMENT_CLASSIC = ';'
    COMMENT_HASH = '#'
    ASSIGN = '='
    QUOTE = '"'
    ESCAPE = '\\'
    SPACE = ' '
    LF = '\n'
    CR = '\r'


# not characters, so they never compare equal to a scanned char.
class ScanMark(Enum):
    EOF = -1
    STRING = -3


DEFAULT_SECTION = ''
DEFAULT_WHITESPACE = frozenset('\t')
