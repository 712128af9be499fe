# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2026/10/19 17:02:45
# @Author : iniscan maintainers

from .model import IniStore, RWLock
from .parser import IniParser, dump, dumps, load, loads
from .scanner import IniError, IniSyntaxError, Position, Scanner
