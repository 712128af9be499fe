# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2026/10/19 17:04:10
# @Author : iniscan maintainers

import logging

from .ini import (
    IniError,
    IniParser,
    IniStore,
    IniSyntaxError,
    dump,
    dumps,
    load,
    loads,
)

__all__ = [
    'IniStore', 'IniParser', 'IniError', 'IniSyntaxError',
    'load', 'loads', 'dump', 'dumps'
]

logging.basicConfig(level=logging.INFO,
                    format='[%(asctime)s] %(levelname)s: %(message)s')
