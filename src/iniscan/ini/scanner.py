# -*- encoding: utf-8 -*-
# @File   : scanner.py
# @Time   : 2026/10/19 16:14:02
# @Author : iniscan maintainers

"""A character scanner for the INI reader.

Every character is a token of its own, except a double-quoted string
literal which comes back whole as `ScanMark.STRING` (string mode only).
Whitespace characters (tab by default) are skipped between tokens,
but `peek()` never skips anything.
"""

from io import TextIOBase
from typing import NamedTuple

from .consts import DEFAULT_WHITESPACE, IniToken, ScanMark


class Position(NamedTuple):
    line: int    # 1-based
    column: int  # 1-based, in characters
    filename: str | None = None

    def __str__(self) -> str:
        if self.filename:
            return f'{self.filename}:{self.line}:{self.column}'
        return f'{self.line}:{self.column}'


class IniError(Exception):
    """Base of everything raised by this package."""
    pass


class IniSyntaxError(IniError, ValueError):
    def __init__(self, message: str, position: Position) -> None:
        super().__init__(message, position)
        self.message = message
        self.position = position

    def __str__(self) -> str:
        return f'{self.message} (at {self.position})'


type Token = str | ScanMark


class Scanner:
    CHUNK_SIZE = 4096

    def __init__(
        self, src: TextIOBase | str, *,
        whitespace: frozenset[str] = DEFAULT_WHITESPACE,
        scan_strings: bool = True,
        filename: str | None = None
    ) -> None:
        self._src = src
        self._buf = src if isinstance(src, str) else ''
        self._idx = 0
        self._exhausted = isinstance(src, str)
        self.whitespace = whitespace
        self.scan_strings = scan_strings
        self.filename = filename

        # position of the lookahead char `self._ch`
        self._line, self._col = 1, 1
        self._ch = self._read_char()

        self.position = self.pos()
        self._text = ''

    def _read_char(self) -> str:
        """Next raw char from the source, or '' once it is exhausted."""
        if self._idx >= len(self._buf):
            if self._exhausted:
                return ''
            self._buf = self._src.read(self.CHUNK_SIZE)
            self._idx = 0
            if not self._buf:
                self._exhausted = True
                return ''
        ch = self._buf[self._idx]
        self._idx += 1
        return ch

    def _advance(self) -> str:
        ch = self._ch
        if ch == IniToken.LF:
            self._line += 1
            self._col = 1
        elif ch:
            self._col += 1
        self._ch = self._read_char()
        return ch

    def pos(self) -> Position:
        """Position of the next unread character."""
        return Position(self._line, self._col, self.filename)

    def peek(self) -> Token:
        return self._ch if self._ch else ScanMark.EOF

    @property
    def token_text(self) -> str:
        """Source text of the most recent token ('' for EOF)."""
        return self._text

    def scan(self) -> Token:
        while self._ch and self._ch in self.whitespace:
            self._advance()

        self.position = self.pos()
        if not self._ch:
            self._text = ''
            return ScanMark.EOF
        if self.scan_strings and self._ch == IniToken.QUOTE:
            self._text = self._scan_string()
            return ScanMark.STRING
        self._text = self._advance()
        return self._text

    def _scan_string(self) -> str:
        literal = [self._advance()]  # opening quote
        while self._ch != IniToken.QUOTE:
            if not self._ch or self._ch == IniToken.LF:
                raise IniSyntaxError('literal not terminated', self.position)
            if self._ch == IniToken.ESCAPE:
                literal.append(self._advance())
                if not self._ch or self._ch == IniToken.LF:
                    raise IniSyntaxError(
                        'literal not terminated', self.position)
            literal.append(self._advance())
        literal.append(self._advance())  # closing quote
        return ''.join(literal)

    def __iter__(self):
        while (token := self.scan()) is not ScanMark.EOF:
            yield token
