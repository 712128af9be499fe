# -*- encoding: utf-8 -*-
# @File   : parser.py
# @Time   : 2026/10/19 16:41:20
# @Author : iniscan maintainers

"""Reading and writing the classic INI dialect:

    ```ini
    global = 1          ; kept in section ''
    # also a comment
    [section]
    key = some value    ; <- NOT a comment, it's part of the value
    quoted = "value"
    ```

What is NOT supported: multi-line values, inline comments,
key arrays, case-insensitive keys, nested sections.
"""

import json
import logging
from io import StringIO, TextIOBase

from .consts import DEFAULT_SECTION, IniToken, ScanMark
from .model import IniSections, IniStore
from .scanner import IniSyntaxError, Scanner
from ..abstract import FileHandler


def _read_comment(s: Scanner) -> None:
    # quotes in a comment are plain text, even unbalanced ones.
    prev, s.scan_strings = s.scan_strings, False
    try:
        while (token := s.scan()) is not ScanMark.EOF:
            if token == IniToken.LF:
                return
    finally:
        s.scan_strings = prev


def _read_section(s: Scanner) -> str:
    buffer: list[str] = []
    while True:
        token = s.scan()
        match token:
            case IniToken.SECTION_START:
                continue
            case IniToken.SECTION_STOP:
                return ''.join(buffer)
            case IniToken.LF | IniToken.CR | ScanMark.EOF:
                raise IniSyntaxError(
                    'unterminated section header', s.position)
            case _:
                buffer.append(s.token_text)


def _read_key(s: Scanner) -> str:
    buffer: list[str] = []
    while True:
        token = s.scan()
        match token:
            case ScanMark.EOF:
                raise IniSyntaxError(
                    'unexpected end of input while reading key', s.position)
            case ScanMark.STRING:
                raise IniSyntaxError(
                    'unexpected quoted string in key position', s.position)
            case IniToken.SPACE:
                continue
            case IniToken.ASSIGN:
                return ''.join(buffer)
            case _:
                buffer.append(s.token_text)


def _read_value(s: Scanner) -> str:
    buffer: list[str] = []
    while True:
        token = s.scan()
        match token:
            case ScanMark.EOF | IniToken.LF:
                return ''.join(buffer)
            case ScanMark.STRING:
                # strip the quotes only, escapes stay as written.
                return s.token_text[1:-1]
            case IniToken.CR:
                continue
            case IniToken.SPACE if not buffer:
                continue
            case _:
                buffer.append(s.token_text)


def _read_sections(s: Scanner) -> IniSections:
    ret: IniSections = {}
    this_sect = DEFAULT_SECTION
    while True:
        token = s.peek()
        match token:
            case ScanMark.EOF:
                return ret
            case IniToken.COMMENT_CLASSIC | IniToken.COMMENT_HASH:
                _read_comment(s)
            case IniToken.LF | IniToken.CR:
                s.scan()
            case IniToken.SECTION_START:
                s.scan()
                this_sect = _read_section(s)
            case _:
                key = _read_key(s)
                ret.setdefault(this_sect, {})[key] = _read_value(s)


def _quote(value: str) -> str:
    return json.dumps(value, ensure_ascii=False)


class IniParser(FileHandler[IniStore]):
    @staticmethod
    def readstream(
        buf: TextIOBase | str,
        ins: IniStore | None = None,
        filename: str | None = None
    ) -> IniStore:
        """Read a decoded text stream into `ins` (a new store if None).

        `ins` is locked for the whole pass, and left untouched
        if the text turns out malformed.
        """
        if ins is None:
            ins = IniStore()
        with ins._locked(exclusive=True) as raw:
            staged = _read_sections(Scanner(buf, filename=filename))
            for section, pairs in staged.items():
                raw.setdefault(section, {}).update(pairs)
        logging.debug(
            f'Loaded {sum(len(i) for i in staged.values())} pairs '
            f'in {len(staged)} sections.')
        return ins

    @staticmethod
    def writestream(
        ins: IniStore, buf: TextIOBase, *, blank_lines: int = 0
    ) -> int:
        """Write `ins` as INI text, returning the count of chars written.

        Pairs of section `''` come first, without a header.
        Sections without pairs are skipped.
        """
        written = 0

        def emit(line: str) -> None:
            nonlocal written
            buf.write(line)
            written += len(line)

        with ins._locked() as raw:
            for k, v in raw.get(DEFAULT_SECTION, {}).items():
                emit(f'{k}={_quote(v)}\n')
            for section, pairs in raw.items():
                if section == DEFAULT_SECTION or not pairs:
                    continue
                emit(f'[{section}]\n')
                for k, v in pairs.items():
                    emit(f'{k}={_quote(v)}\n')
                if blank_lines:
                    emit('\n' * blank_lines)
        logging.debug(f'Wrote {written} chars.')
        return written

    def read(self) -> IniStore:
        """Read the file this `IniParser` points to.

        A wrong (or missing) `encoding` makes it guess with `chardet`.
        """
        try:
            with open(self._fn, 'r', encoding=self._codec) as fp:
                return self.readstream(fp, filename=self._fn)
        except UnicodeDecodeError:
            return self.readstream(
                self._decode_file(self._fn), filename=self._fn)

    def write(self, instance: IniStore, *, blank_lines: int = 0) -> None:
        with open(self._fn, 'w', encoding=self._codec or 'utf-8') as fp:
            self.writestream(instance, fp, blank_lines=blank_lines)

    def __str__(self) -> str:
        return "INI file: " + super().__str__()


def load(buf: TextIOBase) -> IniStore:
    return IniParser.readstream(buf)


def loads(text: str) -> IniStore:
    return IniParser.readstream(text)


def dump(ins: IniStore, buf: TextIOBase, *, blank_lines: int = 0) -> int:
    return IniParser.writestream(ins, buf, blank_lines=blank_lines)


def dumps(ins: IniStore, *, blank_lines: int = 0) -> str:
    buf = StringIO()
    IniParser.writestream(ins, buf, blank_lines=blank_lines)
    return buf.getvalue()
