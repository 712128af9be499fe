# -*- encoding: utf-8 -*-
# @File   : abstract.py
# @Time   : 2026/10/19 16:02:11
# @Author : iniscan maintainers

import logging
from abc import ABCMeta, abstractmethod
from io import StringIO

from chardet import detect as guess_codec


class FileHandler[T](metaclass=ABCMeta):
    """Binds a document type `T` to one file on disk."""

    def __init__(self, filename: str, encoding: str | None = None) -> None:
        self._fn = filename
        self._codec = encoding

    @abstractmethod
    def read(self) -> T:
        raise NotImplementedError

    @abstractmethod
    def write(self, instance: T) -> None:
        raise NotImplementedError

    @staticmethod
    def _decode_file(filename: str) -> StringIO:
        """Decode a file whose encoding is unknown (or was given wrong).

        `chardet` guesses first; a weak guess falls back to utf-8,
        and gbk is the last resort.
        """
        with open(filename, 'rb') as fp:
            raw = fp.read()

        codec = guess_codec(raw)
        if codec['encoding'] is None or codec['confidence'] < 0.8:
            codec = {'encoding': 'utf-8', 'confidence': 0.0}
        logging.warning(
            f'Decoding "{filename}" as {codec["encoding"]} '
            f'(confidence {codec["confidence"]:.2f}).')

        try:
            buf = raw.decode(codec['encoding'])
        except UnicodeDecodeError:
            buf = raw.decode('gbk')
        return StringIO(buf)

    def __str__(self) -> str:
        return f'{self._fn} ({self._codec or "auto"})'
