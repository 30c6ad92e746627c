# textstub/stub/registry.py
"""
textstub.stub.registry
======================

Упорядоченный реестр обработчиков текстовых заглушек.

Чтение: обработчики опрашиваются по порядку добавления, документ разбирает
первый, чья детекция (``can_read``) вернула True. Запись: первый, кто
``can_write``. Реестр не предполагает, что в нём только TBD v2: любой
обработчик с контрактом ``StubHandler`` встаёт в ту же очередь.

Пример
------
>>> reg = default_registry()
>>> reg.get_file_type(text)
<FileType.TBD_V2: 2>
>>> file = reg.read_file(text)
>>> reg.write_file(file) == text
True
"""

from __future__ import annotations

import logging
import pathlib
from typing import Iterable, Iterator, List, Optional, Union

from textstub.core import FileType, InterfaceFile, ReadFlags

from .base import Buffer, StubHandler
from .document import TBDv2Handler
from .errors import FormatMismatch, StubPath, UnsupportedWrite

__all__ = ["Registry", "default_registry", "loads", "dumps"]


class Registry:
    """Список обработчиков + поиск по пробной детекции."""

    def __init__(self, handlers: Iterable[StubHandler] = (), *, logger: logging.Logger | None = None):
        self.logger = logger or logging.getLogger(self.__class__.__name__)
        self._handlers: List[StubHandler] = []
        for h in handlers:
            self.add(h)

    # ------------------------------------------------------------ регистрация
    def add(self, handler: StubHandler) -> StubHandler:
        if not isinstance(handler, StubHandler):
            raise TypeError(f"ожидался StubHandler, получено {type(handler).__name__}")
        if any(h is handler for h in self._handlers):
            raise ValueError(f"{handler!r} уже зарегистрирован")
        self._handlers.append(handler)
        return handler

    def __iter__(self) -> Iterator[StubHandler]:
        return iter(self._handlers)

    def __len__(self) -> int:
        return len(self._handlers)

    def names(self) -> List[str]:
        return [h.name for h in self._handlers]

    # ---------------------------------------------------------------- поиск
    def find_reader(self, buffer: Buffer, types: FileType = FileType.ALL) -> Optional[StubHandler]:
        for h in self._handlers:
            if h.can_read(buffer, types):
                return h
        return None

    def find_writer(self, file: object) -> Optional[StubHandler]:
        for h in self._handlers:
            if h.can_write(file):
                return h
        return None

    def can_read(self, buffer: Buffer, types: FileType = FileType.ALL) -> bool:
        return self.find_reader(buffer, types) is not None

    def get_file_type(self, buffer: Buffer) -> FileType:
        for h in self._handlers:
            ft = h.get_file_type(buffer)
            if ft != FileType.INVALID:
                return ft
        return FileType.INVALID

    def can_write(self, file: object) -> bool:
        return self.find_writer(file) is not None

    # ---------------------------------------------------------- чтение/запись
    def read_file(
        self,
        buffer: Buffer,
        *,
        path: Union[str, pathlib.Path, None] = None,
        read_flags: ReadFlags = ReadFlags.ALL,
        types: FileType = FileType.ALL,
        into: Optional[InterfaceFile] = None,
    ) -> InterfaceFile:
        handler = self.find_reader(buffer, types)
        if handler is None:
            raise FormatMismatch(
                path=StubPath.root(),
                message="ни один обработчик не распознал документ",
                hints=self.names(),
            )
        self.logger.debug("read_file: выбран обработчик %s (path=%s)", handler.name, path)
        return handler.read(buffer, path=path, read_flags=read_flags, into=into)

    def write_file(self, file: InterfaceFile) -> str:
        handler = self.find_writer(file)
        if handler is None:
            raise UnsupportedWrite(
                path=StubPath.root(),
                message=f"нет обработчика для file_type={getattr(file, 'file_type', None)}",
                hints=self.names(),
            )
        self.logger.debug("write_file: выбран обработчик %s", handler.name)
        return handler.write(file)


def default_registry(*, logger: logging.Logger | None = None) -> Registry:
    """Реестр со всеми встроенными обработчиками (сейчас только TBD v2)."""
    return Registry([TBDv2Handler()], logger=logger)


# =============================================================================
# Фасад над реестром по умолчанию
# =============================================================================

_DEFAULT: Optional[Registry] = None


def _default() -> Registry:
    global _DEFAULT
    if _DEFAULT is None:
        _DEFAULT = default_registry()
    return _DEFAULT


def loads(
    buffer: Buffer,
    *,
    path: Union[str, pathlib.Path, None] = None,
    read_flags: ReadFlags = ReadFlags.ALL,
) -> InterfaceFile:
    """Разобрать текстовую заглушку любым встроенным обработчиком."""
    return _default().read_file(buffer, path=path, read_flags=read_flags)


def dumps(file: InterfaceFile) -> str:
    """Записать модель обработчиком её собственного формата (``file.file_type``)."""
    return _default().write_file(file)
