#textstub/stub/base.py
"""
Абстрактный базовый класс StubHandler.

* can_read(buffer, types)  -> bool   (детекция по сырому тексту)
* get_file_type(buffer)    -> FileType
* can_write(file)          -> bool
* read(buffer, ...)        -> InterfaceFile
* write(file)              -> str
"""

from __future__ import annotations

import abc
import pathlib
from typing import Optional, Union

from textstub.core import FileType, InterfaceFile, ReadFlags

Buffer = Union[str, bytes]


class StubHandler(abc.ABC):
    """Минимальный контракт, который понимает Registry."""

    name: str = ""

    # --------- детекция
    @abc.abstractmethod
    def can_read(self, buffer: Buffer, types: FileType = FileType.ALL) -> bool: ...

    @abc.abstractmethod
    def get_file_type(self, buffer: Buffer) -> FileType: ...

    @abc.abstractmethod
    def can_write(self, file: object) -> bool: ...

    # --------- чтение / запись
    @abc.abstractmethod
    def read(
        self,
        buffer: Buffer,
        *,
        path: Union[str, pathlib.Path, None] = None,
        read_flags: ReadFlags = ReadFlags.ALL,
        into: Optional[InterfaceFile] = None,
    ) -> InterfaceFile: ...

    @abc.abstractmethod
    def write(self, file: InterfaceFile) -> str: ...

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.name}>"
