# textstub/stub/arena.py
"""
StringArena – владелец строк, синтезированных за один вызов кодека.

Имена с добавленным/срезанным префиксом (``_`` + класс, ``_OBJC_EHTYPE_$_`` …)
не существуют ни в модели, ни в тексте документа; арена хранит их до конца
вызова. Арена живёт в одном контексте нормализации и не разделяется между
вызовами/потоками. После вызова модель владеет своими копиями строк, поэтому
``release()`` ничего у неё не отнимает.

Использование::

    with StringArena() as arena:
        name = arena.concat("_", "NSObject")
"""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import List

__all__ = ["StringArena"]


class StringArena(AbstractContextManager):
    def __init__(self) -> None:
        self._strings: List[str] = []
        self._nbytes = 0

    def copy(self, text: str) -> str:
        """Скопировать строку в арену; пустая строка не занимает места."""
        if not text:
            return ""
        owned = str(text)
        self._strings.append(owned)
        self._nbytes += len(owned.encode("utf-8"))
        return owned

    def concat(self, prefix: str, text: str) -> str:
        return self.copy(prefix + text)

    def __len__(self) -> int:
        return len(self._strings)

    @property
    def nbytes(self) -> int:
        """Суммарный размер строк арены в UTF-8 байтах."""
        return self._nbytes

    def release(self) -> None:
        self._strings.clear()
        self._nbytes = 0

    def __exit__(self, exc_type, exc, tb):  # noqa: D401
        self.release()
        return False
