# textstub/stub/__init__.py
"""
textstub.stub
=============

Публичный API кодека текстовых заглушек TBD v2.

Рекомендуемый импорт (стабильный фасад):

    from textstub.stub import loads, dumps

    file = loads(text)                        # InterfaceFile
    text = dumps(file)                        # '--- !tapi-tbd-v2\n...'

Тонкая настройка — через обработчик напрямую:

    handler = TBDv2Handler()
    handler.can_read(text)                    # детекция
    file = handler.read(text, read_flags=ReadFlags.HEADER)   # без символов

Ошибки
------
Все ошибки поднимают StubError (или подклассы) с полями
``kind`` / ``path`` / ``message`` / ``hints``.
"""

from __future__ import annotations

# --- handlers / registry ---
from .base import StubHandler
from .document import TBDv2Handler
from .registry import Registry, default_registry, dumps, loads

# --- building blocks ---
from .arena import StringArena
from .flags import StubFlags
from .sections import ExportSection, UndefinedSection

# --- errors (re-export) ---
from .errors import (
    StubPath,
    path_to_str,
    StubError,
    FormatMismatch,
    SchemaError,
    MissingField,
    InvalidValue,
    UnsupportedWrite,
)

__all__ = [
    # handlers
    "StubHandler",
    "TBDv2Handler",
    "Registry",
    "default_registry",
    "loads",
    "dumps",
    # building blocks
    "StringArena",
    "StubFlags",
    "ExportSection",
    "UndefinedSection",
    # errors
    "StubPath",
    "path_to_str",
    "StubError",
    "FormatMismatch",
    "SchemaError",
    "MissingField",
    "InvalidValue",
    "UnsupportedWrite",
]
