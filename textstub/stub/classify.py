# textstub/stub/classify.py
"""
textstub.stub.classify
======================

Классификация символов по спискам секции и преобразование имён.

Запись (экспорт)
----------------
========================  ================  ============  ===============================
вариант                   атрибут           список        имя в документе
========================  ================  ============  ===============================
GlobalSymbol              WEAK_DEFINED      weak-def      без изменений
GlobalSymbol              THREAD_LOCAL      thread-local  без изменений
GlobalSymbol              —                 symbols       без изменений
ObjCClass                 —                 objc-classes  ``"_" + name``
ObjCClassEHType           —                 symbols       ``"_OBJC_EHTYPE_$_" + name``
ObjCInstanceVariable      —                 objc-ivars    ``"_" + name``
========================  ================  ============  ===============================

Для undefined-символов GlobalSymbol делится только по WEAK_REFERENCED.

Чтение
------
* ``symbols``: префикс ``_OBJC_EHTYPE_$_`` (15 символов) → ObjCClassEHType,
  иначе GlobalSymbol без флагов;
* ``objc-classes`` / ``objc-ivars``: отбрасывается ровно первый символ
  **без проверки**, что это ``_``. Запись без префикса молча теряет первую
  букву имени — поведение сохранено ради совместимости с другими читателями;
* weak-def / thread-local / weak-ref → GlobalSymbol с соответствующим флагом.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Tuple

from textstub.core import (
    GlobalSymbol,
    ObjCClass,
    ObjCClassEHType,
    ObjCInstanceVariable,
    Symbol,
    SymbolFlags,
    SymbolKind,
)

from .arena import StringArena

__all__ = [
    "OBJC_EHTYPE_PREFIX",
    "OBJC_SYMBOL_PREFIX",
    "Bucket",
    "DecodedSymbol",
    "classify_export",
    "classify_undefined",
    "decode_entry",
]

OBJC_EHTYPE_PREFIX = "_OBJC_EHTYPE_$_"
OBJC_SYMBOL_PREFIX = "_"


class Bucket(enum.Enum):
    """Список секции; значение = имя атрибута ExportSection/UndefinedSection."""

    SYMBOLS = "symbols"
    CLASSES = "classes"
    IVARS = "ivars"
    WEAK_DEF = "weak_def_symbols"
    TLV = "tlv_symbols"
    WEAK_REF = "weak_ref_symbols"


@dataclass(frozen=True)
class DecodedSymbol:
    kind: SymbolKind
    name: str
    flags: SymbolFlags = SymbolFlags.NONE


# =============================================================================
# Запись
# =============================================================================

def _classify_objc(symbol: Symbol, arena: StringArena) -> Tuple[Bucket, str]:
    if isinstance(symbol, ObjCClass):
        return Bucket.CLASSES, arena.concat(OBJC_SYMBOL_PREFIX, symbol.name)
    if isinstance(symbol, ObjCClassEHType):
        return Bucket.SYMBOLS, arena.concat(OBJC_EHTYPE_PREFIX, symbol.name)
    if isinstance(symbol, ObjCInstanceVariable):
        return Bucket.IVARS, arena.concat(OBJC_SYMBOL_PREFIX, symbol.name)
    raise TypeError(f"неизвестный вариант символа: {type(symbol).__name__}")


def classify_export(symbol: Symbol, arena: StringArena) -> Tuple[Bucket, str]:
    """Экспортируемый символ -> (список, имя в документе)."""
    if isinstance(symbol, GlobalSymbol):
        if symbol.is_weak_defined:
            return Bucket.WEAK_DEF, symbol.name
        if symbol.is_thread_local_value:
            return Bucket.TLV, symbol.name
        return Bucket.SYMBOLS, symbol.name
    return _classify_objc(symbol, arena)


def classify_undefined(symbol: Symbol, arena: StringArena) -> Tuple[Bucket, str]:
    """Undefined-символ -> (список, имя в документе)."""
    if isinstance(symbol, GlobalSymbol):
        if symbol.is_weak_referenced:
            return Bucket.WEAK_REF, symbol.name
        return Bucket.SYMBOLS, symbol.name
    return _classify_objc(symbol, arena)


# =============================================================================
# Чтение
# =============================================================================

_FLAG_BUCKETS = {
    Bucket.WEAK_DEF: SymbolFlags.WEAK_DEFINED,
    Bucket.TLV: SymbolFlags.THREAD_LOCAL_VALUE,
    Bucket.WEAK_REF: SymbolFlags.WEAK_REFERENCED,
}


def decode_entry(bucket: Bucket, entry: str, arena: StringArena) -> DecodedSymbol:
    """Запись списка секции -> (kind, имя, флаги); имя живёт в арене."""
    if bucket is Bucket.SYMBOLS:
        if entry.startswith(OBJC_EHTYPE_PREFIX):
            return DecodedSymbol(SymbolKind.OBJC_CLASS_EH_TYPE, arena.copy(entry[len(OBJC_EHTYPE_PREFIX):]))
        return DecodedSymbol(SymbolKind.GLOBAL_SYMBOL, arena.copy(entry))
    if bucket is Bucket.CLASSES:
        return DecodedSymbol(SymbolKind.OBJC_CLASS, arena.copy(entry[1:]))
    if bucket is Bucket.IVARS:
        return DecodedSymbol(SymbolKind.OBJC_INSTANCE_VARIABLE, arena.copy(entry[1:]))
    return DecodedSymbol(SymbolKind.GLOBAL_SYMBOL, arena.copy(entry), _FLAG_BUCKETS[bucket])
