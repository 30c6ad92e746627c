# textstub/core/symbols.py
"""
textstub.core.symbols
=====================

Символы интерфейса как *закрытый* набор вариантов.

Вместо одной сущности «символ + kind + флаги» каждый вид символа — отдельный
неизменяемый dataclass, который несёт только допустимые для него атрибуты:

=========================  ===================================  ==================
класс                      SymbolKind                           доп. атрибут
=========================  ===================================  ==================
GlobalSymbol               GLOBAL_SYMBOL                        flags: SymbolFlags
ObjCClass                  OBJC_CLASS                           —
ObjCClassEHType            OBJC_CLASS_EH_TYPE                   —
ObjCInstanceVariable       OBJC_INSTANCE_VARIABLE               —
=========================  ===================================  ==================

Флаги линковки (WEAK_DEFINED / THREAD_LOCAL_VALUE / WEAK_REFERENCED) имеют смысл
только для GlobalSymbol; ``make_symbol`` не даст их повесить на другой вид.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field, replace
from typing import ClassVar, Dict, Type, Union

from .architecture import ArchitectureSet

__all__ = [
    "SymbolKind",
    "SymbolFlags",
    "GlobalSymbol",
    "ObjCClass",
    "ObjCClassEHType",
    "ObjCInstanceVariable",
    "Symbol",
    "make_symbol",
]


class SymbolKind(enum.Enum):
    GLOBAL_SYMBOL = "GlobalSymbol"
    OBJC_CLASS = "ObjectiveCClass"
    OBJC_CLASS_EH_TYPE = "ObjectiveCClassEHType"
    OBJC_INSTANCE_VARIABLE = "ObjectiveCInstanceVariable"


class SymbolFlags(enum.Flag):
    NONE = 0
    WEAK_DEFINED = enum.auto()
    THREAD_LOCAL_VALUE = enum.auto()
    WEAK_REFERENCED = enum.auto()


# -----------------------------------------------------------------------------
#                                 Варианты
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class _SymbolBase:
    name: str
    archs: ArchitectureSet = field(default_factory=ArchitectureSet)

    kind: ClassVar[SymbolKind]

    def with_archs(self, archs: ArchitectureSet):
        """Копия символа с другим набором архитектур."""
        return replace(self, archs=archs)


@dataclass(frozen=True)
class GlobalSymbol(_SymbolBase):
    flags: SymbolFlags = SymbolFlags.NONE

    kind: ClassVar[SymbolKind] = SymbolKind.GLOBAL_SYMBOL

    @property
    def is_weak_defined(self) -> bool:
        return bool(self.flags & SymbolFlags.WEAK_DEFINED)

    @property
    def is_thread_local_value(self) -> bool:
        return bool(self.flags & SymbolFlags.THREAD_LOCAL_VALUE)

    @property
    def is_weak_referenced(self) -> bool:
        return bool(self.flags & SymbolFlags.WEAK_REFERENCED)


@dataclass(frozen=True)
class ObjCClass(_SymbolBase):
    kind: ClassVar[SymbolKind] = SymbolKind.OBJC_CLASS


@dataclass(frozen=True)
class ObjCClassEHType(_SymbolBase):
    kind: ClassVar[SymbolKind] = SymbolKind.OBJC_CLASS_EH_TYPE


@dataclass(frozen=True)
class ObjCInstanceVariable(_SymbolBase):
    kind: ClassVar[SymbolKind] = SymbolKind.OBJC_INSTANCE_VARIABLE


Symbol = Union[GlobalSymbol, ObjCClass, ObjCClassEHType, ObjCInstanceVariable]

_VARIANTS: Dict[SymbolKind, Type[_SymbolBase]] = {
    SymbolKind.GLOBAL_SYMBOL: GlobalSymbol,
    SymbolKind.OBJC_CLASS: ObjCClass,
    SymbolKind.OBJC_CLASS_EH_TYPE: ObjCClassEHType,
    SymbolKind.OBJC_INSTANCE_VARIABLE: ObjCInstanceVariable,
}


def make_symbol(
    kind: SymbolKind,
    name: str,
    archs: ArchitectureSet,
    flags: SymbolFlags = SymbolFlags.NONE,
) -> Symbol:
    """Построить вариант символа по kind (фабрика для мутаторов модели)."""
    cls = _VARIANTS[SymbolKind(kind)]
    if cls is GlobalSymbol:
        return GlobalSymbol(name, archs, flags)
    if flags != SymbolFlags.NONE:
        raise ValueError(f"флаги {flags} допустимы только для GlobalSymbol, не для {cls.__name__}")
    return cls(name, archs)  # type: ignore[return-value]
