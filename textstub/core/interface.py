# textstub/core/interface.py
"""
textstub.core.interface
=======================

In-memory модель описания интерфейса динамической библиотеки (InterfaceFile).

Модель сознательно «тупая»: она хранит поля и умеет их пополнять, но ничего
не знает о текстовом формате. Кодеки (textstub.stub.*) читают её через
атрибуты/итераторы и наполняют через мутаторы ``add_*``.

Правила слияния (как в исходной модели формата)
-----------------------------------------------
* повторный ``add_symbol`` с той же парой (kind, name) объединяет наборы
  архитектур, а не создаёт дубликат;
* то же для allowable-clients / re-exports по install-name;
* ``add_uuid`` для уже известной архитектуры заменяет UUID.
"""

from __future__ import annotations

import enum
import pathlib
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple, Union

from .architecture import Architecture, ArchitectureSet
from .platform import ObjCConstraint, Platform
from .symbols import Symbol, SymbolFlags, SymbolKind, make_symbol
from .version import PackedVersion

__all__ = ["FileType", "ReadFlags", "InterfaceRef", "InterfaceFile"]


# -----------------------------------------------------------------------------
#                          Теги типа файла / режима чтения
# -----------------------------------------------------------------------------
class FileType(enum.Flag):
    """Тег формата артефакта; используется и как маска при детекции."""

    INVALID = 0
    TBD_V1 = 1
    TBD_V2 = 2
    TBD_V3 = 4
    ALL = 7


class ReadFlags(enum.IntEnum):
    """
    Глубина чтения документа.

    Всё, что меньше SYMBOLS, — режим «только метаданные»: библиотеки и
    клиенты регистрируются, символы не декодируются вовсе.
    """

    HEADER = 1
    SYMBOLS = 2
    ALL = 3


# -----------------------------------------------------------------------------
#                               InterfaceRef
# -----------------------------------------------------------------------------
@dataclass
class InterfaceRef:
    """Ссылка на библиотеку: install-name + набор архитектур."""

    install_name: str
    archs: ArchitectureSet = field(default_factory=ArchitectureSet)


# -----------------------------------------------------------------------------
#                               InterfaceFile
# -----------------------------------------------------------------------------
_SymbolKey = Tuple[SymbolKind, str]


class InterfaceFile:
    """
    Описание API-поверхности динамической библиотеки.

    Скалярные поля — обычные атрибуты (их можно присваивать напрямую);
    коллекции пополняются только через ``add_*``, чтобы сохранить правила
    слияния.
    """

    def __init__(self) -> None:
        self.path: Optional[pathlib.Path] = None
        self.file_type: FileType = FileType.INVALID

        self.architectures: ArchitectureSet = ArchitectureSet()
        self.platform: Platform = Platform.UNKNOWN
        self.install_name: str = ""
        self.current_version: PackedVersion = PackedVersion(1, 0, 0)
        self.compatibility_version: PackedVersion = PackedVersion(1, 0, 0)
        self.swift_abi_version: int = 0
        self.objc_constraint: ObjCConstraint = ObjCConstraint.RETAIN_RELEASE
        self.parent_umbrella: str = ""

        self.two_level_namespace: bool = True
        self.application_extension_safe: bool = True
        self.install_api: bool = False

        self._uuids: Dict[Architecture, str] = {}
        self._allowable_clients: Dict[str, InterfaceRef] = {}
        self._reexported_libraries: Dict[str, InterfaceRef] = {}
        self._exports: Dict[_SymbolKey, Symbol] = {}
        self._undefineds: Dict[_SymbolKey, Symbol] = {}

    # ------------------------------------------------------------------ UUID
    def add_uuid(self, arch: Union[Architecture, str], uuid: str) -> None:
        if not isinstance(arch, Architecture):
            arch = Architecture.from_name(arch)
        self._uuids[arch] = str(uuid)

    @property
    def uuids(self) -> List[Tuple[Architecture, str]]:
        """Пары (arch, uuid) в порядке объявления архитектур."""
        return sorted(self._uuids.items(), key=lambda kv: kv[0].bit)

    # ------------------------------------------------------------- libraries
    @staticmethod
    def _add_ref(table: Dict[str, InterfaceRef], name: str, archs: ArchitectureSet) -> None:
        ref = table.get(name)
        if ref is None:
            table[name] = InterfaceRef(str(name), archs)
        else:
            ref.archs = ref.archs | archs

    def add_allowable_client(self, name: str, archs: ArchitectureSet) -> None:
        self._add_ref(self._allowable_clients, name, archs)

    def add_reexported_library(self, name: str, archs: ArchitectureSet) -> None:
        self._add_ref(self._reexported_libraries, name, archs)

    @property
    def allowable_clients(self) -> List[InterfaceRef]:
        return list(self._allowable_clients.values())

    @property
    def reexported_libraries(self) -> List[InterfaceRef]:
        return list(self._reexported_libraries.values())

    # --------------------------------------------------------------- symbols
    @staticmethod
    def _add_symbol(
        table: Dict[_SymbolKey, Symbol],
        kind: SymbolKind,
        name: str,
        archs: ArchitectureSet,
        flags: SymbolFlags,
        copy_strings: bool,
    ) -> None:
        # Модель владеет своими строками: при copy_strings приводим к чистому str
        # (на входе может оказаться подкласс str из YAML-движка).
        if copy_strings:
            name = str(name)
        key = (SymbolKind(kind), name)
        existing = table.get(key)
        if existing is None:
            table[key] = make_symbol(kind, name, archs, flags)
        else:
            table[key] = existing.with_archs(existing.archs | archs)

    def add_symbol(
        self,
        kind: SymbolKind,
        name: str,
        archs: ArchitectureSet,
        flags: SymbolFlags = SymbolFlags.NONE,
        copy_strings: bool = True,
    ) -> None:
        """Добавить экспортируемый символ."""
        self._add_symbol(self._exports, kind, name, archs, flags, copy_strings)

    def add_undefined_symbol(
        self,
        kind: SymbolKind,
        name: str,
        archs: ArchitectureSet,
        flags: SymbolFlags = SymbolFlags.NONE,
        copy_strings: bool = True,
    ) -> None:
        """Добавить неопределённый (импортируемый) символ."""
        self._add_symbol(self._undefineds, kind, name, archs, flags, copy_strings)

    def exports(self) -> Iterator[Symbol]:
        return iter(list(self._exports.values()))

    def undefineds(self) -> Iterator[Symbol]:
        return iter(list(self._undefineds.values()))

    def find_symbol(self, kind: SymbolKind, name: str) -> Optional[Symbol]:
        return self._exports.get((kind, name))

    def find_undefined_symbol(self, kind: SymbolKind, name: str) -> Optional[Symbol]:
        return self._undefineds.get((kind, name))

    # ------------------------------------------------------------- сравнение
    def _signature(self) -> tuple:
        """Структурный «слепок» без учёта порядка коллекций и path."""
        return (
            self.file_type,
            self.architectures,
            self.platform,
            self.install_name,
            self.current_version,
            self.compatibility_version,
            self.swift_abi_version,
            self.objc_constraint,
            self.parent_umbrella,
            self.two_level_namespace,
            self.application_extension_safe,
            self.install_api,
            frozenset(self._uuids.items()),
            frozenset((r.install_name, r.archs) for r in self._allowable_clients.values()),
            frozenset((r.install_name, r.archs) for r in self._reexported_libraries.values()),
            frozenset(self._exports.values()),
            frozenset(self._undefineds.values()),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, InterfaceFile):
            return NotImplemented
        return self._signature() == other._signature()

    __hash__ = None  # type: ignore[assignment]  # изменяемый объект

    def __repr__(self) -> str:
        return (
            f"<InterfaceFile {self.install_name or '—'} · "
            f"archs={self.architectures.names()} · "
            f"exports={len(self._exports)} · undefineds={len(self._undefineds)}>"
        )
