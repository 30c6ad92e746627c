# textstub/stub/sections.py
"""
textstub.stub.sections
======================

Секции ``exports`` / ``undefineds`` TBD v2: сборка из модели и применение
к модели.

Сборка (запись)
---------------
* Экспорт: **одно** пространство разбиения на всех — экспортируемые символы,
  allowable-clients и re-exports. Поэтому секция может состоять только из
  библиотек, без символов.
* Undefined: своё, независимое разбиение только по undefined-символам.
* Списки символов внутри секции сортируются (посимвольное сравнение строк),
  клиенты и re-exports остаются в порядке модели.

Применение (чтение)
-------------------
* секции экспорта в порядке документа: клиенты и re-exports регистрируются
  всегда, символы — только если режим чтения включает символы;
* undefined-секции — после всех секций экспорта и только в режиме с символами.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import chain
from typing import Any, ClassVar, Dict, Iterator, List, Sequence, Tuple

from textstub.core import ArchitectureSet, InterfaceFile, ReadFlags

from .arena import StringArena
from .classify import Bucket, classify_export, classify_undefined, decode_entry
from .errors import SchemaError, StubPath
from .partition import distinct_architecture_sets, partition_by_architectures
from .scalars import decode_architectures, decode_string_list, encode_architectures, ensure_mapping, require
from .yaml_io import FlowList

__all__ = [
    "ExportSection",
    "UndefinedSection",
    "build_export_sections",
    "build_undefined_sections",
    "apply_sections",
]


# =============================================================================
# Секции
# =============================================================================

class _SectionMixin:
    """Общая часть: отображение атрибут ⇄ ключ YAML, (де)сериализация узла."""

    # (атрибут, ключ YAML) в порядке записи
    FIELDS: ClassVar[Tuple[Tuple[str, str], ...]] = ()
    # списки символов в порядке декодирования
    SYMBOL_BUCKETS: ClassVar[Tuple[Bucket, ...]] = ()

    archs: ArchitectureSet

    def sort_symbols(self) -> None:
        for bucket in self.SYMBOL_BUCKETS:
            getattr(self, bucket.value).sort()

    def symbol_lists(self) -> Iterator[Tuple[Bucket, List[str]]]:
        for bucket in self.SYMBOL_BUCKETS:
            yield bucket, getattr(self, bucket.value)

    def to_node(self) -> Dict[str, Any]:
        """Словарь для YAML; пустые списки не пишутся."""
        node: Dict[str, Any] = {"archs": encode_architectures(self.archs)}
        for attr, key in self.FIELDS:
            values = getattr(self, attr)
            if values:
                node[key] = FlowList(values)
        return node

    @classmethod
    def from_node(cls, node: Any, path: StubPath):
        mp = ensure_mapping(node, path, what="секция")
        allowed = {"archs"} | {key for _, key in cls.FIELDS}
        for k in mp:
            if k not in allowed:
                raise SchemaError(path=path.key(str(k)), message=f"неизвестное поле секции '{k}'", hints=sorted(allowed))
        section = cls(decode_architectures(require(mp, "archs", path), path.key("archs")))  # type: ignore[call-arg]
        for attr, key in cls.FIELDS:
            if key in mp:
                setattr(section, attr, decode_string_list(mp[key], path.key(key), what=key))
        return section


@dataclass
class ExportSection(_SectionMixin):
    archs: ArchitectureSet
    allowable_clients: List[str] = field(default_factory=list)
    reexported_libraries: List[str] = field(default_factory=list)
    symbols: List[str] = field(default_factory=list)
    classes: List[str] = field(default_factory=list)
    ivars: List[str] = field(default_factory=list)
    weak_def_symbols: List[str] = field(default_factory=list)
    tlv_symbols: List[str] = field(default_factory=list)

    FIELDS = (
        ("allowable_clients", "allowable-clients"),
        ("reexported_libraries", "re-exports"),
        ("symbols", "symbols"),
        ("classes", "objc-classes"),
        ("ivars", "objc-ivars"),
        ("weak_def_symbols", "weak-def-symbols"),
        ("tlv_symbols", "thread-local-symbols"),
    )
    SYMBOL_BUCKETS = (Bucket.SYMBOLS, Bucket.CLASSES, Bucket.IVARS, Bucket.WEAK_DEF, Bucket.TLV)


@dataclass
class UndefinedSection(_SectionMixin):
    archs: ArchitectureSet
    symbols: List[str] = field(default_factory=list)
    classes: List[str] = field(default_factory=list)
    ivars: List[str] = field(default_factory=list)
    weak_ref_symbols: List[str] = field(default_factory=list)

    FIELDS = (
        ("symbols", "symbols"),
        ("classes", "objc-classes"),
        ("ivars", "objc-ivars"),
        ("weak_ref_symbols", "weak-ref-symbols"),
    )
    SYMBOL_BUCKETS = (Bucket.SYMBOLS, Bucket.CLASSES, Bucket.IVARS, Bucket.WEAK_REF)


# =============================================================================
# Сборка (модель -> секции)
# =============================================================================

def _archs_of(item: Any) -> ArchitectureSet:
    return item.archs


def build_export_sections(file: InterfaceFile, arena: StringArena) -> List[ExportSection]:
    clients = partition_by_architectures(file.allowable_clients, _archs_of)
    reexports = partition_by_architectures(file.reexported_libraries, _archs_of)
    symbols = partition_by_architectures(file.exports(), _archs_of)

    sections: List[ExportSection] = []
    for archs in distinct_architecture_sets(chain(clients, reexports, symbols)):
        section = ExportSection(archs)
        section.allowable_clients = [ref.install_name for ref in clients.get(archs, ())]
        section.reexported_libraries = [ref.install_name for ref in reexports.get(archs, ())]
        for symbol in symbols.get(archs, ()):
            bucket, name = classify_export(symbol, arena)
            getattr(section, bucket.value).append(name)
        section.sort_symbols()
        sections.append(section)
    return sections


def build_undefined_sections(file: InterfaceFile, arena: StringArena) -> List[UndefinedSection]:
    sections: List[UndefinedSection] = []
    for archs, group in partition_by_architectures(file.undefineds(), _archs_of).items():
        section = UndefinedSection(archs)
        for symbol in group:
            bucket, name = classify_undefined(symbol, arena)
            getattr(section, bucket.value).append(name)
        section.sort_symbols()
        sections.append(section)
    return sections


# =============================================================================
# Применение (секции -> модель)
# =============================================================================

def apply_sections(
    exports: Sequence[ExportSection],
    undefineds: Sequence[UndefinedSection],
    file: InterfaceFile,
    *,
    read_flags: ReadFlags,
    arena: StringArena,
) -> None:
    with_symbols = read_flags >= ReadFlags.SYMBOLS

    for section in exports:
        for client in section.allowable_clients:
            file.add_allowable_client(client, section.archs)
        for library in section.reexported_libraries:
            file.add_reexported_library(library, section.archs)

        if not with_symbols:
            continue

        for bucket, names in section.symbol_lists():
            for entry in names:
                sym = decode_entry(bucket, entry, arena)
                file.add_symbol(sym.kind, sym.name, section.archs, sym.flags)

    # Без символов undefined-секции бессмысленны целиком.
    if not with_symbols:
        return

    for section in undefineds:
        for bucket, names in section.symbol_lists():
            for entry in names:
                sym = decode_entry(bucket, entry, arena)
                file.add_undefined_symbol(sym.kind, sym.name, section.archs, sym.flags)
