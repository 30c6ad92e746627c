# textstub/stub/document.py
"""
textstub.stub.document
======================

Обработчик документа TBD v2 (``--- !tapi-tbd-v2``).

Жизненный цикл одного вызова
----------------------------
Чтение::

    детекция (can_read) -> YAML -> проверка тега !tapi-tbd-v2
        -> _NormalizedDocument.from_node   (вся валидация, модель не трогаем)
        -> _NormalizedDocument.populate    (только мутации модели)

Запись::

    can_write -> _NormalizedDocument.from_model -> dump_document

Если разбор упал на любом поле, модель (в т.ч. переданная через ``into=``)
не изменена: мутации начинаются только после успешного ``from_node``.

Поля документа (порядок записи)
-------------------------------
archs*, uuids, platform*, flags, install-name*, current-version,
compatibility-version, swift-version, objc-constraint, parent-umbrella,
exports, undefineds (``*`` — обязательные). Необязательные поля со значением
по умолчанию и пустые списки не пишутся.

Пример
------
>>> handler = TBDv2Handler()
>>> handler.can_read(text)
True
>>> file = handler.read(text, read_flags=ReadFlags.HEADER)
"""

from __future__ import annotations

import logging
import pathlib
from dataclasses import dataclass, field
from typing import Any, Iterator, List, Optional, Tuple, Union

import yaml

from textstub.core import (
    Architecture,
    ArchitectureSet,
    FileType,
    InterfaceFile,
    ObjCConstraint,
    PackedVersion,
    Platform,
    ReadFlags,
)

from .arena import StringArena
from .base import Buffer, StubHandler
from .errors import FormatMismatch, SchemaError, StubPath, UnsupportedWrite
from .flags import StubFlags, apply_flags, decode_flags, encode_flags, flags_of
from .scalars import (
    decode_architectures,
    decode_objc_constraint,
    decode_packed_version,
    decode_platform,
    decode_swift_version,
    decode_uuids,
    encode_architectures,
    encode_packed_version,
    encode_swift_version,
    encode_uuids,
    ensure_list,
    ensure_mapping,
    ensure_str,
    require,
)
from .sections import (
    ExportSection,
    UndefinedSection,
    apply_sections,
    build_export_sections,
    build_undefined_sections,
)
from .yaml_io import TaggedDocument, dump_document, load_document

__all__ = ["TBDv2Handler"]

_DEFAULT_VERSION = PackedVersion(1, 0, 0)

_TOP_LEVEL_KEYS = (
    "archs",
    "uuids",
    "platform",
    "flags",
    "install-name",
    "current-version",
    "compatibility-version",
    "swift-version",
    "objc-constraint",
    "parent-umbrella",
    "exports",
    "undefineds",
)

# только ASCII-пробелы, одинаково для str и bytes
_TRIM = " \t\n\v\f\r"


# =============================================================================
# Нормализованный документ
# =============================================================================

@dataclass
class _NormalizedDocument:
    """Документ в типизированном виде: промежуточное звено между YAML и моделью."""

    archs: ArchitectureSet
    platform: Platform
    install_name: str
    uuids: List[Tuple[Architecture, str]] = field(default_factory=list)
    flags: StubFlags = StubFlags.NONE
    current_version: PackedVersion = _DEFAULT_VERSION
    compatibility_version: PackedVersion = _DEFAULT_VERSION
    swift_version: int = 0
    objc_constraint: ObjCConstraint = ObjCConstraint.RETAIN_RELEASE
    parent_umbrella: str = ""
    exports: List[ExportSection] = field(default_factory=list)
    undefineds: List[UndefinedSection] = field(default_factory=list)

    # ------------------------------------------------------------ YAML -> doc
    @classmethod
    def from_node(cls, node: Any) -> "_NormalizedDocument":
        root = StubPath.root()
        mp = ensure_mapping(node, root, what="документ TBD")
        for k in mp:
            if k not in _TOP_LEVEL_KEYS:
                raise SchemaError(path=root.key(str(k)), message=f"неизвестное поле '{k}'", hints=list(_TOP_LEVEL_KEYS))

        doc = cls(
            archs=decode_architectures(require(mp, "archs", root), root.key("archs")),
            platform=decode_platform(require(mp, "platform", root), root.key("platform")),
            install_name=ensure_str(require(mp, "install-name", root), root.key("install-name"), what="install-name"),
        )

        def opt(key: str) -> Any:
            return mp.get(key)

        doc.uuids = decode_uuids(opt("uuids"), root.key("uuids"))
        doc.flags = decode_flags(opt("flags"), root.key("flags"))
        if opt("current-version") is not None:
            doc.current_version = decode_packed_version(opt("current-version"), root.key("current-version"))
        if opt("compatibility-version") is not None:
            doc.compatibility_version = decode_packed_version(
                opt("compatibility-version"), root.key("compatibility-version")
            )
        if opt("swift-version") is not None:
            doc.swift_version = decode_swift_version(opt("swift-version"), root.key("swift-version"))
        if opt("objc-constraint") is not None:
            doc.objc_constraint = decode_objc_constraint(opt("objc-constraint"), root.key("objc-constraint"))
        if opt("parent-umbrella") is not None:
            doc.parent_umbrella = ensure_str(opt("parent-umbrella"), root.key("parent-umbrella"), what="parent-umbrella")

        if opt("exports") is not None:
            p = root.key("exports")
            doc.exports = [
                ExportSection.from_node(s, p.index(i)) for i, s in enumerate(ensure_list(opt("exports"), p, what="exports"))
            ]
        if opt("undefineds") is not None:
            p = root.key("undefineds")
            doc.undefineds = [
                UndefinedSection.from_node(s, p.index(i))
                for i, s in enumerate(ensure_list(opt("undefineds"), p, what="undefineds"))
            ]
        return doc

    # ----------------------------------------------------------- doc -> model
    def populate(
        self,
        file: InterfaceFile,
        *,
        path: Optional[pathlib.Path],
        read_flags: ReadFlags,
        arena: StringArena,
    ) -> None:
        file.path = path
        file.file_type = FileType.TBD_V2
        file.architectures = self.archs
        for arch, uuid in self.uuids:
            file.add_uuid(arch, uuid)
        file.platform = self.platform
        file.install_name = self.install_name
        file.current_version = self.current_version
        file.compatibility_version = self.compatibility_version
        file.swift_abi_version = self.swift_version
        file.objc_constraint = self.objc_constraint
        file.parent_umbrella = self.parent_umbrella
        apply_flags(self.flags, file)

        apply_sections(self.exports, self.undefineds, file, read_flags=read_flags, arena=arena)

    # ----------------------------------------------------------- model -> doc
    @classmethod
    def from_model(cls, file: InterfaceFile, arena: StringArena) -> "_NormalizedDocument":
        return cls(
            archs=file.architectures,
            platform=file.platform,
            install_name=file.install_name,
            uuids=file.uuids,
            flags=flags_of(file),
            current_version=file.current_version,
            compatibility_version=file.compatibility_version,
            swift_version=file.swift_abi_version,
            objc_constraint=file.objc_constraint,
            parent_umbrella=file.parent_umbrella,
            exports=build_export_sections(file, arena),
            undefineds=build_undefined_sections(file, arena),
        )

    def to_items(self) -> Iterator[Tuple[str, Any]]:
        """Пары (ключ, значение) в порядке записи; значения по умолчанию пропускаются."""
        yield "archs", encode_architectures(self.archs)
        if self.uuids:
            yield "uuids", encode_uuids(self.uuids)
        yield "platform", self.platform.value
        if self.flags:
            yield "flags", encode_flags(self.flags)
        yield "install-name", self.install_name
        if self.current_version != _DEFAULT_VERSION:
            yield "current-version", encode_packed_version(self.current_version)
        if self.compatibility_version != _DEFAULT_VERSION:
            yield "compatibility-version", encode_packed_version(self.compatibility_version)
        if self.swift_version:
            yield "swift-version", encode_swift_version(self.swift_version)
        if self.objc_constraint is not ObjCConstraint.RETAIN_RELEASE:
            yield "objc-constraint", self.objc_constraint.value
        if self.parent_umbrella:
            yield "parent-umbrella", self.parent_umbrella
        if self.exports:
            yield "exports", [s.to_node() for s in self.exports]
        if self.undefineds:
            yield "undefineds", [s.to_node() for s in self.undefineds]


# =============================================================================
# Обработчик
# =============================================================================

class TBDv2Handler(StubHandler):
    """
    Чтение/запись TBD v2.

    Экземпляр не хранит состояния документа: арена и нормализованный
    документ создаются на каждый вызов, поэтому один обработчик можно
    использовать из нескольких потоков (с разными моделями).
    """

    name = "tbd-v2"
    file_type = FileType.TBD_V2

    TAG = "!tapi-tbd-v2"
    HEADER = "--- !tapi-tbd-v2\n"
    FOOTER = "..."

    def __init__(self, *, logger: logging.Logger | None = None):
        self.logger = logger or logging.getLogger(self.__class__.__name__)

    # ---------------------------------------------------------------- детекция
    def can_read(self, buffer: Buffer, types: FileType = FileType.ALL) -> bool:
        if not (types & self.file_type):
            return False
        if isinstance(buffer, bytes):
            data = buffer.strip(_TRIM.encode())
            return data.startswith(self.HEADER.encode()) and data.endswith(self.FOOTER.encode())
        text = buffer.strip(_TRIM)
        return text.startswith(self.HEADER) and text.endswith(self.FOOTER)

    def get_file_type(self, buffer: Buffer) -> FileType:
        return self.file_type if self.can_read(buffer, self.file_type) else FileType.INVALID

    def can_write(self, file: object) -> bool:
        return isinstance(file, InterfaceFile) and file.file_type == self.file_type

    # ------------------------------------------------------------------ чтение
    def read(
        self,
        buffer: Buffer,
        *,
        path: Union[str, pathlib.Path, None] = None,
        read_flags: ReadFlags = ReadFlags.ALL,
        into: Optional[InterfaceFile] = None,
    ) -> InterfaceFile:
        try:
            data = load_document(buffer)
        except yaml.YAMLError as e:
            raise SchemaError(path=StubPath.root(), message=f"Ошибка парсинга YAML: {e}", cause=e) from e

        if not isinstance(data, TaggedDocument) or data.tag != self.TAG:
            found = data.tag if isinstance(data, TaggedDocument) else None
            raise FormatMismatch(
                path=StubPath.root(),
                message=f"ожидался тег {self.TAG}, получено {found or 'без тега'}",
            )

        doc = _NormalizedDocument.from_node(data.value)

        file = into if into is not None else InterfaceFile()
        with StringArena() as arena:
            doc.populate(
                file,
                path=pathlib.Path(path) if path is not None else None,
                read_flags=ReadFlags(read_flags),
                arena=arena,
            )
            self.logger.debug(
                "%s: прочитано %s (exports=%d, undefineds=%d, read_flags=%s, arena=%d B)",
                self.name, file.install_name, len(doc.exports), len(doc.undefineds),
                ReadFlags(read_flags).name, arena.nbytes,
            )
        return file

    # ------------------------------------------------------------------ запись
    def write(self, file: InterfaceFile, *, width: int = 80) -> str:
        if not self.can_write(file):
            declared = getattr(file, "file_type", None)
            raise UnsupportedWrite(
                path=StubPath.root(),
                message=f"{self.name} не пишет {type(file).__name__} с file_type={declared}",
            )

        with StringArena() as arena:
            doc = _NormalizedDocument.from_model(file, arena)
            text = dump_document(self.TAG, doc.to_items(), width=width)

        self.logger.debug(
            "%s: записано %s (exports=%d, undefineds=%d)",
            self.name, file.install_name, len(doc.exports), len(doc.undefineds),
        )
        return text
