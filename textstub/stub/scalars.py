# textstub/stub/scalars.py
"""
textstub.stub.scalars
=====================

Типизированные скаляры TBD поверх «все скаляры — строки» загрузчика.

Каждое поле документа проходит через пару функций:

* ``decode_*(node, path)`` – проверить форму узла и разобрать значение,
  иначе SchemaError / InvalidValue с точным ``path``;
* ``encode_*(value)``      – обратное преобразование в строку/список.

Особые правила формата
----------------------
* ``uuids`` пишутся скалярами ``'<arch>: <uuid>'``; читаются и они,
  и пары ``[<arch>, <uuid>]``.
* ``swift-version``: ``1.0``→1, ``1.1``→2, ``2.0``→3, ``3.0``→4, иначе
  десятичное целое.
* Неизвестный токен архитектуры не ошибка — это ``unknown``.
"""

from __future__ import annotations

import enum
from typing import Any, List, Mapping, Tuple, Type, TypeVar, cast

from textstub.core import Architecture, ArchitectureSet, ObjCConstraint, PackedVersion, Platform

from .errors import InvalidValue, MissingField, SchemaError, StubPath
from .yaml_io import FlowList

E = TypeVar("E", bound=enum.Enum)


# =============================================================================
# Форма узлов
# =============================================================================

def ensure_mapping(node: Any, path: StubPath, *, what: str) -> Mapping[str, Any]:
    if not isinstance(node, Mapping):
        raise SchemaError(path=path, message=f"{what} должен быть словарём (mapping)")
    return cast(Mapping[str, Any], node)


def ensure_list(node: Any, path: StubPath, *, what: str) -> List[Any]:
    if not isinstance(node, list):
        raise SchemaError(path=path, message=f"{what} должен быть списком (sequence)")
    return node


def ensure_str(node: Any, path: StubPath, *, what: str) -> str:
    if not isinstance(node, str):
        raise SchemaError(path=path, message=f"{what} должен быть скаляром-строкой")
    return node


def require(mp: Mapping[str, Any], key: str, path: StubPath) -> Any:
    """Значение обязательного ключа или MissingField."""
    if key not in mp or mp[key] is None:
        raise MissingField(path=path.key(key), message="обязательное поле отсутствует")
    return mp[key]


def decode_string_list(node: Any, path: StubPath, *, what: str) -> List[str]:
    """Список строк; ``None`` (ключ без значения) — пустой список."""
    if node is None:
        return []
    items = ensure_list(node, path, what=what)
    return [ensure_str(v, path.index(i), what=f"{what}[{i}]") for i, v in enumerate(items)]


# =============================================================================
# Архитектуры
# =============================================================================

def decode_architectures(node: Any, path: StubPath) -> ArchitectureSet:
    names = decode_string_list(node, path, what="archs")
    return ArchitectureSet(Architecture.from_name(n) for n in names)


def encode_architectures(archs: ArchitectureSet) -> FlowList:
    return FlowList(archs.names())


# =============================================================================
# UUID
# =============================================================================

def _split_uuid_scalar(text: str, path: StubPath) -> Tuple[str, str]:
    arch, sep, uuid = text.partition(":")
    if not sep or not uuid.strip():
        raise InvalidValue(path=path, message=f"некорректная пара uuid: {text!r}")
    return arch.strip(), uuid.strip()


def decode_uuids(node: Any, path: StubPath) -> List[Tuple[Architecture, str]]:
    if node is None:
        return []
    out: List[Tuple[Architecture, str]] = []
    for i, item in enumerate(ensure_list(node, path, what="uuids")):
        p = path.index(i)
        if isinstance(item, str):
            arch, uuid = _split_uuid_scalar(item, p)
        elif isinstance(item, list) and len(item) == 2:
            arch = ensure_str(item[0], p.index(0), what="arch").strip()
            uuid = ensure_str(item[1], p.index(1), what="uuid").strip()
            if not uuid:
                raise InvalidValue(path=p.index(1), message="пустой uuid")
        elif isinstance(item, Mapping) and len(item) == 1:
            # незакавыченное `arch: uuid` внутри flow-списка YAML читает как словарь
            (arch, raw), = item.items()
            uuid = ensure_str(raw, p.key(str(arch)), what="uuid").strip() if raw is not None else ""
            if not uuid:
                raise InvalidValue(path=p, message=f"пустой uuid для {arch!r}")
            arch = str(arch).strip()
        else:
            raise SchemaError(path=p, message="элемент uuids должен быть 'arch: uuid' или [arch, uuid]")
        out.append((Architecture.from_name(arch), uuid))
    return out


def encode_uuids(uuids: List[Tuple[Architecture, str]]) -> FlowList:
    return FlowList(f"{arch.value}: {uuid}" for arch, uuid in uuids)


# =============================================================================
# Перечисления (platform / objc-constraint)
# =============================================================================

def decode_enum(node: Any, path: StubPath, enum_cls: Type[E], *, what: str) -> E:
    text = ensure_str(node, path, what=what).strip()
    try:
        return enum_cls(text)
    except ValueError as e:
        raise InvalidValue(
            path=path,
            message=f"неизвестное значение {what}: {text!r}",
            hints=[m.value for m in enum_cls],
            cause=e,
        ) from e


def decode_platform(node: Any, path: StubPath) -> Platform:
    return decode_enum(node, path, Platform, what="platform")


def decode_objc_constraint(node: Any, path: StubPath) -> ObjCConstraint:
    return decode_enum(node, path, ObjCConstraint, what="objc-constraint")


# =============================================================================
# Версии
# =============================================================================

def decode_packed_version(node: Any, path: StubPath) -> PackedVersion:
    text = ensure_str(node, path, what="version")
    try:
        return PackedVersion.parse(text)
    except ValueError as e:
        raise InvalidValue(path=path, message=f"некорректная строка версии {text!r}: {e}", cause=e) from e


def encode_packed_version(version: PackedVersion) -> str:
    return str(version)


_SWIFT_TEXT_TO_ABI = {"1.0": 1, "1.1": 2, "2.0": 3, "3.0": 4}
_SWIFT_ABI_TO_TEXT = {v: k for k, v in _SWIFT_TEXT_TO_ABI.items()}


def decode_swift_version(node: Any, path: StubPath) -> int:
    text = ensure_str(node, path, what="swift-version").strip()
    if text in _SWIFT_TEXT_TO_ABI:
        return _SWIFT_TEXT_TO_ABI[text]
    if not (text.isascii() and text.isdigit()):
        raise InvalidValue(path=path, message=f"некорректная версия Swift ABI: {text!r}")
    return int(text)


def encode_swift_version(value: int) -> str:
    return _SWIFT_ABI_TO_TEXT.get(int(value), str(int(value)))


__all__ = [
    "ensure_mapping",
    "ensure_list",
    "ensure_str",
    "require",
    "decode_string_list",
    "decode_architectures",
    "encode_architectures",
    "decode_uuids",
    "encode_uuids",
    "decode_enum",
    "decode_platform",
    "decode_objc_constraint",
    "decode_packed_version",
    "encode_packed_version",
    "decode_swift_version",
    "encode_swift_version",
]
