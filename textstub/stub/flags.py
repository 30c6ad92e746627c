# textstub/stub/flags.py
"""
Поле ``flags`` TBD v2: битовое множество из трёх независимых токенов.

    flat_namespace          -> two_level_namespace        = False
    not_app_extension_safe  -> application_extension_safe = False
    installapi              -> install_api                = True

Отсутствие поля (или пустой список) = ни одного бита, т.е. значения модели
по умолчанию: two-level namespace, extension-safe, не installAPI.
"""

from __future__ import annotations

import enum
from typing import Any, Dict

from textstub.core import InterfaceFile

from .errors import InvalidValue, StubPath
from .scalars import decode_string_list
from .yaml_io import FlowList

__all__ = ["StubFlags", "FLAG_TOKENS", "decode_flags", "encode_flags", "flags_of", "apply_flags"]


class StubFlags(enum.Flag):
    NONE = 0
    FLAT_NAMESPACE = 1
    NOT_APP_EXTENSION_SAFE = 2
    INSTALLAPI = 4


# порядок записи = порядок битов
FLAG_TOKENS: Dict[str, StubFlags] = {
    "flat_namespace": StubFlags.FLAT_NAMESPACE,
    "not_app_extension_safe": StubFlags.NOT_APP_EXTENSION_SAFE,
    "installapi": StubFlags.INSTALLAPI,
}


def decode_flags(node: Any, path: StubPath) -> StubFlags:
    flags = StubFlags.NONE
    for i, token in enumerate(decode_string_list(node, path, what="flags")):
        bit = FLAG_TOKENS.get(token.strip())
        if bit is None:
            raise InvalidValue(
                path=path.index(i),
                message=f"неизвестный флаг {token!r}",
                hints=list(FLAG_TOKENS),
            )
        flags |= bit
    return flags


def encode_flags(flags: StubFlags) -> FlowList:
    return FlowList(token for token, bit in FLAG_TOKENS.items() if flags & bit)


def flags_of(file: InterfaceFile) -> StubFlags:
    """Свойства модели -> биты."""
    flags = StubFlags.NONE
    if not file.application_extension_safe:
        flags |= StubFlags.NOT_APP_EXTENSION_SAFE
    if not file.two_level_namespace:
        flags |= StubFlags.FLAT_NAMESPACE
    if file.install_api:
        flags |= StubFlags.INSTALLAPI
    return flags


def apply_flags(flags: StubFlags, file: InterfaceFile) -> None:
    """Биты -> свойства модели (два из трёх инвертируются)."""
    file.two_level_namespace = not (flags & StubFlags.FLAT_NAMESPACE)
    file.application_extension_safe = not (flags & StubFlags.NOT_APP_EXTENSION_SAFE)
    file.install_api = bool(flags & StubFlags.INSTALLAPI)
