# textstub/stub/yaml_io.py
"""
textstub.stub.yaml_io
=====================

Тонкий слой над PyYAML: загрузчик/дампер, настроенные под TBD.

Что настроено
-------------
1) Все plain-скаляры читаются и пишутся как **строки**. Неявные резолверы
   int/float/bool/null/timestamp/merge/value отключены, иначе ``current-version: 1.10``
   превратился бы в float 1.1, а ``swift-version: 2.0`` — в 2.0.
   Типизированный разбор делают кодеки из ``scalars``. Исключение: пустое
   значение — null, а пустая строка при записи берётся в кавычки.
   Явный стандартный тег (``!!int 5``) PyYAML по-прежнему строит в свой
   тип; кодеки ждут строку и отвечают SchemaError.
2) Локальные теги (``!tapi-tbd-v2`` и любые другие ``!…``) не вызывают
   ConstructorError: узел оборачивается в ``TaggedDocument`` и уже кодек
   решает, его ли это тег.
3) При записи списки имён (``FlowList``) идут в flow-стиле, корневой словарь
   пишется с тегом, порядок ключей сохраняется.
"""

from __future__ import annotations

import copy
import re
from dataclasses import dataclass
from typing import Any, Iterable, Union

import yaml

__all__ = ["TaggedDocument", "FlowList", "load_document", "dump_document"]


# =============================================================================
# Контейнеры
# =============================================================================

@dataclass
class TaggedDocument:
    """Узел YAML с локальным тегом: ``tag`` вида ``!tapi-tbd-v2`` + построенное значение."""

    tag: str
    value: Any


class FlowList(list):
    """Список, который дампер пишет в flow-стиле: ``[ a, b, c ]``."""


# =============================================================================
# Loader / Dumper
# =============================================================================

# Теги, которые НЕ должны выводиться неявно из текста plain-скаляра.
_NO_IMPLICIT_TAGS = {
    "tag:yaml.org,2002:bool",
    "tag:yaml.org,2002:int",
    "tag:yaml.org,2002:float",
    "tag:yaml.org,2002:null",
    "tag:yaml.org,2002:timestamp",
    "tag:yaml.org,2002:merge",
    "tag:yaml.org,2002:value",
}


def _strings_only(resolvers: dict) -> dict:
    # yaml_implicit_resolvers: class-level dict; копируем, чтобы не менять SafeLoader/SafeDumper глобально.
    out = copy.deepcopy(resolvers)
    for ch, items in list(out.items()):
        out[ch] = [r for r in items if r and r[0] not in _NO_IMPLICIT_TAGS]
    return out


class _TBDSafeLoader(yaml.SafeLoader):  # type: ignore[misc]
    pass


_TBDSafeLoader.yaml_implicit_resolvers = _strings_only(getattr(yaml.SafeLoader, "yaml_implicit_resolvers", {}))
# Пустое значение (`uuids:` без списка) остаётся null: для кодека это «поле не задано».
_TBDSafeLoader.add_implicit_resolver("tag:yaml.org,2002:null", re.compile(r"^$"), [""])


def _construct_local_tag(loader: yaml.SafeLoader, suffix: str, node: yaml.Node) -> TaggedDocument:
    tag = "!" + suffix
    if isinstance(node, yaml.MappingNode):
        return TaggedDocument(tag, loader.construct_mapping(node, deep=True))
    if isinstance(node, yaml.SequenceNode):
        return TaggedDocument(tag, loader.construct_sequence(node, deep=True))
    return TaggedDocument(tag, loader.construct_scalar(node))


_TBDSafeLoader.add_multi_constructor("!", _construct_local_tag)


class _TBDDumper(yaml.SafeDumper):  # type: ignore[misc]
    pass


_TBDDumper.yaml_implicit_resolvers = _strings_only(getattr(yaml.SafeDumper, "yaml_implicit_resolvers", {}))
_TBDDumper.add_implicit_resolver("tag:yaml.org,2002:null", re.compile(r"^$"), [""])


def _represent_flow_list(dumper: yaml.SafeDumper, data: FlowList) -> yaml.Node:
    return dumper.represent_sequence("tag:yaml.org,2002:seq", list(data), flow_style=True)


def _represent_tagged(dumper: yaml.SafeDumper, data: TaggedDocument) -> yaml.Node:
    if isinstance(data.value, dict):
        return dumper.represent_mapping(data.tag, data.value)
    if isinstance(data.value, list):
        return dumper.represent_sequence(data.tag, data.value)
    return dumper.represent_scalar(data.tag, str(data.value))


_TBDDumper.add_representer(FlowList, _represent_flow_list)
_TBDDumper.add_representer(TaggedDocument, _represent_tagged)


# =============================================================================
# API
# =============================================================================

def load_document(buffer: Union[str, bytes]) -> Any:
    """
    Разобрать один YAML-документ.

    Ошибки PyYAML не перехватываются здесь: вызывающий кодек оборачивает их
    в SchemaError с нужным путём.
    """
    return yaml.load(buffer, Loader=_TBDSafeLoader)  # type: ignore[arg-type]


def dump_document(tag: str, items: Iterable[tuple], *, width: int = 80) -> str:
    """
    Записать корневой словарь с тегом ``tag``.

    Результат всегда начинается с ``--- <tag>`` и заканчивается ``...``.
    """
    doc = TaggedDocument(tag, dict(items))
    return yaml.dump(
        doc,
        Dumper=_TBDDumper,
        explicit_start=True,
        explicit_end=True,
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
        width=width,
    )
