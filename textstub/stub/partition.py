# textstub/stub/partition.py
"""
Разбиение элементов по наборам архитектур.

Каждый элемент (символ, библиотека) помечен ArchitectureSet. Секция документа
соответствует ровно одному *различному* набору, и в неё попадают элементы,
чей набор **равен** ключу (не подмножество и не надмножество).

Порядок ключей — по возрастанию ArchitectureSet (маски), поэтому для
одинакового входа документ всегда одинаков.
"""

from __future__ import annotations

from typing import Callable, Dict, Iterable, List, TypeVar

from textstub.core import ArchitectureSet

__all__ = ["distinct_architecture_sets", "partition_by_architectures"]

T = TypeVar("T")


def distinct_architecture_sets(tags: Iterable[ArchitectureSet]) -> List[ArchitectureSet]:
    """Различные наборы архитектур, отсортированные."""
    return sorted(set(tags))


def partition_by_architectures(
    items: Iterable[T],
    key: Callable[[T], ArchitectureSet],
) -> Dict[ArchitectureSet, List[T]]:
    """
    ``{набор: [элементы с ровно этим набором]}``.

    Порядок элементов внутри корзины — порядок во входной последовательности.
    """
    buckets: Dict[ArchitectureSet, List[T]] = {}
    for item in items:
        buckets.setdefault(key(item), []).append(item)
    return {archs: buckets[archs] for archs in distinct_architecture_sets(buckets)}
