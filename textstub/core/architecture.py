# textstub/core/architecture.py
"""
textstub.core.architecture
==========================

Архитектуры (наборы инструкций) и множества архитектур.

* ``Architecture``     – перечисление известных токенов (``x86_64``, ``arm64`` …);
* ``ArchitectureSet``  – неизменяемое множество архитектур поверх битовой маски.

Зачем маска
-----------
Множество архитектур используется одновременно как *тег* элемента
(символа, библиотеки) и как *ключ* разбиения на секции. Ключ должен быть
хешируемым и упорядочиваемым, чтобы порядок секций был детерминированным.
Битовая маска даёт и то, и другое бесплатно: сравнение множеств = сравнение
целых чисел.
"""

from __future__ import annotations

import enum
from functools import total_ordering
from typing import Iterable, Iterator, Union

__all__ = ["Architecture", "ArchitectureSet"]


# -----------------------------------------------------------------------------
#                               Architecture
# -----------------------------------------------------------------------------
class Architecture(enum.Enum):
    """Токен архитектуры в том виде, в каком он записывается в TBD."""

    I386 = "i386"
    X86_64 = "x86_64"
    X86_64H = "x86_64h"
    ARMV4T = "armv4t"
    ARMV6 = "armv6"
    ARMV5 = "armv5"
    ARMV7 = "armv7"
    ARMV7S = "armv7s"
    ARMV7K = "armv7k"
    ARMV6M = "armv6m"
    ARMV7M = "armv7m"
    ARMV7EM = "armv7em"
    ARM64 = "arm64"
    ARM64E = "arm64e"
    UNKNOWN = "unknown"

    def __str__(self) -> str:  # удобно для печати / сериализации
        return self.value

    @property
    def bit(self) -> int:
        """Бит архитектуры в маске ArchitectureSet (по порядку объявления)."""
        return 1 << _ARCH_INDEX[self]

    @classmethod
    def from_name(cls, name: str) -> "Architecture":
        """
        Токен → Architecture.

        Нераспознанный токен превращается в ``UNKNOWN`` (а не в ошибку):
        так ведут себя и другие читатели формата.
        """
        return _ARCH_BY_NAME.get(str(name).strip(), cls.UNKNOWN)


_ARCH_INDEX = {arch: i for i, arch in enumerate(Architecture)}
_ARCH_BY_NAME = {arch.value: arch for arch in Architecture}

ArchLike = Union[Architecture, str]


def _to_arch(value: ArchLike) -> Architecture:
    if isinstance(value, Architecture):
        return value
    return Architecture.from_name(value)


# -----------------------------------------------------------------------------
#                               ArchitectureSet
# -----------------------------------------------------------------------------
@total_ordering
class ArchitectureSet:
    """
    Неизменяемое множество архитектур.

    Примеры::

        ArchitectureSet.of("x86_64", "arm64")
        ArchitectureSet([Architecture.I386]) | ArchitectureSet.of("x86_64")

    Порядок (``<``) задаётся значением маски – он не несёт смысла кроме
    детерминированности, но стабилен между запусками.
    """

    __slots__ = ("_mask",)

    def __init__(self, archs: Iterable[ArchLike] = ()):
        mask = 0
        for a in archs:
            mask |= _to_arch(a).bit
        self._mask = mask

    # ----------------------------------------------------------------- factory
    @classmethod
    def of(cls, *archs: ArchLike) -> "ArchitectureSet":
        return cls(archs)

    @classmethod
    def from_mask(cls, mask: int) -> "ArchitectureSet":
        obj = cls()
        obj._mask = int(mask)
        return obj

    # ------------------------------------------------------------------ access
    @property
    def mask(self) -> int:
        return self._mask

    def names(self) -> list[str]:
        """Список токенов в порядке объявления Architecture."""
        return [a.value for a in self]

    def __iter__(self) -> Iterator[Architecture]:
        for arch in Architecture:
            if self._mask & arch.bit:
                yield arch

    def __len__(self) -> int:
        return bin(self._mask).count("1")

    def __bool__(self) -> bool:
        return self._mask != 0

    def __contains__(self, item: object) -> bool:
        if isinstance(item, (Architecture, str)):
            return bool(self._mask & _to_arch(item).bit)
        return False

    # -------------------------------------------------------------- операции
    def __or__(self, other: "ArchitectureSet") -> "ArchitectureSet":
        return ArchitectureSet.from_mask(self._mask | other._mask)

    def __and__(self, other: "ArchitectureSet") -> "ArchitectureSet":
        return ArchitectureSet.from_mask(self._mask & other._mask)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ArchitectureSet):
            return NotImplemented
        return self._mask == other._mask

    def __lt__(self, other: "ArchitectureSet") -> bool:
        if not isinstance(other, ArchitectureSet):
            return NotImplemented
        return self._mask < other._mask

    def __hash__(self) -> int:
        return hash(self._mask)

    def __repr__(self) -> str:
        return f"ArchitectureSet({self.names()!r})"
