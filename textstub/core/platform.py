# textstub/core/platform.py
"""
Платформа и ограничение Objective-C runtime.

Значения enum-ов совпадают с токенами, которые пишутся в TBD-документ.
"""

from __future__ import annotations

import enum

__all__ = ["Platform", "ObjCConstraint"]


class Platform(enum.Enum):
    """Целевая платформа библиотеки."""

    UNKNOWN = "unknown"
    MACOSX = "macosx"
    IOS = "ios"
    WATCHOS = "watchos"
    TVOS = "tvos"
    BRIDGEOS = "bridgeos"

    def __str__(self) -> str:
        return self.value


class ObjCConstraint(enum.Enum):
    """Ограничение на режим управления памятью Objective-C."""

    NONE = "none"
    RETAIN_RELEASE = "retain_release"
    RETAIN_RELEASE_FOR_SIMULATOR = "retain_release_for_simulator"
    RETAIN_RELEASE_OR_GC = "retain_release_or_gc"
    GC = "gc"

    def __str__(self) -> str:
        return self.value
