# textstub/core/version.py
"""
PackedVersion – версия ``major.minor.patch``, упакованная в 32 бита.

Раскладка (как в Mach-O): ``xxxx.yy.zz`` → 16 бит major, по 8 бит minor/patch.
Печать: ``X.Y`` если patch == 0, иначе ``X.Y.Z``.
"""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["PackedVersion"]

_MAX_MAJOR = 0xFFFF
_MAX_MINOR = 0xFF
_MAX_PATCH = 0xFF


@dataclass(frozen=True, order=True)
class PackedVersion:
    """Неизменяемая версия; порядок сравнения = порядок (major, minor, patch)."""

    major: int = 0
    minor: int = 0
    patch: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.major <= _MAX_MAJOR:
            raise ValueError(f"major={self.major} вне диапазона 0..{_MAX_MAJOR}")
        if not 0 <= self.minor <= _MAX_MINOR:
            raise ValueError(f"minor={self.minor} вне диапазона 0..{_MAX_MINOR}")
        if not 0 <= self.patch <= _MAX_PATCH:
            raise ValueError(f"patch={self.patch} вне диапазона 0..{_MAX_PATCH}")

    # ----------------------------------------------------------------- parse
    @classmethod
    def parse(cls, text: str) -> "PackedVersion":
        """
        Разобрать строку ``X``, ``X.Y`` или ``X.Y.Z``.

        Бросает ValueError для пустой строки, нечисловых частей,
        более чем трёх компонент и выхода за диапазон.
        """
        s = str(text).strip()
        if not s:
            raise ValueError("пустая строка версии")
        parts = s.split(".")
        if len(parts) > 3:
            raise ValueError(f"слишком много компонент в версии '{s}'")
        nums = []
        for p in parts:
            if not (p.isascii() and p.isdigit()):
                raise ValueError(f"некорректная компонента '{p}' в версии '{s}'")
            nums.append(int(p))
        while len(nums) < 3:
            nums.append(0)
        return cls(*nums)

    def __str__(self) -> str:
        if self.patch:
            return f"{self.major}.{self.minor}.{self.patch}"
        return f"{self.major}.{self.minor}"
