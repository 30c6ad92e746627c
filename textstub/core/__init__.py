#textstub/core/__init__.py
"""
textstub.core
-------------
Модель описания интерфейса, с которой работают кодеки:

* InterfaceFile / InterfaceRef  – сам артефакт и ссылки на библиотеки;
* Architecture / ArchitectureSet;
* Platform, ObjCConstraint, PackedVersion;
* варианты символов (GlobalSymbol, ObjCClass, …);
* теги FileType / ReadFlags.
"""

from .architecture import Architecture, ArchitectureSet
from .interface import FileType, InterfaceFile, InterfaceRef, ReadFlags
from .platform import ObjCConstraint, Platform
from .symbols import (
    GlobalSymbol,
    ObjCClass,
    ObjCClassEHType,
    ObjCInstanceVariable,
    Symbol,
    SymbolFlags,
    SymbolKind,
    make_symbol,
)
from .version import PackedVersion

__all__ = [
    "Architecture",
    "ArchitectureSet",
    "FileType",
    "InterfaceFile",
    "InterfaceRef",
    "ReadFlags",
    "ObjCConstraint",
    "Platform",
    "PackedVersion",
    "GlobalSymbol",
    "ObjCClass",
    "ObjCClassEHType",
    "ObjCInstanceVariable",
    "Symbol",
    "SymbolFlags",
    "SymbolKind",
    "make_symbol",
]
