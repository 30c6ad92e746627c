# textstub/__init__.py
from .core import (
    Architecture,
    ArchitectureSet,
    FileType,
    InterfaceFile,
    ObjCConstraint,
    PackedVersion,
    Platform,
    ReadFlags,
    SymbolFlags,
    SymbolKind,
)
from .stub import StubError, TBDv2Handler, default_registry, dumps, loads

__version__ = "0.1.0"
