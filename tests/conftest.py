#tests/conftest.py
"""
Общие фикстуры, доступные во всех тестах.

* ``handler``      – свежий TBDv2Handler;
* ``sample_text``  – «полный» документ TBD v2 (все поля, обе группы секций);
* ``minimal_text`` – только обязательные поля;
* ``sample_file``  – модель InterfaceFile, собранная вручную (для записи).
"""

from __future__ import annotations

import pytest

from textstub.core import (
    ArchitectureSet,
    FileType,
    InterfaceFile,
    ObjCConstraint,
    PackedVersion,
    Platform,
    SymbolFlags,
    SymbolKind,
)
from textstub.stub import TBDv2Handler


SAMPLE_TBD = """\
--- !tapi-tbd-v2
archs:           [ i386, x86_64 ]
uuids:           [ 'i386: 00000000-0000-0000-0000-000000000000',
                   'x86_64: 11111111-1111-1111-1111-111111111111' ]
platform:        macosx
flags:           [ installapi ]
install-name:    /usr/lib/libfoo.dylib
current-version: 1.2.3
compatibility-version: 1.1
swift-version:   1.1
objc-constraint: retain_release_or_gc
parent-umbrella: Umbrella
exports:
  - archs:           [ i386, x86_64 ]
    allowable-clients: [ clientA ]
    re-exports:      [ /usr/lib/libbar.dylib ]
    symbols:         [ _sym1, _OBJC_EHTYPE_$_Base ]
    objc-classes:    [ _NSFoo ]
    objc-ivars:      [ _NSFoo._ivar ]
    weak-def-symbols: [ _weak1 ]
    thread-local-symbols: [ _tlv1 ]
  - archs:           [ x86_64 ]
    symbols:         [ _x86only ]
undefineds:
  - archs:           [ i386, x86_64 ]
    symbols:         [ _undef ]
    weak-ref-symbols: [ _weakref ]
...
"""

MINIMAL_TBD = """\
--- !tapi-tbd-v2
archs:        [ arm64 ]
platform:     ios
install-name: /usr/lib/libmin.dylib
...
"""


@pytest.fixture()
def handler() -> TBDv2Handler:
    return TBDv2Handler()


@pytest.fixture()
def sample_text() -> str:
    return SAMPLE_TBD


@pytest.fixture()
def minimal_text() -> str:
    return MINIMAL_TBD


@pytest.fixture()
def sample_file() -> InterfaceFile:
    """
    Модель со всеми видами символов.

    Наборы архитектур подобраны так, чтобы:
    * {i386, x86_64} пришёл и от символов, и от библиотек;
    * {arm64} пришёл только от re-export (секция без символов);
    * undefined-символы жили в своём наборе {x86_64}.
    """
    both = ArchitectureSet.of("i386", "x86_64")
    x86 = ArchitectureSet.of("x86_64")
    arm = ArchitectureSet.of("arm64")

    f = InterfaceFile()
    f.file_type = FileType.TBD_V2
    f.architectures = both | arm
    f.platform = Platform.MACOSX
    f.install_name = "/System/Library/Frameworks/Foo.framework/Foo"
    f.current_version = PackedVersion(2, 4, 1)
    f.compatibility_version = PackedVersion(1, 0, 0)
    f.swift_abi_version = 3
    f.objc_constraint = ObjCConstraint.RETAIN_RELEASE
    f.two_level_namespace = False
    f.application_extension_safe = True
    f.install_api = False
    f.add_uuid("x86_64", "AAAAAAAA-0000-0000-0000-000000000001")
    f.add_uuid("i386", "AAAAAAAA-0000-0000-0000-000000000002")

    f.add_allowable_client("FooClient", both)
    f.add_reexported_library("/usr/lib/libarm.dylib", arm)

    f.add_symbol(SymbolKind.GLOBAL_SYMBOL, "_zeta", both)
    f.add_symbol(SymbolKind.GLOBAL_SYMBOL, "_alpha", both)
    f.add_symbol(SymbolKind.GLOBAL_SYMBOL, "_weak", both, SymbolFlags.WEAK_DEFINED)
    f.add_symbol(SymbolKind.GLOBAL_SYMBOL, "_tlv", x86, SymbolFlags.THREAD_LOCAL_VALUE)
    f.add_symbol(SymbolKind.OBJC_CLASS, "FooObject", both)
    f.add_symbol(SymbolKind.OBJC_CLASS_EH_TYPE, "FooObject", both)
    f.add_symbol(SymbolKind.OBJC_INSTANCE_VARIABLE, "FooObject._count", x86)

    f.add_undefined_symbol(SymbolKind.GLOBAL_SYMBOL, "_malloc", x86)
    f.add_undefined_symbol(SymbolKind.GLOBAL_SYMBOL, "_maybe", x86, SymbolFlags.WEAK_REFERENCED)
    f.add_undefined_symbol(SymbolKind.OBJC_CLASS, "NSObject", x86)
    return f
