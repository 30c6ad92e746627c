# tests/test_core_model.py
"""
Модель textstub.core:

* ArchitectureSet: маска, порядок, операции, неизвестные токены;
* PackedVersion: разбор/печать/границы;
* варианты символов и фабрика make_symbol;
* InterfaceFile: слияние архитектур, UUID, структурное равенство.
"""

from __future__ import annotations

import pytest

from textstub.core import (
    Architecture,
    ArchitectureSet,
    GlobalSymbol,
    InterfaceFile,
    ObjCClass,
    ObjCClassEHType,
    PackedVersion,
    SymbolFlags,
    SymbolKind,
    make_symbol,
)

# ------------------------------------------------------- architectures

def test_architecture_from_name_unknown_token():
    assert Architecture.from_name("x86_64") is Architecture.X86_64
    assert Architecture.from_name(" arm64 ") is Architecture.ARM64
    assert Architecture.from_name("sparc") is Architecture.UNKNOWN


def test_architecture_set_basic_ops():
    a = ArchitectureSet.of("i386", "x86_64")
    b = ArchitectureSet.of("x86_64", "arm64")

    assert len(a) == 2
    assert "i386" in a and Architecture.X86_64 in a
    assert "arm64" not in a
    assert (a | b).names() == ["i386", "x86_64", "arm64"]
    assert (a & b) == ArchitectureSet.of("x86_64")
    assert not ArchitectureSet()
    assert ArchitectureSet.from_mask(a.mask) == a


def test_architecture_set_hash_and_order():
    a = ArchitectureSet.of("x86_64", "i386")
    b = ArchitectureSet([Architecture.I386, Architecture.X86_64])
    assert a == b and hash(a) == hash(b)
    assert len({a, b}) == 1

    small = ArchitectureSet.of("i386")
    big = ArchitectureSet.of("arm64")
    assert sorted([big, a, small]) == [small, a, big]


def test_architecture_set_iteration_follows_declaration_order():
    s = ArchitectureSet.of("arm64", "i386", "armv7")
    assert [a.value for a in s] == ["i386", "armv7", "arm64"]

# ------------------------------------------------------- versions

@pytest.mark.parametrize(
    "text, expected",
    [
        ("1", PackedVersion(1, 0, 0)),
        ("1.2", PackedVersion(1, 2, 0)),
        ("10.14.6", PackedVersion(10, 14, 6)),
        (" 3.0 ", PackedVersion(3, 0, 0)),
    ],
)
def test_packed_version_parse(text, expected):
    assert PackedVersion.parse(text) == expected


@pytest.mark.parametrize("bad", ["", "1.2.3.4", "a.b", "1..2", "1.-2", "70000", "1.256"])
def test_packed_version_parse_rejects(bad):
    with pytest.raises(ValueError):
        PackedVersion.parse(bad)


def test_packed_version_str_and_order():
    assert str(PackedVersion(1, 0, 0)) == "1.0"
    assert str(PackedVersion(1, 2, 3)) == "1.2.3"
    assert PackedVersion(1, 2, 0) < PackedVersion(1, 10, 0)

# ------------------------------------------------------- symbols

def test_make_symbol_builds_variants():
    archs = ArchitectureSet.of("x86_64")
    g = make_symbol(SymbolKind.GLOBAL_SYMBOL, "_f", archs, SymbolFlags.WEAK_DEFINED)
    assert isinstance(g, GlobalSymbol) and g.is_weak_defined
    assert not g.is_thread_local_value

    c = make_symbol(SymbolKind.OBJC_CLASS, "Foo", archs)
    e = make_symbol(SymbolKind.OBJC_CLASS_EH_TYPE, "Foo", archs)
    assert isinstance(c, ObjCClass) and isinstance(e, ObjCClassEHType)
    assert c != e  # одинаковое имя, разные варианты


def test_make_symbol_rejects_flags_on_objc():
    with pytest.raises(ValueError):
        make_symbol(SymbolKind.OBJC_CLASS, "Foo", ArchitectureSet(), SymbolFlags.WEAK_DEFINED)

# ------------------------------------------------------- InterfaceFile

def test_add_symbol_merges_architectures():
    f = InterfaceFile()
    f.add_symbol(SymbolKind.GLOBAL_SYMBOL, "_f", ArchitectureSet.of("i386"))
    f.add_symbol(SymbolKind.GLOBAL_SYMBOL, "_f", ArchitectureSet.of("x86_64"))
    f.add_symbol(SymbolKind.OBJC_CLASS, "_f", ArchitectureSet.of("arm64"))

    syms = list(f.exports())
    assert len(syms) == 2
    g = f.find_symbol(SymbolKind.GLOBAL_SYMBOL, "_f")
    assert g.archs == ArchitectureSet.of("i386", "x86_64")
    assert f.find_undefined_symbol(SymbolKind.GLOBAL_SYMBOL, "_f") is None


def test_libraries_merge_by_install_name():
    f = InterfaceFile()
    f.add_reexported_library("/usr/lib/libA.dylib", ArchitectureSet.of("i386"))
    f.add_reexported_library("/usr/lib/libA.dylib", ArchitectureSet.of("x86_64"))
    f.add_allowable_client("Client", ArchitectureSet.of("arm64"))

    [lib] = f.reexported_libraries
    assert lib.archs == ArchitectureSet.of("i386", "x86_64")
    assert [c.install_name for c in f.allowable_clients] == ["Client"]


def test_uuids_replace_and_order():
    f = InterfaceFile()
    f.add_uuid("x86_64", "B")
    f.add_uuid("i386", "A")
    f.add_uuid("x86_64", "C")
    assert f.uuids == [(Architecture.I386, "A"), (Architecture.X86_64, "C")]


def test_equality_ignores_insertion_order_and_path(sample_file):
    other = InterfaceFile()
    other.file_type = sample_file.file_type
    other.architectures = sample_file.architectures
    other.platform = sample_file.platform
    other.install_name = sample_file.install_name
    other.current_version = sample_file.current_version
    other.compatibility_version = sample_file.compatibility_version
    other.swift_abi_version = sample_file.swift_abi_version
    other.objc_constraint = sample_file.objc_constraint
    other.two_level_namespace = sample_file.two_level_namespace
    for arch, uuid in reversed(sample_file.uuids):
        other.add_uuid(arch, uuid)
    for ref in sample_file.allowable_clients:
        other.add_allowable_client(ref.install_name, ref.archs)
    for ref in sample_file.reexported_libraries:
        other.add_reexported_library(ref.install_name, ref.archs)
    for s in reversed(list(sample_file.exports())):
        other.add_symbol(s.kind, s.name, s.archs, getattr(s, "flags", SymbolFlags.NONE))
    for s in sample_file.undefineds():
        other.add_undefined_symbol(s.kind, s.name, s.archs, getattr(s, "flags", SymbolFlags.NONE))
    other.path = "/elsewhere.tbd"

    assert other == sample_file
    other.parent_umbrella = "X"
    assert other != sample_file
