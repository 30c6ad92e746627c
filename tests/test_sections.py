# tests/test_sections.py
"""
Сборка и применение секций exports / undefineds:

* общая partition-область для символов и библиотек (секция только из re-export);
* отдельная partition-область для undefined;
* точность разбиения и сортировка списков;
* применение: режим «только метаданные», порядок, пути ошибок from_node.
"""

from __future__ import annotations

import pytest

from textstub.core import ArchitectureSet, InterfaceFile, ReadFlags, SymbolFlags, SymbolKind
from textstub.stub.arena import StringArena
from textstub.stub.errors import MissingField, SchemaError, StubPath
from textstub.stub.sections import (
    ExportSection,
    UndefinedSection,
    apply_sections,
    build_export_sections,
    build_undefined_sections,
)

X86 = ArchitectureSet.of("x86_64")
ARM = ArchitectureSet.of("arm64")
BOTH = ArchitectureSet.of("i386", "x86_64")

# ------------------------------------------------------- build

def test_export_sections_share_one_partition(sample_file):
    with StringArena() as arena:
        sections = build_export_sections(sample_file, arena)

    by_archs = {s.archs: s for s in sections}
    assert set(by_archs) == {BOTH, X86, ARM}

    lib_only = by_archs[ARM]
    assert lib_only.reexported_libraries == ["/usr/lib/libarm.dylib"]
    assert not (lib_only.symbols or lib_only.classes or lib_only.ivars)

    both = by_archs[BOTH]
    assert both.allowable_clients == ["FooClient"]
    assert both.symbols == ["_OBJC_EHTYPE_$_FooObject", "_alpha", "_zeta"]
    assert both.classes == ["_FooObject"]
    assert both.weak_def_symbols == ["_weak"]

    x86 = by_archs[X86]
    assert x86.tlv_symbols == ["_tlv"]
    assert x86.ivars == ["_FooObject._count"]


def test_partition_exactness(sample_file):
    with StringArena() as arena:
        sections = build_export_sections(sample_file, arena)

    keys = [s.archs for s in sections]
    assert len(keys) == len(set(keys))
    assert keys == sorted(keys)

    union = ArchitectureSet()
    for s in sections:
        union = union | s.archs
    expected = ArchitectureSet()
    for item in list(sample_file.exports()) + sample_file.allowable_clients + sample_file.reexported_libraries:
        expected = expected | item.archs
        assert item.archs in keys
    assert union == expected


def test_undefined_sections_use_own_partition(sample_file):
    with StringArena() as arena:
        undefs = build_undefined_sections(sample_file, arena)

    # re-export на arm64 не порождает undefined-секцию
    assert [s.archs for s in undefs] == [X86]
    [u] = undefs
    assert u.symbols == ["_malloc"]
    assert u.weak_ref_symbols == ["_maybe"]
    assert u.classes == ["_NSObject"]


def test_lists_are_sorted_bytewise():
    f = InterfaceFile()
    for name in ["_b", "_B", "_a", "__z", "_a2"]:
        f.add_symbol(SymbolKind.GLOBAL_SYMBOL, name, X86)
    with StringArena() as arena:
        [s] = build_export_sections(f, arena)
    assert s.symbols == ["_B", "__z", "_a", "_a2", "_b"]
    assert all(a <= b for a, b in zip(s.symbols, s.symbols[1:]))


def test_empty_model_builds_no_sections():
    with StringArena() as arena:
        assert build_export_sections(InterfaceFile(), arena) == []
        assert build_undefined_sections(InterfaceFile(), arena) == []


def test_to_node_omits_empty_lists():
    s = ExportSection(X86, symbols=["_f"])
    assert s.to_node() == {"archs": ["x86_64"], "symbols": ["_f"]}
    assert UndefinedSection(ARM).to_node() == {"archs": ["arm64"]}

# ------------------------------------------------------- from_node

def test_from_node_requires_archs():
    path = StubPath.root().key("exports").index(2)
    with pytest.raises(MissingField) as ei:
        ExportSection.from_node({"symbols": ["_f"]}, path)
    assert ei.value.path == "exports[2].archs"


def test_from_node_rejects_unknown_key():
    with pytest.raises(SchemaError) as ei:
        UndefinedSection.from_node({"archs": ["x86_64"], "weak-def-symbols": ["_f"]}, StubPath.root())
    assert "weak-def-symbols" in ei.value.message


def test_from_node_reads_lists():
    s = ExportSection.from_node(
        {"archs": ["x86_64"], "re-exports": ["/usr/lib/libz.dylib"], "objc-ivars": None},
        StubPath.root(),
    )
    assert s.archs == X86
    assert s.reexported_libraries == ["/usr/lib/libz.dylib"]
    assert s.ivars == []

# ------------------------------------------------------- apply

def _sections():
    exports = [
        ExportSection(
            X86,
            reexported_libraries=["libFoo"],
            symbols=["_foo", "_OBJC_EHTYPE_$_Err"],
            classes=["_Cls"],
            weak_def_symbols=["_wd"],
        ),
        ExportSection(BOTH, allowable_clients=["Client"], symbols=["_foo"]),
    ]
    undefineds = [UndefinedSection(X86, symbols=["_ext"], weak_ref_symbols=["_wr"])]
    return exports, undefineds


def test_apply_metadata_only_registers_libraries_only():
    exports, undefineds = _sections()
    f = InterfaceFile()
    with StringArena() as arena:
        apply_sections(exports, undefineds, f, read_flags=ReadFlags.HEADER, arena=arena)

    assert [r.install_name for r in f.reexported_libraries] == ["libFoo"]
    assert [r.install_name for r in f.allowable_clients] == ["Client"]
    assert list(f.exports()) == []
    assert list(f.undefineds()) == []


def test_apply_full_decodes_and_merges():
    exports, undefineds = _sections()
    f = InterfaceFile()
    with StringArena() as arena:
        apply_sections(exports, undefineds, f, read_flags=ReadFlags.ALL, arena=arena)

    foo = f.find_symbol(SymbolKind.GLOBAL_SYMBOL, "_foo")
    assert foo.archs == BOTH  # x86_64 ∪ {i386, x86_64}
    assert f.find_symbol(SymbolKind.OBJC_CLASS_EH_TYPE, "Err") is not None
    assert f.find_symbol(SymbolKind.OBJC_CLASS, "Cls") is not None
    assert f.find_symbol(SymbolKind.GLOBAL_SYMBOL, "_wd").flags == SymbolFlags.WEAK_DEFINED
    assert f.find_undefined_symbol(SymbolKind.GLOBAL_SYMBOL, "_wr").flags == SymbolFlags.WEAK_REFERENCED
    assert f.find_undefined_symbol(SymbolKind.GLOBAL_SYMBOL, "_ext").archs == X86
