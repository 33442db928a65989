"""Tests for the tree-sitter backed semantic model."""

from pathlib import Path

import pytest

from disposegen.context import context_from_bytes
from disposegen.filters.base import Candidate
from disposegen.filters.collector import iter_class_declarations
from disposegen.parser import create_parser
from disposegen.semantic.csharp import TreeSitterSemanticModel, normalize_type_name
from disposegen.semantic.symbols import MemberKind, TypeKind
from disposegen.work.models import Accessibility


def _contexts(*sources: bytes) -> list:
    parser = create_parser()
    return [context_from_bytes(Path(f"File{i}.cs"), src, parser=parser) for i, src in enumerate(sources)]


def _model(*sources: bytes, **kwargs) -> TreeSitterSemanticModel:
    return TreeSitterSemanticModel(_contexts(*sources), **kwargs)


def _members(model: TreeSitterSemanticModel, name: str) -> dict:
    symbol = model.get_type_by_name(name)
    assert symbol is not None, f"{name} not declared"
    return {m.name: m for m in model.declared_members(symbol)}


@pytest.mark.parametrize(
    "written, expected",
    [
        ("Stream", "Stream"),
        ("System.IO.Stream", "System.IO.Stream"),
        ("global::System.IDisposable", "System.IDisposable"),
        ("Stream?", "Stream"),
        ("List<Stream>", "List"),
        ("Dictionary<string, List<int>>", "Dictionary"),
        ("int", None),
        ("string", None),
        ("Stream[]", None),
        ("(int, Stream)", None),
        ("byte*", None),
    ],
)
def test_normalize_type_name(written, expected):
    assert normalize_type_name(written) == expected


def test_block_namespace_and_accessibility():
    model = _model(
        b"""
namespace Acme.Io
{
    public partial class Reader : System.IDisposable { }
    internal class Helper { }
    class Bare { }
}
"""
    )
    reader = model.get_type_by_name("Acme.Io.Reader")
    assert reader is not None
    assert reader.namespace == "Acme.Io"
    assert reader.kind is TypeKind.CLASS
    assert reader.accessibility is Accessibility.PUBLIC
    assert reader.is_partial
    assert reader.base_names == ("System.IDisposable",)
    assert model.get_type_by_name("Acme.Io.Helper").accessibility is Accessibility.INTERNAL
    assert model.get_type_by_name("Acme.Io.Bare").accessibility is Accessibility.NOT_SPECIFIED
    assert not model.get_type_by_name("Acme.Io.Bare").is_partial


def test_nested_namespaces():
    model = _model(b"namespace A { namespace B { class C { } } }")
    assert model.get_type_by_name("A.B.C") is not None


def test_file_scoped_namespace():
    model = _model(
        b"""
using System;

namespace Acme.Net;

public partial class Connection : IDisposable { }
"""
    )
    symbol = model.get_type_by_name("Acme.Net.Connection")
    assert symbol is not None
    assert symbol.namespace == "Acme.Net"
    assert symbol.base_names == ("System.IDisposable",)


def test_global_namespace_type():
    model = _model(b"class Loose : System.IDisposable { }")
    symbol = model.get_type_by_name("Loose")
    assert symbol is not None
    assert symbol.namespace == ""


def test_nested_type_has_containing_type():
    model = _model(b"namespace N { class Outer { class Inner : System.IDisposable { } } }")
    inner = model.get_type_by_name("N.Outer.Inner")
    assert inner is not None
    assert inner.containing_type == "N.Outer"
    assert inner.namespace == "N"


def test_members_in_declaration_order():
    model = _model(
        b"""
using System.IO;

namespace N
{
    public partial class Holder
    {
        private Stream _a, _b;
        private static Stream s_shared;
        private const int Size = 4;
        public MemoryStream Buffer { get; set; }
        public event System.EventHandler Changed;
        private void DisposeManaged() { }
        private int DisposeUnmanaged(int flags) { return flags; }
    }
}
"""
    )
    symbol = model.get_type_by_name("N.Holder")
    members = model.declared_members(symbol)
    assert [m.name for m in members] == [
        "_a", "_b", "s_shared", "Size", "Buffer", "Changed", "DisposeManaged", "DisposeUnmanaged",
    ]
    by_name = {m.name: m for m in members}
    assert by_name["_a"].kind is MemberKind.FIELD
    assert by_name["_a"].declared_type == "System.IO.Stream"
    assert by_name["_b"].declared_type == "System.IO.Stream"
    assert by_name["s_shared"].is_static
    assert by_name["Size"].is_static
    assert by_name["Size"].declared_type is None
    assert by_name["Buffer"].kind is MemberKind.PROPERTY
    assert by_name["Buffer"].declared_type == "System.IO.MemoryStream"
    assert by_name["Changed"].kind is MemberKind.EVENT
    assert by_name["DisposeManaged"].kind is MemberKind.METHOD
    assert by_name["DisposeManaged"].parameter_count == 0
    assert by_name["DisposeManaged"].returns_void
    assert by_name["DisposeUnmanaged"].parameter_count == 1
    assert not by_name["DisposeUnmanaged"].returns_void


def test_type_resolution_prefers_enclosing_namespace():
    model = _model(
        b"""
using System.Threading;

namespace App
{
    class Timer : System.IDisposable { }
    class Uses
    {
        Timer _mine;
        System.Threading.Timer _framework;
        CancellationTokenSource _cts;
        Unknown _unknown;
        Stream _unimported;
    }
}
"""
    )
    members = _members(model, "App.Uses")
    assert members["_mine"].declared_type == "App.Timer"
    assert members["_framework"].declared_type == "System.Threading.Timer"
    assert members["_cts"].declared_type == "System.Threading.CancellationTokenSource"
    assert members["_unknown"].declared_type is None
    assert members["_unimported"].declared_type is None


def test_global_using_applies_to_every_file():
    model = _model(
        b"global using System.IO;",
        b"namespace App { class Uses { Stream _s; } }",
    )
    assert _members(model, "App.Uses")["_s"].declared_type == "System.IO.Stream"


def test_partial_declarations_are_merged():
    model = _model(
        b"""
namespace App
{
    public partial class Split : System.IDisposable
    {
        private System.IO.Stream _first;
    }
}
""",
        b"""
namespace App
{
    partial class Split
    {
        private System.IO.Stream _second;
        private void DisposeUnmanaged() { }
    }
}
""",
    )
    symbol = model.get_type_by_name("App.Split")
    assert symbol.accessibility is Accessibility.PUBLIC
    assert symbol.base_names == ("System.IDisposable",)
    assert [m.name for m in model.declared_members(symbol)] == ["_first", "_second", "DisposeUnmanaged"]
    assert len(model.declared_types) == 1


def test_full_interface_set_through_source_base_class():
    model = _model(
        b"""
using System;

namespace App
{
    public interface IResource : IDisposable { }
    public abstract class ResourceBase : IResource { }
    public partial class Concrete : ResourceBase { }
}
"""
    )
    concrete = model.get_type_by_name("App.Concrete")
    names = {s.qualified_name for s in model.full_interface_set(concrete)}
    assert names == {"App.IResource", "System.IDisposable"}


def test_framework_types_can_be_left_out():
    model = _model(b"namespace App { class C : System.IDisposable { } }", include_framework_types=False)
    assert model.get_type_by_name("System.IDisposable") is None
    assert model.full_interface_set(model.get_type_by_name("App.C")) == frozenset()


def test_resolve_declaration_from_candidate():
    contexts = _contexts(b"namespace App { class A : System.IDisposable { } class B { } }")
    model = TreeSitterSemanticModel(contexts)
    nodes = list(iter_class_declarations(contexts[0].root_node))
    symbols = [model.resolve_declaration(Candidate(node=n, context=contexts[0])) for n in nodes]
    assert [s.qualified_name for s in symbols] == ["App.A", "App.B"]


def test_resolve_declaration_without_context_fails():
    contexts = _contexts(b"namespace App { class A : System.IDisposable { } }")
    model = TreeSitterSemanticModel(contexts)
    node = next(iter_class_declarations(contexts[0].root_node))
    assert model.resolve_declaration(Candidate(node=node)) is None


def test_symbol_location_points_at_declaration():
    model = _model(b"namespace App\n{\n    public class A : System.IDisposable { }\n}\n")
    location = model.get_type_by_name("App.A").location
    assert location is not None
    assert location.path == Path("File0.cs")
    assert location.line == 3
    assert location.column == 5
    assert "class A" in location.snippet


def test_contexts_sharing_a_path_resolve_separately():
    parser = create_parser()
    contexts = [
        context_from_bytes(Path("X.cs"), b"namespace A { class C : System.IDisposable { } }", parser=parser),
        context_from_bytes(Path("X.cs"), b"namespace B { class D : System.IDisposable { } }", parser=parser),
    ]
    model = TreeSitterSemanticModel(contexts)
    resolved = [
        model.resolve_declaration(Candidate(node=next(iter_class_declarations(ctx.root_node)), context=ctx))
        for ctx in contexts
    ]
    assert [s.qualified_name for s in resolved] == ["A.C", "B.D"]


def test_generic_method_type_parameters_are_counted():
    members = _members(
        _model(
            b"""
namespace App
{
    partial class Holder : System.IDisposable
    {
        public void Dispose<T>() { }
        private void DisposeManaged<TKey, TValue>() { }
        private void DisposeUnmanaged() { }
    }
}
"""
        ),
        "App.Holder",
    )
    assert members["Dispose"].type_parameter_count == 1
    assert members["Dispose"].parameter_count == 0
    assert members["DisposeManaged"].type_parameter_count == 2
    assert members["DisposeUnmanaged"].type_parameter_count == 0
