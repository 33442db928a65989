"""Tests for the dispose-pattern template emitter."""

import pytest

from disposegen.emitter import DisposeWriter, artifact_key, render
from disposegen.parser import create_parser, parse_bytes
from disposegen.work.models import Accessibility, WorkItem

NO_WORK = """using System;

namespace TestNamespace
{
    partial class TestClass
    {
        public void Dispose()
        {
        }
    }
}
"""

ONE_MEMBER = """using System;

namespace TestNamespace
{
    partial class TestClass
    {
        private bool _isDisposed = false;

        public void Dispose()
        {
            Dispose(true);
            GC.SuppressFinalize(this);
        }

        private void Dispose(bool isDisposing)
        {
            if (_isDisposed)
            {
                return;
            }

            if (isDisposing)
            {
                Member1.Dispose();
            }

            _isDisposed = true;
        }
    }
}
"""

THREE_MEMBERS = """using System;

namespace TestNamespace
{
    partial class TestClass
    {
        private bool _isDisposed = false;

        public void Dispose()
        {
            Dispose(true);
            GC.SuppressFinalize(this);
        }

        private void Dispose(bool isDisposing)
        {
            if (_isDisposed)
            {
                return;
            }

            if (isDisposing)
            {
                Member1.Dispose();
                Member2.Dispose();
                Member3.Dispose();
            }

            _isDisposed = true;
        }
    }
}
"""

MANAGED_ONLY = """using System;

namespace TestNamespace
{
    partial class TestClass
    {
        private bool _isDisposed = false;

        public void Dispose()
        {
            Dispose(true);
            GC.SuppressFinalize(this);
        }

        private void Dispose(bool isDisposing)
        {
            if (_isDisposed)
            {
                return;
            }

            if (isDisposing)
            {
                DisposeManaged();
            }

            _isDisposed = true;
        }
    }
}
"""

UNMANAGED_ONLY = """using System;

namespace TestNamespace
{
    partial class TestClass
    {
        private bool _isDisposed = false;

        public void Dispose()
        {
            Dispose(true);
            GC.SuppressFinalize(this);
        }

        private void Dispose(bool isDisposing)
        {
            if (_isDisposed)
            {
                return;
            }

            if (isDisposing)
            {
            }

            DisposeUnmanaged();

            _isDisposed = true;
        }

        ~TestClass() => Dispose(false);
    }
}
"""

BOTH_HOOKS = """using System;

namespace TestNamespace
{
    partial class TestClass
    {
        private bool _isDisposed = false;

        public void Dispose()
        {
            Dispose(true);
            GC.SuppressFinalize(this);
        }

        private void Dispose(bool isDisposing)
        {
            if (_isDisposed)
            {
                return;
            }

            if (isDisposing)
            {
                DisposeManaged();
            }

            DisposeUnmanaged();

            _isDisposed = true;
        }

        ~TestClass() => Dispose(false);
    }
}
"""

MEMBERS_AND_UNMANAGED = """using System;

namespace TestNamespace
{
    partial class TestClass
    {
        private bool _isDisposed = false;

        public void Dispose()
        {
            Dispose(true);
            GC.SuppressFinalize(this);
        }

        private void Dispose(bool isDisposing)
        {
            if (_isDisposed)
            {
                return;
            }

            if (isDisposing)
            {
                Disposable1.Dispose();
                Disposable2.Dispose();
            }

            DisposeUnmanaged();

            _isDisposed = true;
        }

        ~TestClass() => Dispose(false);
    }
}
"""


def _item(**kwargs) -> WorkItem:
    return WorkItem(namespace_name="TestNamespace", class_name="TestClass", **kwargs)


def test_no_work_emits_dispose_stub():
    assert render(_item()) == NO_WORK


@pytest.mark.parametrize("accessibility", ["public", "internal", "protected", "private", ""])
def test_class_accessibility_prefixes_class_line(accessibility):
    space = " " if accessibility else ""
    expected = NO_WORK.replace(
        "    partial class TestClass",
        f"    {accessibility}{space}partial class TestClass",
    )
    assert render(_item(declared_accessibility=accessibility)) == expected


def test_compound_accessibility_is_written_verbatim():
    text = render(_item(declared_accessibility=Accessibility.PROTECTED_INTERNAL))
    assert "    protected internal partial class TestClass\n" in text


def test_one_disposable_member():
    assert render(_item(disposable_member_names=["Member1"])) == ONE_MEMBER


def test_multiple_disposable_members_keep_order():
    assert render(_item(disposable_member_names=["Member1", "Member2", "Member3"])) == THREE_MEMBERS


def test_duplicate_member_names_are_emitted_per_occurrence():
    text = render(_item(disposable_member_names=["Member1", "Member1"]))
    assert text.count("                Member1.Dispose();\n") == 2


def test_dispose_managed_is_called():
    assert render(_item(implement_managed=True)) == MANAGED_ONLY


def test_dispose_managed_suppresses_member_disposal():
    item = _item(
        disposable_member_names=["Member1", "Member2", "Member3"],
        implement_managed=True,
    )
    text = render(item)
    assert text == MANAGED_ONLY
    assert "Member1" not in text


def test_dispose_unmanaged_is_called_and_finalizer_emitted():
    assert render(_item(implement_unmanaged=True)) == UNMANAGED_ONLY


def test_both_hooks():
    assert render(_item(implement_managed=True, implement_unmanaged=True)) == BOTH_HOOKS


def test_members_with_unmanaged():
    item = _item(implement_unmanaged=True, disposable_member_names=["Disposable1", "Disposable2"])
    assert render(item) == MEMBERS_AND_UNMANAGED


def test_no_finalizer_without_unmanaged_hook():
    text = render(_item(implement_managed=True, disposable_member_names=["A"]))
    assert "~TestClass" not in text


def test_render_is_deterministic():
    item = _item(implement_unmanaged=True, disposable_member_names=["A", "B"])
    assert render(item) == render(item)
    assert render(item) == render(WorkItem(**item.model_dump()))


def test_lines_use_four_space_indentation_and_newlines():
    text = render(_item(implement_managed=True, implement_unmanaged=True))
    assert text.endswith("}\n")
    assert "\r" not in text
    assert "\t" not in text
    for line in text.splitlines():
        indent = len(line) - len(line.lstrip(" "))
        assert indent % 4 == 0


def test_artifact_key():
    assert artifact_key(_item()) == "TestNamespace.TestClass.Dispose.g.cs"
    assert artifact_key(_item(), suffix=".cs") == "TestNamespace.TestClass.Dispose.cs"


def test_dispose_writer():
    writer = DisposeWriter(_item(implement_managed=True))
    assert writer.emit() == MANAGED_ONLY
    assert writer.suggest_file_name() == "TestNamespace.TestClass.Dispose.g.cs"


@pytest.mark.parametrize(
    "item",
    [
        _item(),
        _item(disposable_member_names=["Member1"]),
        _item(implement_managed=True, implement_unmanaged=True),
        _item(declared_accessibility="public", implement_unmanaged=True, disposable_member_names=["A"]),
    ],
)
def test_generated_source_parses_cleanly(item):
    tree = parse_bytes(render(item).encode("utf-8"), parser=create_parser())
    assert not tree.root_node.has_error


# -- executing the generated Dispose(bool) ---------------------------------


def _text(node) -> str:
    return node.text.decode("utf-8").strip()


def _find_private_dispose(root):
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "method_declaration":
            name = node.child_by_field_name("name")
            params = node.child_by_field_name("parameters")
            if _text(name) == "Dispose" and params is not None and params.named_child_count == 1:
                return node
        stack.extend(node.children)
    return None


def _execute(block, env: dict, calls: list) -> bool:
    """Interpret the statements the template emits; return True on `return`."""
    for stmt in block.named_children:
        if stmt.type == "return_statement":
            return True
        if stmt.type == "if_statement":
            condition = _text(stmt.child_by_field_name("condition"))
            if env[condition] and _execute(stmt.child_by_field_name("consequence"), env, calls):
                return True
        elif stmt.type == "expression_statement":
            code = _text(stmt).rstrip(";")
            if "=" in code:
                name, value = code.split("=", 1)
                env[name.strip()] = value.strip() == "true"
            else:
                calls.append(code)
    return False


def _dispose_calls(item: WorkItem, disposing: bool, times: int) -> list:
    tree = parse_bytes(render(item).encode("utf-8"), parser=create_parser())
    method = _find_private_dispose(tree.root_node)
    assert method is not None
    body = method.child_by_field_name("body")
    env = {"_isDisposed": False, "isDisposing": disposing}
    calls: list = []
    for _ in range(times):
        _execute(body, env, calls)
    return calls


def test_private_dispose_runs_cleanup_once():
    item = _item(implement_unmanaged=True, disposable_member_names=["Member1", "Member2"])
    calls = _dispose_calls(item, disposing=True, times=2)
    assert calls == ["Member1.Dispose()", "Member2.Dispose()", "DisposeUnmanaged()"]


def test_finalizer_path_skips_managed_cleanup():
    item = _item(implement_managed=True, implement_unmanaged=True)
    calls = _dispose_calls(item, disposing=False, times=2)
    assert calls == ["DisposeUnmanaged()"]
