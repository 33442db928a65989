# Per-file analysis context: file path, source bytes, AST, and span helpers.
# Reading failures drop the file, syntax errors keep it (flagged) so that the
# well-formed declarations in it can still be analyzed.

import logging
from pathlib import Path
from typing import Any, Iterator, Optional

from tree_sitter import Node as TSNode
from tree_sitter import Parser, Tree

from disposegen.parser import create_parser, parse_bytes, strip_bom

logger = logging.getLogger(__name__)

# Node types that declare a named type in tree-sitter-c-sharp
TYPE_DECLARATION_TYPES = frozenset(
    {
        "class_declaration",
        "struct_declaration",
        "interface_declaration",
        "record_declaration",
        "record_struct_declaration",
        "enum_declaration",
    }
)


def walk(node: TSNode) -> Iterator[TSNode]:
    """Yield node and every descendant in document order (DFS)."""
    yield node
    for child in node.children:
        yield from walk(child)


def count_tree_stats(root: TSNode) -> tuple[int, int]:
    """Return (total node count, type declaration count) for the tree."""
    nodes = 0
    types = 0
    for node in walk(root):
        nodes += 1
        if node.type in TYPE_DECLARATION_TYPES:
            types += 1
    return nodes, types


class FileContext:
    """
    Per-file state: path, raw source bytes, and AST.

    Use get_source_span(context, node) for text and get_line_col(node) for
    locations.
    """

    def __init__(
        self,
        path: Path,
        source: bytes,
        tree: Tree,
        *,
        has_parse_errors: bool = False,
    ) -> None:
        self.path = path
        self.source = source
        self.tree = tree
        self.has_parse_errors = has_parse_errors

    @property
    def root_node(self) -> TSNode:
        """Convenience access to the AST root."""
        return self.tree.root_node

    def __repr__(self) -> str:
        return f"FileContext(path={self.path!r}, has_parse_errors={self.has_parse_errors})"


def get_source_span(context: FileContext, node: TSNode) -> str:
    """
    Return the substring of context.source for the given node's byte range.

    Decodes with errors="replace" so bad UTF-8 does not crash.
    """
    return context.source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")


def get_line_col(node: TSNode, one_based: bool = True) -> tuple[int, int]:
    """
    Return (line, column) for the node's start position.

    Tree-sitter positions are 0-based; one_based=True (default) converts
    them for display.
    """
    row, col = node.start_point
    if one_based:
        return row + 1, col + 1
    return row, col


def context_from_bytes(
    path: Path,
    source: bytes,
    parser: Optional[Parser] = None,
) -> FileContext:
    """
    Parse in-memory C# source into a FileContext labelled with path.

    A leading byte order mark is dropped before parsing and is not part of
    context.source.
    """
    source = strip_bom(source)
    tree = parse_bytes(source, parser=parser)
    has_errors = tree.root_node.has_error
    if has_errors:
        logger.warning("File %s parsed with syntax errors; AST may be incomplete", path)

    node_count, type_count = count_tree_stats(tree.root_node)
    logger.info(
        "Parsed %s: %d nodes, %d type declaration(s)%s",
        path,
        node_count,
        type_count,
        " (with parse errors)" if has_errors else "",
    )
    return FileContext(path=path, source=source, tree=tree, has_parse_errors=has_errors)


def create_context(
    path: Path,
    parser: Optional[Parser] = None,
) -> Optional[FileContext]:
    """
    Read a C# file and parse it into a FileContext.

    Returns None (and logs an error) when the file cannot be read. Files
    with syntax errors still get a context with has_parse_errors=True.
    """
    if parser is None:
        parser = create_parser()

    try:
        source = path.read_bytes()
    except OSError as e:
        logger.error("Failed to read file %s: %s", path, e)
        return None

    return context_from_bytes(path, source, parser=parser)


def load_contexts(
    paths: list[Path],
    parser: Optional[Parser] = None,
) -> list[FileContext]:
    """
    Read and parse multiple C# files. Order matches input order; unreadable
    files are omitted.
    """
    if parser is None:
        parser = create_parser()

    contexts: list[FileContext] = []
    for path in paths:
        ctx = create_context(path, parser=parser)
        if ctx is not None:
            contexts.append(ctx)
    return contexts


def node_text(node: Any) -> str:
    """Return a node's source text with all whitespace removed."""
    raw = node.text
    if raw is None:
        return ""
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8", errors="replace")
    return "".join(raw.split())


def get_base_list(node: Any) -> Optional[Any]:
    """Return the base_list child of a type declaration node, or None."""
    for child in node.children:
        if child.type == "base_list":
            return child
    return None


def get_base_entries(node: Any) -> list[str]:
    """
    Return the text of each entry of a declaration's base list, in order.

    Arguments of a primary constructor base call are not entries.
    """
    base_list = get_base_list(node)
    if base_list is None:
        return []
    return [
        node_text(child)
        for child in base_list.children
        if child.is_named and child.type not in ("comment", "argument_list")
    ]
