# C# parsing: tree-sitter-c-sharp setup, byte-order-mark handling, syntax error positions.

import logging
from pathlib import Path
from typing import Iterator, Optional

import tree_sitter
from tree_sitter import Language
from tree_sitter_c_sharp import language as _c_sharp_language_capsule

logger = logging.getLogger(__name__)

_C_SHARP_LANGUAGE = Language(_c_sharp_language_capsule())

# Visual Studio saves .cs files as UTF-8 with a BOM by default.
UTF8_BOM = b"\xef\xbb\xbf"

# How many error positions a parse warning lists before eliding the rest.
MAX_REPORTED_ERRORS = 3


def get_c_sharp_language() -> Language:
    """Return the Tree-sitter Language object for C#."""
    return _C_SHARP_LANGUAGE


def create_parser() -> tree_sitter.Parser:
    return tree_sitter.Parser(_C_SHARP_LANGUAGE)


def strip_bom(source: bytes) -> bytes:
    """Drop a leading UTF-8 byte order mark so node offsets index the code itself."""
    if source.startswith(UTF8_BOM):
        return source[len(UTF8_BOM):]
    return source


def iter_syntax_errors(root: tree_sitter.Node) -> Iterator[tree_sitter.Node]:
    """
    Yield ERROR and MISSING nodes in source order.

    Subtrees without errors are not descended into, so a clean tree costs a
    single has_error check.
    """
    stack = [root]
    while stack:
        node = stack.pop()
        if node.is_error or node.is_missing:
            yield node
            continue
        if not node.has_error:
            continue
        stack.extend(reversed(node.children))


def describe_syntax_errors(root: tree_sitter.Node, limit: int = MAX_REPORTED_ERRORS) -> str:
    """Render error positions as "line:col" pairs (1-based), e.g. "3:17, 9:1 (+2 more)"."""
    positions = []
    total = 0
    for node in iter_syntax_errors(root):
        total += 1
        if len(positions) < limit:
            row, col = node.start_point
            label = f"missing {node.type}" if node.is_missing else "error"
            positions.append(f"{row + 1}:{col + 1} {label}")
    text = ", ".join(positions)
    if total > limit:
        text += f" (+{total - limit} more)"
    return text


def parse_bytes(
    source: bytes,
    parser: Optional[tree_sitter.Parser] = None,
) -> tree_sitter.Tree:
    """
    Parse C# source bytes into an AST.

    The source is parsed as given; callers that keep the bytes for span
    lookups should pass them through strip_bom() first.

    Args:
        source: UTF-8 encoded C# source code.
        parser: Optional parser instance; if None, a new one is created.

    Returns:
        The parse tree. A class whose declaration sits inside an ERROR node
        is invisible to the generator, so the warning names where parsing broke.
    """
    if parser is None:
        parser = create_parser()
    tree = parser.parse(source)
    if tree.root_node.has_error:
        logger.warning(
            "Parse completed with errors at %s",
            describe_syntax_errors(tree.root_node),
        )
    else:
        logger.debug("Parse succeeded: root=%s", tree.root_node.type)
    return tree


def parse_file(path: Path, parser: Optional[tree_sitter.Parser] = None) -> Optional[tree_sitter.Tree]:
    """
    Parse a .cs file into an AST, ignoring a leading byte order mark.

    Returns None if the file could not be read.
    """
    try:
        source = strip_bom(path.read_bytes())
    except OSError as e:
        logger.error("Failed to read file %s: %s", path, e)
        return None
    tree = parse_bytes(source, parser=parser)
    logger.info("Parsed file %s: success=%s", path, not tree.root_node.has_error)
    return tree
