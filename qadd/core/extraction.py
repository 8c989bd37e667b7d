"""Structural extraction of functions, methods and closures from source code."""

from __future__ import annotations

import logging
import os
from typing import Callable, Dict, Iterator, List, Optional

import tree_sitter_language_pack

from .models import (
    ANONYMOUS_CLASS,
    ANONYMOUS_FUNCTION,
    FunctionKind,
    FunctionRecord,
    Span,
)

logger = logging.getLogger(__name__)

# Supported languages for structural extraction
EXT_TO_LANG = {
    ".js": "javascript",
    ".jsx": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".ts": "typescript",
    ".mts": "typescript",
    ".cts": "typescript",
    ".tsx": "tsx",
}

DEFAULT_LANGUAGE = "javascript"

CLASS_CONTEXT_MODES = ("document", "lexical")

CLASS_NODE_TYPES = {"class_declaration", "abstract_class_declaration", "class"}

# Anonymous `export default function () {}` parses as an expression
_FUNCTION_EXPRESSION_TYPES = {
    "function_expression",
    "function",
    "generator_function",
}


class SourceParseError(ValueError):
    """Raised when a source file does not parse cleanly."""


def get_language_for_file(filename: str) -> str:
    """Get language name from file extension, defaulting to JavaScript."""
    _, ext = os.path.splitext(filename)
    return EXT_TO_LANG.get(ext.lower(), DEFAULT_LANGUAGE)


# -----------------------------------------------------------------------------
# Traversal helpers
# -----------------------------------------------------------------------------

def _walk(root) -> Iterator:
    """Yield nodes in pre-order (document order)."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


class _Source:
    """Source bytes plus conversions from tree-sitter byte positions."""

    def __init__(self, text: str):
        self.data = text.encode("utf-8")
        self.lines = self.data.split(b"\n")

    def text(self, node) -> str:
        return self.data[node.start_byte:node.end_byte].decode("utf-8")

    def column(self, point) -> int:
        row, byte_col = point[0], point[1]
        return len(self.lines[row][:byte_col].decode("utf-8", errors="replace"))

    def span(self, node) -> Span:
        return Span(
            start_line=node.start_point[0] + 1,
            start_col=self.column(node.start_point),
            end_line=node.end_point[0] + 1,
            end_col=self.column(node.end_point),
        )


def _first_error(root):
    for node in _walk(root):
        if node.type == "ERROR" or node.is_missing:
            return node
    return root


class ClassContext:
    """Class name attributed to the functions being collected.

    In ``document`` mode a single value is overwritten by every class seen
    in the first pass, so all functions share whichever class came last in
    the file. ``lexical`` mode looks up the nearest enclosing class node.
    """

    def __init__(self, source: _Source, mode: str = "document"):
        if mode not in CLASS_CONTEXT_MODES:
            raise ValueError(f"Unknown class context mode: {mode!r}")
        self.source = source
        self.mode = mode
        self.current: Optional[str] = None

    def class_name(self, node) -> str:
        name = node.child_by_field_name("name")
        return self.source.text(name) if name is not None else ANONYMOUS_CLASS

    def record(self, node) -> None:
        self.current = self.class_name(node)

    def resolve(self, node) -> Optional[str]:
        if self.mode == "document":
            return self.current
        parent = node.parent
        while parent is not None:
            if parent.is_named and parent.type in CLASS_NODE_TYPES:
                return self.class_name(parent)
            parent = parent.parent
        return None


# -----------------------------------------------------------------------------
# Collectors
# -----------------------------------------------------------------------------

Handler = Callable[[object, ClassContext, List[FunctionRecord]], None]


def _record(node, kind: FunctionKind, name: str, context: ClassContext,
            is_static: bool = False) -> FunctionRecord:
    return FunctionRecord(
        name=name,
        kind=kind,
        enclosing_class=context.resolve(node),
        span=context.source.span(node),
        code=context.source.text(node),
        is_static=is_static,
    )


def _name_or_placeholder(node, context: ClassContext) -> str:
    name = node.child_by_field_name("name")
    return context.source.text(name) if name is not None else ANONYMOUS_FUNCTION


def _collect_function(node, context: ClassContext, out: List[FunctionRecord]) -> None:
    out.append(_record(node, FunctionKind.FUNCTION, _name_or_placeholder(node, context), context))


def _collect_default_export(node, context: ClassContext, out: List[FunctionRecord]) -> None:
    if node.parent is None or node.parent.type != "export_statement":
        return
    out.append(_record(node, FunctionKind.FUNCTION, _name_or_placeholder(node, context), context))


def _collect_method(node, context: ClassContext, out: List[FunctionRecord]) -> None:
    # object literal methods share the node type
    if node.parent is None or node.parent.type != "class_body":
        return
    is_static = any(child.type in ("static", "static get") for child in node.children)
    out.append(
        _record(node, FunctionKind.METHOD, _name_or_placeholder(node, context), context,
                is_static=is_static)
    )


def _collect_arrow(node, context: ClassContext, out: List[FunctionRecord]) -> None:
    parent = node.parent
    if parent is None or parent.type != "variable_declarator":
        return
    target = parent.child_by_field_name("name")
    if target is not None and target.type == "identifier":
        name = context.source.text(target)
    else:
        name = ANONYMOUS_FUNCTION
    out.append(_record(node, FunctionKind.ARROW_FUNCTION, name, context))


HANDLERS: Dict[str, Handler] = {
    "function_declaration": _collect_function,
    "generator_function_declaration": _collect_function,
    "method_definition": _collect_method,
    "arrow_function": _collect_arrow,
    **{t: _collect_default_export for t in _FUNCTION_EXPRESSION_TYPES},
}


# -----------------------------------------------------------------------------
# Public API
# -----------------------------------------------------------------------------

def parse_source(source: str, language: str = DEFAULT_LANGUAGE):
    """Parse source text and return the tree's root node.

    Raises:
        SourceParseError: If the tree contains syntax errors
    """
    parser = tree_sitter_language_pack.get_parser(language)
    tree = parser.parse(source.encode("utf-8"))
    root = tree.root_node
    if root.has_error:
        bad = _first_error(root)
        raise SourceParseError(
            f"Failed to parse {language} source near line {bad.start_point[0] + 1}, "
            f"column {bad.start_point[1]}"
        )
    return root


def extract_functions(source: str, language: str = DEFAULT_LANGUAGE,
                      class_context: str = "document") -> List[FunctionRecord]:
    """Enumerate function declarations, class methods and arrow closures.

    Two passes over the syntax tree: the first records class names into the
    class context, the second collects function-like nodes in document
    order through HANDLERS.

    Args:
        source: Program source text
        language: tree-sitter language name
        class_context: "document" (last class seen wins) or "lexical"

    Returns:
        Records in the order they appear in the source
    """
    root = parse_source(source, language)
    context = ClassContext(_Source(source), mode=class_context)

    # keyword tokens such as `class` and `function` share their node types
    for node in _walk(root):
        if node.is_named and node.type in CLASS_NODE_TYPES:
            context.record(node)

    functions: List[FunctionRecord] = []
    for node in _walk(root):
        handler = HANDLERS.get(node.type) if node.is_named else None
        if handler is not None:
            handler(node, context, functions)

    logger.debug(f"Extracted {len(functions)} functions from {language} source")
    return functions


class FunctionExtractor:
    """Extractor bound to a language and class-context mode."""

    def __init__(self, language: Optional[str] = None, class_context: str = "document"):
        if class_context not in CLASS_CONTEXT_MODES:
            raise ValueError(f"Unknown class context mode: {class_context!r}")
        self.language = language
        self.class_context = class_context

    def extract(self, source: str, file_path: Optional[str] = None) -> List[FunctionRecord]:
        language = self.language or (get_language_for_file(file_path) if file_path else DEFAULT_LANGUAGE)
        return extract_functions(source, language=language, class_context=self.class_context)
