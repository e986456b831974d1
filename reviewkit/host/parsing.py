"""Source parsing for the host side.

Python modules are parsed with :mod:`ast`. Other languages go through
tree-sitter, which is optional and degrades gracefully when not installed.

Install with: pip install tree-sitter-language-pack
"""

from __future__ import annotations

import ast
import logging
from pathlib import PurePosixPath

from reviewkit.project import Module

logger = logging.getLogger(__name__)

_TREE_SITTER_AVAILABLE = False
try:
    import tree_sitter_language_pack  # noqa: F401

    _TREE_SITTER_AVAILABLE = True
except ImportError:
    logger.debug("tree-sitter-language-pack not installed; non-Python modules disabled")

# File extension -> tree-sitter grammar name.
TREE_SITTER_GRAMMARS: dict[str, str] = {
    ".go": "go",
    ".rs": "rust",
    ".rb": "ruby",
    ".js": "javascript",
    ".ts": "typescript",
    ".java": "java",
    ".c": "c",
    ".cpp": "cpp",
    ".lua": "lua",
}


class ModuleParseError(ValueError):
    """The host could not turn a module's text into a syntax tree."""

    def __init__(self, path: str, reason: str, line: int | None = None):
        self.path = path
        self.reason = reason
        self.line = line
        where = f"{path}:{line}" if line else path
        super().__init__(f"cannot parse {where}: {reason}")


def is_tree_sitter_available() -> bool:
    """Return True if tree-sitter-language-pack is installed."""
    return _TREE_SITTER_AVAILABLE


def grammar_for(path: str) -> str | None:
    return TREE_SITTER_GRAMMARS.get(PurePosixPath(path).suffix)


def _parse_python(path: str, source: str) -> ast.Module:
    try:
        return ast.parse(source, filename=path)
    except SyntaxError as exc:
        raise ModuleParseError(path, exc.msg or "invalid syntax", exc.lineno) from exc


def _parse_tree_sitter(path: str, source: str, grammar: str):
    from tree_sitter_language_pack import get_parser

    tree = get_parser(grammar).parse(source.encode("utf-8"))
    if tree.root_node.has_error:
        raise ModuleParseError(path, f"{grammar} syntax error")
    return tree


def parse_module(path: str, source: str) -> Module:
    """Parse *source* into a :class:`Module` for the engine.

    Raises:
        ModuleParseError: the text does not parse, or no parser handles the
            file type.
    """
    if path.endswith(".py"):
        return Module(path=path, source=source, syntax=_parse_python(path, source))

    grammar = grammar_for(path)
    if grammar is None:
        raise ModuleParseError(path, "no parser for this file type")
    if not _TREE_SITTER_AVAILABLE:
        raise ModuleParseError(path, "tree-sitter-language-pack is not installed")
    return Module(path=path, source=source, syntax=_parse_tree_sitter(path, source, grammar))


__all__ = [
    "ModuleParseError",
    "TREE_SITTER_GRAMMARS",
    "grammar_for",
    "is_tree_sitter_available",
    "parse_module",
]
