from dataclasses import dataclass
from pathlib import PurePath
from typing import List, Optional

import tree_sitter_c as tsc
from tree_sitter import Language, Node, Parser, Tree

from .errors import CAPLSyntaxError

C_EXTENSIONS = {".c", ".h"}


@dataclass
class ParseResult:
    """Result of a tree-sitter parse operation"""

    tree: Tree
    source: str
    errors: List[str]


def infer_parser(filepath: Optional[str]) -> str:
    """Pick a parser name from the file extension, defaulting to capl."""
    if filepath and PurePath(filepath).suffix.lower() in C_EXTENSIONS:
        return "c"
    return "capl"


class CAPLParser:
    """Thin wrapper around the tree-sitter C grammar.

    CAPL is parsed with the C grammar. Event handlers and ``variables``
    blocks come back as ERROR nodes, so the ``capl`` parser tolerates them
    while the ``c`` parser treats the first one as a syntax error.
    """

    def __init__(self):
        self.language = Language(tsc.language())
        self.parser = Parser(self.language)

    def parse_string(self, source: str, strict: bool = False) -> ParseResult:
        tree = self.parser.parse(source.encode("utf8"))
        errors = []
        if tree.root_node.has_error:
            bad = self.first_error_node(tree.root_node) or tree.root_node
            line = bad.start_point[0] + 1
            column = bad.start_point[1] + 1
            message = f"Missing {bad.type}" if bad.is_missing else "Unexpected token"
            if strict:
                raise CAPLSyntaxError(message, line, column)
            errors.append(f"{line}:{column}: {message}")
        return ParseResult(tree=tree, source=source, errors=errors)

    @staticmethod
    def first_error_node(node: Node) -> Optional[Node]:
        """Depth-first search for the first ERROR or missing node"""
        if node.type == "ERROR" or node.is_missing:
            return node
        for child in node.children:
            if child.has_error or child.is_missing or child.type == "ERROR":
                found = CAPLParser.first_error_node(child)
                if found is not None:
                    return found
        return None
