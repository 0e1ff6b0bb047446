"""Debug representations used by the self-check and doc dump modes."""

import json
from typing import List

from tree_sitter import Node

from .models import Doc, DocLine
from .rules.indentation import scan_lines

COMMENT_TYPES = ("comment", "line_comment", "block_comment")


def clean_tree(node: Node) -> str:
    """Dump a parse tree without comments or whitespace.

    Two sources that differ only in layout produce the same dump.
    """
    lines: List[str] = []

    def visit(n: Node, depth: int):
        if n.type in COMMENT_TYPES:
            return
        indent = "  " * depth
        if n.child_count == 0:
            text = n.text.decode("utf8", errors="replace") if n.text else ""
            lines.append(f"{indent}{n.type} {json.dumps(text)}" if n.is_named else f"{indent}{json.dumps(text)}")
            return
        lines.append(f"{indent}{n.type}")
        for child in n.children:
            visit(child, depth + 1)

    visit(node, 0)
    return "\n".join(lines) + "\n"


def build_doc(source: str) -> Doc:
    doc = Doc()
    for info in scan_lines(source):
        if info.start >= len(source) and not info.content:
            continue
        content = info.content
        if info.level is None:
            end = source.find("\n", info.start)
            content = source[info.start:end if end != -1 else len(source)].rstrip()
        doc.lines.append(DocLine(level=info.level, content=content))
    return doc


def render_doc(doc: Doc) -> str:
    parts = []
    for line in doc.lines:
        if line.level is None:
            parts.append(f"verbatim({json.dumps(line.content)})")
        elif not line.content:
            parts.append("hardline")
        elif line.level == 0:
            parts.append(json.dumps(line.content))
        else:
            parts.append(f"indent({line.level}, {json.dumps(line.content)})")
    if not parts:
        return "[]\n"
    return "[\n" + "".join(f"  {part},\n" for part in parts) + "]\n"
