from dataclasses import dataclass
from typing import List, Optional

from .base import FormattingContext, TextRule, Transformation

CODE, LINE_COMMENT, BLOCK_COMMENT, STRING, CHAR = range(5)


@dataclass
class LineInfo:
    start: int
    indent_end: int
    content: str
    level: Optional[int]  # None: continuation of a comment or string, left alone


def scan_lines(source: str) -> List[LineInfo]:
    """Split source into lines and compute the brace nesting level of each.

    Braces inside comments, string and char literals and preprocessor
    directives do not count.
    """
    infos = []
    depth = 0
    state = CODE
    pos = 0
    length = len(source)

    while pos <= length:
        line_end = source.find("\n", pos)
        if line_end == -1:
            line_end = length
        line = source[pos:line_end]
        stripped = line.lstrip(" \t")
        indent_end = pos + len(line) - len(stripped)

        if state in (BLOCK_COMMENT, STRING):
            level = None
        elif stripped.startswith("#"):
            level = 0
        else:
            level = max(depth - 1, 0) if stripped.startswith("}") else depth
        infos.append(LineInfo(pos, indent_end, stripped.rstrip(" \t"), level))

        directive = state == CODE and stripped.startswith("#")
        i = pos
        while i < line_end:
            ch = source[i]
            nxt = source[i + 1] if i + 1 < line_end else ""
            if state == CODE:
                if ch == "/" and nxt == "/":
                    state = LINE_COMMENT
                    i += 1
                elif ch == "/" and nxt == "*":
                    state = BLOCK_COMMENT
                    i += 1
                elif ch == '"':
                    state = STRING
                elif ch == "'":
                    state = CHAR
                elif not directive and ch == "{":
                    depth += 1
                elif not directive and ch == "}":
                    depth = max(depth - 1, 0)
            elif state == BLOCK_COMMENT:
                if ch == "*" and nxt == "/":
                    state = CODE
                    i += 1
            elif state in (STRING, CHAR):
                if ch == "\\":
                    i += 1
                elif (ch == '"' and state == STRING) or (ch == "'" and state == CHAR):
                    state = CODE
            i += 1

        if state in (LINE_COMMENT, CHAR):
            state = CODE
        elif state == STRING and not line.endswith("\\"):
            state = CODE
        pos = line_end + 1

    return infos


class IndentationRule(TextRule):
    """Re-indents every line to its brace nesting level."""

    @property
    def rule_id(self) -> str:
        return "F002"

    @property
    def name(self) -> str:
        return "indentation"

    def analyze(self, context: FormattingContext) -> List[Transformation]:
        unit = context.config.indent_unit
        transformations = []
        for info in scan_lines(context.source):
            if info.level is None or not info.content:
                continue
            target = unit * info.level
            if context.source[info.start:info.indent_end] != target:
                transformations.append(Transformation(info.start, info.indent_end, target))
        return transformations
