import re
from typing import List

from .base import FormattingContext, TextRule, Transformation


class WhitespaceCleanupRule(TextRule):
    """Trailing whitespace, blank line runs and the final newline."""

    @property
    def rule_id(self) -> str:
        return "F001"

    @property
    def name(self) -> str:
        return "whitespace-cleanup"

    def analyze(self, context: FormattingContext) -> List[Transformation]:
        source = context.source
        transformations = []

        # 1. Trailing whitespace
        for m in re.finditer(r"[ \t]+$", source, re.MULTILINE):
            transformations.append(Transformation(m.start(), m.end(), ""))

        # 2. Blank lines at the start of the file
        m = re.match(r"\n+", source)
        if m:
            transformations.append(Transformation(m.start(), m.end(), ""))

        # 3. At most one blank line between items
        for m in re.finditer(r"\n{3,}", source):
            transformations.append(Transformation(m.start(), m.end(), "\n\n", priority=1))

        # 4. Exactly one newline at EOF
        m = re.search(r"\n{2,}\Z", source)
        if m:
            transformations.append(Transformation(m.start(), m.end(), "\n"))
        elif source and not source.endswith("\n"):
            transformations.append(Transformation(len(source), len(source), "\n"))

        return transformations
