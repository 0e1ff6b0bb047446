from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List

from ..models import FormatterConfig


@dataclass
class Transformation:
    """Replace source[start:end] with new_content."""

    start: int
    end: int
    new_content: str
    priority: int = 0


@dataclass
class FormattingContext:
    source: str
    config: FormatterConfig
    file_path: str = ""


class FormattingRule(ABC):
    @property
    @abstractmethod
    def rule_id(self) -> str: ...

    @property
    @abstractmethod
    def name(self) -> str: ...

    @abstractmethod
    def analyze(self, context: FormattingContext) -> List[Transformation]:
        """Return the edits this rule wants to make to the current source."""
        pass


class TextRule(FormattingRule):
    """A rule that works on the raw text and needs no parse tree."""
