from .base import FormattingContext, FormattingRule, TextRule, Transformation
from .indentation import IndentationRule
from .whitespace import WhitespaceCleanupRule

__all__ = [
    "FormattingRule",
    "TextRule",
    "FormattingContext",
    "Transformation",
    "IndentationRule",
    "WhitespaceCleanupRule",
]
