from .engine import FormatterEngine
from .errors import CAPLSyntaxError
from .models import Doc, DocLine, FormatResult, FormatterConfig
from .parser import CAPLParser, infer_parser

__all__ = [
    "FormatterEngine",
    "CAPLSyntaxError",
    "Doc",
    "DocLine",
    "FormatResult",
    "FormatterConfig",
    "CAPLParser",
    "infer_parser",
]
