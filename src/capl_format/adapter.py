import difflib
from typing import Any, Dict

from capl_formatter import FormatResult, FormatterEngine

from .errors import FormatFailure, UnexpectedFailure, classify

MAX_AST_SIZE = 2 * 1024 * 1024
DIFF_TOO_LARGE = "AST diff too large to render"


def unified_diff(a: str, b: str) -> str:
    return "".join(difflib.unified_diff(a.splitlines(True), b.splitlines(True), n=2))


class ContentFormatter:
    """Runs the engine in plain, doc dump or self-check mode.

    Engine exceptions leave this class as FormatFailure subclasses.
    """

    def __init__(self, engine: FormatterEngine | None = None, debug_check: bool = False, debug_print_doc: bool = False):
        self.engine = engine or FormatterEngine()
        self.debug_check = debug_check
        self.debug_print_doc = debug_print_doc

    def format(self, source: str, options: Dict[str, Any]) -> FormatResult:
        try:
            if self.debug_print_doc:
                doc = self.engine.print_to_doc(source, options)
                return FormatResult(formatted=self.engine.render_doc(doc))
            if self.debug_check:
                return self._self_check(source, options)
            return self.engine.format_with_cursor(source, options)
        except FormatFailure:
            raise
        except Exception as e:
            raise classify(e, options.get("filepath") or "") from e

    def check(self, source: str, options: Dict[str, Any]) -> bool:
        try:
            return self.engine.check(source, options)
        except FormatFailure:
            raise
        except Exception as e:
            raise classify(e, options.get("filepath") or "") from e

    def _self_check(self, source: str, options: Dict[str, Any]) -> FormatResult:
        pp = self.engine.format(source, options)
        pppp = self.engine.format(pp, options)
        if pp != pppp:
            raise UnexpectedFailure("format(input) != format(format(input))\n" + unified_diff(pp, pppp))

        ast = self.engine.parse_debug(source, options)
        past = self.engine.parse_debug(pp, options)
        if ast != past:
            if len(ast) > MAX_AST_SIZE or len(past) > MAX_AST_SIZE:
                ast_diff = DIFF_TOO_LARGE
            else:
                ast_diff = unified_diff(ast, past)
            raise UnexpectedFailure(
                "ast(input) != ast(format(input))\n" + ast_diff + "\n" + unified_diff(source, pp)
            )

        return FormatResult(formatted=options.get("filepath") or "(stdin)\n")
