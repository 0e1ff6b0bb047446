from typing import Any, List, Mapping, Tuple, Union

from . import debug
from .models import Doc, FormatResult, FormatterConfig
from .parser import CAPLParser, ParseResult, infer_parser
from .rules.base import FormattingContext, FormattingRule, Transformation
from .rules.indentation import IndentationRule
from .rules.whitespace import WhitespaceCleanupRule

Options = Union[FormatterConfig, Mapping[str, Any], None]


class FormatterEngine:
    """Core engine for formatting CAPL and C sources with text transformations."""

    MAX_PASSES = 5

    def __init__(self):
        self.rules: List[FormattingRule] = [WhitespaceCleanupRule(), IndentationRule()]
        self.parser = CAPLParser()

    def add_rule(self, rule: FormattingRule) -> None:
        """Register a new formatting rule."""
        self.rules.append(rule)

    @staticmethod
    def resolve_config(options: Options) -> FormatterConfig:
        """Validate raw options. Raises pydantic.ValidationError."""
        if isinstance(options, FormatterConfig):
            return options
        return FormatterConfig.model_validate(dict(options or {}))

    def parse(self, source: str, config: FormatterConfig) -> ParseResult:
        parser_name = config.parser or infer_parser(config.filepath)
        return self.parser.parse_string(source, strict=parser_name == "c")

    def format_with_cursor(self, source: str, options: Options = None) -> FormatResult:
        """Format source and carry the cursor offset through every edit."""
        config = self.resolve_config(options)
        self.parse(source, config)

        cursor = config.cursor_offset
        if cursor is not None:
            cursor = _lf_offset(source, min(cursor, len(source)))
        range_start = _lf_offset(source, min(config.range_start, len(source)))
        range_end = None
        if config.range_end is not None:
            range_end = _lf_offset(source, min(config.range_end, len(source)))
        current = source.replace("\r\n", "\n")

        for _ in range(self.MAX_PASSES):
            pass_modified = False
            for rule in self.rules:
                context = FormattingContext(source=current, config=config, file_path=config.filepath or "")
                end = len(current) if range_end is None else range_end
                transforms = [t for t in rule.analyze(context) if range_start <= t.start and t.end <= end]
                if not transforms:
                    continue
                new_source, applied = self._apply_transformations(current, transforms)
                if new_source == current:
                    continue
                if cursor is not None:
                    cursor = _map_offset(cursor, applied)
                range_start = _map_offset(range_start, applied)
                if range_end is not None:
                    range_end = _map_offset(range_end, applied)
                current = new_source
                pass_modified = True
            if not pass_modified:
                break

        return FormatResult(formatted=current, cursor_offset=-1 if cursor is None else cursor)

    def format(self, source: str, options: Options = None) -> str:
        return self.format_with_cursor(source, options).formatted

    def check(self, source: str, options: Options = None) -> bool:
        """True when source is already formatted."""
        return self.format(source, options) == source

    def parse_debug(self, source: str, options: Options = None) -> str:
        """Parse source into a normalized, layout independent tree dump."""
        config = self.resolve_config(options)
        result = self.parse(source, config)
        return debug.clean_tree(result.tree.root_node)

    def print_to_doc(self, source: str, options: Options = None) -> Doc:
        config = self.resolve_config(options)
        return debug.build_doc(self.format(source, config))

    @staticmethod
    def render_doc(doc: Doc) -> str:
        return debug.render_doc(doc)

    def _apply_transformations(
        self, source: str, transforms: List[Transformation]
    ) -> Tuple[str, List[Transformation]]:
        """Applies non-overlapping character-based transformations in a single pass."""
        sorted_transforms = sorted(transforms, key=lambda t: (t.start, t.end, t.priority))
        result = []
        applied = []
        last_offset = 0
        for t in sorted_transforms:
            if t.start < last_offset:
                continue
            result.append(source[last_offset:t.start])
            result.append(t.new_content)
            applied.append(t)
            last_offset = t.end
        result.append(source[last_offset:])
        return "".join(result), applied


def _lf_offset(source: str, offset: int) -> int:
    """Translate an offset in CRLF text to the same spot after newline normalization."""
    return offset - source.count("\r\n", 0, offset)


def _map_offset(offset: int, applied: List[Transformation]) -> int:
    shift = 0
    for t in applied:
        if t.end <= offset:
            shift += len(t.new_content) - (t.end - t.start)
        elif t.start < offset:
            return t.start + shift + min(offset - t.start, len(t.new_content))
        else:
            break
    return offset + shift
