from dataclasses import dataclass, field
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class FormatterConfig(BaseModel):
    """Validated options for a single formatting call."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    indent_size: int = Field(2, ge=0, le=16)
    use_tabs: bool = False
    print_width: int = Field(100, ge=1)
    quote_style: Literal["double", "single"] = "double"
    parser: Optional[Literal["capl", "c"]] = None
    filepath: Optional[str] = None
    cursor_offset: Optional[int] = Field(None, ge=0)
    range_start: int = Field(0, ge=0)
    range_end: Optional[int] = Field(None, ge=0)

    @model_validator(mode="after")
    def _check_range(self) -> "FormatterConfig":
        if self.range_end is not None and self.range_end < self.range_start:
            raise ValueError("range_end must not be smaller than range_start")
        return self

    @property
    def indent_unit(self) -> str:
        return "\t" if self.use_tabs else " " * self.indent_size


@dataclass
class FormatResult:
    formatted: str
    cursor_offset: int = -1


@dataclass
class DocLine:
    """One line of the intermediate layout: nesting level plus content."""

    level: Optional[int]
    content: str


@dataclass
class Doc:
    lines: List[DocLine] = field(default_factory=list)
