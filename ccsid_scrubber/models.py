"""
Value types shared by the converter, the CLI and the tests.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ReplacementOpt(str, Enum):
    """What to do with characters the destination encoding cannot hold"""

    DELETE = "delete"
    REPLACE = "replace"


class MalformedInput(str, Enum):
    """How to treat byte sequences that are invalid in the source encoding"""

    STRICT = "strict"  # abort the conversion
    SCRUB = "scrub"  # same policy as unconvertible output characters
    MARK = "mark"  # U+FFFD, then subject to the output policy


class LineTerminator(Enum):
    """Output line terminator: its text and its raw EBCDIC bytes"""

    CR = ("\r", b"\x0d")
    LF = ("\n", b"\x25")
    CRLF = ("\r\n", b"\x0d\x25")

    def __init__(self, text: str, ebcdic_bytes: bytes):
        self.text = text
        self.ebcdic_bytes = ebcdic_bytes

    @classmethod
    def parse(cls, value: str) -> "LineTerminator":
        return cls[value.strip().upper()]


class ConversionJob(BaseModel):
    """Everything needed to convert one file; immutable once built"""

    model_config = ConfigDict(frozen=True)

    input_path: str
    output_path: str
    input_encoding: str = "utf-8"
    output_encoding: str = "utf-8"
    opt: ReplacementOpt = ReplacementOpt.DELETE
    replacement: str = "?"
    line_end: LineTerminator = LineTerminator.LF
    smart_quotes: bool = False
    malformed: MalformedInput = MalformedInput.STRICT


class ConversionResult(BaseModel):
    success: bool
    input_path: str
    output_path: str
    reason: Optional[str] = Field(default=None)
    error_type: Optional[str] = Field(default=None)
    lines_written: int = 0
    bytes_written: int = 0
    tagged: bool = False
