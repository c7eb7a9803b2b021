#!/usr/bin/env python3
"""
Conversion log for the CCSID character scrubber
"""

import traceback
from datetime import datetime
from typing import Optional


class ErrorHandler:
    """Appends conversion outcomes to a log file, if one is configured"""

    def __init__(self, config: Optional[dict] = None):
        config = config or {}
        self.log_file = config.get("error_log")

        if self.log_file:
            self._write(
                f"\n{'='*50}\n"
                f"CCSID Scrubber Log - {datetime.now()}\n"
                f"{'='*50}\n\n"
            )

    def _write(self, text: str):
        if not self.log_file:
            return
        with open(self.log_file, "a", encoding="utf-8") as f:
            f.write(text)

    def log_success(self, input_path: str, output_path: str):
        """Log successful conversion"""
        self._write(f"SUCCESS: {datetime.now()} - {input_path} -> {output_path}\n")

    def log_exception(self, file_path: str, exception: BaseException):
        """Log exceptions with stack trace"""
        trace = "".join(
            traceback.format_exception(type(exception), exception, exception.__traceback__)
        )
        self._write(
            f"EXCEPTION: {datetime.now()} - {file_path}\n"
            f"  {exception}\n"
            f"  {trace}\n"
        )
