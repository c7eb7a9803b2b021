#!/usr/bin/env python3
"""
CCSID Conversion Engine

Re-encodes a text file line by line from one encoding to another,
normalizing line terminators and dropping or substituting characters the
destination encoding cannot represent.
"""

import codecs
import logging
from typing import Dict, Optional, Tuple

from .charsets import EbcdicClassifier, encoding_to_ccsid, terminator_bytes
from .config import ConfigurationManager
from .error_handler import ErrorHandler
from .exceptions import CodingFailure, IOFailure, ScrubberError, UnknownEncodingError
from .models import ConversionJob, ConversionResult, MalformedInput, ReplacementOpt
from .tagging import CcsidTagger

SMART_QUOTES = str.maketrans(
    {
        "\u2018": "'",
        "\u2019": "'",
        "\u201c": '"',
        "\u201d": '"',
    }
)

_SUBSTITUTE_PREFIX = "ccsid_scrubber.substitute."
_substitute_handlers: Dict[str, str] = {}


def substitute_error_handler(replacement: str) -> str:
    """Register (once) a codec error handler that inserts `replacement`

    Returns the name to pass as `errors=` to encode/decode calls.
    """
    name = _substitute_handlers.get(replacement)
    if name is not None:
        return name

    def handler(exc):
        # Encoders report a run of unmappable characters as one error
        if isinstance(exc, UnicodeEncodeError):
            return replacement * (exc.end - exc.start), exc.end
        if isinstance(exc, UnicodeDecodeError):
            return replacement, exc.end
        raise exc

    name = _SUBSTITUTE_PREFIX + replacement.encode("utf-8").hex()
    codecs.register_error(name, handler)
    _substitute_handlers[replacement] = name
    return name


def replace_smart_quotes(line: str) -> str:
    return line.translate(SMART_QUOTES)


class ConversionEngine:
    """
    Converts files described by a ConversionJob.
    """

    def __init__(
        self,
        config: Optional[dict] = None,
        config_file: Optional[str] = None,
        classifier: Optional[EbcdicClassifier] = None,
        tagger: Optional[CcsidTagger] = None,
    ):
        """Initialize the conversion engine"""
        # defaults -> config_file -> explicit overrides
        self.config = ConfigurationManager()
        if config_file:
            self.config.load_config(config_file)
        if config:
            self.config.update(config)

        self.classifier = classifier or EbcdicClassifier()
        self.tagger = tagger or CcsidTagger(self.config.get("tagging", {}))
        self.error_handler = ErrorHandler(self.config.get("error_handling", {}))
        self.logger = logging.getLogger(__name__)

    def _encode_errors(self, job: ConversionJob) -> str:
        """Error handler name for unconvertible output characters"""
        if job.opt is ReplacementOpt.REPLACE:
            return substitute_error_handler(job.replacement)
        return "ignore"

    def _decode_errors(self, job: ConversionJob) -> str:
        """Error handler name for malformed input bytes"""
        if job.malformed is MalformedInput.SCRUB:
            return self._encode_errors(job)
        if job.malformed is MalformedInput.MARK:
            return "replace"
        return "strict"

    def _check_replacement(self, job: ConversionJob):
        if job.opt is not ReplacementOpt.REPLACE:
            return
        try:
            job.replacement.encode(job.output_encoding)
        except UnicodeEncodeError as e:
            raise CodingFailure(
                f"Replacement '{job.replacement}' cannot be represented in "
                f"'{job.output_encoding}'"
            ) from e

    def _convert_file(self, job: ConversionJob) -> Tuple[int, int]:
        """Write the converted file; returns (lines, bytes) written"""
        for encoding in (job.input_encoding, job.output_encoding):
            try:
                codecs.lookup(encoding)
            except LookupError as e:
                raise UnknownEncodingError(encoding) from e

        encoder = codecs.getincrementalencoder(job.output_encoding)(
            self._encode_errors(job)
        )

        self._check_replacement(job)
        terminator = terminator_bytes(job.line_end, job.output_encoding, self.classifier)

        lines = 0
        written = 0
        try:
            with open(
                job.input_path,
                "r",
                encoding=job.input_encoding,
                errors=self._decode_errors(job),
                newline=None,
            ) as reader, open(job.output_path, "wb") as writer:
                for line in reader:
                    if line.endswith("\n"):
                        line = line[:-1]
                    if job.smart_quotes:
                        line = replace_smart_quotes(line)

                    # final=True returns stateful encoders to their initial
                    # shift state, so each line is encoded independently
                    data = encoder.encode(line, True) + terminator
                    writer.write(data)
                    lines += 1
                    written += len(data)
        except UnicodeDecodeError as e:
            raise CodingFailure(
                f"Malformed input in {job.input_path} for '{job.input_encoding}': {e}"
            ) from e
        except OSError as e:
            raise IOFailure(str(e)) from e

        return lines, written

    def convert(self, job: ConversionJob) -> ConversionResult:
        """Convert one file and tag the result where the platform supports it"""
        self.logger.info(
            f"Converting {job.input_path} ({job.input_encoding}) -> "
            f"{job.output_path} ({job.output_encoding})"
        )

        try:
            lines, written = self._convert_file(job)
        except ScrubberError as e:
            self.logger.debug(f"Conversion of {job.input_path} failed", exc_info=e)
            self.error_handler.log_exception(job.input_path, e)
            return ConversionResult(
                success=False,
                input_path=job.input_path,
                output_path=job.output_path,
                reason=str(e),
                error_type=type(e).__name__,
            )

        self.logger.debug(f"Wrote {lines} lines ({written} bytes) to {job.output_path}")
        tagged = self.tagger.tag(job.output_path, encoding_to_ccsid(job.output_encoding))
        self.error_handler.log_success(job.input_path, job.output_path)

        return ConversionResult(
            success=True,
            input_path=job.input_path,
            output_path=job.output_path,
            lines_written=lines,
            bytes_written=written,
            tagged=tagged,
        )
