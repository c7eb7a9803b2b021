#!/usr/bin/env python3
"""
CCSID Character Scrubber Package
"""

from .charsets import EbcdicClassifier, encoding_to_ccsid, resolve, terminator_bytes
from .config import ConfigurationManager
from .engine import ConversionEngine
from .error_handler import ErrorHandler
from .models import (
    ConversionJob,
    ConversionResult,
    LineTerminator,
    MalformedInput,
    ReplacementOpt,
)
from .tagging import CcsidTagger

__version__ = "0.1.0"
__license__ = "MIT"

# Export main classes
__all__ = [
    "ConversionEngine",
    "ConfigurationManager",
    "ErrorHandler",
    "EbcdicClassifier",
    "CcsidTagger",
    "ConversionJob",
    "ConversionResult",
    "LineTerminator",
    "MalformedInput",
    "ReplacementOpt",
    "resolve",
    "encoding_to_ccsid",
    "terminator_bytes",
]
