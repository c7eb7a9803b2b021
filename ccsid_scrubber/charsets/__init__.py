"""
Character set resolution, EBCDIC detection and line terminators.
"""

from .ccsid import CCSID_CODECS, encoding_to_ccsid, known_ccsids, resolve
from .ebcdic import EbcdicClassifier
from .terminators import terminator_bytes

__all__ = [
    "CCSID_CODECS",
    "resolve",
    "encoding_to_ccsid",
    "known_ccsids",
    "EbcdicClassifier",
    "terminator_bytes",
]
