#!/usr/bin/env python3
"""
Line terminator bytes for a destination encoding
"""

import codecs
from typing import Optional

from ..exceptions import CodingFailure
from ..models import LineTerminator
from .ebcdic import EbcdicClassifier


def terminator_bytes(
    choice: LineTerminator,
    encoding: str,
    classifier: Optional[EbcdicClassifier] = None,
) -> bytes:
    """
    Get the bytes written after each line.

    EBCDIC encodings get the raw EBCDIC control bytes for the choice;
    every other encoding gets the terminator text encoded normally,
    without any byte-order mark the codec writes at the start of a stream.

    Raises:
        CodingFailure: If the encoding cannot be probed or cannot encode the terminator
    """
    if classifier is None:
        classifier = EbcdicClassifier()

    if classifier.is_ebcdic(encoding):
        return choice.ebcdic_bytes

    try:
        encoder = codecs.getincrementalencoder(encoding)()
        # The first encode() of utf-8-sig, utf-16 and utf-32 emits the BOM
        encoder.encode("")
        return encoder.encode(choice.text, True)
    except (LookupError, UnicodeEncodeError) as e:
        raise CodingFailure(
            f"Cannot encode line terminator {choice.name} with '{encoding}': {e}"
        ) from e
