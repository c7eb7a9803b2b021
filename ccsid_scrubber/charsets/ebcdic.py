#!/usr/bin/env python3
"""
EBCDIC detection for Python codecs
"""

import logging
from typing import Dict

from ..exceptions import CodingFailure

# Code point of "A" in every EBCDIC code page
EBCDIC_CAPITAL_A = 0xC1


class EbcdicClassifier:
    """Decides whether an encoding belongs to the EBCDIC family

    Each encoding is probed once by encoding the letter "A"; the answer is
    cached for the lifetime of the classifier.
    """

    def __init__(self):
        self.logger = logging.getLogger(__name__)
        self._cache: Dict[str, bool] = {}

    def is_ebcdic(self, encoding: str) -> bool:
        cached = self._cache.get(encoding)
        if cached is not None:
            return cached

        try:
            probe = "A".encode(encoding)
        except (LookupError, UnicodeEncodeError) as e:
            raise CodingFailure(
                f"Cannot encode probe character with '{encoding}': {e}"
            ) from e
        if not probe:
            raise CodingFailure(f"Encoding '{encoding}' produced no bytes for 'A'")

        result = probe[0] == EBCDIC_CAPITAL_A
        self._cache[encoding] = result
        self.logger.debug(
            f"Determined that encoding '{encoding}' {'is' if result else 'is not'} EBCDIC"
        )
        return result

    def cached(self) -> Dict[str, bool]:
        """Return a copy of the classifications made so far"""
        return dict(self._cache)
