#!/usr/bin/env python3
"""
Exception hierarchy for the CCSID character scrubber
"""


class ScrubberError(Exception):
    """Base class for all scrubber errors"""


class ArgumentError(ScrubberError):
    """An option value could not be understood"""


class UnknownEncodingError(ArgumentError, LookupError):
    """A CCSID or encoding name resolves to nothing"""

    def __init__(self, token: str):
        super().__init__(f"Unknown CCSID or encoding: '{token}'")
        self.token = token


class CodingFailure(ScrubberError):
    """Text could not be encoded or decoded"""


class IOFailure(ScrubberError):
    """Reading the input file or writing the output file failed"""


class TaggingFailure(ScrubberError):
    """The external CCSID tagging tool could not tag the output file"""
