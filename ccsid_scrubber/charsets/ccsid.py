#!/usr/bin/env python3
"""
CCSID <-> Python codec resolution

A CCSID is the numeric identifier IBM midrange systems use to tag the
encoding of a file. Users may pass either a CCSID or an encoding name.
"""

import codecs
import re
from typing import Dict, List, Optional, Tuple

from ..exceptions import UnknownEncodingError

# CCSID -> codec name. When several CCSIDs share a codec, the first one
# listed is the one used for tagging.
CCSID_CODECS: Dict[int, str] = {
    # EBCDIC
    37: "cp037",
    273: "cp273",
    424: "cp424",
    500: "cp500",
    875: "cp875",
    1026: "cp1026",
    1140: "cp1140",
    # ASCII / ISO 8859
    367: "ascii",
    819: "latin-1",
    912: "iso8859-2",
    915: "iso8859-5",
    1089: "iso8859-6",
    813: "iso8859-7",
    916: "iso8859-8",
    920: "iso8859-9",
    923: "iso8859-15",
    # PC code pages
    437: "cp437",
    850: "cp850",
    852: "cp852",
    855: "cp855",
    857: "cp857",
    858: "cp858",
    860: "cp860",
    861: "cp861",
    862: "cp862",
    863: "cp863",
    864: "cp864",
    865: "cp865",
    866: "cp866",
    869: "cp869",
    874: "cp874",
    # Windows
    1250: "cp1250",
    1251: "cp1251",
    1252: "cp1252",
    1253: "cp1253",
    1254: "cp1254",
    1255: "cp1255",
    1256: "cp1256",
    1257: "cp1257",
    1258: "cp1258",
    # CJK
    943: "shift_jis",
    932: "cp932",
    1386: "gbk",
    5488: "gb18030",
    970: "euc_kr",
    954: "euc_jp",
    950: "big5",
    # Unicode
    1208: "utf-8",
    1200: "utf-16-be",
    13488: "utf-16-be",
    1202: "utf-16-le",
    1232: "utf-32-be",
    1234: "utf-32-le",
}

_PREFIXED_CCSID = re.compile(r"^(?:ibm|cp|ccsid)[-_ ]?0*(\d+)$")


def canonical_name(encoding: str) -> str:
    """Return the codec registry name for an encoding name"""
    return codecs.lookup(encoding).name


def _lookup_ccsid(ccsid: int) -> Optional[str]:
    codec = CCSID_CODECS.get(ccsid)
    if codec is None:
        return None
    return canonical_name(codec)


def resolve(token: str, fallback: Optional[str] = None) -> str:
    """
    Resolve a CCSID or encoding name to a canonical codec name.

    Args:
        token: CCSID ("37"), prefixed CCSID ("IBM-037") or encoding name ("UTF-8")
        fallback: Value returned when the token cannot be resolved

    Returns:
        Canonical Python codec name, e.g. "cp037" or "utf-8"

    Raises:
        UnknownEncodingError: If the token matches nothing and no fallback is given
    """
    normalized = (token or "").strip().lower()

    resolved = None
    if normalized.isdigit():
        resolved = _lookup_ccsid(int(normalized))
    elif normalized:
        match = _PREFIXED_CCSID.match(normalized)
        if match:
            resolved = _lookup_ccsid(int(match.group(1)))
        if resolved is None:
            try:
                resolved = canonical_name(normalized)
            except LookupError:
                resolved = None

    if resolved is not None:
        return resolved
    if fallback is not None:
        return fallback
    raise UnknownEncodingError(token)


def encoding_to_ccsid(encoding: str) -> Optional[int]:
    """Get the CCSID used to tag files written in an encoding, or None"""
    try:
        wanted = canonical_name(encoding)
    except LookupError:
        return None

    for ccsid, codec in CCSID_CODECS.items():
        if canonical_name(codec) == wanted:
            return ccsid
    return None


def known_ccsids() -> List[Tuple[int, str]]:
    """List (CCSID, canonical codec name) pairs in CCSID order"""
    return [(ccsid, canonical_name(codec)) for ccsid, codec in sorted(CCSID_CODECS.items())]
