"""
Document scanner: pulls key material out of the homepage HTML and the
ondemand JS bundle.

Everything here is a pure function of its input text. Where the page could
offer more than one candidate (ondemand hash, verification meta, frame ids)
the scanner refuses to pick one.

Homepage shape:
    <meta name="twitter-site-verification" content="<base64 key>">
    <svg id="loading-x-anim-0"> ... <path d="M 10,30 C ..."/> ... </svg>   (x4)
    ... "ondemand.s":"<hash>" ...

Ondemand bundle shape:
    ... (e[12], 16) ... (e[3], 16) ... (e[41], 16) ...
"""

import base64
import binascii
import logging
import re

from bs4 import BeautifulSoup

from . import config
from .errors import DecodeError, ParseError, PatternNotFound
from .material import FrameTable, IndexTable

logger = logging.getLogger(__name__)

ONDEMAND_REGEX = re.compile(r"""(["'])ondemand\.s\1\s*:\s*(["'])([A-Za-z0-9]+)\2""")
INDICES_REGEX = re.compile(r"""\(\w\[(\d{1,3})\], ?16\)""")
FRAME_ID_REGEX = re.compile(r"^loading-x-anim-(\d+)$")
NUMBER_REGEX = re.compile(r"-?\d+")

VERIFICATION_META = "twitter-site-verification"
FRAME_ID_PREFIX = "loading-x-anim"
# "M 10,30 C": the move command plus the first cubic marker
PATH_PREFIX_LEN = 9


def parse_html(html) -> BeautifulSoup:
    if isinstance(html, BeautifulSoup):
        return html
    return BeautifulSoup(html, "html.parser")


def _missing_hint(html: str) -> str:
    if "login" in html or "LoginForm" in html:
        return "received login page, may need cookies"
    if len(html) < 10000:
        return "response too small, may be rate limited or blocked"
    return "page structure may have changed"


def find_ondemand_script_url(html: str) -> str:
    hashes = []
    for match in ONDEMAND_REGEX.finditer(html):
        value = match.group(3)
        if value not in hashes:
            hashes.append(value)

    if not hashes:
        raise PatternNotFound(f"ondemand file hash not found ({_missing_hint(html)})")
    if len(hashes) > 1:
        raise PatternNotFound(f"ambiguous ondemand file hash: {', '.join(hashes)}")

    url = config.ONDEMAND_URL_TEMPLATE.format(hash=hashes[0])
    logger.debug("ondemand url: %s", url)
    return url


def find_verification_key(html, key_length: int | None = config.KEY_LENGTH) -> bytes:
    soup = parse_html(html)
    metas = soup.find_all("meta", attrs={"name": VERIFICATION_META})
    if not metas:
        raise PatternNotFound(f"{VERIFICATION_META} meta tag not found")

    values = {meta.get("content") for meta in metas}
    if len(values) > 1:
        raise PatternNotFound(f"{len(values)} conflicting {VERIFICATION_META} meta tags")

    value = values.pop()
    if not value:
        raise PatternNotFound(f"{VERIFICATION_META} content is empty")

    try:
        key = base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError) as e:
        raise DecodeError(f"verification key is not valid base64: {e}") from e

    if key_length is not None and len(key) != key_length:
        raise DecodeError(f"verification key is {len(key)} bytes, expected {key_length}")
    return key


def parse_path_rows(d: str) -> tuple[tuple[int, ...], ...]:
    """Split an SVG path's cubic segments into integer rows.

    Empty segments are kept so row numbers line up with the segment order.
    """
    segments = d[PATH_PREFIX_LEN:].split("C")
    return tuple(tuple(int(n) for n in NUMBER_REGEX.findall(seg)) for seg in segments)


def _curve_path(element) -> str | None:
    for path in element.find_all("path"):
        d = path.get("d")
        if d and "C" in d:
            return d
    return None


def find_frame_table(html) -> FrameTable:
    soup = parse_html(html)
    elements = soup.select(f"[id^='{FRAME_ID_PREFIX}']")
    if not elements:
        raise PatternNotFound("loading-x-anim frames not found")

    numbered = {}
    for element in elements:
        element_id = element.get("id")
        match = FRAME_ID_REGEX.match(element_id)
        if not match:
            raise ParseError(f"unexpected frame id {element_id!r}")
        number = int(match.group(1))
        if number in numbered:
            raise ParseError(f"duplicate frame id {element_id!r}")
        numbered[number] = element

    if sorted(numbered) != list(range(len(numbered))):
        raise ParseError(f"frame ids are not contiguous: {sorted(numbered)}")

    frames = []
    for number in range(len(numbered)):
        d = _curve_path(numbered[number])
        if d is None:
            raise ParseError(f"frame {number} has no cubic path")
        rows = parse_path_rows(d)
        if not any(rows):
            raise ParseError(f"frame {number} path carries no numeric data")
        frames.append(rows)

    logger.debug("Parsed %d animation frames", len(frames))
    return FrameTable(frames=tuple(frames))


def find_index_table(js_source: str) -> IndexTable:
    indices = [int(m.group(1)) for m in INDICES_REGEX.finditer(js_source)]
    if len(indices) < 2:
        raise PatternNotFound(f"key byte indices not found in ondemand bundle (got {len(indices)})")
    return IndexTable(row_index=indices[0], key_byte_indices=tuple(indices[1:]))
