import os, logging, requests
import xml.etree.ElementTree as ET
from typing import Dict
from urllib.parse import urlsplit
from requests.exceptions import RequestException

from rss2html.util.errors import FetchError, FeedParseError, InvalidFeedError
from rss2html.util.xmltree import XmlNode, from_element

log = logging.getLogger(__name__)

DEFAULT_TIMEOUT = "12"

# A normal desktop browser UA helps with basic bot filters
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/124.0.0.0 Safari/537.36"
)

DEFAULT_HEADERS = {
    "Accept": "application/rss+xml,application/xml;q=0.9,text/xml;q=0.8,*/*;q=0.5",
    "Accept-Language": "en-US,en;q=0.9",
    "Connection": "close",
}


def _is_url(source: str) -> bool:
    return urlsplit(source).scheme in ("http", "https")

def fetch_feed(source: str, timeout: float | None = None, headers: Dict[str, str] | None = None) -> bytes:
    """Raw feed bytes from an http(s) URL or a local file path."""
    source = source.strip()
    if not _is_url(source):
        log.debug(f"[ingest] reading file {source}")
        try:
            with open(source, "rb") as f:
                return f.read()
        except OSError as e:
            raise FetchError(f"cannot read {source}: {e}") from e

    # Configuration via environment variables, read per call so .env values apply
    if timeout is None:
        timeout = float(os.getenv("RSS_FETCH_TIMEOUT", DEFAULT_TIMEOUT))
    ua = {"User-Agent": os.getenv("RSS_USER_AGENT", DEFAULT_USER_AGENT)}

    log.debug(f"[ingest] GET {source}")
    try:
        r = requests.get(
            source, timeout=timeout,
            headers={**DEFAULT_HEADERS, **ua, **(headers or {})},
            allow_redirects=True,
        )
        r.raise_for_status()
    except RequestException as e:
        raise FetchError(f"cannot fetch {source}: {e}") from e
    log.debug(f"[ingest] {source} -> {r.status_code}, {len(r.content)} bytes")
    return r.content

def parse_tree(data: bytes | str) -> XmlNode:
    try:
        root = ET.fromstring(data)
    except ET.ParseError as e:
        raise FeedParseError(f"XML parsing error: {e}") from e
    return from_element(root)

def load_tree(source: str, timeout: float | None = None) -> XmlNode:
    return parse_tree(fetch_feed(source, timeout=timeout))


# -------------------------------- validation ----------------------------------

def is_rss2(root: XmlNode) -> bool:
    return root.is_tag and root.label == "rss" and root.attribute_value("version") == "2.0"

def validate_rss(root: XmlNode) -> None:
    if not is_rss2(root):
        version = root.attribute_value("version") if root.is_tag else None
        raise InvalidFeedError(f"expected <rss version=\"2.0\">, got <{root.label}> version={version!r}")
