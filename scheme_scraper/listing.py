"""Directory listing parser.

Auto-generated index pages put each entry on one line: an anchor followed by a bare text node
holding the last-modified date, time and size, e.g.

    <a href="Salmonella.Achtman7GeneMLST/">Salmonella.Achtman7GeneMLST/</a>   04-May-2024 10:12    -

The parent-directory link and the server's encoded ``*.*`` filter link are dropped.
"""

import logging
from typing import List, Tuple

from bs4 import BeautifulSoup, Comment, NavigableString

from .downloader import Downloader
from .exceptions import ParseError
from .models import ListingRow

logger = logging.getLogger("scheme_scraper")

# Plain substring tests: any href containing one of these is not a listing entry
EXCLUDED_HREF_TOKENS = ("..", "%2A.%2A")


def is_listing_href(href: str) -> bool:
    return not any(token in href for token in EXCLUDED_HREF_TOKENS)


def parse_listing(html: str) -> List[ListingRow]:
    """Return (href, trailing text) for every entry anchor, in document order."""
    soup = BeautifulSoup(html, "html.parser")
    rows = []

    for anchor in soup.find_all("a", href=True):
        href = anchor["href"]
        if not is_listing_href(href):
            continue

        sibling = anchor.next_sibling
        if not isinstance(sibling, NavigableString) or isinstance(sibling, Comment):
            raise ParseError(f"No timestamp text follows listing entry {href!r}")

        rows.append(ListingRow(href=href, text=str(sibling).replace("\r", "")))

    return rows


def split_timestamp(text: str) -> Tuple[str, str, str]:
    """Split trailing entry text into (date, time, size). Extra tokens are ignored."""
    tokens = text.replace("\r", "").split()
    if len(tokens) < 3:
        raise ParseError(f"Expected date, time and size in {text.strip()!r}")
    return tokens[0], tokens[1], tokens[2]


def fetch_listing(downloader: Downloader, url: str) -> List[ListingRow]:
    html = downloader.fetch_text(url)
    rows = parse_listing(html)
    logger.debug(f"{url}: {len(rows)} listing entries")
    return rows
