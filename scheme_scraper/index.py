"""Scheme index built from the top-level schemes listing, and the read-only queries over it."""

import logging
from typing import Iterator, List, Sequence, Tuple

from .downloader import Downloader
from .exceptions import FetchError, IndexBuildError, ParseError, SchemeNotFoundError
from .listing import fetch_listing, split_timestamp
from .models import ListingRow, SchemeEntry

logger = logging.getLogger("scheme_scraper")

SchemeRow = Tuple[str, str, str, str]  # organism, scheme, date, time


def entry_from_row(row: ListingRow, base_url: str) -> SchemeEntry:
    """Turn one ``Organism.Scheme/`` listing row into a SchemeEntry."""
    href = row.href
    if "." not in href:
        raise ParseError(f"Listing entry {href!r} has no organism.scheme separator")

    organism, remainder = href.split(".", 1)
    scheme = remainder[:-1] if remainder.endswith("/") else remainder
    date, time, _size = split_timestamp(row.text)

    return SchemeEntry(
        url_path=href,
        organism=organism,
        scheme=scheme,
        scheme_id=href.strip("/"),
        full_path=base_url + href,
        date=date,
        time=time,
    )


class SchemeIndex:
    """Ordered, immutable snapshot of every scheme on the listing page."""

    def __init__(self, entries: Sequence[SchemeEntry], base_url: str = ""):
        self._entries = tuple(entries)
        self.base_url = base_url

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[SchemeEntry]:
        return iter(self._entries)

    @property
    def entries(self) -> Tuple[SchemeEntry, ...]:
        return self._entries

    def list_schemes(self) -> List[SchemeRow]:
        return [(e.organism, e.scheme, e.date, e.time) for e in self._entries]

    def list_organisms(self) -> List[str]:
        return list(dict.fromkeys(e.organism for e in self._entries))

    def list_organism_schemes(self, organism_id: str) -> List[SchemeRow]:
        """Distinct rows for one organism. An unknown organism gives an empty list."""
        rows = (
            (e.organism, e.scheme, e.date, e.time)
            for e in self._entries if e.organism == organism_id
        )
        return list(dict.fromkeys(rows))

    def find_scheme(self, organism_id: str, scheme_id: str) -> SchemeEntry:
        matches = [e for e in self._entries if e.organism == organism_id and e.scheme == scheme_id]
        if len(matches) != 1:
            if matches:
                msg = f"{len(matches)} listing entries match organism {organism_id!r} and scheme {scheme_id!r}"
            else:
                msg = f"No scheme {scheme_id!r} listed for organism {organism_id!r}"
            raise SchemeNotFoundError(msg, organism_id=organism_id, scheme_id=scheme_id,
                                      matches=len(matches))
        return matches[0]


def build_index(downloader: Downloader, base_url: str) -> SchemeIndex:
    """Index every ``Organism.Scheme/`` entry; entries without the separator are skipped with a warning."""
    entries = []
    try:
        for row in fetch_listing(downloader, base_url):
            if "." not in row.href:
                logger.warning(f"Skipping listing entry {row.href!r}: not an Organism.Scheme directory")
                continue
            entries.append(entry_from_row(row, base_url))
    except (FetchError, ParseError) as e:
        raise IndexBuildError(f"Could not build scheme index from {base_url}: {e}") from e

    logger.debug(f"Scheme index: {len(entries)} schemes")
    return SchemeIndex(entries, base_url=base_url)
