"""Download every file of one scheme into a timestamped directory.

Locus fastas (``*.fa*.gz``) go into a ``loci_fastas`` subdirectory, everything else sits at the
top of the destination. Each file gets exactly one attempt; a failure is counted, logged to the
console and to ``download_error.log`` inside the destination, and the loop moves on.
"""

import logging
import os
import posixpath
import re
from typing import List
from urllib.parse import unquote, urljoin, urlsplit

from .downloader import Downloader
from .exceptions import AlreadyExistsError, DownloadError, DownloadWarning
from .index import SchemeIndex
from .listing import fetch_listing, split_timestamp
from .models import ERROR, WARNING, DownloadOutcome, DownloadSummary, FileEntry, SchemeEntry

logger = logging.getLogger("scheme_scraper")

LOCI_DIR = "loci_fastas"
LOCUS_FASTA_PATTERN = re.compile(r"\.fa.*\.gz$")


def destination_name(entry: SchemeEntry) -> str:
    return f"schemeID_{entry.scheme_id}_LastUpdated_{entry.last_updated}"


def is_locus_fasta(file_name: str) -> bool:
    """Case-sensitive: ``loci.fasta.gz`` matches, ``LOCI.FA.GZ`` does not."""
    return LOCUS_FASTA_PATTERN.search(file_name) is not None


def local_file_name(href: str) -> str:
    """Bare file name for an href, so absolute and nested hrefs still land inside the destination."""
    name = posixpath.basename(unquote(posixpath.basename(urlsplit(href).path)))
    if name in ("", ".", ".."):
        raise DownloadError(f"No file name in link {href!r}")
    return name


def file_url(entry: SchemeEntry, href: str) -> str:
    if href.startswith("/") or "://" in href:
        return urljoin(entry.full_path, href)
    return entry.full_path + href


def list_scheme_files(downloader: Downloader, entry: SchemeEntry) -> List[FileEntry]:
    files = []
    for row in fetch_listing(downloader, entry.full_path):
        date, time, _size = split_timestamp(row.text)
        files.append(FileEntry(
            file_name=row.href,
            download_url=file_url(entry, row.href),
            date=date,
            time=time,
        ))
    return files


def _download_one(downloader: Downloader, file_entry: FileEntry, destination: str) -> DownloadOutcome:
    try:
        name = local_file_name(file_entry.file_name)
        subdir = LOCI_DIR if is_locus_fasta(name) else ""
        local_path = os.path.join(destination, subdir, name)
        downloader.download_file(file_entry.download_url, local_path)
    except DownloadWarning as e:
        return DownloadOutcome(file_entry.file_name, WARNING, _one_line(e))
    except DownloadError as e:
        return DownloadOutcome(file_entry.file_name, ERROR, _one_line(e))
    except Exception as e:
        return DownloadOutcome(file_entry.file_name, ERROR, f"{type(e).__name__}: {_one_line(e)}")

    return DownloadOutcome(file_entry.file_name, local_path=local_path)


def _one_line(e: Exception) -> str:
    return " ".join(str(e).split())


def download_scheme(index: SchemeIndex, downloader: Downloader, organism_id: str, scheme_id: str,
                    output_dir: str = ".", error_log_name: str = "download_error.log") -> DownloadSummary:
    entry = index.find_scheme(organism_id, scheme_id)
    destination = os.path.join(output_dir, destination_name(entry))

    if os.path.exists(destination):
        raise AlreadyExistsError(
            f"{destination} already exists. Downloading aborted to prevent overwriting.",
            path=destination,
        )

    # Listed before anything touches the disk, so a bad scheme page leaves no empty directory behind
    files = list_scheme_files(downloader, entry)

    os.makedirs(destination)
    os.mkdir(os.path.join(destination, LOCI_DIR))

    summary = DownloadSummary(destination=destination)
    total = len(files)

    with open(os.path.join(destination, error_log_name), "a") as log_file:
        for i, file_entry in enumerate(files, start=1):
            logger.info(f"Downloading File {i} / {total}")
            outcome = _download_one(downloader, file_entry, destination)
            summary.outcomes.append(outcome)

            if outcome.status == ERROR or outcome.status == WARNING:
                line = f"{outcome.status.capitalize()} downloading: {file_entry.file_name} - {outcome.message}"
                # One log line per file, whatever the href or message contains
                line = " ".join(line.split())
                logger.error(line)
                log_file.write(line + "\n")

    if summary.problem_count:
        logger.warning(f"WARNING: Number of files that were not downloaded: {summary.problem_count}")
    else:
        logger.debug(f"{entry.scheme_id}: {summary.downloaded_count} files in {destination}")

    return summary
