"""Data models for listings, the scheme index and download results."""

from dataclasses import dataclass, field
from typing import List, Optional

SUCCESS = "success"
ERROR = "error"
WARNING = "warning"


@dataclass(frozen=True)
class ListingRow:
    href: str
    text: str


@dataclass(frozen=True)
class SchemeEntry:
    url_path: str
    organism: str
    scheme: str
    scheme_id: str
    full_path: str
    date: str
    time: str

    @property
    def last_updated(self) -> str:
        return f"{self.date}_{self.time}"


@dataclass(frozen=True)
class FileEntry:
    file_name: str
    download_url: str
    date: str
    time: str


@dataclass
class DownloadOutcome:
    file_name: str
    status: str = SUCCESS  # success, error, warning
    message: str = ""
    local_path: Optional[str] = None


@dataclass
class DownloadSummary:
    destination: str
    outcomes: List[DownloadOutcome] = field(default_factory=list)

    @property
    def error_count(self) -> int:
        return sum(1 for o in self.outcomes if o.status == ERROR)

    @property
    def warning_count(self) -> int:
        return sum(1 for o in self.outcomes if o.status == WARNING)

    @property
    def problem_count(self) -> int:
        return self.error_count + self.warning_count

    @property
    def downloaded_count(self) -> int:
        return sum(1 for o in self.outcomes if o.status == SUCCESS)
