"""YAML config loader."""

import os
from dataclasses import dataclass, field

import yaml

DEFAULT_BASE_URL = "https://enterobase.warwick.ac.uk/schemes/"


@dataclass
class DownloadConfig:
    timeout: int = 120
    connect_timeout: int = 30
    user_agent: str = "SchemeScraper/1.0 (Genotyping scheme mirror)"
    chunk_size: int = 65536


@dataclass
class AppConfig:
    base_url: str = DEFAULT_BASE_URL
    output_dir: str = "."
    log_dir: str = "logs"
    error_log_name: str = "download_error.log"
    download: DownloadConfig = field(default_factory=DownloadConfig)


def load_config(config_path: str = "config.yaml") -> AppConfig:
    if not os.path.exists(config_path):
        return AppConfig()

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    dl_raw = raw.get("download", {}) or {}
    download = DownloadConfig(**{k: v for k, v in dl_raw.items() if k in DownloadConfig.__dataclass_fields__})

    base_url = raw.get("base_url", DEFAULT_BASE_URL)
    if not base_url.endswith("/"):
        base_url += "/"

    return AppConfig(
        base_url=base_url,
        output_dir=raw.get("output_dir", "."),
        log_dir=raw.get("log_dir", "logs"),
        error_log_name=raw.get("error_log_name", "download_error.log"),
        download=download,
    )
