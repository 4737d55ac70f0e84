"""Test the command line entry point"""

import logging
import os

import httpx
import pytest

from scheme_scraper import main as cli
from scheme_scraper.downloader import Downloader

from conftest import BASE_URL


@pytest.fixture
def run_cli(tmp_path, server, monkeypatch):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        f"base_url: {BASE_URL}\n"
        f"output_dir: {tmp_path / 'out'}\n"
        f"log_dir: {tmp_path / 'logs'}\n"
    )
    # Fresh handlers bound to this test's captured streams
    monkeypatch.setattr(logging.getLogger("scheme_scraper"), "handlers", [])
    monkeypatch.setattr(cli, "Downloader",
                        lambda config: Downloader(config, transport=httpx.MockTransport(server)))

    def run(*argv):
        return cli.main(list(argv) + ["--config", str(config_path)])

    return run


class TestFormatTable:
    def test_pads_columns(self):
        table = cli.format_table(["Organism", "Scheme"], [("Salmonella", "cgMLST"), ("E", "x")])
        lines = table.splitlines()
        assert lines[0] == "| Organism   | Scheme |"
        assert lines[1] == "|------------|--------|"
        assert lines[3] == "| E          | x      |"

    def test_header_only(self):
        assert len(cli.format_table(["Organism"], []).splitlines()) == 2


class TestMain:
    def test_no_function_prints_usage_and_fails(self, run_cli, server, capsys):
        assert run_cli() == 1
        assert "usage" in capsys.readouterr().err
        assert server.requests == []

    def test_list_schemes(self, run_cli, capsys):
        assert run_cli("-f", "list_schemes") == 0
        out = capsys.readouterr().out
        assert "Achtman7GeneMLST" in out
        assert "cgMLST_v2" in out
        assert len(out.strip().splitlines()) == 5

    def test_list_organisms(self, run_cli, capsys):
        assert run_cli("-f", "list_organisms") == 0
        out = capsys.readouterr().out
        assert out.count("Salmonella") == 1
        assert out.count("Escherichia") == 1

    def test_list_organism_schemes(self, run_cli, capsys):
        assert run_cli("-f", "list_organism_schemes", "-o", "Escherichia") == 0
        out = capsys.readouterr().out
        assert "Escherichia" in out
        assert "Salmonella" not in out

    def test_list_organism_schemes_without_organism_prompts(self, run_cli, capsys):
        assert run_cli("-f", "list_organism_schemes") == 0
        assert "Please provide Organism_ID" in capsys.readouterr().out

    def test_download_without_scheme_prompts(self, run_cli, tmp_path, capsys):
        assert run_cli("-f", "download_scheme", "-o", "Salmonella") == 0
        assert "Please provide Organism ID and Scheme ID" in capsys.readouterr().out
        assert not os.path.exists(tmp_path / "out")

    def test_download_scheme(self, run_cli, tmp_path):
        assert run_cli("-f", "download_scheme", "-o", "Salmonella", "-s", "Achtman7GeneMLST") == 0
        dest = tmp_path / "out" / "schemeID_Salmonella.Achtman7GeneMLST_LastUpdated_04-May-2024_10:12"
        assert (dest / "loci_fastas" / "aroC.fasta.gz").exists()

        assert run_cli("-f", "download_scheme", "-o", "Salmonella", "-s", "Achtman7GeneMLST") == 1

    def test_output_dir_flag_overrides_config(self, run_cli, tmp_path):
        target = tmp_path / "elsewhere"
        assert run_cli("-f", "download_scheme", "-o", "Salmonella", "-s", "Achtman7GeneMLST",
                       "--output-dir", str(target)) == 0
        assert len(os.listdir(target)) == 1

    def test_unreachable_index_fails(self, run_cli, server):
        server.routes.pop(BASE_URL)
        assert run_cli("-f", "list_organisms") == 1

    def test_download_progress_goes_to_stdout(self, run_cli, server, capsys):
        server.routes.pop(BASE_URL + "Salmonella.Achtman7GeneMLST/dnaN.fasta.gz")
        assert run_cli("-f", "download_scheme", "-o", "Salmonella", "-s", "Achtman7GeneMLST") == 0
        out = capsys.readouterr().out
        assert "Downloading File 5 / 5" in out
        assert "Error downloading: dnaN.fasta.gz - HTTP 404 Not Found" in out
        assert "Number of files that were not downloaded: 1" in out
