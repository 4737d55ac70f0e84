"""CLI entry point."""

import argparse
import logging
import sys
from typing import List, Sequence

from .config import load_config
from .downloader import Downloader
from .exceptions import SchemeScraperError
from .index import SchemeIndex, build_index
from .logger import setup_logger
from .schemes import download_scheme

logger = logging.getLogger("scheme_scraper")

FUNCTIONS = ["list_schemes", "list_organisms", "list_organism_schemes", "download_scheme"]

SCHEME_COLUMNS = ["Organism", "Scheme", "Date", "Time"]

FUNCTION_HELP = """Function to be performed. Possible functions are:
  list_schemes           - list all available schemes
  list_organisms         - list all available organisms
  list_organism_schemes  - list all available schemes for a given organism (-o)
  download_scheme        - download all files included in a scheme (-o and -s)"""


def format_table(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> str:
    widths = [len(h) for h in headers]
    for row in rows:
        widths = [max(w, len(str(v))) for w, v in zip(widths, row)]

    lines = [
        "| " + " | ".join(f"{h:<{w}}" for h, w in zip(headers, widths)) + " |",
        "|" + "|".join("-" * (w + 2) for w in widths) + "|",
    ]
    for row in rows:
        lines.append("| " + " | ".join(f"{str(v):<{w}}" for v, w in zip(row, widths)) + " |")
    return "\n".join(lines)


def list_schemes(index: SchemeIndex):
    print(format_table(SCHEME_COLUMNS, index.list_schemes()))


def list_organisms(index: SchemeIndex):
    print(format_table(["Organism"], [(o,) for o in index.list_organisms()]))


def list_organism_schemes(index: SchemeIndex, organism_id: str):
    print(format_table(SCHEME_COLUMNS, index.list_organism_schemes(organism_id)))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="List and download genotyping schemes from a directory listing",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument("-f", "--function", choices=FUNCTIONS, default=None,
                        help=FUNCTION_HELP)
    parser.add_argument("-o", "--organismID", dest="organism_id", default=None,
                        help="Organism ID on which to perform function")
    parser.add_argument("-s", "--schemeID", dest="scheme_id", default=None,
                        help="Scheme ID on which to perform function")
    parser.add_argument("--config", type=str, default="config.yaml",
                        help="Path to config file")
    parser.add_argument("--output-dir", type=str, default=None,
                        help="Directory in which downloaded schemes are created")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Show debug output")
    return parser


def run(args, config, downloader: Downloader) -> int:
    """Build the index, then dispatch the selected function. Returns the exit status."""
    index = build_index(downloader, config.base_url)

    if args.function == "list_schemes":
        list_schemes(index)

    elif args.function == "list_organisms":
        list_organisms(index)

    elif args.function == "list_organism_schemes":
        if args.organism_id is None:
            print("\nPlease provide Organism_ID using argument '-o' for which you want to see "
                  "the list of available schemes\n")
        else:
            list_organism_schemes(index, args.organism_id)

    elif args.function == "download_scheme":
        if args.organism_id is None or args.scheme_id is None:
            print("\nPlease provide Organism ID and Scheme ID using arguments '-o' and '-s'.\n")
        else:
            output_dir = args.output_dir or config.output_dir
            download_scheme(index, downloader, args.organism_id, args.scheme_id,
                            output_dir=output_dir, error_log_name=config.error_log_name)

    return 0


def main(argv: List[str] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.function is None:
        parser.print_help(sys.stderr)
        print("\nChoose one of the possible functions.", file=sys.stderr)
        return 1

    config = load_config(args.config)
    setup_logger(config.log_dir, logging.DEBUG if args.verbose else logging.INFO)

    with Downloader(config) as downloader:
        try:
            return run(args, config, downloader)
        except SchemeScraperError as e:
            logger.error(f"ERROR: {e}")
            return 1


if __name__ == "__main__":
    sys.exit(main())
