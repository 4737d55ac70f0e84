import httpx
import pytest

from scheme_scraper.config import AppConfig
from scheme_scraper.downloader import Downloader

BASE_URL = "https://schemes.example.org/schemes/"


def listing_page(title, entries, line_end="\n"):
    """Render an nginx-style autoindex page; `entries` are (href, trailing text) pairs."""
    lines = ['<a href="../">../</a>']
    for href, text in entries:
        lines.append(f'<a href="{href}">{href}</a>{text}')
    body = line_end.join(lines)
    return (f"<html>\n<head><title>Index of {title}</title></head>\n<body>\n"
            f"<h1>Index of {title}</h1><hr><pre>{body}{line_end}</pre><hr></body>\n</html>\n")


SCHEMES_PAGE = listing_page("/schemes/", [
    ("Salmonella.Achtman7GeneMLST/", "                04-May-2024 10:12                   -"),
    ("Salmonella.cgMLST_v2/", "                       12-Mar-2024 08:01                   -"),
    ("%2A.%2A", "                                     01-Jan-2024 00:00                   -"),
    ("Escherichia.Achtman7GeneMLST/", "               22-Feb-2024 17:45                   -"),
], line_end="\r\n")

SCHEME_FILES = {
    "profiles.list.gz": b"ST\taroC\n1\t1\n",
    "aroC.fasta.gz": b"\x1f\x8b aroC",
    "dnaN.fasta.gz": b"\x1f\x8b dnaN",
    "hemD.fasta.gz": b"\x1f\x8b hemD",
    "scheme.json": b'{"name": "Achtman7GeneMLST"}',
}

SCHEME_PAGE = listing_page("/schemes/Salmonella.Achtman7GeneMLST/", [
    (name, f"     03-May-2024 09:{i:02d}     {len(content)}")
    for i, (name, content) in enumerate(SCHEME_FILES.items())
])


class FakeServer:
    """Serves canned responses by URL; anything unknown is a 404."""

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        self.requests.append(url)
        route = self.routes.get(url)
        if route is None:
            return httpx.Response(404, text="Not Found")
        if callable(route):
            return route(request)
        if isinstance(route, bytes):
            return httpx.Response(200, content=route)
        return httpx.Response(200, text=route)


@pytest.fixture
def server():
    routes = {
        BASE_URL: SCHEMES_PAGE,
        BASE_URL + "Salmonella.Achtman7GeneMLST/": SCHEME_PAGE,
    }
    for name, content in SCHEME_FILES.items():
        routes[BASE_URL + "Salmonella.Achtman7GeneMLST/" + name] = content
    return FakeServer(routes)


@pytest.fixture
def config(tmp_path):
    return AppConfig(base_url=BASE_URL, output_dir=str(tmp_path / "out"), log_dir="")


@pytest.fixture
def downloader(config, server):
    dl = Downloader(config, transport=httpx.MockTransport(server))
    yield dl
    dl.close()
