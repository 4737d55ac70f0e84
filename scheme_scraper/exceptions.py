"""
Exceptions raised while fetching listings, building the scheme index and downloading schemes
"""


class SchemeScraperError(Exception):
    DEFAULT_MESSAGE = ''  # type: str

    def __init__(self, message=None, *args):
        super(SchemeScraperError, self).__init__(*args)
        self.message = message or self.DEFAULT_MESSAGE

    def __str__(self):
        return str(self.message)


class FetchError(SchemeScraperError):
    DEFAULT_MESSAGE = 'Could not retrieve listing page'

    def __init__(self, *args, url: str = None):
        super(FetchError, self).__init__(*args)
        self.url = url


class ParseError(SchemeScraperError):
    """The listing page did not have the expected anchor + trailing text layout"""
    DEFAULT_MESSAGE = 'Could not parse directory listing'


class IndexBuildError(SchemeScraperError):
    DEFAULT_MESSAGE = 'Could not build the scheme index'


class SchemeNotFoundError(SchemeScraperError):
    """Zero rows, or more than one row, matched the requested organism and scheme"""
    DEFAULT_MESSAGE = 'Requested scheme was not found'

    def __init__(self, *args, organism_id: str = None, scheme_id: str = None, matches: int = 0):
        super(SchemeNotFoundError, self).__init__(*args)
        self.organism_id = organism_id
        self.scheme_id = scheme_id
        self.matches = matches


class AlreadyExistsError(SchemeScraperError):
    DEFAULT_MESSAGE = 'Destination already exists'

    def __init__(self, *args, path: str = None):
        super(AlreadyExistsError, self).__init__(*args)
        self.path = path


class DownloadError(SchemeScraperError):
    DEFAULT_MESSAGE = 'File could not be downloaded'

    def __init__(self, *args, url: str = None):
        super(DownloadError, self).__init__(*args)
        self.url = url


class DownloadWarning(SchemeScraperError):
    """The server answered, but the file that arrived cannot be trusted"""
    DEFAULT_MESSAGE = 'File was downloaded incompletely'

    def __init__(self, *args, url: str = None):
        super(DownloadWarning, self).__init__(*args)
        self.url = url
