"""Exception kinds raised by the scraper, the storage layer and input validation."""


class WebsiteDataError(ValueError):
    """Scraped data does not match the WebsiteData contract."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"Invalid website data field '{field}': {message}")
        self.field = field


class ScrapeError(RuntimeError):
    """Fetching the page failed (network error, timeout, HTTP error status)."""

    def __init__(self, url: str, message: str, status_code: int = 0) -> None:
        super().__init__(f"Could not fetch {url}: {message}")
        self.url = url
        self.status_code = status_code


class StorageError(RuntimeError):
    """Reading or writing audit reports failed."""
