"""Exception classes for the registry extractor."""


class RegistryExtractorError(Exception):
    """Base exception for all registry extractor errors."""
    pass


class FetchError(RegistryExtractorError):
    """Raised when a page cannot be fetched or returns a non-success status."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Failed to fetch {url}: {reason}")


class SearchError(RegistryExtractorError):
    """Raised when the initial search submission fails. Fatal to the run."""
    pass
