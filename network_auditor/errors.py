"""Exceptions raised by the network auditor."""


class NetworkAuditorError(RuntimeError):
    """Base class for every error the auditor reports to the user."""


class WordPressError(NetworkAuditorError):
    """Raised when the WordPress API returns an error response."""


class NetworkError(NetworkAuditorError):
    """Raised when the network cannot be audited."""


class NotMultisiteError(NetworkError):
    def __init__(self) -> None:
        super().__init__("This command can only be run on a multisite installation.")


class NoSitesError(NetworkError):
    def __init__(self) -> None:
        super().__init__("No sites found in the network.")


class SiteNotFoundError(NetworkError):
    def __init__(self, site_id: int) -> None:
        super().__init__(f"Site {site_id} is not part of the network.")
        self.site_id = site_id
