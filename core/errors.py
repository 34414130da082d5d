# =============================================================================
# core/errors.py  —  Exception Taxonomy
# =============================================================================
#
# Every failure the plugin knows about is one of these.  None of them is ever
# shown raw to the end user: the action catches them where they happen and
# turns them into an emoji-prefixed apology string.
# =============================================================================


class ApiPluginError(Exception):
    """Base class for all plugin errors."""


class ServiceUnavailableError(ApiPluginError):
    """A dependency the action or provider needs was not supplied."""


class FetchError(ApiPluginError):
    """An HTTP request failed: network error, timeout, non-2xx, or bad body."""

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status


class MalformedDataError(ApiPluginError):
    """A response is missing a field the formatter needs."""


class ConfigurationError(ApiPluginError):
    """A setting is missing or has an invalid value."""
