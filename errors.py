# errors.py
# Fehlerklassen fuer den Quote-Card-Service.


class QuoteCardError(Exception):
    """Base class for everything the quote endpoint turns into a fallback image."""


class EmptyCollection(QuoteCardError):
    """The quote list was empty, nothing to select from."""


class UpstreamFailure(QuoteCardError):
    """Network or parse error on the primary quotes fetch."""


class DetailFetchFailure(QuoteCardError):
    """Philosopher lookup failed. Recovered locally with a placeholder name."""


class ComposeFailure(QuoteCardError):
    """Rendering the card failed."""
