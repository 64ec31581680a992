# Errors raised across ingest, rendering and the CLI. Precondition violations
# (wrong tag label, closed output) are plain ValueErrors and are not listed here.


class RssReaderError(Exception):
    pass


class FetchError(RssReaderError):
    """The feed could not be downloaded or read from disk."""


class FeedParseError(RssReaderError):
    """The feed bytes are not well-formed XML."""


class InvalidFeedError(RssReaderError):
    """The document root is not <rss version="2.0">."""


class MissingElementError(RssReaderError, LookupError):
    """A mandatory child element (e.g. the channel <link>) is absent or empty."""

    def __init__(self, parent: str, tag: str):
        super().__init__(f"<{parent}> has no usable <{tag}> element")
        self.parent = parent
        self.tag = tag
