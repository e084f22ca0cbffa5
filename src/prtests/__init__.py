"""prtests - extract CI test-selection directives from pull-request descriptions."""

__version__ = "0.1.0"
