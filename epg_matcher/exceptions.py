"""
Error types shared by the pipelines and the entry points.
"""


class RetrievalError(Exception):
    """Raised when a playlist or catalog cannot be fetched or read"""

    def __init__(self, source: str, reason: str):
        super().__init__(f"Failed to retrieve {source}: {reason}")
        self.source = source
        self.reason = reason


class CatalogParseError(ValueError):
    """Raised when the XMLTV catalog is malformed"""
    pass
