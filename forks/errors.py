"""Exceptions raised across the engine boundary."""


class CatalogueLoadError(Exception):
    """A question or scenario catalogue could not be read or parsed."""

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"Could not load catalogue from {source}: {reason}")
