"""
Exceptions raised by the match predictor core.
"""

from typing import Iterable


class MatchPredictorError(Exception):
    """Base exception for match predictor errors."""
    pass


class ParseError(MatchPredictorError):
    """A ratings record could not be parsed; the whole load is rejected."""

    def __init__(self, line: int, reason: str):
        self.line = line
        self.reason = reason
        super().__init__(f"line {line}: {reason}")


class InvalidCategory(MatchPredictorError):
    """Category is not one of the catalog's declared categories."""

    def __init__(self, category: str, allowed: Iterable[str]):
        self.category = category
        self.allowed = list(allowed)
        super().__init__(
            f"Unknown category '{category}' (expected one of: {', '.join(self.allowed)})"
        )


class RatingsSourceError(MatchPredictorError):
    """The ratings file or URL could not be read."""
    pass


class UnknownPlayer(MatchPredictorError):
    """Player is not part of the catalog the selection draws from."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Player '{name}' is not in the ratings catalog")
