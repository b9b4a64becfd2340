"""Errors raised while analyzing a meal photo."""


class AnalysisFailure(Exception):  # noqa: N818
    """Analysis could not produce a result; the message is safe to show users."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
