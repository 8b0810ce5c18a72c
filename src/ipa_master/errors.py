"""Game error types."""


class IPAGameError(Exception):
    """Base exception for the IPA game."""


class InvalidDifficultySelection(IPAGameError):
    """Raised when a difficulty menu choice is out of range."""

    def __init__(self, choice: str | None):
        super().__init__(f"Invalid difficulty choice: {choice!r}")
        self.choice = choice


class MalformedWordRecord(IPAGameError):
    """Raised when a dictionary line lacks a spelling or a transcription."""

    def __init__(self, line: str):
        super().__init__(f"Malformed word record: {line!r}")
        self.line = line


class EmptyWordPool(IPAGameError):
    """Raised when there are no words to draw from."""

    def __init__(self, scope: str | None = None):
        label = scope or "all difficulties"
        super().__init__(f"No words available for {label}")
        self.scope = scope


class PersistenceFailure(IPAGameError):
    """Raised when the profile store cannot be read or written."""

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path
