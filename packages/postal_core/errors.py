class PostalCoreError(Exception):
    """Base error for the address orchestration core."""


class EngineSetupError(PostalCoreError):
    """Raised when the engine's datasets cannot be loaded."""


class EngineNotReadyError(PostalCoreError):
    """Raised when parsing is attempted before a successful setup."""


class UnknownLabelError(PostalCoreError):
    """Raised when the parser emits a label with no normalization policy."""

    def __init__(self, label: str) -> None:
        super().__init__(f"unknown address component label: {label}")
        self.label = label
