"""Exception classes for the ConeTune core module."""


class ConeTuneError(Exception):
    """Base exception for all ConeTune errors."""


class FormatError(ConeTuneError):
    """Raised when a color string cannot be parsed as hex."""

    def __init__(self, value: str | None = None) -> None:
        msg = f"Malformed hex color: {value!r}" if value is not None else "Malformed hex color"
        super().__init__(msg)
        self.value = value


class TrialDataError(ConeTuneError):
    """Raised when trial data is structurally invalid (not merely insufficient)."""


class ConfigError(ConeTuneError):
    """Raised when a configuration file or mapping is invalid."""

    def __init__(self, message: str, key: str | None = None) -> None:
        super().__init__(message)
        self.key = key


class SessionError(ConeTuneError):
    """Raised when a study session cannot be exported or loaded."""

    def __init__(self, message: str, path: str | None = None) -> None:
        msg = f"{message}: {path}" if path else message
        super().__init__(msg)
        self.path = path
