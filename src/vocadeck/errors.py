"""Exceptions raised by the flashcard core."""


class VocadeckError(Exception):
    """Base class for all vocadeck errors."""


class LoadError(VocadeckError):
    """The word catalog could not be read or parsed."""


class InvalidFilter(VocadeckError, ValueError):
    """An unrecognized word-type filter was requested."""

    def __init__(self, value: str):
        super().__init__(f"Unknown type filter: {value!r}")
        self.value = value


class InvalidGenderMode(VocadeckError, ValueError):
    """An unrecognized adjective gender mode was requested."""

    def __init__(self, value: str):
        super().__init__(f"Unknown gender mode: {value!r}")
        self.value = value


class SpeechError(VocadeckError):
    """Speech synthesis failed."""
