"""
Exception hierarchy for scoring.

Configuration and integration errors are fatal: the item table and the
question catalogue must be kept in lockstep, and answers that cannot be keyed
are never skipped.
"""


class ScoringError(Exception):
    """Base class for all scoring errors."""


class ConfigurationError(ScoringError):
    """The item table, catalogue or answer set do not fit together."""


class ItemTableError(ConfigurationError):
    """The item parameter table is malformed."""


class CatalogueError(ConfigurationError):
    """The question catalogue is malformed."""


class UnknownItemError(ConfigurationError):
    def __init__(self, item_id: int, source: str = "item table") -> None:
        self.item_id = item_id
        self.source = source
        super().__init__(f"Item {item_id} not found in {source}")


class UnknownChoiceError(ConfigurationError):
    def __init__(self, item_id: int, choice: str) -> None:
        self.item_id = item_id
        self.choice = choice
        super().__init__(f"Choice {choice!r} is not an option of item {item_id}")


class InvalidResponseError(ScoringError):
    def __init__(self, item_id: int, value: object) -> None:
        self.item_id = item_id
        self.value = value
        super().__init__(
            f"Keyed response for item {item_id} must be 0 or 1, got {value!r}"
        )


class CatalogueNotConfiguredError(ConfigurationError):
    """Choice-keyed answers were given to an engine without a catalogue."""

    def __init__(self) -> None:
        super().__init__("Scoring answers by choice requires a question catalogue")
