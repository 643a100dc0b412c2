"""
Keying boundary: answer sets -> keyed responses per dichotomy.

Answer sets from the host are sparse and keyed by 1-based item number; an
absent item is an omission. Each answered item is resolved to its scored
direction through the question catalogue and paired with its 2PL parameters.
Anything that cannot be resolved is a configuration error, never skipped.
"""

from collections.abc import Mapping

from scoring_service.core.constants import (
    ITEM_NUMBER_OFFSET,
    NEGATIVE_POLE,
    POSITIVE_POLE,
)
from scoring_service.core.data_models import Answer, Dichotomy, KeyedResponse
from scoring_service.core.errors import (
    ConfigurationError,
    InvalidResponseError,
    UnknownItemError,
)
from scoring_service.core.item_table import ItemParameterTable
from scoring_service.core.questions import QuestionCatalogue

KeyedResponses = dict[Dichotomy, tuple[KeyedResponse, ...]]


def item_number_to_id(item_number: int) -> int:
    """Convert a 1-based host item number to a 0-based item id."""
    return item_number - ITEM_NUMBER_OFFSET


def item_id_to_number(item_id: int) -> int:
    """Convert a 0-based item id to a 1-based host item number."""
    return item_id + ITEM_NUMBER_OFFSET


def answers_to_log(answers: Mapping[int, str]) -> list[Answer]:
    """Raw answer log, in item order, for a sparse answer set."""
    return [
        Answer(item_id=item_number_to_id(number), choice=choice)
        for number, choice in sorted(answers.items())
    ]


def _group(
    directions: Mapping[int, int], item_table: ItemParameterTable
) -> KeyedResponses:
    grouped: dict[Dichotomy, list[KeyedResponse]] = {d: [] for d in Dichotomy}
    for item_id in sorted(directions):
        item = item_table[item_id]
        grouped[item.dichotomy].append(
            KeyedResponse(item_id=item_id, a=item.a, b=item.b, u=directions[item_id])
        )
    return {d: tuple(responses) for d, responses in grouped.items()}


def key_directions(
    responses: Mapping[int, int], item_table: ItemParameterTable
) -> KeyedResponses:
    """
    Group already-keyed responses by dichotomy.

    Args:
        responses: 0-based item id -> scored direction (0 or 1).
        item_table: Item parameter table.

    Returns:
        Dichotomy -> keyed responses in item order. Every dichotomy is present.

    Raises:
        UnknownItemError: If an item id is not in the table.
        InvalidResponseError: If a direction is not 0 or 1.
    """
    directions: dict[int, int] = {}
    for item_id, value in responses.items():
        if item_id not in item_table:
            raise UnknownItemError(item_id)
        if isinstance(value, bool) or value not in (NEGATIVE_POLE, POSITIVE_POLE):
            raise InvalidResponseError(item_id, value)
        directions[item_id] = int(value)
    return _group(directions, item_table)


def key_answers(
    answers: Mapping[int, str],
    catalogue: QuestionCatalogue,
    item_table: ItemParameterTable,
) -> KeyedResponses:
    """
    Resolve chosen options to scored directions, grouped by dichotomy.

    Args:
        answers: 1-based item number -> chosen option key. Omitted items are
            simply absent.
        catalogue: Question catalogue holding each option's score key.
        item_table: Item parameter table.

    Returns:
        Dichotomy -> keyed responses in item order. Every dichotomy is present.

    Raises:
        UnknownItemError: If an item number is in neither table nor catalogue.
        UnknownChoiceError: If a choice is not one of the item's options.
    """
    directions: dict[int, int] = {}
    for item_number, choice in answers.items():
        item_id = item_number_to_id(item_number)
        if item_id not in item_table:
            raise UnknownItemError(item_id)
        directions[item_id] = catalogue.score_key(item_id, choice)
    return _group(directions, item_table)


def check_catalogue_alignment(
    catalogue: QuestionCatalogue, item_table: ItemParameterTable
) -> None:
    """
    Verify the catalogue and the item table describe the same items.

    Raises:
        ConfigurationError: If the item counts differ.
    """
    if catalogue.n_items != item_table.n_items:
        raise ConfigurationError(
            f"Question catalogue has {catalogue.n_items} items but the item "
            f"table has {item_table.n_items}"
        )
