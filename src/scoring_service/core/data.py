"""
CSV loading utilities for batches of questionnaire answers.
"""

from pathlib import Path

import pandas as pd

from scoring_service.core.constants import ITEM_NUMBER_OFFSET, MISSING_CHAR


def parse_answer_string(answer_string: str) -> dict[int, str]:
    """Parse an answer string into a sparse answer set.

    Character i (0-based) is the choice key for item number i + 1;
    MISSING_CHAR marks an omitted item.
    """
    answers: dict[int, str] = {}
    for position, char in enumerate(answer_string):
        if char == MISSING_CHAR:
            continue
        if not char.isalnum():
            raise ValueError(f"Invalid character in answer string: '{char}'")
        answers[position + ITEM_NUMBER_OFFSET] = char
    return answers


def load_answer_csv(path: Path) -> tuple[list[str], list[dict[int, str]]]:
    """Load a CSV file of respondents' answers.

    Expected CSV columns:
        - respondent_id: unique identifier for each respondent
        - answer_string: one choice key per item (e.g., "AB*BA...")

    Returns:
        Tuple of (respondent_ids, answer sets keyed by 1-based item number).

    Raises:
        ValueError: If CSV format is invalid or data is inconsistent.
    """
    df = pd.read_csv(path, dtype=str, keep_default_na=False)

    if "respondent_id" not in df.columns:
        raise ValueError("CSV must have 'respondent_id' column")
    if "answer_string" not in df.columns:
        raise ValueError("CSV must have 'answer_string' column")

    respondent_ids: list[str] = df["respondent_id"].tolist()
    answer_strings: list[str] = df["answer_string"].tolist()

    if len(set(respondent_ids)) != len(respondent_ids):
        raise ValueError("respondent_id values must be unique")

    # Validate all answer strings are the same length
    lengths = {len(s) for s in answer_strings}
    if len(lengths) > 1:
        raise ValueError(
            f"Inconsistent answer string lengths: {sorted(lengths)}"
        )

    return respondent_ids, [parse_answer_string(s) for s in answer_strings]
