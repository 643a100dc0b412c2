#!/usr/bin/env python
"""
Score a CSV of questionnaire answers and display or save the results.
"""

import json
from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from scoring_service.core.data import load_answer_csv
from scoring_service.core.data_models import Dichotomy, ScoringResult
from scoring_service.core.errors import ScoringError
from scoring_service.core.item_table import load_item_table
from scoring_service.core.questions import QuestionCatalogue
from scoring_service.scoring import ScoringEngine
from scoring_service.scoring.keying import item_number_to_id

console = Console(force_terminal=True, legacy_windows=True)
app = typer.Typer()


def results_table(
    respondent_ids: list[str], results: list[ScoringResult]
) -> Table:
    table = Table(title="Reported Types")
    table.add_column("Respondent", style="cyan")
    table.add_column("Type", style="bold")
    for dichotomy in Dichotomy:
        table.add_column(dichotomy.value, justify="right")
    table.add_column("Answered", justify="right")

    for respondent_id, result in zip(respondent_ids, results):
        cells = [
            f"{result[d].preference} {result[d].pci:>2} ({result[d].pcc.value})"
            for d in Dichotomy
        ]
        table.add_row(
            respondent_id,
            result.type_code,
            *cells,
            f"{result.n_answered}/{result.n_items}",
        )
    return table


def save_results(
    respondent_ids: list[str], results: list[ScoringResult], output_path: Path
) -> None:
    """Save results to a json file keyed by respondent id."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = {
        respondent_id: result.model_dump(mode="json")
        for respondent_id, result in zip(respondent_ids, results)
    }
    with open(output_path, "w") as f:
        json.dump(payload, f, indent=4)


@app.command()
def main(
    input_path: Path = typer.Argument(
        ...,
        help="CSV with columns respondent_id, answer_string ('*' = omitted)",
    ),
    catalogue_path: Path | None = typer.Option(
        None,
        "-c",
        "--catalogue",
        help="Question catalogue JSON used to key choice letters",
    ),
    keyed: bool = typer.Option(
        False,
        "--keyed",
        help="Answer strings hold scored directions (1/0) instead of choices",
    ),
    item_table_path: Path | None = typer.Option(
        None,
        "--item-table",
        help="Item parameter table JSON (defaults to the packaged table)",
    ),
    output_path: Path | None = typer.Option(
        None,
        "-o",
        "--output",
        help="Write results as JSON to this path",
    ),
) -> None:
    """Score every respondent in a CSV file."""

    # Validate input
    if not input_path.exists():
        console.print(f"[red]File not found: {input_path}[/red]")
        raise typer.Exit(1)
    if not keyed and catalogue_path is None:
        console.print(
            "[red]A question catalogue (--catalogue) is required unless --keyed[/red]"
        )
        raise typer.Exit(1)

    try:
        item_table = load_item_table(item_table_path)
        catalogue = (
            QuestionCatalogue.from_json(catalogue_path)
            if catalogue_path is not None
            else None
        )
        engine = ScoringEngine(item_table=item_table, catalogue=catalogue)
        respondent_ids, answer_sets = load_answer_csv(input_path)
    except (ScoringError, ValueError) as e:
        console.print(f"[red]Error loading inputs: {e}[/red]")
        raise typer.Exit(1) from e

    console.print(
        Panel(
            f"[bold]Score Answers[/bold]\n\n"
            f"Input: [cyan]{input_path}[/cyan]\n"
            f"Respondents: [cyan]{len(respondent_ids)}[/cyan]\n"
            f"Item table: [cyan]v{item_table.version}[/cyan] "
            f"({item_table.n_items} items)\n"
            f"Mode: [cyan]{'keyed' if keyed else 'catalogue'}[/cyan]",
            title="Configuration",
        )
    )

    results: list[ScoringResult] = []
    try:
        for answers in answer_sets:
            if keyed:
                responses = {
                    item_number_to_id(number): int(value)
                    for number, value in answers.items()
                }
                results.append(engine.score_keyed(responses))
            else:
                results.append(engine.score(answers))
    except (ScoringError, ValueError) as e:
        console.print(f"[red]Scoring failed: {e}[/red]")
        raise typer.Exit(1) from e

    console.print(results_table(respondent_ids, results))

    if output_path is not None:
        save_results(respondent_ids, results, output_path)
        console.print(
            Panel(
                f"[bold green]Results saved[/bold green]\n\n"
                f"Output: [cyan]{output_path}[/cyan]",
                title="Done",
            )
        )


if __name__ == "__main__":
    app()
