"""CLI startup entrypoint for Colony Advisor."""

from __future__ import annotations

import typer
from rich import print

from colony_advisor.catalog import BUILDING_COSTS, RECOMMENDABLE_BUILDINGS, RESOURCE_BASE_VALUES
from colony_advisor.cli import CliSessionHandler, MoveCommandParser
from colony_advisor.config import settings
from colony_advisor.game_state import StateContractError, load_state_file
from colony_advisor.planning import recommend_moves
from colony_advisor.session import AdvisorSession
from colony_advisor.telemetry import LoggingTelemetry, configure_logging

app = typer.Typer(help="Colony Advisor: ranked move advice for two-player rounds")


@app.callback()
def main(log_level: str = typer.Option(None, help="Override the configured log level")) -> None:
    configure_logging(log_level or settings.log_level)


@app.command()
def start() -> None:
    """Show runtime configuration."""
    print(settings.model_dump())


@app.command()
def catalog() -> None:
    """Print plantation values and building tables."""
    recommendable = {spec.name for spec in RECOMMENDABLE_BUILDINGS}
    print(
        {
            "plantations": {resource.value: value for resource, value in RESOURCE_BASE_VALUES.items()},
            "buildings": [
                {
                    "name": spec.name,
                    "cost": spec.cost,
                    "category": spec.category.value,
                    "plantation": spec.resource.value if spec.resource else None,
                    "base_value": spec.base_value,
                }
                for spec in RECOMMENDABLE_BUILDINGS
            ],
            "costs_only": {name: cost for name, cost in BUILDING_COSTS.items() if name not in recommendable},
        }
    )


@app.command()
def recommend(
    state_file: str = typer.Argument(..., help="Path to a JSON game state"),
    limit: int = typer.Option(None, help="How many recommendations to show"),
) -> None:
    """Rank the moves available in a saved game state."""
    try:
        state = load_state_file(state_file)
    except StateContractError as exc:
        print({"error": str(exc)})
        raise typer.Exit(code=1)

    recommendations = recommend_moves(state, preference_weight=settings.preference_weight)
    shown = recommendations[: limit or settings.display_count]
    print({"recommendations": [recommendation.to_payload() for recommendation in shown]})


@app.command()
def play() -> None:
    """Track a game interactively and ask for advice before each pick."""
    telemetry = LoggingTelemetry() if settings.telemetry_enabled else None
    handler = CliSessionHandler(AdvisorSession(settings=settings, telemetry=telemetry), MoveCommandParser())
    print(
        {
            "session": "started",
            "first_player": handler.session.first_player.value,
            "hint": "Commands: round <tiles>, recommend, take <n>, affirm <n>, me/opp <role> [item], "
            "money <me|opp> <n>, status, history, swap, reset, quit",
        }
    )

    while True:
        try:
            line = input("> ")
        except EOFError:
            break
        if not line.strip():
            continue

        response = handler.handle(line)
        print(response)
        if response.get("quit"):
            break

    print({"session": "stopped"})


if __name__ == "__main__":
    app()
