"""Mini README: Entry point CLI for the Canopyscan survey planner.

Commands:
    * run - start the FastAPI service with uvicorn.
    * plan - compute a survey flight for an estate described on the command
      line, with trees loaded from a JSON file of ``{"x", "y", "height"}``
      objects.

Settings come from ``CANOPYSCAN_`` environment variables when options are not
given explicitly.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import List, Optional

import typer
import uvicorn

from canopyscan.configuration import get_settings
from canopyscan.logging_utils import configure_root_logger
from canopyscan.survey_planning import SurveyPlanningError, TreePlacement, plan_survey

cli = typer.Typer(help="Plan plantation survey flights and serve the planning API.")


def _load_trees(path: Optional[Path]) -> List[TreePlacement]:
    """Read tree placements from a JSON list."""

    if path is None:
        return []
    try:
        entries = json.loads(path.read_text())
        return [
            TreePlacement(x=entry["x"], y=entry["y"], height=entry["height"])
            for entry in entries
        ]
    except (OSError, json.JSONDecodeError, KeyError, TypeError) as error:
        raise typer.BadParameter(f"Cannot read trees from {path}: {error}") from error


@cli.command()
def run(
    host: str = typer.Option(None, help="Host interface to bind."),
    port: int = typer.Option(None, help="Port to listen on."),
    production: bool = typer.Option(
        False, help="Use production server settings (disable auto-reload)."
    ),
) -> None:
    """Start the FastAPI application using uvicorn."""

    settings = get_settings()
    effective_host = host or settings.interface_host
    effective_port = port or settings.interface_port
    configure_root_logger(settings.log_level)

    # 0.0.0.0 is a bind address, not something a browser or curl can reach.
    browser_host = "127.0.0.1" if effective_host in {"0.0.0.0", "::"} else effective_host
    typer.echo(
        f"Starting Canopyscan on {effective_host}:{effective_port}.\n"
        f"Try http://{browser_host}:{effective_port}/health"
    )
    uvicorn.run(
        "canopyscan.interface.web_app:create_application",
        host=effective_host,
        port=effective_port,
        factory=True,
        reload=not production,
    )


@cli.command()
def plan(
    width: int = typer.Option(..., help="Estate width (number of rows)."),
    length: int = typer.Option(..., help="Estate length (number of columns)."),
    trees: Optional[Path] = typer.Option(None, help="JSON file listing trees."),
    max_distance: Optional[str] = typer.Option(
        None, "--max-distance", help="Flight-distance budget; 0 or less means unlimited."
    ),
) -> None:
    """Print the survey flight plan as JSON."""

    settings = get_settings()
    configure_root_logger(settings.log_level)
    try:
        result = plan_survey(
            width,
            length,
            _load_trees(trees),
            max_distance,
            max_dimension=settings.max_plot_dimension,
            max_height=settings.max_tree_height,
        )
    except SurveyPlanningError as error:
        typer.echo(f"Error: {error}", err=True)
        raise typer.Exit(code=1) from error
    typer.echo(json.dumps(result.as_dict()))


if __name__ == "__main__":
    cli()
