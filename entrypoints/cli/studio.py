from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional

import typer
from loguru import logger

from thirdspace.adapters.config import config
from thirdspace.services.projections import project_payload
from thirdspace.services.report import export_report
from thirdspace.services.summary import build_summary

app = typer.Typer(help="3rd Space financial model (projection, report export).")


def _load_assumptions(path: Optional[Path]) -> Dict[str, Any]:
    if path is None:
        return {}
    with path.open("r", encoding="utf-8") as f:
        payload = json.load(f)
    # accept a saved-model record as well as a bare assumption payload
    if isinstance(payload, dict) and isinstance(payload.get("data"), dict):
        payload = payload["data"]
    if not isinstance(payload, dict):
        raise typer.BadParameter("assumptions file must contain a JSON object")
    return payload


@app.command()
def project(
    assumptions: Optional[Path] = typer.Option(
        None, "--assumptions", "-a", help="JSON file with (partial) assumptions; defaults fill the rest"
    ),
) -> None:
    """
    Print the dashboard header cards for a set of assumptions.
    """
    a, projection = project_payload(_load_assumptions(assumptions))
    for key, card in build_summary(a, projection).items():
        extra = "  ".join(f"{k}={v}" for k, v in card.items() if k not in {"value", "display"})
        typer.echo(f"{key:<22} {card['display']:>14}  {extra}".rstrip())


@app.command()
def export(
    out_dir: Optional[Path] = typer.Option(
        None, "--out-dir", help=f"Directory for report files (default: {config.REPORT_DIR})"
    ),
    assumptions: Optional[Path] = typer.Option(None, "--assumptions", "-a"),
    fmt: str = typer.Option("csv", "--format", help="csv|parquet"),
) -> None:
    """
    Write monthly / yearly / mix / sensitivity tables and summary.json.
    """
    target = out_dir or Path(config.REPORT_DIR)
    written = export_report(_load_assumptions(assumptions), target, fmt=fmt)
    logger.info("Export finished", out_dir=str(target))
    for name, path in written.items():
        typer.echo(f"{name}: {path}")


if __name__ == "__main__":
    app()
