# thirdspace/services/report.py

from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, Mapping

import pandas as pd
from loguru import logger

from thirdspace.adapters.storage import write_df
from thirdspace.domain.assumptions import AssumptionSet
from thirdspace.domain.projection import Projection
from thirdspace.services.projections import json_safe_value, project_payload
from thirdspace.services.summary import build_summary


def projection_frames(projection: Projection) -> Dict[str, pd.DataFrame]:
    """
    Tabular views of a Projection, one frame per dashboard chart.

      - monthly: 12 rows, Jan..Dec cash flow with the family split
      - years: Year 1..3 revenue / expenses / net / cumulative
      - revenue_mix: Year 1 revenue per family plus share of total
      - conversion_sensitivity: members and revenue per conversion rate
      - utilization_revenue: annual revenue potential at 40-85% utilization
      - startup_costs / operating_costs: cost lines with their share of the total
    """
    monthly = pd.DataFrame([asdict(m) for m in projection.monthly_data])
    years = pd.DataFrame([asdict(y) for y in projection.year_comparison])

    mix = pd.DataFrame([asdict(s) for s in projection.revenue_mix])
    total = mix["value"].sum()
    mix["share"] = mix["value"] / total if total else float("nan")

    sensitivity = pd.DataFrame([asdict(c) for c in projection.market.conversion_sensitivity])
    utilization = pd.DataFrame([asdict(s) for s in projection.capacity.revenue_at_utilization])
    startup = pd.DataFrame([asdict(i) for i in projection.startup_breakdown])
    operating = pd.DataFrame([asdict(i) for i in projection.operating_breakdown])

    return {
        "monthly": monthly,
        "years": years,
        "revenue_mix": mix,
        "conversion_sensitivity": sensitivity,
        "utilization_revenue": utilization,
        "startup_costs": startup,
        "operating_costs": operating,
    }


def export_report(
    assumptions: AssumptionSet | Mapping[str, Any] | None,
    out_dir: Path,
    fmt: str = "csv",
) -> Dict[str, Path]:
    """
    Project `assumptions` and write every frame plus summary.json to out_dir.

    A mapping is treated as a wire payload overlaid on the defaults.
    Returns the written paths keyed by frame name ("summary" for the JSON).
    """
    if fmt not in {"csv", "parquet"}:
        raise ValueError(f"unsupported report format: {fmt}")

    if isinstance(assumptions, AssumptionSet):
        a, projection = project_payload({}, base=assumptions)
    else:
        a, projection = project_payload(assumptions)

    out_dir = Path(out_dir)
    logger.info("Writing projection report", out_dir=str(out_dir), fmt=fmt)

    written: Dict[str, Path] = {}
    for name, df in projection_frames(projection).items():
        path = out_dir / f"{name}.{fmt}"
        write_df(df, str(path))
        written[name] = path

    summary = {
        "assumptions": a.to_payload(),
        "cards": build_summary(a, projection),
    }
    summary_path = out_dir / "summary.json"
    summary_path.parent.mkdir(parents=True, exist_ok=True)
    with summary_path.open("w", encoding="utf-8") as f:
        json.dump(json_safe_value(summary), f, indent=2, default=str)
    written["summary"] = summary_path

    logger.info("Projection report written", files=len(written))
    return written
