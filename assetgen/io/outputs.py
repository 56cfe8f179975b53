"""Output helpers for persisting generation results."""

from __future__ import annotations

import json
from collections import Counter
from dataclasses import asdict
from pathlib import Path
from typing import Any, Sequence

import pandas as pd

from .models import GenerationSummary, OutputAsset


def output_rows(outputs: Sequence[OutputAsset]) -> list[dict[str, Any]]:
    """Flatten *outputs* into one row per written file."""
    rows: list[dict[str, Any]] = []
    for output in outputs:
        for name, dest in output.destinations.items():
            info = output.output_info[name]
            rows.append(
                {
                    "kind": output.template.kind.value,
                    "template": output.template.name,
                    "source": str(output.asset.path),
                    "source_kind": output.asset.kind.value,
                    "destination": str(dest),
                    "bytes": info.size,
                    "width": info.width,
                    "height": info.height,
                }
            )
    return rows


def summarize(project: str, inputs: int, outputs: Sequence[OutputAsset]) -> GenerationSummary:
    rows = output_rows(outputs)
    per_kind = Counter(row["kind"] for row in rows)
    return GenerationSummary(
        project=project,
        inputs=inputs,
        outputs=len(rows),
        bytes_written=sum(row["bytes"] for row in rows),
        per_kind=dict(sorted(per_kind.items())),
    )


def write_output_table(path: Path, outputs: Sequence[OutputAsset]) -> Path | None:
    """Write one Parquet row per generated file to *path*; nothing is written when empty."""
    rows = output_rows(outputs)
    if not rows:
        return None
    df = pd.DataFrame(rows)
    path.parent.mkdir(parents=True, exist_ok=True)
    df.to_parquet(path, index=False, engine="pyarrow")
    return path


def write_summary(path: Path, summary: GenerationSummary) -> Path:
    """Write a run summary to *path* as JSON and return the path."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(asdict(summary), indent=2), encoding="utf-8")
    return path
