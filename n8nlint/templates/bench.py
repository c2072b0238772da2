# n8nlint/templates/bench.py

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

import pandas as pd

from n8nlint.templates.client import FetchedWorkflow
from n8nlint.utils.io import PathLike, ensure_dir, write_json
from n8nlint.utils.logger import get_logger
from n8nlint.validator import validate_workflow

logger = get_logger("bench")

BENCH_COLUMNS = ["id", "name", "valid", "n_errors", "n_warnings"]


def run_template_bench(
    workflows: Iterable[FetchedWorkflow],
    artifacts_dir: Optional[PathLike] = None,
) -> pd.DataFrame:
    """
    Validate fetched templates and return one row per workflow.

    With `artifacts_dir`, every failing workflow is saved as
    `workflow-<id>.json` ({id, name, result, workflow}) together with one
    timestamped `validation-failures-<ts>.json` summary.
    """
    rows: List[Dict[str, Any]] = []
    failures: List[Dict[str, Any]] = []

    for fw in workflows:
        result = validate_workflow(fw.workflow)
        rows.append({
            "id": fw.id,
            "name": fw.name,
            "valid": result.valid,
            "n_errors": len(result.errors),
            "n_warnings": len(result.warnings),
        })
        if not result.valid:
            logger.info("template %s (%s) failed with %d error(s)", fw.id, fw.name, len(result.errors))
            failures.append({"id": fw.id, "name": fw.name, "result": result.to_dict(), "workflow": fw.workflow})

    if artifacts_dir is not None and failures:
        _write_artifacts(Path(artifacts_dir), failures, total=len(rows))

    return pd.DataFrame(rows, columns=BENCH_COLUMNS)


def _write_artifacts(out_dir: Path, failures: List[Dict[str, Any]], total: int) -> Path:
    ensure_dir(out_dir)
    now = datetime.now(timezone.utc)
    stamp = now.strftime("%Y-%m-%dT%H-%M-%S-%fZ")

    for f in failures:
        write_json(out_dir / f"workflow-{f['id']}.json", f)

    summary = {
        "timestamp": now.isoformat(),
        "totalTested": total,
        "failedCount": len(failures),
        "failures": [
            {
                "id": f["id"],
                "name": f["name"],
                "errors": f["result"]["errors"],
                "warnings": f["result"]["warnings"],
            }
            for f in failures
        ],
    }
    return write_json(out_dir / f"validation-failures-{stamp}.json", summary)
