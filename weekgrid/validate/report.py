from __future__ import annotations

import json
from pathlib import Path
from typing import Dict


def write_validation_report(report: Dict[str, object], outputs_dir: Path) -> None:
    outputs_dir.mkdir(parents=True, exist_ok=True)
    with (outputs_dir / "validation.json").open("w", encoding="utf-8") as f:
        json.dump(report, f, indent=2, ensure_ascii=False)


def format_validation_report(report: Dict[str, object]) -> str:
    lines: list[str] = []
    lines.append(f"clash_count: {report.get('clash_count')}")
    lines.append(f"filled_cells: {report.get('filled_cells')}")
    violations = report.get("violations_by_rule", {})
    lines.append("violations_by_rule:")
    if isinstance(violations, dict):
        for k, v in violations.items():
            lines.append(f"  - {k}: {len(v)}")
    unmet = report.get("unmet_weekly_loads", {})
    lines.append(f"unmet_weekly_loads: {len(unmet)} entries, {report.get('total_missing', 0)} lessons")
    if isinstance(unmet, dict):
        for k, v in unmet.items():
            lines.append(f"  - {k}: {v}")
    suggestions = report.get("placement_suggestions", [])
    if suggestions:
        lines.append("placement_suggestions:")
        for s in suggestions:
            lines.append(f"  - {s}")
    return "\n".join(lines)
