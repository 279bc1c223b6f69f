"""JSON input loading and output writing."""

import json
from datetime import date, datetime
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel

from contribution_charts.exceptions import ReportParseError


def serialize_for_json(obj: Any) -> Any:
    """Convert objects to JSON-serializable format."""
    if isinstance(obj, datetime):
        return obj.isoformat()
    elif isinstance(obj, date):
        return obj.isoformat()
    elif hasattr(obj, "to_chart"):
        return obj.to_chart()
    elif isinstance(obj, BaseModel):
        return serialize_for_json(obj.model_dump())
    elif isinstance(obj, dict):
        return {str(k): serialize_for_json(v) for k, v in obj.items()}
    elif isinstance(obj, (list, tuple)):
        return [serialize_for_json(item) for item in obj]
    return obj


def read_json(path: Path) -> Any:
    """Read a JSON document.

    Raises:
        ReportParseError: If the file is missing or is not valid JSON
    """
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except OSError as e:
        raise ReportParseError(f"Cannot read {path}: {e.strerror}", path=str(path)) from e
    except json.JSONDecodeError as e:
        raise ReportParseError(f"Invalid JSON in {path}: {e}", path=str(path)) from e


def write_json_report(
    report: Any,
    output_path: Optional[Path] = None,
    name: Optional[str] = None,
) -> Path:
    """Write a report to a JSON file.

    Args:
        report: Report data (models are serialized)
        output_path: Output file path (optional)
        name: Name prefix for the default filename

    Returns:
        Path to written file
    """
    if output_path is None:
        # Generate default path
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        output_dir = Path("output")
        output_dir.mkdir(exist_ok=True)
        output_path = output_dir / f"{name or 'contributions'}_{timestamp}.json"

    # Ensure parent directory exists
    output_path.parent.mkdir(parents=True, exist_ok=True)

    # Write JSON with pretty formatting
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(serialize_for_json(report), f, indent=2, ensure_ascii=False, default=str)

    return output_path
