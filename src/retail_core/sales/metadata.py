"""Metadata tracking for exported report stages.

Each export writes a JSON file next to its outputs recording when it ran,
which stage version produced it, whether it succeeded, and how many rows
each output holds.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass
class StageMetadata:
    """Metadata for a completed export stage.

    Attributes:
        stage: Stage name, e.g. "fact" or "marts".
        version: Version string for the stage logic.
        last_run: ISO timestamp of when stage was run.
        status: "ok" or "failed".
        row_counts: Rows written per output name.
    """

    stage: str
    version: str
    last_run: str
    status: str
    row_counts: dict[str, int] = field(default_factory=dict)


def _meta_path(stage_dir: Path, stage: str) -> Path:
    meta_dir = stage_dir / "_meta"
    meta_dir.mkdir(parents=True, exist_ok=True)
    return meta_dir / f"{stage}.json"


def write_metadata(stage_dir: Path, metadata: StageMetadata) -> None:
    """Write metadata file for a stage."""
    path = _meta_path(stage_dir, metadata.stage)
    path.write_text(json.dumps(asdict(metadata), indent=2))
    logger.debug("Wrote metadata: %s", path)


def read_metadata(stage_dir: Path, stage: str) -> Optional[StageMetadata]:
    """Read metadata file for a stage, if it exists and is valid."""
    path = _meta_path(stage_dir, stage)
    if not path.exists():
        return None
    try:
        data = json.loads(path.read_text())
        return StageMetadata(**data)
    except (ValueError, TypeError) as e:
        logger.warning("Error reading metadata %s: %s", path, e)
        return None
