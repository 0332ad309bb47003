"""JSON-lines step log shared by the batch pipeline and the report store."""
import json
import time
import uuid
from pathlib import Path
from typing import Any, Dict, List, Optional


LOG_FILE_NAME = "pipeline.log"


def new_run_id() -> str:
    return uuid.uuid4().hex[:12]


def log_step(
    output_dir: Optional[Path],
    step: str,
    payload: Dict[str, Any],
    run_id: Optional[str] = None,
) -> None:
    """Append one ``{"ts", "run", "step", "payload"}`` line; no-op without a directory."""
    if output_dir is None:
        return
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    entry = {"ts": time.time(), "run": run_id, "step": step, "payload": payload}
    with open(output_dir / LOG_FILE_NAME, "a", encoding="utf-8") as f:
        f.write(json.dumps(entry, ensure_ascii=False, default=str) + "\n")


def read_steps(output_dir: Path, run_id: Optional[str] = None) -> List[Dict[str, Any]]:
    log_path = Path(output_dir) / LOG_FILE_NAME
    if not log_path.exists():
        return []
    entries = []
    for line in log_path.read_text(encoding="utf-8").splitlines():
        if not line.strip():
            continue
        entry = json.loads(line)
        if run_id is None or entry.get("run") == run_id:
            entries.append(entry)
    return entries
