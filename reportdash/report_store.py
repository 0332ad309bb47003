import json
import threading
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from .run_logger import log_step


MAX_REPORTS = 5

ChangeListener = Callable[[Dict[str, Any]], None]


class ReportStore:
    """Bounded, persisted list of reports, newest first, with a selection pointer.

    Index ``0`` is the most recent report. ``navigate_prev`` moves towards older
    reports and ``navigate_next`` towards newer ones.
    """

    def __init__(
        self,
        path: Optional[Path] = None,
        max_reports: int = MAX_REPORTS,
        log_dir: Optional[Path] = None,
    ) -> None:
        self.path = Path(path) if path else None
        self.log_dir = log_dir
        self.max_reports = max_reports
        self._reports: List[Dict[str, Any]] = []
        self._current_index = -1
        self._listeners: List[ChangeListener] = []
        self._lock = threading.RLock()
        self._load()

    def _load(self) -> None:
        if self.path is None or not self.path.exists():
            return
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError):
            data = {}
        if not isinstance(data, dict):
            data = {}
        reports = data.get("reports")
        self._reports = reports[: self.max_reports] if isinstance(reports, list) else []
        index = data.get("currentIndex", -1)
        if not isinstance(index, int) or not -1 <= index < len(self._reports):
            index = 0 if self._reports else -1
        self._current_index = index

    def _save(self) -> None:
        if self.path is None:
            return
        payload = {"reports": self._reports, "currentIndex": self._current_index}
        # The in-memory list stays authoritative when the file cannot be written.
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(payload, f, ensure_ascii=False, indent=2)
        except OSError as exc:
            log_step(self.log_dir, "store_save_failed", {"path": str(self.path), "error": str(exc)})

    def subscribe(self, listener: ChangeListener) -> Callable[[], None]:
        with self._lock:
            self._listeners.append(listener)

        def _unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return _unsubscribe

    def _changed(self) -> None:
        self._save()
        event = {
            "report": self.get_current_report(),
            "index": self._current_index,
            "count": len(self._reports),
        }
        for listener in list(self._listeners):
            listener(event)

    def _insert(self, report: Dict[str, Any]) -> Dict[str, Any]:
        with self._lock:
            self._reports.insert(0, report)
            del self._reports[self.max_reports :]
            self._current_index = 0
            self._changed()
        return report

    def add_report(self, report: Dict[str, Any]) -> Dict[str, Any]:
        return self._insert(
            {
                "id": uuid.uuid4().hex,
                "fileName": report.get("fileName"),
                "companyName": report.get("companyName") or "Unknown Company",
                "fiscalYear": report.get("fiscalYear") or "N/A",
                "isMerged": False,
                "extractedData": report.get("extractedData"),
                "uploadedAt": _now_iso(),
            }
        )

    def add_merged_report(self, report: Dict[str, Any]) -> Dict[str, Any]:
        years = report.get("fiscalYears") or (report.get("extractedData") or {}).get("years") or []
        if len(years) > 1:
            year_range = f"{years[0]}-{years[-1]}"
        else:
            year_range = years[0] if years else "N/A"
        return self._insert(
            {
                "id": uuid.uuid4().hex,
                "fileName": report.get("fileName"),
                "companyName": report.get("companyName") or "Unknown Company",
                "fiscalYear": year_range,
                "fiscalYears": list(years),
                "isMerged": True,
                "extractedData": report.get("extractedData"),
                "uploadedAt": _now_iso(),
            }
        )

    def get_reports(self) -> List[Dict[str, Any]]:
        with self._lock:
            return list(self._reports)

    def get_current_report(self) -> Optional[Dict[str, Any]]:
        with self._lock:
            if 0 <= self._current_index < len(self._reports):
                return self._reports[self._current_index]
            return None

    def get_current_index(self) -> int:
        with self._lock:
            return self._current_index

    def get_report_count(self) -> int:
        with self._lock:
            return len(self._reports)

    def set_current_index(self, index: int) -> bool:
        with self._lock:
            if not 0 <= index < len(self._reports):
                return False
            self._current_index = index
            self._changed()
            return True

    def can_navigate_prev(self) -> bool:
        with self._lock:
            return self._current_index < len(self._reports) - 1

    def can_navigate_next(self) -> bool:
        with self._lock:
            return self._current_index > 0

    def navigate_prev(self) -> bool:
        with self._lock:
            if not self.can_navigate_prev():
                return False
            self._current_index += 1
            self._changed()
            return True

    def navigate_next(self) -> bool:
        with self._lock:
            if not self.can_navigate_next():
                return False
            self._current_index -= 1
            self._changed()
            return True

    def delete_report(self, index: int) -> bool:
        with self._lock:
            if not 0 <= index < len(self._reports):
                return False
            del self._reports[index]
            if not self._reports:
                self._current_index = -1
            elif self._current_index >= len(self._reports):
                self._current_index = len(self._reports) - 1
            self._changed()
            return True

    def clear_reports(self) -> None:
        with self._lock:
            self._reports = []
            self._current_index = -1
            self._changed()


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()
