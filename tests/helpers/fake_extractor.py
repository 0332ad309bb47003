from typing import Any, Dict, List, Optional


class FakeExtractor:
    def __init__(
        self,
        records: Dict[str, Any],
        events: Optional[Dict[str, List[Dict[str, Any]]]] = None,
    ) -> None:
        self._records = dict(records)
        self._events = dict(events or {})
        self.calls: List[str] = []

    def extract_financial_data(self, name: str, payload: Any) -> Optional[Dict[str, Any]]:
        self.calls.append(name)
        record = self._records.get(name)
        if isinstance(record, Exception):
            raise record
        return record

    def extract_qualitative_events(self, name: str, payload: Any) -> List[Dict[str, Any]]:
        return list(self._events.get(name, []))
