from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from .errors import InvalidInputError, PipelineError
from .merge import merge_extracted_data
from .names import normalize_company_name
from .run_logger import log_step, new_run_id
from .transform import is_merged_dataset, normalize_period_record


STATUS_PROCESSING = "Processing"
STATUS_DONE = "Done"
STATUS_ERROR = "Error"


def _reuse_merged(data: Dict[str, Any]) -> Dict[str, Any]:
    # Already normalized and merged, e.g. a stored report posted back.
    dataset = dict(data)
    years = [str(year) for year in data["years"]]
    dataset["years"] = years
    dataset["companyName"] = normalize_company_name(data.get("companyName"))
    dataset["fiscalYear"] = data.get("fiscalYear") or (years[-1] if years else "N/A")
    return dataset


def build_dataset(records: Sequence[Dict[str, Any]]) -> Tuple[Dict[str, Any], bool]:
    if not isinstance(records, (list, tuple)):
        raise InvalidInputError("records must be a list of extraction records")
    if not records:
        raise InvalidInputError("at least one extraction record is required")
    if any(is_merged_dataset(record or {}) for record in records):
        if len(records) > 1:
            raise InvalidInputError("a merged dataset cannot be combined with other records")
        return _reuse_merged(records[0]), True
    normalized = [normalize_period_record(record) for record in records]
    if len(normalized) == 1:
        return normalized[0], False
    return merge_extracted_data(normalized), True


def run_batch(
    files: Sequence[Tuple[str, Any]],
    extractor,
    max_files: int = 3,
    log_dir: Optional[Path] = None,
    on_status: Optional[Callable[[int, str, str], None]] = None,
) -> Dict[str, Any]:
    """Extract, normalize and merge up to ``max_files`` uploaded documents in order.

    ``extractor`` provides ``extract_financial_data(name, payload)`` and
    ``extract_qualitative_events(name, payload)``. A file whose extraction comes back
    empty is marked ``Error`` and skipped; an exception aborts the rest of the batch.
    """
    if not files:
        raise InvalidInputError("no files to process")

    run_id = new_run_id()
    queue = list(files)[:max_files]
    statuses: List[Dict[str, Any]] = [{"fileName": name, "status": "Pending"} for name, _ in queue]
    records: List[Dict[str, Any]] = []

    def _set_status(index: int, status: str) -> None:
        statuses[index]["status"] = status
        log_step(log_dir, "file_status", dict(statuses[index], index=index), run_id)
        if on_status is not None:
            on_status(index, statuses[index]["fileName"], status)

    current = 0
    try:
        for current, (name, payload) in enumerate(queue):
            _set_status(current, STATUS_PROCESSING)
            data = extractor.extract_financial_data(name, payload)
            if not data:
                _set_status(current, STATUS_ERROR)
                continue
            record = dict(data)
            events = extractor.extract_qualitative_events(name, payload)
            if events:
                record["qualitativeEvents"] = events
            record["_fileName"] = name
            records.append(record)
            _set_status(current, STATUS_DONE)
    except Exception as exc:
        if statuses[current]["status"] == STATUS_PROCESSING:
            statuses[current]["status"] = STATUS_ERROR
        log_step(log_dir, "batch_failed", {"error": str(exc), "statuses": statuses}, run_id)
        raise PipelineError(str(exc) or "Failed to process files", statuses) from exc

    if not records:
        log_step(log_dir, "batch_empty", {"statuses": statuses}, run_id)
        raise PipelineError("Could not extract data from the uploaded documents", statuses)

    extracted_data, is_merged = build_dataset(records)
    if is_merged and extracted_data["duplicateYears"]:
        log_step(log_dir, "duplicate_years", {"years": extracted_data["duplicateYears"]}, run_id)

    result: Dict[str, Any] = {
        "fileName": ", ".join(name for name, _ in queue) if is_merged else records[0]["_fileName"],
        "companyName": extracted_data["companyName"],
        "fiscalYear": extracted_data["fiscalYear"],
        "extractedData": extracted_data,
        "isMerged": is_merged,
        "statuses": statuses,
        "runId": run_id,
    }
    if is_merged:
        result["fiscalYears"] = list(extracted_data["years"])
    log_step(
        log_dir,
        "batch_completed",
        {
            "fileName": result["fileName"],
            "companyName": result["companyName"],
            "fiscalYear": result["fiscalYear"],
            "isMerged": is_merged,
            "records": len(records),
        },
        run_id,
    )
    return result


def save_result(store, result: Dict[str, Any]) -> Dict[str, Any]:
    if result.get("isMerged"):
        return store.add_merged_report(
            {
                "fileName": result.get("fileName"),
                "companyName": result.get("companyName"),
                "fiscalYears": result.get("fiscalYears"),
                "extractedData": result["extractedData"],
            }
        )
    return store.add_report(
        {
            "fileName": result.get("fileName"),
            "companyName": result.get("companyName"),
            "fiscalYear": result.get("fiscalYear"),
            "extractedData": result["extractedData"],
        }
    )
