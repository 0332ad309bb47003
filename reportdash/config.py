import os
from dataclasses import dataclass
from dotenv import load_dotenv


@dataclass
class AppConfig:
    report_store_path: str
    max_reports: int
    batch_max_files: int
    run_log_dir: str
    debug: bool


def _bounded_int(name: str, default: int, low: int, high: int) -> int:
    try:
        value = int(os.getenv(name, str(default)))
    except ValueError:
        value = default
    return max(low, min(value, high))


def load_config() -> AppConfig:
    load_dotenv()
    return AppConfig(
        report_store_path=os.getenv("REPORT_STORE_PATH", "outputs/reports.json"),
        max_reports=_bounded_int("REPORT_MAX_REPORTS", 5, 1, 50),
        batch_max_files=_bounded_int("BATCH_MAX_FILES", 3, 1, 10),
        run_log_dir=os.getenv("RUN_LOG_DIR", "outputs/logs"),
        debug=os.getenv("DEBUG", "false").lower() == "true",
    )
