from typing import Any, Dict, List, Optional


class InvalidInputError(ValueError):
    """Raised when a pipeline operation receives input it cannot work with."""


class PipelineError(RuntimeError):
    """Aggregate failure of a batch run.

    ``statuses`` holds the per-file status list as it stood when the batch stopped.
    """

    def __init__(self, message: str, statuses: Optional[List[Dict[str, Any]]] = None) -> None:
        super().__init__(message)
        self.statuses = list(statuses or [])
