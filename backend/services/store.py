"""Analysis persistence.

Results cross the store boundary as versioned records, the same shape a
database-backed store would persist.
"""

import logging
from typing import Any, Protocol

from models.schemas.analysis_result import AnalysisResult
from services.errors import AnalysisNotFoundError, StaleRunError

logger = logging.getLogger(__name__)


class AnalysisStore(Protocol):
    def __contains__(self, analysis_id: str) -> bool: ...

    def save(self, result: AnalysisResult, expected_run: int | None = None) -> None: ...

    def get(self, analysis_id: str) -> AnalysisResult: ...


class InMemoryAnalysisStore:
    def __init__(self) -> None:
        self._records: dict[str, dict[str, Any]] = {}

    def __contains__(self, analysis_id: str) -> bool:
        return analysis_id in self._records

    def __len__(self) -> int:
        return len(self._records)

    def save(self, result: AnalysisResult, expected_run: int | None = None) -> None:
        """Persist ``result``.

        With ``expected_run``, the write only succeeds while the stored record
        still belongs to that run; a retry in between raises StaleRunError.
        """
        if expected_run is not None:
            stored = self._records.get(result.id)
            if stored is not None and stored.get("run") != expected_run:
                raise StaleRunError(
                    f"Analysis {result.id} is on run {stored.get('run')}, not {expected_run}"
                )
        self._records[result.id] = result.to_record()

    def get(self, analysis_id: str) -> AnalysisResult:
        record = self._records.get(analysis_id)
        if record is None:
            raise AnalysisNotFoundError(analysis_id)
        return AnalysisResult.from_record(record)

    def delete(self, analysis_id: str) -> None:
        self._records.pop(analysis_id, None)
