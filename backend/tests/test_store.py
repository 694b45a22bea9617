import pytest

from models.schemas.analysis_result import SCHEMA_VERSION, AnalysisResult
from models.schemas.scoring import CategoryScores
from services.errors import AnalysisNotFoundError, SerializationError, StaleRunError
from services.store import InMemoryAnalysisStore


def _completed() -> AnalysisResult:
    return AnalysisResult(
        id="a1",
        resume_id="r1",
        status="completed",
        overall_score=72,
        category_scores=CategoryScores(content=73, structure=90, keywords=40, experience=70, skills=15),
        strengths=["Strong structure performance (90/100)"],
        summary="Good match!",
    )


class TestRecords:
    def test_round_trip(self):
        result = _completed()
        assert AnalysisResult.from_record(result.to_record()) == result

    def test_record_is_versioned_and_json_safe(self):
        record = _completed().to_record()
        assert record["schema_version"] == SCHEMA_VERSION
        assert isinstance(record["created_at"], str)
        assert record["category_scores"]["structure"] == 90

    def test_unknown_version_rejected(self):
        record = _completed().to_record()
        record["schema_version"] = 99
        with pytest.raises(SerializationError):
            AnalysisResult.from_record(record)

    def test_invalid_record_rejected(self):
        record = _completed().to_record()
        record["overall_score"] = 150
        with pytest.raises(SerializationError):
            AnalysisResult.from_record(record)

    def test_non_dict_rejected(self):
        with pytest.raises(SerializationError):
            AnalysisResult.from_record('{"id": "a1"}')


class TestInMemoryAnalysisStore:
    def test_save_and_get(self):
        store = InMemoryAnalysisStore()
        store.save(_completed())
        assert "a1" in store
        assert store.get("a1").overall_score == 72

    def test_get_missing(self):
        with pytest.raises(AnalysisNotFoundError) as exc_info:
            InMemoryAnalysisStore().get("nope")
        assert str(exc_info.value) == "Analysis not found: nope"

    def test_compare_and_set_on_run(self):
        store = InMemoryAnalysisStore()
        store.save(AnalysisResult(id="a1", resume_id="r1", run=2))
        with pytest.raises(StaleRunError):
            store.save(_completed(), expected_run=1)
        store.save(AnalysisResult(id="a1", resume_id="r1", run=2, status="processing"), expected_run=2)
        assert store.get("a1").status == "processing"

    def test_returned_results_are_copies(self):
        store = InMemoryAnalysisStore()
        store.save(_completed())
        first = store.get("a1")
        first.strengths.append("mutated")
        assert store.get("a1").strengths == ["Strong structure performance (90/100)"]
