"""
QuestionPoolStore tests
Upload gates, versioning and the swap-and-read protocol
"""
import threading
import pytest

from exam_paper.core.exceptions import (
    EmptyPoolError,
    MissingMetadataError,
    PoolTooSmallError,
    ValidationError,
)
from exam_paper.schemas.question import QuestionItem
from exam_paper.services.pool_store import QuestionPoolStore


class TestReplace:
    """replace()"""

    def test_first_upload(self, pool_store, full_bank):
        """Version 1 and a summary of the pool"""
        summary = pool_store.replace(full_bank)

        assert summary.version == 1
        assert summary.question_count == 45
        assert summary.per_unit == {1: 9, 2: 9, 3: 9, 4: 9, 5: 9}
        assert summary.per_level["1"] == 10
        assert summary.recall_tier == 10
        assert summary.higher_tiers == 35
        assert pool_store.version == 1

    def test_replace_bumps_version(self, pool_store, full_bank):
        """Each upload replaces the pool and bumps the version"""
        pool_store.replace(full_bank)
        pool_store.replace(full_bank[:20])

        pool = pool_store.snapshot()
        assert pool.version == 2
        assert len(pool) == 20

    def test_empty_upload(self, pool_store):
        with pytest.raises(EmptyPoolError):
            pool_store.replace([])

    def test_too_small(self, pool_store, full_bank):
        """Below the size gate -> PoolTooSmall with counts"""
        with pytest.raises(PoolTooSmallError) as exc:
            pool_store.replace(full_bank[:16])

        assert exc.value.details == {"have": 16, "need": 17}

    def test_missing_metadata(self, pool_store, full_bank):
        """First row without a branch -> MissingMetadata"""
        first = full_bank[0].model_copy(update={"branch": ""})

        with pytest.raises(MissingMetadataError) as exc:
            pool_store.replace([first] + full_bank[1:])

        assert exc.value.details["field"] == "branch"

    def test_duplicate_ids(self, pool_store, full_bank):
        with pytest.raises(ValidationError):
            pool_store.replace(full_bank + [full_bank[0]])

    def test_failed_upload_keeps_previous_pool(self, pool_store, full_bank):
        """A rejected upload leaves the active pool untouched"""
        pool_store.replace(full_bank)

        with pytest.raises(PoolTooSmallError):
            pool_store.replace(full_bank[:3])

        pool = pool_store.snapshot()
        assert pool.version == 1
        assert len(pool) == 45

    def test_summary_logged(self, pool_store, full_bank, capture_logs):
        """Upload summary goes to the log"""
        pool_store.replace(full_bank)

        assert "pool_replaced" in capture_logs.get_messages()


class TestSnapshot:
    """snapshot() and clear()"""

    def test_nothing_uploaded(self, pool_store):
        with pytest.raises(EmptyPoolError):
            pool_store.snapshot()

    def test_snapshot_survives_replace(self, pool_store, full_bank):
        """A snapshot taken before an upload keeps its own items"""
        pool_store.replace(full_bank)
        before = pool_store.snapshot()

        pool_store.replace(full_bank[:30])

        assert before.version == 1
        assert len(before) == 45
        assert pool_store.snapshot().version == 2

    def test_clear(self, pool_store, full_bank):
        pool_store.replace(full_bank)
        pool_store.clear()

        assert not pool_store.has_pool
        with pytest.raises(EmptyPoolError):
            pool_store.snapshot()


class TestConcurrency:
    """Uploads racing with readers"""

    def test_readers_see_whole_pools(self, item_factory):
        """Every snapshot is one upload, never a mix of two"""
        store = QuestionPoolStore(min_size=1, required_fields=[])
        banks = {
            size: item_factory([(1, "2", size)], start_id=size * 1000)
            for size in (20, 30, 40)
        }
        store.replace(banks[20])
        errors = []

        def writer():
            for i in range(200):
                store.replace(banks[(20, 30, 40)[i % 3]])

        def reader():
            for _ in range(500):
                pool = store.snapshot()
                size = len(pool)
                expected_ids = {q.id for q in banks[size]}
                if {q.id for q in pool.items} != expected_ids:
                    errors.append(pool.version)

        threads = [threading.Thread(target=writer)] + [threading.Thread(target=reader) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []
        assert store.version == 201


class TestQuestionItemModel:
    """QuestionItem invariants"""

    def test_immutable(self, full_bank):
        with pytest.raises(Exception):
            full_bank[0].unit = 3

    @pytest.mark.parametrize("unit, level", [(0, "1"), (6, "1"), (1, "0"), (1, "7")])
    def test_rejects_out_of_range(self, unit, level):
        with pytest.raises(Exception):
            QuestionItem(id=1, unit=unit, difficulty_level=level)
