"""
Unit tests for MigrationCatalog and MigrationStep.
"""
import pytest

from chatstore.migrations import DEFAULT_CATALOG, LATEST_REVISION, MigrationCatalog, MigrationStep
from chatstore.migrations.steps import STEP_MODULES


async def noop(db):
    return None


def step(floor: int) -> MigrationStep:
    return MigrationStep(floor, f"step {floor}", noop)


class TestMigrationStep:
    """Guard predicate and module loading."""

    def test_guard_runs_at_and_below_floor(self):
        s = step(5)
        assert s.should_run(0) is True
        assert s.should_run(5) is True
        assert s.should_run(6) is False

    def test_from_module(self):
        s = MigrationStep.from_module(STEP_MODULES[3])
        assert s.revision_floor == 3
        assert s.date == "2021-05-25"
        assert "multiple file uploads" in s.description
        assert s.label == "revision 3 / 2021-05-25"

    def test_label_without_date(self):
        assert step(2).label == "revision 2"


class TestMigrationCatalog:
    """Ordering invariants and derived latest revision."""

    def test_latest_revision_is_max_floor_plus_one(self):
        catalog = MigrationCatalog([step(1), step(2), step(4)])
        assert catalog.latest_revision == 5

    def test_iteration_is_restartable(self):
        catalog = MigrationCatalog([step(0), step(1)])
        assert [s.revision_floor for s in catalog] == [0, 1]
        assert [s.revision_floor for s in catalog] == [0, 1]
        assert len(catalog) == 2

    def test_rejects_unordered_floors(self):
        with pytest.raises(ValueError):
            MigrationCatalog([step(2), step(1)])

    def test_rejects_duplicate_floors(self):
        with pytest.raises(ValueError):
            MigrationCatalog([step(1), step(1)])

    def test_rejects_negative_floor(self):
        with pytest.raises(ValueError):
            MigrationCatalog([step(-1)])

    def test_rejects_empty_catalog(self):
        with pytest.raises(ValueError):
            MigrationCatalog([])


class TestDefaultCatalog:
    """The built-in catalog."""

    def test_floors_are_contiguous_from_zero(self):
        assert DEFAULT_CATALOG.floors == list(range(8))

    def test_latest_revision_matches_catalog(self):
        assert LATEST_REVISION == DEFAULT_CATALOG.latest_revision == 8

    def test_every_step_has_description_and_date(self):
        for s in DEFAULT_CATALOG:
            assert s.description
            assert s.date
