import pytest

from issue_delta.core.domain.exceptions import AnalysisNotFoundError, IdenticalVersionsError, VersionOrderError
from issue_delta.core.services import ChangeClassifier, IssueMatcher, ResultAggregator
from issue_delta.core.usecases.compare import CompareVersionsUseCase

from fakes import FakeSnapshotStore, make_issue, make_snapshot


@pytest.fixture
def store():
    return FakeSnapshotStore([
        make_snapshot("old", [make_issue("NESTED_LOOP", "high")], minutes=0),
        make_snapshot("new", [make_issue("NESTED_LOOP", "low")], minutes=10),
        make_snapshot("twin", [], minutes=10),
    ])


@pytest.fixture
def uc(store, comparisons, logger):
    aggregator = ResultAggregator(
        snapshots=store,
        comparisons=comparisons,
        matcher=IssueMatcher(),
        classifier=ChangeClassifier(),
        logger=logger,
    )
    return CompareVersionsUseCase(aggregator=aggregator, snapshots=store)


def test_execute_returns_comparison(uc):
    comparison = uc.execute(from_version_id="old", to_version_id="new")

    assert comparison.results[0].change_type.value == "IMPROVED"


def test_execute_is_idempotent(uc):
    first = uc.execute(from_version_id="old", to_version_id="new")
    second = uc.execute(from_version_id="old", to_version_id="new")

    assert first == second


def test_order_puts_earlier_upload_first(uc):
    assert uc.order("new", "old") == ("old", "new")
    assert uc.order("old", "new") == ("old", "new")


def test_order_rejects_simultaneous_uploads(uc):
    with pytest.raises(VersionOrderError):
        uc.order("new", "twin")


def test_order_rejects_identical_and_missing(uc):
    with pytest.raises(IdenticalVersionsError):
        uc.order("old", "old")
    with pytest.raises(AnalysisNotFoundError):
        uc.order("old", "ghost")
