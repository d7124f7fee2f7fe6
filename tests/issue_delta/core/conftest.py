"""Shared fixtures for core tests."""
import pytest

from fakes import FakeComparisonStore, FakeExplanationStore, FakeLogger, FakeSnapshotStore


@pytest.fixture
def logger():
    return FakeLogger()


@pytest.fixture
def snapshots():
    return FakeSnapshotStore()


@pytest.fixture
def comparisons():
    return FakeComparisonStore()


@pytest.fixture
def explanations():
    return FakeExplanationStore()
