"""
Shared fixtures.
"""
import pytest

from tests.fakes import FakeClock, FakeUnitOfWork, RecordingLogger


@pytest.fixture
def unit_of_work():
    return FakeUnitOfWork()


@pytest.fixture
def recording_logger():
    return RecordingLogger()


@pytest.fixture
def clock():
    return FakeClock()
