"""
Test doubles for the aspect and account tests.
"""
from typing import List, Optional

from starter.core.structured_logging import LoggerServiceBase


class FakeHandle:
    """Transaction handle that records what happened to it."""

    def __init__(
        self,
        events: List[str],
        context: Optional[str] = None,
        fail_commit: bool = False,
        fail_rollback: bool = False,
    ):
        self.events = events
        self.context = context
        self.fail_commit = fail_commit
        self.fail_rollback = fail_rollback

    async def commit(self):
        self.events.append("commit")
        if self.fail_commit:
            raise RuntimeError("commit failed")

    async def rollback(self):
        self.events.append("rollback")
        if self.fail_rollback:
            raise RuntimeError("rollback failed")


class FakeUnitOfWork:
    def __init__(self, fail_commit: bool = False, fail_rollback: bool = False):
        self.events: List[str] = []
        self.contexts: List[Optional[str]] = []
        self.fail_commit = fail_commit
        self.fail_rollback = fail_rollback

    async def begin_transaction(self, context=None):
        self.events.append("begin")
        self.contexts.append(context)
        return FakeHandle(self.events, context, fail_commit=self.fail_commit, fail_rollback=self.fail_rollback)

    def count(self, event: str) -> int:
        return self.events.count(event)


class RecordingLogger(LoggerServiceBase):
    """Structured logger that keeps (level, message) pairs in memory."""

    def __init__(self):
        super().__init__("starter.tests.recording")
        self.records = []

    def info(self, message: str):
        self.records.append(("info", message))

    def error(self, message: str):
        self.records.append(("error", message))

    def messages(self, level: str) -> List[str]:
        return [m for lvl, m in self.records if lvl == level]


class FakeClock:
    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


