"""Shared fixtures for trackergraph tests."""

import pytest

from trackergraph.model import Task, TaskStatus


@pytest.fixture
def chain_tasks():
    """1 (done) <- 2 (16h) <- 3 (8h)."""
    return [
        Task(id=1, status=TaskStatus.DONE),
        Task(id=2, status=TaskStatus.PENDING, estimated_effort_hours=16, depends_on={1}),
        Task(id=3, status=TaskStatus.PENDING, estimated_effort_hours=8, depends_on={2}),
    ]


@pytest.fixture
def diamond_tasks():
    """1 -> {2, 3} -> 4, with 3 the heavier branch, plus an isolated task 5."""
    return [
        Task(id=1, estimated_effort_hours=8, name="Design"),
        Task(id=2, estimated_effort_hours=8, depends_on={1}, name="Backend"),
        Task(id=3, estimated_effort_hours=40, depends_on={1}, name="Frontend", priority="HIGH"),
        Task(id=4, estimated_effort_hours=4, depends_on={2, 3}, name="Release"),
        Task(id=5, estimated_effort_hours=12, name="Docs"),
    ]
