"""Tests for the bounded task queue."""

import asyncio

import pytest

from locals_client.services.task_queue import TaskQueue


def _job(name: str, log: list[str], fail: bool = False):  # type: ignore[no-untyped-def]
    async def run() -> str:
        log.append(f"start:{name}")
        await asyncio.sleep(0)
        log.append(f"end:{name}")
        if fail:
            raise RuntimeError(name)
        return name

    return run


def test_single_worker_runs_jobs_one_after_another() -> None:
    log: list[str] = []
    queue = TaskQueue()

    outcomes = asyncio.run(queue.run([_job(n, log) for n in "abc"]))

    assert [o.value for o in outcomes] == ["a", "b", "c"]
    assert log == ["start:a", "end:a", "start:b", "end:b", "start:c", "end:c"]


def test_failures_are_captured_per_job() -> None:
    log: list[str] = []

    outcomes = asyncio.run(
        TaskQueue().run([_job("a", log), _job("b", log, fail=True), _job("c", log)])
    )

    assert [o.ok for o in outcomes] == [True, False, True]
    assert isinstance(outcomes[1].error, RuntimeError)
    assert outcomes[2].value == "c"


def test_parallel_workers_keep_result_order() -> None:
    log: list[str] = []

    outcomes = asyncio.run(TaskQueue(2).run([_job(n, log) for n in "abcd"]))

    assert [o.value for o in outcomes] == ["a", "b", "c", "d"]
    assert log[:2] == ["start:a", "start:b"]


def test_empty_run_and_invalid_concurrency() -> None:
    assert asyncio.run(TaskQueue().run([])) == []
    with pytest.raises(ValueError):
        TaskQueue(0)
