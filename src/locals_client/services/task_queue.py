"""Bounded-concurrency runner for async jobs."""

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Sequence

T = TypeVar("T")

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class JobOutcome(Generic[T]):
    """Result or captured exception of one job."""

    value: T | None = None
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class TaskQueue:
    """
    Run async jobs with at most ``concurrency`` in flight.

    - Jobs start in submission order.
    - With ``concurrency=1`` each job finishes before the next starts.
    - A failing job does not stop the others; its exception is captured.
    """

    def __init__(self, concurrency: int = 1) -> None:
        if concurrency <= 0:
            raise ValueError("concurrency must be > 0")
        self.concurrency = concurrency

    async def run(
        self, jobs: "Sequence[Callable[[], Awaitable[T]]]"
    ) -> list[JobOutcome[T]]:
        """Run every job and return outcomes in submission order."""
        outcomes: list[JobOutcome[T]] = [JobOutcome() for _ in jobs]
        pending: asyncio.Queue[int] = asyncio.Queue()
        for index in range(len(jobs)):
            pending.put_nowait(index)

        async def worker() -> None:
            while True:
                try:
                    index = pending.get_nowait()
                except asyncio.QueueEmpty:
                    return
                try:
                    outcomes[index] = JobOutcome(value=await jobs[index]())
                except Exception as exc:
                    _logger.debug("Queued job %d failed: %s", index, exc)
                    outcomes[index] = JobOutcome(error=exc)

        workers = min(self.concurrency, len(jobs))
        await asyncio.gather(*(worker() for _ in range(workers)))
        return outcomes
