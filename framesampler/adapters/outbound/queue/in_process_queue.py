"""In-process implementation of TaskQueuePort.

Background extraction jobs run as :func:`asyncio.create_task` tasks on the
server's event loop, so the upload response can return before ffmpeg ends.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from collections import deque
from typing import Any, Callable, Coroutine

logger = logging.getLogger(__name__)


class InProcessTaskQueue:
    """Implements :class:`TaskQueuePort` on the running event loop.

    Task functions must be registered with :meth:`register` before they can be
    enqueued. Failures are logged and kept in the job status; they never
    propagate to the caller that enqueued the job. Only the most recent
    *max_finished_jobs* finished jobs keep their status; older ones report
    ``UNKNOWN``.
    """

    def __init__(self, max_finished_jobs: int = 1000) -> None:
        self._registry: dict[str, Callable[..., Coroutine[Any, Any, Any]]] = {}
        self._jobs: dict[str, dict[str, Any]] = {}
        self._async_tasks: dict[str, asyncio.Task[Any]] = {}
        self._finished: deque[str] = deque()
        self._max_finished_jobs = max_finished_jobs

    def register(
        self, task_name: str, fn: Callable[..., Coroutine[Any, Any, Any]]
    ) -> None:
        """Register an async callable under *task_name*."""
        self._registry[task_name] = fn
        logger.debug("Registered in-process task: %s", task_name)

    # -- TaskQueuePort implementation ------------------------------------------

    def enqueue(self, task_name: str, args: dict) -> str:
        """Schedule a registered task in the running event loop."""
        fn = self._registry.get(task_name)
        if fn is None:
            raise ValueError(
                f"Task '{task_name}' is not registered. "
                f"Available: {list(self._registry)}"
            )

        job_id = str(uuid.uuid4())
        self._jobs[job_id] = {
            "job_id": job_id,
            "task_name": task_name,
            "status": "PENDING",
            "result": None,
            "error": None,
        }

        async def _wrapper() -> None:
            job = self._jobs[job_id]
            job["status"] = "STARTED"
            try:
                result = await fn(**args)
            except asyncio.CancelledError:
                job["status"] = "REVOKED"
                logger.info("Job %s was cancelled", job_id)
                raise
            except Exception as exc:
                job["status"] = "FAILURE"
                job["error"] = str(exc)
                logger.error("Job %s (%s) failed: %s", job_id, task_name, exc)
                return
            job["status"] = "SUCCESS"
            job["result"] = result.to_dict() if hasattr(result, "to_dict") else result

        loop = asyncio.get_running_loop()
        async_task = loop.create_task(_wrapper(), name=f"job-{job_id}")
        async_task.add_done_callback(lambda _task: self._on_done(job_id))
        self._async_tasks[job_id] = async_task
        logger.info("Enqueued in-process job %s -> %s", task_name, job_id)
        return job_id

    def _on_done(self, job_id: str) -> None:
        self._async_tasks.pop(job_id, None)
        self._finished.append(job_id)
        while len(self._finished) > self._max_finished_jobs:
            self._jobs.pop(self._finished.popleft(), None)

    def get_status(self, task_id: str) -> dict:
        """Return the current status of a job."""
        info = self._jobs.get(task_id)
        if info is None:
            return {"job_id": task_id, "status": "UNKNOWN"}
        return dict(info)

    def cancel(self, task_id: str) -> bool:
        """Cancel a running job."""
        async_task = self._async_tasks.get(task_id)
        if async_task is None:
            if task_id in self._jobs:
                logger.debug("Job %s already finished", task_id)
            else:
                logger.warning("Cannot cancel unknown job %s", task_id)
            return False
        if async_task.done():
            logger.debug("Job %s already finished", task_id)
            return False
        async_task.cancel()
        logger.info("Cancelled in-process job %s", task_id)
        return True

    # -- lifecycle -------------------------------------------------------------

    async def wait(self, task_id: str) -> dict:
        """Wait for a job to finish and return its final status."""
        async_task = self._async_tasks.get(task_id)
        if async_task is not None:
            await asyncio.gather(async_task, return_exceptions=True)
        return self.get_status(task_id)

    async def shutdown(self) -> None:
        """Cancel unfinished jobs, killing their subprocesses."""
        pending = [t for t in self._async_tasks.values() if not t.done()]
        for task in pending:
            task.cancel()
        if pending:
            logger.info("Cancelling %d unfinished extraction job(s)", len(pending))
            await asyncio.gather(*pending, return_exceptions=True)
