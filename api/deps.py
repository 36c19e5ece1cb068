"""
Request-scoped accessors for the objects wired in create_app(), plus the
disconnect guard used around long-running analysis calls.
"""
import asyncio
import contextlib
import logging
from typing import Awaitable, TypeVar

from fastapi import HTTPException, Request

from analysis_bridge.base import AnalysisRunner
from store.memory_store import MemoryStore

logger = logging.getLogger(__name__)

T = TypeVar("T")

DISCONNECT_POLL_SECONDS = 1.0
CLIENT_CLOSED_REQUEST = 499


def get_runner(request: Request) -> AnalysisRunner:
    return request.app.state.runner


def get_store(request: Request) -> MemoryStore:
    return request.app.state.store


async def run_until_disconnect(request: Request, work: Awaitable[T]) -> T:
    """
    Await `work`, cancelling it if the client goes away first.

    Cancelling an analysis kills its subprocess, so an abandoned request
    does not keep an analysis program running.
    """
    task = asyncio.ensure_future(work)
    try:
        while True:
            done, _ = await asyncio.wait({task}, timeout=DISCONNECT_POLL_SECONDS)
            if done:
                return task.result()
            if await request.is_disconnected():
                logger.warning("client disconnected from %s, cancelling analysis", request.url.path)
                task.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await task
                raise HTTPException(status_code=CLIENT_CLOSED_REQUEST, detail="Client closed request")
    finally:
        if not task.done():
            task.cancel()
