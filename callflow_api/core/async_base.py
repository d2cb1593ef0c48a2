# Callflow Editor API - Call-Flow Record Service for Virtual Assistants
# Copyright (c) 2026 George Scott Foley
# ORCID: 0009-0006-4957-0540
# Email: Georgescottfoley@proton.me
# Licensed under the MIT License - see LICENSE file for details

"""
Async Infrastructure Primitives

- gather_settled: concurrent fan-out that waits for every operation
- Lifecycle: ordered startup/shutdown hooks for the application lifespan
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass, field
from typing import Any, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

Hook = Callable[[], Awaitable[Any]]


async def gather_settled(awaitables: Iterable[Awaitable[T]]) -> list[T | BaseException]:
    """
    Run awaitables concurrently until all have settled.

    Results come back in input order; a failed operation contributes its
    exception instead of a result and does not cancel the others.
    """
    return await asyncio.gather(*awaitables, return_exceptions=True)


@dataclass
class Lifecycle:
    """
    Startup hooks run in registration order and abort on the first
    failure. Shutdown hooks run in reverse order, and a failing hook is
    logged without stopping the rest.

    Usage:
        lifecycle = Lifecycle()

        @lifecycle.on_startup
        async def open_store():
            ...
    """

    startup_hooks: list[Hook] = field(default_factory=list)
    shutdown_hooks: list[Hook] = field(default_factory=list)
    running: bool = False

    def on_startup(self, hook: Hook) -> Hook:
        self.startup_hooks.append(hook)
        return hook

    def on_shutdown(self, hook: Hook) -> Hook:
        self.shutdown_hooks.append(hook)
        return hook

    async def startup(self) -> None:
        for hook in self.startup_hooks:
            logger.debug(f"Startup hook: {hook.__name__}")
            try:
                await hook()
            except Exception:
                logger.exception(f"Startup hook {hook.__name__} failed")
                raise
        self.running = True
        logger.info("Application started")

    async def shutdown(self) -> None:
        if not self.running:
            return
        self.running = False

        for hook in reversed(self.shutdown_hooks):
            try:
                await hook()
            except Exception as e:
                logger.error(f"Shutdown hook {hook.__name__} failed: {e}")
        logger.info("Application shut down")


__all__ = ["Lifecycle", "gather_settled"]
