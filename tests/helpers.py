"""Small helpers shared by the test modules."""

import asyncio

from taskboard.core.permissions import Actor


def run(coro):
    """Drive a coroutine from a synchronous test."""
    return asyncio.run(coro)


def actor_for(user) -> Actor:
    return Actor(id=user.id, role=user.role)
