"""
Per-person write serialization for leave creation/editing.

The overlap check and the following commit must not interleave for the same
person, otherwise two concurrent requests could both pass the check.
Inside one process this is an asyncio.Lock per person id; across processes
the API additionally locks the person row (SELECT ... FOR UPDATE).
"""
import asyncio
import uuid
from contextlib import asynccontextmanager

_locks: dict[uuid.UUID, asyncio.Lock] = {}
_holders: dict[uuid.UUID, int] = {}


@asynccontextmanager
async def person_lock(person_id: uuid.UUID):
    lock = _locks.setdefault(person_id, asyncio.Lock())
    _holders[person_id] = _holders.get(person_id, 0) + 1
    try:
        async with lock:
            yield
    finally:
        _holders[person_id] -= 1
        if _holders[person_id] == 0:
            del _holders[person_id]
            del _locks[person_id]


def active_locks() -> int:
    return len(_locks)
