"""
Howl Backend — Shared Path Parameters
=======================================

Record ids are PostgreSQL `integer` columns. Anything outside 1..2**31-1
cannot name a stored row, so it is rejected as a path error (answered by the
404 responder) before it reaches the driver.
"""

from fastapi import Path

MAX_RECORD_ID = 2**31 - 1


def record_id(description: str):
    return Path(ge=1, le=MAX_RECORD_ID, description=description)
