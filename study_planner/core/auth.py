"""Caller identity for request handlers.

Authentication itself happens upstream; by the time a request reaches this
service the gateway has put the authenticated user id into ``X-User-Id``.
"""

from fastapi import Header, HTTPException


def get_current_owner(x_user_id: str | None = Header(default=None)) -> int:
    """Dependency returning the authenticated owner id."""
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Missing caller identity")
    try:
        owner_id = int(x_user_id)
    except ValueError:
        raise HTTPException(status_code=401, detail="Invalid caller identity") from None
    if owner_id <= 0:
        raise HTTPException(status_code=401, detail="Invalid caller identity")
    return owner_id
