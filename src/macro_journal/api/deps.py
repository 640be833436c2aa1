"""Request dependencies shared by the API routers."""

from uuid import UUID

from fastapi import Header, HTTPException, Request, status

from macro_journal.containers import AppContainer


def get_container(request: Request) -> AppContainer:
    """Return the container attached to the running app."""
    return request.app.state.container


async def current_user(x_user_id: str | None = Header(default=None)) -> UUID:
    """Return the caller id set by the hosting layer."""
    if not x_user_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    try:
        return UUID(x_user_id)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid X-User-Id"
        ) from exc
