"""Helper utilities shared across API route handlers."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from fastapi import HTTPException, Response, status

from eventlink.domain.exceptions import ConflictError

_NO_CACHE_HEADERS = {
    "Cache-Control": "no-cache, no-store, must-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
}


@contextmanager
def http_errors() -> Iterator[None]:
    """Translate use-case exceptions into HTTP errors."""

    try:
        yield
    except ConflictError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except LookupError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except PermissionError as exc:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc)) from exc


def disable_caching(response: Response) -> None:
    """Ask browsers and proxies never to reuse a badge-count response."""

    response.headers.update(_NO_CACHE_HEADERS)
