"""
Collection API Routes.

Public endpoint receiving page view and engagement beacons from
the tracking script.

Key behaviors:
- Out-of-bounds payloads are rejected with 400 and an error list; nothing is stored
- Store failures are logged and surface as a generic 500
- The raw client IP is hashed before storage and never persisted
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request

from src.api.deps import get_client_ip, get_collect_limits, get_hasher, get_store
from src.api.schemas import CollectPayload, ErrorResponse, OkResponse
from src.components.collect import (
    CollectInput,
    CollectLimits,
    CollectValidationError,
    run_collect,
)
from src.components.visitor import VisitorHasher
from src.core.ports import EventStorePort, StoreError

logger = logging.getLogger(__name__)

router = APIRouter()


def error_detail(errors: Sequence[Any]) -> dict[str, Any]:
    return {
        "ok": False,
        "errors": [
            {"code": e.code, "message": e.message, "field": e.field_name} for e in errors
        ],
    }


@router.post(
    "/collect",
    response_model=OkResponse,
    responses={
        400: {"model": ErrorResponse},
        500: {"description": "Event could not be stored"},
    },
)
def collect(
    request: Request,
    body: CollectPayload,
    store: EventStorePort = Depends(get_store),
    hasher: VisitorHasher = Depends(get_hasher),
    limits: CollectLimits = Depends(get_collect_limits),
) -> OkResponse:
    """Record a page view (duration_sec == 0) or an engagement beacon."""
    inp = CollectInput(
        request=body.to_request(),
        client_ip=get_client_ip(request),
        header_user_agent=request.headers.get("user-agent", ""),
    )

    try:
        out = run_collect(inp, store=store, hasher=hasher, limits=limits)
    except StoreError:
        logger.exception("Failed to store analytics event")
        raise HTTPException(status_code=500, detail="Internal server error") from None

    if not out.accepted:
        errors: list[CollectValidationError] = out.errors
        raise HTTPException(status_code=400, detail=error_detail(errors))

    return OkResponse(ok=True)
