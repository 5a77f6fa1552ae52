"""Operations Endpoint — single entry point for every named query/mutation.

Invariants:
    - POST /api/v1/operations with {"operation", "variables"} → {"data": result}
    - Failures use the global error envelope (see api/error_handlers.py)
    - Identity is derived before dispatch; handlers decide if anonymity is allowed
"""

import logging

from fastapi import APIRouter, Depends

from app.api.dependencies import get_dispatch
from app.schemas.operations import OperationRequest
from app.services.operation_dispatch import OperationDispatch

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/operations", tags=["operations"])


@router.post("")
async def run_operation(
    body: OperationRequest,
    dispatch: OperationDispatch = Depends(get_dispatch),
):
    """Run one named operation."""
    result = await dispatch.execute(body.operation, body.variables)
    return {"data": result}
