"""Auth Routes — REST signup, login and status endpoints over AuthHandlers.

Invariants:
    - Same handlers (and therefore same validation/auth rules) as the operations endpoint
    - signup → 201 {"message", "user_id"}; login → 200 {"token", "user_id"}
"""

from fastapi import APIRouter, Depends, status

from app.api.dependencies import get_auth_handlers
from app.schemas.auth import LoginRequest, StatusUpdate
from app.schemas.operations import UserInput
from app.services.handle_auth import AuthHandlers

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.put("/signup", status_code=status.HTTP_201_CREATED)
async def signup(
    body: UserInput, handlers: AuthHandlers = Depends(get_auth_handlers),
):
    user = await handlers.create_user(body)
    return {"message": "User created.", "user_id": user["id"]}


@router.post("/login")
async def login(
    body: LoginRequest, handlers: AuthHandlers = Depends(get_auth_handlers),
):
    return await handlers.login(body.email, body.password)


@router.get("/status")
async def get_status(handlers: AuthHandlers = Depends(get_auth_handlers)):
    return await handlers.user_status()


@router.patch("/status")
async def update_status(
    body: StatusUpdate, handlers: AuthHandlers = Depends(get_auth_handlers),
):
    user = await handlers.update_status(body.status)
    return {"message": "Status updated.", "status": user["status"]}
