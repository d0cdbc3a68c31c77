"""Users Routes: the five HTTP-to-SQL handlers over the users table.

Invariants:
    - Shape of every handler: validate -> one service call -> JSON response
    - Validation failures (400) are raised before any statement is issued
    - Errors are not caught here: global handlers turn UserApiError into
      {"error": message} with the error's status code
"""

from fastapi import APIRouter, Depends

from user_api.infrastructure.database import (
    ConnectionManager, get_connection_manager,
)
from user_api.schemas.user import (
    AddUserResponse,
    MessageResponse,
    UserPayload,
    UserResponse,
    parse_user_id,
    require_user_fields,
)
from user_api.services import user_service

router = APIRouter(tags=["users"])


@router.post("/create-table", response_model=MessageResponse)
async def create_table(
    db: ConnectionManager = Depends(get_connection_manager),
):
    """Create the users table if it does not exist."""
    await user_service.create_table(db)
    return MessageResponse(message="Users table created successfully!")


@router.post("/add-user", response_model=AddUserResponse)
async def add_user(
    body: UserPayload | None = None,
    db: ConnectionManager = Depends(get_connection_manager),
):
    payload = require_user_fields(body)
    user_id = await user_service.add_user(db, payload.name, payload.email)
    return AddUserResponse(message="User added successfully!", user_id=user_id)


@router.get("/users", response_model=list[UserResponse])
async def list_users(
    db: ConnectionManager = Depends(get_connection_manager),
):
    """All users, in the database's natural order."""
    return await user_service.list_users(db)


@router.put("/update-user/{user_id}", response_model=MessageResponse)
async def update_user(
    user_id: str,
    body: UserPayload | None = None,
    db: ConnectionManager = Depends(get_connection_manager),
):
    payload = require_user_fields(body)
    await user_service.update_user(
        db, parse_user_id(user_id), payload.name, payload.email,
    )
    return MessageResponse(message="User updated successfully!")


@router.delete("/delete-user/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: str,
    db: ConnectionManager = Depends(get_connection_manager),
):
    await user_service.delete_user(db, parse_user_id(user_id))
    return MessageResponse(message="User deleted successfully!")
