import logging
from fastapi import APIRouter, Depends, HTTPException, status

from cafe.core.security import require_admin
from cafe.schemas.response import SuccessResponse
from cafe.schemas.user import UserCreate, UserUpdate, UserResponse, RoleResponse
from cafe.services.user_service import list_users, create_user, update_user, delete_user, list_roles, serialize_user

log = logging.getLogger("uvicorn")

router = APIRouter(dependencies=[Depends(require_admin)])
roles_router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("", response_model=SuccessResponse)
async def get_users():
    try:
        users = await list_users()
        return SuccessResponse(data=[UserResponse(**serialize_user(u)).model_dump(mode="json") for u in users])
    except Exception as e:
        log.error(f"Error fetching users: {e}")
        raise HTTPException(status_code=500, detail="Server failed to fetch users.")


@router.post("", status_code=status.HTTP_201_CREATED, response_model=SuccessResponse)
async def add_user(user_data: UserCreate):
    try:
        user = await create_user(user_data)
        return SuccessResponse(data=UserResponse(**serialize_user(user)).model_dump(mode="json"))
    except ValueError as e:
        log.error(f"Value error creating user: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        log.error(f"Error creating user: {e}")
        raise HTTPException(status_code=500, detail="Server failed to create user.")


@router.put("/{user_id}", response_model=SuccessResponse)
async def edit_user(user_id: int, patch: UserUpdate):
    """Updates username, role and, when given, the password."""
    try:
        user = await update_user(user_id, patch)
        if not user:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
        return SuccessResponse(data=UserResponse(**serialize_user(user)).model_dump(mode="json"))
    except HTTPException:
        raise
    except ValueError as e:
        log.error(f"Value error updating user: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        log.error(f"Error updating user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Server failed to update user.")


@router.delete("/{user_id}", response_model=SuccessResponse)
async def remove_user(user_id: int, session=Depends(require_admin)):
    try:
        if user_id == session.user_id:
            raise HTTPException(status_code=400, detail="You cannot delete your own account.")
        if not await delete_user(user_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
        return SuccessResponse(data={"id": user_id, "deleted": True})
    except HTTPException:
        raise
    except Exception as e:
        log.error(f"Error deleting user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Server failed to delete user.")


@roles_router.get("", response_model=SuccessResponse)
async def get_roles():
    try:
        roles = await list_roles()
        data = [RoleResponse(id=r.id, role_name=r.role_name, permissions=r.permissions or []).model_dump(mode="json") for r in roles]
        return SuccessResponse(data=data)
    except Exception as e:
        log.error(f"Error fetching roles: {e}")
        raise HTTPException(status_code=500, detail="Server failed to fetch roles.")
