from fastapi import APIRouter, Depends

from forum.dependencies import get_user_store
from forum.repositories import UserStore
from forum.schemas import PasswordBody, UserCreate, UserIdResponse, UserResponse
from forum.services import user_service

router = APIRouter(prefix="/api/v1/users", tags=["users"])

@router.post("", status_code=201, response_model=UserIdResponse)
async def create_user(data: UserCreate, store: UserStore = Depends(get_user_store)):
    return {"id": await user_service.create_user(store, data)}

# Literal prefixes are registered before "/{user_id}" so they never bind
# to the id route.
@router.get("/by-username/{username}", response_model=UserResponse)
async def get_user_by_username(username: str, store: UserStore = Depends(get_user_store)):
    return await user_service.get_user_by_username(store, username)

@router.get("/exists/{username}", response_model=bool)
async def username_exists(username: str, store: UserStore = Depends(get_user_store)):
    return await user_service.username_exists(store, username)

@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: int, store: UserStore = Depends(get_user_store)):
    return await user_service.get_user_by_id(store, user_id)

@router.post("/{user_id}/verify-password", response_model=bool)
async def verify_password(
    user_id: int, data: PasswordBody, store: UserStore = Depends(get_user_store)
):
    return await user_service.verify_password(store, user_id, data.password)

@router.put("/{user_id}/moderator", response_model=UserIdResponse)
async def grant_moderator_status(user_id: int, store: UserStore = Depends(get_user_store)):
    return {"id": await user_service.grant_moderator_status(store, user_id)}

@router.delete("/{user_id}/moderator", response_model=UserIdResponse)
async def revoke_moderator_status(user_id: int, store: UserStore = Depends(get_user_store)):
    return {"id": await user_service.revoke_moderator_status(store, user_id)}

@router.put("/{user_id}/password", response_model=UserIdResponse)
async def update_password(
    user_id: int, data: PasswordBody, store: UserStore = Depends(get_user_store)
):
    return {"id": await user_service.update_password(store, user_id, data.password)}

@router.delete("/{user_id}", response_model=UserIdResponse)
async def delete_user(user_id: int, store: UserStore = Depends(get_user_store)):
    return {"id": await user_service.delete_user(store, user_id)}
