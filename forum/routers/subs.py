from fastapi import APIRouter, Depends, Path

from forum.dependencies import get_user_store
from forum.repositories import UserStore
from forum.schemas import UserIdResponse, UserResponse
from forum.services import user_service

router = APIRouter(prefix="/api/v1/subs", tags=["subs"])

@router.get("/{sub_name}/users", response_model=list[UserResponse])
async def get_users_by_sub(
    sub_name: str = Path(min_length=1, max_length=100),
    store: UserStore = Depends(get_user_store),
):
    return await user_service.get_users_by_sub(store, sub_name)

@router.post("/{sub_name}/users/{user_id}", status_code=201, response_model=UserIdResponse)
async def join_sub(
    user_id: int,
    sub_name: str = Path(min_length=1, max_length=100),
    store: UserStore = Depends(get_user_store),
):
    return {"id": await user_service.join_sub(store, user_id, sub_name)}
