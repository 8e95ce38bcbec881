import uuid

from fastapi import APIRouter, Depends

from forum.dependencies import get_comment_store
from forum.repositories import CommentStore
from forum.schemas import CommentCreate, CommentIdResponse, CommentResponse, CommentUpdate
from forum.services import comment_service

router = APIRouter(prefix="/api/v1", tags=["comments"])

@router.post("/posts/{post_id}/comments", status_code=201, response_model=CommentIdResponse)
async def create_comment(
    post_id: uuid.UUID, data: CommentCreate, store: CommentStore = Depends(get_comment_store)
):
    return {"id": await comment_service.create_comment(store, post_id, data)}

@router.get("/posts/{post_id}/comments", response_model=list[CommentResponse])
async def get_comments(post_id: uuid.UUID, store: CommentStore = Depends(get_comment_store)):
    return await comment_service.get_comments_by_post(store, post_id)

@router.patch("/comments/{comment_id}", response_model=CommentIdResponse)
async def update_comment(
    comment_id: uuid.UUID, data: CommentUpdate, store: CommentStore = Depends(get_comment_store)
):
    return {"id": await comment_service.update_comment(store, comment_id, data.content)}

@router.delete("/comments/{comment_id}", status_code=204)
async def delete_comment(comment_id: uuid.UUID, store: CommentStore = Depends(get_comment_store)):
    await comment_service.delete_comment(store, comment_id)
