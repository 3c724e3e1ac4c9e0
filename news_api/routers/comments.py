from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession
from news_api.database import get_db
from news_api.dependencies import RowId
from news_api.schemas import CommentEnvelope, VoteUpdate
from news_api.services import comment_service

router = APIRouter(prefix="/api/comments", tags=["comments"])

@router.patch("/{comment_id}", response_model=CommentEnvelope)
async def patch_comment_votes(comment_id: RowId, data: VoteUpdate, db: AsyncSession = Depends(get_db)):
    return {"comment": await comment_service.update_comment_votes(db, comment_id, data)}

@router.delete("/{comment_id}", status_code=204, response_class=Response)
async def delete_comment(comment_id: RowId, db: AsyncSession = Depends(get_db)):
    await comment_service.delete_comment(db, comment_id)
