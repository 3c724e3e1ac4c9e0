from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from news_api.database import get_db
from news_api.dependencies import ArticleQueryParams, PaginationParams, RowId
from news_api.schemas import (
    ArticleCreate,
    ArticleEnvelope,
    ArticleListEnvelope,
    CommentCreate,
    CommentEnvelope,
    CommentListEnvelope,
    VoteUpdate,
)
from news_api.services import article_service, comment_service

router = APIRouter(prefix="/api/articles", tags=["articles"])

@router.get("", response_model=ArticleListEnvelope)
async def list_articles(
    params: ArticleQueryParams = Depends(),
    pagination: PaginationParams = Depends(),
    db: AsyncSession = Depends(get_db),
):
    return await article_service.get_articles(
        db,
        sort_by=params.sort_by,
        order=params.order,
        topic=params.topic,
        author=params.author,
        limit=pagination.limit,
        page=pagination.page,
    )

@router.post("", status_code=201, response_model=ArticleEnvelope)
async def create_article(data: ArticleCreate, db: AsyncSession = Depends(get_db)):
    return {"article": await article_service.create_article(db, data)}

@router.get("/{article_id}", response_model=ArticleEnvelope)
async def get_article(article_id: RowId, db: AsyncSession = Depends(get_db)):
    return {"article": await article_service.get_article(db, article_id)}

@router.patch("/{article_id}", response_model=ArticleEnvelope)
async def patch_article_votes(article_id: RowId, data: VoteUpdate, db: AsyncSession = Depends(get_db)):
    return {"article": await article_service.update_article_votes(db, article_id, data)}

@router.get("/{article_id}/comments", response_model=CommentListEnvelope)
async def list_comments(
    article_id: RowId,
    pagination: PaginationParams = Depends(),
    db: AsyncSession = Depends(get_db),
):
    comments = await comment_service.get_comments(
        db, article_id, limit=pagination.limit, page=pagination.page
    )
    return {"comments": comments}

@router.post("/{article_id}/comments", status_code=201, response_model=CommentEnvelope)
async def add_comment(article_id: RowId, data: CommentCreate, db: AsyncSession = Depends(get_db)):
    return {"comment": await comment_service.add_comment(db, article_id, data)}
