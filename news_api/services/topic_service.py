from sqlalchemy import insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from news_api.error_classifier import db_error_handler
from news_api.models import Topic
from news_api.schemas import TopicCreate


def _topic_to_dict(row) -> dict:
    return {"slug": row.slug, "description": row.description}


async def get_topics(db: AsyncSession) -> list[dict]:
    result = await db.execute(select(Topic.slug, Topic.description).order_by(Topic.slug))
    return [_topic_to_dict(row) for row in result.all()]


async def create_topic(db: AsyncSession, data: TopicCreate) -> dict:
    """
    Insert a topic.  The slug is the primary key, so a duplicate raises
    ConflictError through the error classifier.
    """
    stmt = (
        insert(Topic)
        .values(slug=data.slug, description=data.description)
        .returning(Topic.slug, Topic.description)
    )
    async with db_error_handler(db):
        row = (await db.execute(stmt)).one()
    return _topic_to_dict(row)
