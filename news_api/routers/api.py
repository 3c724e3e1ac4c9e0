from fastapi import APIRouter

router = APIRouter(prefix="/api", tags=["api"])

ENDPOINTS: dict[str, dict] = {
    "GET /api": {
        "description": "serves up a json representation of all the available endpoints of the api",
    },
    "GET /api/topics": {
        "description": "serves an array of all topics",
        "queries": [],
        "exampleResponse": {
            "topics": [{"slug": "football", "description": "Footie!"}],
        },
    },
    "POST /api/topics": {
        "description": "adds a topic and serves it back",
        "exampleRequest": {"slug": "football", "description": "Footie!"},
        "exampleResponse": {
            "topic": {"slug": "football", "description": "Footie!"},
        },
    },
    "GET /api/articles": {
        "description": "serves one page of articles with the total number matching the filters",
        "queries": ["sort_by", "order", "topic", "author", "limit", "page"],
        "exampleResponse": {
            "articles": [
                {
                    "article_id": 34,
                    "title": "Seafood substitutions are increasing",
                    "body": "Text from the article..",
                    "votes": 0,
                    "topic": "cooking",
                    "author": "weegembump",
                    "created_at": "2018-05-30T15:59:13.341000",
                    "comment_count": "6",
                }
            ],
            "total_count": "1",
        },
    },
    "POST /api/articles": {
        "description": "adds an article and serves it back with its comment_count",
        "exampleRequest": {
            "author": "weegembump",
            "title": "Seafood substitutions are increasing",
            "body": "Text from the article..",
            "topic": "cooking",
        },
    },
    "GET /api/articles/:article_id": {
        "description": "serves a single article with its comment_count",
    },
    "PATCH /api/articles/:article_id": {
        "description": "adds inc_votes to the article's votes and serves the article",
        "exampleRequest": {"inc_votes": 1},
    },
    "GET /api/articles/:article_id/comments": {
        "description": "serves one page of an article's comments, oldest first",
        "queries": ["limit", "page"],
    },
    "POST /api/articles/:article_id/comments": {
        "description": "adds a comment to an article and serves it back",
        "exampleRequest": {"username": "weegembump", "body": "Great read!"},
    },
    "PATCH /api/comments/:comment_id": {
        "description": "adds inc_votes to the comment's votes and serves the comment",
        "exampleRequest": {"inc_votes": -1},
    },
    "DELETE /api/comments/:comment_id": {
        "description": "deletes a comment; responds with no content",
    },
    "GET /api/users": {
        "description": "serves an array of all users",
    },
    "GET /api/users/:username": {
        "description": "serves a single user",
    },
}


@router.get("")
async def get_endpoints():
    return {"endpoints": ENDPOINTS}
