# ─────────────────────────────────────────────────────────────────
# routes/articles.py — Article Endpoints
#
# RESTy routes for the "articles" resource, mounted at /rest/v1:
#
#   GET    /rest/v1              → list articles
#   POST   /rest/v1              → create an article
#   GET    /rest/v1/{id|slug}    → one article
#   PUT    /rest/v1/{id}         → update an article
#   DELETE /rest/v1/{id}         → remove an article
#
# Every path also answers with a trailing slash, undocumented.
#
# This router must be included AFTER routes/thermostat.py so that
# /rest/v1/device, /time, /temp and /mode are not read as ids.
# ─────────────────────────────────────────────────────────────────

import logging
import re
from typing import List

from fastapi import APIRouter, Depends, Request

from database import ArticleStore, get_article_store
from errors import InvalidRequest, NotFound
from models import Article, ArticleRequest, ArticleResponse, UserPayload

logger = logging.getLogger("routes")

router = APIRouter(
    prefix="/rest/v1",
    tags=["Articles"]
)

# Keys made only of lower-case letters and dashes are slugs
SLUG_RE = re.compile(r"^[a-z-]+$")

# Computed field added to every article response
ELAPSED = 10


def new_article_response(article: Article, store: ArticleStore) -> ArticleResponse:
    """Decorates a stored article with its author, when the author is known."""

    user = store.get_user(article.user_id)
    return ArticleResponse(
        **article.model_dump(),
        user=UserPayload(id=user.id, name=user.name, role="collaborator") if user else None,
        elapsed=ELAPSED,
    )


# ── Dependencies ──────────────────────────────────────────────────

def paginate(request: Request):
    """
    Pagination hook for list requests. It only logs the paging
    parameters for now; every list returns the whole store.
    """
    if request.query_params:
        logger.debug(f"paginate: {dict(request.query_params)}")


def article_by_id(article_id: str, store: ArticleStore = Depends(get_article_store)) -> Article:
    article = store.get(article_id)
    if article is None:
        raise NotFound()
    return article


def article_by_key(article_key: str, store: ArticleStore = Depends(get_article_store)) -> Article:
    """Resolves a slug-shaped key by slug, anything else by id."""
    if SLUG_RE.match(article_key):
        article = store.get_by_slug(article_key)
    else:
        article = store.get(article_key)
    if article is None:
        raise NotFound()
    return article


# ── Routes ────────────────────────────────────────────────────────

@router.get(
    "",
    response_model=List[ArticleResponse],
    response_model_exclude_none=True,
    dependencies=[Depends(paginate)],
)
@router.get(
    "/",
    response_model=List[ArticleResponse],
    response_model_exclude_none=True,
    dependencies=[Depends(paginate)],
    include_in_schema=False,
)
def list_articles(store: ArticleStore = Depends(get_article_store)):
    return [new_article_response(a, store) for a in store.list()]


@router.post(
    "",
    status_code=201,
    response_model=ArticleResponse,
    response_model_exclude_none=True,
)
@router.post("/", status_code=201, response_model=ArticleResponse,
             response_model_exclude_none=True, include_in_schema=False)
def create_article(data: ArticleRequest, store: ArticleStore = Depends(get_article_store)):
    """
    Stores the posted article and returns it as an acknowledgement.

    The client's "id" is discarded and a fresh one assigned.
    """

    fields = data.article_fields()
    if not fields:
        raise InvalidRequest("missing required Article fields")

    article = store.create(fields)
    return new_article_response(article, store)


@router.get(
    "/{article_key}",
    response_model=ArticleResponse,
    response_model_exclude_none=True,
)
@router.get("/{article_key}/", response_model=ArticleResponse,
            response_model_exclude_none=True, include_in_schema=False)
def get_article(
    article: Article = Depends(article_by_key),
    store: ArticleStore = Depends(get_article_store),
):
    return new_article_response(article, store)


@router.put(
    "/{article_id}",
    response_model=ArticleResponse,
    response_model_exclude_none=True,
)
@router.put("/{article_id}/", response_model=ArticleResponse,
            response_model_exclude_none=True, include_in_schema=False)
def update_article(
    data: ArticleRequest,
    article: Article = Depends(article_by_id),
    store: ArticleStore = Depends(get_article_store),
):
    """Merges the fields present in the body into the stored article."""

    # The stored title is lower-cased on every update, sent or not
    fields = {"title": article.title.lower(), **data.article_fields()}
    updated = store.update(article.id, fields)
    if updated is None:
        # removed by a concurrent request
        raise NotFound()

    logger.info(f"Article updated: '{updated.id}'")
    return new_article_response(updated, store)


@router.delete(
    "/{article_id}",
    response_model=ArticleResponse,
    response_model_exclude_none=True,
)
@router.delete("/{article_id}/", response_model=ArticleResponse,
               response_model_exclude_none=True, include_in_schema=False)
def delete_article(
    article: Article = Depends(article_by_id),
    store: ArticleStore = Depends(get_article_store),
):
    removed = store.remove(article.id)
    if removed is None:
        raise InvalidRequest("article not found")
    return new_article_response(removed, store)
