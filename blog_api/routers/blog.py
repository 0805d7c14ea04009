"""Blog router. Every route requires a valid access token."""

import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from blog_api.auth import get_current_user_id
from blog_api.database import get_db
from blog_api.models import Blog
from blog_api.schemas import (
    BlogCreate,
    BlogUpdate,
    BlogId,
    BlogResponse,
    BlogListResponse,
)

# Configure logging
logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/v1/blog",
    tags=["Blog"],
    dependencies=[Depends(get_current_user_id)]
)


def _error(message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_411_LENGTH_REQUIRED,
        content={"message": message}
    )


def _update_blog(db: Session, blog_id: Optional[int], update_data: BlogUpdate):
    """Replace title and content of one blog. Returns None when it does not exist."""
    post = db.query(Blog).filter(Blog.id == blog_id).first()
    if post is None:
        return None

    post.title = update_data.title
    post.content = update_data.content
    db.commit()
    db.refresh(post)
    return post


@router.post("", response_model=BlogId)
def create_blog(
    blog_data: BlogCreate,
    request: Request,
    db: Session = Depends(get_db)
):
    """
    Create a blog post authored by the authenticated user.

    Args:
        blog_data: Title and content
        request: Request carrying the authenticated user id in its state
        db: Database session

    Returns:
        BlogId: Identifier of the new post
    """
    user_id = request.state.user_id
    logger.info(f"Creating blog post for user {user_id}")

    new_post = Blog(
        title=blog_data.title,
        content=blog_data.content,
        author_id=user_id
    )
    db.add(new_post)
    db.commit()
    db.refresh(new_post)

    logger.info(f"Created blog post with ID: {new_post.id}")
    return {"id": new_post.id}


@router.put("", response_model=BlogId)
def update_blog(update_data: BlogUpdate, db: Session = Depends(get_db)):
    """
    Update a blog post selected by the ``id`` field of the body.

    Returns:
        BlogId: Identifier of the updated post, or 411 if it could not be updated
    """
    logger.info(f"Updating blog post {update_data.id}")

    try:
        post = _update_blog(db, update_data.id, update_data)
    except (OverflowError, SQLAlchemyError) as e:
        logger.error(f"Error updating blog post {update_data.id}: {e}")
        db.rollback()
        return _error("Error while updating blog post")

    if post is None:
        logger.warning(f"Blog post not found: {update_data.id}")
        return _error("Error while updating blog post")

    logger.info(f"Blog post {post.id} updated successfully")
    return {"id": post.id}


@router.get("/bulk", response_model=BlogListResponse)
def list_blogs(
    skip: Optional[int] = Query(None, ge=0),
    limit: Optional[int] = Query(None, ge=0),
    db: Session = Depends(get_db)
):
    """
    List blog posts.

    Without ``skip`` and ``limit`` the whole collection is returned.

    Args:
        skip: Number of posts to skip
        limit: Maximum number of posts to return
        db: Database session

    Returns:
        BlogListResponse: Blog posts in store order
    """
    logger.info("Fetching all blog posts")

    try:
        query = db.query(Blog)
        if skip is not None:
            query = query.offset(skip)
        if limit is not None:
            query = query.limit(limit)
        posts = query.all()
    except SQLAlchemyError as e:
        logger.error(f"Error fetching blog posts: {e}")
        return _error("Error while fetching blog posts")

    logger.info(f"Found {len(posts)} blog posts")
    return {"blogs": posts}


# GET /api/v1/blog/{blog_id}
@router.get("/{blog_id}", response_model=BlogResponse)
def get_blog(blog_id: str, db: Session = Depends(get_db)):
    """
    Get one blog post. ``blog`` is null when no post has this id.

    Args:
        blog_id: Blog post ID from the path
        db: Database session

    Returns:
        BlogResponse: The post or null, or 411 if the lookup failed
    """
    logger.info(f"Fetching blog post {blog_id}")

    try:
        post = db.query(Blog).filter(Blog.id == int(blog_id)).first()
    except (ValueError, OverflowError, SQLAlchemyError) as e:
        logger.error(f"Error fetching blog post {blog_id}: {e}")
        return _error("Error while fetching blog post")

    if post is None:
        logger.info(f"Blog post not found: {blog_id}")
        return {"blog": None}

    return {"blog": post}


@router.put("/{blog_id}", response_model=BlogId)
def update_blog_by_path(blog_id: int, update_data: BlogUpdate, db: Session = Depends(get_db)):
    """Update a blog post selected by the path id. A body ``id`` is ignored."""
    logger.info(f"Updating blog post {blog_id}")

    try:
        post = _update_blog(db, blog_id, update_data)
    except (OverflowError, SQLAlchemyError) as e:
        logger.error(f"Error updating blog post {blog_id}: {e}")
        db.rollback()
        return _error("Error while updating blog post")

    if post is None:
        logger.warning(f"Blog post not found: {blog_id}")
        return _error("Error while updating blog post")

    logger.info(f"Blog post {blog_id} updated successfully")
    return {"id": post.id}
