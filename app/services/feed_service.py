"""
Feed composition - posts from friends and the viewer
"""
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from app.core.config import settings
from app.models.post import Comment, Like, Post
from app.schemas.post import FeedAuthor, FeedPost
from app.services.access_gate import access_gate


class FeedService:

    def get_feed(self, db: Session, user_id: int, limit: Optional[int] = None) -> List[FeedPost]:
        """Newest posts authored by the viewer or an accepted friend"""
        visible_ids = access_gate.visible_user_ids(db, user_id)
        limit = settings.FEED_LIMIT if limit is None else limit

        posts = db.query(Post).options(joinedload(Post.author)).filter(
            Post.user_id.in_(sorted(visible_ids))
        ).order_by(Post.created_at.desc(), Post.id.desc()).limit(limit).all()

        post_ids = [post.id for post in posts]
        likes_count = self._count_by_post(db, Like, post_ids)
        comments_count = self._count_by_post(db, Comment, post_ids)
        liked_ids = {
            post_id for (post_id,) in db.query(Like.post_id).filter(
                Like.post_id.in_(post_ids),
                Like.user_id == user_id
            ).all()
        } if post_ids else set()

        return [
            FeedPost(
                id=post.id,
                content=post.content or "",
                media_url=post.media_url,
                media_type=post.media_type,
                created_at=post.created_at,
                user=FeedAuthor.from_user(post.author),
                likes_count=likes_count.get(post.id, 0),
                comments_count=comments_count.get(post.id, 0),
                is_liked=post.id in liked_ids
            )
            for post in posts
            if post.author is not None
        ]

    def _count_by_post(self, db: Session, model, post_ids: List[int]) -> dict:
        if not post_ids:
            return {}
        rows = db.query(model.post_id, func.count(model.id)).filter(
            model.post_id.in_(post_ids)
        ).group_by(model.post_id).all()
        return {post_id: count for post_id, count in rows}


feed_service = FeedService()
