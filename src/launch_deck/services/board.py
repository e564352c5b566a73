"""Discussion board posts and their up/down Poten latch."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.orm import Session

from launch_deck.core.errors import NotFoundError, PermissionDeniedError, ValidationError
from launch_deck.core.tiers import TierModel, default_tier_model
from launch_deck.db.time import utcnow
from launch_deck.db.transaction import atomic
from launch_deck.models import BuilderRank, Post, PostVote
from launch_deck.models.achievement import TARGET_POST
from launch_deck.models.post import BOARD_MIN_TIER
from launch_deck.models.vote import VOTE_DOWN, VOTE_UP
from launch_deck.repositories import Repository, eq

from .achievements import record_poten

logger = logging.getLogger(__name__)

MAX_TITLE_LENGTH = 200
MAX_CONTENT_LENGTH = 10000

_COUNTERS = {VOTE_UP: "upvotes", VOTE_DOWN: "downvotes"}


@dataclass(frozen=True)
class PostVoteOutcome:
    action: str
    upvotes: int
    downvotes: int
    is_poten: bool


class BoardService:
    """Creates posts and applies toggle-style up/down votes."""

    def __init__(self, db: Session, tiers: TierModel | None = None) -> None:
        self.db = db
        self.tiers = tiers or default_tier_model()
        self.posts = Repository(db, Post)
        self.votes = Repository(db, PostVote)

    def create_post(self, author_username: str, board_type: str, title: str, content: str) -> Post:
        """Create a post after checking the board and the author's tier.

        The author's tier comes from their BuilderRank; authors without one
        are treated as tier 0.
        """
        if board_type not in BOARD_MIN_TIER:
            raise ValidationError(f"Invalid board type: {board_type}")

        title = title.strip()
        if not title:
            raise ValidationError("Title cannot be empty.")
        if len(title) > MAX_TITLE_LENGTH:
            raise ValidationError(f"Title cannot exceed {MAX_TITLE_LENGTH} characters.")
        content = content.strip()
        if not content:
            raise ValidationError("Content cannot be empty.")
        if len(content) > MAX_CONTENT_LENGTH:
            raise ValidationError(f"Content cannot exceed {MAX_CONTENT_LENGTH} characters.")

        rank = Repository(self.db, BuilderRank).first(eq(BuilderRank.username, author_username))
        author_tier = rank.tier if rank is not None else 0
        min_tier = BOARD_MIN_TIER[board_type]
        if author_tier < min_tier:
            raise ValidationError(f"You need tier {min_tier} or higher to post in this board.")

        with atomic(self.db):
            post = self.posts.add(
                Post(
                    author_username=author_username,
                    board_type=board_type,
                    title=title,
                    content=content,
                    upvotes=0,
                    downvotes=0,
                    comment_count=0,
                    is_poten=False,
                    created_at=utcnow(),
                )
            )
        return post

    def get_post(self, post_id: int) -> Post:
        post = self.posts.get(post_id)
        if post is None:
            raise NotFoundError("Post not found.")
        return post

    def delete_post(self, post_id: int, requesting_username: str) -> None:
        """Delete a post and its votes; only the author may do this."""
        with atomic(self.db):
            post = self.get_post(post_id)
            if post.author_username != requesting_username:
                raise PermissionDeniedError("You can only delete your own posts.")
            for vote in self.votes.collect(eq(PostVote.post_id, post.id)):
                self.db.delete(vote)
            self.posts.delete(post)

    def _find_vote(self, post_id: int, voter_username: str) -> PostVote | None:
        return self.votes.first(
            eq(PostVote.post_id, post_id),
            eq(PostVote.voter_username, voter_username),
        )

    def upvote_post(self, post_id: int, voter_username: str) -> PostVoteOutcome:
        return self._toggle(post_id, voter_username, VOTE_UP)

    def downvote_post(self, post_id: int, voter_username: str) -> PostVoteOutcome:
        return self._toggle(post_id, voter_username, VOTE_DOWN)

    def _toggle(self, post_id: int, voter_username: str, direction: str) -> PostVoteOutcome:
        opposite = VOTE_DOWN if direction == VOTE_UP else VOTE_UP
        with atomic(self.db):
            post = self.get_post(post_id)
            existing = self._find_vote(post_id, voter_username)

            if existing is not None and existing.vote_type == direction:
                self.votes.delete(existing)
                deltas = {_COUNTERS[direction]: -1}
                action = "removed"
            elif existing is not None:
                existing.vote_type = direction
                deltas = {_COUNTERS[direction]: 1, _COUNTERS[opposite]: -1}
                action = "changed"
            else:
                self.votes.add(
                    PostVote(
                        post_id=post.id,
                        voter_username=voter_username,
                        vote_type=direction,
                        created_at=utcnow(),
                    )
                )
                deltas = {_COUNTERS[direction]: 1}
                action = "upvoted" if direction == VOTE_UP else "downvoted"

            post = self.posts.increment(post.id, **deltas)
            if direction == VOTE_UP and action != "removed":
                self._check_poten(post)
            self.db.flush()
            outcome = PostVoteOutcome(
                action=action,
                upvotes=post.upvotes,
                downvotes=post.downvotes,
                is_poten=post.is_poten,
            )
        return outcome

    def _check_poten(self, post: Post) -> None:
        net = post.upvotes - post.downvotes
        if post.is_poten or net < self.tiers.post_poten_threshold:
            return
        post.is_poten = True
        post.poten_at = utcnow()
        record_poten(self.db, TARGET_POST, post.id, net)

    def get_my_vote(self, post_id: int, voter_username: str) -> str | None:
        vote = self._find_vote(post_id, voter_username)
        return vote.vote_type if vote is not None else None

    def get_poten_posts(self, limit: int = 20) -> list[Post]:
        """Return Poten posts, most recent crossing first."""
        stmt = (
            select(Post)
            .where(Post.is_poten.is_(True))
            .order_by(Post.poten_at.desc(), Post.id.desc())
            .limit(limit)
        )
        return list(self.db.execute(stmt).scalars())

    def get_board_posts(self, board_type: str, limit: int = 20) -> list[Post]:
        stmt = (
            select(Post)
            .where(Post.board_type == board_type)
            .order_by(Post.created_at.desc(), Post.id.desc())
            .limit(limit)
        )
        return list(self.db.execute(stmt).scalars())

    def get_posts_by_author(self, username: str, limit: int = 20) -> list[Post]:
        stmt = (
            select(Post)
            .where(Post.author_username == username)
            .order_by(Post.created_at.desc(), Post.id.desc())
            .limit(limit)
        )
        return list(self.db.execute(stmt).scalars())


__all__ = ["BoardService", "PostVoteOutcome"]
