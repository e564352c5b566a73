# src/launch_deck/api/v1/endpoints/posts.py
"""Discussion board endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Query, Response, status

from launch_deck.models import Post
from launch_deck.schemas.post import PostCreate, PostResponse
from launch_deck.schemas.vote import MyPostVoteResponse, PostVoteResponse
from launch_deck.services.board import BoardService, PostVoteOutcome

from ..dependencies import CurrentUsernameDep, SessionDep, domain_errors

router = APIRouter(prefix="/posts", tags=["posts"])


def _vote_response(outcome: PostVoteOutcome) -> PostVoteResponse:
    return PostVoteResponse(
        action=outcome.action,
        upvotes=outcome.upvotes,
        downvotes=outcome.downvotes,
        is_poten=outcome.is_poten,
    )


@router.post("/", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    post_data: PostCreate,
    username: CurrentUsernameDep,
    db: SessionDep,
) -> Post:
    """Create a post on a board the caller's tier gives access to."""
    with domain_errors():
        return BoardService(db).create_post(
            username, post_data.board_type, post_data.title, post_data.content
        )


@router.get("/poten", response_model=list[PostResponse])
async def poten_posts(db: SessionDep, limit: int = Query(20, ge=1, le=100)) -> list[Post]:
    return BoardService(db).get_poten_posts(limit)


@router.get("/board/{board_type}", response_model=list[PostResponse])
async def board_posts(
    board_type: str,
    db: SessionDep,
    limit: int = Query(20, ge=1, le=100),
) -> list[Post]:
    return BoardService(db).get_board_posts(board_type, limit)


@router.get("/user/{username}", response_model=list[PostResponse])
async def posts_by_author(
    username: str,
    db: SessionDep,
    limit: int = Query(20, ge=1, le=100),
) -> list[Post]:
    return BoardService(db).get_posts_by_author(username, limit)


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(post_id: int, db: SessionDep) -> Post:
    with domain_errors():
        return BoardService(db).get_post(post_id)


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_post(post_id: int, username: CurrentUsernameDep, db: SessionDep) -> Response:
    with domain_errors():
        BoardService(db).delete_post(post_id, username)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{post_id}/upvote", response_model=PostVoteResponse)
async def upvote_post(
    post_id: int,
    username: CurrentUsernameDep,
    db: SessionDep,
) -> PostVoteResponse:
    """Toggle an upvote; repeating it removes the vote."""
    with domain_errors():
        return _vote_response(BoardService(db).upvote_post(post_id, username))


@router.post("/{post_id}/downvote", response_model=PostVoteResponse)
async def downvote_post(
    post_id: int,
    username: CurrentUsernameDep,
    db: SessionDep,
) -> PostVoteResponse:
    with domain_errors():
        return _vote_response(BoardService(db).downvote_post(post_id, username))


@router.get("/{post_id}/vote", response_model=MyPostVoteResponse)
async def my_post_vote(
    post_id: int,
    username: CurrentUsernameDep,
    db: SessionDep,
) -> MyPostVoteResponse:
    return MyPostVoteResponse(vote_type=BoardService(db).get_my_vote(post_id, username))
