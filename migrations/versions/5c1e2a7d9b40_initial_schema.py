"""initial competition schema

Revision ID: 5c1e2a7d9b40
Revises:
Create Date: 2026-10-18 09:12:44.318204

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "5c1e2a7d9b40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamp(name: str, nullable: bool = False) -> sa.Column:
    return sa.Column(name, sa.DateTime(timezone=True), nullable=nullable)


def upgrade() -> None:
    """Create every table used by the competition engine."""
    op.create_table(
        "app_user",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("username", sa.Text(), nullable=False),
        sa.Column("display_name", sa.Text(), nullable=True),
        sa.Column("avatar_url", sa.Text(), nullable=True),
        sa.Column("station_memberships", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("username"),
    )
    op.create_table(
        "builder_rank",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("username", sa.Text(), nullable=False),
        sa.Column("tier", sa.Integer(), nullable=False),
        sa.Column("shipping_points", sa.Integer(), nullable=False),
        sa.Column("community_karma", sa.Integer(), nullable=False),
        sa.Column("trust_score", sa.Integer(), nullable=False),
        sa.Column("tier_score", sa.Integer(), nullable=False),
        sa.Column("promotion_points", sa.Integer(), nullable=False),
        sa.Column("weekly_wins", sa.Integer(), nullable=False),
        sa.Column("monthly_wins", sa.Integer(), nullable=False),
        sa.Column("poten_count", sa.Integer(), nullable=False),
        _timestamp("updated_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("username"),
    )
    op.create_index("ix_builder_rank_tier_score", "builder_rank", ["tier_score"])

    op.create_table(
        "idea",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("author_username", sa.Text(), nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("problem", sa.Text(), nullable=False),
        sa.Column("solution", sa.Text(), nullable=False),
        sa.Column("target_audience", sa.Text(), nullable=False),
        sa.Column("status", sa.Text(), nullable=False),
        _timestamp("created_at"),
        sa.CheckConstraint(
            "status IN ('open', 'validated', 'launched', 'closed')", name="ck_idea_status"
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_idea_author_username", "idea", ["author_username"])

    op.create_table(
        "launch",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("username", sa.Text(), nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("demo_url", sa.Text(), nullable=False),
        sa.Column("github_url", sa.Text(), nullable=True),
        sa.Column("screenshot", sa.Text(), nullable=True),
        sa.Column("target_audience", sa.Text(), nullable=True),
        sa.Column("problem_solved", sa.Text(), nullable=True),
        sa.Column("og_image", sa.Text(), nullable=True),
        sa.Column("favicon", sa.Text(), nullable=True),
        sa.Column("site_name", sa.Text(), nullable=True),
        sa.Column("week_number", sa.Text(), nullable=False),
        sa.Column("vote_count", sa.Integer(), nullable=False),
        sa.Column("weighted_score", sa.Integer(), nullable=False),
        sa.Column("is_poten", sa.Boolean(), nullable=False),
        _timestamp("poten_at", nullable=True),
        sa.Column("rank", sa.Integer(), nullable=True),
        sa.Column("status", sa.Text(), nullable=False),
        sa.Column("vitamin_votes", sa.Integer(), nullable=False),
        sa.Column("painkiller_votes", sa.Integer(), nullable=False),
        sa.Column("candy_votes", sa.Integer(), nullable=False),
        sa.Column("verified_feedback_count", sa.Integer(), nullable=False),
        sa.Column("promotion_boost", sa.Integer(), nullable=False),
        sa.Column("linked_idea_id", sa.Integer(), nullable=True),
        _timestamp("created_at"),
        sa.CheckConstraint(
            "status IN ('pending', 'active', 'closed')", name="ck_launch_status"
        ),
        sa.ForeignKeyConstraint(["linked_idea_id"], ["idea.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_launch_week_number", "launch", ["week_number"])
    op.create_index("ix_launch_username", "launch", ["username"])
    op.create_index("ix_launch_linked_idea_id", "launch", ["linked_idea_id"])
    op.create_index("ix_launch_is_poten", "launch", ["is_poten"])

    op.create_table(
        "launch_vote",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("launch_id", sa.Integer(), nullable=False),
        sa.Column("voter_username", sa.Text(), nullable=False),
        sa.Column("weight", sa.Integer(), nullable=False),
        sa.Column("multiplier", sa.Integer(), nullable=False),
        sa.Column("is_verified", sa.Boolean(), nullable=False),
        sa.Column("feedback_text", sa.Text(), nullable=True),
        sa.Column("product_type_vote", sa.Text(), nullable=True),
        sa.Column("visited_at", sa.BigInteger(), nullable=True),
        sa.Column("returned_at", sa.BigInteger(), nullable=True),
        _timestamp("created_at"),
        sa.CheckConstraint(
            "product_type_vote IS NULL OR product_type_vote IN ('vitamin', 'painkiller', 'candy')",
            name="ck_launch_vote_product_type",
        ),
        sa.ForeignKeyConstraint(["launch_id"], ["launch.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("launch_id", "voter_username", name="uq_launch_vote_launch_voter"),
    )
    op.create_index("ix_launch_vote_launch_id", "launch_vote", ["launch_id"])

    op.create_table(
        "weekly_result",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("week_number", sa.Text(), nullable=False),
        sa.Column("winners", sa.JSON(), nullable=False),
        sa.Column("total_launches", sa.Integer(), nullable=False),
        sa.Column("total_votes", sa.Integer(), nullable=False),
        _timestamp("finalized_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("week_number"),
    )

    op.create_table(
        "station",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("slug", sa.Text(), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("owner_username", sa.Text(), nullable=False),
        sa.Column("launch_id", sa.Integer(), nullable=False),
        sa.Column("logo_url", sa.Text(), nullable=True),
        sa.Column("member_count", sa.Integer(), nullable=False),
        sa.Column("post_count", sa.Integer(), nullable=False),
        sa.Column("weekly_active_members", sa.Integer(), nullable=False),
        sa.Column("status", sa.Text(), nullable=False),
        _timestamp("created_at"),
        sa.ForeignKeyConstraint(["launch_id"], ["launch.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("slug"),
        sa.UniqueConstraint("launch_id"),
    )
    op.create_table(
        "station_role",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("station_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("slug", sa.Text(), nullable=False),
        sa.Column("color", sa.Text(), nullable=True),
        sa.Column("permissions", sa.JSON(), nullable=False),
        sa.Column("priority", sa.Integer(), nullable=False),
        sa.Column("is_default", sa.Boolean(), nullable=False),
        sa.Column("is_system", sa.Boolean(), nullable=False),
        sa.ForeignKeyConstraint(["station_id"], ["station.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("station_id", "slug", name="uq_station_role_station_slug"),
    )
    op.create_table(
        "station_crew",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("station_id", sa.Integer(), nullable=False),
        sa.Column("username", sa.Text(), nullable=False),
        sa.Column("role", sa.Text(), nullable=False),
        sa.Column("karma_earned_here", sa.Integer(), nullable=False),
        _timestamp("joined_at"),
        sa.ForeignKeyConstraint(["station_id"], ["station.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("station_id", "username", name="uq_station_crew_station_user"),
    )
    op.create_index("ix_station_crew_username", "station_crew", ["username"])

    op.create_table(
        "board_post",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("author_username", sa.Text(), nullable=False),
        sa.Column("board_type", sa.Text(), nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("upvotes", sa.Integer(), nullable=False),
        sa.Column("downvotes", sa.Integer(), nullable=False),
        sa.Column("comment_count", sa.Integer(), nullable=False),
        sa.Column("is_poten", sa.Boolean(), nullable=False),
        _timestamp("poten_at", nullable=True),
        _timestamp("created_at"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_board_post_board_type", "board_post", ["board_type"])
    op.create_index("ix_board_post_is_poten", "board_post", ["is_poten"])

    op.create_table(
        "board_post_vote",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("post_id", sa.Integer(), nullable=False),
        sa.Column("voter_username", sa.Text(), nullable=False),
        sa.Column("vote_type", sa.Text(), nullable=False),
        _timestamp("created_at"),
        sa.CheckConstraint("vote_type IN ('up', 'down')", name="ck_board_post_vote_type"),
        sa.ForeignKeyConstraint(["post_id"], ["board_post.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("post_id", "voter_username", name="uq_board_post_vote_post_voter"),
    )
    op.create_index("ix_board_post_vote_post_id", "board_post_vote", ["post_id"])

    op.create_table(
        "poten_achievement",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("target_type", sa.Text(), nullable=False),
        sa.Column("target_id", sa.Integer(), nullable=False),
        sa.Column("score_at_crossing", sa.Integer(), nullable=False),
        _timestamp("crossed_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("target_type", "target_id", name="uq_poten_achievement_target"),
    )

    op.create_table(
        "analysis",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("username", sa.Text(), nullable=False),
        sa.Column("avatar_url", sa.Text(), nullable=False),
        sa.Column("name", sa.Text(), nullable=True),
        sa.Column("grit", sa.Float(), nullable=False),
        sa.Column("focus", sa.Float(), nullable=False),
        sa.Column("craft", sa.Float(), nullable=False),
        sa.Column("impact", sa.Float(), nullable=False),
        sa.Column("voice", sa.Float(), nullable=False),
        sa.Column("reach", sa.Float(), nullable=False),
        sa.Column("overall_rating", sa.Float(), nullable=False),
        sa.Column("tier", sa.Text(), nullable=False),
        sa.Column("archetype_id", sa.Text(), nullable=False),
        sa.Column("total_stars", sa.Integer(), nullable=True),
        sa.Column("followers", sa.Integer(), nullable=True),
        sa.Column("top_language", sa.Text(), nullable=True),
        _timestamp("analyzed_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("username"),
    )
    op.create_index("ix_analysis_overall_rating", "analysis", ["overall_rating"])

    op.create_table(
        "stats",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("type", sa.Text(), nullable=False),
        sa.Column("top_users", sa.JSON(), nullable=False),
        sa.Column("distribution", sa.JSON(), nullable=False),
        sa.Column("total_users", sa.Integer(), nullable=False),
        _timestamp("updated_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("type"),
    )


def downgrade() -> None:
    """Drop every table in reverse dependency order."""
    op.drop_table("stats")
    op.drop_index("ix_analysis_overall_rating", table_name="analysis")
    op.drop_table("analysis")
    op.drop_table("poten_achievement")
    op.drop_index("ix_board_post_vote_post_id", table_name="board_post_vote")
    op.drop_table("board_post_vote")
    op.drop_index("ix_board_post_is_poten", table_name="board_post")
    op.drop_index("ix_board_post_board_type", table_name="board_post")
    op.drop_table("board_post")
    op.drop_index("ix_station_crew_username", table_name="station_crew")
    op.drop_table("station_crew")
    op.drop_table("station_role")
    op.drop_table("station")
    op.drop_table("weekly_result")
    op.drop_index("ix_launch_vote_launch_id", table_name="launch_vote")
    op.drop_table("launch_vote")
    op.drop_index("ix_launch_is_poten", table_name="launch")
    op.drop_index("ix_launch_linked_idea_id", table_name="launch")
    op.drop_index("ix_launch_username", table_name="launch")
    op.drop_index("ix_launch_week_number", table_name="launch")
    op.drop_table("launch")
    op.drop_index("ix_idea_author_username", table_name="idea")
    op.drop_table("idea")
    op.drop_index("ix_builder_rank_tier_score", table_name="builder_rank")
    op.drop_table("builder_rank")
    op.drop_table("app_user")
