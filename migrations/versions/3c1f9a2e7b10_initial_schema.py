"""initial_schema

Create the foundational schema for SimsKut:
- Profiles (id = auth provider user id)
- Invite codes (one pending request per user, admin-reviewed)
- Feed posts, likes and comments
- Notifications (mentions, likes, comments, friend accepts)
- Friendships (one row per unordered pair)
- Push subscriptions (web push, one per user and endpoint)
- NOTIFY trigger publishing feed_posts inserts for the realtime feed

Revision ID: 3c1f9a2e7b10
Revises:
Create Date: 2026-09-28 19:04:12.418202

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c1f9a2e7b10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at",
        sa.TIMESTAMP(timezone=True),
        nullable=False,
        server_default=sa.text("NOW()"),
    )


def _id() -> sa.Column:
    return sa.Column(
        "id",
        sa.UUID(),
        server_default=sa.text("gen_random_uuid()"),
        nullable=False,
    )


def upgrade() -> None:
    """Upgrade schema."""
    # gen_random_uuid()
    op.execute('CREATE EXTENSION IF NOT EXISTS "pgcrypto"')

    # Create ENUM types (idempotent)
    op.execute("""
        DO $$ BEGIN
            CREATE TYPE invite_status AS ENUM ('pending', 'approved', 'rejected');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    op.execute("""
        DO $$ BEGIN
            CREATE TYPE friendship_status AS ENUM ('pending', 'accepted');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    # ========================================================================
    # PROFILES table
    # ========================================================================
    op.create_table(
        "profiles",
        sa.Column("id", sa.UUID(), nullable=False),  # Auth provider user id
        sa.Column("username", sa.String(40), nullable=False),  # base#1234
        sa.Column("display_name", sa.String(50), nullable=False),
        sa.Column("avatar_url", sa.Text(), nullable=True),
        sa.Column("banner_url", sa.Text(), nullable=True),
        sa.Column("bio", sa.String(160), nullable=True),
        sa.Column("website_url", sa.String(100), nullable=True),
        sa.Column("is_admin", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("invite_code_used", sa.String(20), nullable=True),
        sa.Column("tag_changed", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("zen_background", postgresql.JSONB(), nullable=True),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("username", name="uq_profiles_username"),
    )
    # Mention resolution and search are case-insensitive
    op.execute("CREATE INDEX idx_profiles_username_lower ON profiles (lower(username))")

    # ========================================================================
    # INVITE_CODES table
    # ========================================================================
    op.create_table(
        "invite_codes",
        _id(),
        sa.Column("code", sa.String(20), nullable=False),
        sa.Column("used_by", sa.UUID(), nullable=False),
        sa.Column(
            "status",
            postgresql.ENUM(
                "pending",
                "approved",
                "rejected",
                name="invite_status",
                create_type=False,
            ),
            nullable=False,
            server_default="pending",
        ),
        sa.Column("approved_by", sa.UUID(), nullable=True),
        sa.Column("approved_at", sa.TIMESTAMP(timezone=True), nullable=True),
        _created_at(),
        sa.ForeignKeyConstraint(["used_by"], ["profiles.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["approved_by"], ["profiles.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("code", name="uq_invite_codes_code"),
    )
    op.create_index(
        "idx_invite_codes_used_by_created_at",
        "invite_codes",
        ["used_by", sa.text("created_at DESC")],
    )
    # At most one pending invite per user
    op.create_index(
        "idx_invite_codes_unique_pending_user",
        "invite_codes",
        ["used_by"],
        unique=True,
        postgresql_where=sa.text("status = 'pending'"),
    )

    # ========================================================================
    # FEED_POSTS table
    # ========================================================================
    op.create_table(
        "feed_posts",
        _id(),
        sa.Column("author_id", sa.UUID(), nullable=False),
        sa.Column("content", sa.String(280), nullable=True),
        sa.Column(
            "image_urls",
            postgresql.ARRAY(sa.Text()),
            nullable=False,
            server_default="{}",
        ),
        _created_at(),
        sa.ForeignKeyConstraint(["author_id"], ["profiles.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "content IS NOT NULL OR cardinality(image_urls) > 0",
            name="ck_feed_posts_content_or_images",
        ),
        sa.CheckConstraint(
            "cardinality(image_urls) <= 4", name="ck_feed_posts_max_images"
        ),
    )
    op.create_index(
        "idx_feed_posts_created_at", "feed_posts", [sa.text("created_at DESC")]
    )

    # ========================================================================
    # POST_LIKES table
    # ========================================================================
    op.create_table(
        "post_likes",
        _id(),
        sa.Column("post_id", sa.UUID(), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(["post_id"], ["feed_posts.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["profiles.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("post_id", "user_id", name="uq_post_likes_post_user"),
    )

    # ========================================================================
    # POST_COMMENTS table
    # ========================================================================
    op.create_table(
        "post_comments",
        _id(),
        sa.Column("post_id", sa.UUID(), nullable=False),
        sa.Column("author_id", sa.UUID(), nullable=False),
        sa.Column("content", sa.String(500), nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(["post_id"], ["feed_posts.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["author_id"], ["profiles.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_post_comments_post_created_at",
        "post_comments",
        ["post_id", "created_at"],
    )

    # ========================================================================
    # NOTIFICATIONS table
    # ========================================================================
    op.create_table(
        "notifications",
        _id(),
        sa.Column("user_id", sa.UUID(), nullable=False),  # Recipient
        sa.Column("actor_id", sa.UUID(), nullable=True),
        sa.Column("type", sa.String(30), nullable=False),
        sa.Column("content", sa.Text(), nullable=True),
        sa.Column("reference_id", sa.String(64), nullable=True),
        sa.Column("read", sa.Boolean(), nullable=False, server_default="false"),
        _created_at(),
        sa.ForeignKeyConstraint(["user_id"], ["profiles.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["actor_id"], ["profiles.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "type IN ('mention_post', 'mention_comment', 'like_post', 'like_photo', "
            "'like_comment', 'comment_post', 'comment_photo', 'reaction_post', "
            "'new_post_friend', 'friend_accept', 'family_update')",
            name="ck_notifications_type",
        ),
    )
    op.create_index(
        "idx_notifications_user_created_at",
        "notifications",
        ["user_id", sa.text("created_at DESC")],
    )

    # ========================================================================
    # FRIENDSHIPS table
    # ========================================================================
    op.create_table(
        "friendships",
        _id(),
        sa.Column("requester_id", sa.UUID(), nullable=False),
        sa.Column("addressee_id", sa.UUID(), nullable=False),
        sa.Column(
            "status",
            postgresql.ENUM(
                "pending", "accepted", name="friendship_status", create_type=False
            ),
            nullable=False,
            server_default="pending",
        ),
        _created_at(),
        sa.ForeignKeyConstraint(["requester_id"], ["profiles.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["addressee_id"], ["profiles.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("requester_id <> addressee_id", name="ck_friendships_not_self"),
    )
    op.execute("""
        CREATE UNIQUE INDEX idx_friendships_pair ON friendships (
            LEAST(requester_id, addressee_id),
            GREATEST(requester_id, addressee_id)
        )
    """)

    # ========================================================================
    # PUSH_SUBSCRIPTIONS table
    # ========================================================================
    op.create_table(
        "push_subscriptions",
        _id(),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("endpoint", sa.Text(), nullable=False),
        sa.Column("p256dh", sa.Text(), nullable=False),
        sa.Column("auth", sa.Text(), nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(["user_id"], ["profiles.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "user_id", "endpoint", name="uq_push_subscriptions_user_endpoint"
        ),
    )

    # ========================================================================
    # REALTIME: publish committed feed_posts inserts on table_changes
    # ========================================================================
    op.execute("""
        CREATE OR REPLACE FUNCTION notify_table_change()
        RETURNS TRIGGER AS $$
        BEGIN
            PERFORM pg_notify(
                'table_changes',
                json_build_object(
                    'table', TG_TABLE_NAME,
                    'event', TG_OP,
                    'record', row_to_json(NEW)
                )::text
            );
            RETURN NEW;
        END;
        $$ LANGUAGE plpgsql
    """)

    op.execute("""
        CREATE TRIGGER feed_posts_notify_insert
        AFTER INSERT ON feed_posts
        FOR EACH ROW EXECUTE FUNCTION notify_table_change()
    """)


def downgrade() -> None:
    """Downgrade schema."""
    # Drop triggers
    op.execute("DROP TRIGGER IF EXISTS feed_posts_notify_insert ON feed_posts")

    # Drop trigger functions
    op.execute("DROP FUNCTION IF EXISTS notify_table_change()")

    # Drop tables (in reverse order of dependencies)
    op.drop_table("push_subscriptions")
    op.drop_table("friendships")
    op.drop_table("notifications")
    op.drop_table("post_comments")
    op.drop_table("post_likes")
    op.drop_table("feed_posts")
    op.drop_table("invite_codes")
    op.drop_table("profiles")

    # Drop ENUM types
    op.execute("DROP TYPE IF EXISTS friendship_status")
    op.execute("DROP TYPE IF EXISTS invite_status")
