"""SQLAlchemy table definitions for SimsKut.

These tables are used with SQLAlchemy Core and match the schema defined in
the Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
    func,
    text,
)
from sqlalchemy.dialects import postgresql
from sqlalchemy.dialects.postgresql import JSONB, TIMESTAMP, UUID

metadata = MetaData()

# ============================================================================
# PROFILES TABLE (id = auth provider user id)
# ============================================================================
profiles_table = Table(
    "profiles",
    metadata,
    Column("id", UUID, primary_key=True),
    Column("username", String(40), nullable=False),
    Column("display_name", String(50), nullable=False),
    Column("avatar_url", Text, nullable=True),
    Column("banner_url", Text, nullable=True),
    Column("bio", String(160), nullable=True),
    Column("website_url", String(100), nullable=True),
    Column("is_admin", Boolean, nullable=False, server_default="false"),
    Column("invite_code_used", String(20), nullable=True),
    Column("tag_changed", Boolean, nullable=False, server_default="false"),
    Column("zen_background", JSONB, nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("username", name="uq_profiles_username"),
)

Index("idx_profiles_username_lower", func.lower(profiles_table.c.username))

# ============================================================================
# INVITE CODES TABLE
# ============================================================================
invite_codes_table = Table(
    "invite_codes",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("code", String(20), nullable=False),
    Column(
        "used_by", UUID, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "status",
        postgresql.ENUM(
            "pending", "approved", "rejected", name="invite_status", create_type=False
        ),
        nullable=False,
        server_default="pending",
    ),
    Column(
        "approved_by",
        UUID,
        ForeignKey("profiles.id", ondelete="SET NULL"),
        nullable=True,
    ),
    Column("approved_at", TIMESTAMP(timezone=True), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("code", name="uq_invite_codes_code"),
)

Index(
    "idx_invite_codes_used_by_created_at",
    invite_codes_table.c.used_by,
    invite_codes_table.c.created_at.desc(),
)
# At most one pending invite per user
Index(
    "idx_invite_codes_unique_pending_user",
    invite_codes_table.c.used_by,
    unique=True,
    postgresql_where=text("status = 'pending'"),
)

# ============================================================================
# NOTIFICATIONS TABLE
# ============================================================================
notifications_table = Table(
    "notifications",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column(
        "user_id", UUID, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "actor_id", UUID, ForeignKey("profiles.id", ondelete="SET NULL"), nullable=True
    ),
    Column("type", String(30), nullable=False),
    Column("content", Text, nullable=True),
    Column("reference_id", String(64), nullable=True),
    Column("read", Boolean, nullable=False, server_default="false"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint(
        "type IN ('mention_post', 'mention_comment', 'like_post', 'like_photo', "
        "'like_comment', 'comment_post', 'comment_photo', 'reaction_post', "
        "'new_post_friend', 'friend_accept', 'family_update')",
        name="ck_notifications_type",
    ),
)

Index(
    "idx_notifications_user_created_at",
    notifications_table.c.user_id,
    notifications_table.c.created_at.desc(),
)

# ============================================================================
# FEED POSTS TABLE
# ============================================================================
feed_posts_table = Table(
    "feed_posts",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column(
        "author_id", UUID, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False
    ),
    Column("content", String(280), nullable=True),
    Column(
        "image_urls",
        postgresql.ARRAY(Text),
        nullable=False,
        server_default="{}",
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint(
        "content IS NOT NULL OR cardinality(image_urls) > 0",
        name="ck_feed_posts_content_or_images",
    ),
    CheckConstraint("cardinality(image_urls) <= 4", name="ck_feed_posts_max_images"),
)

Index("idx_feed_posts_created_at", feed_posts_table.c.created_at.desc())

# ============================================================================
# POST LIKES TABLE
# ============================================================================
post_likes_table = Table(
    "post_likes",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column(
        "post_id", UUID, ForeignKey("feed_posts.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "user_id", UUID, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("post_id", "user_id", name="uq_post_likes_post_user"),
)

# ============================================================================
# POST COMMENTS TABLE
# ============================================================================
post_comments_table = Table(
    "post_comments",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column(
        "post_id", UUID, ForeignKey("feed_posts.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "author_id", UUID, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False
    ),
    Column("content", String(500), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index(
    "idx_post_comments_post_created_at",
    post_comments_table.c.post_id,
    post_comments_table.c.created_at,
)

# ============================================================================
# FRIENDSHIPS TABLE
# ============================================================================
friendships_table = Table(
    "friendships",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column(
        "requester_id",
        UUID,
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "addressee_id",
        UUID,
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "status",
        postgresql.ENUM(
            "pending", "accepted", name="friendship_status", create_type=False
        ),
        nullable=False,
        server_default="pending",
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("requester_id <> addressee_id", name="ck_friendships_not_self"),
)

# One row per unordered pair
Index(
    "idx_friendships_pair",
    func.least(friendships_table.c.requester_id, friendships_table.c.addressee_id),
    func.greatest(friendships_table.c.requester_id, friendships_table.c.addressee_id),
    unique=True,
)

# ============================================================================
# PUSH SUBSCRIPTIONS TABLE
# ============================================================================
push_subscriptions_table = Table(
    "push_subscriptions",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column(
        "user_id", UUID, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False
    ),
    Column("endpoint", Text, nullable=False),
    Column("p256dh", Text, nullable=False),
    Column("auth", Text, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("user_id", "endpoint", name="uq_push_subscriptions_user_endpoint"),
)
