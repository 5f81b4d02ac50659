from alembic import op
import sqlalchemy as sa


revision = "20261019_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("username", sa.String(length=30), nullable=False),
        sa.Column("about", sa.String(length=200), nullable=False),
        sa.Column("avatar", sa.String(length=2048), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("hashed_password", sa.String(length=255), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_users_id", "users", ["id"])
    op.create_index("ix_users_username", "users", ["username"], unique=True)
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "wishes",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("owner_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("name", sa.String(length=250), nullable=False),
        sa.Column("link", sa.String(length=2048), nullable=False),
        sa.Column("image", sa.String(length=2048), nullable=False),
        sa.Column("price", sa.Numeric(12, 2), nullable=False),
        sa.Column("raised", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("copied", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("description", sa.String(length=1024), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("price > 0", name="ck_wishes_price_positive"),
        sa.CheckConstraint("raised >= 0", name="ck_wishes_raised_non_negative"),
    )
    op.create_index("ix_wishes_owner_id", "wishes", ["owner_id"])
    op.create_index("ix_wishes_created_at", "wishes", ["created_at"])

    op.create_table(
        "offers",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("item_id", sa.Integer(), sa.ForeignKey("wishes.id", ondelete="CASCADE"), nullable=False),
        sa.Column("amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("hidden", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
        sa.CheckConstraint("amount > 0", name="ck_offers_amount_positive"),
    )
    op.create_index("ix_offers_user_id", "offers", ["user_id"])
    op.create_index("ix_offers_item_id", "offers", ["item_id"])

    op.create_table(
        "wishlists",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("owner_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("name", sa.String(length=250), nullable=False),
        sa.Column("description", sa.String(length=1500), nullable=False, server_default=""),
        sa.Column("image", sa.String(length=2048), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_wishlists_owner_id", "wishlists", ["owner_id"])

    op.create_table(
        "wishlist_items",
        sa.Column("wishlist_id", sa.Integer(), sa.ForeignKey("wishlists.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("wish_id", sa.Integer(), sa.ForeignKey("wishes.id", ondelete="CASCADE"), primary_key=True),
    )


def downgrade() -> None:
    op.drop_table("wishlist_items")
    op.drop_index("ix_wishlists_owner_id", table_name="wishlists")
    op.drop_table("wishlists")
    op.drop_index("ix_offers_item_id", table_name="offers")
    op.drop_index("ix_offers_user_id", table_name="offers")
    op.drop_table("offers")
    op.drop_index("ix_wishes_created_at", table_name="wishes")
    op.drop_index("ix_wishes_owner_id", table_name="wishes")
    op.drop_table("wishes")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_index("ix_users_username", table_name="users")
    op.drop_index("ix_users_id", table_name="users")
    op.drop_table("users")
