from datetime import datetime
from decimal import Decimal

from sqlalchemy import Boolean, CheckConstraint, Column, DateTime, ForeignKey, Integer, Numeric, String, Table
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.session import Base


DEFAULT_ABOUT = "Пока ничего не рассказал о себе"
DEFAULT_AVATAR = "https://i.pravatar.cc/300"


wishlist_items = Table(
    "wishlist_items",
    Base.metadata,
    Column("wishlist_id", ForeignKey("wishlists.id", ondelete="CASCADE"), primary_key=True),
    Column("wish_id", ForeignKey("wishes.id", ondelete="CASCADE"), primary_key=True),
)


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    username: Mapped[str] = mapped_column(String(30), unique=True, index=True, nullable=False)
    about: Mapped[str] = mapped_column(String(200), default=DEFAULT_ABOUT, nullable=False)
    avatar: Mapped[str] = mapped_column(String(2048), default=DEFAULT_AVATAR, nullable=False)
    email: Mapped[str] = mapped_column(String(320), unique=True, index=True, nullable=False)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )

    wishes: Mapped[list["Wish"]] = relationship(
        back_populates="owner",
        cascade="all, delete-orphan",
        order_by="Wish.id",
    )
    offers: Mapped[list["Offer"]] = relationship(back_populates="user", cascade="all, delete-orphan")
    wishlists: Mapped[list["Wishlist"]] = relationship(back_populates="owner", cascade="all, delete-orphan")


class Wish(Base):
    __tablename__ = "wishes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    owner_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(250), nullable=False)
    link: Mapped[str] = mapped_column(String(2048), nullable=False)
    image: Mapped[str] = mapped_column(String(2048), nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    raised: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=Decimal("0"), nullable=False)
    copied: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    description: Mapped[str] = mapped_column(String(1024), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=datetime.utcnow, index=True)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )

    owner: Mapped[User] = relationship(back_populates="wishes")
    offers: Mapped[list["Offer"]] = relationship(
        back_populates="item",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Offer.id",
    )
    wishlists: Mapped[list["Wishlist"]] = relationship(
        secondary=wishlist_items,
        back_populates="items",
        passive_deletes=True,
    )

    __table_args__ = (
        CheckConstraint("price > 0", name="ck_wishes_price_positive"),
        CheckConstraint("raised >= 0", name="ck_wishes_raised_non_negative"),
    )


class Offer(Base):
    __tablename__ = "offers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    item_id: Mapped[int] = mapped_column(ForeignKey("wishes.id", ondelete="CASCADE"), nullable=False, index=True)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    hidden: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )

    user: Mapped[User] = relationship(back_populates="offers")
    item: Mapped[Wish] = relationship(back_populates="offers")

    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_offers_amount_positive"),
    )


class Wishlist(Base):
    __tablename__ = "wishlists"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    owner_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(250), nullable=False)
    description: Mapped[str] = mapped_column(String(1500), default="", nullable=False)
    image: Mapped[str] = mapped_column(String(2048), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )

    owner: Mapped[User] = relationship(back_populates="wishlists")
    items: Mapped[list[Wish]] = relationship(
        secondary=wishlist_items,
        back_populates="wishlists",
        order_by=Wish.id,
        passive_deletes=True,
    )
