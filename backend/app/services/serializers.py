"""Response shaping: ORM rows to the public schemas, never exposing password hashes."""

from app.models.models import Offer, User, Wish, Wishlist
from app.schemas.offer import OfferPublic
from app.schemas.user import UserProfile, UserPublicProfile
from app.schemas.wish import WishOffer, WishPartial, WishPublic
from app.schemas.wishlist import WishlistPublic


def _offer_user_visible(offer: Offer, viewer_id: int | None) -> bool:
    return not offer.hidden or (viewer_id is not None and offer.user_id == viewer_id)


def serialize_user_profile(user: User) -> UserProfile:
    return UserProfile.model_validate(user)


def serialize_public_profile(user: User) -> UserPublicProfile:
    return UserPublicProfile.model_validate(user)


def serialize_wish_partial(wish: Wish) -> WishPartial:
    return WishPartial(
        id=wish.id,
        created_at=wish.created_at,
        updated_at=wish.updated_at,
        name=wish.name,
        link=wish.link,
        image=wish.image,
        price=float(wish.price),
        raised=float(wish.raised),
        copied=wish.copied,
        description=wish.description,
    )


def serialize_wish(wish: Wish, viewer_id: int | None = None) -> WishPublic:
    offers = [
        WishOffer(
            id=offer.id,
            created_at=offer.created_at,
            amount=float(offer.amount),
            hidden=offer.hidden,
            user=serialize_public_profile(offer.user) if _offer_user_visible(offer, viewer_id) else None,
        )
        for offer in wish.offers
    ]
    partial = serialize_wish_partial(wish)
    return WishPublic(
        **partial.model_dump(),
        owner=serialize_public_profile(wish.owner),
        offers=offers,
    )


def serialize_offer(offer: Offer, viewer_id: int | None = None) -> OfferPublic:
    return OfferPublic(
        id=offer.id,
        created_at=offer.created_at,
        updated_at=offer.updated_at,
        amount=float(offer.amount),
        hidden=offer.hidden,
        item=serialize_wish_partial(offer.item),
        user=serialize_public_profile(offer.user) if _offer_user_visible(offer, viewer_id) else None,
    )


def serialize_wishlist(wishlist: Wishlist) -> WishlistPublic:
    return WishlistPublic(
        id=wishlist.id,
        created_at=wishlist.created_at,
        updated_at=wishlist.updated_at,
        name=wishlist.name,
        description=wishlist.description,
        image=wishlist.image,
        owner=serialize_public_profile(wishlist.owner),
        items=[serialize_wish_partial(wish) for wish in wishlist.items],
    )
