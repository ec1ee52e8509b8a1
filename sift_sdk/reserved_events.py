"""Reserved events accepted by the Events API.

Every event is a pydantic model whose ``type`` field is a literal tag
serialized as ``$type``. ``Event`` is the discriminated union over all of
them; ``parse_event`` decodes a wire payload back into the right class.

Fields a caller does not declare are kept as custom fields and sent
unprefixed::

    Login(user_id="u1", login_status=LoginStatus.SUCCESS, plan="gold")

See https://sift.com/developers/docs/curl/events-api/reserved-events
"""

from __future__ import annotations

from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import Field, TypeAdapter, model_validator

from sift_sdk import reserved_fields as rf
from sift_sdk.common import AbuseType, MillisTimestamp, ReservedModel
from sift_sdk.complex_fields import (
    Address,
    App,
    Booking,
    Browser,
    Image,
    Item,
    MerchantProfile,
    OrderedFrom,
    PaymentMethod,
    Promotion,
)


class ClientContext(ReservedModel):
    """Fields shared by events sent from a user's device.

    Set ``browser`` for web traffic or ``app`` for mobile traffic, not both.
    """

    browser: Optional[Browser] = None
    app: Optional[App] = None
    brand_name: Optional[str] = None
    site_country: Optional[str] = None
    site_domain: Optional[str] = None


# ── Content bodies ───────────────────────────────────────────────

class CommentProperties(ReservedModel):
    body: Optional[str] = None
    contact_email: Optional[str] = None
    parent_comment_id: Optional[str] = None
    root_content_id: Optional[str] = None
    images: Optional[List[Image]] = None


class ListingProperties(ReservedModel):
    subject: Optional[str] = None
    body: Optional[str] = None
    contact_email: Optional[str] = None
    contact_address: Optional[Address] = None
    locations: Optional[List[Address]] = None
    listed_items: Optional[List[Item]] = None
    images: Optional[List[Image]] = None
    expiration_time: Optional[MillisTimestamp] = None


class MessageProperties(ReservedModel):
    subject: Optional[str] = None
    body: Optional[str] = None
    contact_email: Optional[str] = None
    root_content_id: Optional[str] = None
    recipient_user_ids: Optional[List[str]] = None
    images: Optional[List[Image]] = None


class PostProperties(ReservedModel):
    subject: Optional[str] = None
    body: Optional[str] = None
    contact_email: Optional[str] = None
    contact_address: Optional[Address] = None
    locations: Optional[List[Address]] = None
    categories: Optional[List[str]] = None
    images: Optional[List[Image]] = None
    expiration_time: Optional[MillisTimestamp] = None


class ProfileProperties(ReservedModel):
    body: Optional[str] = None
    contact_email: Optional[str] = None
    contact_address: Optional[Address] = None
    images: Optional[List[Image]] = None
    categories: Optional[List[str]] = None


class ReviewProperties(ReservedModel):
    subject: Optional[str] = None
    body: Optional[str] = None
    contact_email: Optional[str] = None
    locations: Optional[List[Address]] = None
    item_reviewed: Optional[Item] = None
    reviewed_content_id: Optional[str] = None
    rating: Optional[float] = None
    images: Optional[List[Image]] = None


CONTENT_KINDS = ("comment", "listing", "message", "post", "profile", "review")


class ContentEvent(ClientContext):
    """Base of ``CreateContent`` and ``UpdateContent``.

    Exactly one content body is set; it goes out under its own key
    (``$comment``, ``$listing``, ...).
    """

    user_id: str
    content_id: str
    session_id: Optional[str] = None
    status: Optional[rf.ContentStatus] = None
    ip: Optional[str] = None
    comment: Optional[CommentProperties] = None
    listing: Optional[ListingProperties] = None
    message: Optional[MessageProperties] = None
    post: Optional[PostProperties] = None
    profile: Optional[ProfileProperties] = None
    review: Optional[ReviewProperties] = None

    @model_validator(mode="after")
    def check_single_content(self) -> "ContentEvent":
        present = [kind for kind in CONTENT_KINDS if getattr(self, kind) is not None]
        if len(present) != 1:
            raise ValueError(
                f"exactly one of {', '.join(CONTENT_KINDS)} must be set, got {present or 'none'}"
            )
        return self


class OrderEvent(ClientContext):
    """Base of ``CreateOrder`` and ``UpdateOrder``. ``amount`` is in micros."""

    user_id: str
    session_id: Optional[str] = None
    order_id: Optional[str] = None
    user_email: Optional[str] = None
    verification_phone_number: Optional[str] = None
    amount: Optional[int] = None
    currency_code: Optional[str] = None
    billing_address: Optional[Address] = None
    payment_methods: Optional[List[PaymentMethod]] = None
    shipping_address: Optional[Address] = None
    expedited_shipping: Optional[bool] = None
    items: Optional[List[Item]] = None
    bookings: Optional[List[Booking]] = None
    seller_user_id: Optional[str] = None
    promotions: Optional[List[Promotion]] = None
    shipping_method: Optional[rf.ShippingMethod] = None
    shipping_carrier: Optional[str] = None
    shipping_tracking_numbers: Optional[List[str]] = None
    ordered_from: Optional[OrderedFrom] = None
    merchant_profile: Optional[MerchantProfile] = None


class AccountEvent(ClientContext):
    """Base of ``CreateAccount`` and ``UpdateAccount``."""

    user_id: str
    user_email: Optional[str] = None
    name: Optional[str] = None
    phone: Optional[str] = None
    referrer_user_id: Optional[str] = None
    payment_methods: Optional[List[PaymentMethod]] = None
    billing_address: Optional[Address] = None
    shipping_address: Optional[Address] = None
    social_sign_on_type: Optional[rf.SocialSignOn] = None
    account_types: Optional[List[rf.AccountType]] = None


# ── Events ───────────────────────────────────────────────────────

class AddItemToCart(ClientContext):
    type: Literal["$add_item_to_cart"] = "$add_item_to_cart"
    user_id: str
    session_id: Optional[str] = None
    item: Optional[Item] = None


class AddPromotion(ClientContext):
    type: Literal["$add_promotion"] = "$add_promotion"
    user_id: str
    promotions: Optional[List[Promotion]] = None


class Chargeback(ReservedModel):
    type: Literal["$chargeback"] = "$chargeback"
    order_id: Optional[str] = None
    transaction_id: Optional[str] = None
    user_id: Optional[str] = None
    chargeback_state: Optional[rf.ChargebackState] = None
    chargeback_reason: Optional[rf.ChargebackReason] = None


class ContentStatus(ClientContext):
    type: Literal["$content_status"] = "$content_status"
    user_id: str
    content_id: str
    status: rf.ContentStatus


class CreateAccount(AccountEvent):
    type: Literal["$create_account"] = "$create_account"
    session_id: Optional[str] = None
    promotions: Optional[List[Promotion]] = None


class CreateContent(ContentEvent):
    type: Literal["$create_content"] = "$create_content"


class CreateOrder(OrderEvent):
    type: Literal["$create_order"] = "$create_order"


class FlagContent(ReservedModel):
    type: Literal["$flag_content"] = "$flag_content"
    user_id: str
    content_id: str
    flagged_by: Optional[str] = None
    reason: Optional[rf.ContentFlagReason] = None


class LinkSessionToUser(ReservedModel):
    type: Literal["$link_session_to_user"] = "$link_session_to_user"
    session_id: str
    user_id: str


class Label(ReservedModel):
    """Legacy label event. Prefer ``SiftClient.label`` over tracking it."""

    type: Literal["$label"] = "$label"
    is_fraud: bool
    abuse_type: AbuseType
    description: Optional[str] = None
    source: Optional[str] = None
    analyst: Optional[str] = None


class Login(ClientContext):
    type: Literal["$login"] = "$login"
    user_id: str
    session_id: Optional[str] = None
    login_status: Optional[rf.LoginStatus] = None
    user_email: Optional[str] = None
    ip: Optional[str] = None
    failure_reason: Optional[rf.LoginFailureReason] = None
    username: Optional[str] = None
    social_sign_on_type: Optional[rf.SocialSignOn] = None
    account_types: Optional[List[rf.AccountType]] = None


class Logout(ClientContext):
    type: Literal["$logout"] = "$logout"
    user_id: str


class OrderStatus(ClientContext):
    type: Literal["$order_status"] = "$order_status"
    user_id: str
    order_id: str
    order_status: rf.OrderStatus
    reason: Optional[rf.OrderCancellationReason] = None
    source: Optional[rf.DecisionSource] = None
    analyst: Optional[str] = None
    webhook_id: Optional[str] = None
    description: Optional[str] = None


class RemoveItemFromCart(ClientContext):
    type: Literal["$remove_item_from_cart"] = "$remove_item_from_cart"
    user_id: str
    session_id: Optional[str] = None
    item: Optional[Item] = None


class SecurityNotification(ClientContext):
    type: Literal["$security_notification"] = "$security_notification"
    user_id: str
    session_id: str
    notification_status: str
    notification_type: Optional[rf.SecurityNotificationType] = None
    notified_value: Optional[str] = None


class Transaction(ClientContext):
    """A payment attempt. ``amount`` is in micros, see ``micros()``."""

    type: Literal["$transaction"] = "$transaction"
    user_id: str
    amount: int
    currency_code: str
    user_email: Optional[str] = None
    verification_phone_number: Optional[str] = None
    transaction_type: Optional[rf.TransactionType] = None
    transaction_status: Optional[rf.TransactionStatus] = None
    order_id: Optional[str] = None
    transaction_id: Optional[str] = None
    billing_address: Optional[Address] = None
    payment_method: Optional[PaymentMethod] = None
    shipping_address: Optional[Address] = None
    session_id: Optional[str] = None
    seller_user_id: Optional[str] = None
    transfer_recipient_user_id: Optional[str] = None
    decline_category: Optional[rf.DeclineCategory] = None
    ordered_from: Optional[OrderedFrom] = None
    status_3ds: Optional[rf.Status3Ds] = None
    triggered_3ds: Optional[rf.Triggered3Ds] = None
    merchant_initiated_transaction: Optional[bool] = None
    merchant_profile: Optional[MerchantProfile] = None
    sent_address: Optional[Address] = None
    received_address: Optional[Address] = None
    receiver_wallet_address: Optional[str] = None
    receiver_external_address: Optional[bool] = None


class UpdateAccount(AccountEvent):
    type: Literal["$update_account"] = "$update_account"
    changed_password: Optional[bool] = None


class UpdateContent(ContentEvent):
    type: Literal["$update_content"] = "$update_content"


class UpdateOrder(OrderEvent):
    type: Literal["$update_order"] = "$update_order"


class UpdatePassword(ClientContext):
    type: Literal["$update_password"] = "$update_password"
    user_id: str
    reason: rf.UpdatePasswordReason
    status: rf.UpdatePasswordStatus


class Verification(ClientContext):
    type: Literal["$verification"] = "$verification"
    user_id: str
    session_id: str
    status: rf.VerificationStatus
    verified_event: Optional[rf.VerifiedEvent] = None
    verified_entity_id: Optional[str] = None
    verification_type: Optional[rf.VerificationType] = None
    verified_value: Optional[str] = None
    reason: Optional[rf.VerificationReason] = None


Event = Annotated[
    Union[
        AddItemToCart,
        AddPromotion,
        Chargeback,
        ContentStatus,
        CreateAccount,
        CreateContent,
        CreateOrder,
        FlagContent,
        LinkSessionToUser,
        Label,
        Login,
        Logout,
        OrderStatus,
        RemoveItemFromCart,
        SecurityNotification,
        Transaction,
        UpdateAccount,
        UpdateContent,
        UpdateOrder,
        UpdatePassword,
        Verification,
    ],
    Field(discriminator="type"),
]

_event_adapter: TypeAdapter[Any] = TypeAdapter(Event)


def parse_event(data: Dict[str, Any]) -> ReservedModel:
    """Decode a wire payload into the event class named by its ``$type``.

    Raises ``pydantic.ValidationError`` for an unknown or missing tag.
    """
    return _event_adapter.validate_python(data)


def event_to_json(event: ReservedModel, api_key: Optional[str] = None) -> Dict[str, Any]:
    """Serialize an event for the wire, optionally stamping ``$api_key``."""
    payload = event.to_json_dict()
    if api_key is not None:
        payload["$api_key"] = api_key
    return payload
