"""Nested objects carried by reserved events.

See https://sift.com/developers/docs/curl/events-api/complex-field-types
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from sift_sdk.common import MillisTimestamp, ReservedModel
from sift_sdk.reserved_fields import PaymentMethodVerificationStatus, PaymentType


class Address(ReservedModel):
    name: Optional[str] = None
    address_1: Optional[str] = None
    address_2: Optional[str] = None
    city: Optional[str] = None
    region: Optional[str] = None
    country: Optional[str] = None
    zipcode: Optional[str] = None
    phone: Optional[str] = None


class App(ReservedModel):
    """App, OS and device details. Use instead of ``Browser`` for app clients."""

    os: Optional[str] = None
    os_version: Optional[str] = None
    device_manufacturer: Optional[str] = None
    device_model: Optional[str] = None
    device_unique_id: Optional[str] = None
    app_name: Optional[str] = None
    app_version: Optional[str] = None
    client_language: Optional[str] = None


class Browser(ReservedModel):
    """Browser details. Use instead of ``App`` for web clients."""

    user_agent: str
    accept_language: Optional[str] = None
    content_language: Optional[str] = None


class CreditPoint(ReservedModel):
    amount: int
    credit_point_type: str


class Discount(ReservedModel):
    percentage_off: Optional[float] = None
    amount: Optional[int] = None
    currency_code: Optional[str] = None
    minimum_purchase_amount: Optional[int] = None


class Guest(ReservedModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    loyalty_program: Optional[str] = None
    loyalty_program_id: Optional[str] = None
    birth_date: Optional[str] = None


class Image(ReservedModel):
    md5_hash: Optional[str] = None
    link: Optional[str] = None
    description: Optional[str] = None


class Item(ReservedModel):
    """A product or service. ``price`` is in micros."""

    item_id: Optional[str] = None
    product_title: Optional[str] = None
    price: Optional[int] = None
    currency_code: Optional[str] = None
    quantity: Optional[int] = None
    upc: Optional[str] = None
    sku: Optional[str] = None
    isbn: Optional[str] = None
    brand: Optional[str] = None
    manufacturer: Optional[str] = None
    category: Optional[str] = None
    tags: Optional[List[str]] = None
    color: Optional[str] = None
    size: Optional[str] = None


class MerchantProfile(ReservedModel):
    merchant_name: str
    merchant_id: Optional[str] = None
    merchant_category_code: Optional[str] = None
    merchant_address: Optional[Address] = None


class OrderedFrom(ReservedModel):
    store_id: Optional[str] = None
    store_address: Optional[Address] = None


class PaymentMethod(ReservedModel):
    payment_type: Optional[PaymentType] = None
    payment_gateway: Optional[str] = None
    card_bin: Optional[str] = None
    card_last4: Optional[str] = None
    avs_result_code: Optional[str] = None
    cvv_result_code: Optional[str] = None
    verification_status: Optional[PaymentMethodVerificationStatus] = None
    routing_number: Optional[str] = None
    shortened_iban_first6: Optional[str] = None
    shortened_iban_last4: Optional[str] = None
    sepa_direct_debit_mandate: Optional[bool] = None
    decline_reason_code: Optional[str] = None
    paypal_payer_id: Optional[str] = None
    paypal_payer_email: Optional[str] = None
    paypal_payer_status: Optional[str] = None
    paypal_address_status: Optional[str] = None
    paypal_protection_eligibility: Optional[str] = None
    paypal_payment_status: Optional[str] = None
    stripe_cvc_check: Optional[str] = None
    stripe_address_line1_check: Optional[str] = None
    stripe_address_line2_check: Optional[str] = None
    stripe_address_zip_check: Optional[str] = None
    stripe_funding: Optional[str] = None
    stripe_brand: Optional[str] = None
    account_holder_name: Optional[str] = None
    account_number_last5: Optional[str] = None
    bank_name: Optional[str] = None
    bank_country: Optional[str] = None


class Promotion(ReservedModel):
    promotion_id: Optional[str] = None
    status: Optional[str] = None
    failure_reason: Optional[str] = None
    description: Optional[str] = None
    referrer_user_id: Optional[str] = None
    discount: Optional[Discount] = None
    credit_point: Optional[CreditPoint] = None


class Segment(ReservedModel):
    departure_address: Optional[Address] = None
    arrival_address: Optional[Address] = None
    start_time: Optional[MillisTimestamp] = None
    end_time: Optional[MillisTimestamp] = None
    vessel_number: Optional[str] = None
    departure_airport_code: Optional[str] = None
    arrival_airport_code: Optional[str] = None
    fare_class: Optional[str] = None


class BookingType(str, Enum):
    EVENT_TICKET = "$event_ticket"
    ACCOMMODATION = "$accommodation"
    FLIGHT = "$flight"
    BUS = "$bus"
    CRUISE = "$cruise"
    RIDESHARE = "$rideshare"
    VEHICLE = "$vehicle"
    OTHER = "$other"


class Booking(ReservedModel):
    """A reservation (ticket, stay, trip) purchased in an order.

    Fields that do not apply to the ``booking_type`` are left unset.
    """

    booking_type: BookingType
    title: Optional[str] = None
    start_time: Optional[MillisTimestamp] = None
    end_time: Optional[MillisTimestamp] = None
    price: Optional[int] = None
    currency_code: Optional[str] = None
    quantity: Optional[int] = None
    guests: Optional[List[Guest]] = None
    segments: Optional[List[Segment]] = None
    event_id: Optional[str] = None
    venue_id: Optional[str] = None
    room_type: Optional[str] = None
    location: Optional[Address] = None
    category: Optional[str] = None
    tags: Optional[List[str]] = None
