"""Enumerated values of reserved event fields.

See https://sift.com/developers/docs/curl/events-api/fields
"""

from __future__ import annotations

from enum import Enum


class VerificationStatus(str, Enum):
    SUCCESS = "$success"
    FAILURE = "$failure"
    PENDING = "$pending"


class VerifiedEvent(str, Enum):
    """Reserved event that triggered a verification."""

    ADD_ITEM_TO_CART = "$add_item_to_cart"
    ADD_PROMOTION = "$add_promotion"
    CONTENT_STATUS = "$content_status"
    CREATE_ACCOUNT = "$create_account"
    CREATE_CONTENT = "$create_content"
    CREATE_ORDER = "$create_order"
    FLAG_CONTENT = "$flag_content"
    LOGIN = "$login"
    ORDER_STATUS = "$order_status"
    REMOVE_ITEM_FROM_CART = "$remove_item_from_cart"
    TRANSACTION = "$transaction"
    UPDATE_ACCOUNT = "$update_account"
    UPDATE_CONTENT = "$update_content"
    UPDATE_ORDER = "$update_order"
    UPDATE_PASSWORD = "$update_password"


class VerificationType(str, Enum):
    """Channel used to deliver or perform a verification."""

    SMS = "$sms"
    PHONE_CALL = "$phone_call"
    EMAIL = "$email"
    APP_TFA = "$app_tfa"
    CAPTCHA = "$captcha"
    SHARED_KNOWLEDGE = "$shared_knowledge"
    FACE = "$face"
    FINGERPRINT = "$fingerprint"
    PUSH = "$push"
    SECURITY_KEY = "$security_key"


class VerificationReason(str, Enum):
    USER_SETTING = "$user_setting"
    MANUAL_REVIEW = "$manual_review"
    AUTOMATED_RULE = "$automated_rule"


class ChargebackState(str, Enum):
    RECEIVED = "$received"
    ACCEPTED = "$accepted"
    DISPUTED = "$disputed"
    WON = "$won"
    LOST = "$lost"


class ChargebackReason(str, Enum):
    FRAUD = "$fraud"
    DUPLICATE = "$duplicate"
    PRODUCT_NOT_RECEIVED = "$product_not_received"
    PRODUCT_UNACCEPTABLE = "$product_unacceptable"
    OTHER = "$other"


class LoginFailureReason(str, Enum):
    ACCOUNT_UNKNOWN = "$account_unknown"
    ACCOUNT_SUSPENDED = "$account_suspended"
    ACCOUNT_DISABLED = "$account_disabled"
    WRONG_PASSWORD = "$wrong_password"


class SocialSignOn(str, Enum):
    FACEBOOK = "$facebook"
    GOOGLE = "$google"
    LINKEDIN = "$linkedin"
    TWITTER = "$twitter"
    YAHOO = "$yahoo"
    MICROSOFT = "$microsoft"
    AMAZON = "$amazon"
    APPLE = "$apple"
    OTHER = "$other"


class AccountType(str, Enum):
    MERCHANT = "merchant"
    SHOPPER = "shopper"
    REGULAR = "regular"
    PREMIUM = "premium"


class LoginStatus(str, Enum):
    SUCCESS = "$success"
    FAILURE = "$failure"


class UpdatePasswordReason(str, Enum):
    USER_UPDATE = "$user_update"
    FORGOT_PASSWORD = "$forgot_password"
    FORCED_RESET = "$forced_reset"


class UpdatePasswordStatus(str, Enum):
    SUCCESS = "$success"
    FAILURE = "$failure"
    PENDING = "$pending"


class OrderStatus(str, Enum):
    APPROVED = "$approved"
    CANCELED = "$canceled"
    HELD = "$held"
    FULFILLED = "$fulfilled"
    RETURNED = "$returned"


class OrderCancellationReason(str, Enum):
    PAYMENT_RISK = "$payment_risk"
    ABUSE = "$abuse"
    POLICY = "$policy"
    OTHER = "$other"


class DecisionSource(str, Enum):
    AUTOMATED = "$automated"
    MANUAL_REVIEW = "$manual_review"


class SecurityNotificationType(str, Enum):
    EMAIL = "$email"
    SMS = "$sms"
    PUSH = "$push"


class PaymentMethodVerificationStatus(str, Enum):
    SUCCESS = "$success"
    FAILURE = "$failure"
    PENDING = "$pending"


class PaymentType(str, Enum):
    CASH = "$cash"
    CHECK = "$check"
    CREDIT_CARD = "$credit_card"
    CRYPTO_CURRENCY = "$crypto_currency"
    DEBIT_CARD = "$debit_card"
    DIGITAL_WALLET = "$digital_wallet"
    ELECTRONIC_FUND_TRANSFER = "$electronic_fund_transfer"
    FINANCING = "$financing"
    GIFT_CARD = "$gift_card"
    INVOICE = "$invoice"
    IN_APP_PURCHASE = "$in_app_purchase"
    MONEY_ORDER = "$money_order"
    POINTS = "$points"
    PREPAID_CARD = "$prepaid_card"
    STORE_CREDIT = "$store_credit"
    THIRD_PARTY_PROCESSOR = "$third_party_processor"
    VOUCHER = "$voucher"
    SEPA_CREDIT = "$sepa_credit"
    SEPA_INSTANT_CREDIT = "$sepa_instant_credit"
    SEPA_DIRECT_DEBIT = "$sepa_direct_debit"
    ACH_CREDIT = "$ach_credit"
    ACH_DEBIT = "$ach_debit"
    WIRE_CREDIT = "$wire_credit"
    WIRE_DEBIT = "$wire_debit"


class TransactionType(str, Enum):
    SALE = "$sale"
    AUTHORIZE = "$authorize"
    CAPTURE = "$capture"
    VOID = "$void"
    REFUND = "$refund"
    DEPOSIT = "$deposit"
    WITHDRAWAL = "$withdrawal"
    TRANSFER = "$transfer"
    BUY = "$buy"
    SELL = "$sell"
    SEND = "$send"
    RECEIVE = "$receive"


class TransactionStatus(str, Enum):
    SUCCESS = "$success"
    FAILURE = "$failure"
    PENDING = "$pending"


class DeclineCategory(str, Enum):
    FRAUD = "$fraud"
    LOST_OR_STOLEN = "$lost_or_stolen"
    RISKY = "$risky"
    BANK_DECLINE = "$bank_decline"
    INVALID = "$invalid"
    EXPIRED = "$expired"
    INSUFFICIENT_FUNDS = "$insufficient_funds"
    LIMIT_EXCEEDED = "$limit_exceeded"
    ADDITIONAL_VERIFICATION_REQUIRED = "$additional_verification_required"
    INVALID_VERIFICATION = "$invalid_verification"
    OTHER = "$other"


class Status3Ds(str, Enum):
    SUCCESSFUL = "$successful"
    ATTEMPTED = "$attempted"
    FAILED = "$failed"
    UNAVAILABLE = "$unavailable"
    REJECTED = "$rejected"


class Triggered3Ds(str, Enum):
    PROCESSOR = "$processor"
    MERCHANT = "$merchant"


class ShippingMethod(str, Enum):
    ELECTRONIC = "$electronic"
    PHYSICAL = "$physical"


class ContentStatus(str, Enum):
    DRAFT = "$draft"
    PENDING = "$pending"
    ACTIVE = "$active"
    PAUSED = "$paused"
    DELETED_BY_USER = "$deleted_by_user"
    DELETED_BY_COMPANY = "$deleted_by_company"


class ContentFlagReason(str, Enum):
    TOXIC = "$toxic"
    IRRELEVANT = "$irrelevant"
    COMMERCIAL = "$commercial"
    PHISHING = "$phishing"
    PRIVATE = "$private"
    SCAM = "$scam"
    COPYRIGHT = "$copyright"
    OTHER = "$other"
