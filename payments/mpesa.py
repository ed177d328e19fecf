"""
mpesa.py
--------
Minimal M-Pesa (Safaricom Daraja) client for STK push payment prompts.

Flow:
1) GET  /oauth/v1/generate?grant_type=client_credentials   (basic auth)
   -> access_token
2) POST /mpesa/stkpush/v1/processrequest                    (bearer token)
   -> { MerchantRequestID, CheckoutRequestID, ResponseCode,
        ResponseDescription, CustomerMessage }

Simulator mode:
- When MPESA_CONSUMER_KEY or MPESA_CONSUMER_SECRET is empty the client never
  touches the network and answers with a fixed success response
  (ResponseCode "0"). This is for demos and local development only.

Errors:
- Any transport failure or non-2xx answer raises MpesaError. The message
  carries the HTTP status and the upstream body so callers can show it as is.
"""

import base64
import logging
import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

import requests
from django.conf import settings
from django.utils import timezone

log = logging.getLogger(__name__)

SANDBOX_URL = "https://sandbox.safaricom.co.ke"
PRODUCTION_URL = "https://api.safaricom.co.ke"
COUNTRY_CODE = "254"

PAYBILL = "CustomerPayBillOnline"
BUY_GOODS = "CustomerBuyGoodsOnline"

SIMULATED_DESCRIPTION = "Success. Request accepted for processing"

_PHONE_JUNK = re.compile(r"[\s\-+()]")


class MpesaError(Exception):
    """Provider or transport failure; str(exc) is safe to show to the caller."""


def normalize_phone(phone) -> str:
    """
    Canonicalise a Kenyan number to 2547XXXXXXXX (digits only, no '+').

    "0712345678"    -> "254712345678"
    "+254712345678" -> "254712345678"
    "712345678"     -> "254712345678"
    """
    digits = _PHONE_JUNK.sub("", str(phone or ""))
    if digits.startswith("0"):
        return COUNTRY_CODE + digits[1:]
    if digits.startswith(COUNTRY_CODE):
        return digits
    return COUNTRY_CODE + digits


def make_timestamp(now=None) -> str:
    """YYYYMMDDHHMMSS in the salon's local time."""
    return timezone.localtime(now or timezone.now()).strftime("%Y%m%d%H%M%S")


def make_password(shortcode, passkey, timestamp) -> str:
    return base64.b64encode(f"{shortcode}{passkey}{timestamp}".encode()).decode()


def whole_amount(amount) -> int:
    """Round to whole shillings, halves up."""
    try:
        value = Decimal(str(amount))
    except (InvalidOperation, ValueError, TypeError):
        raise ValueError(f"Invalid amount: {amount!r}")
    if not value.is_finite():
        raise ValueError(f"Invalid amount: {amount!r}")
    try:
        return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    except InvalidOperation:
        # too many digits for the decimal context, e.g. "1e999999"
        raise ValueError(f"Invalid amount: {amount!r}")


def simulated_response(account_reference) -> dict:
    return {
        "MerchantRequestID": f"SIM-{account_reference}",
        "CheckoutRequestID": f"ws_CO_SIM_{account_reference}",
        "ResponseCode": "0",
        "ResponseDescription": SIMULATED_DESCRIPTION,
        "CustomerMessage": SIMULATED_DESCRIPTION,
    }


class MpesaClient:
    def __init__(
        self,
        consumer_key="",
        consumer_secret="",
        env="sandbox",
        shortcode="174379",
        passkey="",
        till_number="",
        receiver_number="",
        callback_url="",
        timeout=30,
        session=None,
    ):
        self.consumer_key = consumer_key
        self.consumer_secret = consumer_secret
        self.env = env
        self.shortcode = shortcode
        self.passkey = passkey
        self.till_number = till_number
        self.receiver_number = receiver_number
        self.callback_url = callback_url
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_settings(cls, session=None):
        return cls(
            consumer_key=settings.MPESA_CONSUMER_KEY,
            consumer_secret=settings.MPESA_CONSUMER_SECRET,
            env=settings.MPESA_ENV,
            shortcode=settings.MPESA_SHORTCODE,
            passkey=settings.MPESA_PASSKEY,
            till_number=settings.MPESA_TILL_NUMBER,
            receiver_number=settings.MPESA_RECEIVER_NUMBER,
            callback_url=settings.MPESA_CALLBACK_URL,
            timeout=settings.MPESA_TIMEOUT,
            session=session,
        )

    @property
    def simulated(self) -> bool:
        return not (self.consumer_key and self.consumer_secret)

    @property
    def base_url(self) -> str:
        return PRODUCTION_URL if self.env == "production" else SANDBOX_URL

    def get_token(self) -> str:
        if self.simulated:
            raise MpesaError("M-Pesa credentials not found in environment variables.")

        try:
            resp = self.session.get(
                f"{self.base_url}/oauth/v1/generate",
                params={"grant_type": "client_credentials"},
                auth=(self.consumer_key, self.consumer_secret),
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise MpesaError(f"M-Pesa token request failed: {exc}") from exc

        if not resp.ok:
            raise MpesaError(f"M-Pesa token generation failed: {resp.status_code} {resp.text}")

        token = resp.json().get("access_token")
        if not token:
            raise MpesaError("M-Pesa token generation failed: no access_token in response")
        return token

    def build_payload(self, phone, amount, account_reference, timestamp=None) -> dict:
        timestamp = timestamp or make_timestamp()
        formatted_phone = normalize_phone(phone)

        if self.till_number:
            transaction_type, party_b = BUY_GOODS, self.till_number
        else:
            transaction_type, party_b = PAYBILL, self.shortcode

        return {
            "BusinessShortCode": self.shortcode,
            "Password": make_password(self.shortcode, self.passkey, timestamp),
            "Timestamp": timestamp,
            "TransactionType": transaction_type,
            "Amount": whole_amount(amount),
            "PartyA": formatted_phone,
            "PartyB": party_b,
            "PhoneNumber": formatted_phone,
            "CallBackURL": self.callback_url,
            "AccountReference": account_reference,
            "TransactionDesc": f"Payment for {account_reference} to {self.receiver_number}",
        }

    def initiate_stk_push(self, phone, amount, account_reference) -> dict:
        """
        Prompt the customer's phone for payment.

        Returns the provider's JSON answer (or the simulated one).
        Raises MpesaError on provider/transport failure, ValueError on a bad amount.
        """
        if self.simulated:
            log.info("M-Pesa credentials missing; simulating STK push for %s", account_reference)
            return simulated_response(account_reference)

        payload = self.build_payload(phone, amount, account_reference)
        token = self.get_token()

        try:
            resp = self.session.post(
                f"{self.base_url}/mpesa/stkpush/v1/processrequest",
                json=payload,
                headers={"Authorization": f"Bearer {token}"},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise MpesaError(f"M-Pesa STK push request failed: {exc}") from exc

        if not resp.ok:
            safe_payload = {k: v for k, v in payload.items() if k != "Password"}
            log.error("M-Pesa API Response Body: %s", resp.text)
            log.error("M-Pesa API Payload: %s", safe_payload)
            raise MpesaError(f"M-Pesa STK push initiation failed: {resp.status_code} {resp.text}")

        return resp.json()
