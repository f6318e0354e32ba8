"""
Paystack client — initialize and verify transactions.

Only the two REST calls the subscription flow needs. Amounts go to
Paystack in the lowest currency unit (KES 500 -> 50000).
"""

import json
import logging
import urllib.error
import urllib.request
import uuid

from .config import settings
from .errors import ConfigurationError, PaymentError

logger = logging.getLogger(__name__)


class PaystackClient:

    TIMEOUT_SECONDS = 30

    def __init__(self, secret_key: str = None, base_url: str = None):
        self.secret_key = secret_key if secret_key is not None else settings.PAYSTACK_SECRET_KEY
        self.base_url = (base_url or settings.PAYSTACK_BASE_URL).rstrip("/")

    def initialize_transaction(self, email: str, amount: float, reference: str = None,
                               callback_url: str = None) -> dict:
        """
        Start a transaction. Returns {authorization_url, access_code, reference}.
        """
        if amount is None or amount <= 0:
            raise PaymentError("Amount must be greater than zero")

        payload = {
            "email": email,
            "amount": int(round(amount * 100)),
            "currency": settings.CURRENCY,
            "reference": reference or "cc_" + uuid.uuid4().hex[:20],
        }
        callback_url = callback_url or settings.PAYSTACK_CALLBACK_URL
        if callback_url:
            payload["callback_url"] = callback_url

        data = self._request("POST", "/transaction/initialize", payload)
        logger.info("Paystack transaction %s initialized for %s", data.get("reference"), email)
        return {
            "authorization_url": data.get("authorization_url"),
            "access_code": data.get("access_code"),
            "reference": data.get("reference", payload["reference"]),
        }

    def verify_transaction(self, reference: str) -> dict:
        """
        Look up a transaction. Returns {reference, status, amount, email, paid_at};
        amount is converted back to the major currency unit.
        """
        data = self._request("GET", f"/transaction/verify/{reference}")
        customer = data.get("customer") or {}
        return {
            "reference": data.get("reference", reference),
            "status": data.get("status"),
            "amount": (data.get("amount") or 0) / 100,
            "email": customer.get("email"),
            "paid_at": data.get("paid_at"),
        }

    def _request(self, method: str, path: str, payload: dict = None) -> dict:
        if not self.secret_key:
            raise ConfigurationError("PAYSTACK_SECRET_KEY not configured — set it in environment variables")

        body = json.dumps(payload).encode("utf-8") if payload is not None else None
        req = urllib.request.Request(
            self.base_url + path,
            data=body,
            headers={
                "Authorization": f"Bearer {self.secret_key}",
                "Content-Type": "application/json",
            },
            method=method,
        )

        try:
            with urllib.request.urlopen(req, timeout=self.TIMEOUT_SECONDS) as response:
                result = json.loads(response.read())
        except urllib.error.HTTPError as e:
            logger.warning(f"Paystack {method} {path} failed: HTTP {e.code}")
            raise PaymentError(f"Payment gateway returned HTTP {e.code}")
        except (urllib.error.URLError, TimeoutError, ValueError) as e:
            logger.warning(f"Paystack {method} {path} failed: {e}")
            raise PaymentError("Payment gateway unavailable, please try again")

        if not result.get("status"):
            raise PaymentError(result.get("message") or "Payment gateway rejected the request")
        return result.get("data") or {}
