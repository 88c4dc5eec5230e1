"""Mercado Pago implementation of PaymentGateway."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any

import httpx

from kiosk.domain.exceptions import PaymentProviderError
from kiosk.domain.gateway.payment_gateway import (
    PaymentGateway,
    ProviderMerchantOrder,
    ProviderPayment,
    QRCodeOrder,
)
from kiosk.infrastructure.config import Settings
from kiosk.infrastructure.payment.signing import verify_signature

logger = logging.getLogger(__name__)


class MercadoPagoGateway(PaymentGateway):

    def __init__(
        self,
        settings: Settings,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = settings.mercadopago_base_url.rstrip("/")
        self.timeout = settings.payment_timeout_seconds
        self._access_token = settings.mercadopago_access_token
        self.external_pos_id = settings.mercadopago_external_pos_id
        self._webhook_secret = settings.webhook_secret
        self._transport = transport
        if not self._access_token:
            logger.warning("KIOSK_MERCADOPAGO_ACCESS_TOKEN not set; provider calls will be rejected")

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._access_token:
            headers["Authorization"] = f"Bearer {self._access_token}"
        return headers

    def _get(self, path: str) -> dict[str, Any]:
        return self._request("GET", path)

    def _put(self, path: str, body: dict[str, Any]) -> dict[str, Any]:
        return self._request("PUT", path, body)

    def _request(
        self, method: str, path: str, body: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        url = f"{self.base_url}{path}"
        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                response = client.request(method, url, headers=self._headers(), json=body)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as exc:
            logger.error(
                "mercado pago %s %s failed: %s", method, path, exc.response.status_code
            )
            raise PaymentProviderError(
                f"Mercado Pago returned {exc.response.status_code} for {path}"
            ) from exc
        except httpx.HTTPError as exc:
            logger.error("mercado pago %s %s failed: %s", method, path, exc)
            raise PaymentProviderError(f"Mercado Pago request failed: {exc}") from exc
        except ValueError as exc:
            raise PaymentProviderError(f"Mercado Pago sent invalid JSON for {path}") from exc

        if not isinstance(payload, dict):
            raise PaymentProviderError(f"Unexpected Mercado Pago response for {path}")
        return payload

    def _collector_id(self) -> str:
        # Access tokens look like APP_USR-<collector id>-<date>-<hash>.
        parts = (self._access_token or "").split("-")
        if len(parts) < 2 or not parts[1]:
            raise PaymentProviderError("Invalid access token format")
        return parts[1]

    def create_qr_order(
        self,
        order_id: str,
        amount: Decimal,
        description: str,
        notification_url: str | None = None,
    ) -> QRCodeOrder:
        path = (
            f"/instore/orders/qr/seller/collectors/{self._collector_id()}"
            f"/pos/{self.external_pos_id}/qrs"
        )
        body: dict[str, Any] = {
            "external_reference": order_id,
            "title": f"Order {order_id}",
            "description": description,
            "total_amount": float(amount),
        }
        if notification_url:
            body["notification_url"] = notification_url
        raw = self._put(path, body)
        qr_data = raw.get("qr_data")
        if not qr_data:
            raise PaymentProviderError(f"Mercado Pago returned no QR data for order {order_id}")
        logger.info("mercado pago QR order opened for %s (%s)", order_id, amount)
        return QRCodeOrder(
            external_reference=order_id,
            qr_data=str(qr_data),
            qr_code_base64=raw.get("qr_code_base64"),
            notification_url=notification_url,
        )

    def fetch_payment_by_id(self, payment_id: str) -> ProviderPayment:
        raw = self._get(f"/v1/payments/{payment_id}")
        return ProviderPayment(
            id=str(raw.get("id", payment_id)),
            status=str(raw.get("status") or ""),
            external_reference=raw.get("external_reference") or None,
            transaction_amount=_decimal(raw.get("transaction_amount")),
            status_detail=raw.get("status_detail"),
        )

    def fetch_merchant_order_by_id(self, merchant_order_id: str) -> ProviderMerchantOrder:
        raw = self._get(f"/merchant_orders/{merchant_order_id}")
        return ProviderMerchantOrder(
            id=str(raw.get("id", merchant_order_id)),
            status=str(raw.get("status") or ""),
            external_reference=raw.get("external_reference") or None,
            total_amount=_decimal(raw.get("total_amount")),
            paid_amount=_decimal(raw.get("paid_amount")),
        )

    def validate_signature(self, payload: bytes, signature: str) -> bool:
        return verify_signature(self._webhook_secret, payload, signature)


def _decimal(value: Any) -> Decimal:
    if value is None:
        return Decimal("0")
    return Decimal(str(value))
