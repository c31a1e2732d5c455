# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Charge creation against an HTTP payment API (Stripe-style ``/v1/charges``)."""

from __future__ import annotations

import httpx

from keystone.domain.store.entities import Charge
from keystone.domain.store.exceptions import PaymentDeclinedError, PaymentUnavailableError
from keystone.domain.store.repositories import PaymentGateway
from keystone.infrastructure.resilience import CircuitBreaker, CircuitOpenError, resilient_call
from keystone.shared.config.settings import PaymentConfig
from keystone.shared.logging import logger


class HttpPaymentGateway(PaymentGateway):
    def __init__(self, config: PaymentConfig, *, client: httpx.Client | None = None) -> None:
        self._config = config
        self._client = client or httpx.Client(
            base_url=config.api_url.rstrip("/"),
            timeout=config.timeout,
        )
        self._breaker = CircuitBreaker(
            failure_threshold=config.circuit_fail_threshold,
            reset_timeout=config.circuit_reset_timeout,
        )

    def _post_charge(self, data: dict[str, str], headers: dict[str, str]) -> httpx.Response:
        return self._client.post("/v1/charges", data=data, headers=headers)

    def create_charge(
        self,
        *,
        amount_cents: int,
        currency: str,
        source_token: str,
        description: str,
        idempotency_key: str,
    ) -> Charge:
        headers = {
            "Authorization": f"Bearer {self._config.api_key}",
            # Lets the gateway de-duplicate our transport-level retries.
            "Idempotency-Key": idempotency_key,
        }
        data = {
            "amount": str(amount_cents),
            "currency": currency,
            "source": source_token,
            "description": description,
        }
        try:
            response = resilient_call(
                self._post_charge,
                data,
                headers,
                breaker=self._breaker,
                retry_on=(httpx.TransportError,),
                max_retries=self._config.max_retries,
                backoff_base=self._config.backoff_base,
                backoff_cap=self._config.backoff_cap,
            )
        except (httpx.TransportError, CircuitOpenError) as exc:
            logger.error(f"payments: gateway unreachable ({type(exc).__name__})")
            raise PaymentUnavailableError() from exc

        body = _json_body(response)
        if response.status_code in (400, 402):
            error = body.get("error") if isinstance(body.get("error"), dict) else {}
            reason = error.get("code") or error.get("message") or "declined"
            logger.info(f"payments: charge declined status={response.status_code} reason={reason}")
            raise PaymentDeclinedError(str(reason))
        if response.status_code >= 300:
            logger.error(
                f"payments: unexpected gateway response status={response.status_code} "
                f"body={response.text[:200]}"
            )
            raise PaymentUnavailableError(context={"status": response.status_code})

        charge = Charge(
            id=str(body.get("id") or ""),
            amount_cents=int(body.get("amount") or amount_cents),
            currency=str(body.get("currency") or currency),
            status=str(body.get("status") or "unknown"),
            paid=bool(body.get("paid", False)),
        )
        if not charge.id:
            raise PaymentUnavailableError(context={"reason": "charge id missing"})
        logger.info(f"payments: charge created id={charge.id} status={charge.status}")
        return charge

    def close(self) -> None:
        self._client.close()


def _json_body(response: httpx.Response) -> dict:
    try:
        body = response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}
