"""
Exchange-rate backed currency conversion.

One GET per conversion against ``{rates_url}/{FROM}``; the JSON reply carries
a ``rates`` map keyed by target currency code. Nothing is cached and nothing
is retried: any failure surfaces as CurrencyConversionError.
"""
import logging
from typing import Optional

import httpx

from ..config import CurrencySettings
from ..errors import CurrencyConversionError
from .models import ConversionKind, ConversionRequest, ConversionResult
from .resolver import Outcome, resolve

logger = logging.getLogger(__name__)

CURRENCY_CODES = frozenset({
    "usd", "eur", "gbp", "jpy", "cny", "inr", "cad", "aud", "chf", "nzd",
    "sek", "nok", "dkk", "mxn", "brl", "zar", "sgd", "hkd", "krw", "try",
    "pln", "aed",
})


def is_currency_code(token: str) -> bool:
    return token.lower() in CURRENCY_CODES


class CurrencyConverter:
    """Converts amounts between ISO 4217 currencies via an HTTP rate feed"""

    def __init__(self, settings: Optional[CurrencySettings] = None,
                 client: Optional[httpx.AsyncClient] = None):
        self.settings = settings or CurrencySettings()
        self._client = client

    async def fetch_rate(self, from_currency: str, to_currency: str) -> float:
        url = f"{self.settings.rates_url.rstrip('/')}/{from_currency.upper()}"
        try:
            if self._client is not None:
                response = await self._client.get(url)
            else:
                async with httpx.AsyncClient(timeout=self.settings.timeout) as client:
                    response = await client.get(url)
            response.raise_for_status()
            return float(response.json()["rates"][to_currency.upper()])
        except (httpx.HTTPError, KeyError, TypeError, ValueError) as e:
            logger.error(f"Error converting currency {from_currency} -> {to_currency}: {e}")
            raise CurrencyConversionError("Currency conversion failed") from e

    async def convert(self, value: float, from_currency: str, to_currency: str) -> float:
        if not self.settings.enabled:
            raise CurrencyConversionError("Currency conversion is disabled")
        rate = await self.fetch_rate(from_currency, to_currency)
        return value * rate


async def perform_conversion(request: ConversionRequest,
                             currency: Optional[CurrencyConverter] = None) -> Outcome:
    """Route currency codes to the rate backend and everything else to the graph.

    Unit failures come back as values like ``resolve``; currency failures raise
    CurrencyConversionError.
    """
    if is_currency_code(request.from_unit) and is_currency_code(request.to_unit):
        converter = currency or CurrencyConverter()
        result = await converter.convert(request.value, request.from_unit, request.to_unit)
        return ConversionResult(
            value=request.value,
            from_unit=request.from_unit.upper(),
            to_unit=request.to_unit.upper(),
            result=result,
            kind=ConversionKind.CURRENCY,
        )
    return resolve(request)
