"""Currency exchange tool: get_exchange_rate."""

import json
import math
from decimal import Decimal
from typing import Any, Sequence

from mcp.types import TextContent

from ..errors import HandlerError
from ..provider_client import ProviderClient
from ..validation import ArgumentSchema, ArgumentSpec
from . import ToolHandler


def _format_rate(rate: Any) -> str:
    """
    Render a rate the way JavaScript's Number#toString does.

    Whole numbers print without a fraction, and plain decimal notation is used
    for 1e-6 <= |rate| < 1e21; outside that range the exponent has a sign and
    no zero padding (2.5e-7, 1e+21).
    """
    if isinstance(rate, bool) or not isinstance(rate, (int, float)):
        return str(rate)
    if isinstance(rate, int):
        return str(rate)
    if math.isnan(rate):
        return "NaN"
    if math.isinf(rate):
        return "Infinity" if rate > 0 else "-Infinity"

    magnitude = abs(rate)
    if rate.is_integer() and magnitude < 1e21:
        return str(int(rate))
    if 1e-6 <= magnitude < 1e21:
        return format(Decimal(repr(rate)), "f")

    mantissa, _, exponent = repr(rate).partition("e")
    return f"{mantissa}e{int(exponent):+d}"


class GetExchangeRateTool(ToolHandler):
    """Daily exchange rate between two currencies."""

    description = (
        "A tool to get current exchange rate between two currencies. "
        "No authentication required."
    )
    schema = ArgumentSchema.of(
        ArgumentSpec("from", description="Base currency code, e.g., 'EUR'"),
        ArgumentSpec("to", description="Target currency code, e.g., 'USD'"),
    )

    def __init__(self, client: ProviderClient,
                 base_url: str = "https://www.floatrates.com/daily"):
        super().__init__("get_exchange_rate")
        self.client = client
        self.base_url = base_url.rstrip("/")

    def url_for(self, base_currency: str) -> str:
        return f"{self.base_url}/{base_currency.lower()}.json"

    async def run_tool(self, arguments: dict) -> Sequence[TextContent]:
        base, target = arguments["from"], arguments["to"]
        response = await self.client.get(self.url_for(base), "Exchange rate API")

        if not response.ok:
            raise HandlerError(
                f"Exchange rate API error: {response.status_code} - {response.text}"
            )

        try:
            rates = json.loads(response.text)
        except ValueError as e:
            raise HandlerError(f"Exchange rate API returned invalid JSON: {e}") from e

        entry = rates.get(target.lower()) if isinstance(rates, dict) else None
        rate = entry.get("rate") if isinstance(entry, dict) else None
        if not rate:
            raise HandlerError(f"No rate found for {base} -> {target}")

        text = f"1 {base.upper()} = {_format_rate(rate)} {target.upper()}"
        return [TextContent(type="text", text=text)]
