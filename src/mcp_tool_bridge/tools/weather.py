"""Weather lookup tool: get_weather."""

from typing import Sequence
from urllib.parse import quote

from mcp.types import TextContent

from ..errors import HandlerError
from ..provider_client import ProviderClient
from ..validation import ArgumentSchema, ArgumentSpec
from . import ToolHandler

# characters encodeURIComponent-style quoting leaves alone
_CITY_SAFE = "!*'()"


class GetWeatherTool(ToolHandler):
    """Current weather for a city, as the provider's one-line text."""

    description = "A tool to get the weather of a city. Does not need any authentication."
    schema = ArgumentSchema.of(
        ArgumentSpec("city", description="Name of the city to get the weather for"),
    )

    def __init__(self, client: ProviderClient, base_url: str = "https://wttr.in"):
        super().__init__("get_weather")
        self.client = client
        self.base_url = base_url.rstrip("/")

    def url_for(self, city: str) -> str:
        return f"{self.base_url}/{quote(city, safe=_CITY_SAFE)}?format=3"

    async def run_tool(self, arguments: dict) -> Sequence[TextContent]:
        city = arguments["city"]
        response = await self.client.get(self.url_for(city), "Weather API")

        if not response.ok:
            raise HandlerError(f"Weather API error: {response.status_code} - {response.text}")

        return [TextContent(type="text", text=f"Weather for {city}: {response.text}")]
