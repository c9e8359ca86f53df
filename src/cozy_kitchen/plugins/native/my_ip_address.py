import logging
from typing import Annotated

import aiohttp
from semantic_kernel.functions import kernel_function

logger = logging.getLogger(__name__)

IPIFY_URL = "https://api.ipify.org"
IP_API_URL = "http://ip-api.com/json/{ip}"


class MyIpAddressPlugin:
    """Public IP address lookups"""

    def __init__(self, http_client: aiohttp.ClientSession):
        self.http_client = http_client

    @kernel_function(name="GetMyIpAddress", description="Gets the public IP address of this machine")
    async def get_my_ip_address(self) -> Annotated[str, "The public IP address"]:
        async with self.http_client.get(IPIFY_URL, params={'format': 'json'}) as response:
            response.raise_for_status()
            data = await response.json(content_type=None)
        return data['ip']

    @kernel_function(name="GetIpCountry", description="Gets the country an IP address is located in")
    async def get_ip_country(
        self, ip_address: Annotated[str, "The IP address to locate"]
    ) -> Annotated[str, "The country name"]:
        async with self.http_client.get(IP_API_URL.format(ip=ip_address)) as response:
            response.raise_for_status()
            data = await response.json(content_type=None)

        if data.get('status') != 'success':
            logger.warning(f"Could not locate {ip_address}: {data.get('message')}")
            return ""
        return data.get('country', "")
