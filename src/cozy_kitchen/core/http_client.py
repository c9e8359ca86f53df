import logging
from typing import Dict, List, Optional

import aiohttp

logger = logging.getLogger(__name__)


class HttpClientFactory:
    """Creates aiohttp sessions for plugins and closes them on shutdown"""

    def __init__(self, headers: Optional[Dict[str, str]] = None):
        self.headers = headers or {"User-Agent": "cozy-kitchen/0.1"}
        self._clients: List[aiohttp.ClientSession] = []

    def create_client(self) -> aiohttp.ClientSession:
        """Create a new session; must be called from a running event loop"""
        client = aiohttp.ClientSession(headers=self.headers)
        self._clients.append(client)
        logger.debug(f"Created HTTP client #{len(self._clients)}")
        return client

    async def close(self):
        """Close every session this factory handed out"""
        for client in self._clients:
            if not client.closed:
                await client.close()
        self._clients.clear()
