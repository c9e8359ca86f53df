import json
from typing import Annotated

import aiohttp
from semantic_kernel.functions import kernel_function

UNIVERSITIES_URL = "http://universities.hipolabs.com/search"


class UniversityFinderPlugin:
    """Searches the public universities list by country and name"""

    def __init__(self, http_client: aiohttp.ClientSession):
        self.http_client = http_client

    @kernel_function(name="FindUniversities", description="Finds universities in a country, optionally filtered by name")
    async def find_universities(
        self,
        country: Annotated[str, "Country name in English, e.g. 'Spain'"],
        name: Annotated[str, "Part of the university name to match"] = "",
        max_results: Annotated[int, "Maximum number of universities to return"] = 10,
    ) -> Annotated[str, "JSON array of universities with name and web page"]:
        params = {'country': country}
        if name:
            params['name'] = name

        async with self.http_client.get(UNIVERSITIES_URL, params=params) as response:
            response.raise_for_status()
            data = await response.json(content_type=None)

        universities = [
            {
                'name': item.get('name'),
                'webPage': (item.get('web_pages') or [None])[0],
            }
            for item in data[:max(0, int(max_results))]
        ]
        return json.dumps(universities, indent=2)
