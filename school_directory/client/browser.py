import asyncio
from typing import List, Optional

import aiohttp

from school_directory.client.api import ApiError, SchoolDirectoryClient
from school_directory.client.search import filter_schools
from school_directory.schemas.school.responses import SchoolResponse


class SchoolBrowser:
    """Listing page state: fetch all schools once, then search locally."""

    FETCH_ERROR_MESSAGE = "An error occurred while fetching schools"

    def __init__(self, client: SchoolDirectoryClient):
        self.client = client
        self.schools: List[SchoolResponse] = []
        self.loading = True
        self.error: Optional[str] = None
        self.search_term = ""

    async def load(self) -> None:
        self.loading = True
        self.error = None
        try:
            self.schools = await self.client.list_schools()
        except ApiError as e:
            self.error = e.message
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError):
            # pydantic.ValidationError is a ValueError: malformed list body
            self.error = self.FETCH_ERROR_MESSAGE
        finally:
            self.loading = False

    def search(self, term: str) -> List[SchoolResponse]:
        self.search_term = term
        return self.visible

    @property
    def visible(self) -> List[SchoolResponse]:
        return filter_schools(self.schools, self.search_term)
