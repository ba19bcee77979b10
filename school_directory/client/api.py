from typing import Any, Dict, List, Optional

import aiohttp

from school_directory.client.validation import ImageFile
from school_directory.core.logging import logger
from school_directory.schemas.school.responses import SchoolResponse


class ApiError(Exception):
    """Raised when the school directory API answers with an error status"""
    def __init__(self, message: str, status: int, details: Any = None):
        self.message = message
        self.status = status
        self.details = details
        super().__init__(message)


class SchoolDirectoryClient:
    """Async HTTP client for the school directory API"""

    def __init__(
        self,
        base_url: str,
        session: Optional[aiohttp.ClientSession] = None,
        api_prefix: str = "/api"
    ):
        self.base_url = base_url.rstrip("/")
        self.api_prefix = api_prefix
        self._session = session
        self._owns_session = session is None

    async def __aenter__(self) -> "SchoolDirectoryClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    @property
    def session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()

    def _url(self, path: str) -> str:
        return f"{self.base_url}{self.api_prefix}{path}"

    @staticmethod
    async def _read_body(response: aiohttp.ClientResponse, default_error: str) -> Dict[str, Any]:
        try:
            body = await response.json(content_type=None)
        except ValueError:
            body = None
        if not isinstance(body, dict):
            body = {}
        if response.status >= 400:
            raise ApiError(body.get("error") or default_error, response.status, body.get("details"))
        return body

    async def list_schools(self) -> List[SchoolResponse]:
        async with self.session.get(self._url("/schools")) as response:
            body = await self._read_body(response, "Failed to fetch schools")
        return [SchoolResponse.model_validate(school) for school in body.get("schools") or []]

    async def create_school(self, values: Dict[str, Any], image: Optional[ImageFile] = None) -> int:
        """Post the registration form as multipart data and return the new school id"""
        form = aiohttp.FormData()
        for field, value in values.items():
            if value is not None:
                form.add_field(field, str(value))
        if image is not None:
            form.add_field(
                "image",
                image.data,
                filename=image.filename,
                content_type=image.content_type
            )

        async with self.session.post(self._url("/schools"), data=form) as response:
            body = await self._read_body(response, "Failed to add school")

        school_id = body.get("schoolId")
        logger.info(f"School registered with id {school_id}")
        return school_id
