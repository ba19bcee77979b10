import asyncio
from enum import Enum
from typing import Any, Dict, Optional

import aiohttp

from school_directory.client.api import ApiError, SchoolDirectoryClient
from school_directory.client.validation import ImageFile, validate_form
from school_directory.core.logging import logger

FORM_FIELDS = ("name", "address", "city", "state", "contact", "email_id")


class FormState(str, Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class FormBusyError(Exception):
    """Raised when a submission is attempted while another is in flight"""
    def __init__(self, message: str = "A submission is already in progress"):
        self.message = message
        super().__init__(self.message)


class SchoolFormController:
    """
    State of the school registration form.

    ``submit`` validates synchronously and only then starts the single
    asynchronous request; ``state`` moves idle -> submitting -> succeeded or
    failed, and back to idle on ``reset`` or once the success message has
    been shown for ``success_display_seconds``.
    """

    SUCCESS_MESSAGE = "School added successfully!"
    FAILURE_MESSAGE = "Failed to add school"
    NETWORK_ERROR_MESSAGE = "An error occurred. Please try again."

    def __init__(self, client: SchoolDirectoryClient, success_display_seconds: float = 3.0):
        self.client = client
        self.success_display_seconds = success_display_seconds
        self.values: Dict[str, str] = {field: "" for field in FORM_FIELDS}
        self.image: Optional[ImageFile] = None
        self.errors: Dict[str, str] = {}
        self.state = FormState.IDLE
        self.message: Optional[str] = None
        self.school_id: Optional[int] = None
        self._reset_task: Optional[asyncio.Task] = None

    @property
    def can_submit(self) -> bool:
        return self.state != FormState.SUBMITTING

    def set_field(self, field: str, value: str) -> None:
        if field not in FORM_FIELDS:
            raise KeyError(field)
        self.values[field] = value

    def set_image(self, image: Optional[ImageFile]) -> None:
        self.image = image

    def validate(self) -> bool:
        self.errors = validate_form(self.values, self.image)
        return not self.errors

    async def submit(self) -> FormState:
        if not self.can_submit:
            raise FormBusyError()
        if not self.validate():
            return self.state

        self._cancel_pending_reset()
        self.state = FormState.SUBMITTING
        self.message = None
        try:
            self.school_id = await self.client.create_school(dict(self.values), self.image)
        except ApiError as e:
            self._fail(e.message or self.FAILURE_MESSAGE)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.warning(f"School submission failed: {e}")
            self._fail(self.NETWORK_ERROR_MESSAGE)
        else:
            self.state = FormState.SUCCEEDED
            self.message = self.SUCCESS_MESSAGE
            self._clear_values()
            if self.success_display_seconds > 0:
                self._reset_task = asyncio.get_running_loop().create_task(
                    self._reset_after(self.success_display_seconds)
                )
        return self.state

    def reset(self) -> None:
        self._cancel_pending_reset()
        self._clear_values()
        self.errors = {}
        self.state = FormState.IDLE
        self.message = None

    def _fail(self, message: str) -> None:
        self.state = FormState.FAILED
        self.message = message

    def _clear_values(self) -> None:
        self.values = {field: "" for field in FORM_FIELDS}
        self.image = None

    def _cancel_pending_reset(self) -> None:
        if self._reset_task is not None and not self._reset_task.done():
            self._reset_task.cancel()
        self._reset_task = None

    async def _reset_after(self, delay: float) -> None:
        await asyncio.sleep(delay)
        if self.state == FormState.SUCCEEDED:
            self.state = FormState.IDLE
            self.message = None
