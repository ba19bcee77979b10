import asyncio

import aiohttp
import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from school_directory.client import (
    ApiError,
    FormBusyError,
    FormState,
    ImageFile,
    SchoolBrowser,
    SchoolDirectoryClient,
    SchoolFormController,
    filter_schools,
    validate_form,
)
from school_directory.schemas.school.responses import SchoolResponse

SCHOOL_JSON = {
    "id": 1,
    "name": "Alpha High",
    "address": "1 Main Road, Old Town",
    "city": "Metro",
    "state": "Kerala",
    "contact": "9876543210",
    "image": None,
    "email_id": "alpha@example.com",
    "created_at": "2026-10-19T10:00:00",
}


class StubClient:
    def __init__(self, result=7, error=None, gate=None):
        self.result = result
        self.error = error
        self.gate = gate
        self.calls = []

    async def create_school(self, values, image=None):
        self.calls.append((values, image))
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.result

    async def list_schools(self):
        if self.error is not None:
            raise self.error
        return self.result


def _fill(form, values):
    for field, value in values.items():
        form.set_field(field, value)


# Search

def test_filter_matches_name_city_and_address_ignoring_case():
    schools = [{"name": "Alpha High", "city": "Metro"}, {"name": "Beta", "city": "Gamma"}]
    assert filter_schools(schools, "alpha") == [schools[0]]
    assert filter_schools(schools, "gamma") == [schools[1]]
    assert filter_schools(schools, "") == schools


def test_filter_searches_address():
    schools = [dict(SCHOOL_JSON), dict(SCHOOL_JSON, id=2, address="Lake View Lane")]
    assert [s["id"] for s in filter_schools(schools, "LAKE")] == [2]


# Validation

def test_validate_form_reports_field_messages():
    errors = validate_form({
        "name": "Al",
        "address": "short",
        "city": "",
        "state": "K",
        "contact": "12ab",
        "email_id": "nope",
    })
    assert errors == {
        "name": "Name must be at least 3 characters",
        "address": "Address must be at least 10 characters",
        "city": "City is required",
        "state": "State must be at least 2 characters",
        "contact": "Contact number must be exactly 10 digits",
        "email_id": "Invalid email address",
    }


def test_validate_form_accepts_valid_values(school_form, png_bytes):
    image = ImageFile(filename="a.png", content_type="image/png", data=png_bytes)
    assert validate_form(school_form, image) == {}


def test_validate_form_checks_image(school_form):
    big = ImageFile(filename="a.png", content_type="image/png", data=b"x" * (5 * 1024 * 1024 + 1))
    assert validate_form(school_form, big) == {"image": "Image must be at most 5MB"}

    text = ImageFile(filename="a.txt", content_type="text/plain", data=b"x")
    assert "image" in validate_form(school_form, text)


# Form state machine

def test_successful_submission_returns_to_idle_after_display(school_form):
    async def scenario():
        client = StubClient(result=42)
        form = SchoolFormController(client, success_display_seconds=0.01)
        _fill(form, school_form)

        assert await form.submit() == FormState.SUCCEEDED
        assert form.message == "School added successfully!"
        assert form.school_id == 42
        assert form.values["name"] == ""
        assert client.calls[0][0]["name"] == school_form["name"]

        await asyncio.sleep(0.05)
        assert form.state == FormState.IDLE
        assert form.message is None

    asyncio.run(scenario())


def test_invalid_form_never_reaches_the_network(school_form):
    async def scenario():
        client = StubClient()
        form = SchoolFormController(client)
        _fill(form, dict(school_form, contact="123"))

        assert await form.submit() == FormState.IDLE
        assert form.errors == {"contact": "Contact number must be exactly 10 digits"}
        assert client.calls == []

    asyncio.run(scenario())


def test_server_error_message_is_shown(school_form):
    async def scenario():
        client = StubClient(error=ApiError("All fields except image are required", 400))
        form = SchoolFormController(client)
        _fill(form, school_form)

        assert await form.submit() == FormState.FAILED
        assert form.message == "All fields except image are required"
        assert form.values["name"] == school_form["name"]

    asyncio.run(scenario())


def test_transport_error_asks_to_try_again(school_form):
    async def scenario():
        form = SchoolFormController(StubClient(error=aiohttp.ClientConnectionError("refused")))
        _fill(form, school_form)

        assert await form.submit() == FormState.FAILED
        assert form.message == "An error occurred. Please try again."

    asyncio.run(scenario())


def test_second_submit_while_in_flight_is_refused(school_form):
    async def scenario():
        gate = asyncio.Event()
        client = StubClient(gate=gate)
        form = SchoolFormController(client, success_display_seconds=0)
        _fill(form, school_form)

        first = asyncio.create_task(form.submit())
        await asyncio.sleep(0)
        assert form.state == FormState.SUBMITTING
        assert not form.can_submit
        with pytest.raises(FormBusyError):
            await form.submit()

        gate.set()
        assert await first == FormState.SUCCEEDED
        assert len(client.calls) == 1

    asyncio.run(scenario())


def test_reset_clears_everything(school_form):
    async def scenario():
        form = SchoolFormController(StubClient(error=ApiError("Failed to add school", 500)))
        _fill(form, school_form)
        await form.submit()

        form.reset()
        assert form.state == FormState.IDLE
        assert form.message is None
        assert form.errors == {}
        assert all(value == "" for value in form.values.values())

    asyncio.run(scenario())


# Browser

def test_browser_loads_then_filters_locally():
    async def scenario():
        schools = [dict(SCHOOL_JSON), dict(SCHOOL_JSON, id=2, name="Beta", city="Gamma")]
        browser = SchoolBrowser(StubClient(result=schools))
        await browser.load()

        assert browser.loading is False
        assert browser.error is None
        assert [s["id"] for s in browser.search("gamma")] == [2]
        assert len(browser.search("")) == 2

    asyncio.run(scenario())


def test_browser_reports_fetch_errors():
    async def scenario():
        browser = SchoolBrowser(StubClient(error=aiohttp.ClientConnectionError()))
        await browser.load()
        assert browser.error == "An error occurred while fetching schools"
        assert browser.visible == []

    asyncio.run(scenario())


def test_browser_reports_timeouts():
    async def scenario():
        browser = SchoolBrowser(StubClient(error=asyncio.TimeoutError()))
        await browser.load()
        assert browser.loading is False
        assert browser.error == "An error occurred while fetching schools"

    asyncio.run(scenario())


def test_browser_reports_malformed_listing():
    class MalformedListClient(StubClient):
        async def list_schools(self):
            return [SchoolResponse.model_validate({"id": 1})]

    async def scenario():
        browser = SchoolBrowser(MalformedListClient())
        await browser.load()
        assert browser.loading is False
        assert browser.error == "An error occurred while fetching schools"
        assert browser.visible == []

    asyncio.run(scenario())


# HTTP client

def _fake_api():
    received = {}

    async def list_schools(request):
        return web.json_response({"success": True, "schools": [SCHOOL_JSON]})

    async def create_school(request):
        form = await request.post()
        received.update({key: form[key] for key in form if key != "image"})
        if "image" in form:
            received["image"] = form["image"].filename
        if not form.get("name"):
            return web.json_response({"error": "All fields except image are required"}, status=400)
        return web.json_response({"success": True, "message": "School added successfully", "schoolId": 5}, status=201)

    app = web.Application()
    app.router.add_get("/api/schools", list_schools)
    app.router.add_post("/api/schools", create_school)
    return app, received


def test_http_client_round_trip(school_form, png_bytes):
    async def scenario():
        app, received = _fake_api()
        async with TestServer(app) as server:
            async with SchoolDirectoryClient(f"http://{server.host}:{server.port}") as client:
                schools = await client.list_schools()
                assert schools[0].name == "Alpha High"

                image = ImageFile(filename="logo.png", content_type="image/png", data=png_bytes)
                assert await client.create_school(school_form, image) == 5
                assert received["contact"] == school_form["contact"]
                assert received["image"] == "logo.png"

                with pytest.raises(ApiError) as exc:
                    await client.create_school(dict(school_form, name=""))
                assert exc.value.status == 400
                assert exc.value.message == "All fields except image are required"

    asyncio.run(scenario())
