# tests/integration/test_jira_client.py
import base64
import json
import httpx
import pytest
from mr_jira_trigger.errors import (
    IssueNotFoundError,
    NoTransitionSpecifiedError,
    TransitionNotFoundError,
    UnknownResponseError,
)
from mr_jira_trigger.platforms.jira import JiraClient


TRANSITIONS_URL = "https://jira.example.com/rest/api/2/issue/PROJ-1/transitions"
COMMENT_URL = "https://jira.example.com/rest/api/2/issue/PROJ-1/comment"
EXPECTED_AUTH = "Basic " + base64.b64encode(b"bot:secret").decode()


@pytest.fixture
def jira():
    return JiraClient(host="https://jira.example.com/", username="bot", password="secret")


@pytest.mark.asyncio
async def test_find_transition_id(httpx_mock, jira):
    httpx_mock.add_response(
        method="GET",
        url=TRANSITIONS_URL,
        json={
            "transitions": [
                {"id": "11", "name": "To Do"},
                {"id": "31", "name": "Done"},
            ]
        },
    )

    transition_id = await jira.find_transition_id("PROJ-1", "Done")

    assert transition_id == 31
    request = httpx_mock.get_request()
    assert request.headers["Authorization"] == EXPECTED_AUTH


@pytest.mark.asyncio
async def test_find_transition_id_name_must_match_exactly(httpx_mock, jira):
    httpx_mock.add_response(
        method="GET",
        url=TRANSITIONS_URL,
        json={"transitions": [{"id": "31", "name": "Done"}]},
    )

    with pytest.raises(TransitionNotFoundError) as exc:
        await jira.find_transition_id("PROJ-1", "done")

    assert str(exc.value) == 'The transition name "done" in issue PROJ-1 not found'


@pytest.mark.asyncio
async def test_find_transition_id_issue_not_found(httpx_mock, jira):
    httpx_mock.add_response(method="GET", url=TRANSITIONS_URL, status_code=404)

    with pytest.raises(IssueNotFoundError) as exc:
        await jira.find_transition_id("PROJ-1", "Done")

    assert str(exc.value) == "The issue PROJ-1 is not found or the user does not have permission to view it"


@pytest.mark.asyncio
async def test_find_transition_id_unknown_status(httpx_mock, jira):
    httpx_mock.add_response(method="GET", url=TRANSITIONS_URL, status_code=500, text="Internal error")

    with pytest.raises(UnknownResponseError) as exc:
        await jira.find_transition_id("PROJ-1", "Done")

    assert exc.value.status_code == 500
    assert str(exc.value) == "Unknown: Internal error"


@pytest.mark.asyncio
async def test_update_transition(httpx_mock, jira):
    httpx_mock.add_response(method="POST", url=TRANSITIONS_URL, status_code=204)

    await jira.update_transition("PROJ-1", 31)

    request = httpx_mock.get_request()
    assert json.loads(request.content) == {"transition": {"id": 31}}
    assert request.headers["Authorization"] == EXPECTED_AUTH


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "status_code,error",
    [
        (400, NoTransitionSpecifiedError),
        (404, IssueNotFoundError),
        (409, UnknownResponseError),
    ],
)
async def test_update_transition_errors(httpx_mock, jira, status_code, error):
    httpx_mock.add_response(method="POST", url=TRANSITIONS_URL, status_code=status_code)

    with pytest.raises(error):
        await jira.update_transition("PROJ-1", 31)


@pytest.mark.asyncio
async def test_add_comment(httpx_mock, jira):
    httpx_mock.add_response(method="POST", url=COMMENT_URL, status_code=201, json={"id": "10000"})

    await jira.add_comment("PROJ-1", "Merged\nBy: Jane Doe")

    request = httpx_mock.get_request()
    assert json.loads(request.content) == {"body": "Merged\nBy: Jane Doe"}


@pytest.mark.asyncio
async def test_add_comment_unknown_status(httpx_mock, jira):
    httpx_mock.add_response(method="POST", url=COMMENT_URL, status_code=403, text="Forbidden")

    with pytest.raises(UnknownResponseError, match="Unknown: Forbidden"):
        await jira.add_comment("PROJ-1", "Merged")


@pytest.mark.asyncio
async def test_transport_error_propagates(httpx_mock, jira):
    httpx_mock.add_exception(httpx.ConnectError("connection refused"))

    with pytest.raises(httpx.ConnectError):
        await jira.find_transition_id("PROJ-1", "Done")


@pytest.mark.asyncio
async def test_client_is_reused_across_calls(httpx_mock, jira):
    httpx_mock.add_response(method="POST", url=TRANSITIONS_URL, status_code=204)
    httpx_mock.add_response(method="POST", url=COMMENT_URL, status_code=201)
    client = jira.client

    await jira.update_transition("PROJ-1", 31)
    await jira.add_comment("PROJ-1", "Merged")

    assert jira.client is client
    assert not client.is_closed
    await jira.aclose()
    assert client.is_closed


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        "<html>SSO login</html>",
        "null",
        '{"transitions": [{"id": "abc", "name": "Done"}]}',
        '{"transitions": [{"name": "Done"}]}',
        '{"transitions": ["Done"]}',
    ],
)
async def test_find_transition_id_unreadable_reply(httpx_mock, jira, body):
    httpx_mock.add_response(method="GET", url=TRANSITIONS_URL, text=body)

    with pytest.raises(UnknownResponseError) as exc:
        await jira.find_transition_id("PROJ-1", "Done")

    assert exc.value.status_code == 200
    assert exc.value.body == body
