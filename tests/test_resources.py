"""Tests for the resource clients: paths, methods, parameters and bodies."""

import json

import pytest
import pytest_asyncio

from backlogkit.client import BacklogClient
from backlogkit.models import FileData
from backlogkit.resources import BaseResourceClient


@pytest_asyncio.fixture
async def client(config):
    async with BacklogClient(config) as backlog:
        yield backlog


def sent_body(httpx_mock) -> dict:
    return json.loads(httpx_mock.get_request().content)


def test_base_resource_client_init(config):
    backlog = BacklogClient(config)
    resource = BaseResourceClient(backlog)
    assert resource._api_client is backlog


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("namespace", "method_name", "args", "expected_path"),
    [
        ("space", "get_space", (), "/api/v2/space"),
        ("space", "get_notification", (), "/api/v2/space/notification"),
        ("issues", "get_issue", ("PROJ-12",), "/api/v2/issues/PROJ-12"),
        ("documents", "get_document", ("01934345404771adb2113d7792bb4351",), "/api/v2/documents/01934345404771adb2113d7792bb4351"),
        ("projects", "get_project", ("PROJ",), "/api/v2/projects/PROJ"),
        ("projects", "get_projects", (), "/api/v2/projects"),
        ("users", "get_users", (), "/api/v2/users"),
        ("users", "get_user", (42,), "/api/v2/users/42"),
        ("users", "get_myself", (), "/api/v2/users/myself"),
        ("users", "get_user_activities", (42,), "/api/v2/users/42/activities"),
        ("users", "get_user_stars", (42,), "/api/v2/users/42/stars"),
        ("users", "get_recently_viewed_issues", (), "/api/v2/users/myself/recentlyViewedIssues"),
        ("users", "get_recently_viewed_projects", (), "/api/v2/users/myself/recentlyViewedProjects"),
        ("users", "get_recently_viewed_wikis", (), "/api/v2/users/myself/recentlyViewedWikis"),
    ],
)
async def test_get_endpoints(client, httpx_mock, namespace, method_name, args, expected_path):
    httpx_mock.add_response(json={"id": 1})

    method = getattr(getattr(client, namespace), method_name)
    result = await method(*args)

    assert result == {"id": 1}
    sent = httpx_mock.get_request()
    assert sent.method == "GET"
    assert sent.url.path == expected_path


@pytest.mark.asyncio
async def test_get_activities_passes_filters(client, httpx_mock):
    httpx_mock.add_response(json=[])

    await client.space.get_activities({"activityTypeId": [1, 2], "count": 20, "order": "desc"})

    params = httpx_mock.get_request().url.params
    assert params.get_list("activityTypeId[]") == ["1", "2"]
    assert params["count"] == "20"
    assert params["order"] == "desc"


@pytest.mark.asyncio
async def test_put_notification(client, httpx_mock):
    httpx_mock.add_response(json={"content": "Hello"})

    await client.space.put_notification("Hello")

    assert httpx_mock.get_request().method == "PUT"
    assert sent_body(httpx_mock) == {"content": "Hello"}


@pytest.mark.asyncio
async def test_create_issue(client, httpx_mock):
    httpx_mock.add_response(status_code=201, json={"issueKey": "PROJ-1"})
    fields = {"projectId": 1, "summary": "Bug", "issueTypeId": 2, "priorityId": 3}

    result = await client.issues.create_issue(fields)

    assert result == {"issueKey": "PROJ-1"}
    sent = httpx_mock.get_request()
    assert sent.method == "POST"
    assert sent.url.path == "/api/v2/issues"
    assert sent_body(httpx_mock) == fields


@pytest.mark.asyncio
async def test_get_issues_with_filters(client, httpx_mock):
    httpx_mock.add_response(json=[{"id": 1}, {"id": 2}])

    result = await client.issues.get_issues({"projectId": [1], "keyword": "login", "assigneeId": None})

    assert len(result) == 2
    params = httpx_mock.get_request().url.params
    assert params.get_list("projectId[]") == ["1"]
    assert params["keyword"] == "login"
    assert "assigneeId" not in params


@pytest.mark.asyncio
async def test_count_issues_returns_integer(client, httpx_mock):
    httpx_mock.add_response(json={"count": 17})

    assert await client.issues.count_issues({"statusId": [1, 2]}) == 17
    assert httpx_mock.get_request().url.path == "/api/v2/issues/count"


@pytest.mark.asyncio
async def test_get_documents(client, httpx_mock):
    httpx_mock.add_response(json=[])

    await client.documents.get_documents({"offset": 0, "projectId": [5]})

    sent = httpx_mock.get_request()
    assert sent.url.path == "/api/v2/documents"
    assert sent.url.params["offset"] == "0"
    assert sent.url.params.get_list("projectId[]") == ["5"]


@pytest.mark.asyncio
async def test_get_document_tree(client, httpx_mock):
    httpx_mock.add_response(json={"projectId": 1, "activeTree": {}, "trashTree": {}})

    await client.documents.get_document_tree("PROJ")

    sent = httpx_mock.get_request()
    assert sent.url.path == "/api/v2/documents/tree"
    assert sent.url.params["projectIdOrKey"] == "PROJ"


@pytest.mark.asyncio
async def test_add_document(client, httpx_mock):
    httpx_mock.add_response(json={"id": "abc"})

    await client.documents.add_document({"projectId": 1, "title": "Notes"})

    assert httpx_mock.get_request().method == "POST"
    assert sent_body(httpx_mock) == {"projectId": 1, "title": "Notes"}


@pytest.mark.asyncio
async def test_download_attachment_returns_file_data(client, httpx_mock):
    httpx_mock.add_response(
        content=b"%PDF",
        headers={"Content-Disposition": 'attachment; filename="minutes.pdf"'},
    )

    result = await client.documents.download_attachment("doc1", 7)

    assert isinstance(result, FileData)
    assert result.body == b"%PDF"
    assert result.file_name == "minutes.pdf"
    assert result.url == "https://example.backlog.com/api/v2/documents/doc1/attachments/7"
    assert httpx_mock.get_request().url.path == "/api/v2/documents/doc1/attachments/7"


@pytest.mark.asyncio
async def test_file_data_url_never_contains_credentials(client, httpx_mock):
    httpx_mock.add_response(content=b"png")

    result = await client.space.get_icon()

    assert result.url == "https://example.backlog.com/api/v2/space/image"
    assert "test-key" not in result.url
    assert result.file_name is None


@pytest.mark.asyncio
async def test_get_user_icon(client, httpx_mock):
    httpx_mock.add_response(
        content=b"gif", headers={"Content-Disposition": "attachment; filename=icon.gif"}
    )

    result = await client.users.get_user_icon(42)

    assert result.url.endswith("/api/v2/users/42/icon")
    assert result.file_name == "icon.gif"


@pytest.mark.asyncio
async def test_add_user(client, httpx_mock):
    httpx_mock.add_response(json={"id": 3})
    fields = {
        "userId": "alice",
        "password": "secret",
        "name": "Alice",
        "mailAddress": "alice@example.com",
        "roleType": 2,
    }

    await client.users.add_user(fields)

    sent = httpx_mock.get_request()
    assert sent.method == "POST"
    assert sent.url.path == "/api/v2/users"
    assert sent_body(httpx_mock) == fields


@pytest.mark.asyncio
async def test_update_user_uses_patch(client, httpx_mock):
    httpx_mock.add_response(json={"id": 3, "name": "Alicia"})

    await client.users.update_user(3, {"name": "Alicia"})

    sent = httpx_mock.get_request()
    assert sent.method == "PATCH"
    assert sent.url.path == "/api/v2/users/3"
    assert sent_body(httpx_mock) == {"name": "Alicia"}


@pytest.mark.asyncio
async def test_delete_user(client, httpx_mock):
    httpx_mock.add_response(json={"id": 3})

    await client.users.delete_user(3)

    sent = httpx_mock.get_request()
    assert sent.method == "DELETE"
    assert sent.content == b""


@pytest.mark.asyncio
async def test_count_user_stars(client, httpx_mock):
    httpx_mock.add_response(json={"count": 54})

    assert await client.users.count_user_stars(42, {"since": "2024-01-01"}) == 54
    sent = httpx_mock.get_request()
    assert sent.url.path == "/api/v2/users/42/stars/count"
    assert sent.url.params["since"] == "2024-01-01"
