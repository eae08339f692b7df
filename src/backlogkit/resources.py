"""Resource clients exposing one method per Backlog API endpoint.

Each resource client is a thin layer over `BacklogClient.request` and
`BacklogClient.download`: it supplies the path, method, query parameters and
body, and returns the decoded JSON unchanged. Query parameter names follow
the API's own camelCase spelling, e.g. `{"projectId": [1, 2], "count": 20}`.
"""

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from . import endpoints
from .builders import build_url, strip_query
from .log_config import logger
from .models import FileData
from .types import QueryParams

if TYPE_CHECKING:
    from .client import BacklogClient

JSONObject = dict[str, Any]


class BaseResourceClient:
    """Base class for all resource clients.

    Attributes:
        _api_client: The `BacklogClient` used for making HTTP requests.
    """

    def __init__(self, api_client: "BacklogClient"):
        """Initialize the base resource client.

        Args:
            api_client: The BacklogClient the requests are sent through.
        """
        self._api_client = api_client
        logger.debug(f"{self.__class__.__name__} initialized")

    async def _get_file(self, path: str) -> FileData:
        """Downloads a file and records the credential-free URL it came from."""
        result = await self._api_client.download(path)
        url = strip_query(build_url(self._api_client.config, path))
        return FileData(body=result.body, file_name=result.file_name, url=url)


class SpaceClient(BaseResourceClient):
    """Space-wide endpoints."""

    async def get_space(self) -> JSONObject:
        """Get space information."""
        return await self._api_client.request(endpoints.SPACE)

    async def get_activities(
        self, params: QueryParams | None = None
    ) -> list[JSONObject]:
        """Get recent updates in the space.

        Args:
            params: Filters such as `activityTypeId`, `minId`, `maxId`,
                `count` and `order`.
        """
        return await self._api_client.request(
            endpoints.SPACE_ACTIVITIES, params=params
        )

    async def get_icon(self) -> FileData:
        """Download the space logo."""
        return await self._get_file(endpoints.SPACE_IMAGE)

    async def get_notification(self) -> JSONObject:
        """Get the space notification."""
        return await self._api_client.request(endpoints.SPACE_NOTIFICATION)

    async def put_notification(self, content: str) -> JSONObject:
        """Update the space notification."""
        return await self._api_client.request(
            endpoints.SPACE_NOTIFICATION, method="PUT", body={"content": content}
        )


class IssuesClient(BaseResourceClient):
    """Issue endpoints."""

    async def create_issue(self, body: Mapping[str, Any]) -> JSONObject:
        """Add a new issue.

        Args:
            body: Issue fields, at least `projectId`, `summary`, `issueTypeId`
                and `priorityId`.
        """
        return await self._api_client.request(
            endpoints.ISSUES, method="POST", body=dict(body)
        )

    async def get_issue(self, issue_id_or_key: int | str) -> JSONObject:
        """Get an issue by its numeric ID or its key (e.g. "PROJ-12")."""
        return await self._api_client.request(
            endpoints.ISSUE.format(issue_id_or_key=issue_id_or_key)
        )

    async def get_issues(self, params: QueryParams | None = None) -> list[JSONObject]:
        """Get the issue list matching the given filters."""
        return await self._api_client.request(endpoints.ISSUES, params=params)

    async def count_issues(self, params: QueryParams | None = None) -> int:
        """Count the issues matching the given filters.

        Returns:
            int: The `count` field; the `{"count": n}` envelope is dropped.
        """
        result = await self._api_client.request(endpoints.ISSUES_COUNT, params=params)
        return result["count"]


class DocumentsClient(BaseResourceClient):
    """Document endpoints."""

    async def get_documents(self, params: QueryParams) -> list[JSONObject]:
        """Get the document list.

        Args:
            params: Filters; `offset` is required by the API, `projectId`,
                `keyword`, `sort`, `order` and `count` are optional.
        """
        return await self._api_client.request(endpoints.DOCUMENTS, params=params)

    async def get_document(self, document_id: str) -> JSONObject:
        """Get a single document."""
        return await self._api_client.request(
            endpoints.DOCUMENT.format(document_id=document_id)
        )

    async def get_document_tree(self, project_id_or_key: int | str) -> JSONObject:
        """Get the active and trashed document trees of a project."""
        return await self._api_client.request(
            endpoints.DOCUMENT_TREE, params={"projectIdOrKey": project_id_or_key}
        )

    async def download_attachment(
        self, document_id: str, attachment_id: int
    ) -> FileData:
        """Download a file attached to a document."""
        return await self._get_file(
            endpoints.DOCUMENT_ATTACHMENT.format(
                document_id=document_id, attachment_id=attachment_id
            )
        )

    async def add_document(self, body: Mapping[str, Any]) -> JSONObject:
        """Add a document.

        Args:
            body: Document fields, at least `projectId`; `title`, `content`,
                `emoji`, `parentId` and `addLast` are optional.
        """
        return await self._api_client.request(
            endpoints.DOCUMENTS, method="POST", body=dict(body)
        )


class ProjectsClient(BaseResourceClient):
    """Project endpoints."""

    async def get_projects(
        self, params: QueryParams | None = None
    ) -> list[JSONObject]:
        """Get the project list, optionally filtered by `archived` and `all`."""
        return await self._api_client.request(endpoints.PROJECTS, params=params)

    async def get_project(self, project_id_or_key: int | str) -> JSONObject:
        """Get a project by its numeric ID or its key."""
        return await self._api_client.request(
            endpoints.PROJECT.format(project_id_or_key=project_id_or_key)
        )


class UsersClient(BaseResourceClient):
    """User endpoints."""

    async def get_users(self) -> list[JSONObject]:
        return await self._api_client.request(endpoints.USERS)

    async def get_user(self, user_id: int) -> JSONObject:
        return await self._api_client.request(endpoints.USER.format(user_id=user_id))

    async def add_user(self, body: Mapping[str, Any]) -> JSONObject:
        """Add a user (`userId`, `password`, `name`, `mailAddress`, `roleType`)."""
        return await self._api_client.request(
            endpoints.USERS, method="POST", body=dict(body)
        )

    async def update_user(self, user_id: int, body: Mapping[str, Any]) -> JSONObject:
        return await self._api_client.request(
            endpoints.USER.format(user_id=user_id), method="PATCH", body=dict(body)
        )

    async def delete_user(self, user_id: int) -> JSONObject:
        """Delete a user and return the deleted user."""
        return await self._api_client.request(
            endpoints.USER.format(user_id=user_id), method="DELETE"
        )

    async def get_myself(self) -> JSONObject:
        """Get the user the credentials belong to."""
        return await self._api_client.request(endpoints.MYSELF)

    async def get_user_icon(self, user_id: int) -> FileData:
        return await self._get_file(endpoints.USER_ICON.format(user_id=user_id))

    async def get_user_activities(
        self, user_id: int, params: QueryParams | None = None
    ) -> list[JSONObject]:
        return await self._api_client.request(
            endpoints.USER_ACTIVITIES.format(user_id=user_id), params=params
        )

    async def get_user_stars(
        self, user_id: int, params: QueryParams | None = None
    ) -> list[JSONObject]:
        """Get the stars a user received."""
        return await self._api_client.request(
            endpoints.USER_STARS.format(user_id=user_id), params=params
        )

    async def count_user_stars(
        self, user_id: int, params: QueryParams | None = None
    ) -> int:
        """Count the stars a user received, optionally between `since` and `until`.

        Returns:
            int: The `count` field; the `{"count": n}` envelope is dropped.
        """
        result = await self._api_client.request(
            endpoints.USER_STARS_COUNT.format(user_id=user_id), params=params
        )
        return result["count"]

    async def get_recently_viewed_issues(
        self, params: QueryParams | None = None
    ) -> list[JSONObject]:
        return await self._api_client.request(
            endpoints.RECENTLY_VIEWED_ISSUES, params=params
        )

    async def get_recently_viewed_projects(
        self, params: QueryParams | None = None
    ) -> list[JSONObject]:
        return await self._api_client.request(
            endpoints.RECENTLY_VIEWED_PROJECTS, params=params
        )

    async def get_recently_viewed_wikis(
        self, params: QueryParams | None = None
    ) -> list[JSONObject]:
        return await self._api_client.request(
            endpoints.RECENTLY_VIEWED_WIKIS, params=params
        )
