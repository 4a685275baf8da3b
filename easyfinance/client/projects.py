"""Project endpoints."""

from typing import Iterable, Union
from uuid import UUID

from easyfinance.client.base import ApiClient
from easyfinance.models.schemas import PatchOperation, ProjectRequest, ProjectResponse


PROJECTS_PATH = "/api/projects/"


class ProjectClient:
    def __init__(self, api: ApiClient):
        self._api = api

    async def get_projects(self) -> list[ProjectResponse]:
        response = await self._api.request_ok("GET", PROJECTS_PATH)
        return [ProjectResponse.model_validate(item) for item in response.json()]

    async def add_project(
        self,
        project: Union[ProjectRequest, ProjectResponse],
    ) -> ProjectResponse:
        response = await self._api.request_ok(
            "POST",
            PROJECTS_PATH,
            json=project.model_dump(mode="json", by_alias=True, exclude_none=True),
        )
        return ProjectResponse.model_validate(response.json())

    async def update_project(
        self,
        project_id: Union[UUID, str],
        patch: Iterable[PatchOperation],
    ) -> ProjectResponse:
        """Partial update with a JSON-patch document."""
        body = [op.model_dump(mode="json", by_alias=True, exclude_none=True) for op in patch]
        response = await self._api.request_ok(
            "PATCH",
            f"{PROJECTS_PATH}{project_id}",
            json=body,
        )
        return ProjectResponse.model_validate(response.json())

    async def remove_project(self, project_id: Union[UUID, str]) -> bool:
        """True when the API answered with a success status."""
        response = await self._api.request("DELETE", f"{PROJECTS_PATH}{project_id}")
        return response.is_success
