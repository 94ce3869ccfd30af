"""
Project API Router

Project discovery, stats and per-project actions
"""

from typing import Optional

from fastapi import APIRouter, Body, Path, Query

from barnacles.db.schemas import InspectRequest, ProjectPreferencesUpdate, ScanRequest
from barnacles.service.git_stats_service import GitStatsService
from barnacles.service.project_service import ProjectService
from barnacles.utils.exceptions import NotFoundError
from barnacles.utils.model.response_model import BaseResponse, ListResponse

project_router = APIRouter(prefix="/projects", tags=["projects"])

project_service = ProjectService()
git_stats_service = GitStatsService()


def _split_csv(value: Optional[str]) -> Optional[list[str]]:
    if not value:
        return None
    return [item.strip() for item in value.split(",") if item.strip()] or None


@project_router.get(
    "",
    summary="List projects",
    operation_id="list_projects"
)
async def list_projects(
    search: Optional[str] = Query(None, description="Substring of name or path"),
    technologies: Optional[str] = Query(None, description="Comma separated technology slugs"),
    include_archived: bool = Query(False, alias="includeArchived", description="Include archived projects"),
):
    """Projects ordered by last modification, archived ones hidden by default"""
    projects = await project_service.list_projects(
        search=search,
        technologies=_split_csv(technologies),
        include_archived=include_archived,
    )
    return ListResponse.success(items=projects)


@project_router.post(
    "/scan",
    summary="Scan directories and save projects",
    operation_id="scan_projects"
)
async def scan_projects(data: Optional[ScanRequest] = Body(None)):
    """Scan the given roots, or the configured ones, and save every project found"""
    data = data or ScanRequest()
    projects = await project_service.scan_and_save(
        directories=data.directories,
        max_depth=data.max_depth,
    )
    return ListResponse.success(items=projects, message=f"Found {len(projects)} projects")


@project_router.post(
    "/inspect",
    summary="Scan one directory without saving",
    operation_id="inspect_project"
)
async def inspect_project(data: InspectRequest):
    """Return the scan record of a directory"""
    return BaseResponse.success(data=await project_service.inspect_path(data.path))


@project_router.get(
    "/git-stats",
    summary="Get commit activity",
    operation_id="get_git_stats"
)
async def get_git_stats(
    period: str = Query("week", description="week, month or last-week; anything else means week"),
):
    """Commits, changed files, lines and streak across all active projects"""
    return BaseResponse.success(data=await git_stats_service.get_git_stats(period))


@project_router.get(
    "/{project_id}",
    summary="Get project",
    operation_id="get_project"
)
async def get_project(project_id: int = Path(..., description="Project ID")):
    """Project with technologies and stats"""
    return BaseResponse.success(data=await project_service.get_project(project_id))


@project_router.delete(
    "/{project_id}",
    summary="Delete project",
    operation_id="delete_project"
)
async def delete_project(project_id: int = Path(..., description="Project ID")):
    """Remove the project record; files on disk are untouched"""
    await project_service.delete_project(project_id)
    return BaseResponse.success(message="Project deleted")


@project_router.patch(
    "/{project_id}/favorite",
    summary="Toggle favorite",
    operation_id="toggle_project_favorite"
)
async def toggle_favorite(project_id: int = Path(..., description="Project ID")):
    is_favorite = await project_service.toggle_favorite(project_id)
    return BaseResponse.success(data={"isFavorite": is_favorite})


@project_router.patch(
    "/{project_id}/archive",
    summary="Archive project",
    operation_id="archive_project"
)
async def archive_project(project_id: int = Path(..., description="Project ID")):
    return BaseResponse.success(data=await project_service.archive_project(project_id))


@project_router.patch(
    "/{project_id}/unarchive",
    summary="Unarchive project",
    operation_id="unarchive_project"
)
async def unarchive_project(project_id: int = Path(..., description="Project ID")):
    return BaseResponse.success(data=await project_service.unarchive_project(project_id))


@project_router.patch(
    "/{project_id}/preferences",
    summary="Update IDE/terminal preferences",
    operation_id="update_project_preferences"
)
async def update_preferences(
    data: ProjectPreferencesUpdate,
    project_id: int = Path(..., description="Project ID"),
):
    return BaseResponse.success(data=await project_service.update_preferences(project_id, data))


@project_router.post(
    "/{project_id}/rescan",
    summary="Rescan project",
    operation_id="rescan_project"
)
async def rescan_project(project_id: int = Path(..., description="Project ID")):
    """Full rescan: counts, language breakdown, technologies and Git info"""
    return BaseResponse.success(data=await project_service.rescan_project(project_id))


@project_router.get(
    "/{project_id}/stats",
    summary="Get project stats",
    operation_id="get_project_stats"
)
async def get_project_stats(
    project_id: int = Path(..., description="Project ID"),
    include_language_stats: bool = Query(True, alias="includeLanguageStats"),
):
    """
    Persisted stats, null for a project that was never scanned

    Without language stats the languageStats key is left out.
    """
    stats = await project_service.get_project_stats(
        project_id, include_language_stats=include_language_stats
    )
    if stats is None:
        return BaseResponse.success(data=None)

    data = stats.model_dump(mode="json", by_alias=True)
    if stats.language_stats is None:
        data.pop("languageStats", None)
    return BaseResponse.success(data=data)


@project_router.get(
    "/{project_id}/readme",
    summary="Get README",
    operation_id="get_project_readme"
)
async def get_readme(project_id: int = Path(..., description="Project ID")):
    readme = await project_service.get_readme(project_id)
    if readme is None:
        raise NotFoundError(message="README.md not found", resource_type="readme", resource_id=project_id)
    return BaseResponse.success(data=readme)


@project_router.get(
    "/{project_id}/package-scripts",
    summary="Get package.json scripts",
    operation_id="get_package_scripts"
)
async def get_package_scripts(project_id: int = Path(..., description="Project ID")):
    return BaseResponse.success(data=await project_service.get_package_scripts(project_id))


@project_router.get(
    "/{project_id}/composer-scripts",
    summary="Get composer.json scripts",
    operation_id="get_composer_scripts"
)
async def get_composer_scripts(project_id: int = Path(..., description="Project ID")):
    return BaseResponse.success(data=await project_service.get_composer_scripts(project_id))


@project_router.get(
    "/{project_id}/package-manager",
    summary="Detect package manager",
    operation_id="get_package_manager"
)
async def get_package_manager(project_id: int = Path(..., description="Project ID")):
    package_manager = await project_service.detect_package_manager(project_id)
    return BaseResponse.success(data={"packageManager": package_manager})


@project_router.post(
    "/{project_id}/delete-packages",
    summary="Delete dependency directories",
    operation_id="delete_project_packages"
)
async def delete_packages(project_id: int = Path(..., description="Project ID")):
    """Remove node_modules, vendor, virtualenvs and Rust build output, then rescan"""
    result = await project_service.delete_packages(project_id)
    return BaseResponse.success(data=result, message="Packages deleted")
