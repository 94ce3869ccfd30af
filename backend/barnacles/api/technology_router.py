"""
Technology API Router

Technology catalog
"""

from fastapi import APIRouter, Query

from barnacles.service.technology_service import TechnologyService
from barnacles.utils.model.response_model import ListResponse

technology_router = APIRouter(prefix="/technologies", tags=["technologies"])

technology_service = TechnologyService()


@technology_router.get(
    "",
    summary="List technologies",
    operation_id="list_technologies"
)
async def list_technologies(
    catalog: bool = Query(False, description="Return every detectable technology instead of the stored ones"),
):
    """Technologies found by past scans, or the full detector catalog"""
    if catalog:
        return ListResponse.success(items=technology_service.list_catalog())
    return ListResponse.success(items=await technology_service.list_technologies())
