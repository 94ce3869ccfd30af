"""
Technology Service

Catalog persistence and the links between projects and technologies
"""

import logging
from typing import List, Sequence

from barnacles.config.logging_config import log_print
from barnacles.core.technology_detectors import TECHNOLOGY_DETECTORS, TechnologyDetector, get_detector
from barnacles.db.repository import TechnologyRepository
from barnacles.db.schemas import TechnologyResponse

logger = logging.getLogger(__name__)


def resolve_detectors(slugs: Sequence[str]) -> List[TechnologyDetector]:
    """Catalog entries for the given slugs, deduplicated; unknown slugs are skipped with a warning"""
    detectors = []
    for slug in dict.fromkeys(slugs):
        detector = get_detector(slug)
        if detector is None:
            logger.warning(f"Unknown technology slug skipped: {slug}")
            continue
        detectors.append(detector)
    return detectors


class TechnologyService:
    """Technology catalog service"""

    def __init__(self):
        self.technology_repo = TechnologyRepository()

    @log_print
    async def list_technologies(self) -> List[TechnologyResponse]:
        """Technologies seen in at least one scan"""
        technologies = await self.technology_repo.list_technologies()
        return [TechnologyResponse.model_validate(t) for t in technologies]

    def list_catalog(self) -> List[TechnologyResponse]:
        """Every technology the detector knows, stored or not"""
        return [
            TechnologyResponse(name=d.name, slug=d.slug, icon=d.icon, color=d.color)
            for d in TECHNOLOGY_DETECTORS
        ]

    async def get_project_technologies(self, project_id: int) -> List[TechnologyResponse]:
        """Technologies linked to a project"""
        technologies = await self.technology_repo.get_project_technologies(project_id=project_id)
        return [TechnologyResponse.model_validate(t) for t in technologies]

    @log_print
    async def update_project_technologies(self, project_id: int, slugs: Sequence[str]) -> None:
        """Replace the technologies of a project"""
        await self.technology_repo.set_project_technologies(
            project_id=project_id, detectors=resolve_detectors(slugs)
        )
