"""
Dependency injection for FastAPI.
"""
from typing import Annotated
from fastapi import Depends

from landscape_studio.infrastructure.catalog_client import get_catalog
from landscape_studio.services.domain.bundle_planner import PlacementConfig
from landscape_studio.services.domain.design_analyzer import AnalysisConfig, DesignAnalyzer
from landscape_studio.services.application.design_service import DesignService


def get_design_analyzer() -> DesignAnalyzer:
    """
    Dependency factory for DesignAnalyzer.

    Returns:
        DesignAnalyzer configured from settings
    """
    return DesignAnalyzer(AnalysisConfig.from_settings())


def get_design_service(
    analyzer: Annotated[DesignAnalyzer, Depends(get_design_analyzer)],
) -> DesignService:
    """
    Dependency factory for DesignService.

    Args:
        analyzer: Design analyzer (injected)

    Returns:
        DesignService instance
    """
    return DesignService(
        catalog_provider=get_catalog,
        analyzer=analyzer,
        placement_config=PlacementConfig.from_settings(),
    )


# Type aliases for cleaner route signatures
DesignServiceDep = Annotated[DesignService, Depends(get_design_service)]
