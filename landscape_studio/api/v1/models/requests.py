"""
API request models using Pydantic.
"""
from typing import Optional

from pydantic import Field

from landscape_studio.domain.models import BedDimensions, CamelModel


class ApplyBundleRequest(CamelModel):
    """Request body for expanding a bundle into placements."""
    scale: float = Field(
        default=1.0,
        gt=0,
        description="Quantity multiplier applied to every bundle entry",
        examples=[1.5]
    )
    bed: Optional[BedDimensions] = Field(
        default=None,
        description="Target bed; the configured default bed when omitted"
    )
    density: Optional[float] = Field(
        default=None,
        gt=0,
        description="Optional density multiplier rescaling quantities to the bed area"
    )
    seed: Optional[int] = Field(
        default=None,
        description="Seed for reproducible placement jitter"
    )
