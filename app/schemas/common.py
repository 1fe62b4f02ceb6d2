"""
==============================================================================
Common Schemas Module
==============================================================================

Shared response schemas used across API endpoints.

==============================================================================
"""

from typing import Dict

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Service health summary."""
    status: str
    components: Dict[str, str]
    details: Dict[str, int]
