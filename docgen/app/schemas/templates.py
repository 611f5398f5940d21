"""
Template discovery response models.
"""

from datetime import datetime
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from docgen.app.schemas.structure import ComplexityTier, StructureReport


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        serialize_by_alias=True,
        frozen=True,
    )


class TemplateDescriptor(_CamelModel):
    name: str
    file: str
    has_sample: bool
    size: int
    modified: datetime


class TemplateDetail(_CamelModel):
    """
    Full description of a single template.

    Combines the current on-disk source with the structure inferred from
    its sample document.
    """

    name: str
    content: str
    size: int
    modified: datetime
    sample_data: Dict[str, Any]
    structure: StructureReport
    complexity: ComplexityTier


class TemplateListResponse(_CamelModel):
    success: bool = True
    templates: List[TemplateDescriptor]
    count: int
    request_id: str
