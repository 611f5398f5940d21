"""
Structure report schema.

Client-facing description of the variables a template expects, inferred
from its sample document. Field names serialize in camelCase so that
template authors see the same names the template engine consumes.
"""

from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# Marks an array whose items bind directly rather than through a named field.
CONTEXTUAL_VALUE = "contextual-value"


class ComplexityTier(str, Enum):
    """Coarse complexity tier reported alongside a structure report."""

    UNKNOWN = "unknown"
    SIMPLE = "simple"
    MEDIUM = "medium"
    COMPLEX = "complex"


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        serialize_by_alias=True,
    )


class ArrayDescriptor(_CamelModel):
    """
    Shape of one array field, inferred from its first element only.

    ``variables`` holds the item field names, or the single
    CONTEXTUAL_VALUE sentinel when items are primitives.
    """

    name: str
    variables: List[str] = Field(default_factory=list)
    nested_arrays: List["ArrayDescriptor"] = Field(default_factory=list)

    @property
    def is_contextual(self) -> bool:
        return self.variables == [CONTEXTUAL_VALUE]


class StructureReport(_CamelModel):
    normal_variables: List[str] = Field(default_factory=list)
    conditional_variables: List[str] = Field(default_factory=list)
    array_info: List[ArrayDescriptor] = Field(default_factory=list)
    loops: List[str] = Field(default_factory=list)
    all_variables: List[str] = Field(default_factory=list)

    def is_empty(self) -> bool:
        return not (
            self.normal_variables
            or self.conditional_variables
            or self.array_info
            or self.loops
        )
