"""
Structural inference over sample documents.

Given an arbitrary JSON-like value, classify its fields into the three
kinds of template bindings:

- normal variables       scalars and one-level nested object fields
- conditional variables  booleans named as display switches
- arrays                 loop sources, including nested arrays found
                         inside array-item objects

Boolean policy:
    Only booleans whose key starts with ``show``, ``enable`` or
    ``display`` (case-insensitive) are conditional. Every other boolean
    is business data and is reported as a normal variable.

Array inference inspects the FIRST element only. Heterogeneous arrays
are reported with the shape of their first item.

Analysis is pure and never raises; unsupported input degrades to an
empty report.
"""

import logging
from enum import Enum
from typing import Any, List, Mapping

from docgen.app.schemas.structure import (
    CONTEXTUAL_VALUE,
    ArrayDescriptor,
    StructureReport,
)

logger = logging.getLogger(__name__)

CONDITIONAL_PREFIXES = ("show", "enable", "display")


class ValueShape(str, Enum):
    SCALAR = "scalar"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"
    NULL = "null"


def shape_of(value: Any) -> ValueShape:
    """Classify a decoded JSON value. ``bool`` is tested before numbers."""
    if value is None:
        return ValueShape.NULL
    if isinstance(value, bool):
        return ValueShape.BOOLEAN
    if isinstance(value, Mapping):
        return ValueShape.OBJECT
    if isinstance(value, (list, tuple)):
        return ValueShape.ARRAY
    return ValueShape.SCALAR


def is_conditional_key(key: str) -> bool:
    return key.lower().startswith(CONDITIONAL_PREFIXES)


# ---------------------------------------------------------------------------
# Arrays
# ---------------------------------------------------------------------------


def _item_fields(item: Mapping) -> List[str]:
    return [
        str(key)
        for key, value in item.items()
        if shape_of(value) is not ValueShape.ARRAY
    ]


def _nested_array(name: str, items: List[Any]) -> ArrayDescriptor:
    descriptor = ArrayDescriptor(name=name)
    if not items:
        return descriptor

    first_shape = shape_of(items[0])
    if first_shape is ValueShape.SCALAR:
        descriptor.variables = [CONTEXTUAL_VALUE]
    elif first_shape is ValueShape.OBJECT:
        descriptor.variables = _item_fields(items[0])
    return descriptor


def analyze_array(name: str, items: List[Any]) -> ArrayDescriptor:
    """
    Describe an array field from its first element.

    Primitive items bind through the CONTEXTUAL_VALUE sentinel. Object
    items contribute their keys as variables, except keys holding arrays,
    which become nested descriptors (one level deep).
    """
    descriptor = ArrayDescriptor(name=name)
    if not items:
        return descriptor

    first = items[0]
    first_shape = shape_of(first)

    if first_shape is ValueShape.SCALAR:
        descriptor.variables = [CONTEXTUAL_VALUE]
    elif first_shape is ValueShape.OBJECT:
        for key, value in first.items():
            if shape_of(value) is ValueShape.ARRAY:
                nested = _nested_array(str(key), list(value))
                descriptor.nested_arrays.append(nested)
                logger.debug(
                    "nested_array_detected",
                    extra={"array": name, "nested": key, "length": len(value)},
                )
            else:
                descriptor.variables.append(str(key))

    return descriptor


# ---------------------------------------------------------------------------
# Documents
# ---------------------------------------------------------------------------


def analyze_structure(document: Any) -> StructureReport:
    """
    Infer the binding structure of a sample document.

    ``None`` and any non-object input yield an empty report.
    """
    report = StructureReport()

    if shape_of(document) is not ValueShape.OBJECT:
        return report

    normal: List[str] = []
    conditional: List[str] = []

    for raw_key, value in document.items():
        key = str(raw_key)
        shape = shape_of(value)

        if shape is ValueShape.ARRAY:
            report.array_info.append(analyze_array(key, list(value)))
            report.loops.append(f"each {key}")
        elif shape is ValueShape.BOOLEAN:
            if is_conditional_key(key):
                conditional.append(key)
            else:
                normal.append(key)
        elif shape is ValueShape.OBJECT:
            normal.extend(f"{key}.{nested_key}" for nested_key in value)
            normal.append(key)
        else:
            normal.append(key)

    report.normal_variables = sorted(set(normal))
    report.conditional_variables = sorted(set(conditional))
    report.all_variables = report.normal_variables + report.conditional_variables

    logger.debug(
        "structure_analyzed",
        extra={
            "arrays": len(report.array_info),
            "variables": len(report.all_variables),
        },
    )

    return report
