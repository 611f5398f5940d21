"""
Complexity tier derived from a structure report. Reporting only.
"""

from typing import Optional

from docgen.app.schemas.structure import ComplexityTier, StructureReport

COMPLEX_VARIABLE_THRESHOLD = 20
COMPLEX_ARRAY_THRESHOLD = 5
MEDIUM_VARIABLE_THRESHOLD = 10
MEDIUM_ARRAY_THRESHOLD = 2


def classify_complexity(report: Optional[StructureReport]) -> ComplexityTier:
    if report is None or report.is_empty():
        return ComplexityTier.UNKNOWN

    variable_count = len(report.normal_variables) + len(report.conditional_variables)
    array_count = len(report.array_info)

    if (
        variable_count > COMPLEX_VARIABLE_THRESHOLD
        or array_count > COMPLEX_ARRAY_THRESHOLD
        or any(a.nested_arrays for a in report.array_info)
        or any(a.is_contextual for a in report.array_info)
    ):
        return ComplexityTier.COMPLEX

    if (
        variable_count > MEDIUM_VARIABLE_THRESHOLD
        or array_count > MEDIUM_ARRAY_THRESHOLD
    ):
        return ComplexityTier.MEDIUM

    return ComplexityTier.SIMPLE
