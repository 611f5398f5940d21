from docgen.app.schemas.structure import (
    CONTEXTUAL_VALUE,
    ArrayDescriptor,
    ComplexityTier,
    StructureReport,
)
from docgen.app.services.analyzer import analyze_structure
from docgen.app.services.complexity import classify_complexity


def _report_with(normal: int = 0, arrays: int = 0) -> StructureReport:
    return StructureReport(
        normal_variables=[f"v{i:02d}" for i in range(normal)],
        array_info=[ArrayDescriptor(name=f"a{i}", variables=["x"]) for i in range(arrays)],
        loops=[f"each a{i}" for i in range(arrays)],
    )


def test_missing_or_empty_report_is_unknown():
    assert classify_complexity(None) is ComplexityTier.UNKNOWN
    assert classify_complexity(StructureReport()) is ComplexityTier.UNKNOWN
    assert classify_complexity(analyze_structure(None)) is ComplexityTier.UNKNOWN


def test_many_variables_is_complex():
    assert classify_complexity(_report_with(normal=25)) is ComplexityTier.COMPLEX


def test_eleven_variables_without_arrays_is_medium():
    assert classify_complexity(_report_with(normal=11)) is ComplexityTier.MEDIUM


def test_three_arrays_is_medium_and_six_is_complex():
    assert classify_complexity(_report_with(normal=1, arrays=3)) is ComplexityTier.MEDIUM
    assert classify_complexity(_report_with(normal=1, arrays=6)) is ComplexityTier.COMPLEX


def test_small_report_is_simple():
    assert classify_complexity(_report_with(normal=3, arrays=1)) is ComplexityTier.SIMPLE


def test_contextual_or_nested_arrays_are_complex():
    contextual = StructureReport(
        array_info=[ArrayDescriptor(name="tags", variables=[CONTEXTUAL_VALUE])],
        loops=["each tags"],
    )
    nested = StructureReport(
        array_info=[
            ArrayDescriptor(
                name="rows",
                variables=["id"],
                nested_arrays=[ArrayDescriptor(name="cells")],
            )
        ],
        loops=["each rows"],
    )

    assert classify_complexity(contextual) is ComplexityTier.COMPLEX
    assert classify_complexity(nested) is ComplexityTier.COMPLEX
