import pytest

from docgen.app.schemas.structure import CONTEXTUAL_VALUE
from docgen.app.services.analyzer import (
    ValueShape,
    analyze_array,
    analyze_structure,
    shape_of,
)


@pytest.mark.parametrize("document", [None, 42, "text", True, [1, 2], []])
def test_non_object_input_yields_empty_report(document):
    report = analyze_structure(document)

    assert report.normal_variables == []
    assert report.conditional_variables == []
    assert report.array_info == []
    assert report.loops == []
    assert report.all_variables == []


def test_mixed_document_classification():
    report = analyze_structure({"a": 1, "b": {"c": 2, "d": 3}, "e": [1, 2, 3], "f": True})

    # "f" has no show/enable/display prefix, so it is business data.
    assert report.normal_variables == ["a", "b", "b.c", "b.d", "f"]
    assert report.conditional_variables == []
    assert len(report.array_info) == 1
    assert report.array_info[0].name == "e"
    assert report.array_info[0].variables == [CONTEXTUAL_VALUE]
    assert report.loops == ["each e"]


def test_prefixed_booleans_are_conditionals():
    report = analyze_structure(
        {"showLogo": True, "enable_footer": False, "DisplayTotals": True, "paid": False}
    )

    assert report.conditional_variables == ["DisplayTotals", "enable_footer", "showLogo"]
    assert report.normal_variables == ["paid"]
    assert report.all_variables == ["paid", "DisplayTotals", "enable_footer", "showLogo"]


def test_nested_array_inside_items():
    report = analyze_structure({"items": [{"name": "x", "tags": ["p", "q"]}]})

    (items,) = report.array_info
    assert items.name == "items"
    assert items.variables == ["name"]
    assert len(items.nested_arrays) == 1
    assert items.nested_arrays[0].name == "tags"
    assert items.nested_arrays[0].variables == [CONTEXTUAL_VALUE]


def test_nested_array_of_objects_lists_inner_fields():
    descriptor = analyze_array(
        "samples",
        [{"parameter": "pH", "results": [{"value": 7, "flag": "ok", "history": []}]}],
    )

    (results,) = descriptor.nested_arrays
    assert results.variables == ["value", "flag"]
    assert results.nested_arrays == []


def test_array_inference_uses_first_element_only():
    descriptor = analyze_array("rows", [{"a": 1}, {"a": 2, "b": 3}, "stray"])

    assert descriptor.variables == ["a"]


def test_empty_array_descriptor_is_still_a_loop():
    report = analyze_structure({"lines": []})

    assert report.array_info[0].variables == []
    assert report.array_info[0].nested_arrays == []
    assert report.loops == ["each lines"]


def test_boolean_and_null_first_items_have_no_variables():
    assert analyze_array("flags", [True, False]).variables == []
    assert analyze_array("gaps", [None]).variables == []


def test_variables_are_deduplicated_and_sorted():
    report = analyze_structure({"z": 1, "m": {"z": 1}, "a": None})

    assert report.normal_variables == sorted(set(report.normal_variables))
    assert report.normal_variables == ["a", "m", "m.z", "z"]


def test_nested_objects_recurse_one_level_only():
    report = analyze_structure({"company": {"address": {"city": "Talca"}}})

    assert report.normal_variables == ["company", "company.address"]


def test_shape_of_checks_bool_before_numbers():
    assert shape_of(True) is ValueShape.BOOLEAN
    assert shape_of(1) is ValueShape.SCALAR
    assert shape_of(1.5) is ValueShape.SCALAR
    assert shape_of({}) is ValueShape.OBJECT
    assert shape_of([]) is ValueShape.ARRAY
    assert shape_of(None) is ValueShape.NULL


def test_report_serializes_with_camel_case_keys():
    data = analyze_structure({"items": [{"tags": ["a"]}]}).model_dump()

    assert set(data) == {
        "normalVariables",
        "conditionalVariables",
        "arrayInfo",
        "loops",
        "allVariables",
    }
    assert data["arrayInfo"][0]["nestedArrays"][0]["name"] == "tags"
