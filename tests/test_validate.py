import pytest

from catalog_importer.models import FatalError, MessageKind, Row
from catalog_importer.rules import REVISED_HEADERS
from catalog_importer.validate import (
    check_revised_header,
    scan_replacement_characters,
    validate_revised_row,
    validate_row,
)

ENUM_ERROR = (
    "UnitOfMeasure contains an invalid value. "
    "Must be one of: sq ft, lin ft, cu yd, m, sq m, cu m, each"
)


def _row(number=2, **values):
    base = {
        "ItemName": "Brick",
        "PurchaseUnit": "pallet",
        "UnitOfMeasure": "sq ft",
        "CoverageRatePurchase": "5",
        "CostType1": "Material",
        "UnitCost1": "2.50",
    }
    base.update(values)
    return Row(number=number, values=base)


def _texts(messages):
    return [m.text for m in messages]


def test_valid_row_has_no_errors():
    assert validate_row(_row()) == []


@pytest.mark.parametrize("unit", ["SQ FT", " sq ft ", "Sq Ft", "each", "M"])
def test_enum_is_case_insensitive(unit):
    assert validate_row(_row(UnitOfMeasure=unit)) == []


def test_enum_violation():
    assert _texts(validate_row(_row(UnitOfMeasure="sqft"))) == [ENUM_ERROR]


def test_required_violation():
    messages = validate_row(_row(number=3, ItemName="  "))

    assert len(messages) == 1
    assert messages[0].kind == MessageKind.ERROR
    assert messages[0].text == "ItemName is required but missing"
    assert messages[0].rows == {3}


def test_optional_column_may_be_empty():
    assert validate_row(_row(PurchaseUnit="")) == []


def test_max_length():
    assert _texts(validate_row(_row(CostType1="x" * 51))) == [
        "CostType1 exceeds max length of 50 characters"
    ]
    assert validate_row(_row(CostType1=" " + "x" * 50 + " ")) == []


def test_numeric():
    assert _texts(validate_row(_row(UnitCost1="two", CoverageRatePurchase="1,000.5"))) == [
        "UnitCost1 must be a numeric value"
    ]


def test_absent_column_is_skipped():
    row = Row(number=2, values={"ItemName": "Brick"})
    assert validate_row(row) == []


def test_replacement_characters_warn_once_per_row():
    row = _row(number=6, ItemName="Br\ufffdck", CostType1="Mat\u25a1rial")

    messages = scan_replacement_characters(row)
    assert len(messages) == 1
    assert messages[0].kind == MessageKind.WARNING
    assert messages[0].rows == {6}
    assert messages[0].text.startswith("Unrecognized characters detected in row 6.")


def test_clean_row_has_no_replacement_warning():
    assert scan_replacement_characters(_row()) == []


def test_revised_header_matches():
    assert check_revised_header(list(REVISED_HEADERS)) is None


def test_revised_header_order_matters():
    header = list(REVISED_HEADERS)
    header[0], header[1] = header[1], header[0]

    fatal = check_revised_header(header)
    assert isinstance(fatal, FatalError)
    assert fatal.message == "The column headers in the first row do not match the expected format."


def test_revised_header_name_matters():
    header = list(REVISED_HEADERS)
    header[-1] = "ExternalID"
    assert isinstance(check_revised_header(header), FatalError)
    assert isinstance(check_revised_header(header[:-1]), FatalError)


def test_revised_row_checks():
    row = Row(
        number=5,
        values={
            "ExportId": "",
            "ItemName": "Brick",
            "ItemDescription": "line one\nline two",
            "UnitOfMeasure": "",
            "CoverageRatePurchase": "5",
            "CoverageRateMeasured": "",
            "ExternalId": "x\ufffd",
        },
    )

    assert validate_revised_row(row) == [
        "Error in row 5, ExportId: Required field is empty.",
        "Error in row 5, ItemDescription: Contains carriage returns.",
        "Error in row 5, UnitOfMeasure: Invalid value.",
        "Error in row 5, CoverageRateMeasured: Must be a numeric value.",
        "Error in row 5, ExternalId: Contains replacement symbols.",
    ]


def test_revised_row_enum_ignores_case():
    row = Row(number=2, values={"UnitOfMeasure": "Lin Ft"})
    assert validate_revised_row(row) == []


def test_control_character_is_flagged():
    messages = scan_replacement_characters(_row(number=4, CostType1="Mat\u0001erial"))
    assert [m.rows for m in messages] == [{4}]
