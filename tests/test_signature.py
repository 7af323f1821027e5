from catalog_importer.models import Row
from catalog_importer.rules import FOLDER_COLUMNS
from catalog_importer.signature import build_signature


def test_keyed_signature_sorted_by_name():
    row = Row(number=2, values={"UnitCost1": "2.5", "ItemName": " Brick "})
    assert build_signature(row) == "ItemName:Brick|UnitCost1:2.50"


def test_value_only_signature():
    row = Row(number=2, values={"UnitCost1": "2.5", "ItemName": "Brick"})
    assert build_signature(row, keyed=False) == "Brick|2.50"


def test_signature_ignores_column_order():
    a = Row(number=2, values={"ItemName": "Brick", "CostType1": "Material", "UnitCost1": "2"})
    b = Row(number=3, values={"UnitCost1": "2.00", "ItemName": "Brick", "CostType1": "Material"})
    assert build_signature(a) == build_signature(b)


def test_sort_is_case_sensitive_ordinal():
    row = Row(number=2, values={"b": "1x", "B": "2x", "a": "3x"})
    assert build_signature(row, keyed=False) == "2x|3x|1x"


def test_excluded_columns_do_not_matter():
    a = Row(number=2, values={"ItemName": "Brick", "FolderLevel1": "Walls"})
    b = Row(number=3, values={"ItemName": "Brick", "FolderLevel1": "Floors"})
    assert build_signature(a, excluded_columns=FOLDER_COLUMNS) == build_signature(b, excluded_columns=FOLDER_COLUMNS)
    assert build_signature(a) != build_signature(b)


def test_excluded_first_position():
    a = Row(number=2, values={"Id": "L-1", "ItemName": "Brick"})
    b = Row(number=3, values={"Id": "L-2", "ItemName": "Brick"})
    assert build_signature(a, excluded_positions={0}) == build_signature(b, excluded_positions={0})
    assert build_signature(a, excluded_positions={0}) == "ItemName:Brick"


def test_excluded_prefix():
    row = Row(number=2, values={"FolderLevel5": "x", "Folder": "y", "ItemName": "Brick"})
    assert build_signature(row, excluded_prefixes=("Folder",), keyed=False) == "Brick"
