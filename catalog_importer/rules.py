"""
Fixed validation and comparison tables.

Everything here is immutable and is passed into the engine explicitly;
nothing in this module is meant to be changed at runtime.
"""

from .models import ColumnRule, RuleKind

SIGNATURE_DELIMITER = "|"

# Columns that describe where an item sits in the folder hierarchy. They vary
# between copies of the same item and never take part in a signature.
FOLDER_COLUMNS = frozenset({"FolderLevel1", "FolderLevel2", "FolderLevel3", "FolderLevel4"})
FOLDER_PREFIX = "Folder"

# Stripped before comparison (the no-break space is also flagged below).
INVISIBLE_CHARACTERS = ("\r", "\n", "\u200b", "\u00a0")

# Characters that usually mean the file was decoded with the wrong encoding.
REPLACEMENT_CHARACTERS = ("\ufffd", "\u25a1", "\u0001", "\u00a0")

UNIT_OF_MEASURE_VALUES = ("sq ft", "lin ft", "cu yd", "m", "sq m", "cu m", "each")

PRIMARY_RULES = (
    ColumnRule(name="ItemName", kind=RuleKind.MAX_LENGTH, required=True, max_length=120),
    ColumnRule(name="PurchaseUnit", kind=RuleKind.MAX_LENGTH, required=False, max_length=255),
    ColumnRule(name="UnitOfMeasure", kind=RuleKind.ENUM, required=True, allowed=UNIT_OF_MEASURE_VALUES),
    ColumnRule(name="CoverageRatePurchase", kind=RuleKind.NUMERIC, required=True),
    ColumnRule(name="CostType1", kind=RuleKind.MAX_LENGTH, required=True, max_length=50),
    ColumnRule(name="UnitCost1", kind=RuleKind.NUMERIC, required=True),
)

# Revised exports: enum and numeric columns are checked even when empty.
REVISED_RULES = (
    ColumnRule(name="ExportId", kind=RuleKind.REQUIRED, required=True),
    ColumnRule(name="ItemName", kind=RuleKind.REQUIRED, required=True),
    ColumnRule(name="UnitOfMeasure", kind=RuleKind.ENUM, required=True, allowed=UNIT_OF_MEASURE_VALUES),
    ColumnRule(name="CoverageRatePurchase", kind=RuleKind.NUMERIC, required=True),
    ColumnRule(name="CoverageRateMeasured", kind=RuleKind.NUMERIC, required=True),
)

REVISED_HEADERS = (
    "ExportId",
    "ItemName",
    "ItemDescription",
    "PurchaseUnit",
    "UnitOfMeasure",
    "CoverageRatePurchase",
    "CoverageRateMeasured",
    "FolderLevel1",
    "FolderLevel2",
    "FolderLevel3",
    "FolderLevel4",
    "FolderLevel5",
    "CostType1",
    "UnitCost1",
    "AccountingCode1",
    "CostType2",
    "UnitCost2",
    "AccountingCode2",
    "CostType3",
    "UnitCost3",
    "AccountingCode3",
    "CostType4",
    "UnitCost4",
    "AccountingCode4",
    "CostType5",
    "UnitCost5",
    "AccountingCode5",
    "ExternalId",
)
