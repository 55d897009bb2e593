"""
Shared fixtures: a sample ruleset, workbook builder and an in-memory profile collection
"""
import copy
from pathlib import Path

import bson
import openpyxl
import pytest
from bson import ObjectId

HEADERS = [
    "Scheme Name",
    "Scheme Link",
    "Land Size",
    "Farmer Category",
    "Location State",
    "Irrigation Type",
    "Farmer Age",
    "Annual Income (Max)",
    "PM-KISAN Registration",
]

ROW_VALUES = [
    ["PM-KISAN", "https://pmkisan.gov.in", "<=2", "small,marginal", "", "", "18-60", "₹1,50,000", ""],
    ["Drip Irrigation Subsidy", "", "any", "", "Karnataka", "Drip", "", "", ""],
    ["Kisan Credit Card", "https://kcc.example.in", ">=1", "-", "", "", "18-75", "", "yes"],
    ["Organic Farming Mission", "", "", "", "", "", "", "", ""],
]

FARMER_INPUT = {
    "Land Size": "1.5",
    "Farmer Category": "Small",
    "Location State": "Karnataka State",
    "Irrigation Type": "drip",
    "Farmer Age": "34",
    "Annual Income (Max)": "₹90,000",
    "PM-KISAN Registration": "No",
}


@pytest.fixture
def scheme_rows():
    return [dict(zip(HEADERS, values)) for values in ROW_VALUES]


@pytest.fixture
def farmer_input():
    return dict(FARMER_INPUT)


def write_workbook(path: Path, rows):
    """Write rows (first one is the header row) to a fresh .xlsx file"""
    wb = openpyxl.Workbook()
    ws = wb.active
    for row in rows:
        ws.append(row)
    wb.save(path)
    return path


@pytest.fixture
def scheme_workbook(tmp_path):
    rows = [HEADERS] + [[value if value != "" else None for value in values] for values in ROW_VALUES]
    return write_workbook(tmp_path / "schemes.xlsx", rows)


class FakeInsertResult:
    def __init__(self, inserted_id):
        self.inserted_id = inserted_id


class FakeUpdateResult:
    def __init__(self, matched_count):
        self.matched_count = matched_count
        self.modified_count = matched_count


class FakeCursor:
    def __init__(self, docs):
        self._docs = docs

    def sort(self, keys):
        for key, direction in reversed(keys):
            self._docs.sort(key=lambda doc: doc.get(key), reverse=direction < 0)
        return self

    async def _iterate(self):
        for doc in self._docs:
            yield doc

    def __aiter__(self):
        return self._iterate()


class FakeCollection:
    """Just enough of a motor collection for the profile service"""

    def __init__(self):
        self.docs = []

    @staticmethod
    def _matches(doc, query):
        for key, expected in query.items():
            if isinstance(expected, dict) and "$ne" in expected:
                if doc.get(key) == expected["$ne"]:
                    return False
            elif doc.get(key) != expected:
                return False
        return True

    @staticmethod
    def _apply(doc, update):
        doc.update(update.get("$set", {}))
        for key, value in update.get("$push", {}).items():
            doc.setdefault(key, []).append(copy.deepcopy(value))

    async def find_one(self, query):
        for doc in self.docs:
            if self._matches(doc, query):
                return copy.deepcopy(doc)
        return None

    def find(self, query):
        return FakeCursor([copy.deepcopy(doc) for doc in self.docs if self._matches(doc, query)])

    async def insert_one(self, doc):
        doc.setdefault("_id", ObjectId())
        self.docs.append(copy.deepcopy(doc))
        return FakeInsertResult(doc["_id"])

    async def update_one(self, query, update):
        for doc in self.docs:
            if self._matches(doc, query):
                self._apply(doc, update)
                return FakeUpdateResult(1)
        return FakeUpdateResult(0)

    async def update_many(self, query, update):
        matched = 0
        for doc in self.docs:
            if self._matches(doc, query):
                self._apply(doc, update)
                matched += 1
        return FakeUpdateResult(matched)


class EncodingCollection(FakeCollection):
    """Encodes written documents to BSON the way the driver does"""

    async def insert_one(self, doc):
        bson.encode(doc)
        return await super().insert_one(doc)

    async def update_one(self, query, update):
        bson.encode(update)
        return await super().update_one(query, update)


@pytest.fixture
def profile_collection():
    return FakeCollection()
