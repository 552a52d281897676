"""Unit tests for sync_engine.schema_validator module."""

import pytest

from src.notion_api.errors import ObjectNotFoundError
from src.sync_engine.schema_validator import (
    REQUIRED_COLUMNS,
    SchemaCheck,
    SchemaValidator,
    required_columns,
)

from tests.fixtures import DATABASE_ID, FakeNotionAPI, database_payload


class TestRequiredColumns:

    def test_base_columns(self):
        assert REQUIRED_COLUMNS == ["Problem", "Difficulty", "URL", "Date Added", "Notes"]
        assert required_columns() == REQUIRED_COLUMNS

    def test_status_variant_adds_status(self):
        assert required_columns(include_status=True)[-1] == "Status"


class TestSchemaValidator:

    def test_complete_schema(self):
        check = SchemaValidator(FakeNotionAPI()).validate(DATABASE_ID)

        assert check.ok
        assert check.columns["Problem"] == "title"
        assert check.columns["URL"] == "url"

    def test_missing_columns_in_required_order(self):
        api = FakeNotionAPI(database=database_payload(columns=["Problem", "URL"]))

        check = SchemaValidator(api).validate(DATABASE_ID)

        assert not check.ok
        assert check.missing == ["Difficulty", "Date Added", "Notes"]

    def test_extra_columns_are_ignored(self):
        columns = REQUIRED_COLUMNS + ["Tags", "Company"]
        api = FakeNotionAPI(database=database_payload(columns=columns))

        assert SchemaValidator(api).validate(DATABASE_ID).ok

    def test_database_without_properties(self):
        api = FakeNotionAPI(database={"object": "database", "id": DATABASE_ID})

        check = SchemaValidator(api).validate(DATABASE_ID)

        assert check.missing == REQUIRED_COLUMNS

    def test_api_errors_propagate(self):
        with pytest.raises(ObjectNotFoundError):
            SchemaValidator(FakeNotionAPI()).validate("ffffffffffffffffffffffffffffffff")


def test_remediation_lists_each_missing_column():
    text = SchemaCheck(missing=["Notes", "URL"]).remediation()

    assert text.startswith("Database schema is broken. Missing properties:")
    assert "• Notes\n• URL" in text
    assert text.endswith("Please add these columns to your Notion database.")
