"""Tests for the field-by-field duplicate diff."""

from kyc_extractor.records.diff import diff
from kyc_extractor.records.models import KycRecord


def _rows_by_field(existing: KycRecord, new: KycRecord) -> dict:
    return {row.field: row for row in diff(existing, new)}


class TestDiff:
    def test_marks_changed_and_unchanged_rows(self) -> None:
        existing = KycRecord(national_id="123", full_name="Ali")
        new = KycRecord(national_id="123", full_name="Ali Hassan")
        rows = _rows_by_field(existing, new)
        assert rows["full_name"].changed is True
        assert rows["full_name"].existing_value == "Ali"
        assert rows["full_name"].new_value == "Ali Hassan"
        assert rows["national_id"].changed is False

    def test_omits_fields_empty_on_both_sides(self) -> None:
        existing = KycRecord(national_id="123", full_name="Ali")
        new = KycRecord(national_id="123", full_name="Ali Hassan")
        assert "mrz" not in _rows_by_field(existing, new)

    def test_empty_string_counts_as_missing(self) -> None:
        existing = KycRecord(national_id="123", gender="")
        new = KycRecord(national_id="123", gender=None)
        rows = _rows_by_field(existing, new)
        assert "gender" not in rows

    def test_value_removed_is_a_change(self) -> None:
        existing = KycRecord(national_id="123", blood_group="O+")
        new = KycRecord(national_id="123")
        row = _rows_by_field(existing, new)["blood_group"]
        assert row.changed is True
        assert row.new_value is None

    def test_rows_follow_display_order_with_labels(self) -> None:
        existing = KycRecord(mrz="P<YEM", full_name="Ali", document_type="passport")
        rows = diff(existing, existing)
        assert [r.field for r in rows] == ["document_type", "full_name", "mrz"]
        assert [r.label for r in rows] == ["Document Type", "Full Name", "MRZ"]

    def test_ignores_image_fields(self) -> None:
        existing = KycRecord(national_id="1", id_front_image="data:image/png;base64,AA==")
        new = KycRecord(national_id="1")
        assert "id_front_image" not in _rows_by_field(existing, new)
