FIELD_LABELS: dict[str, str] = {
    "document_type": "Document Type",
    "full_name": "Full Name",
    "national_id": "National ID",
    "passport_number": "Passport No.",
    "phone_number": "Phone Number",
    "nationality": "Nationality",
    "date_of_birth": "Date of Birth",
    "place_of_birth": "Place of Birth",
    "gender": "Gender",
    "issue_date": "Issue Date",
    "expiry_date": "Expiry Date",
    "blood_group": "Blood Group",
    "mrz": "MRZ",
    "id_front_image": "ID Front Image",
    "id_back_image": "ID Back Image",
    "passport_image": "Passport Image",
}

# Order used by duplicate diffs and record summaries.
DISPLAY_ORDER: tuple[str, ...] = (
    "document_type",
    "full_name",
    "national_id",
    "passport_number",
    "phone_number",
    "nationality",
    "date_of_birth",
    "place_of_birth",
    "gender",
    "issue_date",
    "expiry_date",
    "blood_group",
    "mrz",
)


def has_value(value: str | None) -> bool:
    """Missing and empty values both count as no value."""
    return bool(value)


def format_value(field: str, value: str | None) -> str:
    """Human-readable form of a stored value; '' when there is none."""
    if not value:
        return ""
    if field == "document_type":
        return value.replace("_", " ").title()
    return value
