import pytest

from reportdash.names import normalize_company_name


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("AL NAHDI MEDICAL COMPANY", "Nahdi Medical Company"),
        ("NAHDI MEDICAL COMPANY", "Nahdi Medical Company"),
        ("nahdi medical company", "Nahdi Medical Company"),
        ("NaHdI mEdIcAl CoMpAnY", "Nahdi Medical Company"),
        ("Almarai Co.", "Almarai Company"),
        ("Jarir Marketing Ltd", "Jarir Marketing Company"),
        ("Acme  Holdings   INC.", "Acme Holdings Company"),
        ("  al rajhi bank  ", "Rajhi Bank"),
    ],
)
def test_normalize_company_name(raw, expected):
    assert normalize_company_name(raw) == expected


@pytest.mark.parametrize("raw", [None, "", "   "])
def test_normalize_company_name_defaults(raw):
    assert normalize_company_name(raw) == "Company"


@pytest.mark.parametrize(
    "raw",
    ["AL NAHDI MEDICAL COMPANY", "Almarai Co.", "Saudi Aramco", "Company", "x", "Acme INC."],
)
def test_normalize_company_name_is_idempotent(raw):
    once = normalize_company_name(raw)
    assert normalize_company_name(once) == once
