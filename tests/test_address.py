from quebec_property_lookup.address import (
    AddressLines,
    compose,
    compose_mailing,
    format_street_suggestion,
    lot_number,
)
from quebec_property_lookup.settings import reset_settings_cache


def test_compose_canada_post_format():
    lines = compose("17200", "BO", "HYMUS", "Kirkland", "H9J 3Y8")
    assert lines.full_address == "17200 Boulevard HYMUS, Kirkland QC H9J 3Y8"
    assert lines.address_line1 == "17200 Boulevard HYMUS"
    assert lines.address_line2 == "Kirkland QC H9J 3Y8"


def test_compose_all_missing_is_empty():
    assert compose("", "", "", "", "") == AddressLines()
    assert compose(None, None, None, None, None) == AddressLines()


def test_municipality_alone_is_not_an_address():
    assert compose("", "", "", "Kirkland", "").full_address == ""


def test_compose_skips_missing_fragments_without_stray_spacing():
    lines = compose("17200", "", "HYMUS", "Kirkland", "")
    assert lines.address_line1 == "17200 HYMUS"
    assert lines.full_address == "17200 HYMUS, Kirkland QC"
    assert "  " not in lines.full_address

    lines = compose("", "", "", "Kirkland", "H9J 3Y8")
    assert lines.address_line1 == ""
    assert lines.full_address == "Kirkland QC H9J 3Y8"
    assert not lines.full_address.startswith(",")


def test_compose_province_from_settings(monkeypatch):
    monkeypatch.setenv("QPL_PROVINCE", "ON")
    reset_settings_cache()
    assert compose("1", "RU", "KING", "Ottawa", "K1A 0A1").address_line2 == "Ottawa ON K1A 0A1"


def test_compose_mailing_uses_whatever_exists():
    assert compose_mailing().full_address == ""
    assert compose_mailing(unstructured="17200 BOUL HYMUS").full_address == "17200 BOUL HYMUS"
    assert compose_mailing(municipality="Montréal").full_address == "Montréal QC"


def test_compose_mailing_prefers_structured_street():
    lines = compose_mailing(
        "45", "RU", "DU MOULIN", "Kirkland", "H9H 1A1", "", unstructured="45 RUE DU MOULIN", apartment="3"
    )
    assert lines.address_line1 == "45 Rue DU MOULIN, app. 3"
    assert lines.address_line2 == "Kirkland QC H9H 1A1"


def test_compose_mailing_foreign_owner():
    lines = compose_mailing(
        municipality="Miami", province="FL", unstructured="88 Palm Beach Road", country="USA"
    )
    assert lines.full_address == "88 Palm Beach Road, Miami FL, USA"
    assert compose_mailing(municipality="Gatineau", country="Canada").full_address == "Gatineau QC"


def test_format_street_suggestion():
    assert format_street_suggestion("HYMUS (boulevard)") == "Boulevard HYMUS"
    assert format_street_suggestion("DU MOULIN (RU)") == "Rue DU MOULIN"
    assert format_street_suggestion("HYMUS") == "HYMUS"
    assert format_street_suggestion(None) == ""


def test_lot_number():
    assert lot_number("7634", "73", "2340", "4") == "7634-73-2340-4"
    assert lot_number("7634", "", None, "") == "7634"
    assert lot_number("", "", "", "") == ""
