from types import MappingProxyType

import pytest

from quebec_property_lookup.codes import (
    TABLES,
    has_special_condition,
    is_natural_person,
    table,
    translate,
)


def test_street_types_are_case_insensitive():
    assert translate("street_type", "BO") == "Boulevard"
    assert translate("street_type", "bo") == "Boulevard"
    assert translate("street_type", " ru ") == "Rue"
    assert translate("street_type", "PROM") == "Promenade"


def test_unknown_street_type_passes_through():
    assert translate("street_type", "XYZ") == "XYZ"


def test_owner_status_labels():
    assert translate("owner_status", "1") == "Personne physique"
    assert translate("owner_status", "2") == "Personne morale"
    assert translate("owner_status", "3") == "Gouvernement"
    assert translate("owner_status", 2) == "Personne morale"


def test_unknown_code_falls_back_to_code_label():
    assert translate("owner_status", "9") == "Code 9"
    assert translate("zoning", "Q") == "Code Q"
    assert translate("exemption_type", "X") == "Code X"


def test_optional_tables_fall_back_to_blank():
    assert translate("construction_type", "ZZ") == ""
    assert translate("construction_type", "F") == ""
    assert translate("physical_link", "9") == ""
    assert translate("physical_link", "2") == "Jumelé"


def test_exact_match_tables_do_not_fold_case():
    assert translate("zoning", "R") == "Résidentiel"
    assert translate("zoning", "r") == "Code r"


def test_empty_code_is_empty_label():
    for name in TABLES:
        assert translate(name, "") == ""
        assert translate(name, None) == ""


def test_unknown_table_is_a_programming_error():
    with pytest.raises(KeyError):
        translate("no_such_table", "1")


def test_tables_are_read_only():
    assert isinstance(table("street_type").labels, MappingProxyType)
    with pytest.raises(TypeError):
        table("street_type").labels["ZZ"] = "Nope"


def test_natural_person_and_special_condition():
    assert is_natural_person("1")
    assert not is_natural_person("2")
    assert not is_natural_person("")
    assert not has_special_condition("1")
    assert not has_special_condition("")
    assert has_special_condition("2")
    assert translate("registration_condition", "1") == "Aucune condition particulière"
