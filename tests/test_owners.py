import logging

import pytest

from quebec_property_lookup import owners as owners_module
from quebec_property_lookup.owners import display_name, normalize


def _owner(last, first="", status="1", **extra):
    entry = {"RL0201Ax": last, "RL0201Bx": first, "RL0201Hx": status}
    entry.update(extra)
    return entry


@pytest.mark.parametrize(
    "raw",
    [None, 42, "VILLE DE KIRKLAND", True, [], {}, [None], [None, 3, "x"], [[1, 2]], ({"RL0201Ax": "A"},)],
)
def test_normalize_never_raises(raw):
    batch = normalize(raw, None)
    assert isinstance(batch.owners, list)
    assert batch.has_multiple_owners is (len(batch.owners) > 1)


def test_single_object_is_wrapped():
    batch = normalize(_owner("VILLE DE KIRKLAND", status="2"), "1")
    assert len(batch.owners) == 1
    owner = batch.owners[0]
    assert owner.id == "owner_1"
    assert owner.full_name == "VILLE DE KIRKLAND"
    assert owner.status_label == "Personne morale"
    assert not batch.has_multiple_owners
    assert not batch.has_two_owners


def test_order_is_preserved():
    batch = normalize([_owner("Zeller", "Anne"), _owner("Archambault", "Luc"), _owner("Morin", "Paul")])
    assert [o.last_name for o in batch.owners] == ["Zeller", "Archambault", "Morin"]
    assert batch.has_multiple_owners
    assert not batch.has_two_owners


def test_two_owners_flag():
    batch = normalize([_owner("A", "a"), _owner("B", "b")])
    assert batch.has_two_owners
    assert batch.has_multiple_owners


def test_status_based_name_composition():
    person = normalize(_owner("Tremblay", "Jean", "1")).owners[0]
    company = normalize(_owner("Tremblay", "Jean", "2")).owners[0]
    assert person.full_name == "Jean Tremblay"
    assert company.full_name == "Tremblay"
    assert display_name("1", "", "Tremblay") == "Tremblay"
    assert display_name("1", "Jean", "") == ""


def test_null_and_scalar_entries_are_skipped_without_renumbering():
    batch = normalize([_owner("A", "a"), None, 7, _owner("B", "b")])
    assert [o.id for o in batch.owners] == ["owner_1", "owner_4"]
    assert [o.last_name for o in batch.owners] == ["A", "B"]


def test_failing_entry_is_dropped(monkeypatch, caplog):
    real_build = owners_module.build_owner

    def flaky(entry, index):
        if entry.get("RL0201Ax") == "BOOM":
            raise ValueError("bad owner")
        return real_build(entry, index)

    monkeypatch.setattr(owners_module, "build_owner", flaky)
    with caplog.at_level(logging.WARNING, logger="quebec_property_lookup.owners"):
        batch = normalize([_owner("A"), _owner("BOOM"), _owner("C")])
    assert [o.last_name for o in batch.owners] == ["A", "C"]
    assert "bad owner" in caplog.text


def test_batch_failure_yields_empty_result(monkeypatch):
    def explode(_raw):
        raise RuntimeError("unexpected")

    monkeypatch.setattr(owners_module, "_collect", explode)
    batch = normalize([_owner("A")], "2")
    assert batch.owners == []
    assert batch.has_multiple_owners is False
    assert batch.condition_label == "Copropriété indivise"


def test_owner_fields_and_address():
    entry = _owner(
        "Tremblay",
        "Jean",
        "1",
        RL0201Gx="2015-03-02",
        RL0201Ix="45",
        RL0201Kx="RU",
        RL0201Mx="DU MOULIN",
        RL0201Dx="Kirkland",
        RL0201Ex="H9H 1A1",
    )
    owner = normalize(entry).owners[0]
    assert owner.registration_date == "2015-03-02"
    assert owner.registration_date_formatted == "02/03/2015"
    assert owner.address.street_name == "DU MOULIN"
    assert owner.address.country == ""
    assert owner.formatted_address == "45 Rue DU MOULIN, Kirkland QC H9H 1A1"


def test_owner_placeholder_values_become_empty():
    owner = normalize(_owner("Non disponible", "Jean", "1", RL0201Gx="Non disponible")).owners[0]
    assert owner.last_name == ""
    assert owner.full_name == ""
    assert owner.registration_date_formatted == ""


def test_condition_code():
    assert normalize(None, "1").has_special_condition is False
    special = normalize(None, "3")
    assert special.has_special_condition is True
    assert special.condition_code == "3"
    assert special.condition_label == "Emphytéose"
    assert normalize(None, "8").condition_label == "Code 8"
    assert normalize(None, None).condition_label == ""
