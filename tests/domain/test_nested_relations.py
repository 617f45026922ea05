import pytest

from entity_base import (
    InvalidRelationKeyError,
    UndeclaredRelationError,
    resolve_belongs_to,
    resolve_has_many,
)


def test_resolve_belongs_to_falsy_values(company_type):
    assert resolve_belongs_to(company_type, None) is None
    assert resolve_belongs_to(company_type, "") is None
    assert resolve_belongs_to(company_type, False) is None


def test_resolve_belongs_to_empty_mapping_builds_default(company_type):
    company = resolve_belongs_to(company_type, {})

    assert isinstance(company, company_type)
    assert company.name == ""


def test_resolve_belongs_to_keeps_instances(company_type):
    company = company_type({"name": "Acme"})

    assert resolve_belongs_to(company_type, company) is company


def test_resolve_belongs_to_builds_instance(company_type):
    company = resolve_belongs_to(company_type, {"name": "Acme"})

    assert isinstance(company, company_type)
    assert company.name == "Acme"


def test_resolve_has_many_from_list(car_type):
    collection = resolve_has_many(car_type, [{"name": "Civic"}, {"name": "Gol"}])

    assert [car.name for car in collection.values()] == ["Civic", "Gol"]
    for key, car in collection.items():
        assert key == car.id_or_token


def test_resolve_has_many_from_mapping_ignores_keys(car_type):
    collection = resolve_has_many(car_type, {"a": {"name": "Civic", "id": 1}, "b": {"name": "Gol", "id": 2}})

    assert list(collection) == [1, 2]


def test_resolve_has_many_from_existing_collection(car_type):
    civic = car_type({"name": "Civic"})

    collection = resolve_has_many(car_type, {civic.id_or_token: civic})

    assert collection[civic.id_or_token] is civic


def test_resolve_has_many_falsy_values(car_type):
    assert resolve_has_many(car_type, None) == {}
    assert resolve_has_many(car_type, []) == {}


def test_resolve_has_many_builds_default_children(car_type, person_type):
    collection = resolve_has_many(car_type, [{}, None, {"name": "Gol"}])

    assert [car.name for car in collection.values()] == ["", "Gol"]
    assert len(person_type({"cars": [{}]}).get("cars")) == 1


def test_resolve_has_many_last_identity_wins(car_type):
    collection = resolve_has_many(car_type, [{"id": 7, "name": "Old"}, {"id": 7, "name": "New"}])

    assert len(collection) == 1
    assert collection[7].name == "New"


def test_add_nested(person_type, car_type):
    # Arrange
    person = person_type()

    # Act
    updated, car = person.add_nested("cars", {"name": "Civic"})

    # Assert
    assert len(updated.get("cars")) == 1
    assert isinstance(updated.array("cars")[0], car_type)
    assert car.name == "Civic"
    assert updated.get("cars")[car.id_or_token] is car
    assert person.get("cars") == {}


def test_add_nested_keeps_existing_children(person_with_cars):
    updated, car = person_with_cars.add_nested("cars", {"name": "Uno"})

    assert [c.name for c in updated.array("cars")] == ["Civic", "Gol", "Uno"]
    for key in person_with_cars.get("cars"):
        assert updated.get("cars")[key] is person_with_cars.get("cars")[key]
    assert updated.get("company") is person_with_cars.get("company")


def test_add_nested_with_blank_attributes(person_type):
    updated, car = person_type().add_nested("cars")

    assert car.name == ""
    assert len(updated.get("cars")) == 1


def test_add_nested_undeclared_relation(person_type):
    with pytest.raises(UndeclaredRelationError):
        person_type().add_nested("boats", {"name": "Titanic"})

    with pytest.raises(UndeclaredRelationError):
        person_type().add_nested("company", {"name": "Acme"})


def test_update_nested(person_with_cars):
    key, sibling_key = list(person_with_cars.get("cars"))

    updated, car = person_with_cars.update_nested("cars", key, {"name": "Civic Si"})

    assert car.name == "Civic Si"
    assert updated.get("cars")[key] is car
    assert person_with_cars.get("cars")[key].name == "Civic"
    assert updated.get("cars")[sibling_key] is person_with_cars.get("cars")[sibling_key]
    assert updated.get("company") is person_with_cars.get("company")


def test_update_nested_keeps_key_when_identity_changes(person_with_cars):
    key = list(person_with_cars.get("cars"))[0]

    updated, car = person_with_cars.update_nested("cars", key, {"id": 99})

    assert car.id_or_token == 99
    assert list(updated.get("cars"))[0] == key
    assert updated.get("cars")[key] is car


def test_update_nested_blank_patch_is_noop(person_with_cars):
    key = list(person_with_cars.get("cars"))[0]

    updated, car = person_with_cars.update_nested("cars", key, {})

    assert updated is person_with_cars
    assert car is person_with_cars.get("cars")[key]


@pytest.mark.parametrize("patch", [{"name": "X"}, {}, None])
def test_update_nested_invalid_key(person_with_cars, patch):
    with pytest.raises(InvalidRelationKeyError) as exc_info:
        person_with_cars.update_nested("cars", "invalid", patch)

    assert exc_info.value.relation_name == "cars"
    assert exc_info.value.key == "invalid"


def test_invalid_relation_key_is_a_key_error(person_type):
    with pytest.raises(KeyError):
        person_type().update_nested("cars", "invalid", {"name": "X"})


def test_update_many_nested_selected_keys(person_with_cars):
    # Arrange
    civic_key, gol_key = list(person_with_cars.get("cars"))
    gol = person_with_cars.get("cars")[gol_key]

    # Act
    updated, changed = person_with_cars.update_many_nested("cars", {"price": 99}, [civic_key])

    # Assert
    assert len(changed) == 1
    assert updated.get("cars")[civic_key].price == 99
    assert updated.get("cars")[gol_key] is gol
    assert updated.get("cars")[gol_key].price == 35000


def test_update_many_nested_all_children(person_with_cars):
    updated, changed = person_with_cars.update_many_nested("cars", {"year": 2024})

    assert [car.year for car in changed] == [2024, 2024]
    assert [car.name for car in updated.array("cars")] == ["Civic", "Gol"]
    assert list(updated.get("cars")) == list(person_with_cars.get("cars"))


def test_update_many_nested_blank_patch_is_noop(person_with_cars):
    updated, changed = person_with_cars.update_many_nested("cars", {})

    assert updated is person_with_cars
    assert changed == []


def test_update_many_nested_undeclared_relation(person_with_cars):
    with pytest.raises(UndeclaredRelationError):
        person_with_cars.update_many_nested("boats", {"name": "X"})


def test_update_many_nested_keeps_keys_after_identity_change(person_with_cars):
    # Arrange
    civic_key, gol_key = list(person_with_cars.get("cars"))
    renumbered, _ = person_with_cars.update_nested("cars", civic_key, {"id": 99})

    # Act
    updated, changed = renumbered.update_many_nested("cars", {"price": 1}, [99])

    # Assert
    assert [car.id_or_token for car in changed] == [99]
    assert list(updated.get("cars")) == [civic_key, gol_key]
    assert updated.get("cars")[civic_key].price == 1
    assert updated.get("cars")[gol_key] is person_with_cars.get("cars")[gol_key]
