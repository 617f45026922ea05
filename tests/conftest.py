import pytest

from entity_base import EntityBase, required, satisfies
from entity_base.config import manager as config_manager


class Car(EntityBase):
    default_attributes = {"name": "", "year": 0, "price": 0}


class Company(EntityBase):
    default_attributes = {"name": ""}


class Person(EntityBase):
    default_attributes = {
        "name": "",
        "age": 20,
        "company": None,
        "cars": [],
    }

    belongs_to = {"company": Company}
    has_many = {"cars": Car}

    validates = {
        "name": [required()],
        "company": [
            satisfies(
                lambda value, entity: not value or entity.get("age") >= 18,
                "only allowed for people 18+",
            )
        ],
    }


@pytest.fixture(autouse=True)
def fresh_config(monkeypatch):
    """Isolate tests from each other's configuration overrides."""
    monkeypatch.setattr(config_manager, "_manager", None)


@pytest.fixture
def car_type():
    return Car


@pytest.fixture
def company_type():
    return Company


@pytest.fixture
def person_type():
    return Person


@pytest.fixture
def person_with_cars():
    return Person({
        "name": "João",
        "company": {"name": "Acme"},
        "cars": [
            {"name": "Civic", "price": 90000},
            {"name": "Gol", "price": 35000},
        ],
    })
