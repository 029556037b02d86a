from types import SimpleNamespace

import pytest

from cab_fare.pricing import get_car_category, map_car_to_subtype


@pytest.mark.unit
class TestMapCarToSubtype:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("Etios", "Sedan"),
            ("Honda City", "Sedan"),
            ("Ertiga", "SUV"),
            ("Crysta", "Innova Crysta"),
            ("Innova Crysta", "Innova Crysta"),
            ("Innova", "Innova"),
            ("Tempo Traveller 12+1", "Tempo"),
            ("Urbenia 17 seater", "Urbenia"),
            ("Minibus 24 seater", "Minibus"),
        ],
    )
    def test_maps_by_name(self, name, expected):
        assert map_car_to_subtype(name) == expected

    def test_falls_back_to_description(self):
        assert map_car_to_subtype("Premium XL", "SUV – 7 seats") == "SUV"
        assert map_car_to_subtype("Executive", "Innova Crysta (7 seats)") == "Innova Crysta"

    def test_unknown_returns_none(self):
        assert map_car_to_subtype("Rickshaw", "three wheeler") is None
        assert map_car_to_subtype(None) is None


@pytest.mark.unit
class TestGetCarCategory:
    def test_none_gives_default(self):
        assert get_car_category(None) == "Sedan"
        assert get_car_category(None, default="SUV") == "SUV"

    def test_stored_subtype_wins(self):
        option = SimpleNamespace(name="Etios", description=None, car_subtype="SUV")
        assert get_car_category(option) == "SUV"

    def test_maps_name_when_subtype_missing(self):
        assert get_car_category({"name": "Marazzo", "car_subtype": None}) == "SUV"

    def test_unclassifiable_option_gives_default(self):
        assert get_car_category({"name": "Rickshaw"}) == "Sedan"
