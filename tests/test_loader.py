"""Tests for dataset loading and the catalog."""

import pandas as pd
import pytest

from snowseeker.catalog import build_catalog, load_catalog
from snowseeker.loader import DEFAULT_DATASET, DatasetError, load_resorts
from snowseeker.models import Resort


FULL_RECORD = {
    "id": "chamonix",
    "name": "Chamonix",
    "country": "France",
    "description": "Under Mont Blanc.",
    "imageCredit": "Photo by K",
    "price": 3,
    "size": 2,
    "snowDepth": 200,
    "elevation": 3842,
    "runs": 80,
    "facilities": ["Accommodation", "Nightlife"],
}


class TestLoadJson:
    """Test decoding the JSON dataset."""

    def test_full_record(self, write_dataset):
        resorts = load_resorts(write_dataset([FULL_RECORD]))
        assert resorts == [Resort(
            id="chamonix", name="Chamonix", country="France", runs=80,
            description="Under Mont Blanc.", image_credit="Photo by K",
            price=3, size=2, snow_depth=200, elevation=3842,
            facilities=("Accommodation", "Nightlife"),
        )]

    def test_keeps_file_order(self, write_dataset):
        records = [
            {"id": "z", "name": "Zell am See", "country": "Austria", "runs": 40},
            {"id": "c", "name": "Chamonix", "country": "France", "runs": 80},
            {"id": "a", "name": "Aspen", "country": "United States", "runs": 336},
        ]
        assert [r.id for r in load_resorts(write_dataset(records))] == ["z", "c", "a"]

    def test_optional_fields_default(self, write_dataset):
        [r] = load_resorts(write_dataset([{"id": "x", "name": "X", "country": "Y", "runs": 3}]))
        assert r.price == 0 and r.facilities == () and r.description == ""

    def test_empty_list(self, write_dataset):
        assert load_resorts(write_dataset([])) == []

    def test_bundled_dataset_loads(self):
        resorts = load_resorts(DEFAULT_DATASET)
        assert len(resorts) > 0
        assert len({r.id for r in resorts}) == len(resorts)


class TestLoadErrors:
    """Decode failures are fatal and raise DatasetError."""

    def test_missing_file(self, tmp_path):
        with pytest.raises(DatasetError):
            load_resorts(tmp_path / "nope.json")

    def test_malformed_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("[{not json", encoding="utf-8")
        with pytest.raises(DatasetError):
            load_resorts(path)

    def test_missing_required_column(self, write_dataset):
        with pytest.raises(DatasetError, match="Missing required column"):
            load_resorts(write_dataset([{"id": "x", "name": "X", "runs": 3}]))

    def test_negative_runs(self, write_dataset):
        with pytest.raises(DatasetError, match="invalid runs"):
            load_resorts(write_dataset([{"id": "x", "name": "X", "country": "Y", "runs": -1}]))

    def test_non_numeric_runs(self, write_dataset):
        with pytest.raises(DatasetError, match="invalid runs"):
            load_resorts(write_dataset([{"id": "x", "name": "X", "country": "Y", "runs": "many"}]))

    def test_infinite_runs(self, write_dataset):
        with pytest.raises(DatasetError, match="invalid runs"):
            load_resorts(write_dataset([{"id": "x", "name": "X", "country": "Y", "runs": "inf"}]))

    def test_fractional_runs(self, write_dataset):
        with pytest.raises(DatasetError, match="invalid runs"):
            load_resorts(write_dataset([{"id": "x", "name": "X", "country": "Y", "runs": 3.7}]))

    def test_whole_float_runs_accepted(self, write_dataset):
        [r] = load_resorts(write_dataset([{"id": "x", "name": "X", "country": "Y", "runs": 3.0}]))
        assert r.runs == 3

    def test_list_in_numeric_field(self, write_dataset):
        rec = {"id": "x", "name": "X", "country": "Y", "runs": 3, "price": [1, 2]}
        with pytest.raises(DatasetError, match="invalid price"):
            load_resorts(write_dataset([rec]))

    def test_non_integer_price(self, write_dataset):
        rec = {"id": "x", "name": "X", "country": "Y", "runs": 3, "price": "cheap"}
        with pytest.raises(DatasetError, match="invalid price"):
            load_resorts(write_dataset([rec]))

    def test_missing_optional_value_in_one_record(self, write_dataset):
        records = [
            {"id": "x", "name": "X", "country": "Y", "runs": 3, "price": 2},
            {"id": "z", "name": "Z", "country": "Y", "runs": 4},
        ]
        assert [r.price for r in load_resorts(write_dataset(records))] == [2, 0]

    def test_duplicate_id(self, write_dataset):
        rec = {"id": "x", "name": "X", "country": "Y", "runs": 3}
        with pytest.raises(DatasetError, match="Duplicate"):
            load_resorts(write_dataset([rec, dict(rec, name="X2")]))

    def test_unsupported_format(self, tmp_path):
        path = tmp_path / "resorts.csv"
        path.write_text("id,name\n", encoding="utf-8")
        with pytest.raises(DatasetError, match="Unsupported"):
            load_resorts(path)

    def test_dataset_error_is_value_error(self):
        assert issubclass(DatasetError, ValueError)


class TestLoadExcel:
    """Test decoding a spreadsheet export."""

    def test_xlsx_with_facilities_cell(self, tmp_path):
        path = tmp_path / "resorts.xlsx"
        pd.DataFrame([
            {"Resort ID": "niseko", "Resort Name": "Niseko United", "Country": "Japan",
             "Runs": 61, "Snow Depth": 300, "Facilities": "Beginners, Nightlife"},
        ]).to_excel(path, index=False, engine="openpyxl")
        [r] = load_resorts(path)
        assert (r.id, r.name, r.country, r.runs) == ("niseko", "Niseko United", "Japan", 61)
        assert r.snow_depth == 300
        assert r.facilities == ("Beginners", "Nightlife")


class TestCatalog:
    """Test the catalog indices."""

    def test_indices(self, catalog):
        assert catalog.get("r5").name == "Chamonix"
        assert catalog.by_country["France"] == (4, 5)
        assert catalog.by_country["Canada"] == (0, 6)

    def test_unknown_id(self, catalog):
        with pytest.raises(KeyError):
            catalog.get("missing")

    def test_countries_sorted_case_insensitively(self, catalog):
        assert catalog.countries() == ["Canada", "canada", "France", "Sweden", "united states"]

    def test_len_and_iter(self, catalog, mixed_resorts):
        assert len(catalog) == len(mixed_resorts)
        assert list(catalog) == mixed_resorts

    def test_indices_are_read_only(self, catalog):
        with pytest.raises(TypeError):
            catalog.by_id["new"] = catalog.get("r1")
        with pytest.raises(TypeError):
            catalog.by_country["France"] = ()
        with pytest.raises(AttributeError):
            catalog.by_country["France"].append(0)

    def test_duplicate_ids_rejected(self, mixed_resorts):
        with pytest.raises(ValueError):
            build_catalog(mixed_resorts + [mixed_resorts[0]])

    def test_load_catalog(self, write_dataset):
        cat = load_catalog(write_dataset([FULL_RECORD]))
        assert cat.resorts[0].id == "chamonix"
