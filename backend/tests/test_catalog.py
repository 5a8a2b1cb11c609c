"""
States API Backend — Catalog Unit Tests
========================================

What:  Tests for the reference catalog: snapshot loading, case-insensitive
       lookup, and the contiguity filter.

What we test:
    ✅ Every code resolves in upper and lower case
    ✅ Unknown codes raise StateNotFoundError
    ✅ contig=True / False / None partition the catalog
    ✅ Snapshot loading from the bundled file and from custom files
    ✅ Malformed snapshots are rejected
"""

import json

import pytest

from states_api.exceptions import NotFoundError, StateNotFoundError
from states_api.services.catalog import (
    NON_CONTIGUOUS_CODES,
    Catalog,
    load_catalog,
    normalize_code,
)


def _raw(code="TX", **overrides):
    raw = {
        "code": code,
        "state": "Texas",
        "capital_city": "Austin",
        "nickname": "Lone Star State",
        "admission_date": "1845-12-29",
        "population": 29145505,
    }
    raw.update(overrides)
    return raw


class TestLookup:

    def test_bundled_snapshot_has_fifty_states(self, catalog):
        assert len(catalog) == 50

    def test_every_code_matches_case_insensitively(self, catalog):
        for code in catalog.codes:
            upper = catalog.lookup(code)
            lower = catalog.lookup(code.lower())
            assert upper is lower
            assert upper.state_code == code

    def test_ca_and_CA_return_same_record(self, catalog):
        assert catalog.lookup("ca") == catalog.lookup("CA")
        assert catalog.lookup("cA").name == "California"

    def test_surrounding_whitespace_is_ignored(self, catalog):
        assert catalog.lookup(" tx ").state_code == "TX"

    @pytest.mark.parametrize("code", ["ZZ", "", "TEX", "1", "D.C."])
    def test_unknown_code_raises(self, catalog, code):
        with pytest.raises(StateNotFoundError, match="Invalid state abbreviation"):
            catalog.lookup(code)

    def test_state_not_found_is_a_not_found_error(self, catalog):
        with pytest.raises(NotFoundError):
            catalog.lookup("XX")

    def test_contains(self, catalog):
        assert "ny" in catalog
        assert "NY" in catalog
        assert "QQ" not in catalog
        assert 42 not in catalog

    def test_record_fields(self, catalog):
        texas = catalog.lookup("TX")
        assert texas.name == "Texas"
        assert texas.capital == "Austin"
        assert texas.nickname == "Lone Star State"
        assert texas.population == 29145505
        assert texas.admission_date.isoformat() == "1845-12-29"
        assert texas.is_contiguous is True

    def test_records_are_immutable(self, catalog):
        texas = catalog.lookup("TX")
        with pytest.raises(Exception):
            texas.population = 0


class TestContiguityFilter:

    def test_non_contiguous_codes_are_alaska_and_hawaii(self, catalog):
        assert NON_CONTIGUOUS_CODES == {"AK", "HI"}
        assert catalog.lookup("AK").is_contiguous is False
        assert catalog.lookup("HI").is_contiguous is False

    def test_contig_true_excludes_exactly_two(self, catalog):
        codes = {r.state_code for r in catalog.list(contig=True)}
        assert len(codes) == 48
        assert codes.isdisjoint({"AK", "HI"})

    def test_contig_false_returns_exactly_two(self, catalog):
        codes = {r.state_code for r in catalog.list(contig=False)}
        assert codes == {"AK", "HI"}

    def test_filters_partition_the_catalog(self, catalog):
        everything = {r.state_code for r in catalog.list()}
        contiguous = {r.state_code for r in catalog.list(contig=True)}
        detached = {r.state_code for r in catalog.list(contig=False)}
        assert contiguous | detached == everything
        assert contiguous & detached == set()
        assert everything == set(catalog.codes)

    def test_list_preserves_snapshot_order(self, catalog):
        codes = [r.state_code for r in catalog.list()]
        assert codes[0] == "AL"
        assert codes[-1] == "WY"
        assert codes == list(catalog.codes)


class TestCatalogConstruction:

    def test_from_records_normalizes_codes(self):
        catalog = Catalog.from_records([_raw(code="tx")])
        assert catalog.codes == ("TX",)

    def test_duplicate_codes_rejected(self):
        with pytest.raises(ValueError, match="Duplicate"):
            Catalog.from_records([_raw(), _raw(code="tx")])

    def test_negative_population_rejected(self):
        with pytest.raises(ValueError):
            Catalog.from_records([_raw(population=-1)])

    def test_normalize_code(self):
        assert normalize_code(" ny") == "NY"
        assert normalize_code(None) == ""


class TestLoadCatalog:

    @pytest.mark.asyncio
    async def test_loads_bundled_snapshot(self):
        catalog = await load_catalog()
        assert len(catalog) == 50
        assert catalog.lookup("hi").capital == "Honolulu"

    @pytest.mark.asyncio
    async def test_loads_custom_snapshot(self, tmp_path):
        snapshot = tmp_path / "states.json"
        snapshot.write_text(json.dumps([_raw(), _raw(code="AK", state="Alaska")]))

        catalog = await load_catalog(str(snapshot))

        assert catalog.codes == ("TX", "AK")
        assert catalog.lookup("AK").is_contiguous is False

    @pytest.mark.asyncio
    async def test_non_array_snapshot_rejected(self, tmp_path):
        snapshot = tmp_path / "states.json"
        snapshot.write_text(json.dumps({"TX": _raw()}))

        with pytest.raises(ValueError, match="JSON array"):
            await load_catalog(str(snapshot))

    @pytest.mark.asyncio
    async def test_missing_field_rejected(self, tmp_path):
        entry = _raw()
        del entry["capital_city"]
        snapshot = tmp_path / "states.json"
        snapshot.write_text(json.dumps([entry]))

        with pytest.raises(ValueError, match="capital_city"):
            await load_catalog(str(snapshot))

    @pytest.mark.asyncio
    async def test_missing_file_raises_os_error(self, tmp_path):
        with pytest.raises(OSError):
            await load_catalog(str(tmp_path / "missing.json"))
