"""Tests for the domain mapping store and synonym dictionary."""

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from rvscraper.config import SELECTOR_FIELDS, STANDARDIZED_SCHEMA, STRATEGY_FIELDS
from rvscraper.errors import MappingPersistError
from rvscraper.store import DomainMapping, DomainMappingStore, SynonymDictionary

DATA_DIR = Path(__file__).resolve().parent.parent / "data"


class TestDomainMapping:
    """Tests for DomainMapping (de)serialization."""

    def test_reads_camel_case(self):
        mapping = DomainMapping.model_validate({
            "Make": "Grand Design",
            "imageSelector": "#floorplan-overhead > p > img",
            "keyMappings": {"UVW": "Dry weight lbs", "Share": None},
        })

        assert mapping.make == "Grand Design"
        assert mapping.image_selector == "#floorplan-overhead > p > img"
        assert mapping.knows("Share")
        assert mapping.key_mappings["Share"] is None

    def test_dumps_camel_case(self):
        data = DomainMapping(Make="Outdoors RV").model_dump(by_alias=True)

        assert data["Make"] == "Outdoors RV"
        assert data["keyMappings"] == {}
        for field in SELECTOR_FIELDS + STRATEGY_FIELDS:
            assert field in data


class TestPersistAndLoad:
    """Tests for persist() and load()."""

    def test_round_trip(self, tmp_path):
        path = tmp_path / "domain-mappings.json"
        store = DomainMappingStore(path, {"granddesignrv": DomainMapping(Make="Grand Design")})
        store.get("granddesignrv").remember("UVW", "Dry weight lbs")
        store.get("granddesignrv").remember("Share", None)

        store.persist()
        loaded = DomainMappingStore.load(path)

        mapping = loaded.get("granddesignrv")
        assert mapping.make == "Grand Design"
        assert mapping.key_mappings == {"UVW": "Dry weight lbs", "Share": None}

    def test_hand_added_keys_kept(self, tmp_path):
        path = tmp_path / "domain-mappings.json"
        path.write_text(json.dumps({
            "granddesignrv": {"Make": "Grand Design", "notes": "specs behind the Specs tab", "keyMappings": {}},
        }), encoding="utf-8")

        DomainMappingStore.load(path).persist()

        saved = json.loads(path.read_text(encoding="utf-8"))
        assert saved["granddesignrv"]["notes"] == "specs behind the Specs tab"

    def test_file_is_pretty_and_sorted(self, tmp_path):
        path = tmp_path / "domain-mappings.json"
        store = DomainMappingStore(path, {
            "zeta": DomainMapping(Make="Z"),
            "alpha": DomainMapping(Make="A"),
        })

        store.persist()
        text = path.read_text(encoding="utf-8")

        assert text.index('"alpha"') < text.index('"zeta"')
        assert '\n  "alpha": {' in text
        assert json.loads(text)["alpha"]["Make"] == "A"

    def test_persist_creates_parent_folder(self, tmp_path):
        path = tmp_path / "data" / "domain-mappings.json"

        DomainMappingStore(path).persist()

        assert json.loads(path.read_text(encoding="utf-8")) == {}

    def test_no_temp_file_left_behind(self, tmp_path):
        path = tmp_path / "domain-mappings.json"

        DomainMappingStore(path).persist()

        assert [p.name for p in tmp_path.iterdir()] == ["domain-mappings.json"]

    def test_missing_file_loads_empty(self, tmp_path):
        store = DomainMappingStore.load(tmp_path / "missing.json")

        assert store.mappings == {}
        assert "granddesignrv" not in store

    def test_write_failure_raises(self, tmp_path):
        store = DomainMappingStore(tmp_path / "domain-mappings.json")

        with patch("rvscraper.store.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(MappingPersistError, match="disk full"):
                store.persist()

    def test_seed_file_loads(self):
        store = DomainMappingStore.load(DATA_DIR / "domain-mappings.json")

        assert store.get("granddesignrv").make == "Grand Design"
        assert store.get("outdoorsrvmfg").key_mappings["Net Carrying Capacity"] == "CCC"


class TestGetOrCreateMapping:
    """Tests for get_or_create_mapping."""

    def test_existing_domain_does_not_prompt(self, store, mapping, prompter, scripted_input):
        assert store.get_or_create_mapping("granddesignrv", prompter) is mapping
        assert scripted_input.questions == []

    def test_new_domain_prompts_in_order(self, store, prompter, scripted_input):
        answers = ["Outdoors RV"] + ["null"] * len(SELECTOR_FIELDS) + ["null", "list_items"]
        answers[SELECTOR_FIELDS.index("rowSelector") + 1] = "tbody tr"
        scripted_input.add(*answers)

        mapping = store.get_or_create_mapping("outdoorsrvmfg", prompter)

        assert mapping.make == "Outdoors RV"
        assert mapping.row_selector == "tbody tr"
        assert mapping.image_selector is None
        assert mapping.web_features_strategy == "list_items"
        assert mapping.key_mappings == {}
        assert store.get("outdoorsrvmfg") is mapping
        assert store.persist_count == 1
        assert "Make" in scripted_input.questions[0]
        assert "makeSelector" in scripted_input.questions[1]

    def test_invalid_selector_reprompted(self, store, prompter, scripted_input):
        scripted_input.add("Outdoors RV", "div >> [", "h1.make")
        scripted_input.add(*(["null"] * (len(SELECTOR_FIELDS) - 1 + len(STRATEGY_FIELDS))))

        mapping = store.get_or_create_mapping("outdoorsrvmfg", prompter)

        assert mapping.make_selector == "h1.make"


class TestBackup:
    """Tests for backup()."""

    def test_copies_mapping_and_synonym_files(self, tmp_path):
        mappings_file = tmp_path / "domain-mappings.json"
        synonyms_file = tmp_path / "synonyms.json"
        synonyms_file.write_text("{}", encoding="utf-8")
        store = DomainMappingStore(mappings_file)
        store.persist()

        store.backup(tmp_path / "backups", extra_files=[synonyms_file])

        assert (tmp_path / "backups" / "domain-mappings.json").exists()
        assert (tmp_path / "backups" / "synonyms.json").exists()

    def test_missing_files_skipped(self, tmp_path):
        store = DomainMappingStore(tmp_path / "missing.json")

        store.backup(tmp_path / "backups", extra_files=[None])

        assert not (tmp_path / "backups" / "missing.json").exists()


class TestSynonymDictionary:
    """Tests for SynonymDictionary."""

    def test_load(self, tmp_path):
        path = tmp_path / "synonyms.json"
        path.write_text(json.dumps({"UVW": "Dry weight lbs", "Share": None}), encoding="utf-8")

        synonyms = SynonymDictionary.load(path)

        assert "UVW" in synonyms
        assert "Share" in synonyms
        assert synonyms.candidate("Share") is None
        assert synonyms.path == path
        assert len(synonyms) == 2

    def test_seed_file_covers_schema(self):
        synonyms = SynonymDictionary.load(DATA_DIR / "synonyms.json")

        for field in STANDARDIZED_SCHEMA:
            assert synonyms.candidate(field) == field
        for raw_key in synonyms.keys():
            candidate = synonyms.candidate(raw_key)
            assert candidate is None or candidate in STANDARDIZED_SCHEMA
