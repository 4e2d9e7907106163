"""Tests for the record transformer and URL helpers."""

from unittest.mock import MagicMock

import pytest

from rvscraper.config import STANDARDIZED_SCHEMA, VERIFY_MANUALLY_KEY
from rvscraper.errors import ImageConversionError, UnknownFormatTypeError
from rvscraper.page_scraper import ScrapedPage
from rvscraper.resolver import KeyResolver
from rvscraper.transformer import (
    RecordTransformer,
    build_name,
    floor_plan_base_name,
    get_last_url_segment,
    get_rv_type_from_url,
)

URL = "https://www.granddesignrv.com/travel-trailers/imagine/2400bh"


class TestGetRvTypeFromUrl:
    """Tests for get_rv_type_from_url."""

    @pytest.mark.parametrize("url, expected", [
        ("https://www.granddesignrv.com/travel-trailers/imagine", "Travel Trailer"),
        ("https://www.granddesignrv.com/fifth-wheels/solitude/310gk", "Fifth Wheel"),
        ("https://example.com/Fifth_Wheel/x", "Fifth Wheel"),
        ("https://example.com/traveltrailers/x", "Travel Trailer"),
        (
            "https://www.granddesignrv.com/toy-haulers/momentum-g-class-travel-trailers/21g",
            "Travel Trailer Toy Hauler",
        ),
        ("https://example.com/toy-haulers/fifth-wheel/x", "Fifth Wheel Toy Hauler"),
    ])
    def test_types(self, url, expected):
        assert get_rv_type_from_url(url) == expected

    def test_toy_hauler_alone_is_unknown(self):
        assert get_rv_type_from_url("https://www.granddesignrv.com/toy-haulers/momentum-m-class/336m") is None

    def test_no_type(self):
        assert get_rv_type_from_url("https://www.outdoorsrvmfg.com/creek-side-19mks/") is None

    def test_invalid_url_raises(self):
        with pytest.raises(ValueError):
            get_rv_type_from_url("not a url")


class TestGetLastUrlSegment:
    """Tests for get_last_url_segment."""

    def test_trailing_slash(self):
        assert get_last_url_segment("https://www.outdoorsrvmfg.com/creek-side/creek-side-21rbs/") == "creek-side-21rbs"

    def test_no_path(self):
        assert get_last_url_segment("https://www.outdoorsrvmfg.com/") is None

    def test_query_ignored(self):
        assert get_last_url_segment(f"{URL}?tab=specs") == "2400bh"


class TestNames:
    """Tests for build_name and floor_plan_base_name."""

    def test_name_joins_parts(self):
        record = {"Year": "2024", "Make": "Grand Design", "Model": "Imagine", "Trim": "2400BH"}
        assert build_name(record) == "2024 Grand Design Imagine 2400BH"

    def test_name_skips_missing_parts(self):
        assert build_name({"Year": 2024, "Make": "Outdoors RV", "Trim": "21RBS"}) == "2024 Outdoors RV 21RBS"

    def test_floor_plan_base_name(self):
        record = {"Model": "Imagine XLS", "Trim": "22MLE"}
        assert floor_plan_base_name(record, URL) == "Imagine_XLS__22MLE"

    def test_floor_plan_base_name_falls_back_to_url(self):
        assert floor_plan_base_name({}, URL) == "2400bh"


@pytest.fixture
def learned_mapping(mapping):
    mapping.key_mappings.update({
        "UVW": "Dry weight lbs",
        "GVWR": "Gvwr lbskgs",
        "Exterior Length": "Length ftin",
        "Exterior Width": "Width inmm",
        "Tire Size": "Tire code",
        "Awning Length": "Awning length ftm",
        "Shower": "Shower",
        "AC": "Air conditioning",
        "Refrigerator": "Refrigerator size",
        "Share": None,
    })
    return mapping


@pytest.fixture
def image_converter():
    return MagicMock(return_value="output/images/Imagine__2400BH-0.png")


@pytest.fixture
def transformer(store, synonyms, prompter, image_converter):
    resolver = KeyResolver(store, synonyms, prompter)
    return RecordTransformer(resolver, "output/images", image_converter=image_converter)


@pytest.fixture
def page():
    return ScrapedPage(
        url=URL,
        raw={
            "UVW": "4,915 lbs",
            "GVWR": "6,995 lbs",
            "Exterior Length": "28' 11\"",
            "Exterior Width": "8' 4\"",
            "Tire Size": "ST205/75R14D",
            "Awning Length": "8' 10'2\"",
            "Shower": "36\" x 24\"",
            "AC": "13,500 BTU",
            "Refrigerator": "Not available",
            "Share": "Facebook",
        },
        model="Imagine",
        trim="2400BH",
        image_url="https://www.granddesignrv.com/fp/2400bh.jpg",
    )


class TestTransform:
    """Tests for RecordTransformer.transform."""

    def test_full_record(self, transformer, page, learned_mapping, scripted_input):
        record = transformer.transform(page, learned_mapping, default_year="2024")

        assert record["Name"] == "2024 Grand Design Imagine 2400BH"
        assert record["URL"] == URL
        assert record["Year"] == 2024
        assert record["Make"] == "Grand Design"
        assert record["Type"] == "Travel Trailer"
        assert record["Dry weight lbs"] == 4915
        assert record["Gvwr lbskgs"] == 6995
        assert record["CCC"] == 2080
        assert record["Length ftin"] == "28' 11\""
        assert record["Width inmm"] == 100
        assert record["Rear tire diameter in"] == 26.2
        assert record["Rear wheel diameter in"] == 14
        assert record["Awning length ftm"] == "8' & 10' 2\""
        assert record["Shower"] is True
        assert record["Air conditioning"] == 13500
        assert record["Floor plan"] == "Imagine__2400BH-0"
        assert scripted_input.questions == []

    def test_every_key_in_schema(self, transformer, page, learned_mapping):
        record = transformer.transform(page, learned_mapping, default_year="2024")

        for key in record:
            assert key == VERIFY_MANUALLY_KEY or key in STANDARDIZED_SCHEMA

    def test_no_raw_keys_survive(self, transformer, page, learned_mapping):
        record = transformer.transform(page, learned_mapping, default_year="2024")

        for raw_key in page.raw:
            if raw_key not in STANDARDIZED_SCHEMA:
                assert raw_key not in record

    def test_discarded_key_never_materializes(self, transformer, page, learned_mapping):
        record = transformer.transform(page, learned_mapping, default_year="2024")

        assert "Share" not in record
        assert "null" not in record
        assert None not in record

    def test_name_matches_parts(self, transformer, page, learned_mapping):
        record = transformer.transform(page, learned_mapping, default_year="2024")

        parts = [record["Year"], record["Make"], record["Model"], record["Trim"]]
        assert record["Name"] == " ".join(str(part) for part in parts)

    def test_image_converter_called_with_base_name(self, transformer, page, learned_mapping, image_converter):
        transformer.transform(page, learned_mapping, default_year="2024")

        image_converter.assert_called_once_with(
            "https://www.granddesignrv.com/fp/2400bh.jpg", "Imagine__2400BH", "output/images"
        )

    def test_image_failure_is_not_fatal(self, transformer, page, learned_mapping, image_converter):
        image_converter.side_effect = ImageConversionError("Failed to fetch image")

        record = transformer.transform(page, learned_mapping, default_year="2024")

        assert record["Floor plan"] is None
        assert "Floor plan" in record[VERIFY_MANUALLY_KEY]
        assert record["Dry weight lbs"] == 4915

    def test_missing_image_url(self, transformer, page, learned_mapping, image_converter):
        page.image_url = None

        record = transformer.transform(page, learned_mapping, default_year="2024")

        image_converter.assert_not_called()
        assert record["Floor plan"] is None

    def test_verify_manually_lists_null_fields(self, transformer, page, learned_mapping):
        page.raw["Exterior Width"] = "wide"

        record = transformer.transform(page, learned_mapping, default_year="2024")

        assert record["Width inmm"] is None
        assert "Width inmm" in record[VERIFY_MANUALLY_KEY]
        assert "Dry weight lbs" not in record[VERIFY_MANUALLY_KEY]

    def test_selector_values_win(self, transformer, page, learned_mapping):
        page.year = "2025"
        page.type = "Travel Trailer Toy Hauler"
        page.make = "Grand Design RV"

        record = transformer.transform(page, learned_mapping, default_year="2024")

        assert record["Year"] == 2025
        assert record["Type"] == "Travel Trailer Toy Hauler"
        assert record["Make"] == "Grand Design RV"

    def test_trim_falls_back_to_url(self, transformer, page, learned_mapping):
        page.trim = None

        record = transformer.transform(page, learned_mapping, default_year="2024")

        assert record["Trim"] == "2400bh"

    def test_bad_tire_code_flags_tire_fields(self, transformer, page, learned_mapping):
        page.raw["Tire Size"] = "see dealer"

        record = transformer.transform(page, learned_mapping, default_year="2024")

        assert record["Rear tire diameter in"] is None
        assert "Rear tire diameter in" in record[VERIFY_MANUALLY_KEY]

    def test_bad_tire_code_keeps_scraped_diameter(self, transformer, page, learned_mapping):
        learned_mapping.key_mappings["Tire Dia"] = "Rear tire diameter in"
        page.raw["Tire Size"] = "Goodyear Endurance"
        page.raw["Tire Dia"] = "27.5"

        record = transformer.transform(page, learned_mapping, default_year="2024")

        assert record["Rear tire diameter in"] == 27.5
        assert record["Rear wheel diameter in"] is None

    def test_name_uses_formatted_year(self, transformer, page, learned_mapping):
        page.year = "2024 Model Year"

        record = transformer.transform(page, learned_mapping)

        assert record["Year"] == 2024
        assert record["Name"] == "2024 Grand Design Imagine 2400BH"

    def test_description_and_web_features(self, transformer, page, learned_mapping):
        page.description = "Spacious rear living."
        page.web_features = "Solar prep; Power awning"

        record = transformer.transform(page, learned_mapping, default_year="2024")

        assert record["Description"] == "Spacious rear living."
        assert record["Web features"] == "Solar prep; Power awning"

    def test_boolean_negative_phrase(self, transformer, page, learned_mapping):
        learned_mapping.key_mappings["Outside Shower"] = "Outside shower"
        page.raw["Outside Shower"] = "Not available"

        record = transformer.transform(page, learned_mapping, default_year="2024")

        assert record["Outside shower"] is False

    def test_unknown_format_type_propagates(self, transformer, page, learned_mapping, monkeypatch):
        monkeypatch.setitem(STANDARDIZED_SCHEMA, "Shower", "decibels")

        with pytest.raises(UnknownFormatTypeError):
            transformer.transform(page, learned_mapping, default_year="2024")

    def test_invalid_url_aborts_record(self, transformer, page, learned_mapping):
        page.url = "granddesignrv/travel-trailers"

        with pytest.raises(ValueError):
            transformer.transform(page, learned_mapping, default_year="2024")

    def test_unresolved_key_prompts_once(self, transformer, page, learned_mapping, scripted_input):
        page.raw["Tongue Weight"] = "650 lbs"
        scripted_input.add("Hitch weight lbs")

        first = transformer.transform(page, learned_mapping, default_year="2024")
        second = transformer.transform(page, learned_mapping, default_year="2024")

        assert first["Hitch weight lbs"] == second["Hitch weight lbs"] == 650
        assert len(scripted_input.questions) == 1
