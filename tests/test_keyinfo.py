"""Unit tests for OEM report parsing and edition mapping."""

import pytest

from edition_picker.catalog import Catalog
from edition_picker.lib.keyinfo import UNKNOWN, DetectionResult, map_edition, parse_key_info


def test_pro_education_with_key():
    r = parse_key_info(
        [
            "OEM Edition: Windows 10 Pro Education",
            "OEM Key: ABCDE-12345-FGHIJ-67890-KLMNO",
        ]
    )
    assert r == DetectionResult(
        edition_short_code="proedu",
        edition_display_name="Pro Education",
        oem_product_key="ABCDE-12345-FGHIJ-67890-KLMNO",
        enabled=True,
    )


def test_core_maps_to_home():
    r = parse_key_info(["OEM Edition: Windows 10 Core"])
    assert r == DetectionResult(
        edition_short_code="home",
        edition_display_name="Home",
        oem_product_key=None,
        enabled=True,
    )


def test_empty_input_is_unknown():
    assert parse_key_info([]) == DetectionResult(
        edition_short_code=UNKNOWN,
        edition_display_name=UNKNOWN,
        oem_product_key=None,
        enabled=False,
    )


@pytest.mark.parametrize(
    "text",
    ["Windows 10 Core", "CoreSingleLanguage", "Windows 11 Core Pro"],
)
def test_core_wins_over_everything(text):
    assert map_edition(text) == ("Home", "home")


@pytest.mark.parametrize(
    "text,code",
    [
        ("Windows 10 Pro Education", "proedu"),
        ("Windows 11 Pro Education N", "proedu"),
        ("Windows 10 Pro for Workstations", "prows"),
        ("Windows 10 Pro", "pro"),
        ("Windows 10 Enterprise", "ent"),
        ("Windows 10 Education", "edu"),
    ],
)
def test_mapping_priority(text, code):
    assert map_edition(text)[1] == code


def test_matching_is_case_sensitive():
    assert map_edition("windows 10 pro") is None
    assert map_edition("Windows 10 core") is None


def test_unrecognized_edition_is_disabled_even_with_key():
    r = parse_key_info(["OEM Edition: Windows 10 S", "OEM Key: AAAAA-BBBBB"])
    assert r.enabled is False
    assert r.edition_short_code == UNKNOWN
    assert r.edition_display_name == UNKNOWN


def test_key_without_edition_does_not_enable():
    r = parse_key_info(["OEM Key: AAAAA-BBBBB"])
    assert r.enabled is False


def test_first_matching_lines_win_and_are_trimmed():
    r = parse_key_info(
        [
            "Product Name: Windows 10 Enterprise",
            "OEM Edition:    Windows 10 Pro   ",
            "OEM Edition: Windows 10 Enterprise",
            "OEM Key:   KEY-1  ",
            "OEM Key: KEY-2",
        ]
    )
    assert r.edition_short_code == "pro"
    assert r.oem_product_key == "KEY-1"


def test_blank_key_is_absent():
    r = parse_key_info(["OEM Edition: Windows 10 Pro", "OEM Key:   "])
    assert r.oem_product_key is None


def test_bom_on_first_line_is_ignored():
    r = parse_key_info(["\ufeffOEM Edition: Windows 10 Enterprise"])
    assert r.edition_short_code == "ent"


def test_core_without_home_entry_falls_back_to_scan():
    catalog = Catalog.from_pairs([("Pro", "pro")])
    assert map_edition("Windows 10 Core", catalog) is None
    assert map_edition("Windows 10 Core Pro", catalog) == ("Pro", "pro")
