# File: tests/test_mismatch.py

from brandsense.client.mismatch import detect_data_mismatch
from brandsense.services.demo_data import DEMO_BRAND_IDENTITY


def test_no_mismatch_for_neutral_payload():
    assert detect_data_mismatch("Acme", DEMO_BRAND_IDENTITY) is None


def test_empty_payload():
    assert detect_data_mismatch("Acme", None) is None
    assert detect_data_mismatch("Acme", {}) is None


def test_foreign_brand_is_reported():
    payload = {"brandPowerStatement": "Nike leads the category in Germany."}
    assert detect_data_mismatch("Acme", payload) == "nike"


def test_own_brand_is_ignored():
    payload = {"brandPowerStatement": "Nike leads the category in Germany."}
    assert detect_data_mismatch("Nike Running", payload) is None
    assert detect_data_mismatch("nike", payload) is None


def test_whole_words_only():
    payload = {"summary": "A metallic finish; pineapple flavours; sweetie."}
    assert detect_data_mismatch("Acme", payload) is None


def test_multi_word_brand():
    payload = {"keywords": [{"keyword": "Under Armour rival"}]}
    assert detect_data_mismatch("Acme", payload) == "under armour"
