"""Tests for company name normalization and tokenization."""

from __future__ import annotations

import pytest

from company_dedup.pipeline.deduplication import NOISE_WORDS, normalize, tokenize


def test_normalize_removes_noise_words_and_punctuation() -> None:
    assert normalize("Ubisoft Inc.") == "ubisoft"
    assert normalize("Ubisoft") == "ubisoft"
    assert normalize("Sony Interactive Entertainment") == "sony"
    assert normalize("NINTENDO CO. LTD.") == "nintendo"


def test_normalize_removes_accents_and_collapses_spacing() -> None:
    assert normalize("MontrÉal") == "montreal"
    assert normalize("MontrÉal") == normalize("montreal")
    assert normalize("  Ubisoft     Montreal  ") == "ubisoft montreal"


def test_normalize_deletes_punctuation_inside_tokens() -> None:
    assert normalize("E.A. Games") == "ea games"
    assert normalize("EA Games") == "ea games"
    assert normalize("Rock-Star, Games!") == "rockstar games"


def test_normalize_keeps_token_order() -> None:
    assert normalize("Zeta Alpha Labs") == "zeta alpha labs"


def test_normalize_handles_empty_and_noise_only_names() -> None:
    assert normalize("") == ""
    assert normalize("   ") == ""
    assert normalize("The Group Inc.") == ""


def test_normalize_case_folds_beyond_ascii() -> None:
    assert normalize("Straße AG") == "strasse"
    assert normalize("İstanbul Holding") == "istanbul"


@pytest.mark.parametrize(
    "raw",
    [
        "Ubisoft Inc.",
        "Société Générale S.A.",
        "Straße AG",
        "İstanbul Holding",
        "foo_bar & Co",
        "ﬁnance Partners",
        "  The   Group  ",
        "",
        "Électronique--Média Ltd.",
    ],
)
def test_normalize_is_idempotent(raw: str) -> None:
    once = normalize(raw)
    assert normalize(once) == once


def test_normalize_accepts_custom_noise_words() -> None:
    assert normalize("Acme Widgets") == "acme widgets"
    assert normalize("Acme Widgets", noise_words={"widgets"}) == "acme"
    assert normalize("Acme Inc", noise_words=frozenset()) == "acme inc"


def test_default_noise_words_cover_legal_and_generic_terms() -> None:
    for word in ("inc", "ltd", "corp", "studio", "entertainment", "solutions", "group", "the", "and", "of"):
        assert word in NOISE_WORDS


def test_tokenize_returns_unique_tokens() -> None:
    assert tokenize("Ubisoft Montreal") == frozenset({"ubisoft", "montreal"})
    assert tokenize("Sony Sony Music") == frozenset({"sony", "music"})


def test_tokenize_empty_name_has_no_tokens() -> None:
    assert tokenize("") == frozenset()
    assert tokenize("Inc. Ltd") == frozenset()
    assert "" not in tokenize("  Sony  ")
