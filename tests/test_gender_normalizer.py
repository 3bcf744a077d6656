"""Gender normalizer rewriting and idempotence."""

import re

import pytest

from logic.gender_normalizer import MALE_REPLACEMENTS, normalize, strip_gender_tokens
from models.garments import GarmentSlot, GenderPreference


def test_male_top_swaps_blouse_and_adds_qualifier_and_category() -> None:
    assert normalize("silk blouse", GarmentSlot.TOP, GenderPreference.MALE) == "men's silk shirt top"


def test_male_accessories_narrow_jewellery_to_watch() -> None:
    assert normalize("gold necklace", GarmentSlot.ACCESSORIES, "male") == "men's gold watch"
    assert normalize("pearl earrings", GarmentSlot.ACCESSORIES, "male") == "men's pearl watch"


def test_male_accessories_rewrite_generic_jewelry_without_double_prefix() -> None:
    assert normalize("statement jewelry", GarmentSlot.ACCESSORIES, "male") == "statement men's accessories"


def test_female_swaps_suit_and_tie() -> None:
    assert normalize("navy suit", GarmentSlot.OUTER, "female") == "women's navy dress outerwear"
    assert normalize("silk tie", GarmentSlot.ACCESSORIES, "female") == "women's silk necklace"


def test_any_gender_leaves_nouns_alone_and_only_appends_category() -> None:
    assert normalize("Floral Dress", GarmentSlot.TOP, GenderPreference.ANY) == "Floral Dress top"
    assert normalize("leather handbag", GarmentSlot.ACCESSORIES, "any") == "leather handbag"


def test_existing_gender_tokens_are_replaced_by_the_preference() -> None:
    assert normalize("Women’s wool coat", GarmentSlot.OUTER, "male") == "men's wool coat outerwear"
    assert normalize("unisex MENS hoodie", GarmentSlot.TOP, "female") == "women's hoodie top"
    assert strip_gender_tokens("female-cut male's jacket") == "cut jacket"


def test_category_term_not_repeated_when_present() -> None:
    assert normalize("running shoes", GarmentSlot.SHOES, "any") == "running shoes"
    assert normalize("high heels", GarmentSlot.SHOES, "male") == "men's high shoes"


def test_replacements_are_whole_word_only() -> None:
    assert normalize("dressy linen shirt", GarmentSlot.TOP, "male") == "men's dressy linen shirt top"
    assert normalize("tied waist trousers", GarmentSlot.BOTTOM, "female") == "women's tied waist trousers bottom"


@pytest.mark.parametrize(
    "description, category, gender",
    [
        ("silk blouse", GarmentSlot.TOP, GenderPreference.MALE),
        ("statement jewelry", GarmentSlot.ACCESSORIES, GenderPreference.MALE),
        ("pinstripe suit", GarmentSlot.OUTER, GenderPreference.FEMALE),
        ("Women's pleated skirt", GarmentSlot.BOTTOM, GenderPreference.MALE),
        ("chunky accessories", GarmentSlot.ACCESSORIES, GenderPreference.FEMALE),
        ("  loafers  ", GarmentSlot.SHOES, GenderPreference.ANY),
    ],
)
def test_normalize_is_idempotent(description: str, category: GarmentSlot, gender: GenderPreference) -> None:
    once = normalize(description, category, gender)
    assert normalize(once, category, gender) == once


def test_whitespace_is_collapsed() -> None:
    assert normalize("  slim   fit   chinos ", GarmentSlot.BOTTOM, "any") == "slim fit chinos bottom"


FEMININE_WORD = re.compile(r"(?<!\w)(?:" + "|".join(sorted(MALE_REPLACEMENTS, key=len, reverse=True)) + r")(?!\w)", re.IGNORECASE)


@pytest.mark.parametrize("noun", sorted(MALE_REPLACEMENTS))
@pytest.mark.parametrize("category", list(GarmentSlot))
def test_male_output_has_no_feminine_nouns(noun: str, category: GarmentSlot) -> None:
    for description in (f"classic {noun}", f"mini-{noun}", noun.upper()):
        result = normalize(description, category, GenderPreference.MALE)
        assert FEMININE_WORD.search(result) is None, result


def test_hyphenated_compounds_are_rewritten() -> None:
    assert normalize("slip-dress", GarmentSlot.TOP, "male") == "men's slip-suit top"
    assert normalize("mini-skirt", GarmentSlot.BOTTOM, "male") == "men's mini-pants bottom"
    assert normalize("kitten-heels", GarmentSlot.SHOES, "male") == "men's kitten-shoes"
    assert normalize("tie-dye tee", GarmentSlot.TOP, "female") == "women's tie-dye tee top"
