"""Gender-aware rewriting of garment descriptions into product search phrases.

The rewrite runs in four fixed steps:

1. strip any gender wording already present in the description,
2. swap gender-coded garment nouns using a whole-word table,
3. for accessories, replace generic "jewelry"/"accessories" with a qualified
   phrase,
4. prefix the gender qualifier and append the category search term.

Every step only depends on the output of the previous one and the words the
tables emit are never table keys themselves, so running the normalizer on its
own output returns the same phrase.
"""

from __future__ import annotations

import re
from typing import Dict, Mapping, Tuple

from models.garments import GarmentSlot, GenderPreference

GENDER_TOKEN_PATTERN = re.compile(
    r"\b(?:(?:wo)?men|(?:fe)?male)(?:['’]s|s['’]|s)?(?!\w)|\bunisex\b",
    re.IGNORECASE,
)
ACCESSORY_GENERIC_PATTERN = re.compile(r"(?<!\w)(?:jewelry|jewellery|accessories)(?!\w)", re.IGNORECASE)

MALE_REPLACEMENTS: Dict[str, str] = {
    "blouse": "shirt",
    "blouses": "shirts",
    "dress": "suit",
    "dresses": "suits",
    "skirt": "pants",
    "skirts": "pants",
    "earring": "watch",
    "earrings": "watch",
    "necklace": "chain",
    "necklaces": "chains",
    "handbag": "bag",
    "handbags": "bags",
    "purse": "wallet",
    "purses": "wallets",
    "heels": "shoes",
}

FEMALE_REPLACEMENTS: Dict[str, str] = {
    "suit": "dress",
    "suits": "dresses",
    "tie": "necklace",
    "ties": "necklaces",
    "suspenders": "belt",
    "cufflink": "bracelet",
    "cufflinks": "bracelet",
}

# Accessory searches for men narrow jewellery down to watches.
MALE_ACCESSORY_REPLACEMENTS: Dict[str, str] = {
    **MALE_REPLACEMENTS,
    "necklace": "watch",
    "necklaces": "watches",
}


def _word_pattern(table: Mapping[str, str]) -> re.Pattern[str]:
    alternatives = "|".join(re.escape(key) for key in sorted(table, key=len, reverse=True))
    # Hyphenated compounds ("slip-dress") are rewritten too; "tie-dye" is a print.
    return re.compile(rf"(?<!\w)(?:{alternatives})(?!\w|-dye)", re.IGNORECASE)


_MALE_PATTERN = _word_pattern(MALE_REPLACEMENTS)
_FEMALE_PATTERN = _word_pattern(FEMALE_REPLACEMENTS)
_MALE_ACCESSORY_PATTERN = _word_pattern(MALE_ACCESSORY_REPLACEMENTS)


def _tidy(text: str) -> str:
    collapsed = " ".join(text.split())
    collapsed = re.sub(r"\s+([,;])", r"\1", collapsed)
    return collapsed.strip(" ,;-")


def strip_gender_tokens(description: str) -> str:
    """Remove men's/women's/male/female/unisex wording."""

    return _tidy(GENDER_TOKEN_PATTERN.sub(" ", description))


def apply_replacements(
    text: str, table: Mapping[str, str], pattern: re.Pattern[str] | None = None
) -> str:
    """Replace whole words from ``table`` in a single pass."""

    pattern = pattern or _word_pattern(table)
    return pattern.sub(lambda match: table[match.group(0).lower()], text)


def _replacements_for(
    category: GarmentSlot, gender: GenderPreference
) -> Tuple[Mapping[str, str], re.Pattern[str]] | None:
    if gender is GenderPreference.MALE:
        if category is GarmentSlot.ACCESSORIES:
            return MALE_ACCESSORY_REPLACEMENTS, _MALE_ACCESSORY_PATTERN
        return MALE_REPLACEMENTS, _MALE_PATTERN
    if gender is GenderPreference.FEMALE:
        return FEMALE_REPLACEMENTS, _FEMALE_PATTERN
    return None


def _contains_word(text: str, word: str) -> bool:
    return re.search(rf"(?<!\w){re.escape(word)}(?!\w)", text, re.IGNORECASE) is not None


def normalize(description: str, category: GarmentSlot | str, gender: GenderPreference | str) -> str:
    """Turn a garment description into a gender-aligned search phrase."""

    category = GarmentSlot(category)
    gender = GenderPreference.parse(gender)

    text = strip_gender_tokens(description or "")
    replacements = _replacements_for(category, gender)
    if replacements is not None:
        text = apply_replacements(text, *replacements)

    qualifier = gender.qualifier
    if category is GarmentSlot.ACCESSORIES and qualifier:
        text = ACCESSORY_GENERIC_PATTERN.sub(f"{qualifier} accessories", text)

    parts = []
    if qualifier and not _contains_word(text, qualifier):
        parts.append(qualifier)
    if text:
        parts.append(text)
    if category is not GarmentSlot.ACCESSORIES and not _contains_word(text, category.search_term):
        parts.append(category.search_term)
    return _tidy(" ".join(parts))


__all__ = [
    "FEMALE_REPLACEMENTS",
    "MALE_ACCESSORY_REPLACEMENTS",
    "MALE_REPLACEMENTS",
    "apply_replacements",
    "normalize",
    "strip_gender_tokens",
]
