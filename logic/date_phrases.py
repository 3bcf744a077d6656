"""Resolve relative date phrases ("next week", "Saturday", "in December")."""

from __future__ import annotations

import calendar
import re
from datetime import date, timedelta
from typing import Optional

WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")
MONTHS = (
    "january",
    "february",
    "march",
    "april",
    "may",
    "june",
    "july",
    "august",
    "september",
    "october",
    "november",
    "december",
)
_MONTH_ABBREVIATIONS = {name[:3]: index + 1 for index, name in enumerate(MONTHS)}
_MONTH_ALTERNATION = "|".join(MONTHS) + "|" + "|".join(f"{abbr}\\.?" for abbr in _MONTH_ABBREVIATIONS)

_ISO_DATE = re.compile(r"\b(\d{4})[-/](\d{1,2})[-/](\d{1,2})\b")
_IN_OFFSET = re.compile(r"\bin\s+(\d{1,3})\s+(day|days|week|weeks)\b", re.IGNORECASE)
_WEEKDAY = re.compile(r"\b(" + "|".join(WEEKDAYS) + r")\b", re.IGNORECASE)
_MONTH_DAY = re.compile(
    rf"\b(?:(\d{{1,2}})(?:st|nd|rd|th)?\s+(?:of\s+)?)?({_MONTH_ALTERNATION})(?:\s+(\d{{1,2}})(?:st|nd|rd|th)?)?\b",
    re.IGNORECASE,
)

TEMPORAL_PHRASE = re.compile(
    r"\b(?:on\s+|this\s+|next\s+|coming\s+|in\s+|for\s+)?"
    r"(?P<word>today|tonight|tomorrow|weekend|week|month|" + "|".join(WEEKDAYS) + r"|" + _MONTH_ALTERNATION + r")"
    r"(?P<day>\s+\d{1,2}(?:st|nd|rd|th)?)?\b",
    re.IGNORECASE,
)


# "may" is usually the verb; read it as the month only with a day or a cue word.
_MAY_CUE = re.compile(r"\b(?:in|on|of|by|until|through|during|early|late|mid|next|coming)[\s-]*$", re.IGNORECASE)


def _names_month(text: str, start: int, token: str, has_day: bool) -> bool:
    if token.lower().rstrip(".") != "may" or has_day:
        return True
    return _MAY_CUE.search(text[:start]) is not None


def _month_number(token: str) -> int:
    return _MONTH_ABBREVIATIONS[token.lower().rstrip(".")[:3]]


def _next_weekday(today: date, weekday: int) -> date:
    days_ahead = (weekday - today.weekday()) % 7
    return today + timedelta(days=days_ahead or 7)


def _month_occurrence(today: date, month: int, day: Optional[int]) -> date:
    year = today.year
    target_day = day or 1
    candidate = date(year, month, min(target_day, calendar.monthrange(year, month)[1]))
    if day is None and month == today.month:
        return today
    if candidate < today:
        year += 1
        candidate = date(year, month, min(target_day, calendar.monthrange(year, month)[1]))
    return candidate


def resolve_date_phrase(text: str, today: date) -> date:
    """Best-effort resolution of the first date expression in ``text``.

    Falls back to ``today`` when nothing date-like is present.
    """

    lowered = text.lower()

    iso = _ISO_DATE.search(text)
    if iso:
        try:
            return date(int(iso.group(1)), int(iso.group(2)), int(iso.group(3)))
        except ValueError:
            pass

    offset = _IN_OFFSET.search(text)
    if offset:
        amount = int(offset.group(1))
        unit_days = 7 if offset.group(2).lower().startswith("week") else 1
        return today + timedelta(days=amount * unit_days)

    if re.search(r"\b(today|tonight)\b", lowered):
        return today
    if re.search(r"\btomorrow\b", lowered):
        return today + timedelta(days=1)
    if re.search(r"\bnext\s+week\b", lowered):
        return today + timedelta(days=7)
    if re.search(r"\bnext\s+month\b", lowered):
        first_of_month = today.replace(day=1)
        return (first_of_month + timedelta(days=32)).replace(day=1)

    for month_day in _MONTH_DAY.finditer(text):
        raw_day = month_day.group(1) or month_day.group(3)
        if not _names_month(text, month_day.start(2), month_day.group(2), raw_day is not None):
            continue
        day = int(raw_day) if raw_day else None
        if day is not None and not 1 <= day <= 31:
            day = None
        return _month_occurrence(today, _month_number(month_day.group(2)), day)

    if re.search(r"\bweekend\b", lowered):
        return today if today.weekday() == 5 else _next_weekday(today, 5)

    weekday = _WEEKDAY.search(text)
    if weekday:
        return _next_weekday(today, WEEKDAYS.index(weekday.group(1).lower()))

    return today


def _drop_temporal(match: re.Match) -> str:
    if _names_month(match.string, match.start("word"), match.group("word"), match.group("day") is not None):
        return " "
    return match.group(0)


def strip_date_phrases(text: str) -> str:
    """Remove temporal expressions, leaving the rest of the phrase."""

    without = re.sub(r"\b(?:on|for)\s+(?=\d{4}[-/])", " ", text, flags=re.IGNORECASE)
    without = _ISO_DATE.sub(" ", without)
    without = _IN_OFFSET.sub(" ", without)
    without = TEMPORAL_PHRASE.sub(_drop_temporal, without)
    return " ".join(without.split())


def is_calendar_word(word: str) -> bool:
    lowered = word.lower().rstrip(".")
    return lowered in WEEKDAYS or lowered in MONTHS or lowered in _MONTH_ABBREVIATIONS


__all__ = ["is_calendar_word", "resolve_date_phrase", "strip_date_phrases"]
