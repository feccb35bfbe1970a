# salonbook/utils/slugs.py
"""Public URL slugs for business profiles"""
import re
import unicodedata

SLUG_PATTERN = re.compile(r"^[a-z0-9-]+$")


def generate_slug(name: str) -> str:
    """
    'Kaderníctvo Žofia' -> 'kadernictvo-zofia'

    Lower-case, accents stripped, every run of other characters becomes a
    single dash, no leading or trailing dashes.
    """
    decomposed = unicodedata.normalize("NFD", name.lower())
    without_accents = "".join(ch for ch in decomposed if unicodedata.category(ch) != "Mn")
    dashed = re.sub(r"[^a-z0-9]+", "-", without_accents)
    return dashed.strip("-")


def is_valid_slug(slug: str) -> bool:
    return bool(slug) and bool(SLUG_PATTERN.match(slug))
