"""Stock-photo search phrases derived from a business type and an image role."""

import random

# Substring of the lower-cased business type → (primary, secondary) keyword.
# The longest matching substring wins, so "dental clinic" beats "clinic".
_BUSINESS_KEYWORDS: dict[str, tuple[str, str]] = {
    "restaurant": ("restaurant", "fine dining"),
    "cafe": ("coffee shop", "barista"),
    "coffee": ("coffee shop", "espresso"),
    "bakery": ("bakery", "fresh bread"),
    "bar": ("cocktail bar", "bartender"),
    "dental": ("dental clinic", "dentist"),
    "dentist": ("dental clinic", "dentist"),
    "medical": ("medical clinic", "doctor"),
    "clinic": ("clinic", "healthcare"),
    "veterinary": ("veterinary clinic", "veterinarian"),
    "pharmacy": ("pharmacy", "pharmacist"),
    "law": ("law office", "lawyer"),
    "legal": ("law office", "attorney"),
    "accounting": ("accounting office", "accountant"),
    "consulting": ("business consulting", "consultant"),
    "fitness": ("fitness studio", "personal trainer"),
    "gym": ("gym", "workout"),
    "yoga": ("yoga studio", "yoga class"),
    "salon": ("hair salon", "hairstylist"),
    "barber": ("barber shop", "barber"),
    "spa": ("day spa", "massage"),
    "tech": ("technology office", "software developer"),
    "software": ("software company", "developer"),
    "marketing": ("marketing agency", "creative team"),
    "construction": ("construction site", "builder"),
    "plumbing": ("plumbing", "plumber"),
    "cleaning": ("cleaning service", "cleaner"),
    "landscaping": ("landscaping", "garden"),
    "real estate": ("real estate", "modern house"),
    "photography": ("photography studio", "photographer"),
    "retail": ("retail store", "shopping"),
    "hotel": ("hotel", "hotel room"),
    "auto": ("auto repair shop", "mechanic"),
    "education": ("classroom", "teacher"),
    "school": ("school", "students"),
}

# Per-role phrasings; "{primary}" and "{secondary}" are substituted.
_ROLE_PHRASES: dict[str, tuple[str, ...]] = {
    "hero": (
        "{primary} exterior",
        "modern {primary} interior",
        "welcoming {primary}",
        "{primary} team at work",
    ),
    "about": (
        "{secondary} portrait",
        "{primary} team",
        "friendly {secondary} with customer",
    ),
    "service1": (
        "{secondary} working",
        "{primary} service",
        "{secondary} consultation",
    ),
    "service2": (
        "{primary} equipment",
        "{secondary} tools",
        "{primary} detail",
    ),
    "service3": (
        "happy {primary} customer",
        "{secondary} helping client",
        "{primary} results",
    ),
    "gallery": (
        "{primary} workspace",
        "{primary} atmosphere",
        "{primary} details",
        "{primary} lifestyle",
    ),
    "banner": (
        "{primary} banner",
        "{primary} wide shot",
        "{primary} panorama",
    ),
    "testimonial": (
        "satisfied {primary} client",
        "smiling customer at {primary}",
        "{secondary} with happy client",
    ),
    "contact": (
        "{primary} reception",
        "{primary} front desk",
        "{primary} entrance",
    ),
    "cta": (
        "{primary} background",
        "{primary} abstract",
        "{primary} inviting space",
    ),
    "default": (
        "{primary}",
        "{primary} business",
        "{secondary} at work",
    ),
}

QUERY_SUFFIX = "professional high quality"

# Image roles fetched for a freshly generated website.
GENERATION_IMAGE_ROLES = ("hero", "about", "service1", "service2", "service3", "gallery")


class ImageQueryBuilder:
    """Builds varied stock-photo queries for a business.

    Phrase selection is random on purpose (visual variety between
    generations); pass a seeded ``random.Random`` for repeatable output.
    """

    def __init__(self, rng: random.Random | None = None):
        self._rng = rng or random.Random()

    @staticmethod
    def business_keywords(business_type: str) -> tuple[str, str]:
        """Return ``(primary, secondary)`` keywords for a business type."""
        normalized = (business_type or "").lower()
        best: str | None = None
        for key in _BUSINESS_KEYWORDS:
            if key in normalized and (best is None or len(key) > len(best)):
                best = key
        if best is not None:
            return _BUSINESS_KEYWORDS[best]

        fallback = " ".join((business_type or "").split()[:2]) or "business"
        return fallback, fallback

    def build_query(self, business_type: str, image_role: str, location: str | None = None) -> str:
        primary, secondary = self.business_keywords(business_type)
        phrases = _ROLE_PHRASES.get(image_role, _ROLE_PHRASES["default"])
        phrase = self._rng.choice(phrases).format(primary=primary, secondary=secondary)

        parts = [phrase]
        if location and location.strip():
            parts.append(location.strip())
        parts.append(QUERY_SUFFIX)
        return " ".join(parts)
