"""Fixed choice catalogs for every enumerated and multi-select form field.

Each catalog is an ordered list of ``(value, label)`` pairs. The value is
what gets validated and submitted; the label is what a person reads.
"""

from typing import Optional

Catalog = list[tuple[str, str]]

EVENT_TYPES: Catalog = [
    ("concert", "Concert/Music Festival"),
    ("private", "Private Event"),
    ("corporate", "Corporate Event"),
    ("charity", "Charity/Fundraiser"),
    ("speaking", "Speaking Engagement"),
    ("vip", "VIP Experience"),
    ("other", "Other"),
]

PERFORMANCE_TYPES: Catalog = [
    ("full-concert", "Full Concert (90+ minutes)"),
    ("headliner", "Headliner Set (60-75 minutes)"),
    ("festival", "Festival Set (45-60 minutes)"),
    ("acoustic", "Acoustic Performance"),
    ("speaking", "Speaking Engagement Only"),
    ("meet-greet", "Meet & Greet/VIP Experience"),
]

BUDGET_RANGES: Catalog = [
    ("under-100k", "Under $100,000"),
    ("100k-250k", "$100,000 - $250,000"),
    ("250k-500k", "$250,000 - $500,000"),
    ("500k-1m", "$500,000 - $1,000,000"),
    ("1m-2m", "$1,000,000 - $2,000,000"),
    ("over-2m", "Over $2,000,000"),
    ("flexible", "Budget Flexible"),
]

BOOKING_TIMELINES: Catalog = [
    ("asap", "ASAP"),
    ("1-week", "Within 1 week"),
    ("2-weeks", "Within 2 weeks"),
    ("1-month", "Within 1 month"),
    ("flexible", "Timeline is flexible"),
]

ADDITIONAL_SERVICES: Catalog = [
    ("soundcheck", "Soundcheck Required"),
    ("rehearsal", "Rehearsal Time"),
    ("interviews", "Media Interviews"),
    ("photos", "Photo Opportunities"),
    ("merchandise", "Merchandise Sales"),
    ("recording", "Recording Rights"),
]

BUDGET_INCLUDES: Catalog = [
    ("travel", "Travel & Transportation"),
    ("accommodation", "Accommodation"),
    ("catering", "Catering & Hospitality"),
    ("production", "Production Costs"),
    ("security", "Security"),
    ("insurance", "Insurance"),
]

VIP_ATTENDANCE: Catalog = [
    ("5-10", "5 - 10 guests"),
    ("10-25", "10 - 25 guests"),
    ("25-50", "25 - 50 guests"),
    ("50-75", "50 - 75 guests"),
    ("75-100", "75 - 100 guests"),
]

PRIVATE_ATTENDANCE: Catalog = [
    ("under-50", "Under 50 guests"),
    ("50-100", "50 - 100 guests"),
    ("100-250", "100 - 250 guests"),
    ("250-500", "250 - 500 guests"),
    ("500-1000", "500 - 1,000 guests"),
    ("1000-2500", "1,000 - 2,500 guests"),
]

STANDARD_ATTENDANCE: Catalog = [
    ("under-500", "Under 500"),
    ("500-1000", "500 - 1,000"),
    ("1000-5000", "1,000 - 5,000"),
    ("5000-10000", "5,000 - 10,000"),
    ("10000-25000", "10,000 - 25,000"),
    ("25000-50000", "25,000 - 50,000"),
    ("over-50000", "Over 50,000"),
]

ATTENDANCE_CATALOGS: dict[str, Catalog] = {
    "vip": VIP_ATTENDANCE,
    "private": PRIVATE_ATTENDANCE,
    "standard": STANDARD_ATTENDANCE,
}


def catalog_values(catalog: Catalog) -> tuple[str, ...]:
    """Return the permitted values of a catalog, in display order."""
    return tuple(value for value, _ in catalog)


def get_label(catalog: Catalog, value: str) -> Optional[str]:
    """Look up the display label for a value. Returns None if not in the catalog."""
    for candidate, label in catalog:
        if candidate == value:
            return label
    return None
