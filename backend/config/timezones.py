# Fixed UTC offsets (in hours) for the timezones offered at signup.
# Daylight saving time is not modelled: each zone maps to its standard offset
# all year round. Unknown zone names fall back to UTC.

TIMEZONE_OFFSETS = {
    "America/New_York": -5,
    "America/Chicago": -6,
    "America/Denver": -7,
    "America/Los_Angeles": -8,
    "Europe/London": 0,
    "Europe/Paris": 1,
    "Europe/Berlin": 1,
    "Asia/Shanghai": 8,
    "Asia/Tokyo": 9,
}

# Labels shown next to each zone in signup forms.
TIMEZONE_LABELS = {
    "America/New_York": "Eastern Time (ET)",
    "America/Chicago": "Central Time (CT)",
    "America/Denver": "Mountain Time (MT)",
    "America/Los_Angeles": "Pacific Time (PT)",
    "Europe/London": "London (GMT)",
    "Europe/Paris": "Paris (CET)",
    "Europe/Berlin": "Berlin (CET)",
    "Asia/Shanghai": "Shanghai (CST)",
    "Asia/Tokyo": "Tokyo (JST)",
}

DEFAULT_TIMEZONE = "America/New_York"


def offset_hours(zone_name: str | None) -> int:
    """Return the fixed UTC offset for a zone name, 0 when the zone is unknown."""
    if not zone_name:
        return 0
    return TIMEZONE_OFFSETS.get(zone_name, 0)
