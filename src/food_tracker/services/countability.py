"""Heuristic for foods that are counted by piece rather than weighed."""

COUNTED_KEYWORDS = (
    "chapati",
    "roti",
    "naan",
    "bread",
    "slice",
    "roll",
    "bun",
    "muffin",
    "bagel",
    "waffle",
    "pancake",
    "dosa",
    "idli",
    "cookie",
    "biscuit",
    "cracker",
    "puri",
    "paratha",
    "tortilla",
    "piece",
    "serving",
    "egg",
)


def is_counted(display_name: str) -> bool:
    """Return true when the name contains any counted-food keyword."""
    lowered = display_name.lower()
    return any(keyword in lowered for keyword in COUNTED_KEYWORDS)
