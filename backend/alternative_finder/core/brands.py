from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional, Sequence, Tuple, Union

# Lowercase brand substrings that mark a label as an American product.
AMERICAN_BRANDS: Tuple[str, ...] = (
    "coca-cola",
    "pepsi",
    "kraft",
    "campbell",
)

LabelLike = Union[str, Mapping[str, Any], Any]


def label_description(label: LabelLike) -> Optional[str]:
    """
    Pull the free-text description out of whatever the provider handed us:
      - plain strings
      - dicts straight from the JSON payload ({"description": ...})
      - Label models (anything with a .description attribute)
    """
    if label is None:
        return None
    if isinstance(label, str):
        return label
    if isinstance(label, Mapping):
        return label.get("description")
    return getattr(label, "description", None)


def label_matches(description: Optional[str], brands: Sequence[str] = AMERICAN_BRANDS) -> bool:
    """
    Substring containment on the lowercased description.
    "Coca-Cola bottle" matches "coca-cola"; "cola" alone matches nothing.
    """
    if not description:
        return False
    low = description.lower()
    return any(brand in low for brand in brands)


def is_american(labels: Iterable[LabelLike], brands: Sequence[str] = AMERICAN_BRANDS) -> bool:
    """True if any label matches any brand. An empty label list is never a match."""
    return any(label_matches(label_description(label), brands) for label in labels)


def matched_brands(labels: Iterable[LabelLike], brands: Sequence[str] = AMERICAN_BRANDS) -> list[str]:
    """Brands that were found in at least one label, in brand-list order."""
    descriptions = [d.lower() for d in (label_description(label) for label in labels) if d]
    return [brand for brand in brands if any(brand in d for d in descriptions)]
