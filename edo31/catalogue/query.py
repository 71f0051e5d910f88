"""
Read-only filtering and sorting over published scales.
"""

from typing import List, Literal, Optional, Sequence

import numpy as np

from edo31.core.exceptions import ValidationError
from edo31.scales.models import Scale


SortKey = Literal["name", "noteCount", "brightness"]


def brightness(scale: Scale) -> float:
    """
    Brightness used for sorting.
    
    A numeric "brightness" property wins; otherwise the mean height of the
    inner degrees (higher degrees read brighter).
    """
    value = scale.properties.get("brightness")
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    inner = scale.degrees[1:-1]
    if not inner:
        return 0.0
    return float(np.mean(inner))


def _matches_search(scale: Scale, term: str) -> bool:
    if term in scale.name.lower() or term in scale.description.lower():
        return True
    for axis, tags in scale.categories.items():
        if term in axis.lower() or any(term in tag.lower() for tag in tags):
            return True
    for key, value in scale.properties.items():
        if term in key.lower() or term in str(value).lower():
            return True
    return term in "-".join(str(i) for i in scale.intervals)


def _matches_category(scale: Scale, category: str) -> bool:
    if category in scale.categories or category in scale.properties:
        return True
    return any(category in tags for tags in scale.categories.values())


def filter_scales(
    scales: Sequence[Scale],
    search: str = "",
    category: str = "all",
    note_count: Optional[int] = None,
    sort_by: SortKey = "name",
    descending: bool = False,
) -> List[Scale]:
    """
    Filter and sort scales.
    
    Args:
        scales: Scales to query
        search: Case-insensitive substring of the name, description,
            categories, properties or dash-joined intervals
        category: Category axis, category tag or property key; "all"
            disables the filter
        note_count: Keep only scales with this many notes
        sort_by: "name", "noteCount" or "brightness"
        descending: Reverse the sort order
        
    Returns:
        New list; the input is not modified
        
    Raises:
        ValidationError: On an unknown sort key
    """
    if sort_by not in ("name", "noteCount", "brightness"):
        raise ValidationError(f"Unknown sort key '{sort_by}'")
    
    result = list(scales)
    if search:
        term = search.lower()
        result = [scale for scale in result if _matches_search(scale, term)]
    if category != "all":
        result = [scale for scale in result if _matches_category(scale, category)]
    if note_count is not None:
        result = [scale for scale in result if scale.note_count == note_count]
    
    if sort_by == "name":
        result.sort(key=lambda scale: scale.name.lower(), reverse=descending)
    elif sort_by == "noteCount":
        result.sort(key=lambda scale: scale.note_count, reverse=descending)
    else:
        result.sort(key=brightness, reverse=descending)
    return result
