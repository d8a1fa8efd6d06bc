"""
Utility functions for the application.
"""
import math
from typing import Any, Iterable, List, Optional


def parse_coordinate(value: Any, default: Optional[float] = None) -> Optional[float]:
    """
    Parse a latitude/longitude value, handling both comma and dot as decimal separator.

    Args:
        value: Raw value from a form, JSON body or CSV cell (e.g. "31.1", "31,1" or 31.1)
        default: Value to return if parsing fails (default: None)

    Returns:
        Parsed float or default if the value is empty, not numeric, or not finite

    Examples:
        >>> parse_coordinate('31.1')
        31.1
        >>> parse_coordinate('77,2')
        77.2
        >>> parse_coordinate('xx')
        None
    """
    if value is None or isinstance(value, bool):
        return default

    if isinstance(value, (int, float)):
        number = float(value)
    else:
        value_str = str(value).strip()
        if not value_str:
            return default
        try:
            number = float(value_str.replace(',', '.'))
        except ValueError:
            return default

    if not math.isfinite(number):
        return default
    return number


def filter_records(records: Iterable[dict], query: str, field: str = 'name') -> List[dict]:
    """
    Case-insensitive substring search over a single text field.

    An empty query returns every record, order preserved.

    Examples:
        >>> filter_records([{'name': 'Shimla Air'}, {'name': 'Kullu Heli'}], 'shi')
        [{'name': 'Shimla Air'}]
    """
    records = list(records)
    if not query:
        return records
    needle = query.lower()
    return [r for r in records if needle in str(r.get(field) or '').lower()]
