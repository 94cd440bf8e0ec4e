"""
Implementation Planner - Org-Size Classifier
Maps an employee count onto a size tier and its timeline scaling multiplier.
Bands are contiguous and left-inclusive.
"""
from engines.errors import PlanValidationError

# 'max' is exclusive; None marks the open-ended top band
ORG_SIZE_TIERS = [
    {'label': 'Small',      'min': 0,   'max': 25,   'multiplier': 0.75},
    {'label': 'Medium',     'min': 25,  'max': 100,  'multiplier': 1},
    {'label': 'Large',      'min': 100, 'max': 500,  'multiplier': 1.5},
    {'label': 'Enterprise', 'min': 500, 'max': None, 'multiplier': 2},
]


def _check_count(count):
    # bool is an int subclass
    if isinstance(count, bool) or not isinstance(count, (int, float)):
        raise PlanValidationError(f"employee count must be an integer, got {count!r}")
    if isinstance(count, float):
        if not count.is_integer():
            raise PlanValidationError(f"employee count must be a whole number, got {count}")
        count = int(count)
    if count < 0:
        raise PlanValidationError(f"employee count must be >= 0, got {count}")
    return count


def classify_org_size(count):
    """Return (tierLabel, multiplier) for a non-negative employee count."""
    count = _check_count(count)
    for tier in ORG_SIZE_TIERS:
        if tier['max'] is None or count < tier['max']:
            return tier['label'], tier['multiplier']
    # unreachable while the last band is open-ended
    raise PlanValidationError(f"no size tier covers {count}")


def get_org_size_multiplier(count):
    return classify_org_size(count)[1]


def get_org_size_label(count):
    return classify_org_size(count)[0]
