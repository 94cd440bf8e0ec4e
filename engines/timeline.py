"""
Implementation Planner - Timeline Engine
Builds the phase plan from organisation size and the selected work items.

Sequencing:
  Planning -> selected items in catalog order -> Deployment
Every selected item extends the sequential chain except Training, which
starts once Core Product is half done and runs alongside the chain.
Durations scale with the org-size multiplier and round half up.
"""
import logging
import math

from engines.catalog import (PRODUCT_OPTIONS, CORE_PRODUCT_ID, TRAINING_ID, get_color_for_product,
                             validate_catalog, check_selection_keys)
from engines.errors import PlanValidationError
from engines.org_size import classify_org_size

PLANNING_PHASE = {'colorTag': 'planning', 'name': 'Planning & Requirements',
                  'baseWeeks': 2, 'color': '#4285F4'}
DEPLOYMENT_PHASE = {'colorTag': 'deployment', 'name': 'Deployment & Go-Live',
                    'baseWeeks': 2, 'color': '#34A853'}

WEEKS_PER_MONTH = 4


def js_round(x):
    """Half-up rounding for non-negative values (round(2.5) would give 2)."""
    return int(math.floor(x + 0.5))


def _phase(name, start, duration, color_tag, color):
    return {'name': name, 'start': start, 'duration': duration,
            'end': start + duration, 'colorTag': color_tag, 'color': color}


def generate_plan(employee_count, selection, catalog=None):
    """Compute the implementation plan.

    Args:
        employee_count: non-negative integer head count.
        selection: mapping of work item id -> selected flag. Missing ids count
            as not selected. The mandatory item is NOT forced on here; that is
            the input layer's job (see catalog.normalize_selection).
        catalog: ordered work items, defaults to the built-in product catalog.

    Returns a new plan dict on every call: ordered ``phases`` and
    ``totalDuration`` plus the tier that drove the scaling.
    """
    catalog = validate_catalog(catalog if catalog is not None else PRODUCT_OPTIONS)
    selection = selection or {}
    check_selection_keys(selection, catalog)
    tier, multiplier = classify_org_size(employee_count)

    phases = []
    planning_weeks = js_round(PLANNING_PHASE['baseWeeks'] * multiplier)
    phases.append(_phase(PLANNING_PHASE['name'], 0, planning_weeks,
                         PLANNING_PHASE['colorTag'], PLANNING_PHASE['color']))
    next_start = planning_weeks

    emitted = {}
    for item in catalog:
        if not selection.get(item['id']):
            continue
        duration = js_round(item['baseWeeks'] * multiplier)

        actual_start = next_start
        if item['id'] == TRAINING_ID:
            core = emitted.get(CORE_PRODUCT_ID)
            if core is not None:
                actual_start = core['start'] + core['duration'] // 2
            else:
                logging.warning("[timeline] training selected without core product; "
                                "scheduling it on the sequential chain at week %d", next_start)

        phase = _phase(item['label'], actual_start, duration, item['id'], get_color_for_product(item['id'], catalog))
        phases.append(phase)
        emitted[item['id']] = phase

        if item['id'] != TRAINING_ID:
            next_start += duration

    deployment_weeks = js_round(DEPLOYMENT_PHASE['baseWeeks'] * multiplier)
    phases.append(_phase(DEPLOYMENT_PHASE['name'], next_start, deployment_weeks,
                         DEPLOYMENT_PHASE['colorTag'], DEPLOYMENT_PHASE['color']))

    total = max(p['start'] + p['duration'] for p in phases)
    return {
        'phases': phases,
        'totalDuration': total,
        'totalDurationLabel': format_duration(total),
        'employeeCount': employee_count,
        'tier': tier,
        'multiplier': multiplier,
    }


def run_timeline(employee_count, selection, catalog=None):
    plan = generate_plan(employee_count, selection, catalog)
    logging.info(f"[timeline] {employee_count} employees ({plan['tier']}, x{plan['multiplier']}): "
                 f"{len(plan['phases'])} phases, {plan['totalDuration']} weeks")
    return plan


def format_duration(weeks):
    """Human label for a week count, e.g. 6 -> '1 month 2 weeks'.

    The weeks-only branch is never singularised ('1 weeks'); existing
    printed plans use that wording.
    """
    if isinstance(weeks, bool) or not isinstance(weeks, int):
        raise PlanValidationError(f"weeks must be an integer, got {weeks!r}")
    if weeks < 0:
        raise PlanValidationError(f"weeks must be >= 0, got {weeks}")
    months, remaining = divmod(weeks, WEEKS_PER_MONTH)

    if months == 0:
        return f"{weeks} weeks"
    month_label = f"{months} month{'s' if months > 1 else ''}"
    if remaining == 0:
        return month_label
    return f"{month_label} {remaining} week{'s' if remaining > 1 else ''}"

