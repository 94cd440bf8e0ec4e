"""
Implementation Planner - Work-Item Catalog
Static product catalog, selection normalisation for the input layer,
and catalog sanity checks.
"""
import copy

from engines.errors import PlanValidationError

CORE_PRODUCT_ID = 'coreProduct'
TRAINING_ID = 'training'

# Declared order is significant: display order and the sequential chain order.
PRODUCT_OPTIONS = [
    {'id': 'coreProduct',       'label': 'Core Product',             'baseWeeks': 4, 'mandatory': True,  'color': '#DB4437'},
    {'id': 'advancedReporting', 'label': 'Advanced Reporting',       'baseWeeks': 2, 'mandatory': False, 'color': '#F4B400'},
    {'id': 'integrations',      'label': 'Third-party Integrations', 'baseWeeks': 3, 'mandatory': False, 'color': '#0F9D58'},
    {'id': 'customWorkflows',   'label': 'Custom Workflows',         'baseWeeks': 3, 'mandatory': False, 'color': '#4285F4'},
    {'id': 'training',          'label': 'Training & Onboarding',    'baseWeeks': 2, 'mandatory': False, 'color': '#AA46BC'},
]

DEFAULT_COLOR = '#888888'


def get_catalog():
    """Fresh copy of the built-in catalog; callers may edit it freely."""
    return copy.deepcopy(PRODUCT_OPTIONS)


def get_color_for_product(item_id, catalog=None):
    for item in (catalog or PRODUCT_OPTIONS):
        if item['id'] == item_id:
            return item.get('color') or DEFAULT_COLOR
    return DEFAULT_COLOR


def default_selection(catalog=None):
    """Initial checkbox state: core product and training."""
    return {item['id']: item['mandatory'] or item['id'] == TRAINING_ID
            for item in (catalog or PRODUCT_OPTIONS)}


def validate_catalog(catalog):
    """Raise PlanValidationError for a catalog the generator cannot plan with."""
    if not catalog:
        raise PlanValidationError('work-item catalog is empty')
    seen = set()
    for item in catalog:
        iid = item.get('id')
        if not iid:
            raise PlanValidationError(f"work item without an id: {item!r}")
        if iid in seen:
            raise PlanValidationError(f"duplicate work item id '{iid}'")
        seen.add(iid)
        base = item.get('baseWeeks')
        if isinstance(base, bool) or not isinstance(base, int):
            raise PlanValidationError(f"base weeks for '{iid}' must be an integer, got {base!r}")
        if base < 0:
            raise PlanValidationError(f"base weeks for '{iid}' must be >= 0, got {base}")
    mandatory = [i['id'] for i in catalog if i.get('mandatory')]
    if len(mandatory) != 1:
        raise PlanValidationError(f"catalog needs exactly one mandatory item, found {mandatory}")
    return catalog


def check_selection_keys(selection, catalog):
    if not isinstance(selection, dict):
        raise PlanValidationError(f"selection must map item ids to booleans, got {type(selection).__name__}")
    known = {item['id'] for item in catalog}
    unknown = sorted(k for k in selection if k not in known)
    if unknown:
        raise PlanValidationError(f"unknown work item(s): {', '.join(unknown)}")


def normalize_selection(selection, catalog=None):
    """Input-layer view of a selection: every catalog id present, values
    coerced to bool, mandatory items pinned on."""
    catalog = catalog or PRODUCT_OPTIONS
    selection = selection or {}
    check_selection_keys(selection, catalog)
    return {item['id']: True if item['mandatory'] else bool(selection.get(item['id'], False))
            for item in catalog}


def selected_items(selection, catalog=None):
    return [item for item in (catalog or PRODUCT_OPTIONS) if selection.get(item['id'])]
