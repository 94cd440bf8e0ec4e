"""
Implementation Planner - Configuration Loader
Reads consultant config workbooks from data/config/ and overlays them on
built-in defaults. Every file is optional; the planner runs without any.
"""
import os, logging
import openpyxl

from engines.catalog import get_catalog, validate_catalog

DATA_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), 'data')


def clamp(v, lo, hi):
    return max(lo, min(hi, v))


def read_xlsx_sheet(filepath, sheet_name=None):
    wb = openpyxl.load_workbook(filepath, read_only=True, data_only=True)
    ws = wb[sheet_name] if sheet_name else wb.active
    rows = list(ws.iter_rows(values_only=True))
    wb.close()
    if len(rows) < 2:
        return []
    headers = [str(h).strip() if h else f'col_{i}' for i, h in enumerate(rows[0])]
    return [dict(zip(headers, row)) for row in rows[1:]]


def _whole_number(val):
    """int for whole-number cells (3, 3.0, "3"), None for anything else."""
    if isinstance(val, bool):
        return None
    if isinstance(val, int):
        return val
    try:
        num = float(val)
    except (TypeError, ValueError):
        return None
    return int(num) if num.is_integer() else None


def _as_bool(val):
    if isinstance(val, str):
        return val.strip().lower() in ('yes', 'y', 'true', '1', 'x')
    return bool(val)


def load_parameters():
    """Load planner parameters from config/parameters.xlsx (Parameter | Value)."""
    path = os.path.join(DATA_DIR, 'config', 'parameters.xlsx')
    p = _default_params()
    if not os.path.exists(path):
        return p
    rows = read_xlsx_sheet(path)
    param_map = {
        'Client Name': 'clientName', 'Program Name': 'programName',
        'Default Employee Count': 'defaultEmployeeCount',
        'Min Employees': 'minEmployees', 'Max Employees': 'maxEmployees',
    }
    int_keys = ('defaultEmployeeCount', 'minEmployees', 'maxEmployees')
    for row in rows:
        key = str(row.get('Parameter', '')).strip()
        val = row.get('Value')
        if key not in param_map or val is None:
            continue
        mapped = param_map[key]
        if mapped in int_keys:
            try:
                val = int(float(val))
            except (TypeError, ValueError):
                logging.warning(f"[config] ignoring non-numeric '{key}' = {val!r}")
                continue
        p[mapped] = val

    if p['minEmployees'] > p['maxEmployees']:
        logging.warning(f"[config] min employees {p['minEmployees']} above max {p['maxEmployees']}; "
                        f"using defaults")
        d = _default_params()
        p['minEmployees'], p['maxEmployees'] = d['minEmployees'], d['maxEmployees']
    p['defaultEmployeeCount'] = clamp(p['defaultEmployeeCount'], p['minEmployees'], p['maxEmployees'])
    return p


def _default_params():
    return {
        'clientName': 'Client', 'programName': 'Software Implementation Plan',
        # slider range and starting point of the size input
        'defaultEmployeeCount': 50, 'minEmployees': 10, 'maxEmployees': 1000,
    }


def load_catalog():
    """Built-in catalog with label / base-week / colour overrides from
    config/work_items.xlsx (sheet 'Work Items'). Catalog order and the
    mandatory item stay fixed."""
    catalog = get_catalog()
    path = os.path.join(DATA_DIR, 'config', 'work_items.xlsx')
    if not os.path.exists(path):
        return catalog
    by_id = {item['id']: item for item in catalog}
    for row in read_xlsx_sheet(path, 'Work Items'):
        iid = str(row.get('ID') or '').strip()
        if not iid:
            continue
        item = by_id.get(iid)
        if item is None:
            logging.warning(f"[config] work_items.xlsx: unknown item '{iid}' ignored")
            continue
        if row.get('Label'):
            item['label'] = str(row['Label']).strip()
        weeks = row.get('Base Weeks')
        if weeks is not None:
            whole = _whole_number(weeks)
            if whole is not None:
                item['baseWeeks'] = whole
            else:
                logging.warning(f"[config] work_items.xlsx: bad base weeks {weeks!r} for '{iid}'")
        if row.get('Color'):
            item['color'] = str(row['Color']).strip()
        if row.get('Mandatory') is not None and _as_bool(row['Mandatory']) != item['mandatory']:
            logging.warning(f"[config] work_items.xlsx: mandatory flag of '{iid}' is fixed, ignored")
    return validate_catalog(catalog)
