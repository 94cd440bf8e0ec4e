"""
Implementation Planner - Flask API Server
Input layer over the timeline engine: holds the current organisation size
and product mix, recomputes a fresh plan on every change.
"""
import io
import logging
import os
import traceback
from flask import Flask, jsonify, request, send_file
from engines.catalog import normalize_selection, default_selection, selected_items
from engines.data_loader import load_parameters, load_catalog, clamp
from engines.errors import PlanValidationError
from engines.export import build_plan_workbook
from engines.org_size import ORG_SIZE_TIERS
from engines.timeline import run_timeline, format_duration

app = Flask(__name__)

STATE = {
    'params': None, 'catalog': None,
    'employeeCount': None, 'selection': None,
    'loaded': False,
}


def _load_config():
    params = load_parameters()
    catalog = load_catalog()
    STATE['params'] = params
    STATE['catalog'] = catalog
    STATE['employeeCount'] = params['defaultEmployeeCount']
    STATE['selection'] = default_selection(catalog)
    STATE['loaded'] = True
    return True


@app.before_request
def _ensure_loaded():
    if not STATE['loaded'] and not STATE.get('_load_error'):
        try:
            _load_config()
            logging.info("[app] planner configuration loaded")
        except Exception as e:
            STATE['_load_error'] = f"{type(e).__name__}: {e}"
            logging.error(f"[app] configuration load failed: {STATE['_load_error']}")
            traceback.print_exc()


def _not_loaded():
    return jsonify({'error': 'Configuration not loaded',
                    'reason': STATE.get('_load_error', 'Unknown - check terminal')}), 503


def _parse_count(raw):
    """Slider value -> clamped employee count."""
    if isinstance(raw, bool):
        raise PlanValidationError(f"employeeCount must be a number, got {raw!r}")
    try:
        count = int(raw)
    except (TypeError, ValueError, OverflowError):
        raise PlanValidationError(f"employeeCount must be a number, got {raw!r}")
    p = STATE['params']
    return clamp(count, p['minEmployees'], p['maxEmployees'])


def _json_body():
    body = request.get_json(silent=True)
    if body is None:
        return {}
    if not isinstance(body, dict):
        raise PlanValidationError("JSON object body required")
    return body


def _current_plan():
    return run_timeline(STATE['employeeCount'], STATE['selection'], STATE['catalog'])


def _plan_response(plan, selection, employee_count):
    return {
        'status': 'ok',
        'employeeCount': employee_count,
        'selection': selection,
        'selectedItems': [i['id'] for i in selected_items(selection, STATE['catalog'])],
        'plan': plan,
    }


@app.errorhandler(PlanValidationError)
def _validation_error(e):
    return jsonify({'error': str(e)}), 400


# ══════════════════════════════════════════════════════════════
#  ROUTES
# ══════════════════════════════════════════════════════════════

@app.route('/api/catalog')
def api_catalog():
    if not STATE['loaded']: return _not_loaded()
    p = STATE['params']
    return jsonify({
        'items': STATE['catalog'],
        'tiers': ORG_SIZE_TIERS,
        'employeeRange': {'min': p['minEmployees'], 'max': p['maxEmployees'],
                          'default': p['defaultEmployeeCount']},
    })

@app.route('/api/tiers')
def api_tiers():
    return jsonify({'tiers': ORG_SIZE_TIERS})

@app.route('/api/plan', methods=['GET'])
def api_plan():
    if not STATE['loaded']: return _not_loaded()
    return jsonify(_plan_response(_current_plan(), STATE['selection'], STATE['employeeCount']))


@app.route('/api/plan', methods=['POST'])
def api_compute_plan():
    """Stateless computation: inputs in the body, current state untouched."""
    if not STATE['loaded']: return _not_loaded()
    body = _json_body()
    count = _parse_count(body.get('employeeCount', STATE['params']['defaultEmployeeCount']))
    selection = normalize_selection(body.get('selection', default_selection(STATE['catalog'])),
                                    STATE['catalog'])
    plan = run_timeline(count, selection, STATE['catalog'])
    return jsonify(_plan_response(plan, selection, count))


@app.route('/api/size', methods=['POST'])
def api_size():
    if not STATE['loaded']: return _not_loaded()
    body = _json_body()
    if 'employeeCount' not in body:
        return jsonify({'error': 'employeeCount required'}), 400
    STATE['employeeCount'] = _parse_count(body['employeeCount'])
    return jsonify(_plan_response(_current_plan(), STATE['selection'], STATE['employeeCount']))


@app.route('/api/item/toggle', methods=['POST'])
def api_toggle_item():
    """Select/deselect a work item; the mandatory item stays selected."""
    if not STATE['loaded']: return _not_loaded()
    body = _json_body()
    item_id = body.get('id')
    if not item_id:
        return jsonify({'error': 'id required'}), 400
    item = next((i for i in STATE['catalog'] if i['id'] == item_id), None)
    if item is None:
        return jsonify({'error': f"unknown work item '{item_id}'"}), 400

    selected = body.get('selected')
    selected = not STATE['selection'].get(item_id, False) if selected is None else bool(selected)
    if item['mandatory'] and not selected:
        return jsonify({'error': f"'{item['label']}' is always required"}), 400

    selection = dict(STATE['selection'])
    selection[item_id] = selected
    STATE['selection'] = normalize_selection(selection, STATE['catalog'])
    return jsonify(_plan_response(_current_plan(), STATE['selection'], STATE['employeeCount']))


@app.route('/api/reset', methods=['POST'])
def api_reset():
    """Reload config workbooks and restore the default inputs."""
    STATE['loaded'] = False
    STATE['_load_error'] = None
    try:
        _load_config()
    except Exception as e:
        STATE['_load_error'] = f"{type(e).__name__}: {e}"
        logging.error(f"[app] configuration reload failed: {STATE['_load_error']}")
        traceback.print_exc()
        return _not_loaded()
    return jsonify(_plan_response(_current_plan(), STATE['selection'], STATE['employeeCount']))


@app.route('/api/format-duration')
def api_format_duration():
    weeks = request.args.get('weeks', type=int)
    if weeks is None:
        return jsonify({'error': 'weeks (integer) required'}), 400
    return jsonify({'weeks': weeks, 'label': format_duration(weeks)})


@app.route('/api/export')
def api_export():
    """Export the current plan to Excel."""
    if not STATE['loaded']: return _not_loaded()
    try:
        wb = build_plan_workbook(_current_plan(), STATE['params'])
        buf = io.BytesIO()
        wb.save(buf)
        buf.seek(0)
        return send_file(buf, as_attachment=True, download_name='Implementation_Plan.xlsx',
                         mimetype='application/vnd.openxmlformats-officedocument.spreadsheetml.sheet')
    except PlanValidationError:
        raise
    except Exception as e:
        traceback.print_exc()
        return jsonify({'error': str(e)}), 500


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO, format='%(asctime)s %(levelname)s %(message)s')
    port = int(os.environ.get('PORT', 5000))
    print(f"[OK] Implementation Planner listening on port {port}")
    app.run(debug=False, host='0.0.0.0', port=port)
