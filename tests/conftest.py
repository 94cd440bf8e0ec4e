"""
Shared fixtures for the planner tests.
"""
import sys
from pathlib import Path

import openpyxl
import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

import app as planner_app
from engines import data_loader


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    """Empty DATA_DIR so tests never read a developer's config workbooks."""
    (tmp_path / 'config').mkdir()
    monkeypatch.setattr(data_loader, 'DATA_DIR', str(tmp_path))
    return tmp_path


@pytest.fixture
def write_workbook():
    """Write rows (header first) to an .xlsx file."""
    def _write(path, rows, sheet_name=None):
        wb = openpyxl.Workbook()
        ws = wb.active
        if sheet_name:
            ws.title = sheet_name
        for row in rows:
            ws.append(list(row))
        wb.save(path)
        return path
    return _write


@pytest.fixture
def client(data_dir):
    planner_app.STATE.update({'params': None, 'catalog': None, 'employeeCount': None,
                              'selection': None, 'loaded': False, '_load_error': None})
    planner_app.app.config['TESTING'] = True
    with planner_app.app.test_client() as c:
        yield c
