"""
Implementation Planner - Excel Export
Printable workbook for a computed plan: summary, phase table and a
week-grid Gantt sheet coloured like the on-screen chart.
"""
import openpyxl
from openpyxl.styles import Font, PatternFill, Alignment, Border, Side
from openpyxl.utils import get_column_letter

from engines.org_size import get_org_size_label, get_org_size_multiplier
from engines.timeline import format_duration, PLANNING_PHASE, DEPLOYMENT_PHASE

HEADER_FONT = Font(bold=True, color='FFFFFF', size=11)
HEADER_FILL = PatternFill(start_color='2E2E38', end_color='2E2E38', fill_type='solid')
THIN_BORDER = Border(left=Side(style='thin'), right=Side(style='thin'),
                     top=Side(style='thin'), bottom=Side(style='thin'))


def _fill(color):
    hexcode = (color or '#888888').lstrip('#').upper()
    return PatternFill(start_color=hexcode, end_color=hexcode, fill_type='solid')


def ws_write(ws, headers, rows):
    for c, h in enumerate(headers, 1):
        cell = ws.cell(row=1, column=c, value=h)
        cell.font = HEADER_FONT; cell.fill = HEADER_FILL
        cell.alignment = Alignment(horizontal='center'); cell.border = THIN_BORDER
    for r, row in enumerate(rows, 2):
        for c, val in enumerate(row, 1):
            cell = ws.cell(row=r, column=c, value=val); cell.border = THIN_BORDER
    for col in ws.columns:
        ml = max(len(str(cell.value or '')) for cell in col)
        ws.column_dimensions[col[0].column_letter].width = min(ml + 2, 40)


def _write_gantt(ws, plan):
    total = plan['totalDuration']
    # week axis 0..total inclusive, as drawn on screen
    ws.cell(row=1, column=1, value='Phase').font = HEADER_FONT
    ws.cell(row=1, column=1).fill = HEADER_FILL
    for week in range(total + 1):
        cell = ws.cell(row=1, column=week + 2, value=week)
        cell.font = HEADER_FONT; cell.fill = HEADER_FILL
        cell.alignment = Alignment(horizontal='center')
        ws.column_dimensions[get_column_letter(week + 2)].width = 4

    for r, phase in enumerate(plan['phases'], 2):
        ws.cell(row=r, column=1, value=phase['name'])
        fill = _fill(phase.get('color'))
        for week in range(phase['start'], phase['start'] + phase['duration']):
            cell = ws.cell(row=r, column=week + 2)
            cell.fill = fill; cell.border = THIN_BORDER
        if phase['duration']:
            label = ws.cell(row=r, column=phase['start'] + 2, value=f"{phase['duration']}w")
            label.font = Font(color='FFFFFF', bold=True, size=9)
    ws.column_dimensions['A'].width = max(len(p['name']) for p in plan['phases']) + 2
    ws.freeze_panes = 'B2'


def build_plan_workbook(plan, params=None):
    """Workbook with Summary, Phases and Gantt sheets for ``plan``."""
    params = params or {}
    wb = openpyxl.Workbook()
    fixed = (PLANNING_PHASE['colorTag'], DEPLOYMENT_PHASE['colorTag'])
    selected = [p['name'] for p in plan['phases'] if p['colorTag'] not in fixed]

    ws = wb.active; ws.title = 'Summary'
    ws_write(ws, ['Metric', 'Value'], [
        ['Client', params.get('clientName', '')],
        ['Program', params.get('programName', '')],
        ['Organization Size', f"{plan['employeeCount']} employees ({get_org_size_label(plan['employeeCount'])})"],
        ['Complexity Factor', f"{get_org_size_multiplier(plan['employeeCount'])}x"],
        ['Estimated Duration', format_duration(plan['totalDuration'])],
        ['Total Weeks', plan['totalDuration']],
        ['Work Items', ', '.join(selected)],
    ])

    ws2 = wb.create_sheet('Phases')
    ws_write(ws2, ['Phase', 'Start Week', 'Duration (weeks)', 'End Week', 'Duration'], [
        [p['name'], p['start'], p['duration'], p['start'] + p['duration'], format_duration(p['duration'])]
        for p in plan['phases']
    ])

    _write_gantt(wb.create_sheet('Gantt'), plan)
    return wb
