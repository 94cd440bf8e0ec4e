"""
Tests for the Excel plan export.
"""
from engines.catalog import default_selection
from engines.export import build_plan_workbook
from engines.timeline import generate_plan


def _plan():
    return generate_plan(50, default_selection())


class TestPlanWorkbook:

    def test_sheets(self):
        wb = build_plan_workbook(_plan(), {'clientName': 'Acme'})
        assert wb.sheetnames == ['Summary', 'Phases', 'Gantt']

    def test_summary_values(self):
        wb = build_plan_workbook(_plan(), {'clientName': 'Acme', 'programName': 'Rollout'})
        summary = {row[0]: row[1] for row in wb['Summary'].iter_rows(min_row=2, values_only=True)}
        assert summary['Client'] == 'Acme'
        assert summary['Organization Size'] == '50 employees (Medium)'
        assert summary['Complexity Factor'] == '1x'
        assert summary['Estimated Duration'] == '2 months'
        assert summary['Total Weeks'] == 8
        assert summary['Work Items'] == 'Core Product, Training & Onboarding'

    def test_phase_rows(self):
        rows = list(build_plan_workbook(_plan())['Phases'].iter_rows(min_row=2, values_only=True))
        assert rows[0] == ('Planning & Requirements', 0, 2, 2, '2 weeks')
        assert rows[2] == ('Training & Onboarding', 4, 2, 6, '2 weeks')
        assert rows[-1][0] == 'Deployment & Go-Live'

    def test_gantt_grid(self):
        plan = _plan()
        ws = build_plan_workbook(plan)['Gantt']
        header = [c.value for c in ws[1]]
        assert header == ['Phase'] + list(range(plan['totalDuration'] + 1))

        # Core Product occupies weeks 2 and 3..5 -> columns D..G
        core_row = 3
        assert ws.cell(row=core_row, column=1).value == 'Core Product'
        filled = [week for week in range(plan['totalDuration'] + 1)
                  if ws.cell(row=core_row, column=week + 2).fill.fgColor.rgb.endswith('DB4437')]
        assert filled == [2, 3, 4, 5]
        assert ws.cell(row=core_row, column=4).value == '4w'

    def test_zero_week_phase_has_no_cells(self):
        plan = _plan()
        plan['phases'][2]['duration'] = 0
        ws = build_plan_workbook(plan)['Gantt']
        assert all(ws.cell(row=4, column=c).value is None for c in range(2, plan['totalDuration'] + 3))
