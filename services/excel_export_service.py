"""
Excel export service for the Student Performance Tracker
Handles Excel export for ranking and summary reports
"""

import openpyxl
from openpyxl.styles import Font, PatternFill, Alignment
from openpyxl.utils import get_column_letter
from io import BytesIO
from datetime import datetime

class ExcelExportService:
    """Service for exporting reports to Excel"""

    @staticmethod
    def style_header_row(ws, row_num, columns):
        """Apply styling to header row"""
        header_font = Font(bold=True, color="FFFFFF")
        header_fill = PatternFill(start_color="000000", end_color="000000", fill_type="solid")
        header_alignment = Alignment(horizontal="center", vertical="center")

        for col_num, header in enumerate(columns, 1):
            cell = ws.cell(row=row_num, column=col_num, value=header)
            cell.font = header_font
            cell.fill = header_fill
            cell.alignment = header_alignment

    @staticmethod
    def auto_adjust_columns(ws):
        """Auto-adjust column widths"""
        for column in ws.columns:
            column_letter = get_column_letter(column[0].column)
            max_length = max((len(str(cell.value)) for cell in column if cell.value is not None),
                             default=0)
            ws.column_dimensions[column_letter].width = min(max_length + 2, 50)

    @staticmethod
    def format_number(value):
        """Format number: whole numbers without decimals, fractional numbers with 2 decimal places."""
        if value is None:
            return None
        num = float(value)
        if num.is_integer():
            return int(num)
        return round(num, 2)

    @staticmethod
    def set_percentage(cell, percent_0_to_100):
        """Write a numeric percentage with a percent number format"""
        cell.value = float(percent_0_to_100) / 100.0
        cell.number_format = '0%' if float(percent_0_to_100).is_integer() else '0.00%'
        return cell

    @staticmethod
    def build_ranking_workbook(manager):
        """Workbook with a Ranking sheet and a Summary sheet"""
        wb = openpyxl.Workbook()

        ws = wb.active
        ws.title = "Ranking"
        headers = ['Rank', 'ID', 'Name', 'Roll', 'Percentage', 'Grade', 'Attendance']
        ExcelExportService.style_header_row(ws, 1, headers)

        students = manager.list_students()
        rows = manager.get_top_performers(len(students)) if students else []
        for row_num, row in enumerate(rows, 2):
            ws.cell(row=row_num, column=1, value=row['rank'])
            ws.cell(row=row_num, column=2, value=row['id'])
            ws.cell(row=row_num, column=3, value=row['name'])
            ws.cell(row=row_num, column=4, value=row['roll'])
            ExcelExportService.set_percentage(ws.cell(row=row_num, column=5), row['percentage'])
            ws.cell(row=row_num, column=6, value=row['grade'])
            ExcelExportService.set_percentage(ws.cell(row=row_num, column=7), row['attendance'])
        if not rows:
            ws.cell(row=2, column=1, value="No data")
        ExcelExportService.auto_adjust_columns(ws)

        stats = manager.get_summary_stats()
        top = stats['top_scorer']
        summary = wb.create_sheet("Summary")
        ExcelExportService.style_header_row(summary, 1, ['Field', 'Value'])
        summary_rows = [
            ("Generated", datetime.now().strftime('%Y-%m-%d %H:%M')),
            ("Total Students", stats['total_students']),
            ("Class Average", ExcelExportService.format_number(stats['class_average'])),
            ("Passed", stats['pass_count']),
            ("Top Scorer", top.name if top else "N/A"),
            ("Average Attendance", ExcelExportService.format_number(stats['average_attendance'])),
        ]
        for row_num, (field, value) in enumerate(summary_rows, 2):
            summary.cell(row=row_num, column=1, value=field).font = Font(bold=True)
            summary.cell(row=row_num, column=2, value=value)
        ExcelExportService.auto_adjust_columns(summary)

        return wb

    @staticmethod
    def export_ranking(manager):
        """Serialize the ranking workbook into an in-memory .xlsx file"""
        wb = ExcelExportService.build_ranking_workbook(manager)
        output = BytesIO()
        wb.save(output)
        output.seek(0)
        return output
