"""
Workbook Output - Load Layer

Renders the season report as an Excel workbook: one sheet per position,
a rank column, then a (Player, Salary) column pair per season under a merged
season header. Presentation only.
"""

import logging
import os
from pathlib import Path
from typing import Sequence, Union

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from mfl_salaries.transformation.schemas import SeasonRankings, SeasonReport

logger = logging.getLogger(__name__)

# Style constants
HEADER_FILL = PatternFill(fill_type="solid", fgColor="2D3748")
HEADER_FONT = Font(bold=True, color="FFFFFF", size=11)
SUBHEADER_FILL = PatternFill(fill_type="solid", fgColor="E2E8F0")
SUBHEADER_FONT = Font(bold=True, size=10)
EVEN_ROW_FILL = PatternFill(fill_type="solid", fgColor="F7FAFC")
CURRENCY_FMT = "$#,##0"
CENTER = Alignment(horizontal="center", vertical="center")
LEFT = Alignment(horizontal="left", vertical="center")
RIGHT = Alignment(horizontal="right", vertical="center")

RANK_WIDTH = 6
NAME_WIDTH = 25
SALARY_WIDTH = 14

HEADER_ROWS = 2


def season_column(season_index: int) -> int:
    """1-based column of the Player cell for the n-th season"""
    return 2 + season_index * 2


def build_position_sheet(
    ws: Worksheet,
    position_data: SeasonRankings,
    seasons: Sequence[int],
    top_n: int,
) -> int:
    """
    Fill one worksheet with the rankings of a position

    Args:
        ws: openpyxl worksheet
        position_data: season -> ranked entries
        seasons: Season order of the column groups
        top_n: Maximum number of data rows

    Returns:
        int: Number of data rows written
    """
    # Row 1: season headers
    cell = ws.cell(row=1, column=1, value="Rank")
    cell.font, cell.fill, cell.alignment = HEADER_FONT, HEADER_FILL, CENTER

    for season_index, season in enumerate(seasons):
        col = season_column(season_index)
        cell = ws.cell(row=1, column=col, value=season)
        cell.font, cell.fill, cell.alignment = HEADER_FONT, HEADER_FILL, CENTER
        ws.cell(row=1, column=col + 1).fill = HEADER_FILL
        ws.merge_cells(start_row=1, start_column=col, end_row=1, end_column=col + 1)

    # Row 2: sub-headers
    ws.cell(row=2, column=1).fill = SUBHEADER_FILL
    for season_index, _ in enumerate(seasons):
        col = season_column(season_index)
        cell = ws.cell(row=2, column=col, value="Player")
        cell.font, cell.fill, cell.alignment = SUBHEADER_FONT, SUBHEADER_FILL, LEFT
        cell = ws.cell(row=2, column=col + 1, value="Salary")
        cell.font, cell.fill, cell.alignment = SUBHEADER_FONT, SUBHEADER_FILL, CENTER

    # Data rows
    max_rows = max((len(position_data.get(season) or []) for season in seasons), default=0)
    row_count = min(max_rows, top_n)

    for row_index in range(row_count):
        excel_row = HEADER_ROWS + 1 + row_index
        row_fill = EVEN_ROW_FILL if row_index % 2 == 0 else None

        cell = ws.cell(row=excel_row, column=1, value=row_index + 1)
        cell.alignment = CENTER
        if row_fill:
            cell.fill = row_fill

        for season_index, season in enumerate(seasons):
            col = season_column(season_index)
            entries = position_data.get(season) or []
            entry = entries[row_index] if row_index < len(entries) else None

            name_cell = ws.cell(row=excel_row, column=col, value=entry.name if entry else None)
            name_cell.alignment = LEFT

            salary_cell = ws.cell(row=excel_row, column=col + 1)
            if entry:
                salary_cell.value = int(round(entry.salary))
                salary_cell.number_format = CURRENCY_FMT
                salary_cell.alignment = RIGHT

            if row_fill:
                name_cell.fill = row_fill
                salary_cell.fill = row_fill

    # Column widths
    ws.column_dimensions["A"].width = RANK_WIDTH
    for season_index, _ in enumerate(seasons):
        col = season_column(season_index)
        ws.column_dimensions[get_column_letter(col)].width = NAME_WIDTH
        ws.column_dimensions[get_column_letter(col + 1)].width = SALARY_WIDTH

    return row_count


def create_workbook(
    report: SeasonReport,
    seasons: Sequence[int],
    positions: Sequence[str],
    top_n: int,
) -> Workbook:
    """
    Build the workbook with one sheet per position, in position order

    Args:
        report: position -> season -> ranked entries
        seasons: Season column order
        positions: Sheet order
        top_n: Maximum rows per sheet

    Returns:
        Workbook: Unsaved openpyxl workbook
    """
    wb = Workbook()
    wb.remove(wb.active)

    for position in positions:
        ws = wb.create_sheet(title=position)
        rows = build_position_sheet(ws, report.get(position, {}), seasons, top_n)
        logger.debug(f"Sheet {position}: {rows} rows")

    return wb


def save_workbook(wb: Workbook, filepath: Union[str, Path]) -> str:
    """
    Save workbook to an .xlsx file

    Args:
        wb: Workbook to save
        filepath: Path to save file

    Returns:
        str: Path to saved file
    """
    filepath = str(filepath)
    logger.info(f"Saving workbook to: {filepath}")

    # Ensure directory exists
    directory = os.path.dirname(filepath)
    if directory:
        os.makedirs(directory, exist_ok=True)

    wb.save(filepath)
    return filepath
