"""Styled workbook output for projection reports."""
from .writer import ExcelWriter
