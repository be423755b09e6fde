"""
Raw record helpers for the Mentoring Report Generator
Uploaded files have no enforced schema, so columns are read by position
"""

from datetime import datetime, date, time

def cell_to_text(value):
    """Convert a spreadsheet cell to display text: 101.0 -> '101', dates -> ISO, None -> ''"""
    if value is None:
        return ''
    if isinstance(value, bool):
        return 'TRUE' if value else 'FALSE'
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, datetime):
        if value.time() == time(0, 0):
            return value.date().isoformat()
        return value.isoformat(sep=' ')
    if isinstance(value, (date, time)):
        return value.isoformat()
    return str(value).strip()

def column_at(record, index):
    """Return the text of the index-th column of a raw record, or None if it has no such column.

    A record is either an ordered mapping (column name -> value) or a plain sequence.
    """
    if index < 0:
        return None
    values = list(record.values()) if hasattr(record, 'values') else list(record)
    if index >= len(values):
        return None
    return cell_to_text(values[index])

def remaining_columns(record, start):
    """Texts of every column from position start onwards"""
    values = list(record.values()) if hasattr(record, 'values') else list(record)
    return [cell_to_text(value) for value in values[start:]]
