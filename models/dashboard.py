"""
Dashboard state for the Mentoring Report Generator
The form state travels with every submission; nothing is stored on the server
"""

from models.report import AcademicMetadata, ManualEntry, NormalizedRow

INPUT_METHODS = ('file', 'manual')

class DashboardState:
    """Report type, metadata, active input method and the rows/entries gathered so far"""

    def __init__(self, report_type='', metadata=None, input_method='file', file_name='',
                 file_rows=None, entries=None):
        self.report_type = report_type or ''
        self.metadata = metadata or AcademicMetadata()
        self.input_method = input_method if input_method in INPUT_METHODS else 'file'
        self.file_name = file_name or ''
        self.file_rows = list(file_rows or [])
        self.entries = list(entries or [])

    @classmethod
    def from_form(cls, form, department='', institution=''):
        """Rebuild the state from a posted form (werkzeug MultiDict)"""
        file_rows = [
            NormalizedRow(index, name, roll_number, details)
            for index, (name, roll_number, details) in enumerate(zip(
                form.getlist('file_row_name'),
                form.getlist('file_row_roll'),
                form.getlist('file_row_details'),
            ), start=1)
        ]
        entries = [
            ManualEntry(*values)
            for values in zip(
                form.getlist('entry_id'),
                form.getlist('entry_student_name'),
                form.getlist('entry_roll_number'),
                form.getlist('entry_details'),
                form.getlist('entry_remarks'),
            )
        ]
        return cls(
            report_type=form.get('report_type', '').strip(),
            metadata=AcademicMetadata.from_form(form, department, institution),
            input_method=form.get('input_method', 'file'),
            file_name=form.get('file_name', ''),
            file_rows=file_rows,
            entries=entries,
        )

    def replace(self, **changes):
        """Return a copy with the given attributes changed"""
        values = {
            'report_type': self.report_type,
            'metadata': self.metadata,
            'input_method': self.input_method,
            'file_name': self.file_name,
            'file_rows': self.file_rows,
            'entries': self.entries,
        }
        values.update(changes)
        return DashboardState(**values)

    def __repr__(self):
        return (f'<DashboardState {self.report_type or "-"} {self.input_method} '
                f'rows={len(self.file_rows)} entries={len(self.entries)}>')
