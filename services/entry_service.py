"""
Manual entry service for the Mentoring Report Generator
"""

import uuid

from models.report import ManualEntry
from utils.errors import MissingRequiredField

class ManualEntryService:
    """Builds and maintains the append-only list of manually entered students"""

    @staticmethod
    def create_entry(form):
        """Create a ManualEntry from form data; student name and roll number are required"""
        student_name = (form.get('student_name') or '').strip()
        roll_number = (form.get('roll_number') or '').strip()

        missing = []
        if not student_name:
            missing.append('Student Name')
        if not roll_number:
            missing.append('Roll Number')
        if missing:
            raise MissingRequiredField("Please fill student name and roll number", fields=missing)

        return ManualEntry(
            entry_id=uuid.uuid4().hex[:12],
            student_name=student_name,
            roll_number=roll_number,
            details=(form.get('details') or '').strip(),
            remarks=(form.get('remarks') or '').strip(),
        )

    @staticmethod
    def add_entry(entries, entry):
        """Return a new list with the entry appended"""
        return list(entries) + [entry]

    @staticmethod
    def remove_entry(entries, entry_id):
        """Return a new list without the entry with the given id"""
        return [entry for entry in entries if entry.entry_id != entry_id]
