"""
Unit tests for the entry, report and auth services
"""

import re
import unittest
from io import BytesIO

import pdfplumber

from models.report import AcademicMetadata, ManualEntry, NormalizedRow, ReportDocument
from services.auth_service import AuthService
from services.entry_service import ManualEntryService
from services.report_service import ReportService
from utils.errors import ExportFailure, MissingRequiredField

def full_metadata(**overrides):
    values = {
        'program': 'be-cse-general',
        'batch': '2024',
        'academic_year': '2024-2025',
        'group': '4C',
        'session': 'jan-june-2025',
        'semester': '6',
    }
    values.update(overrides)
    return AcademicMetadata(
        department='Department of Computer Science and Engineering',
        institution='Chitkara University Institute of Engineering & Technology',
        **values
    )

THREE_ROWS = [
    NormalizedRow(1, 'Alice', '101', 'GoodWork'),
    NormalizedRow(2, 'Bob', '102', 'NeedsHelp'),
    NormalizedRow(3, 'Cara', '103', ''),
]

def pdf_text(pdf_bytes):
    with pdfplumber.open(BytesIO(pdf_bytes)) as pdf:
        return '\n'.join(page.extract_text() or '' for page in pdf.pages)

class TestManualEntryService(unittest.TestCase):

    def test_create_entry(self):
        entry = ManualEntryService.create_entry({
            'student_name': ' Alice ', 'roll_number': '101', 'details': 'Debate', 'remarks': '',
        })

        self.assertEqual(entry.student_name, 'Alice')
        self.assertEqual(entry.roll_number, '101')
        self.assertTrue(entry.entry_id)

    def test_missing_required_fields_rejected(self):
        entries = [ManualEntry('a', 'Alice', '101', '', '')]
        for form in ({'student_name': '', 'roll_number': '102'},
                     {'student_name': 'Bob', 'roll_number': '   '},
                     {}):
            with self.assertRaises(MissingRequiredField):
                entries = ManualEntryService.add_entry(entries, ManualEntryService.create_entry(form))
        self.assertEqual(len(entries), 1)

    def test_missing_fields_named(self):
        with self.assertRaises(MissingRequiredField) as ctx:
            ManualEntryService.create_entry({'details': 'only details'})
        self.assertEqual(ctx.exception.fields, ['Student Name', 'Roll Number'])

    def test_add_and_remove_return_new_lists(self):
        first = ManualEntryService.create_entry({'student_name': 'Alice', 'roll_number': '1'})
        second = ManualEntryService.create_entry({'student_name': 'Bob', 'roll_number': '2'})
        entries = ManualEntryService.add_entry([], first)
        entries2 = ManualEntryService.add_entry(entries, second)

        self.assertEqual(len(entries), 1)
        self.assertEqual([e.student_name for e in entries2], ['Alice', 'Bob'])

        remaining = ManualEntryService.remove_entry(entries2, first.entry_id)
        self.assertEqual([e.student_name for e in remaining], ['Bob'])
        self.assertEqual(len(entries2), 2)

class TestReadiness(unittest.TestCase):

    def test_ready(self):
        result = ReportService.check_readiness('call-record', full_metadata(), 'file', THREE_ROWS)
        self.assertTrue(result.ready)
        self.assertEqual(result.problems, [])

    def test_any_missing_metadata_field_blocks(self):
        for field in ('program', 'batch', 'academic_year', 'group', 'session', 'semester'):
            result = ReportService.check_readiness(
                'call-record', full_metadata(**{field: ''}), 'file', THREE_ROWS
            )
            self.assertFalse(result.ready, field)
            self.assertEqual(result.categories, ['metadata'])

    def test_missing_type_and_metadata_enumerated(self):
        result = ReportService.check_readiness('', full_metadata(session=''), 'manual', THREE_ROWS)

        self.assertFalse(result.ready)
        self.assertEqual(result.categories, ['report_type', 'metadata'])
        self.assertIn('report type', result.problems[0].message)
        self.assertIn('Session', result.problems[1].message)

    def test_unlisted_metadata_value_blocks(self):
        result = ReportService.check_readiness('call-record', full_metadata(batch='20 24'), 'file', THREE_ROWS)

        self.assertFalse(result.ready)
        self.assertEqual(result.categories, ['metadata'])
        self.assertEqual(result.problems[0].message, 'Please choose a listed value for: Batch')

    def test_unknown_report_type(self):
        result = ReportService.check_readiness('weekly-summary', full_metadata(), 'file', THREE_ROWS)
        self.assertEqual(result.categories, ['report_type'])

    def test_active_method_without_rows(self):
        file_result = ReportService.check_readiness('call-record', full_metadata(), 'file', [])
        manual_result = ReportService.check_readiness('call-record', full_metadata(), 'manual', [])

        self.assertEqual(file_result.problems[0].message, 'Please upload a file')
        self.assertEqual(manual_result.problems[0].message, 'Please add at least one student entry')

class TestDocumentAssembly(unittest.TestCase):

    def test_build_document_is_fresh(self):
        rows = list(THREE_ROWS)
        document = ReportService.build_document(full_metadata(), 'call-record', rows)
        rows.append(NormalizedRow(4, 'Dan', '104', ''))

        self.assertEqual(len(document.rows), 3)
        self.assertEqual(document.report_type, 'call-record')

    def test_no_placeholder_row_for_empty_input(self):
        document = ReportService.build_document(full_metadata(), 'call-record', [])
        self.assertTrue(document.is_empty)
        self.assertEqual(document.rows, ())

    def test_filename_pattern(self):
        self.assertEqual(
            ReportService.build_filename('call-record', '2024', 1718000000000),
            'call-record_2024_1718000000000.pdf'
        )
        self.assertEqual(
            ReportService.build_filename('Call  Record\tsummary', '2023', 5),
            'Call_Record_summary_2023_5.pdf'
        )
        self.assertRegex(ReportService.build_filename('issue-raised', '2025'), r'^issue-raised_2025_\d{13}\.pdf$')

class TestPdfGeneration(unittest.TestCase):

    def test_pdf_contains_header_metadata_and_rows(self):
        document = ReportService.build_document(full_metadata(), 'subject-attendance', THREE_ROWS)
        pdf_bytes = ReportService.generate_pdf(document)
        text = pdf_text(pdf_bytes)

        self.assertTrue(pdf_bytes.startswith(b'%PDF'))
        self.assertIn('Department of Computer Science and Engineering', text)
        self.assertIn('Chitkara University Institute of Engineering & Technology', text)
        self.assertIn('Report Type: Subject Wise Attendance', text)
        self.assertIn('Batch: 2024', text)
        self.assertIn('Semester: 6th Semester', text)
        self.assertIn('S.No. Student Name Roll Number Details', text)

    def test_pdf_cells_match_preview_cells(self):
        document = ReportService.build_document(full_metadata(), 'call-record', THREE_ROWS)
        lines = [re.sub(r'\s+', ' ', line).strip() for line in pdf_text(ReportService.generate_pdf(document)).splitlines()]

        for cells in document.table_rows():
            self.assertIn(' '.join(cells), lines)

    def test_long_report_paginates(self):
        rows = [NormalizedRow(i, f'Student {i}', f'R{i:04d}', 'Regular attendance') for i in range(1, 121)]
        document = ReportService.build_document(full_metadata(), 'subject-attendance', rows)
        pdf_bytes = ReportService.generate_pdf(document)

        with pdfplumber.open(BytesIO(pdf_bytes)) as pdf:
            self.assertGreater(len(pdf.pages), 1)
            second_page = pdf.pages[1].extract_text() or ''
        self.assertIn('S.No. Student Name Roll Number Details', second_page)
        self.assertIn('Student 120', pdf_text(pdf_bytes))

    def test_empty_document_not_exported(self):
        document = ReportService.build_document(full_metadata(), 'call-record', [])
        with self.assertRaises(ExportFailure):
            ReportService.generate_pdf(document)

    def test_invalid_report_type_not_exported(self):
        document = ReportDocument(full_metadata(), '', tuple(THREE_ROWS))
        with self.assertRaises(ExportFailure):
            ReportService.generate_pdf(document)

class TestAuthService(unittest.TestCase):

    def test_validate_sign_in(self):
        self.assertTrue(AuthService.validate_sign_in('Asha Rao', 'asha@example.com')[0])
        self.assertFalse(AuthService.validate_sign_in('', 'asha@example.com')[0])
        self.assertFalse(AuthService.validate_sign_in('Asha', 'not-an-email')[0])

    def test_validate_sign_in_accepts_accented_names(self):
        self.assertTrue(AuthService.validate_sign_in('José Núñez', 'jose@example.com')[0])
        self.assertTrue(AuthService.validate_sign_in("Zoë O'Brien-Ångström", 'zoe@example.com')[0])
        self.assertFalse(AuthService.validate_sign_in('R2D2', 'r2@example.com')[0])
        self.assertFalse(AuthService.validate_sign_in('snake_case', 's@example.com')[0])

    def test_verify_otp(self):
        self.assertTrue(AuthService.verify_otp('123456', '123456')[0])
        success, message = AuthService.verify_otp('654321', '123456')
        self.assertFalse(success)
        self.assertIn('Invalid OTP', message)
        success, message = AuthService.verify_otp('12', '123456')
        self.assertFalse(success)
        self.assertIn('6-digit', message)

if __name__ == '__main__':
    unittest.main()
