"""
Report models for the Mentoring Report Generator
Report types, academic metadata, normalized rows and the report document
"""

from collections import namedtuple, OrderedDict

# value -> (label, details label)
REPORT_TYPES = OrderedDict([
    ('student-participation', ('Student Participation Details', 'Participation Details')),
    ('student-achievement', ('Student Achievement Detail', 'Achievement Details')),
    ('call-record', ('Call Record', 'Call Details')),
    ('issue-raised', ('Issue Raised', 'Issue Description')),
    ('student-complete', ('Student Complete Detail', 'Complete Details')),
    ('subject-attendance', ('Subject Wise Attendance', 'Attendance Details')),
    ('subject-marks', ('Subject Wise FA/ST Marks', 'Marks Details')),
])

def _ordinal(n):
    if 10 <= n % 100 <= 20:
        suffix = 'th'
    else:
        suffix = {1: 'st', 2: 'nd', 3: 'rd'}.get(n % 10, 'th')
    return f"{n}{suffix}"

# Select options for each metadata field: (value, label)
METADATA_OPTIONS = {
    'program': [
        ('be-cse-ai', 'B.E. CSE (AI)'),
        ('be-cse-ml', 'B.E. CSE (ML)'),
        ('be-cse-general', 'B.E. CSE (General)'),
    ],
    'batch': [(year, year) for year in ('2022', '2023', '2024', '2025')],
    'academic_year': [
        ('2022-2023', '2022–2023'),
        ('2023-2024', '2023–2024'),
        ('2024-2025', '2024–2025'),
    ],
    'group': [(group, group) for group in ('4A', '4B', '4C')],
    'session': [
        ('jan-june-2024', 'Jan–June 2024'),
        ('july-dec-2024', 'July–Dec 2024'),
        ('jan-june-2025', 'Jan–June 2025'),
    ],
    'semester': [(str(n), f"{_ordinal(n)} Semester") for n in range(1, 9)],
}

# Field order matters: it drives form layout and the missing-field message
METADATA_FIELDS = OrderedDict([
    ('program', 'Program'),
    ('batch', 'Batch'),
    ('academic_year', 'Academic Year'),
    ('group', 'Group'),
    ('session', 'Session'),
    ('semester', 'Semester'),
])

TABLE_HEADERS = ['S.No.', 'Student Name', 'Roll Number', 'Details']
BLANK_CELL = 'N/A'

def is_report_type(value):
    return value in REPORT_TYPES

def report_type_label(value):
    """Display label for a report type value; unknown values are returned as-is"""
    return REPORT_TYPES[value][0] if value in REPORT_TYPES else (value or '')

def details_label(value):
    """Label of the details field for the manual entry form"""
    return REPORT_TYPES[value][1] if value in REPORT_TYPES else 'Details'

def option_label(field, value):
    for option_value, label in METADATA_OPTIONS.get(field, []):
        if option_value == value:
            return label
    return value

NormalizedRow = namedtuple('NormalizedRow', ['sequence_number', 'name', 'roll_number', 'details'])

ManualEntry = namedtuple('ManualEntry', ['entry_id', 'student_name', 'roll_number', 'details', 'remarks'])

IngestionResult = namedtuple('IngestionResult', ['rows', 'warnings', 'filename'])

class AcademicMetadata:
    """Six required classification fields plus the fixed department and institution"""

    def __init__(self, program='', batch='', academic_year='', group='', session='', semester='',
                 department='', institution=''):
        self.program = (program or '').strip()
        self.batch = (batch or '').strip()
        self.academic_year = (academic_year or '').strip()
        self.group = (group or '').strip()
        self.session = (session or '').strip()
        self.semester = (semester or '').strip()
        self.department = department
        self.institution = institution

    @classmethod
    def from_form(cls, form, department='', institution=''):
        """Build metadata from a submitted form (any mapping with .get)"""
        values = {field: form.get(field, '') for field in METADATA_FIELDS}
        return cls(department=department, institution=institution, **values)

    def missing_fields(self):
        """Labels of required fields that are still blank, in form order"""
        return [label for field, label in METADATA_FIELDS.items() if not getattr(self, field)]

    def invalid_fields(self):
        """Labels of filled-in fields whose value is not one of the field's options"""
        invalid = []
        for field, label in METADATA_FIELDS.items():
            value = getattr(self, field)
            if value and value not in {option for option, _ in METADATA_OPTIONS[field]}:
                invalid.append(label)
        return invalid

    def is_complete(self):
        return not self.missing_fields()

    def as_dict(self):
        return {field: getattr(self, field) for field in METADATA_FIELDS}

    def display_items(self, report_type):
        """Return (left, right) columns of (label, value) pairs for report headers"""
        def item(field):
            return (METADATA_FIELDS[field], option_label(field, getattr(self, field)))

        left = [('Report Type', report_type_label(report_type))]
        left.extend(item(field) for field in ('program', 'batch', 'academic_year'))
        right = [item(field) for field in ('group', 'session', 'semester')]
        return left, right

    def __eq__(self, other):
        if not isinstance(other, AcademicMetadata):
            return NotImplemented
        return (self.as_dict() == other.as_dict()
                and self.department == other.department
                and self.institution == other.institution)

    def __repr__(self):
        return f'<AcademicMetadata {self.program} {self.batch} {self.group}>'

class ReportDocument(namedtuple('ReportDocument', ['metadata', 'report_type', 'rows'])):
    """Metadata plus normalized rows; built fresh for each preview or export"""
    __slots__ = ()

    @property
    def is_empty(self):
        return len(self.rows) == 0

    @property
    def report_type_label(self):
        return report_type_label(self.report_type)

    def table_rows(self):
        """Display cells for each row; both the preview and the PDF render these"""
        return [
            [str(row.sequence_number),
             row.name or BLANK_CELL,
             row.roll_number or BLANK_CELL,
             row.details or BLANK_CELL]
            for row in self.rows
        ]
