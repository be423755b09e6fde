"""
Error types for the Mentoring Report Generator
Every error carries a short title and a user-facing message for notifications
"""

class ReportError(Exception):
    """Base class for report pipeline errors"""
    title = 'Error'
    default_message = 'Something went wrong'

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)

class ValidationError(ReportError):
    """Raised when user input cannot be accepted"""
    default_message = 'Invalid input'

class UnsupportedFileType(ValidationError):
    """Raised when an uploaded file is not CSV or Excel"""
    default_message = 'Unsupported file type. Please upload only CSV or Excel files'

class EmptyWorkbook(ValidationError):
    """Raised when a workbook has a header row but no data rows"""
    default_message = 'Empty file. The spreadsheet has no student rows below the header'

class MissingRequiredField(ValidationError):
    """Raised when a manual entry or metadata field is blank"""
    default_message = 'Please fill all required fields'

    def __init__(self, message=None, fields=None):
        self.fields = list(fields or [])
        super().__init__(message)

class RowParseError(ReportError):
    """A single spreadsheet row that could not be parsed; recorded, not fatal"""
    title = 'Warning'

    def __init__(self, row_number, reason):
        self.row_number = row_number
        self.reason = reason
        super().__init__(f"Row {row_number}: {reason}")

class ExportFailure(ReportError):
    """Raised when a PDF cannot be assembled or serialized"""
    default_message = 'Failed to generate PDF. Please try again.'
