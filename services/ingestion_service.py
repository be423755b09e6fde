"""
Ingestion service for the Mentoring Report Generator
Parses uploaded CSV/Excel files and manual entries into normalized rows
"""

import csv
import io
import logging
from collections import OrderedDict
from io import BytesIO

import openpyxl
import xlrd

from config import Config
from models.report import IngestionResult, NormalizedRow
from utils.errors import EmptyWorkbook, RowParseError, UnsupportedFileType, ValidationError
from utils.records import cell_to_text, column_at, remaining_columns
from utils.validators import file_extension

logger = logging.getLogger(__name__)

class IngestionService:
    """Service for turning uploaded files and manual entries into NormalizedRow lists"""

    @staticmethod
    def detect_file_kind(filename, mimetype=None, allowed_extensions=None, allowed_mime_types=None):
        """Return 'csv', 'xlsx' or 'xls'.

        A recognized file extension decides; otherwise the declared MIME type does.
        Raises UnsupportedFileType when neither is recognized.
        """
        allowed_extensions = allowed_extensions or Config.ALLOWED_EXTENSIONS
        allowed_mime_types = allowed_mime_types or Config.ALLOWED_MIME_TYPES

        extension = file_extension(filename)
        if extension in allowed_extensions:
            return extension

        base_mime = (mimetype or '').split(';', 1)[0].strip().lower()
        if base_mime in allowed_mime_types:
            return allowed_mime_types[base_mime]

        raise UnsupportedFileType()

    @staticmethod
    def _build_record(headers, values):
        """Zip values against headers.

        Blank or repeated headers, and values past the last header, are keyed by
        their column index so no column is lost.
        """
        record = OrderedDict()
        for index in range(max(len(headers), len(values))):
            header = headers[index] if index < len(headers) else None
            key = header if header and header not in record else index
            value = values[index] if index < len(values) else ''
            record[key] = '' if value is None else value
        return record

    @staticmethod
    def decode_csv(data):
        """Decode uploaded CSV bytes.

        UTF-8 (with or without BOM) is tried first, then Windows-1252 and finally
        Latin-1, which accepts any byte. Returns (text, warning); warning is None
        when the file was valid UTF-8.
        """
        if not isinstance(data, bytes):
            return data, None
        try:
            return data.decode('utf-8-sig'), None
        except UnicodeDecodeError:
            pass

        for encoding, label in (('cp1252', 'Windows-1252'), ('latin-1', 'Latin-1')):
            try:
                text = data.decode(encoding)
            except UnicodeDecodeError:
                continue
            logger.warning("CSV is not valid UTF-8, decoded as %s", encoding)
            return text, (f"The file is not UTF-8 encoded and was read as {label}. "
                          f"Please check names with accented characters")

    @staticmethod
    def parse_csv(data):
        """Parse CSV text or bytes with a significant header row.

        Blank lines are skipped. Rows the reader rejects are skipped and reported
        as RowParseError; short rows are padded with empty strings and fields past
        the header are kept as extra positional columns.

        Returns (records, row_errors).
        """
        text, _ = IngestionService.decode_csv(data)
        reader = csv.reader(io.StringIO(text, newline=''), strict=True)

        headers = None
        records = []
        row_errors = []
        while True:
            try:
                row = next(reader)
            except StopIteration:
                break
            except csv.Error as e:
                row_errors.append(RowParseError(reader.line_num, str(e)))
                continue

            if not any(field.strip() for field in row):
                continue

            if headers is None:
                headers = [field.strip() for field in row]
                continue

            records.append(IngestionService._build_record(headers, row))

        for error in row_errors:
            logger.warning("Skipped CSV row: %s", error.message)
        return records, row_errors

    @staticmethod
    def _read_xlsx_rows(data):
        workbook = openpyxl.load_workbook(BytesIO(data), read_only=True, data_only=True)
        try:
            # Only the first sheet is read
            sheet = workbook.worksheets[0]
            return [list(row) for row in sheet.iter_rows(values_only=True)]
        finally:
            workbook.close()

    @staticmethod
    def _read_xls_rows(data):
        book = xlrd.open_workbook(file_contents=data)
        try:
            sheet = book.sheet_by_index(0)
            rows = []
            for row_index in range(sheet.nrows):
                row = []
                for cell in sheet.row(row_index):
                    if cell.ctype == xlrd.XL_CELL_DATE:
                        row.append(xlrd.xldate_as_datetime(cell.value, book.datemode))
                    elif cell.ctype in (xlrd.XL_CELL_EMPTY, xlrd.XL_CELL_BLANK):
                        row.append(None)
                    else:
                        row.append(cell.value)
                rows.append(row)
            return rows
        finally:
            book.release_resources()

    @staticmethod
    def parse_workbook(data, kind='xlsx'):
        """Parse the first sheet of an Excel workbook into raw records.

        Row 0 holds the headers. Completely blank rows are ignored.
        Raises EmptyWorkbook when no data row exists and ValidationError when
        the file cannot be read as a workbook.
        """
        try:
            if kind == 'xls':
                rows = IngestionService._read_xls_rows(data)
            else:
                rows = IngestionService._read_xlsx_rows(data)
        except Exception as e:
            logger.warning("Could not read %s workbook: %s", kind, e)
            raise ValidationError(
                "Could not read the spreadsheet. Please check that it is a valid Excel file"
            ) from e

        if len(rows) < 2:
            raise EmptyWorkbook()

        headers = [cell_to_text(cell) for cell in rows[0]]
        records = []
        for row in rows[1:]:
            if not any(cell_to_text(cell) for cell in row):
                continue
            records.append(IngestionService._build_record(headers, row))

        if not records:
            raise EmptyWorkbook()
        return records

    @staticmethod
    def normalize_records(records):
        """Map raw records to NormalizedRow by position: name, roll number, then details.

        Every non-empty column after the second is joined with ', ' into details;
        empty cells are left out so a sparse row does not produce ', , ' runs.
        Sequence numbers follow input order.
        """
        rows = []
        for index, record in enumerate(records, start=1):
            details = ', '.join(value for value in remaining_columns(record, 2) if value)
            rows.append(NormalizedRow(
                sequence_number=index,
                name=column_at(record, 0) or '',
                roll_number=column_at(record, 1) or '',
                details=details,
            ))
        return rows

    @staticmethod
    def normalize_entries(entries):
        """Map manual entries to NormalizedRow; remarks are not part of the row"""
        return [
            NormalizedRow(
                sequence_number=index,
                name=entry.student_name,
                roll_number=entry.roll_number,
                details=entry.details or '',
            )
            for index, entry in enumerate(entries, start=1)
        ]

    @staticmethod
    def ingest_file(filename, mimetype, data):
        """Detect, parse and normalize an uploaded file.

        UnsupportedFileType and EmptyWorkbook abort ingestion; per-row CSV problems
        and an empty CSV only add warnings.
        """
        kind = IngestionService.detect_file_kind(filename, mimetype)
        warnings = []

        if kind == 'csv':
            text, decode_warning = IngestionService.decode_csv(data)
            if decode_warning:
                warnings.append(decode_warning)
            records, row_errors = IngestionService.parse_csv(text)
            warnings.extend(error.message for error in row_errors)
            if not records:
                warnings.append('No student rows were found in the file')
        else:
            records = IngestionService.parse_workbook(data, kind)

        rows = IngestionService.normalize_records(records)
        logger.info("Ingested %s (%s): %d rows, %d warnings", filename, kind, len(rows), len(warnings))
        return IngestionResult(rows=rows, warnings=warnings, filename=filename)
