"""
Dashboard routes for the Mentoring Report Generator
Every action posts the full form state and re-renders from it
"""

from flask import Blueprint, current_app, jsonify, make_response, render_template, request

from models.dashboard import DashboardState, INPUT_METHODS
from models.report import METADATA_FIELDS, METADATA_OPTIONS, REPORT_TYPES, TABLE_HEADERS, details_label
from routes.auth import login_required
from services.entry_service import ManualEntryService
from services.ingestion_service import IngestionService
from services.report_service import ReportService
from utils.errors import ExportFailure, ReportError, ValidationError
from utils.notifications import notify, notify_error

dashboard_bp = Blueprint('dashboard', __name__)

def is_ajax_request():
    """Check if the request was sent with XMLHttpRequest"""
    return request.headers.get('X-Requested-With') == 'XMLHttpRequest'

def _read_state():
    return DashboardState.from_form(
        request.form,
        department=current_app.config['DEPARTMENT_NAME'],
        institution=current_app.config['INSTITUTION_NAME'],
    )

def _active_rows(state):
    """Normalized rows produced by the active input method only"""
    if state.input_method == 'manual':
        return IngestionService.normalize_entries(state.entries)
    return state.file_rows

def _ingest_upload(state):
    """Ingest an attached file, if any, and return the updated state.

    A rejected file leaves the previously loaded rows in place.
    """
    file = request.files.get('file')
    if file is None or not file.filename:
        return state, None

    result = IngestionService.ingest_file(file.filename, file.mimetype, file.read())
    state = state.replace(input_method='file', file_name=result.filename, file_rows=result.rows)
    if result.warnings:
        notify('Warning', f'Some rows were skipped: {"; ".join(result.warnings[:5])}', 'warning')
    return state, result

def _render_dashboard(state, entry_form=None):
    rows = _active_rows(state)
    readiness = ReportService.check_readiness(state.report_type, state.metadata, state.input_method, rows)
    return render_template(
        'dashboard/index.html',
        state=state,
        rows=rows,
        readiness=readiness,
        entry_form=entry_form or {},
        report_types=REPORT_TYPES,
        metadata_fields=METADATA_FIELDS,
        metadata_options=METADATA_OPTIONS,
        details_label=details_label(state.report_type),
        department=current_app.config['DEPARTMENT_NAME'],
        institution=current_app.config['INSTITUTION_NAME'],
    )

@dashboard_bp.route('/dashboard', methods=['GET', 'POST'])
@login_required
def index():
    """Dashboard form; a POST re-renders with the submitted state"""
    if request.method == 'GET':
        return _render_dashboard(DashboardState())

    state = _read_state()
    method = request.form.get('switch_method')
    if method in INPUT_METHODS:
        state = state.replace(input_method=method)
    return _render_dashboard(state)

@dashboard_bp.route('/dashboard/upload', methods=['POST'])
@login_required
def upload():
    """Parse an uploaded CSV/Excel file and keep its rows in the form"""
    state = _read_state()
    file = request.files.get('file')
    if file is None or not file.filename:
        error_msg = 'No file selected'
        if is_ajax_request():
            return jsonify({'success': False, 'message': error_msg}), 400
        notify('Error', error_msg, 'error')
        return _render_dashboard(state)

    try:
        state, result = _ingest_upload(state)
    except ValidationError as e:
        current_app.logger.info("Upload rejected: %s", e.message)
        if is_ajax_request():
            return jsonify({'success': False, 'message': e.message}), 400
        notify_error(e)
        return _render_dashboard(state)

    message = f'File uploaded successfully! {len(result.rows)} student rows loaded.'
    if is_ajax_request():
        return jsonify({
            'success': True,
            'message': message,
            'filename': result.filename,
            'rows': [row._asdict() for row in result.rows],
            'warnings': result.warnings,
        })
    notify('Success', message, 'success')
    return _render_dashboard(state)

@dashboard_bp.route('/dashboard/file/remove', methods=['POST'])
@login_required
def remove_file():
    state = _read_state().replace(file_name='', file_rows=[])
    return _render_dashboard(state)

@dashboard_bp.route('/dashboard/entries/add', methods=['POST'])
@login_required
def add_entry():
    """Append a manually entered student"""
    state = _read_state().replace(input_method='manual')
    try:
        entry = ManualEntryService.create_entry(request.form)
    except ValidationError as e:
        notify_error(e)
        entry_form = {key: request.form.get(key, '') for key in ('student_name', 'roll_number', 'details', 'remarks')}
        return _render_dashboard(state, entry_form=entry_form)

    state = state.replace(entries=ManualEntryService.add_entry(state.entries, entry))
    notify('Success', 'Student entry added successfully!', 'success')
    return _render_dashboard(state)

@dashboard_bp.route('/dashboard/entries/remove', methods=['POST'])
@login_required
def remove_entry():
    state = _read_state().replace(input_method='manual')
    entry_id = request.form.get('remove_entry_id', '')
    state = state.replace(entries=ManualEntryService.remove_entry(state.entries, entry_id))
    return _render_dashboard(state)

@dashboard_bp.route('/dashboard/preview', methods=['POST'])
@login_required
def preview():
    """Render the report preview.

    Without any rows the preview shows an explicit empty state; a missing report
    type or metadata keeps the user on the dashboard.
    """
    state = _read_state()
    try:
        state, _ = _ingest_upload(state)
    except ValidationError as e:
        notify_error(e)
        return _render_dashboard(state)

    rows = _active_rows(state)
    readiness = ReportService.check_readiness(state.report_type, state.metadata, state.input_method, rows)
    blocking = [problem for problem in readiness.problems if problem.category != 'rows']
    if blocking:
        for problem in blocking:
            notify('Error', problem.message, 'error')
        return _render_dashboard(state)

    document = ReportService.build_document(state.metadata, state.report_type, rows)
    if document.is_empty:
        notify('Warning', 'There are no student rows yet. Upload a file or add entries to fill the report.', 'warning')
    return render_template('dashboard/preview.html', state=state, document=document, headers=TABLE_HEADERS)

@dashboard_bp.route('/dashboard/export', methods=['POST'])
@login_required
def export_pdf():
    """Validate, assemble and download the report as a PDF"""
    state = _read_state()
    try:
        state, _ = _ingest_upload(state)
    except ValidationError as e:
        notify_error(e)
        return _render_dashboard(state)

    rows = _active_rows(state)
    readiness = ReportService.check_readiness(state.report_type, state.metadata, state.input_method, rows)
    if not readiness.ready:
        for problem in readiness.problems:
            notify('Error', problem.message, 'error')
        return _render_dashboard(state)

    try:
        document = ReportService.build_document(state.metadata, state.report_type, rows)
        pdf_bytes = ReportService.generate_pdf(document, current_app.config['PDF_HEADER_FILL'])
        filename = ReportService.build_filename(state.report_type, state.metadata.batch)
        response = make_response(pdf_bytes)
        response.headers['Content-Type'] = 'application/pdf'
        response.headers.set('Content-Disposition', 'attachment', filename=filename)
    except ReportError as e:
        notify_error(e)
        return _render_dashboard(state)
    except Exception:
        current_app.logger.exception("Export failed for %s", state.report_type)
        notify_error(ExportFailure())
        return _render_dashboard(state)

    current_app.logger.info("Exported %s with %d rows", filename, len(document.rows))
    return response
