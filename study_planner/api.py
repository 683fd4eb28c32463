#!/usr/bin/env python3
"""
Flask REST API for study plan export.

Turns the AI plan text posted by the frontend into an Excel download.
"""

from flask import Flask, request, jsonify, send_file
from flask_cors import CORS
import io
import sys
import logging
import traceback
from datetime import datetime, timezone

from study_planner import __version__
from study_planner.export.data_models import ExportStatus
from study_planner.export.filenames import parse_created_at
from study_planner.export.plan_exporter import PlanExporter
from study_planner.export.components.workbook_writer import WorkbookWriter
from study_planner.utils.config import config, get_env_bool, get_env_int

# Create Flask app
app = Flask(__name__)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler(sys.stdout)]
)
logger = logging.getLogger(__name__)

cors_origins_list = config.get_cors_origins()
CORS(app,
     origins=cors_origins_list,
     methods=['GET', 'POST', 'OPTIONS'],
     allow_headers=['Content-Type'],
     expose_headers=['Content-Disposition'])


def timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z')


@app.route('/health', methods=['GET'])
def health():
    """Health check endpoint."""
    logger.debug("Health check requested")
    return jsonify({
        'status': 'ok',
        'service': 'study_plan_export',
        'version': __version__,
        'timestamp': timestamp()
    }), 200


@app.route('/api/export', methods=['POST'])
def export_plan():
    """
    Export a study plan's table as an Excel download.

    Requires:
        - JSON body: {"plan": str,
                      "filename": str (optional, no extension),
                      "created_at": ISO 8601 date (optional, names the file when
                                    filename is omitted)}

    Returns:
        HTTP 200: .xlsx attachment named <filename>.xlsx
        HTTP 400: Bad request (body not an object, missing plan, bad filename
                  or created_at)
        HTTP 422: No table data found in plan
        HTTP 500: Workbook could not be built
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or not data:
        logger.warning(f"Missing JSON body from {request.remote_addr}")
        return jsonify({
            'error': 'Missing JSON body',
            'timestamp': timestamp()
        }), 400

    plan = data.get('plan')
    if not plan or not isinstance(plan, str):
        logger.warning(f"Missing plan field from {request.remote_addr}")
        return jsonify({
            'error': 'Missing required field: plan',
            'timestamp': timestamp()
        }), 400

    filename = data.get('filename') or None
    if filename is not None and not isinstance(filename, str):
        logger.warning(f"Invalid filename field from {request.remote_addr}")
        return jsonify({
            'error': 'Invalid field: filename must be a string',
            'timestamp': timestamp()
        }), 400

    created_at = None
    raw_created_at = data.get('created_at')
    if raw_created_at:
        try:
            created_at = parse_created_at(raw_created_at)
        except (TypeError, ValueError, AttributeError):
            logger.warning(f"Invalid created_at field from {request.remote_addr}: {raw_created_at!r}")
            return jsonify({
                'error': 'Invalid field: created_at must be an ISO 8601 date',
                'timestamp': timestamp()
            }), 400

    logger.info(f"Export request: {len(plan)} chars, filename={filename!r}, created_at={created_at}")

    try:
        result = PlanExporter().export_text(plan, filename, created_at)
    except Exception as e:
        logger.error(f"Export processing failed: {e}")
        logger.error(traceback.format_exc())
        return jsonify({
            'error': 'export_failed',
            'message': 'Failed to export to Excel',
            'details': str(e),
            'timestamp': timestamp()
        }), 500

    if result.status is ExportStatus.EMPTY:
        return jsonify({
            'error': 'no_table_data',
            'message': result.user_message,
            'timestamp': timestamp()
        }), 422

    if result.status is ExportStatus.FAILURE:
        return jsonify({
            'error': 'export_failed',
            'message': result.user_message,
            'details': result.error_details,
            'timestamp': timestamp()
        }), 500

    return send_file(
        io.BytesIO(result.content),
        mimetype=WorkbookWriter.MEDIA_TYPE,
        as_attachment=True,
        download_name=result.filename
    )


@app.errorhandler(404)
def not_found(error):
    """Handle 404 errors."""
    logger.warning(f"404 Not Found: {request.path} from {request.remote_addr}")
    return jsonify({
        'error': 'Endpoint not found',
        'path': request.path,
        'timestamp': timestamp()
    }), 404


@app.before_request
def log_request():
    """Log incoming requests."""
    logger.debug(f"{request.method} {request.path} from {request.remote_addr}")


@app.after_request
def log_response(response):
    """Log response status."""
    logger.debug(f"Response: {response.status_code}")
    return response


if __name__ == '__main__':
    # For local development only
    app.run(
        debug=get_env_bool('FLASK_DEBUG', False),
        host='0.0.0.0',
        port=get_env_int('PORT', 5000)
    )
