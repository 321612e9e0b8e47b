from datetime import datetime, timezone
from flask import Blueprint, current_app, jsonify
from models import db

main_bp = Blueprint('main', __name__)


@main_bp.route('/health')
def health():
    """Liveness check including a trivial database round trip."""
    try:
        db.session.execute(db.text('SELECT 1'))
        database = 'ok'
    except Exception as e:
        current_app.logger.error(f"Health check database error: {e}")
        database = f'error: {e}'
    return jsonify({
        'status': 'ok' if database == 'ok' else 'degraded',
        'database': database,
        'timestamp': datetime.now(timezone.utc).isoformat()
    })
