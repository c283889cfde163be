import json
from typing import Optional

from flask import Flask, request

from .auth import verify_webhook
from .config import AuditConfig, load_config
from .constants import DEBUG_MODE, MESSAGE_PREFIX, SEVERITY_ERROR
from .detection import classify_event
from .errors import AuditError
from .models import LogEntry
from .services import CloudLoggingSink
from .utils import make_timestamp_formatter


def create_app(config: Optional[AuditConfig] = None, sink=None):
    app = Flask(__name__)
    if config is None:
        config = load_config()
    if sink is None:
        sink = CloudLoggingSink.from_config(config)
    format_ts = make_timestamp_formatter(config.tzinfo)

    def report_failure(exc):
        if DEBUG_MODE:
            print(f"[ERROR] {exc!r}")
        try:
            sink.emit(LogEntry(message=f"{MESSAGE_PREFIX}audit log request failed: {exc!r}", severity=SEVERITY_ERROR))
        except Exception as sink_exc:
            print(f"[ERROR] Falha ao reportar erro ao sink: {sink_exc!r}")

    @app.route('/health', methods=['GET'])
    def health():
        return {'status': 'ok', 'service': 'spinnaker-audit-log'}, 200

    @app.route('/', methods=['POST'])
    @app.route('/spinnaker', methods=['POST'])
    def spinnaker_audit_log():
        data = request.get_json(silent=True)
        if DEBUG_MODE:
            payload = data.get('payload') if isinstance(data, dict) else None
            print(f"[DEBUG] ** payload={json.dumps(payload)}")

        try:
            verify_webhook(request.headers.get('Authorization', ''), config)
            entry = classify_event(data, format_ts)
            if entry is not None:
                sink.emit(entry)
            return f"Success: {data['eventName']}", 200
        except AuditError as e:
            if DEBUG_MODE:
                print(f"[DEBUG] Requisição rejeitada ({e.status_code}): {e.message}")
            return e.message, e.status_code
        except Exception as e:
            report_failure(e)
            return str(e), getattr(e, 'status_code', None) or 500

    return app
