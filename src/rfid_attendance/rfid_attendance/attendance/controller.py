from __future__ import annotations

import hmac

from flask import Flask, Response, g, jsonify, request

from ..container import Container
from ..core.enums import ScanOutcome
from ..core.exceptions import DomainError
from ..logging_config import generate_request_id, get_logger, log_with_context, request_id_var

logger = get_logger("http")

_STATUS_BY_OUTCOME = {
    ScanOutcome.NO_CARD: 400,
    ScanOutcome.ERROR: 503,
}


def _token(outcome: ScanOutcome) -> Response:
    # Reader firmware reads exactly one line per request.
    return Response(outcome.value, status=_STATUS_BY_OUTCOME.get(outcome, 200), mimetype="text/plain")


def register(app: Flask, container: Container) -> None:
    @app.before_request
    def _bind_request_id():
        g.request_id_token = request_id_var.set(request.headers.get("X-Request-ID") or generate_request_id())

    @app.teardown_request
    def _unbind_request_id(_exc=None):
        token = g.pop("request_id_token", None)
        if token is not None:
            request_id_var.reset(token)

    @app.route("/", methods=["GET"], endpoint="health")
    def health():
        return Response("RFID Server is running", mimetype="text/plain")

    @app.route("/log", methods=["GET", "POST"], endpoint="log_scan")
    def log_scan():
        card_no = request.values.get("card_no")
        decision = container.scan_service.submit_scan(card_no)
        return _token(decision.outcome)

    @app.route("/admin/reference/reload", methods=["POST"], endpoint="reload_reference")
    def reload_reference():
        supplied = request.headers.get("X-Admin-Token", "")
        if not container.admin_token or not hmac.compare_digest(supplied.encode("utf-8"), container.admin_token.encode("utf-8")):
            log_with_context(
                logger,
                "WARNING",
                "Rejected reference reload",
                extra_data={"remote_addr": request.remote_addr},
            )
            return jsonify({"success": False, "message": "forbidden"}), 403

        try:
            snapshot = container.reference_service.reload()
        except DomainError as e:
            return jsonify({"success": False, "message": str(e)}), 409

        return jsonify({"success": True, **snapshot.summary()}), 200
