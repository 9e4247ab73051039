"""Report access flags and gated report content."""

from __future__ import annotations

from flask import Blueprint, Response, jsonify, request
from flask_jwt_extended import jwt_required

from ..schemas import ReportAccessSchema
from ..services import report_access_service
from .common import load_visible_attempt, register_error_handlers

report_bp = Blueprint("report_bp", __name__)
register_error_handlers(report_bp)

access_schema = ReportAccessSchema(many=True)


@report_bp.get("/ping")
def ping():
    return jsonify({"module": "reports", "status": "ok"})


@report_bp.get("/<int:attempt_id>/access")
@jwt_required(optional=True)
def report_access(attempt_id: int):
    attempt = load_visible_attempt(attempt_id)
    rows = report_access_service.get_report_access(attempt.id)
    return jsonify(
        {
            "quiz_attempt_id": attempt.id,
            "is_paid": attempt.is_paid,
            "access": access_schema.dump(rows),
        }
    )


@report_bp.get("/<int:attempt_id>/<report_type>")
@jwt_required(optional=True)
def get_report(attempt_id: int, report_type: str):
    attempt = load_visible_attempt(attempt_id)
    report = report_access_service.build_report(attempt, report_type)
    if report_type == report_access_service.PDF_DOWNLOAD and request.args.get("format") == "html":
        return Response(
            report["html"],
            mimetype="text/html",
            headers={"Content-Disposition": f'inline; filename="bizmodelai-report-{attempt.id}.html"'},
        )
    return jsonify({"report": report})
