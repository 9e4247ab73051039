"""Admin endpoints: stats, payments, refunds and maintenance jobs."""

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, abort, jsonify, request
from flask_jwt_extended import current_user, jwt_required
from sqlalchemy import func

from ..extensions import db
from ..models import EmailLog, Payment, QuizAttempt, User
from ..schemas import PaymentListQuerySchema, PaymentSchema, RefundCreateSchema, RefundSchema
from ..services import payment_service, report_access_service, retention_service, retry_queue
from .common import register_error_handlers, require_admin

admin_bp = Blueprint("admin_bp", __name__)
register_error_handlers(admin_bp)

payment_schema = PaymentSchema()
payments_schema = PaymentSchema(many=True)
payment_query_schema = PaymentListQuerySchema()
refund_create_schema = RefundCreateSchema()
refund_schema = RefundSchema()


@admin_bp.before_request
@jwt_required()
def _admin_only():
    require_admin()


@admin_bp.get("/ping")
def ping():
    return jsonify({"module": "admin", "status": "ok"})


@admin_bp.get("/stats")
def stats():
    revenue = (
        db.session.query(func.coalesce(func.sum(Payment.amount_cents), 0))
        .filter(Payment.status.in_(("completed", "partially_refunded", "refunded")))
        .scalar()
    )
    email_counts = dict(
        db.session.query(EmailLog.status, func.count(EmailLog.id)).group_by(EmailLog.status).all()
    )
    payment_counts = dict(
        db.session.query(Payment.status, func.count(Payment.id)).group_by(Payment.status).all()
    )
    return jsonify(
        {
            "users": {
                "total": User.query.count(),
                "temporary": User.query.filter_by(is_temporary=True).count(),
                "paid": User.query.filter_by(is_paid=True).count(),
            },
            "quiz_attempts": {
                "total": QuizAttempt.query.count(),
                "paid": QuizAttempt.query.filter_by(is_paid=True).count(),
            },
            "payments": payment_counts,
            "gross_revenue_cents": int(revenue or 0),
            "report_unlocks": report_access_service.get_unlock_stats(),
            "emails": email_counts,
            "retry_queue_size": retry_queue.queue_size(),
        }
    )


@admin_bp.get("/payments")
def list_payments():
    params = payment_query_schema.load(request.args)
    page = payment_service.list_all_payments(params.get("status"), params["page"], params["per_page"])
    return jsonify(
        {
            "items": payments_schema.dump(page["items"]),
            "total": page["total"],
            "page": page["page"],
            "per_page": page["per_page"],
        }
    )


@admin_bp.post("/payments/<int:payment_id>/refund")
def refund_payment(payment_id: int):
    payment = db.session.get(Payment, payment_id)
    if payment is None:
        abort(HTTPStatus.NOT_FOUND)
    payload = refund_create_schema.load(request.get_json() or {})
    refund = payment_service.create_refund(
        payment,
        amount_cents=payload.get("amount_cents"),
        reason=payload["reason"],
        admin=current_user,
    )
    return (
        jsonify({"refund": refund_schema.dump(refund), "payment": payment_schema.dump(payment)}),
        HTTPStatus.CREATED,
    )


@admin_bp.post("/cleanup")
def cleanup():
    dry_run = request.args.get("dry_run", "").lower() in {"1", "true", "yes"}
    return jsonify(retention_service.cleanup_expired_data(dry_run=dry_run))


@admin_bp.get("/retry-queue")
def retry_queue_size():
    return jsonify({"size": retry_queue.queue_size()})


@admin_bp.post("/retry-queue")
def process_retry_queue():
    counts = retry_queue.process_queue()
    return jsonify({"processed": counts, "size": retry_queue.queue_size()})
