from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from loguru import logger

from order_desk.api.deps import get_escalation_mailer
from order_desk.api.schemas import EscalationRequest
from order_desk.escalation.mailer import Escalation, EscalationError, EscalationMailer

router = APIRouter(tags=["escalation"])

INTERNAL_ESCALATION_ERROR = "Internal error sending escalation."


@router.post("/escalate")
def escalate(req: EscalationRequest, mailer: EscalationMailer = Depends(get_escalation_mailer)):
    reason = (req.reason or "").strip()
    if not reason:
        return JSONResponse(status_code=400, content={"success": False, "error": "Escalation reason is required."})

    escalation = Escalation(
        reason=reason,
        order_number=(req.order_number or "").strip() or None,
        customer_name=req.customer_name,
        customer_email=req.customer_email,
        customer_phone=req.customer_phone,
        summary=req.summary,
    )
    try:
        mailer.send(escalation)
    except EscalationError as e:
        logger.error("Error in /escalate: {}", e)
        return JSONResponse(status_code=500, content={"success": False, "error": INTERNAL_ESCALATION_ERROR})

    return {"success": True, "message": "Your request has been escalated to our support team."}
