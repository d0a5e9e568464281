from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException
from fastapi.responses import HTMLResponse, Response
from clubhub.database.supabase_client import get_supabase
from clubhub.modules.tickets.schemas import (
    TicketCreate, TicketResponse, TicketWithDetailsResponse, TicketValidateRequest,
    TicketValidationResponse, QRRefreshResponse
)
from clubhub.modules.tickets.service import TicketService
from clubhub.core.browser import PDFGenerationError, render_pdf
from clubhub.core.dependencies import get_current_user_id, require_admin
from clubhub.core.notifications import NotificationService, get_notification_service, notify_quietly
from clubhub.core.ticket_html import render_ticket_html
from supabase import Client
from typing import List, Dict
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tickets", tags=["tickets"])


def get_ticket_service(supabase: Client = Depends(get_supabase)) -> TicketService:
    return TicketService(supabase)


@router.post("", response_model=TicketResponse, status_code=201)
async def create_ticket(
    ticket_data: TicketCreate,
    background_tasks: BackgroundTasks,
    user_data: Dict = Depends(get_current_user_id),
    service: TicketService = Depends(get_ticket_service),
    notifications: NotificationService = Depends(get_notification_service)
):
    """Issue a ticket and email it in the background"""
    ticket = service.create_ticket(ticket_data, user_data["id"])
    background_tasks.add_task(notify_quietly, notifications.send_ticket_confirmation, ticket.id)
    return ticket


@router.get("", response_model=List[TicketWithDetailsResponse])
async def list_tickets(
    user_data: Dict = Depends(require_admin),
    service: TicketService = Depends(get_ticket_service)
):
    return service.list_tickets()


@router.get("/export")
async def export_tickets(
    user_data: Dict = Depends(require_admin),
    service: TicketService = Depends(get_ticket_service)
):
    """All tickets as a CSV download"""
    return Response(
        content=service.export_csv(),
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=tickets-export.csv"},
    )


@router.post("/update-qr-codes", response_model=QRRefreshResponse)
async def update_qr_codes(
    user_data: Dict = Depends(require_admin),
    service: TicketService = Depends(get_ticket_service)
):
    return service.refresh_qr_codes()


@router.post("/validate", response_model=TicketValidationResponse)
async def validate_ticket(
    request: TicketValidateRequest,
    user_data: Dict = Depends(get_current_user_id),
    service: TicketService = Depends(get_ticket_service)
):
    ticket = service.validate_ticket(request.ticket_id)
    return {"success": True, "message": "Ticket validated successfully", "ticket": ticket}


@router.get("/{ticket_id}", response_model=TicketWithDetailsResponse)
async def get_ticket(ticket_id: str, service: TicketService = Depends(get_ticket_service)):
    return service.get_ticket(ticket_id)


@router.delete("/{ticket_id}", status_code=204)
async def delete_ticket(
    ticket_id: str,
    user_data: Dict = Depends(require_admin),
    service: TicketService = Depends(get_ticket_service)
):
    service.delete_ticket(ticket_id)
    return None


@router.post("/{ticket_id}/validate", response_model=TicketValidationResponse)
async def validate_ticket_by_id(
    ticket_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: TicketService = Depends(get_ticket_service)
):
    ticket = service.validate_ticket(ticket_id)
    return {"success": True, "message": "Ticket validated successfully", "ticket": ticket}


@router.post("/{ticket_id}/resend")
async def resend_ticket(
    ticket_id: str,
    background_tasks: BackgroundTasks,
    user_data: Dict = Depends(require_admin),
    service: TicketService = Depends(get_ticket_service),
    notifications: NotificationService = Depends(get_notification_service)
):
    """Send the confirmation email again"""
    service.require_resendable(ticket_id)
    background_tasks.add_task(notify_quietly, notifications.send_ticket_confirmation, ticket_id)
    return {"success": True, "message": "Ticket email queued"}


def _ticket_html(service: TicketService, ticket_id: str) -> str:
    details = service.fetch_ticket_details(ticket_id)
    if not details:
        raise HTTPException(status_code=404, detail="Ticket not found")
    return render_ticket_html(details, details.get("event") or {}, details.get("pricing_tier"))


@router.get("/{ticket_id}/pdf")
async def ticket_pdf(ticket_id: str, service: TicketService = Depends(get_ticket_service)):
    html = _ticket_html(service, ticket_id)
    try:
        pdf_bytes = await render_pdf(html)
    except PDFGenerationError as e:
        logger.error(f"PDF generation failed for ticket {ticket_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to generate PDF")
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f"attachment; filename=ticket-{ticket_id}.pdf"},
    )


@router.get("/{ticket_id}/pdf-html", response_class=HTMLResponse)
async def ticket_pdf_html(ticket_id: str, service: TicketService = Depends(get_ticket_service)):
    """The HTML the ticket PDF is printed from"""
    return HTMLResponse(_ticket_html(service, ticket_id))
