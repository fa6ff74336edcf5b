"""
Submission routes.

Form endpoints that relay customer submissions to the administrator:
- POST /enviar-comprobante     - Payment receipt (file required)
- POST /consultas/gratis       - Free inquiry (text only)
- POST /consultas/presupuesto  - Paid inquiry for a quote (file optional)

Each endpoint validates, answers with a redirect to the thank-you page
and leaves email delivery to a background task. The client response
means "accepted", never "delivered".
"""

import logging

from fastapi import APIRouter, BackgroundTasks, Depends, Request, status
from fastapi.responses import RedirectResponse

from src.adapters.storage import LocalUploadStore, UploadPolicy
from src.api.dependencies import (
    get_quote_policy,
    get_receipt_policy,
    get_submission_service,
    get_upload_store,
    site_url,
    thanks_url,
)
from src.api.forms import file_field, parse_fields, text_fields
from src.api.models import FreeInquiryForm, QuoteInquiryForm, ReceiptForm
from src.domain.exceptions import DomainError
from src.domain.submissions import SubmissionService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["submissions"])

FORM_RESPONSES = {
    400: {"description": "Missing or invalid field, or file format not allowed"},
    413: {"description": "File too large"},
}


@router.post(
    "/enviar-comprobante",
    status_code=status.HTTP_302_FOUND,
    response_class=RedirectResponse,
    responses=FORM_RESPONSES,
    summary="Submit a payment receipt",
)
async def submit_receipt(
    request: Request,
    background_tasks: BackgroundTasks,
    service: SubmissionService = Depends(get_submission_service),
    store: LocalUploadStore = Depends(get_upload_store),
    policy: UploadPolicy = Depends(get_receipt_policy),
    base_url: str = Depends(site_url),
    redirect_to: str = Depends(thanks_url),
) -> RedirectResponse:
    """
    Accept a receipt (PDF/PNG/JPEG) with name, email and concept.

    The admin copy carries the file; the submitter gets an
    acknowledgment without it. The file is removed after both sends.
    """
    form = await request.form()
    upload = file_field(form, "receipt", "comprobante")
    receipt = await store.save(upload, policy) if upload is not None else None

    try:
        data = parse_fields(ReceiptForm, text_fields(form))
        dispatch = service.prepare_receipt(
            name=data.name,
            email=data.email,
            concept=data.concept,
            receipt=receipt,
            site_url=base_url,
        )
    except DomainError:
        if receipt is not None:
            store.discard(receipt.path)
        raise

    logger.info("Receipt accepted from %s (%s)", data.email, data.concept)
    background_tasks.add_task(service.deliver, dispatch)
    return RedirectResponse(redirect_to, status_code=status.HTTP_302_FOUND)


@router.post(
    "/consultas/gratis",
    status_code=status.HTTP_302_FOUND,
    response_class=RedirectResponse,
    responses=FORM_RESPONSES,
    summary="Submit a free inquiry",
)
async def submit_free_inquiry(
    request: Request,
    background_tasks: BackgroundTasks,
    service: SubmissionService = Depends(get_submission_service),
    redirect_to: str = Depends(thanks_url),
) -> RedirectResponse:
    form = await request.form()
    data = parse_fields(FreeInquiryForm, text_fields(form), message="Faltan datos.")
    dispatch = service.prepare_free_inquiry(
        name=data.name,
        email=data.email,
        topic=data.topic,
        message=data.message,
    )

    logger.info("Free inquiry accepted from %s", data.email)
    background_tasks.add_task(service.deliver, dispatch)
    return RedirectResponse(redirect_to, status_code=status.HTTP_302_FOUND)


@router.post(
    "/consultas/presupuesto",
    status_code=status.HTTP_302_FOUND,
    response_class=RedirectResponse,
    responses=FORM_RESPONSES,
    summary="Submit a paid inquiry for a quote",
)
async def submit_quote_inquiry(
    request: Request,
    background_tasks: BackgroundTasks,
    service: SubmissionService = Depends(get_submission_service),
    store: LocalUploadStore = Depends(get_upload_store),
    policy: UploadPolicy = Depends(get_quote_policy),
    redirect_to: str = Depends(thanks_url),
) -> RedirectResponse:
    """Accept a quote request with an optional PDF/image/TXT attachment."""
    form = await request.form()
    upload = file_field(form, "attachment", "adjunto")
    attachment = await store.save(upload, policy) if upload is not None else None

    try:
        data = parse_fields(QuoteInquiryForm, text_fields(form), message="Faltan datos.")
        dispatch = service.prepare_quote_inquiry(
            name=data.name,
            email=data.email,
            topic=data.topic,
            description=data.description,
            attachment=attachment,
        )
    except DomainError:
        if attachment is not None:
            store.discard(attachment.path)
        raise

    logger.info("Quote inquiry accepted from %s", data.email)
    background_tasks.add_task(service.deliver, dispatch)
    return RedirectResponse(redirect_to, status_code=status.HTTP_302_FOUND)
