"""
Account routes.

Registration with email verification and stateless login:
- POST /send       - Register and send the verification email
- GET  /verificar  - Redeem a verification token
- POST /login      - Check credentials of a verified account

Store, hashing and SMTP calls block, so the service runs in the
threadpool.
"""

import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.concurrency import run_in_threadpool

from src.api.dependencies import get_registration_service, site_url
from src.api.errors import json_error
from src.api.forms import parse_fields, read_payload
from src.api.models import (
    ErrorResponse,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RegisterRequest,
)
from src.domain.exceptions import DomainError, InfrastructureError
from src.domain.registration import Applicant, RegistrationService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["accounts"])

REQUIRED_FIELDS_MESSAGE = "Todos los campos son obligatorios."
VERIFIED_PAGE = "/verificado.html"


@router.post(
    "/send",
    response_model=MessageResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Missing fields or email already registered"},
        500: {"model": ErrorResponse, "description": "Store or mail failure"},
    },
    summary="Register a new user",
    description="Store the registration and email a verification link. "
    "Accepts a JSON object or a form.",
)
async def register(
    request: Request,
    service: RegistrationService = Depends(get_registration_service),
    base_url: str = Depends(site_url),
) -> MessageResponse | JSONResponse:
    try:
        data = parse_fields(
            RegisterRequest, await read_payload(request), message=REQUIRED_FIELDS_MESSAGE
        )
        applicant = Applicant(**data.model_dump(exclude={"password"}))
        await run_in_threadpool(service.register, applicant, data.password, base_url)
    except InfrastructureError as e:
        logger.exception("Registration failed")
        return json_error(e, "Error en el servidor al guardar o enviar el correo.")
    except DomainError as e:
        return json_error(e)

    return MessageResponse(message="Correo de verificación enviado correctamente.")


@router.get(
    "/verificar",
    status_code=status.HTTP_302_FOUND,
    response_class=RedirectResponse,
    responses={
        400: {"description": "Missing token"},
        404: {"description": "Unknown or already used token"},
    },
    summary="Verify email address",
)
async def verify(
    token: str | None = None,
    service: RegistrationService = Depends(get_registration_service),
) -> RedirectResponse:
    """
    Redeem the token from the verification email.

    Errors are answered in plain text by the app-wide handler.
    """
    await run_in_threadpool(service.verify, token)
    return RedirectResponse(VERIFIED_PAGE, status_code=status.HTTP_302_FOUND)


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Missing fields, unknown user or wrong password"},
        403: {"model": ErrorResponse, "description": "Email not verified"},
        500: {"model": ErrorResponse, "description": "Store failure"},
    },
    summary="Log in",
    description="Check credentials. No session or token is issued.",
)
async def login(
    request: Request,
    service: RegistrationService = Depends(get_registration_service),
) -> LoginResponse | JSONResponse:
    try:
        data = parse_fields(
            LoginRequest, await read_payload(request), message=REQUIRED_FIELDS_MESSAGE
        )
        registration = await run_in_threadpool(service.authenticate, data.email, data.password)
    except InfrastructureError as e:
        logger.exception("Login failed")
        return json_error(e, "Error del servidor")
    except DomainError as e:
        logger.info("Login rejected: %s", e.message)
        return json_error(e)

    return LoginResponse(
        message="Inicio de sesión exitoso",
        name=registration.name,
        surname=registration.surname,
        email=registration.email,
    )
