"""Registration and email verification endpoints."""

import logging

from fastapi import APIRouter, Depends, status

from skillmatch.api.deps import failure_boundary, get_registration_service
from skillmatch.core.exceptions import DeliveryError, ValidationError
from skillmatch.schemas.auth import (
    RegisterRequest,
    RegisterResponse,
    ResendVerificationRequest,
    UserSummary,
)
from skillmatch.schemas.common import Envelope
from skillmatch.services.registration_service import RegistrationService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
async def register(
    request: RegisterRequest,
    service: RegistrationService = Depends(get_registration_service),
):
    """Register a new user and send the verification email."""
    if not request.email or not request.password:
        raise ValidationError("Email and password are required")

    with failure_boundary("Failed to register user"):
        try:
            user = await service.register(
                email=request.email,
                password=request.password,
                first_name=request.first_name,
                last_name=request.last_name,
            )
        except DeliveryError as e:
            raise DeliveryError("Failed to register user", error=e.error) from e

    logger.info(f"Registered user {user.id} ({user.email})")
    return RegisterResponse(
        message="User registered successfully. Please check your email to verify your account.",
        user=UserSummary.model_validate(user),
    )


@router.get("/verify-email/{token}", response_model=Envelope)
async def verify_email(token: str, service: RegistrationService = Depends(get_registration_service)):
    """Consume a verification token."""
    with failure_boundary("Failed to verify email"):
        await service.verify_email(token)

    return Envelope(message="Email verified successfully")


@router.post("/resend-verification", response_model=Envelope)
async def resend_verification(
    request: ResendVerificationRequest,
    service: RegistrationService = Depends(get_registration_service),
):
    """Issue a new verification token and mail it again."""
    if not request.email:
        raise ValidationError("Email is required")

    with failure_boundary("Failed to resend verification email"):
        await service.resend_verification(request.email)

    return Envelope(message="Verification email sent")
