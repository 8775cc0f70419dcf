from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from .logging_config import get_logger

logger = get_logger(__name__)


class DoctorGoError(Exception):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "ERROR"

    def __init__(self, message: str, code: str | None = None, details: dict | None = None):
        super().__init__(message)
        self.message = message
        if code:
            self.code = code
        self.details = details

    def to_envelope(self) -> dict:
        body = {"error": self.message, "code": self.code}
        if self.details is not None:
            body["details"] = self.details
        return body


class NotFound(DoctorGoError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "NOT_FOUND"


class ValidationFailed(DoctorGoError):
    code = "VALIDATION_ERROR"


class Conflict(DoctorGoError):
    status_code = status.HTTP_409_CONFLICT
    code = "CONFLICT"


class AuthFailed(DoctorGoError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "AUTH_FAILED"


class RateLimited(DoctorGoError):
    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    code = "RATE_LIMITED"


def provider_not_found(provider_id: str) -> NotFound:
    return NotFound("Provider not found", "PROVIDER_NOT_FOUND", {"providerId": provider_id})


def queue_not_found(token: str) -> NotFound:
    return NotFound("Queue entry not found", "QUEUE_NOT_FOUND", {"token": token})


def booking_not_found(booking_id: str) -> NotFound:
    return NotFound("Booking not found", "BOOKING_NOT_FOUND", {"bookingId": booking_id})


def user_not_found(user_id: str) -> NotFound:
    return NotFound("User not found", "USER_NOT_FOUND", {"userId": user_id})


def payment_not_found(payment_token: str) -> NotFound:
    return NotFound("Payment not found", "PAYMENT_NOT_FOUND", {"paymentToken": payment_token})


async def doctorgo_error_handler(request: Request, exc: DoctorGoError):
    logger.info(
        "request_failed",
        path=request.url.path,
        status=exc.status_code,
        code=exc.code,
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_envelope())


async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=422,
        content={
            "error": "Invalid request",
            "code": "VALIDATION_ERROR",
            "details": {"errors": jsonable_encoder(exc.errors())},
        },
    )


def register_exception_handlers(app):
    app.add_exception_handler(DoctorGoError, doctorgo_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
