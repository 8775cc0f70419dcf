"""Sandbox login, registration and profile updates."""
import pytest

from doctorgo.errors import AuthFailed, NotFound, ValidationFailed
from doctorgo.schemas import RegisterRequest, UpdateProfileRequest
from doctorgo.security import decode_session_token, hash_password, verify_password


def test_password_hash_round_trip():
    hashed = hash_password("password123")

    assert hashed != "password123"
    assert verify_password("password123", hashed)
    assert not verify_password("password124", hashed)


@pytest.mark.asyncio
async def test_login_returns_public_user_and_token(services):
    user, token = await services.auth.login("Patient@DoctorGo.test", "password123")

    assert user.id == "user-001"
    assert user.role == "patient"
    assert "password_hash" not in user.model_dump()
    assert decode_session_token(token)["sub"] == "user-001"


@pytest.mark.asyncio
async def test_provider_login_carries_role(services):
    user, token = await services.auth.login("dr.chen@doctorgo.test", "provider123")

    assert user.provider_id == "prov-001"
    assert decode_session_token(token)["role"] == "provider"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "email, password",
    [("patient@doctorgo.test", "wrong"), ("nobody@doctorgo.test", "password123")],
)
async def test_login_rejects_bad_credentials(services, email, password):
    with pytest.raises(AuthFailed) as exc_info:
        await services.auth.login(email, password)

    assert exc_info.value.status_code == 401
    assert exc_info.value.message == "Invalid credentials"


def test_tampered_token_is_rejected():
    with pytest.raises(AuthFailed):
        decode_session_token("not-a-jwt")


@pytest.mark.asyncio
async def test_register_then_login(services, repo):
    data = RegisterRequest(email="new@doctorgo.test", password="secret1", first_name="Ada", last_name="Obi")

    user, token = await services.auth.register(data)

    assert user.id.startswith("user-")
    assert user.role == "patient"
    assert user.created_at
    assert decode_session_token(token)["sub"] == user.id

    again, _ = await services.auth.login("new@doctorgo.test", "secret1")
    assert again.id == user.id
    assert repo.events.of_type("user.registered")


@pytest.mark.asyncio
async def test_register_duplicate_email(services):
    data = RegisterRequest(email="PATIENT@doctorgo.test", password="secret1", first_name="A", last_name="B")

    with pytest.raises(ValidationFailed) as exc_info:
        await services.auth.register(data)

    assert exc_info.value.code == "EMAIL_EXISTS"


@pytest.mark.asyncio
async def test_update_profile_only_touches_sent_fields(services):
    before = await services.auth.get("user-001")

    updated = await services.auth.update_profile(
        "user-001", UpdateProfileRequest(phone="555-0100", insurance_provider="Acme Health")
    )

    assert updated.phone == "555-0100"
    assert updated.insurance_provider == "Acme Health"
    assert updated.first_name == before.first_name
    assert updated.last_name == before.last_name


@pytest.mark.asyncio
async def test_update_unknown_user(services):
    with pytest.raises(NotFound) as exc_info:
        await services.auth.update_profile("user-missing", UpdateProfileRequest(phone="1"))

    assert exc_info.value.code == "USER_NOT_FOUND"


@pytest.mark.asyncio
async def test_update_profile_rejects_null_name_without_touching_user(services):
    updates = UpdateProfileRequest.model_construct(first_name=None, phone="555-0199")

    with pytest.raises(ValidationFailed) as exc_info:
        await services.auth.update_profile("user-001", updates)

    assert exc_info.value.code == "VALIDATION_ERROR"
    user = await services.auth.get("user-001")
    assert user.first_name == "Alex"
    assert user.phone == "(212) 555-0199"


def test_update_profile_request_refuses_null_names():
    with pytest.raises(ValueError):
        UpdateProfileRequest.model_validate({"lastName": None})

    assert UpdateProfileRequest.model_validate({"phone": None}).phone is None
