from fastapi.encoders import jsonable_encoder
from pydantic import ValidationError

from ..errors import AuthFailed, ValidationFailed, user_not_found
from ..events import utcnow_iso
from ..latency import Latency
from ..models import User
from ..repository import Repository, generate_id
from ..schemas import PublicUser, RegisterRequest, UpdateProfileRequest
from ..security import hash_password, issue_session_token, verify_password


def public_user(user: User) -> PublicUser:
    return PublicUser.model_validate(user.model_dump())


class AuthService:
    def __init__(self, repo: Repository, latency: Latency):
        self.repo = repo
        self.latency = latency

    async def login(self, email: str, password: str) -> tuple[PublicUser, str]:
        await self.latency()
        user = self.repo.find_user_by_email(email)

        if not user or not verify_password(password, user.password_hash):
            raise AuthFailed("Invalid credentials")

        self.repo.events.record("user.logged_in", {"userId": user.id})
        return public_user(user), issue_session_token(user.id, user.role)

    async def register(self, data: RegisterRequest) -> tuple[PublicUser, str]:
        await self.latency()

        if self.repo.find_user_by_email(data.email):
            raise ValidationFailed("Email already exists", "EMAIL_EXISTS", {"email": data.email})

        user = User(
            id=generate_id("user"),
            email=data.email.strip(),
            password_hash=hash_password(data.password),
            first_name=data.first_name,
            last_name=data.last_name,
            phone=data.phone,
            role="patient",
            created_at=utcnow_iso(),
        )
        self.repo.add_user(user)

        self.repo.events.record("user.registered", {"userId": user.id, "email": user.email})
        return public_user(user), issue_session_token(user.id, user.role)

    async def update_profile(self, user_id: str, updates: UpdateProfileRequest) -> PublicUser:
        await self.latency()
        user = self.repo.find_user(user_id)
        if not user:
            raise user_not_found(user_id)

        changes = updates.model_dump(exclude_unset=True)
        try:
            merged = User.model_validate(
                {**user.model_dump(), **changes, "password_hash": user.password_hash}
            )
        except ValidationError as exc:
            raise ValidationFailed(
                "Invalid profile update",
                details={"errors": jsonable_encoder(exc.errors())},
            )

        for field in changes:
            setattr(user, field, getattr(merged, field))

        self.repo.events.record("user.updated", {"userId": user_id, "fields": sorted(changes)})
        return public_user(user)

    async def get(self, user_id: str) -> PublicUser:
        await self.latency()
        user = self.repo.find_user(user_id)
        if not user:
            raise user_not_found(user_id)
        return public_user(user)
