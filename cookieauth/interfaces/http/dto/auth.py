from __future__ import annotations

from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from cookieauth.domain.sessions.entities import Session
from cookieauth.domain.users.entities import User


class SignupRequestDTO(BaseModel):
    email: str = Field(max_length=254)
    first_name: str = Field(
        max_length=64, validation_alias=AliasChoices("first_name", "firstName")
    )
    last_name: str = Field(
        max_length=64, validation_alias=AliasChoices("last_name", "lastName")
    )
    password: str = Field(max_length=128)
    confirm_password: str = Field(
        max_length=128,
        validation_alias=AliasChoices("confirm_password", "confirmPassword"),
    )


class LoginRequestDTO(BaseModel):
    email: str = Field(max_length=254)
    password: str = Field(max_length=128)


class UserDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    first_name: str
    last_name: str


class SessionDTO(BaseModel):
    user_id: int
    refreshed_at: datetime
    expires_at: datetime

    @classmethod
    def from_session(cls, session: Session, max_age: int) -> SessionDTO:
        return cls(
            user_id=session.user_id,
            refreshed_at=session.refreshed_at,
            expires_at=session.expires_at(max_age),
        )


class AuthSuccessDTO(BaseModel):
    ok: bool = True
    user: UserDTO

    @classmethod
    def for_user(cls, user: User) -> AuthSuccessDTO:
        return cls(user=UserDTO.model_validate(user))


class AccountDTO(BaseModel):
    is_logged_in: bool = True
    user: UserDTO
    session: SessionDTO


class IndexDTO(BaseModel):
    is_logged_in: bool
    user: UserDTO | None = None
    session: SessionDTO | None = None
