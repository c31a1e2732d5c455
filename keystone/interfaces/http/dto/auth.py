from __future__ import annotations

from pydantic import AliasChoices, BaseModel, Field

from keystone.domain.accounts.entities import AccountProfile


class RegisterRequestDTO(BaseModel):
    # Field rules live in keystone.domain.accounts.validation; this only checks shape.
    handle: str = Field(min_length=1, max_length=64, validation_alias=AliasChoices("handle", "username"))
    contact: str = Field(min_length=1, max_length=254, validation_alias=AliasChoices("contact", "email"))
    secret: str = Field(min_length=1, max_length=128, validation_alias=AliasChoices("secret", "password"))


class LoginRequestDTO(BaseModel):
    contact: str = Field(min_length=1, max_length=254, validation_alias=AliasChoices("contact", "email"))
    secret: str = Field(min_length=1, max_length=128, validation_alias=AliasChoices("secret", "password"))
    remember_me: bool = False


class AccountDTO(BaseModel):
    id: int
    handle: str
    is_admin: bool = False

    @classmethod
    def from_profile(cls, profile: AccountProfile) -> AccountDTO:
        return cls(id=profile.id, handle=profile.handle, is_admin=profile.is_admin)


class LoginResponseDTO(BaseModel):
    token: str
    account: AccountDTO
