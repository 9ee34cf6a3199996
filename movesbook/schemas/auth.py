from typing import Optional
from pydantic import BaseModel, EmailStr

# NOTE: email-validator is required by Pydantic for EmailStr validation


# Login schemas
class UserLogin(BaseModel):
    email: EmailStr
    password: str


class LoginResponse(BaseModel):
    access_token: str
    token_type: str
    expires_in: int
    user_id: str


# Token schemas
class TokenPayload(BaseModel):
    sub: str
    exp: int
    role: Optional[str] = None
