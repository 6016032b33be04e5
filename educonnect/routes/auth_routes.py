from fastapi import APIRouter, HTTPException, Response, status
from pydantic import BaseModel, field_validator

from educonnect.auth import jwt_handler
from educonnect.core import config

router = APIRouter(tags=['auth'])


class TokenRequest(BaseModel):
    email: str | None = None

    @field_validator('email')
    @classmethod
    def normalize_email(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip() or None


class TokenResponse(BaseModel):
    success: bool = True
    token: str


class SessionResponse(BaseModel):
    success: bool = True


def _cookie_options() -> dict:
    return {
        'httponly': True,
        'secure': config.IS_PRODUCTION,
        'samesite': 'none' if config.IS_PRODUCTION else 'strict',
    }


@router.post('/jwt', response_model=TokenResponse)
def issue_token(data: TokenRequest, response: Response):
    if not data.email:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail='Email is required')

    token = jwt_handler.create_access_token(data.email)
    response.set_cookie(config.SESSION_COOKIE_NAME, token, **_cookie_options())
    return TokenResponse(token=token)


@router.get('/logout', response_model=SessionResponse)
def logout(response: Response):
    response.delete_cookie(config.SESSION_COOKIE_NAME, **_cookie_options())
    return SessionResponse()
