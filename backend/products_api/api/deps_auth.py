# backend/products_api/api/deps_auth.py

import logging

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from products_api.api.responses import APIError
from products_api.core.database import get_db
from products_api.core.security import dummy_verify, verify_password
from products_api.models.user import User as UserModel

log = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid/Missing Credentials."

# auto_error=False: a missing header comes back as None so it can share
# the generic 401 below
security = HTTPBasic(auto_error=False)


class CurrentUser(BaseModel):
    id: int
    username: str


def _reject(reason: str) -> APIError:
    # the reason stays in the log; clients always get the same message
    log.debug("basic auth rejected: %s", reason)
    return APIError(
        status.HTTP_401_UNAUTHORIZED,
        INVALID_CREDENTIALS,
        headers={"WWW-Authenticate": "Basic"},
    )


async def basic_credentials(request: Request) -> HTTPBasicCredentials:
    try:
        credentials = await security(request)
    except (HTTPException, ValueError) as exc:
        # bad base64, non-ASCII bytes or no ':' separator
        raise _reject(f"malformed credentials: {exc}")

    if credentials is None:
        raise _reject("missing Authorization header or not the Basic scheme")
    return credentials


def require_credentials(
    credentials: HTTPBasicCredentials = Depends(basic_credentials),
    db: Session = Depends(get_db),
) -> CurrentUser:
    """Router-level guard: every request re-authenticates with HTTP Basic credentials."""
    try:
        user = db.query(UserModel).filter(UserModel.username == credentials.username).first()
    except SQLAlchemyError:
        log.exception("user lookup failed for %r", credentials.username)
        raise _reject("user lookup failed")

    if not user:
        dummy_verify()
        raise _reject("unknown user")

    if not verify_password(credentials.password, user.salt, user.salted_password_hash):
        raise _reject("password mismatch")

    return CurrentUser(id=user.id, username=user.username)
