"""
FastAPI dependencies for admin access, clock and DB injection
"""

import secrets
from typing import Annotated, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from motor.motor_asyncio import AsyncIOMotorDatabase

from prono.core.clock import Clock, get_clock
from prono.core.config import get_settings
from prono.database import get_database

# Admin routes expect "Authorization: Bearer <token>" when a token is configured
admin_security = HTTPBearer(auto_error=False)


async def get_current_admin(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(admin_security)]
) -> bool:
    """
    Dependency guarding admin endpoints.

    Without ADMIN_TOKEN configured the admin area is open (single-tenant
    deployments behind a private URL).
    """
    expected = get_settings().admin_token
    if not expected:
        return True

    if credentials is None or not secrets.compare_digest(credentials.credentials, expected):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or missing admin token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return True


# Type aliases so endpoints stay readable
CurrentAdmin = Annotated[bool, Depends(get_current_admin)]
Database = Annotated[AsyncIOMotorDatabase, Depends(get_database)]
CurrentClock = Annotated[Clock, Depends(get_clock)]
