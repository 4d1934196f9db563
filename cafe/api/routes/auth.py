import logging
from fastapi import APIRouter, Depends, HTTPException, status

from cafe.core.security import SessionContext, get_current_session
from cafe.schemas.response import SuccessResponse
from cafe.schemas.user import LoginRequest, LoginResponse, SessionResponse
from cafe.services.user_service import login, logout

log = logging.getLogger("uvicorn")

router = APIRouter()


@router.post("/login", response_model=SuccessResponse)
async def login_endpoint(credentials: LoginRequest):
    """Exchanges username and password for a bearer token."""
    try:
        session = await login(credentials.username, credentials.password)
        if not session:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid username or password.")
        return SuccessResponse(data=LoginResponse(**session).model_dump(mode="json"))
    except HTTPException:
        raise
    except Exception as e:
        log.error(f"Error logging in: {e}")
        raise HTTPException(status_code=500, detail="Server failed to log in.")


@router.post("/logout", response_model=SuccessResponse)
async def logout_endpoint(session: SessionContext = Depends(get_current_session)):
    try:
        await logout(session.token)
        return SuccessResponse(data={"logged_out": True})
    except Exception as e:
        log.error(f"Error logging out: {e}")
        raise HTTPException(status_code=500, detail="Server failed to log out.")


@router.get("/me", response_model=SuccessResponse)
async def current_session(session: SessionContext = Depends(get_current_session)):
    return SuccessResponse(
        data=SessionResponse(user_id=session.user_id, username=session.username, role=session.role).model_dump(mode="json")
    )
