# Authentication routes: registration, form login and logout

from fastapi import APIRouter, Depends, Form, status
from fastapi.responses import HTMLResponse, RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from todo_app.config import settings
from todo_app.db import get_app_db
from todo_app.dependencies import get_user_service
from todo_app.schemas import MessageResponse, UserRegister, UserResponse
from todo_app.services import UserService
from todo_app.utils.auth import create_session_token
from todo_app.utils.logger import setup_logger

logger = setup_logger("api.auth")

router = APIRouter(tags=["Authentication"])

LOGIN_FORM = """<!DOCTYPE html>
<html>
<head><title>Sign in</title></head>
<body>
{notice}
<form method="post" action="/login">
  <label>Username <input type="text" name="username" required></label>
  <label>Password <input type="password" name="password" required></label>
  <button type="submit">Sign in</button>
</form>
</body>
</html>
"""


@router.get("/", response_model=MessageResponse)
async def read_root():
    """Landing endpoint, also used as the post-login destination."""
    return MessageResponse(message=f"{settings.project_name} is running!")


@router.post(
    "/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED
)
async def register_user(
    user_data: UserRegister,
    db: AsyncSession = Depends(get_app_db),
    user_service: UserService = Depends(get_user_service),
):
    """Register a new user; the password is stored as a bcrypt digest."""
    user = await user_service.add_user(user_data, db=db)
    return UserResponse.model_validate(user)


@router.get("/login", response_class=HTMLResponse)
async def login_page(error: str | None = None, logout: str | None = None):
    notice = ""
    if error is not None:
        notice = "<p>Invalid username or password.</p>"
    elif logout is not None:
        notice = "<p>You have been signed out.</p>"
    return HTMLResponse(LOGIN_FORM.format(notice=notice))


@router.post("/login")
async def login(
    username: str = Form(...),
    password: str = Form(...),
    db: AsyncSession = Depends(get_app_db),
    user_service: UserService = Depends(get_user_service),
):
    """Check the credentials and start a cookie session on success."""
    user = await user_service.authenticate(username, password, db=db)
    if user is None:
        return RedirectResponse("/login?error", status_code=status.HTTP_303_SEE_OTHER)

    token = create_session_token(user.username, user.role_list)
    response = RedirectResponse("/", status_code=status.HTTP_303_SEE_OTHER)
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.access_token_expire_minutes * 60,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
    )
    logger.info(f"User '{user.username}' signed in")
    return response


@router.api_route("/logout", methods=["GET", "POST"])
async def logout():
    """End the session and return to the login page."""
    response = RedirectResponse("/login?logout", status_code=status.HTTP_303_SEE_OTHER)
    response.delete_cookie(settings.session_cookie_name)
    return response
