# ─────────────────────────────────────────────────────────────────
# routes/admin.py — Administrator Routes
#
# A separate router mounted at /admin. Every route here sits
# behind admin_only, which reads the flag AdminACLMiddleware puts
# on the request.
# ─────────────────────────────────────────────────────────────────

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import PlainTextResponse


def admin_only(request: Request):
    """Restricts access to administrators."""
    if not getattr(request.state, "acl_admin", False):
        raise HTTPException(status_code=403, detail="Forbidden")


router = APIRouter(
    prefix="/admin",
    tags=["Admin"],
    dependencies=[Depends(admin_only)],
    default_response_class=PlainTextResponse,
)


@router.get("/")
@router.get("", include_in_schema=False)
def admin_index():
    return "admin: index"


@router.get("/accounts")
def list_accounts():
    return "admin: list accounts.."


@router.get("/users/{user_id}")
def view_user(user_id: str):
    return f"admin: view user id {user_id}"
