"""
Role-gated endpoints: any signed-in user, moderators and admins.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, status

from .. import crud
from ..dependencies import admin_only, get_current_user, require_role
from ..models import User
from ..schemas import TokenClaims, UserOut, UserWithTaskCount

logger = logging.getLogger(__name__)

router = APIRouter(tags=["protected"])


@router.get("/profile")
async def profile(user: TokenClaims = Depends(get_current_user)):
    return {"message": "Your profile", "user": user}


@router.get("/admin")
async def admin_dashboard(user: TokenClaims = Depends(admin_only)):
    users = await User.find_all().to_list()
    return {
        "message": "Admin dashboard",
        "total_users": len(users),
        "users": [UserOut.model_validate(u) for u in users],
    }


@router.get("/moderator")
async def moderator_panel(user: TokenClaims = Depends(require_role("admin", "moderator"))):
    return {"message": "Moderator panel", "user": user}


@router.get("/admin/users")
async def list_users_with_task_counts(user: TokenClaims = Depends(admin_only)):
    users = await User.find_all().sort("-created_at").to_list()
    result = []
    for u in users:
        entry = UserWithTaskCount.model_validate(u, from_attributes=True)
        entry.task_count = await crud.count_tasks_for(u.id)
        result.append(entry)
    return {"count": len(result), "users": result}


@router.delete("/users/{user_id}")
async def delete_user(user_id: str, admin: TokenClaims = Depends(admin_only)):
    target = await User.get(crud.parse_object_id(user_id, "user"))
    if not target:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    deleted = {"id": str(target.id), "email": target.email}
    removed_tasks = await crud.delete_tasks_for(target.id)
    await target.delete()
    logger.info(
        "Admin user_id=%s deleted user_id=%s with %s tasks", admin.user_id, deleted["id"], removed_tasks
    )
    return {"message": "User deleted successfully", "deleted_user": deleted, "deleted_tasks": removed_tasks}
