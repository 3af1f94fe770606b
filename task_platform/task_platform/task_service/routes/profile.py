"""
Static profile endpoints.
"""
from fastapi import APIRouter

router = APIRouter(prefix="/api/profile", tags=["profile"])

PROFILE = {
    "name": "Sarah Martinez",
    "track": "Full-Stack Development",
    "location": "Algiers",
}
ROLE = {"role": "Student", "level": "Intermediate"}
SKILLS = ["Python", "FastAPI", "MongoDB", "JavaScript"]


@router.get("")
async def get_profile():
    return PROFILE


@router.get("/role")
async def get_role():
    return ROLE


@router.get("/skills")
async def get_skills():
    return {"skills": SKILLS}
