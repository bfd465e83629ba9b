from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends
from pymongo.database import Database

from database import get_db
from resources import ResourceOperations, get_resource

router = APIRouter(prefix="/public", tags=["public"])


def _by_start_date(items: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    # isoformat strings sort chronologically
    return sorted(items, key=lambda d: d.get("startDate") or "", reverse=True)


def group_skills(skills: List[Dict[str, Any]]) -> Dict[str, List[Dict[str, Any]]]:
    grouped: Dict[str, List[Dict[str, Any]]] = {}
    for skill in skills:
        grouped.setdefault(skill.get("type", "Other"), []).append(skill)
    return grouped


def contact_cards(contacts: List[Dict[str, Any]], about: Optional[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Contact entries with About's details filling the gaps"""
    if not contacts:
        if not about:
            return []
        return [{
            "name": f"{about.get('firstName', '')} {about.get('lastName', '')}".strip(),
            "email": about.get("email"),
            "phone": about.get("phone"),
            "location": about.get("location"),
        }]

    cards = []
    for contact in contacts:
        card = dict(contact)
        if not card.get("email") and about:
            card["email"] = about.get("email")
        cards.append(card)
    return cards


def _list(db: Database, path: str) -> List[Dict[str, Any]]:
    return ResourceOperations(db, get_resource(path)).list_documents()


@router.get("/portfolio")
def portfolio(db: Database = Depends(get_db)):
    about = ResourceOperations(db, get_resource("about")).first()
    return {
        "about": about,
        "skills": group_skills(_list(db, "skills")),
        "projects": _list(db, "projects"),
        "education": _by_start_date(_list(db, "education")),
        "experience": _by_start_date(_list(db, "experience")),
        "achievements": _list(db, "achievements"),
        "gallery": _list(db, "gallery"),
        "contact": contact_cards(_list(db, "contact"), about),
    }


@router.get("/contact")
def contact(db: Database = Depends(get_db)):
    about = ResourceOperations(db, get_resource("about")).first()
    return contact_cards(_list(db, "contact"), about)
