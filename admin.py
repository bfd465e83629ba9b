"""
Admin dashboard views

Everything here sits under /admin and is guarded by the admin gate in auth.py.
"""

from fastapi import APIRouter, Depends
from pymongo import DESCENDING
from pymongo.database import Database

from database import get_db, get_documents, to_public
from resources import RESOURCES, ResourceOperations, get_resource

router = APIRouter(prefix="/admin", tags=["admin"])

RECENT_MESSAGES = 5


@router.get("")
def dashboard(db: Database = Depends(get_db)):
    counts = {r.path: ResourceOperations(db, r).count() for r in RESOURCES}

    messages = ResourceOperations(db, get_resource("messages"))
    recent = get_documents(
        messages.resource.collection,
        limit=RECENT_MESSAGES,
        sort=[("createdAt", DESCENDING), ("_id", DESCENDING)],
        database=db,
    )

    return {
        "counts": counts,
        "about": ResourceOperations(db, get_resource("about")).first(),
        "unreadMessages": messages.count({"status": "new"}),
        "recentMessages": [to_public(doc) for doc in recent],
    }


@router.get("/{resource}")
def list_for_editing(resource: str, db: Database = Depends(get_db)):
    operations = ResourceOperations(db, get_resource(resource))
    items = operations.list_documents()
    for item in items:
        item["editHref"] = f"/admin/{resource}/{item['_id']}"
    return items


@router.get("/{resource}/{item_id}")
def get_for_editing(resource: str, item_id: str, db: Database = Depends(get_db)):
    return ResourceOperations(db, get_resource(resource)).get_document(item_id)
