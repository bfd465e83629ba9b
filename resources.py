"""
Generic CRUD for portfolio content

Every content type shares one contract: list newest first, create, update by
`_id`, delete by `_id`. A `Resource` describes the collection and schema, and
`build_router` mounts the four handlers for it.
"""

from typing import Any, Dict, List, Optional, Type

from fastapi import APIRouter, Body, Depends, status
from pydantic import ValidationError
from pymongo import DESCENDING, ReturnDocument
from pymongo.database import Database

from database import create_document, get_db, now, parse_object_id, to_public
from exceptions import (
    DocumentNotFoundError,
    InvalidPayloadError,
    MissingIdentifierError,
    SingletonExistsError,
)
from logger import get_logger
from schemas import (
    About,
    Achievement,
    Contact,
    Education,
    Experience,
    Gallery,
    Message,
    PortfolioDocument,
    Project,
    Skill,
)

logger = get_logger("resources")

# Server-managed fields never taken from a request body
PROTECTED_FIELDS = ("_id", "createdAt", "updatedAt", "created_at", "updated_at")


class Resource:
    def __init__(
        self,
        path: str,
        collection: str,
        schema: Type[PortfolioDocument],
        label: str,
        singleton: bool = False,
    ):
        self.path = path
        self.collection = collection
        self.schema = schema
        self.label = label
        self.singleton = singleton

    def __repr__(self):
        return f"Resource({self.path!r})"


RESOURCES: List[Resource] = [
    Resource("about", "abouts", About, "About", singleton=True),
    Resource("skills", "skills", Skill, "Skill"),
    Resource("projects", "projects", Project, "Project"),
    Resource("education", "educations", Education, "Education record"),
    Resource("experience", "experiences", Experience, "Experience"),
    Resource("achievements", "achievements", Achievement, "Achievement"),
    Resource("gallery", "galleries", Gallery, "Gallery item"),
    Resource("contact", "contacts", Contact, "Contact"),
    Resource("messages", "messages", Message, "Message"),
]

RESOURCES_BY_PATH: Dict[str, Resource] = {r.path: r for r in RESOURCES}


def get_resource(path: str) -> Resource:
    resource = RESOURCES_BY_PATH.get(path)
    if resource is None:
        raise DocumentNotFoundError(f"Unknown resource '{path}'")
    return resource


def _strip_protected(payload: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in payload.items() if k not in PROTECTED_FIELDS}


class ResourceOperations:
    """Store-level operations for one resource"""

    def __init__(self, db: Database, resource: Resource):
        self.db = db
        self.resource = resource
        self.collection = db[resource.collection]

    def _with_aliases(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Rename snake_case keys to the stored camelCase names"""
        fields = self.resource.schema.model_fields
        return {
            (fields[key].alias or key) if key in fields else key: value
            for key, value in payload.items()
        }

    def _validate(self, data: Dict[str, Any]) -> Dict[str, Any]:
        try:
            model = self.resource.schema.model_validate(data)
        except ValidationError as e:
            raise InvalidPayloadError(
                f"Invalid {self.resource.label} data",
                details=e.errors(include_url=False, include_context=False, include_input=False),
            )
        return model.model_dump(by_alias=True)

    def _require_id(self, payload: Optional[Dict[str, Any]]):
        raw_id = (payload or {}).get("_id")
        if not raw_id:
            raise MissingIdentifierError(f"{self.resource.label} _id is required")
        oid = parse_object_id(raw_id)
        if oid is None:
            raise DocumentNotFoundError(f"{self.resource.label} not found")
        return oid

    def list_documents(self) -> List[Dict[str, Any]]:
        cursor = self.collection.find({}).sort([("createdAt", DESCENDING), ("_id", DESCENDING)])
        return [to_public(doc) for doc in cursor]

    def count(self, filter_dict: Optional[Dict[str, Any]] = None) -> int:
        return self.collection.count_documents(filter_dict or {})

    def get_document(self, item_id: str) -> Dict[str, Any]:
        oid = parse_object_id(item_id)
        doc = self.collection.find_one({"_id": oid}) if oid is not None else None
        if not doc:
            raise DocumentNotFoundError(f"{self.resource.label} not found")
        return to_public(doc)

    def first(self) -> Optional[Dict[str, Any]]:
        return to_public(self.collection.find_one({}))

    def create(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        if self.resource.singleton and self.collection.find_one({}):
            raise SingletonExistsError(f"{self.resource.label} already exists")

        doc = self._validate(self._with_aliases(_strip_protected(payload)))
        item_id = create_document(self.resource.collection, doc, database=self.db)
        logger.info(f"Created {self.resource.label} {item_id}")
        return to_public(self.collection.find_one({"_id": parse_object_id(item_id)}))

    def update(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        if self.resource.singleton and not (payload or {}).get("_id"):
            return self.upsert_singleton(payload or {})

        oid = self._require_id(payload)
        existing = self.collection.find_one({"_id": oid})
        if not existing:
            raise DocumentNotFoundError(f"{self.resource.label} not found")

        merged = {**_strip_protected(existing), **self._with_aliases(_strip_protected(payload))}
        changes = self._validate(merged)
        changes["updatedAt"] = now()
        updated = self.collection.find_one_and_update(
            {"_id": oid}, {"$set": changes}, return_document=ReturnDocument.AFTER
        )
        if not updated:
            # removed between the read and the write
            raise DocumentNotFoundError(f"{self.resource.label} not found")
        logger.info(f"Updated {self.resource.label} {oid}")
        return to_public(updated)

    def upsert_singleton(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        existing = self.collection.find_one({}) or {}
        merged = {**_strip_protected(existing), **self._with_aliases(_strip_protected(payload))}
        changes = self._validate(merged)
        stamp = now()
        changes["updatedAt"] = stamp
        updated = self.collection.find_one_and_update(
            {"_id": existing["_id"]} if existing else {},
            {"$set": changes, "$setOnInsert": {"createdAt": stamp}},
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
        logger.info(f"Saved {self.resource.label} {updated['_id']}")
        return to_public(updated)

    def delete(self, payload: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        if self.resource.singleton and not (payload or {}).get("_id"):
            deleted = self.collection.find_one_and_delete({})
            if not deleted:
                raise DocumentNotFoundError(f"No {self.resource.label.lower()} content found")
            logger.info(f"Deleted {self.resource.label} {deleted['_id']}")
            return {"success": True}

        oid = self._require_id(payload)
        result = self.collection.delete_one({"_id": oid})
        if result.deleted_count != 1:
            raise DocumentNotFoundError(f"{self.resource.label} not found")
        logger.info(f"Deleted {self.resource.label} {oid}")
        return {"success": True}


def build_router(resource: Resource) -> APIRouter:
    """Mount GET/POST/PUT/DELETE for one resource at /api/<path>"""
    router = APIRouter(prefix=f"/api/{resource.path}", tags=[resource.path])

    def get_operations(db: Database = Depends(get_db)) -> ResourceOperations:
        return ResourceOperations(db, resource)

    @router.get("", name=f"list_{resource.path}")
    def list_items(operations: ResourceOperations = Depends(get_operations)):
        return operations.list_documents()

    @router.post("", status_code=status.HTTP_201_CREATED, name=f"create_{resource.path}")
    def create_item(
        payload: Dict[str, Any] = Body(...),
        operations: ResourceOperations = Depends(get_operations),
    ):
        return operations.create(payload)

    @router.put("", name=f"update_{resource.path}")
    def update_item(
        payload: Dict[str, Any] = Body(...),
        operations: ResourceOperations = Depends(get_operations),
    ):
        return operations.update(payload)

    @router.delete("", name=f"delete_{resource.path}")
    def delete_item(
        payload: Optional[Dict[str, Any]] = Body(None),
        operations: ResourceOperations = Depends(get_operations),
    ):
        return operations.delete(payload)

    return router


routers = [build_router(resource) for resource in RESOURCES]
