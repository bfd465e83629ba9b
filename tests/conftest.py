import mongomock
import pytest
from fastapi.testclient import TestClient

import database
from auth import create_access_token
from config import AppConfig
from main import app


# resource path -> (valid payload, a required field, a string field to edit, new value)
RESOURCE_CASES = {
    "about": (
        {
            "firstName": "Ada",
            "lastName": "Lovelace",
            "title": "Analyst",
            "shortBio": "First programmer.",
            "longBio": "Wrote the first algorithm for the Analytical Engine.",
            "email": "ada@lovelace.dev",
            "highlights": ["Notes on the Engine"],
        },
        "firstName",
        "title",
        "Mathematician",
    ),
    "skills": (
        {"type": "Technical Skills", "subtype": "Backend", "name": "Python", "level": "Advanced"},
        "name",
        "level",
        "Expert",
    ),
    "projects": (
        {
            "title": "Portfolio",
            "description": "Personal site",
            "imageUrl": "https://images.example.org/portfolio.png",
            "tags": "web, api",
            "technologies": ["FastAPI", "MongoDB"],
        },
        "title",
        "description",
        "Personal site and CMS",
    ),
    "education": (
        {
            "institution": "Open University",
            "field": "Computer Science",
            "startDate": "2019-09-01",
            "activities": "Chess club\nRowing",
        },
        "institution",
        "field",
        "Mathematics",
    ),
    "experience": (
        {
            "company": "Acme",
            "title": "Engineer",
            "startDate": "2021-01-15",
            "achievements": "Shipped v2\nLed migration",
        },
        "company",
        "title",
        "Senior Engineer",
    ),
    "achievements": (
        {"title": "Hackathon winner", "category": "academic", "year": "2022"},
        "title",
        "title",
        "Hackathon finalist",
    ),
    "gallery": (
        {"title": "Field trip", "images": ["https://images.example.org/1.png"]},
        "title",
        "description",
        "Photos from the trip",
    ),
    "contact": (
        {"name": "Ada Lovelace", "email": "ada@lovelace.dev", "phone": "+44 20 0000", "location": "London"},
        "email",
        "location",
        "Cambridge",
    ),
    "messages": (
        {"name": "Bob", "email": "bob@builder.dev", "message": "Can we fix it?"},
        "message",
        "status",
        "read",
    ),
}


@pytest.fixture
def mongo_db():
    db = mongomock.MongoClient()["portfolio_test"]
    database.use_database(db)
    yield db
    database.use_database(None)


@pytest.fixture
def client(mongo_db):
    return TestClient(app)


@pytest.fixture
def admin_client(client):
    client.cookies.set(AppConfig.ADMIN_COOKIE_NAME, create_access_token({"sub": "admin", "role": "admin"}))
    return client


def delete(client, url, body=None):
    """DELETE with a JSON body"""
    if body is None:
        return client.request("DELETE", url)
    return client.request("DELETE", url, json=body)
