"""Pytest configuration and shared record models for upsert-builder tests.

Settings are cached process-wide, so every test starts from a clean cache and
an environment without UPSERT_* overrides.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Optional

import pytest
from pydantic import BaseModel, Field

from upsert_builder.config import get_settings


@dataclass
class Person:
    id: str = field(metadata={"db": "id,primary"})
    name: str = field(metadata={"db": "name"})


@dataclass
class Member:
    id: str = field(metadata={"db": "id,primary"})
    name: str = field(metadata={"db": "name"})
    age: Optional[int] = field(default=None, metadata={"db": "age"})


@dataclass
class Enrollment:
    course: str = field(metadata={"db": "course_id,primary"})
    grade: Optional[str] = field(metadata={"db": "grade"})
    student: int = field(metadata={"db": "student_id,primary"})


class PersonModel(BaseModel):
    id: str = Field(json_schema_extra={"db": "id,primary"})
    name: str = Field(json_schema_extra={"db": "name"})


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch: pytest.MonkeyPatch):
    """Drop UPSERT_* overrides and reset the settings cache around each test."""
    for key in list(os.environ):
        if key.startswith("UPSERT_"):
            monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def person_cls():
    return Person


@pytest.fixture
def member_cls():
    return Member


@pytest.fixture
def enrollment_cls():
    return Enrollment


@pytest.fixture
def person_model_cls():
    return PersonModel


@pytest.fixture
def people(person_cls):
    """Three distinct people, in a fixed order."""
    return [
        person_cls(id="1001", name="Tom"),
        person_cls(id="1002", name="Jerry"),
        person_cls(id="1003", name="Nibbles"),
    ]
