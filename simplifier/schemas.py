"""Pydantic models for the records kept by the storage service."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class InsertUser(BaseModel):
    # Unknown fields are carried through to the stored record untouched.
    model_config = ConfigDict(extra="allow")

    username: str = Field(..., description="Unique login name of the user")
    password: Optional[str] = Field(default=None, description="Opaque credential, stored as given")


class User(InsertUser):
    id: int = Field(..., description="Sequential id assigned by the store")


class InsertSentence(BaseModel):
    model_config = ConfigDict(extra="allow")

    complex_sentence: str = Field(..., description="Original sentence as submitted by the user")
    simplified_sentence: Optional[str] = Field(default=None, description="Simplified rendition of the sentence")
    level: Optional[str] = Field(default=None, description="Simplification level the record was produced for")


class Sentence(InsertSentence):
    id: int = Field(..., description="Sequential id assigned by the store")
