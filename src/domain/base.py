"""Base classes shared by domain entities"""

import uuid
from sqlmodel import SQLModel


def generate_uuid() -> str:
    return str(uuid.uuid4())


class BaseModel(SQLModel):
    """Common base for all table entities"""
    pass
