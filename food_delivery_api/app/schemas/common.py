"""Schemas and field types shared by several routers."""

from typing import Annotated

from fastapi import Path
from pydantic import BaseModel, Field

# Ids, prices, quantities and totals are unsigned 64-bit values.
U64_MAX = 2**64 - 1

U64 = Annotated[int, Field(ge=0, le=U64_MAX)]

# Path parameter form of ``U64`` for record ids.
RecordId = Annotated[int, Path(ge=0, le=U64_MAX)]


class MessageRead(BaseModel):
    """Plain confirmation returned by delete and state-change operations."""

    message: str
