"""Pydantic schemas for the health-check and reference endpoints."""

from pydantic import BaseModel

from retireplan import __version__


class PingResponse(BaseModel):
    message: str = "pong"
    version: str = __version__
