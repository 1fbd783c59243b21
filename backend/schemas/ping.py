"""Pydantic schema for the ping endpoint."""

from pydantic import BaseModel

SERVICE_NAME = "dca-projection"


class PingResponse(BaseModel):
    message: str = "pong"
    service: str = SERVICE_NAME
