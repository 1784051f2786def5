"""Request and response types for the OpsGenie v2 alert API."""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Priority(StrEnum):
    """Alert priority, P1 being the most urgent."""

    P1 = "P1"
    P2 = "P2"
    P3 = "P3"
    P4 = "P4"
    P5 = "P5"


class ResponderType(StrEnum):
    TEAM = "team"
    USER = "user"
    ESCALATION = "escalation"
    SCHEDULE = "schedule"


class IdentifierType(StrEnum):
    """How an alert identifier in a URL path is interpreted."""

    ID = "id"
    ALIAS = "alias"
    TINY = "tiny"


class Responder(BaseModel):
    """Team, user, escalation or schedule notified by an alert."""

    type: ResponderType
    name: str = ""
    id: str = ""

    def to_payload(self) -> dict[str, str]:
        payload = {"type": self.type.value}
        if self.id:
            payload["id"] = self.id
        if self.name:
            payload["name"] = self.name
        return payload


class CreateAlertRequest(BaseModel):
    """Body of ``POST /v2/alerts``."""

    message: str
    alias: str = ""
    description: str = ""
    responders: list[Responder] = Field(default_factory=list)
    actions: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    details: dict[str, str] = Field(default_factory=dict)
    entity: str = ""
    source: str = ""
    priority: Priority = Priority.P3
    note: str = ""

    def to_payload(self) -> dict[str, Any]:
        """JSON body with empty optional fields left out."""
        payload: dict[str, Any] = {
            "message": self.message,
            "priority": self.priority.value,
        }
        optional: dict[str, Any] = {
            "alias": self.alias,
            "description": self.description,
            "responders": [r.to_payload() for r in self.responders],
            "actions": self.actions,
            "tags": self.tags,
            "details": self.details,
            "entity": self.entity,
            "source": self.source,
            "note": self.note,
        }
        payload.update({k: v for k, v in optional.items() if v})
        return payload


class CloseAlertRequest(BaseModel):
    """Body and path of ``POST /v2/alerts/{identifier}/close``."""

    identifier: str
    identifier_type: IdentifierType = IdentifierType.ID
    source: str = ""
    note: str = ""
    user: str = ""

    def to_payload(self) -> dict[str, str]:
        fields = {"source": self.source, "note": self.note, "user": self.user}
        return {k: v for k, v in fields.items() if v}


class RequestResult(BaseModel):
    """Acknowledgement of an asynchronously processed write request."""

    model_config = ConfigDict(populate_by_name=True)

    result: str = ""
    took: float = 0.0
    request_id: str = Field(default="", alias="requestId")


class Alert(BaseModel):
    """Subset of the alert resource returned by ``GET /v2/alerts/{identifier}``."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    tiny_id: str = Field(default="", alias="tinyId")
    alias: str = ""
    message: str = ""
    status: str = ""
    count: int = 0
    acknowledged: bool = False
    priority: str = ""
