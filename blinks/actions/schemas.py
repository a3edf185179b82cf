# actions/schemas.py
from enum import Enum
from typing import Any, Dict, List, Optional
from datetime import datetime

from pydantic import BaseModel, Field, field_validator


class ActionType(str, Enum):
    """Closed set of blink kinds. Drives branching in resolver and builder."""
    DONATION = "donation"
    PAYMENT = "payment"
    VOTE = "vote"


def _normalize_type(value: Any) -> Any:
    # Accept "Donation", "VOTE", ...
    return value.lower() if isinstance(value, str) else value


class Blink(BaseModel):
    """
    A stored action configuration.

    `config` is an open document whose shape is only checked when the blink
    is resolved or built, never at creation time.
    """
    id: str
    created_at: datetime
    title: str
    icon_url: str
    description: str
    label: str
    wallet_address: str
    type: ActionType
    config: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("type", mode="before")
    @classmethod
    def normalize_type(cls, value: Any) -> Any:
        return _normalize_type(value)


class CreateBlinkRequest(BaseModel):
    title: str
    icon_url: str
    description: str
    label: str
    wallet_address: str
    type: ActionType
    config: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("type", mode="before")
    @classmethod
    def normalize_type(cls, value: Any) -> Any:
        return _normalize_type(value)


class CreateBlinkResponse(BaseModel):
    id: str
    action_url: str


class ActionParameter(BaseModel):
    """An input field the client must fill in before posting."""
    name: str
    type: Optional[str] = None
    label: Optional[str] = None
    required: Optional[bool] = None


class LinkedAction(BaseModel):
    type: str = "transaction"
    label: str
    href: str
    parameters: Optional[List[ActionParameter]] = None


class ActionLinks(BaseModel):
    actions: List[LinkedAction]


class ActionMetadata(BaseModel):
    """Solana Actions GET response."""
    type: str = "action"
    icon: str
    title: str
    description: str
    label: str
    disabled: Optional[bool] = None
    links: Optional[ActionLinks] = None


class ActionPostRequest(BaseModel):
    account: str


class ActionPostResponse(BaseModel):
    type: str = "transaction"
    transaction: str
    message: Optional[str] = None


class ActionRule(BaseModel):
    pathPattern: str
    apiPath: str


class ActionsJson(BaseModel):
    rules: List[ActionRule]
