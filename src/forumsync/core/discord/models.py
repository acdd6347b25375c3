"""
Chat platform data models.

Defines Pydantic models for message payloads (content plus embeds) and the
thread identities returned by the forum API.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class EmbedField(BaseModel):
    """A name/value pair rendered inside an embed."""

    model_config = ConfigDict(frozen=True)

    name: str
    value: str
    inline: bool = False


class Embed(BaseModel):
    """A structured block attached to a message."""

    model_config = ConfigDict(frozen=True)

    title: str = ""
    description: str = ""
    fields: tuple[EmbedField, ...] = ()

    def to_api(self) -> dict[str, Any]:
        data: dict[str, Any] = {"title": self.title}
        if self.description:
            data["description"] = self.description
        if self.fields:
            data["fields"] = [field.model_dump() for field in self.fields]
        return data


class MessagePayload(BaseModel):
    """
    A message as sent to the chat platform.

    Example:
        >>> MessagePayload(content="hello").to_api()
        {'content': 'hello', 'embeds': []}
    """

    model_config = ConfigDict(frozen=True)

    content: str = ""
    embeds: tuple[Embed, ...] = ()

    def to_api(self) -> dict[str, Any]:
        return {"content": self.content, "embeds": [embed.to_api() for embed in self.embeds]}


class ThreadRef(BaseModel):
    """Result of creating a thread or posting into one."""

    thread_id: str
    message_id: str | None = None


class ThreadIdentity(BaseModel):
    """A thread's id and current name."""

    thread_id: str
    name: str = Field(default="")
