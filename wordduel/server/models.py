"""Inbound WebSocket message schemas."""
from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter


class JoinMessage(BaseModel):
    type: Literal["join"] = "join"
    identity: str


class SubmitWordsMessage(BaseModel):
    type: Literal["submit_words"] = "submit_words"
    words: list[str]


class GuessLetterMessage(BaseModel):
    type: Literal["guess"] = "guess"
    letter: str


class GuessWordMessage(BaseModel):
    type: Literal["guess_word"] = "guess_word"
    word: str


class ResetMessage(BaseModel):
    type: Literal["reset"] = "reset"


ClientMessage = Annotated[
    Union[JoinMessage, SubmitWordsMessage, GuessLetterMessage, GuessWordMessage, ResetMessage],
    Field(discriminator="type"),
]

client_message_adapter: TypeAdapter[ClientMessage] = TypeAdapter(ClientMessage)


def parse_client_message(raw: str) -> ClientMessage:
    """Parse one JSON message from a client. Raises pydantic.ValidationError."""
    return client_message_adapter.validate_json(raw)
