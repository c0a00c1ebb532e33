"""Server configuration loaded from the environment."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from wordduel.dictionary import DEFAULT_DICTIONARY_URL
from wordduel.engine import SessionConfig, Variant


class ServerConfig(BaseModel):
    """Configuration for the duel server."""

    # The two fixed identities allowed to play
    identities: tuple[str, str] = ("alice", "bob")

    # Session rules
    variant: Variant = Variant.MULTI_WORD
    words_per_participant: int | None = None  # None = variant default
    turn_limit: int | None = None
    guess_budget: int | None = None
    seed: int | None = None

    # Word validation
    validator: Literal["dictionary", "static"] = "dictionary"
    dictionary_url: str = DEFAULT_DICTIONARY_URL
    dictionary_timeout_sec: float = 5.0

    # Transport
    allowed_origins: list[str] = Field(default_factory=lambda: ["*"])
    host: str = "0.0.0.0"
    port: int = 3001

    @field_validator("identities")
    @classmethod
    def distinct_identities(cls, value: tuple[str, str]) -> tuple[str, str]:
        if value[0] == value[1]:
            raise ValueError("The two identities must differ")
        return value

    @model_validator(mode="after")
    def check_session_rules(self) -> "ServerConfig":
        # Overrides must still satisfy the variant's rules
        try:
            self.session_config()
        except ValidationError as e:
            raise ValueError(f"Invalid session rules: {e.errors()[0]['msg']}") from e
        return self

    def session_config(self) -> SessionConfig:
        """Build the rules for a new session, applying overrides to the variant defaults."""
        base = SessionConfig.for_variant(self.variant, seed=self.seed)
        overrides = {
            "words_per_participant": self.words_per_participant,
            "turn_limit": self.turn_limit,
            "guess_budget": self.guess_budget,
        }
        update = {k: v for k, v in overrides.items() if v is not None}
        return SessionConfig(**{**base.model_dump(), **update})


def _optional_int(name: str) -> int | None:
    value = os.environ.get(name)
    return int(value) if value else None


def load_config(env_file: Path | None = None) -> ServerConfig:
    """Load ServerConfig from environment variables (and `.env`, if present)."""
    load_dotenv(env_file or Path(__file__).resolve().parents[2] / ".env")

    data: dict = {
        "variant": os.environ.get("WORDDUEL_VARIANT", Variant.MULTI_WORD.value),
        "words_per_participant": _optional_int("WORDDUEL_WORDS_PER_PARTICIPANT"),
        "turn_limit": _optional_int("WORDDUEL_TURN_LIMIT"),
        "guess_budget": _optional_int("WORDDUEL_GUESS_BUDGET"),
        "seed": _optional_int("WORDDUEL_SEED"),
        "validator": os.environ.get("WORDDUEL_VALIDATOR", "dictionary"),
        "dictionary_url": os.environ.get("DICTIONARY_API_URL", DEFAULT_DICTIONARY_URL),
        "dictionary_timeout_sec": float(os.environ.get("DICTIONARY_TIMEOUT_SEC", "5")),
        "allowed_origins": os.environ.get("ALLOWED_ORIGINS", "*").split(","),
        "host": os.environ.get("HOST", "0.0.0.0"),
        "port": int(os.environ.get("PORT", "3001")),
    }
    identities = os.environ.get("WORDDUEL_IDENTITIES")
    if identities:
        names = [name.strip() for name in identities.split(",") if name.strip()]
        if len(names) != 2:
            raise ValueError("WORDDUEL_IDENTITIES must name exactly two identities")
        data["identities"] = tuple(names)

    return ServerConfig(**data)
