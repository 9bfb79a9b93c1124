from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AskRequestIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    prompt: str
    user_id: str = Field(..., alias="userId", min_length=1)
    country_name: str | None = Field(None, alias="countryName")

    @field_validator("prompt")
    @classmethod
    def _require_prompt(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Prompt is required")
        return value

    @field_validator("country_name", mode="before")
    @classmethod
    def _blank_country_is_none(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class MapAskResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    response_type: Literal["map"] = Field("map", alias="responseType")
    title: str
    embed_url: str = Field(..., alias="embedUrl")
    response: str


class TextAskResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    response_type: Literal["text"] = Field("text", alias="responseType")
    response: str


AskResponse = Annotated[
    Union[MapAskResponse, TextAskResponse],
    Field(discriminator="response_type"),
]
