from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field


class TextContent(BaseModel):
    type: Literal["text"] = "text"
    text: str


class DocumentContent(BaseModel):
    type: Literal["document"] = "document"
    data: str = Field(..., description="Base64 payload or URL, see encoding")
    encoding: Literal["base64", "url"] = "base64"
    media_type: str | None = Field(default=None, description="MIME type, e.g. application/pdf")


class ImageContent(BaseModel):
    type: Literal["image"] = "image"
    data: str = Field(..., description="Base64 payload or URL, see encoding")
    encoding: Literal["base64", "url"] = "base64"
    media_type: str | None = Field(default=None, description="MIME type, e.g. image/png")


ContentPart = Annotated[
    Union[TextContent, DocumentContent, ImageContent],
    Field(discriminator="type"),
]


class UserMessage(BaseModel):
    role: Literal["user"] = "user"
    content: list[ContentPart] = Field(default_factory=list)
