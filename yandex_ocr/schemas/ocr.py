"""Wire models of the Yandex OCR recognition API.

The service sends numeric values (coordinates, counts, indices) as strings,
so they are kept as strings here.
"""

from pydantic import BaseModel, ConfigDict, Field


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True, frozen=True)


class Vertex(_WireModel):
    x: str = "0"
    y: str = "0"


class BoundingBox(_WireModel):
    vertices: list[Vertex] = Field(default_factory=list)


class TextSegment(_WireModel):
    start_index: str = Field(default="0", alias="startIndex")
    length: str = "0"


class Language(_WireModel):
    language_code: str = Field(..., alias="languageCode")


class Word(_WireModel):
    bounding_box: BoundingBox = Field(default_factory=BoundingBox, alias="boundingBox")
    text: str = ""
    entity_index: str | None = Field(default=None, alias="entityIndex")
    text_segments: list[TextSegment] = Field(default_factory=list, alias="textSegments")


class Line(_WireModel):
    bounding_box: BoundingBox = Field(default_factory=BoundingBox, alias="boundingBox")
    text: str = ""
    words: list[Word] = Field(default_factory=list)
    text_segments: list[TextSegment] = Field(default_factory=list, alias="textSegments")
    orientation: str | None = None


class Block(_WireModel):
    bounding_box: BoundingBox = Field(default_factory=BoundingBox, alias="boundingBox")
    lines: list[Line] = Field(default_factory=list)
    languages: list[Language] = Field(default_factory=list)
    text_segments: list[TextSegment] = Field(default_factory=list, alias="textSegments")
    layout_type: str | None = Field(default=None, alias="layoutType")


class Entity(_WireModel):
    name: str
    text: str


class Cell(_WireModel):
    bounding_box: BoundingBox = Field(default_factory=BoundingBox, alias="boundingBox")
    row_index: str = Field(default="0", alias="rowIndex")
    column_index: str = Field(default="0", alias="columnIndex")
    column_span: str = Field(default="1", alias="columnSpan")
    row_span: str = Field(default="1", alias="rowSpan")
    text: str = ""
    text_segments: list[TextSegment] = Field(default_factory=list, alias="textSegments")


class Table(_WireModel):
    bounding_box: BoundingBox = Field(default_factory=BoundingBox, alias="boundingBox")
    row_count: str = Field(default="0", alias="rowCount")
    column_count: str = Field(default="0", alias="columnCount")
    cells: list[Cell] = Field(default_factory=list)


class Picture(_WireModel):
    bounding_box: BoundingBox = Field(default_factory=BoundingBox, alias="boundingBox")
    score: str | None = None


class TextAnnotation(_WireModel):
    full_text: str = Field(..., alias="fullText")
    width: str | None = None
    height: str | None = None
    blocks: list[Block] | None = None
    entities: list[Entity] | None = None
    tables: list[Table] | None = None
    rotate: str | None = None
    markdown: str | None = None
    pictures: list[Picture] | None = None


class OcrResult(_WireModel):
    """Decoded payload of a finished recognition job."""

    text_annotation: TextAnnotation = Field(..., alias="textAnnotation")
    page: str | None = None

    @property
    def full_text(self) -> str:
        return self.text_annotation.full_text


class RecognitionResponse(_WireModel):
    result: OcrResult


class ApiErrorBody(_WireModel):
    message: str


class AsyncOperation(_WireModel):
    """Acceptance payload of ``recognizeTextAsync``; ``id`` identifies the job."""

    id: str = Field(..., min_length=1)
    description: str = ""
    done: bool = False


class RecognizeRequest(_WireModel):
    mime_type: str = Field(..., alias="mimeType")
    language_codes: list[str] = Field(..., alias="languageCodes")
    model: str
    content: str

    def to_payload(self) -> dict[str, object]:
        return self.model_dump(by_alias=True)
