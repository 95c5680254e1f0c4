import pytest

from yandex_ocr.services.ocr.yandex.classify import (
    ProviderFailure,
    RecognitionSucceeded,
    UnrecognizedBody,
    classify,
    resolve,
)
from yandex_ocr.services.ocr.yandex.exceptions import ProviderError, UnexpectedShapeError

SUCCESS_BODY = """
{
  "result": {
    "textAnnotation": {
      "width": "1920",
      "height": 1080,
      "fullText": "hello world",
      "markdown": "hello world",
      "blocks": [
        {
          "boundingBox": {"vertices": [{"x": "0", "y": "0"}, {"x": 100, "y": "20"}]},
          "lines": [{"text": "hello world", "words": [{"text": "hello"}, {"text": "world"}]}],
          "languages": [{"languageCode": "en"}],
          "layoutType": "LAYOUT_TYPE_TEXT"
        }
      ],
      "entities": [{"name": "greeting", "text": "hello"}]
    },
    "page": "0"
  }
}
"""


def test_success_body_is_decoded() -> None:
    classified = classify(SUCCESS_BODY)

    assert isinstance(classified, RecognitionSucceeded)
    result = resolve(classified)
    assert result.full_text == "hello world"
    assert result.page == "0"
    annotation = result.text_annotation
    assert annotation.height == "1080"
    assert annotation.blocks[0].lines[0].words[1].text == "world"
    assert annotation.blocks[0].bounding_box.vertices[1].x == "100"
    assert annotation.blocks[0].languages[0].language_code == "en"
    assert annotation.entities[0].name == "greeting"
    assert annotation.tables is None


def test_error_body_is_a_provider_error() -> None:
    classified = classify(b'{"message": "quota exceeded"}')

    assert classified == ProviderFailure("quota exceeded")
    with pytest.raises(ProviderError) as exc_info:
        resolve(classified)
    assert exc_info.value.message == "quota exceeded"
    assert exc_info.value.stage == "poll"


@pytest.mark.parametrize(
    "body",
    [
        "not json at all",
        "[1, 2, 3]",
        '{"status": "running"}',
        '{"message": 42}',
        '{"result": {"page": "0"}}',
    ],
)
def test_unknown_bodies_are_never_coerced(body) -> None:
    classified = classify(body)

    assert isinstance(classified, UnrecognizedBody)
    with pytest.raises(UnexpectedShapeError) as exc_info:
        resolve(classified, stage="submit")
    assert exc_info.value.body == body
    assert exc_info.value.stage == "submit"
    assert not isinstance(exc_info.value, ProviderError)
