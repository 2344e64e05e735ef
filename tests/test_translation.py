"""Tests for data URL helpers and history/message translation."""

import pytest

from imagestudio.models.requests import HistoryItem, HistoryPart, Role
from imagestudio.services.translation import build_message_parts, translate_history
from imagestudio.utils.data_url import (
    InvalidDataUrlError,
    build_data_url,
    extension_for_mime_type,
    infer_mime_type,
    parse_data_url,
)


def test_infer_mime_type():
    assert infer_mime_type("data:image/png;base64,AAAA") == "image/png"
    assert infer_mime_type("data:image/jpeg;base64,AAAA") == "image/jpeg"
    # Anything that does not mention PNG is treated as JPEG
    assert infer_mime_type("data:image/webp;base64,AAAA") == "image/jpeg"


def test_parse_data_url_decodes_payload(png_data_url, png_bytes):
    data, mime_type = parse_data_url(png_data_url)

    assert data == png_bytes
    assert mime_type == "image/png"


def test_parse_data_url_requires_prefix_in_strict_mode():
    with pytest.raises(InvalidDataUrlError, match="Invalid image data URL format"):
        parse_data_url("image/png;base64,AAAA")


def test_parse_data_url_requires_payload_segment():
    with pytest.raises(InvalidDataUrlError, match="Invalid image data URL format"):
        parse_data_url("data:image/png;base64")


def test_parse_data_url_rejects_bad_base64():
    with pytest.raises(InvalidDataUrlError):
        parse_data_url("data:image/png;base64,not base64!!")


def test_build_data_url_round_trips_bytes(png_data_url, png_bytes):
    assert build_data_url(png_bytes, "image/png") == png_data_url


def test_extension_for_mime_type():
    assert extension_for_mime_type("image/png") == "png"
    assert extension_for_mime_type("image/jpeg") == "jpg"
    assert extension_for_mime_type("image/webp") == "jpg"


def test_translate_history_maps_text_and_images(png_data_url, png_bytes, jpeg_data_url, jpeg_bytes):
    history = [
        HistoryItem(role=Role.USER, parts=[HistoryPart(text="Draw a cat"), HistoryPart(image=jpeg_data_url)]),
        HistoryItem(role=Role.MODEL, parts=[HistoryPart(text="Here it is"), HistoryPart(image=png_data_url)]),
    ]

    turns = translate_history(history)

    assert [turn.role for turn in turns] == [Role.USER, Role.MODEL]
    assert turns[0].parts[0].text == "Draw a cat"
    assert turns[0].parts[1].inline_data.data == jpeg_bytes
    assert turns[0].parts[1].inline_data.mime_type == "image/jpeg"
    assert turns[1].parts[1].inline_data.data == png_bytes
    assert turns[1].parts[1].inline_data.mime_type == "image/png"


def test_translate_history_drops_empty_turns():
    """A turn whose only part is an empty string disappears entirely."""
    history = [
        HistoryItem(role=Role.USER, parts=[HistoryPart(text="")]),
        HistoryItem(role=Role.MODEL, parts=[HistoryPart(text="kept")]),
    ]

    turns = translate_history(history)

    assert len(turns) == 1
    assert turns[0].role == Role.MODEL
    assert turns[0].parts[0].text == "kept"


def test_translate_history_drops_unusable_parts():
    history = [
        HistoryItem(
            role=Role.USER,
            parts=[
                HistoryPart(),
                HistoryPart(image="data:image/png;base64"),
                HistoryPart(image="data:image/png;base64,@@@"),
                HistoryPart(text="only this survives"),
            ],
        ),
    ]

    turns = translate_history(history)

    assert len(turns) == 1
    assert len(turns[0].parts) == 1
    assert turns[0].parts[0].text == "only this survives"


def test_translate_history_handles_missing_history():
    assert translate_history(None) == []
    assert translate_history([]) == []


def test_build_message_parts_prompt_only():
    parts = build_message_parts("A red dragon")

    assert len(parts) == 1
    assert parts[0].text == "A red dragon"


def test_build_message_parts_with_image(png_data_url, png_bytes):
    parts = build_message_parts("Make it blue", png_data_url)

    assert len(parts) == 2
    assert parts[0].text == "Make it blue"
    assert parts[1].inline_data.data == png_bytes
    assert parts[1].inline_data.mime_type == "image/png"


def test_build_message_parts_rejects_non_data_url():
    with pytest.raises(InvalidDataUrlError):
        build_message_parts("Make it blue", "https://example.com/cat.png")
