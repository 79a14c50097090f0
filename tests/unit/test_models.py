"""Tests for heypicture.core.models - generation request and wire models."""

from __future__ import annotations

import pytest

from heypicture.core.models import (
    ErrorResponse,
    GenerationRequest,
    PredictRequest,
    PredictResponse,
)


class TestGenerationRequest:
    def test_default_count_is_three(self):
        assert GenerationRequest(prompt="x").count == 3

    def test_validate_accepts_valid_request(self):
        GenerationRequest(prompt="a red balloon", count=3).validate()

    @pytest.mark.parametrize("prompt", ["", " ", "\t\n"])
    def test_validate_rejects_blank_prompt(self, prompt):
        with pytest.raises(ValueError, match="enter a prompt"):
            GenerationRequest(prompt=prompt).validate()

    @pytest.mark.parametrize("count", [0, -1])
    def test_validate_rejects_non_positive_count(self, count):
        with pytest.raises(ValueError, match="positive integer"):
            GenerationRequest(prompt="x", count=count).validate()

    def test_clean_prompt_is_trimmed(self):
        assert GenerationRequest(prompt="  a red balloon  ").clean_prompt == "a red balloon"

    def test_to_payload(self):
        payload = GenerationRequest(prompt=" a red balloon ", count=2).to_payload()

        assert isinstance(payload, PredictRequest)
        assert payload.model_dump() == {
            "instances": {"prompt": "a red balloon"},
            "parameters": {"sampleCount": 2},
        }


class TestPredictResponse:
    def test_missing_predictions_defaults_to_empty(self):
        assert PredictResponse.model_validate({}).predictions == []

    def test_unknown_fields_are_ignored(self):
        response = PredictResponse.model_validate(
            {
                "predictions": [{"bytesBase64Encoded": "AAAA", "mimeType": "image/png", "extra": 1}],
                "metadata": {},
            }
        )

        assert response.predictions[0].bytesBase64Encoded == "AAAA"
        assert response.predictions[0].mimeType == "image/png"

    def test_prediction_without_payload(self):
        response = PredictResponse.model_validate({"predictions": [{"raiFilteredReason": "x"}]})

        assert response.predictions[0].bytesBase64Encoded is None

    def test_null_predictions_is_empty(self):
        assert PredictResponse.model_validate({"predictions": None}).predictions == []

    def test_malformed_entries_are_dropped(self):
        response = PredictResponse.model_validate(
            {"predictions": [None, {"bytesBase64Encoded": 123}, 7, {"bytesBase64Encoded": "AAAA"}]}
        )

        assert [p.bytesBase64Encoded for p in response.predictions] == ["AAAA"]


class TestErrorResponse:
    def test_parses_error_message(self):
        body = ErrorResponse.model_validate(
            {"error": {"code": 400, "message": "API key not valid.", "status": "INVALID_ARGUMENT"}}
        )

        assert body.error.message == "API key not valid."
        assert body.error.code == 400

    def test_missing_error_object(self):
        assert ErrorResponse.model_validate({}).error is None
