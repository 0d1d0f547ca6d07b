"""Unit tests for best-effort payload parsing."""

from modelfit.scoring.payloads import (
    BusinessPayload,
    Dimension,
    OpaquePayload,
    ResourcePayload,
    TechnicalPayload,
    load_json,
    parse_payload,
    score_of,
)


class TestLoadJson:

    def test_decodes_text(self) -> None:
        assert load_json('{"score": 1}') == {"score": 1}

    def test_invalid_text(self) -> None:
        assert load_json("{nope") is None

    def test_passes_decoded_values_through(self) -> None:
        data = {"score": 3}
        assert load_json(data) is data


class TestScoreOf:

    def test_int_and_float(self) -> None:
        assert score_of({"score": 7}) == 7.0
        assert score_of({"score": 7.5}) == 7.5

    def test_rejects_non_numbers(self) -> None:
        assert score_of({"score": "7"}) == 0.0
        assert score_of({"score": None}) == 0.0
        assert score_of({"score": False}) == 0.0
        assert score_of("7") == 0.0


class TestParsePayload:

    def test_resource_alias(self) -> None:
        parsed = parse_payload(
            Dimension.RESOURCE,
            '{"score": 72, "fineTuning": {"cards": 4}, "inference": {"cards": 1}}',
        )
        assert isinstance(parsed, ResourcePayload)
        assert parsed.score == 72
        assert parsed.fine_tuning == {"cards": 4}
        assert parsed.model_dump(by_alias=True)["fineTuning"] == {"cards": 4}

    def test_unknown_fields_are_kept(self) -> None:
        parsed = parse_payload(Dimension.TECHNICAL, '{"score": 60, "notes": "new field"}')
        assert isinstance(parsed, TechnicalPayload)
        assert parsed.model_dump()["notes"] == "new field"

    def test_bad_score_normalized_to_zero(self) -> None:
        parsed = parse_payload(Dimension.BUSINESS, '{"score": "high", "risks": ["cost"]}')
        assert isinstance(parsed, BusinessPayload)
        assert parsed.score == 0.0
        assert parsed.risks == ["cost"]

    def test_unexpected_shape_is_opaque(self) -> None:
        parsed = parse_payload(Dimension.TECHNICAL, '{"score": 50, "issues": [{"id": 1}]}')
        assert isinstance(parsed, OpaquePayload)
        assert parsed.score == 50.0
        assert parsed.data["issues"] == [{"id": 1}]

    def test_non_object_is_opaque(self) -> None:
        parsed = parse_payload(Dimension.RESOURCE, "[1, 2]")
        assert isinstance(parsed, OpaquePayload)
        assert parsed.score == 0.0

    def test_missing_or_broken(self) -> None:
        assert parse_payload(Dimension.BUSINESS, None) is None
        assert parse_payload(Dimension.BUSINESS, "not-json") is None
