import json
from unittest.mock import patch

import pytest

from conftest import Celsius, Item, Point, make_raw
from restserial._constants import INPUT_DATA_NIL_REASON, JSON_PARSE_FAILED_REASON
from restserial.config import DecoderConfig
from restserial.decodable import decode_node
from restserial.decoder import (
    ArraySerializer,
    ObjectSerializer,
    decode_array,
    decode_object,
)
from restserial.error_code import Code
from restserial.errors import APIError
from restserial.transport import RawResponse


def reject_everything(data: bytes) -> APIError:
    return APIError(code=500, message="sniffed")


def accept_everything(data: bytes) -> None:
    return None


def test_decode_object_from_root() -> None:
    result = decode_object(make_raw('{"a": 1}'), Item)
    assert result.ok()
    assert result.data == Item(a=1)


def test_decode_object_matches_direct_node_decoding() -> None:
    payload = {"data": {"point": {"x": 3, "y": 4}}}
    result = decode_object(make_raw(json.dumps(payload)), Point, path=["data", "point"])
    assert result.data == decode_node(payload["data"]["point"], Point)
    assert result.data == Point(x=3, y=4)


def test_decode_object_with_mixed_path() -> None:
    result = decode_object(make_raw('{"items": [{"a": 1}]}'), Item, path=["items", 0])
    assert result.data == Item(a=1)


def test_decode_object_with_empty_path_targets_root() -> None:
    raw = make_raw('{"a": 7}')
    assert decode_object(raw, Item, path=[]) == decode_object(raw, Item)


def test_decode_object_scalars_and_self_decoding_types() -> None:
    raw = make_raw('{"temps": [21.5, 19]}')
    assert decode_object(raw, Celsius, path=["temps", 0]).data == Celsius(21.5)
    assert decode_object(raw, float, path=["temps", 1]).data == 19.0
    assert decode_object(raw, list[float], path=["temps"]).data == [21.5, 19.0]


def test_self_decoding_failure_is_malformed() -> None:
    result = decode_object(make_raw('{"temp": "hot"}'), Celsius, path=["temp"])
    assert result.error.status == Code.MALFORMED_PAYLOAD
    assert "expected a number" in result.error.detail


def test_transport_error_passes_through(transport_error) -> None:
    raw = RawResponse(error=transport_error, data=b'{"a": 1}')
    for result in (
        decode_object(raw, Item, sniffer=reject_everything),
        decode_array(raw, Item, sniffer=reject_everything),
    ):
        assert not result.ok()
        assert result.error.status == Code.TRANSPORT_ERROR
        assert result.error.cause is transport_error
        assert result.error.errmsg == "boom"


def test_absent_payload() -> None:
    raw = make_raw(None)
    with patch("restserial.decoder.json.loads") as mock_loads:
        for result in (decode_object(raw, Item), decode_array(raw, Item)):
            assert result.error.status == Code.PAYLOAD_ABSENT
            assert result.error.errmsg == INPUT_DATA_NIL_REASON
        mock_loads.assert_not_called()


def test_sniffer_preempts_parsing() -> None:
    raw = make_raw("<html>gateway exploded</html>")
    with patch(
        "restserial.decoder.json.loads", side_effect=AssertionError("parsed")
    ) as mock_loads:
        obj = decode_object(raw, Item, sniffer=reject_everything)
        arr = decode_array(raw, Item, sniffer=reject_everything)
    mock_loads.assert_not_called()
    for result in (obj, arr):
        assert result.error.status == Code.SNIFFER_REPORTED_ERROR
        assert isinstance(result.error.cause, APIError)
        assert result.error.errmsg == "500: sniffed"


def test_sniffer_failure_object_is_returned_unchanged() -> None:
    failure = APIError(code=418, message="teapot")
    result = decode_object(make_raw('{"a": 1}'), Item, sniffer=lambda data: failure)
    assert result.error.cause is failure


def test_quiet_sniffer_lets_decoding_proceed() -> None:
    result = decode_object(make_raw('{"a": 1}'), Item, sniffer=accept_everything)
    assert result.data == Item(a=1)


@pytest.mark.parametrize("payload", [b"", b"{", b"not json", b"\xc3\x28"])
def test_invalid_json_is_malformed(payload: bytes) -> None:
    result = decode_object(make_raw(payload), Item)
    assert result.error.status == Code.MALFORMED_PAYLOAD
    assert result.error.errmsg == JSON_PARSE_FAILED_REASON


@pytest.mark.parametrize(
    "path",
    [["missing"], ["items", 3], ["items", "a"], [0]],
)
def test_navigation_failures_are_malformed(path) -> None:
    result = decode_object(make_raw('{"items": [{"a": 1}]}'), Item, path=path)
    assert result.error.status == Code.MALFORMED_PAYLOAD
    assert result.error.errmsg == JSON_PARSE_FAILED_REASON
    assert result.error.detail


def test_construction_failure_is_malformed() -> None:
    result = decode_object(make_raw('{"a": "x"}'), Item)
    assert result.error.status == Code.MALFORMED_PAYLOAD
    assert result.data is None


@pytest.mark.parametrize("payload", [b'{"a": 1}', b"garbage", b"[]"])
def test_path_of_six_segments_is_rejected(payload: bytes) -> None:
    path = ["a", "b", "c", "d", "e", "f"]
    for result in (
        decode_object(make_raw(payload), Item, path=path),
        decode_array(make_raw(payload), Item, path=path),
    ):
        assert result.error.status == Code.MALFORMED_PAYLOAD
        assert "at most 5" in result.error.detail


def test_path_bound_can_be_lifted() -> None:
    payload = {"a": {"b": {"c": {"d": {"e": {"f": {"a": 9}}}}}}}
    path = ["a", "b", "c", "d", "e", "f"]
    result = decode_object(
        make_raw(json.dumps(payload)),
        Item,
        path=path,
        config=DecoderConfig(max_path_length=None),
    )
    assert result.data == Item(a=9)


def test_strict_decoding_rejects_coercion() -> None:
    raw = make_raw('{"a": "1"}')
    assert decode_object(raw, Item).data == Item(a=1)
    strict = decode_object(raw, Item, config=DecoderConfig(strict_decoding=True))
    assert strict.error.status == Code.MALFORMED_PAYLOAD


def test_decode_array_preserves_order() -> None:
    result = decode_array(make_raw('[{"a": 1}, {"a": 2}]'), Item)
    assert result.ok()
    assert result.data == [Item(a=1), Item(a=2)]


def test_decode_array_is_all_or_nothing() -> None:
    result = decode_array(make_raw('[{"a": 1}, {"a": "x"}]'), Item)
    assert result.error.status == Code.MALFORMED_PAYLOAD
    assert result.data is None
    assert "$[1]" in result.error.detail


def test_decode_array_at_path() -> None:
    raw = make_raw('{"data": {"items": [{"a": 1}, {"a": 2}, {"a": 3}]}}')
    result = decode_array(raw, Item, path=["data", "items"])
    assert [item.a for item in result.data] == [1, 2, 3]


def test_decode_array_of_empty_array() -> None:
    assert decode_array(make_raw("[]"), Item).data == []


def test_decode_array_requires_array_node() -> None:
    result = decode_array(make_raw('{"a": 1}'), Item)
    assert result.error.status == Code.MALFORMED_PAYLOAD
    assert "expected an array" in result.error.detail


def test_decoding_is_repeatable() -> None:
    good = make_raw('{"items": [{"a": 1}, {"a": 2}]}')
    bad = make_raw('{"items": [{"a": 1}, {"a": "x"}]}')
    for raw in (good, bad):
        first = decode_array(raw, Item, path=["items"])
        second = decode_array(raw, Item, path=["items"])
        assert first == second
    assert decode_object(good, Item, path=["items", 1]) == decode_object(
        good, Item, path=["items", 1]
    )


def test_serializers_delegate_to_decoders() -> None:
    raw = make_raw('{"data": [{"a": 5}]}')
    assert ObjectSerializer(Item, path=["data", 0])(raw) == decode_object(
        raw, Item, path=["data", 0]
    )
    assert ArraySerializer(Item, path=["data"])(raw).data == [Item(a=5)]
    assert (
        ArraySerializer(Item, sniffer=reject_everything)(raw).error.status
        == Code.SNIFFER_REPORTED_ERROR
    )


def test_deeply_nested_json_is_malformed() -> None:
    raw = make_raw(b"[" * 100000 + b"]" * 100000)
    for result in (decode_object(raw, Item), decode_array(raw, Item)):
        assert result.error.status == Code.MALFORMED_PAYLOAD
        assert result.error.errmsg == JSON_PARSE_FAILED_REASON
