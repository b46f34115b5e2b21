import random

import pytest

from aliquery.core.signing.canonical import build_canonical_query, parse_query, stringify
from aliquery.domain.errors import EncodingError


def test_keys_are_sorted_by_code_point():
    query = build_canonical_query({"b": "1", "B": "2", "a": "3"})
    assert query == "B=2&a=3&b=1"


def test_signname_sorts_before_signature_keys():
    query = build_canonical_query({"SignatureNonce": "n", "SignName": "Test", "SignatureMethod": "HMAC-SHA1"})
    assert [pair.split("=")[0] for pair in query.split("&")] == ["SignName", "SignatureMethod", "SignatureNonce"]


def test_insertion_order_does_not_change_output():
    params = {f"Key{i}": f"value {i}" for i in range(20)}
    params.update({"Action": "SendSms", "a": "x", "Z": "y"})
    expected = build_canonical_query(params)

    rng = random.Random(1234)
    items = list(params.items())
    for _ in range(10):
        rng.shuffle(items)
        assert build_canonical_query(dict(items)) == expected

    keys = [pair.split("=")[0] for pair in expected.split("&")]
    assert keys == sorted(params)


def test_none_values_are_omitted():
    query = build_canonical_query({"BizId": None, "PhoneNumber": "138"})
    assert query == "PhoneNumber=138"
    assert "BizId" not in query


def test_empty_string_is_kept():
    assert build_canonical_query({"OutId": ""}) == "OutId="


def test_json_value_is_encoded_as_opaque_string():
    query = build_canonical_query({"TemplateParam": '{"code":"1234"}'})
    assert query == "TemplateParam=%7B%22code%22%3A%221234%22%7D"


def test_empty_parameter_set():
    assert build_canonical_query({}) == ""


@pytest.mark.parametrize(
    "value, expected",
    [(True, "true"), (False, "false"), (10, "10"), (1.5, "1.5"), ("x", "x")],
)
def test_stringify(value, expected):
    assert stringify(value) == expected


def test_structured_values_must_be_serialized_first():
    with pytest.raises(EncodingError):
        build_canonical_query({"TemplateParam": {"code": "1234"}})


def test_parse_query_inverts_build():
    params = {"A": "a b", "B": "x*y~z", "C": "中文", "D": "k=v&w"}
    assert parse_query(build_canonical_query(params)) == params


def test_non_string_keys_raise_encoding_error_before_sorting():
    with pytest.raises(EncodingError):
        build_canonical_query({1: "a", "b": "c"})
