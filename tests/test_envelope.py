import pytest

from solafon_mcp.envelope import is_error_payload, unwrap, wrap


def test_wrap_shape_is_single_indented_text_block():
    envelope = wrap({"balance": 1.5})
    assert list(envelope) == ["content"]
    assert len(envelope["content"]) == 1
    block = envelope["content"][0]
    assert block["type"] == "text"
    assert block["text"] == '{\n  "balance": 1.5\n}'


@pytest.mark.parametrize(
    "value",
    [
        {"sol": 1.25, "tokens": [{"symbol": "USDC", "amount": "10"}], "frozen": False, "memo": None},
        [1, "two", {"three": 3}],
        "plain text",
        {"name": "Солафон бот ✓"},
    ],
)
def test_wrap_then_parse_reproduces_value(value):
    assert unwrap(wrap(value)) == value


def test_non_ascii_is_not_escaped():
    assert "✓" in wrap({"mark": "✓"})["content"][0]["text"]


def test_non_serializable_value_is_a_programming_error():
    with pytest.raises(TypeError):
        wrap({"when": object()})


def test_is_error_payload():
    assert is_error_payload({"error": "Could not determine app ID."})
    assert not is_error_payload({"error": ""})
    assert not is_error_payload({"ok": True})
    assert not is_error_payload(["error"])
