import pytest

from sigtalk.protocol import MessageDecoder, encode_bits


def _decode(decoder, message):
    results = [decoder.feed(bit) for bit in encode_bits(message)]
    assert all(result is None for result in results[:-1])
    return results[-1]


def test_first_byte_is_sent_most_significant_bit_first():
    bits = list(encode_bits("A"))
    assert bits[:8] == [False, True, False, False, False, False, False, True]


def test_terminator_is_eight_zero_bits():
    bits = list(encode_bits(b"xyz"))
    assert len(bits) == 8 * (len(b"xyz") + 1)
    assert bits[-8:] == [False] * 8


def test_empty_message_is_only_the_terminator():
    assert list(encode_bits("")) == [False] * 8


@pytest.mark.parametrize("message", ["hello", "h\u00e9llo w\u00f6rld", "x" * 300])
def test_round_trip_text(message):
    assert _decode(MessageDecoder(), message) == message.encode("utf-8")


def test_round_trip_bytes():
    data = bytes(range(1, 256))
    assert _decode(MessageDecoder(), data) == data


def test_consecutive_messages_are_independent():
    decoder = MessageDecoder()
    assert _decode(decoder, "first") == b"first"
    assert _decode(decoder, "2nd") == b"2nd"


def test_reset_discards_partial_byte():
    decoder = MessageDecoder()
    for bit in (True, True, False):
        assert decoder.feed(bit) is None
    decoder.reset()
    assert _decode(decoder, "ok") == b"ok"


def test_nul_inside_message_is_rejected():
    with pytest.raises(ValueError):
        encode_bits(b"a\0b")


def test_non_text_message_is_rejected():
    with pytest.raises(TypeError):
        encode_bits(42)


def test_capacity_counts_terminator():
    decoder = MessageDecoder(capacity=3)
    assert _decode(decoder, "ab") == b"ab"
    bits = list(encode_bits("abc"))
    with pytest.raises(OverflowError):
        for bit in bits:
            decoder.feed(bit)


def test_decoder_starts_over_after_overflow():
    decoder = MessageDecoder(capacity=2)
    with pytest.raises(OverflowError):
        for bit in encode_bits("ab"):
            decoder.feed(bit)
    assert _decode(decoder, "a") == b"a"


def test_capacity_must_be_positive():
    with pytest.raises(ValueError):
        MessageDecoder(capacity=0)