import time
from datetime import datetime, timezone
import pytest
from ulidgen import (
    InvalidCharacterError,
    InvalidLengthError,
    TimeRangeError,
    generate_seeded,
    generate_standard,
    parse,
)
from ulidgen.base32 import ENCODE
from ulidgen.ulid import MAX_TIMESTAMP, decode_time, encode_time

KNOWN_ULID = "01FR9EZ700RPB9GR0NVWG3MYFY"
SEED = 1640995200000


def test_time_round_trip():
    for value in (0, 1, SEED, 2**40 + 12345, MAX_TIMESTAMP):
        assert decode_time(encode_time(value)) == value


def test_encode_time_bounds():
    assert encode_time(0) == "0000000000"
    assert encode_time(MAX_TIMESTAMP) == "7ZZZZZZZZZ"
    with pytest.raises(TimeRangeError):
        encode_time(-1)
    with pytest.raises(TimeRangeError):
        encode_time(MAX_TIMESTAMP + 1)


def test_encode_time_rejects_non_integer():
    with pytest.raises(TypeError):
        encode_time(1.5)


def test_decode_time_rejects_overflowing_field():
    with pytest.raises(TimeRangeError):
        decode_time("8000000000")


def test_decode_time_wrong_length():
    with pytest.raises(InvalidLengthError):
        decode_time("01FR9EZ70")


def test_generate_standard():
    before = time.time_ns() // 1000000
    result = generate_standard()
    after = time.time_ns() // 1000000

    assert len(result.ulid) == 26
    assert len(result.randomness) == 16
    assert before <= result.timestamp <= after
    assert result.ulid[10:] == result.randomness
    assert decode_time(result.ulid[:10]) == result.timestamp
    assert all(c in ENCODE for c in result.ulid)


def test_generate_standard_distinct():
    values = {generate_standard().ulid for _ in range(1000)}
    assert len(values) == 1000


def test_generate_seeded():
    result = generate_seeded(SEED)
    assert result.timestamp == SEED
    assert result.ulid.startswith("01FR9EZ700")
    assert len(result.randomness) == 16


def test_generate_seeded_same_seed_differs():
    first = generate_seeded(SEED)
    second = generate_seeded(SEED)
    assert first.timestamp == second.timestamp
    assert first.randomness != second.randomness


def test_generate_seeded_defaults_to_now():
    before = time.time_ns() // 1000000
    result = generate_seeded()
    after = time.time_ns() // 1000000
    assert before <= result.timestamp <= after


def test_generate_seeded_epoch_is_not_now():
    result = generate_seeded(0)
    assert result.timestamp == 0
    assert result.ulid.startswith("0000000000")


def test_generate_seeded_negative():
    with pytest.raises(TimeRangeError):
        generate_seeded(-1)


def test_generation_result_to_dict():
    result = generate_seeded(SEED)
    assert result.to_dict() == {
        "ulid": result.ulid,
        "timestamp": SEED,
        "randomness": result.randomness,
    }


def test_parse_known_ulid():
    parsed = parse(KNOWN_ULID)
    assert parsed.ulid == KNOWN_ULID
    assert parsed.timestamp_part == "01FR9EZ700"
    assert parsed.randomness_part == "RPB9GR0NVWG3MYFY"
    assert parsed.timestamp == SEED
    assert parsed.date == datetime(2022, 1, 1, tzinfo=timezone.utc)


def test_parse_to_dict():
    data = parse(KNOWN_ULID).to_dict()
    assert data["date"] == "2022-01-01T00:00:00.000Z"
    assert data["timestamp_part"] == "01FR9EZ700"


def test_parse_generated():
    result = generate_standard()
    parsed = parse(result.ulid)
    assert parsed.timestamp == result.timestamp
    assert parsed.randomness_part == result.randomness


def test_parse_invalid_length():
    with pytest.raises(InvalidLengthError):
        parse("invalid")
    with pytest.raises(InvalidLengthError):
        parse("01FN2GZJZK000000000000000000000")


def test_parse_invalid_character_in_randomness():
    with pytest.raises(InvalidCharacterError) as exc:
        parse("01FR9EZ700RPB9GR0NVWG3MYFU")
    assert exc.value.position == 25


def test_parse_invalid_character_in_time():
    with pytest.raises(InvalidCharacterError):
        parse("01FR9EZ7I0RPB9GR0NVWG3MYFY")


def test_parse_lower_case():
    parsed = parse(KNOWN_ULID.lower())
    assert parsed.ulid == KNOWN_ULID
    assert parsed.timestamp == SEED


def test_parse_strict_case():
    with pytest.raises(InvalidCharacterError):
        parse(KNOWN_ULID.lower(), case_insensitive=False)


def test_parse_map_ambiguous():
    # O reads as 0
    parsed = parse("O1FR9EZ7OORPB9GRONVWG3MYFY", map_ambiguous=True)
    assert parsed.ulid == KNOWN_ULID
    with pytest.raises(InvalidCharacterError):
        parse("O1FR9EZ7OORPB9GRONVWG3MYFY")


def test_parse_time_overflow():
    with pytest.raises(TimeRangeError):
        parse("80000000000000000000000000")


def test_parse_max_timestamp_has_no_date():
    parsed = parse("7ZZZZZZZZZ0000000000000000")
    assert parsed.timestamp == MAX_TIMESTAMP
    assert parsed.date is None
    assert parsed.to_dict()["date"] is None


def test_parse_non_ascii_keeps_length():
    # "ß".upper() is "SS"; folding must not grow the string
    with pytest.raises(InvalidCharacterError) as exc:
        parse("01FR9EZ700RPB9GR0NVWG3MYFß")
    assert exc.value.char == "ß"
    assert exc.value.position == 25


def test_parse_non_ascii_letter_not_folded_into_alphabet():
    # "ſ".upper() is "S", which is in the alphabet
    with pytest.raises(InvalidCharacterError) as exc:
        parse("01FR9EZ700RPB9GR0NVWG3MYFſ")
    assert exc.value.char == "ſ"


def test_parse_non_ascii_in_time_field():
    with pytest.raises(InvalidCharacterError) as exc:
        parse("0ß1FR9EZ70RPB9GR0NVWG3MYFY")
    assert exc.value.position == 1
