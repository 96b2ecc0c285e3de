import pytest

from booklist.book import Book, MalformedResponseError
from booklist.validators import InvalidPriceError, PriceValidator, TextValidator


def test_list_from_json_keeps_server_order_and_values():
    body = '{"books": [{"id": 3, "name": "Sanshiro", "price": 700}, {"id": 1, "name": "Kokoro", "price": 900}]}'
    assert Book.list_from_json(body) == [Book(3, "Sanshiro", 700), Book(1, "Kokoro", 900)]


def test_list_from_json_without_books_key_is_empty():
    assert Book.list_from_json("{}") == []
    assert Book.list_from_json('{"books": null}') == []


@pytest.mark.parametrize("body", ["", "not json", "[]", '{"books": {}}', '{"books": [{"id": 1}]}'])
def test_list_from_json_rejects_malformed_bodies(body):
    with pytest.raises(MalformedResponseError):
        Book.list_from_json(body)


def test_payload_omits_id():
    book = Book(5, "Dune", 1200)
    assert book.to_payload() == {"name": "Dune", "price": 1200}
    assert book.to_dict() == {"id": 5, "name": "Dune", "price": 1200}


@pytest.mark.parametrize("raw, expected", [
    ("900", 900),
    (" 42 ", 42),
    ("+7", 7),
    ("-3", -3),
    ("0", 0),
    (15, 15),
    ("2147483647", 2147483647),
])
def test_parse_price_accepts_whole_numbers(raw, expected):
    assert PriceValidator.parse_price(raw) == expected


@pytest.mark.parametrize("raw", ["", "   ", "abc", "12.5", "1_000", "1e3", "٣", None, True, "2147483648", "-2147483649"])
def test_parse_price_rejects_everything_else(raw):
    with pytest.raises(InvalidPriceError):
        PriceValidator.parse_price(raw)
    assert PriceValidator.is_valid_price(raw) is False


def test_invalid_price_is_a_value_error():
    assert issubclass(InvalidPriceError, ValueError)


def test_names_are_sent_verbatim():
    assert TextValidator.normalize_name("  The Tale of Genji ") == "  The Tale of Genji "
    assert TextValidator.normalize_name(None) == ""


@pytest.mark.parametrize("record", [
    {"id": 1, "name": None, "price": 900},
    {"id": 1, "name": "Kokoro", "price": 9.99},
    {"id": 1, "name": "Kokoro", "price": True},
    {"id": "1", "name": "Kokoro", "price": 900},
    {"id": 1, "name": 42, "price": 900},
    {"id": 1, "name": "Kokoro", "price": "900"},
])
def test_from_dict_rejects_values_it_would_have_to_convert(record):
    with pytest.raises(MalformedResponseError):
        Book.from_dict(record)
