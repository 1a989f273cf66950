from totp_service.messages import MESSAGES, MessageStore


def test_get_plain_message():
    assert MESSAGES.get("validation.secret_empty") == "The secret key cannot be empty."


def test_get_formats_arguments():
    assert MESSAGES.get("validation.code_format", 6) == "The code must be a 6-digit number."
    assert MESSAGES.get("encoding.invalid_base32_char", "X") == "Invalid Base32 character: X"


def test_unknown_key_falls_back():
    assert MESSAGES.get("non.existent.key") == "Message not found: non.existent.key"
    assert MESSAGES.get("non.existent.key", "a", "b") == "Message not found: non.existent.key"
    assert MESSAGES.get("validation.non_existent") == "Message not found: validation.non_existent"
    assert "Message not found" in MESSAGES.get("")


def test_section_key_is_not_a_message():
    assert MESSAGES.get("validation") == "Message not found: validation"
    assert not MESSAGES.has("validation")


def test_has():
    assert MESSAGES.has("validation.secret_empty")
    assert MESSAGES.has("configuration.unsupported_algorithm")
    assert not MESSAGES.has("non.existent.key")
    assert not MESSAGES.has("validation.non_existent")
    assert not MESSAGES.has("")


def test_custom_catalog():
    store = MessageStore({"greeting": {"hello": "Hello, %s!"}})
    assert store.get("greeting.hello", "world") == "Hello, world!"
    assert not store.has("validation.secret_empty")


def test_mismatched_arguments_never_raise():
    assert MESSAGES.get("validation.secret_empty", "x") == "The secret key cannot be empty."
    assert MESSAGES.get("validation.code_format", "six") == "The code must be a %d-digit number."
    assert MESSAGES.get("encoding.invalid_base32_char", "a", "b") == "Invalid Base32 character: %s"
