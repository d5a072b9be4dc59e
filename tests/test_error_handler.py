from barcode_bot.chatbot.validation import ValidationError
from barcode_bot.error_handler import ErrorHandler


def test_validation_error_message_is_shown():
    eh = ErrorHandler()
    out = eh.handle_exception(ValidationError(message="Barcode must be at least 8 digits long"), context={"k": "v"})
    assert out.ephemeral is True
    assert out.text == "Error: Barcode must be at least 8 digits long"


def test_unexpected_exception_returns_generic_reply():
    eh = ErrorHandler()
    out = eh.handle_exception(Exception("boom"), context={"k": "v"})
    assert "internal error" in out.text.lower()
    assert "boom" not in out.text
