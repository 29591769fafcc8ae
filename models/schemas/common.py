from datetime import date

from marshmallow import ValidationError

ISBN_DIGIT_COUNTS = (10, 13)
# Width of books.isbn
ISBN_MAX_LENGTH = 20


def validate_isbn(raw: str) -> None:
    """
    Accept ISBN-10 or ISBN-13 written with digits and optional hyphens.
    The value is stored exactly as submitted, so "978-0000000000" and
    "9780000000000" are different catalog keys.
    """
    if raw is None or not raw.strip():
        raise ValidationError("ISBN is required.")
    if any(not (ch.isdigit() or ch == "-") for ch in raw):
        raise ValidationError("ISBN may contain only digits and hyphens.")
    if len(raw) > ISBN_MAX_LENGTH:
        raise ValidationError(f"ISBN may be at most {ISBN_MAX_LENGTH} characters long.")
    digits = sum(1 for ch in raw if ch.isdigit())
    if digits not in ISBN_DIGIT_COUNTS:
        raise ValidationError("ISBN must be valid (10 or 13 digits, with or without hyphens).")


def validate_not_future(d: date) -> None:
    if d and d > date.today():
        raise ValidationError("Date cannot be in the future.")


def validate_not_blank(max_length: int):
    def _validate(value: str) -> None:
        if not value or not value.strip():
            raise ValidationError("Field may not be blank.")
        if len(value) > max_length:
            raise ValidationError(f"Longer than maximum length {max_length}.")

    return _validate
