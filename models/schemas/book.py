from marshmallow import Schema, fields, validate, validates, ValidationError

from models.schemas.common import validate_isbn, validate_not_future, validate_not_blank
from models.schemas.publisher import PublisherSummarySchema


class BookDetailSchema(Schema):
    """Nested detail payload; every field is optional and nullable."""
    id = fields.String(dump_only=True)
    description = fields.String(allow_none=True)
    language = fields.String(allow_none=True, validate=validate.Length(max=64))
    page_count = fields.Integer(allow_none=True)
    # Imprint printed on the book, unrelated to publisher_id
    publisher = fields.String(allow_none=True, validate=validate.Length(max=255))
    cover_image_url = fields.String(allow_none=True, validate=validate.Length(max=512))
    edition = fields.String(allow_none=True, validate=validate.Length(max=64))

    @validates("page_count")
    def _validate_page_count(self, value, **kwargs):
        if value is not None and value < 0:
            raise ValidationError("Page count must be positive or zero.")


class BookFieldsSchema(Schema):
    title = fields.String(required=True, validate=validate_not_blank(255))
    author = fields.String(required=True, validate=validate_not_blank(255))
    isbn = fields.String(required=True)
    price = fields.Integer(allow_none=True)
    publish_date = fields.Date(allow_none=True)

    @validates("isbn")
    def _validate_isbn(self, value, **kwargs):
        validate_isbn(value)

    @validates("price")
    def _validate_price(self, value, **kwargs):
        if value is not None and value < 0:
            raise ValidationError("Price must be positive or zero.")

    @validates("publish_date")
    def _validate_publish_date(self, value, **kwargs):
        validate_not_future(value)


class BookRequestSchema(BookFieldsSchema):
    """Full replacement payload for the publisher-aware book endpoints."""
    publisher_id = fields.String(required=True)
    detail = fields.Nested(BookDetailSchema, allow_none=True)


class SimpleBookCreateSchema(BookFieldsSchema):
    pass


class SimpleBookUpdateSchema(BookFieldsSchema):
    # All optional, but validate if present
    title = fields.String(validate=validate_not_blank(255))
    author = fields.String(validate=validate_not_blank(255))
    isbn = fields.String()


class BookSummarySchema(Schema):
    id = fields.String()
    title = fields.String()
    author = fields.String()
    isbn = fields.String()


class BookOutSchema(Schema):
    id = fields.String()
    title = fields.String()
    author = fields.String()
    isbn = fields.String()
    price = fields.Integer(allow_none=True)
    publish_date = fields.Date(allow_none=True)
    publisher = fields.Nested(PublisherSummarySchema, allow_none=True)
    detail = fields.Nested(BookDetailSchema, allow_none=True)
    created_at = fields.DateTime()
    updated_at = fields.DateTime()


class PlainBookOutSchema(Schema):
    """Book-only view used by the simple book endpoints."""
    id = fields.String()
    title = fields.String()
    author = fields.String()
    isbn = fields.String()
    price = fields.Integer(allow_none=True)
    publish_date = fields.Date(allow_none=True)
    publisher_id = fields.String(allow_none=True)
    created_at = fields.DateTime()
    updated_at = fields.DateTime()


class BookDetailOutSchema(BookDetailSchema):
    book = fields.Nested(BookSummarySchema)
