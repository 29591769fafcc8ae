from marshmallow import Schema, fields, validate

from models.schemas.common import validate_not_blank


class PublisherRequestSchema(Schema):
    name = fields.String(required=True, validate=validate_not_blank(128))
    established_date = fields.Date(allow_none=True)
    address = fields.String(allow_none=True, validate=validate.Length(max=255))


class PublisherSummarySchema(Schema):
    """Publisher as embedded in book responses and publisher listings.

    ``book_count`` is not a column; services fill it from a count query.
    """
    id = fields.String()
    name = fields.String()
    established_date = fields.Date(allow_none=True)
    address = fields.String(allow_none=True)
    book_count = fields.Integer()


class PublisherOutSchema(PublisherSummarySchema):
    # PublisherService adds "books" (BookSummarySchema list) next to these fields
    created_at = fields.DateTime()
    updated_at = fields.DateTime()
