from __future__ import annotations


class BillingError(ValueError):
    error_code = "billing_error"


class InvalidAmount(BillingError):
    error_code = "invalid_amount"


class EmptyOrder(BillingError):
    error_code = "empty_order"


class InvalidTransition(BillingError):
    error_code = "invalid_transition"


class DuplicateNoteNumber(BillingError):
    error_code = "duplicate_note_number"


class RecordNotFound(LookupError):
    error_code = "not_found"


class OrderNotFound(RecordNotFound):
    error_code = "order_not_found"


class LineItemNotFound(RecordNotFound):
    error_code = "line_item_not_found"
