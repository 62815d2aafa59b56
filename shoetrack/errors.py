"""Error taxonomy shared by the services, the API layer and the offline client.

Services never let these escape: they return ``(False, error)`` and the API
layer renders ``error.to_dict()`` with ``error.status_code``.
"""


class ShoetrackError(Exception):
    code = 'error'
    status_code = 500
    retryable = False

    def __init__(self, message, field=None):
        super().__init__(message)
        self.message = message
        self.field = field

    def to_dict(self):
        return {'status': 'error', 'code': self.code, 'message': self.message, 'field': self.field}


class ValidationError(ShoetrackError):
    code = 'validation_error'
    status_code = 400


class NotFoundError(ShoetrackError):
    code = 'not_found'
    status_code = 404


class ConflictError(ShoetrackError):
    code = 'conflict'
    status_code = 400

    def __init__(self, message, field=None, indices=None):
        super().__init__(message, field)
        self.indices = indices or []

    def to_dict(self):
        d = super().to_dict()
        if self.indices:
            d['indices'] = self.indices
        return d


class OutOfStockError(ShoetrackError):
    code = 'out_of_stock'
    status_code = 400


class TransientStoreError(ShoetrackError):
    code = 'transient_store_error'
    status_code = 500
    retryable = True

    def __init__(self, message, hint=None):
        super().__init__(message)
        self.hint = hint

    def to_dict(self):
        d = super().to_dict()
        d['hint'] = self.hint
        return d


ERRORS_BY_CODE = {cls.code: cls for cls in (ValidationError, NotFoundError, ConflictError, OutOfStockError, TransientStoreError)}


def error_from_payload(payload, status_code):
    """Rebuild a typed error from an API error body (used by the offline client)."""
    payload = payload if isinstance(payload, dict) else {}
    message = payload.get('message') or f'HTTP {status_code}'
    cls = ERRORS_BY_CODE.get(payload.get('code'))
    if cls is None:
        if status_code == 404: cls = NotFoundError
        elif 400 <= status_code < 500: cls = ValidationError
        else: cls = TransientStoreError
    if cls is TransientStoreError:
        return TransientStoreError(message, payload.get('hint'))
    if cls is ConflictError:
        return ConflictError(message, payload.get('field'), payload.get('indices'))
    return cls(message, payload.get('field'))
