import math
import time
from datetime import datetime
from shoetrack.errors import ValidationError

def clean_string(value):
    if value is None: return ''
    return str(value).strip()

def clean_string_upper(value):
    return clean_string(value).upper()

def now():
    return datetime.now()

def now_ms():
    return int(time.time() * 1000)

def iso(dt):
    return dt.isoformat() if dt else None

def parse_positive_number(value, message, field=None):
    """Accepts numbers and numeric strings (form posts); rejects bools, NaN, infinity and <= 0."""
    if value is None or isinstance(value, bool):
        raise ValidationError(message, field)
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(message, field)
    if not math.isfinite(number) or number <= 0:
        raise ValidationError(message, field)
    return number

def parse_positive_int(value, message, field=None, default=None):
    if value is None or value == '':
        if default is not None: return default
        raise ValidationError(message, field)
    if isinstance(value, bool):
        raise ValidationError(message, field)
    try:
        if isinstance(value, float):
            if not value.is_integer(): raise ValueError
            number = int(value)
        else:
            number = int(str(value).strip())
    except (TypeError, ValueError):
        raise ValidationError(message, field)
    if number < 1:
        raise ValidationError(message, field)
    return number

def parse_id(value, field='productId'):
    if value is None or value == '' or isinstance(value, bool):
        raise ValidationError('Product ID is required', field)
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        raise ValidationError('Invalid product ID', field)

def normalize_choice(value, choices, field):
    """Maps a categorical input onto its canonical enum value (see shoetrack.constants)."""
    v = clean_string(value).lower()
    if not v: return choices.DEFAULT
    v = choices.ALIASES.get(v, v)
    if v not in choices.ALL:
        raise ValidationError(f"Invalid {field}: must be one of {', '.join(choices.ALL)}", field)
    return v

def require_object(data):
    if data is None: return {}
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object')
    return data
