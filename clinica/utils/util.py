# clinica/utils/util.py
import math
import re
from functools import wraps
from datetime import date, time

from dateutil.parser import isoparse, isoparser
from flask_jwt_extended import jwt_required, get_jwt

from .role_utils import can_perform_action

TIME_REGEX = re.compile(r'^\d{2}:\d{2}(:\d{2})?$')


def current_identity():
    """Return (user_id, role value) from the verified token claims"""
    claims = get_jwt()
    return claims.get('id'), claims.get('rol')


def permission_required(action):
    def wrapper(fn):
        @wraps(fn)
        @jwt_required()
        def decorator(*args, **kwargs):
            _, rol = current_identity()
            if not can_perform_action(rol, action):
                return {'message': 'No autorizado'}, 403
            return fn(*args, **kwargs)
        return decorator
    return wrapper


def parse_date(value):
    """Parse an ISO date string (YYYY-MM-DD) into a date"""
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise ValueError('Fecha inválida. Use el formato YYYY-MM-DD')
    try:
        return isoparse(value.strip()).date()
    except (ValueError, OverflowError):
        raise ValueError('Fecha inválida. Use el formato YYYY-MM-DD')


def parse_time(value):
    """Parse a time-of-day label such as '08:00' or '08:00:00'"""
    if isinstance(value, time):
        return value
    if not isinstance(value, str) or not TIME_REGEX.match(value.strip()):
        raise ValueError('Hora inválida. Use el formato HH:MM')
    try:
        return isoparser().parse_isotime(value.strip()).replace(microsecond=0)
    except (ValueError, OverflowError):
        raise ValueError('Hora inválida. Use el formato HH:MM')


def parse_amount(value, field):
    """Parse a non-negative money/rate amount"""
    if isinstance(value, bool):
        raise ValueError(f'El campo {field} debe ser numérico')
    try:
        amount = float(value)
    except (TypeError, ValueError):
        raise ValueError(f'El campo {field} debe ser numérico')
    if not math.isfinite(amount) or amount < 0:
        raise ValueError(f'El campo {field} debe ser un número no negativo')
    return amount


def require_text(data, fields):
    """True when every field is a non-empty string"""
    return all(isinstance(data.get(k), str) and data.get(k).strip() for k in fields)
