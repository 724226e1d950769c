# Config service: singleton key-value settings (appointment price, VAT rate)
from .. import db
from ..models import Configuracion


def get_value(clave):
    """Return the setting as a float, or None when it is not configured"""
    row = db.session.get(Configuracion, clave)
    if row is None:
        return None
    return float(row.valor)


def set_value(clave, valor):
    """Overwrite the setting in place, creating the row on first write"""
    row = db.session.get(Configuracion, clave)
    if row is None:
        row = Configuracion(clave=clave, valor=str(valor))
        db.session.add(row)
    else:
        row.valor = str(valor)
    db.session.commit()
    return row
