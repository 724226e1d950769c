# Billing service: turns a user's cart into confirmed appointments and one invoice
import logging
from datetime import datetime

from sqlalchemy.exc import IntegrityError

from .. import db
from ..models import CarritoItem, Cita, Factura, Usuario, detalle_factura
from ..utils import parse_amount

logger = logging.getLogger(__name__)


def split_subtotal(subtotal, count):
    """Share subtotal evenly across count lines, rounded to cents.

    Works in whole cents; the leftover cents go one each to the first
    lines, so no price is negative and the prices add up to the subtotal.
    """
    if count <= 0:
        return []
    base, rem = divmod(round(subtotal * 100), count)
    return [(base + 1 if i < rem else base) / 100 for i in range(count)]


def checkout(usuario_id, data):
    if not isinstance(data, dict) or not all(k in data for k in ('subtotal', 'iva', 'total')):
        return None, {'message': 'Faltan campos obligatorios: subtotal, iva, total'}, 400
    try:
        subtotal = parse_amount(data['subtotal'], 'subtotal')
        iva = parse_amount(data['iva'], 'iva')
        total = parse_amount(data['total'], 'total')
    except ValueError as ve:
        return None, {'message': str(ve)}, 400

    try:
        items = CarritoItem.query.filter_by(usuario_id=usuario_id).order_by(CarritoItem.id).all()
        if not items:
            return None, {'message': 'El carrito está vacío.'}, 400

        factura = Factura(
            usuario_id=usuario_id,
            fecha=datetime.utcnow(),
            subtotal=subtotal,
            iva=iva,
            total=total
        )
        db.session.add(factura)
        db.session.flush()

        for item, precio in zip(items, split_subtotal(subtotal, len(items))):
            cita = Cita(
                usuario_id=usuario_id,
                patologia_id=item.patologia_id,
                fecha=item.fecha,
                hora_id=item.hora_id,
                precio=precio
            )
            db.session.add(cita)
            db.session.flush()
            db.session.execute(detalle_factura.insert().values(factura_id=factura.id, cita_id=cita.id))

        CarritoItem.query.filter_by(usuario_id=usuario_id).delete(synchronize_session=False)
        db.session.commit()
        logger.info(f"Factura {factura.id} generada para usuario {usuario_id}: {len(items)} citas, total {total}")
        return {'message': 'Factura generada', 'factura_id': factura.id, 'total': total}, None, 200
    except IntegrityError:
        db.session.rollback()
        logger.warning(f"Checkout for usuario {usuario_id} hit an already booked slot, rolled back")
        return None, {'message': 'Uno de los horarios del carrito ya fue reservado.'}, 400
    except Exception:
        db.session.rollback()
        logger.exception(f"Error al facturar para usuario {usuario_id}")
        return None, {'message': 'Error al generar la factura.'}, 500


def format_invoice(factura):
    return {
        'id': factura.id,
        'usuario': factura.usuario.usuario if factura.usuario else None,
        'fecha': factura.fecha.isoformat(),
        'subtotal': float(factura.subtotal),
        'iva': float(factura.iva),
        'total': float(factura.total)
    }


def get_all_invoices():
    facturas = Factura.query.order_by(Factura.fecha.desc(), Factura.id.desc()).all()
    return [format_invoice(f) for f in facturas]


def get_invoice_detail(factura_id):
    """Invoice header with its lines; totals are the values stored at checkout"""
    factura = db.session.get(Factura, factura_id)
    if not factura:
        return None
    cliente = db.session.get(Usuario, factura.usuario_id)
    citas = sorted(factura.citas, key=lambda c: (c.fecha, c.horario.hora))
    return {
        'id': factura.id,
        'cliente': cliente.nombre_completo if cliente else None,
        'fecha': factura.fecha.isoformat(),
        'subtotal': float(factura.subtotal),
        'iva': float(factura.iva),
        'total': float(factura.total),
        'detalles': [{
            'cita_id': c.id,
            'patologia': c.patologia.nombre,
            'fecha': c.fecha.isoformat(),
            'hora': c.horario.etiqueta,
            'precio': float(c.precio)
        } for c in citas]
    }
