# Cart service module for business logic
import logging

from sqlalchemy.exc import IntegrityError

from .. import db
from ..models import CarritoItem, Cita, Horario, Patologia
from ..utils import parse_date, parse_time

logger = logging.getLogger(__name__)


def format_cart_item(item):
    return {
        'id': item.id,
        'patologia': item.patologia.nombre,
        'fecha': item.fecha.isoformat(),
        'hora': item.horario.etiqueta
    }


def format_slot(row):
    return {
        'fecha': row.fecha.isoformat(),
        'hora': row.horario.etiqueta
    }


def get_cart(usuario_id):
    items = CarritoItem.query.filter_by(usuario_id=usuario_id).order_by(CarritoItem.id).all()
    return [format_cart_item(item) for item in items]


def get_cart_slots(usuario_id):
    items = CarritoItem.query.filter_by(usuario_id=usuario_id).order_by(CarritoItem.id).all()
    return [format_slot(item) for item in items]


def get_occupied_slots():
    citas = Cita.query.join(Horario).order_by(Cita.fecha, Horario.hora).all()
    return [format_slot(cita) for cita in citas]


def add_to_cart(usuario_id, data):
    if not isinstance(data, dict) or not all(k in data for k in ('patologia_id', 'fecha', 'hora_id')):
        return None, {'message': 'Faltan campos obligatorios: patologia_id, fecha, hora_id'}, 400
    try:
        fecha = parse_date(data['fecha'])
    except ValueError as ve:
        return None, {'message': str(ve)}, 400

    patologia_id = data['patologia_id']
    hora_id = data['hora_id']
    if not isinstance(patologia_id, int) or not isinstance(hora_id, int) \
            or isinstance(patologia_id, bool) or isinstance(hora_id, bool):
        return None, {'message': 'patologia_id y hora_id deben ser enteros'}, 400

    try:
        if db.session.get(Patologia, patologia_id) is None:
            return None, {'message': 'Patología no encontrada'}, 404
        if db.session.get(Horario, hora_id) is None:
            return None, {'message': 'Horario no encontrado'}, 404

        # The check and the insert share one transaction; the unique constraints
        # on carrito and citas reject whatever slips past a concurrent request
        duplicate = CarritoItem.query.filter_by(usuario_id=usuario_id, fecha=fecha, hora_id=hora_id).first()
        if duplicate:
            return None, {'message': 'Esta cita ya está en tu carrito.'}, 400
        if Cita.query.filter_by(fecha=fecha, hora_id=hora_id).first():
            return None, {'message': 'Este horario ya está reservado.'}, 400

        item = CarritoItem(usuario_id=usuario_id, patologia_id=patologia_id, fecha=fecha, hora_id=hora_id)
        db.session.add(item)
        db.session.commit()
        logger.info(f"Usuario {usuario_id} added {fecha} / horario {hora_id} to cart")
        return {'message': 'Cita añadida al carrito correctamente.', 'id': item.id}, None, 200
    except IntegrityError:
        db.session.rollback()
        logger.warning(f"Cart conflict for usuario {usuario_id} on {fecha} / horario {hora_id}")
        return None, {'message': 'El horario ya no está disponible.'}, 400
    except Exception:
        db.session.rollback()
        logger.exception("Error al insertar en carrito")
        return None, {'message': 'Error al añadir cita al carrito.'}, 500


def remove_from_cart(usuario_id, data):
    if not isinstance(data, dict) or not all(k in data for k in ('fecha', 'hora')):
        return {'message': 'Faltan campos obligatorios: fecha, hora'}, 400
    try:
        fecha = parse_date(data['fecha'])
        hora = parse_time(data['hora'])
    except ValueError as ve:
        return {'message': str(ve)}, 400

    try:
        horario = Horario.query.filter_by(hora=hora).first()
        if not horario:
            return {'message': 'Cita no encontrada en el carrito.'}, 404
        deleted = CarritoItem.query.filter_by(
            usuario_id=usuario_id, fecha=fecha, hora_id=horario.id
        ).delete(synchronize_session=False)
        if deleted == 0:
            db.session.rollback()
            return {'message': 'Cita no encontrada en el carrito.'}, 404
        db.session.commit()
        logger.info(f"Usuario {usuario_id} removed {fecha} {horario.etiqueta} from cart")
        return {'message': 'Cita eliminada del carrito.'}, 200
    except Exception:
        db.session.rollback()
        logger.exception("Error eliminando cita del carrito")
        return {'message': 'Error al eliminar la cita.'}, 500
