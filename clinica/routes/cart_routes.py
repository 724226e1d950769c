from flask_restx import Namespace, Resource, fields
from flask import request
import logging
from ..services import cart_service
from ..utils import permission_required, current_identity

cart_ns = Namespace('carrito', path='/api/carrito', description='Carrito de citas del usuario')
citas_ns = Namespace('citas', path='/api/citas', description='Disponibilidad de citas')

logger = logging.getLogger(__name__)

cart_item_model = cart_ns.model('CarritoItem', {
    'patologia_id': fields.Integer(required=True, description='ID de la patología'),
    'fecha': fields.String(required=True, description='Fecha (YYYY-MM-DD)'),
    'hora_id': fields.Integer(required=True, description='ID del horario')
})

cart_remove_model = cart_ns.model('CarritoEliminar', {
    'fecha': fields.String(required=True, description='Fecha (YYYY-MM-DD)'),
    'hora': fields.String(required=True, description='Hora (HH:MM)')
})


@cart_ns.route('')
class Cart(Resource):
    @permission_required('manage_own_cart')
    @cart_ns.doc('list_cart', security='TokenAuth')
    def get(self):
        """Obtener el carrito del usuario"""
        usuario_id, _ = current_identity()
        try:
            return cart_service.get_cart(usuario_id), 200
        except Exception:
            logger.exception(f"Error obteniendo carrito de usuario {usuario_id}")
            return {'message': 'No se pudo obtener el carrito'}, 500

    @permission_required('manage_own_cart')
    @cart_ns.expect(cart_item_model)
    @cart_ns.doc('add_to_cart', security='TokenAuth')
    def post(self):
        """Añadir una cita al carrito"""
        usuario_id, _ = current_identity()
        result, error, status = cart_service.add_to_cart(usuario_id, request.get_json(silent=True))
        return (error or result), status


@cart_ns.route('/eliminar')
class CartRemove(Resource):
    @permission_required('manage_own_cart')
    @cart_ns.expect(cart_remove_model)
    @cart_ns.doc('remove_from_cart', security='TokenAuth')
    def delete(self):
        """Eliminar una cita del carrito por fecha y hora"""
        usuario_id, _ = current_identity()
        return cart_service.remove_from_cart(usuario_id, request.get_json(silent=True))


@cart_ns.route('/usuario')
class CartSlots(Resource):
    @permission_required('manage_own_cart')
    @cart_ns.doc('cart_slots', security='TokenAuth')
    def get(self):
        """Horarios retenidos en el carrito del usuario (bloqueo temporal)"""
        usuario_id, _ = current_identity()
        try:
            return cart_service.get_cart_slots(usuario_id), 200
        except Exception:
            logger.exception(f"Error obteniendo horarios del carrito de usuario {usuario_id}")
            return {'message': 'No se pudieron obtener los horarios'}, 500


@citas_ns.route('/ocupadas')
class OccupiedSlots(Resource):
    def get(self):
        """Horarios ya confirmados (público)"""
        try:
            return cart_service.get_occupied_slots(), 200
        except Exception:
            logger.exception("Error obteniendo citas ocupadas")
            return {'message': 'No se pudieron obtener las citas ocupadas'}, 500
