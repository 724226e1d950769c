from flask_restx import Namespace, Resource, fields
from flask import request
from ..services import billing_service
from ..utils import permission_required, current_identity

billing_ns = Namespace('facturar', path='/api/facturar', description='Facturación del carrito')

checkout_model = billing_ns.model('Facturar', {
    'subtotal': fields.Float(required=True, description='Subtotal'),
    'iva': fields.Float(required=True, description='Importe de IVA'),
    'total': fields.Float(required=True, description='Total')
})


@billing_ns.route('')
class Checkout(Resource):
    @permission_required('checkout')
    @billing_ns.expect(checkout_model)
    @billing_ns.doc('checkout', security='TokenAuth')
    def post(self):
        """Confirmar las citas del carrito y generar la factura"""
        usuario_id, _ = current_identity()
        result, error, status = billing_service.checkout(usuario_id, request.get_json(silent=True))
        return (error or result), status
