from flask_restx import Namespace, Resource, fields
from flask import request
from datetime import datetime
import logging
from .. import db
from ..models import MensajeSoporte
from ..utils import permission_required, current_identity, require_text

support_ns = Namespace('soporte', path='/api/soporte', description='Mensajes de soporte')

logger = logging.getLogger(__name__)

support_model = support_ns.model('Soporte', {
    'asunto': fields.String(required=True, description='Asunto'),
    'mensaje': fields.String(required=True, description='Mensaje')
})


@support_ns.route('')
class SupportMessage(Resource):
    @permission_required('send_support_message')
    @support_ns.expect(support_model)
    @support_ns.doc('send_support_message', security='TokenAuth')
    def post(self):
        """Enviar un mensaje de soporte"""
        usuario_id, _ = current_identity()
        data = request.get_json(silent=True)
        if not isinstance(data, dict) or not require_text(data, ('asunto', 'mensaje')):
            return {'message': 'Faltan campos obligatorios: asunto, mensaje'}, 400

        try:
            mensaje = MensajeSoporte(
                usuario_id=usuario_id,
                asunto=data['asunto'],
                mensaje=data['mensaje'],
                fecha_envio=datetime.utcnow()
            )
            db.session.add(mensaje)
            db.session.commit()
            logger.info(f"Support message {mensaje.id} from usuario {usuario_id}")
            return {'message': 'Mensaje enviado'}, 200
        except Exception:
            db.session.rollback()
            logger.exception("Error guardando mensaje de soporte")
            return {'message': 'Error al enviar el mensaje.'}, 500
