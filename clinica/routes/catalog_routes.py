from flask_restx import Namespace, Resource
import logging
from ..models import Patologia, Horario, Configuracion
from ..services import config_service

patologia_ns = Namespace('patologias', path='/api/patologias', description='Catálogo de patologías')
horario_ns = Namespace('horarios', path='/api/horarios', description='Catálogo de horarios')
precio_ns = Namespace('precio-cita', path='/api/precio-cita', description='Precio de la cita')
configuracion_ns = Namespace('configuracion', path='/api/configuracion', description='Configuración pública')

logger = logging.getLogger(__name__)


def format_patologia(patologia):
    return {
        'id': patologia.id,
        'nombre': patologia.nombre
    }


def format_horario(horario):
    return {
        'id': horario.id,
        'hora': horario.etiqueta
    }


@patologia_ns.route('')
class PatologiaList(Resource):
    def get(self):
        """Listar patologías (público)"""
        try:
            patologias = Patologia.query.order_by(Patologia.id).all()
            return [format_patologia(p) for p in patologias], 200
        except Exception:
            logger.exception("Error obteniendo patologías")
            return {'message': 'No se pudieron obtener las patologías'}, 500


@horario_ns.route('')
class HorarioList(Resource):
    def get(self):
        """Listar horarios ordenados por hora (público)"""
        try:
            horarios = Horario.query.order_by(Horario.hora).all()
            return [format_horario(h) for h in horarios], 200
        except Exception:
            logger.exception("Error obteniendo horarios")
            return {'message': 'No se pudieron obtener los horarios'}, 500


@precio_ns.route('')
class PrecioCita(Resource):
    def get(self):
        """Precio actual de la cita (público)"""
        try:
            precio = config_service.get_value(Configuracion.PRECIO_CITA)
        except Exception:
            logger.exception("Error obteniendo precio de cita")
            return {'message': 'No se pudo obtener el precio'}, 500
        if precio is None:
            return {'message': 'Precio no configurado'}, 404
        return {'precio': precio}, 200


@configuracion_ns.route('/iva')
class Iva(Resource):
    def get(self):
        """Tasa de IVA actual (público)"""
        try:
            iva = config_service.get_value(Configuracion.IVA)
        except Exception:
            logger.exception("Error obteniendo IVA")
            return {'message': 'No se pudo obtener el IVA'}, 500
        if iva is None:
            return {'message': 'IVA no configurado'}, 404
        return {'iva': iva}, 200
