from flask_restx import Namespace, Resource, fields
from flask import request
from sqlalchemy.exc import IntegrityError
import logging
from .. import db
from ..models import (Usuario, Patologia, Horario, CarritoItem, Cita, Factura,
                      MensajeSoporte, Configuracion)
from ..services import billing_service, config_service
from ..utils import permission_required, current_identity, parse_time, parse_amount
from ..utils.role_utils import get_user_data
from .catalog_routes import format_patologia, format_horario

admin_ns = Namespace('admin', path='/api/admin', description='Consola de administración')

logger = logging.getLogger(__name__)

patologia_model = admin_ns.model('Patologia', {
    'nombre': fields.String(required=True, description='Nombre de la patología')
})

horario_model = admin_ns.model('Horario', {
    'hora': fields.String(required=True, description='Hora (HH:MM)')
})

precio_model = admin_ns.model('Precio', {
    'nuevo_precio': fields.Float(required=True, description='Nuevo precio de la cita')
})

iva_model = admin_ns.model('Iva', {
    'nuevo_iva': fields.Float(required=True, description='Nueva tasa de IVA (ej. 0.15)')
})


def format_cita(cita):
    return {
        'id': cita.id,
        'usuario': cita.usuario.usuario if cita.usuario else None,
        'patologia': cita.patologia.nombre,
        'fecha': cita.fecha.isoformat(),
        'hora': cita.horario.etiqueta,
        'precio': float(cita.precio)
    }


def format_mensaje(mensaje):
    return {
        'id': mensaje.id,
        'usuario': mensaje.usuario.usuario if mensaje.usuario else None,
        'asunto': mensaje.asunto,
        'mensaje': mensaje.mensaje,
        'fecha_envio': mensaje.fecha_envio.isoformat()
    }


# Users

@admin_ns.route('/usuarios')
class AdminUserList(Resource):
    @permission_required('view_all_users')
    def get(self):
        """Listar usuarios"""
        try:
            usuarios = Usuario.query.order_by(Usuario.id).all()
            return [get_user_data(u) for u in usuarios], 200
        except Exception:
            logger.exception("Error obteniendo usuarios")
            return {'message': 'No se pudieron obtener los usuarios'}, 500


@admin_ns.route('/usuarios/<int:usuario_id>')
class AdminUserResource(Resource):
    @permission_required('delete_user')
    def delete(self, usuario_id):
        """Eliminar un usuario sin historial de citas ni facturas"""
        current_id, _ = current_identity()
        if usuario_id == current_id:
            return {'message': 'No puedes eliminar tu propia cuenta.'}, 400
        try:
            usuario = db.session.get(Usuario, usuario_id)
            if not usuario:
                return {'message': 'Usuario no encontrado'}, 404
            if Cita.query.filter_by(usuario_id=usuario_id).first() or \
                    Factura.query.filter_by(usuario_id=usuario_id).first():
                return {'message': 'No se puede eliminar: el usuario tiene citas o facturas.'}, 400

            CarritoItem.query.filter_by(usuario_id=usuario_id).delete(synchronize_session=False)
            MensajeSoporte.query.filter_by(usuario_id=usuario_id).delete(synchronize_session=False)
            db.session.delete(usuario)
            db.session.commit()
            logger.info(f"Deleted usuario {usuario_id}")
            return {'message': 'Usuario eliminado'}, 200
        except Exception:
            db.session.rollback()
            logger.exception(f"Error eliminando usuario {usuario_id}")
            return {'message': 'Error al eliminar el usuario.'}, 500


# Catalog

@admin_ns.route('/patologias')
class AdminPatologiaList(Resource):
    @permission_required('manage_catalog')
    def get(self):
        """Listar patologías"""
        try:
            patologias = Patologia.query.order_by(Patologia.id).all()
            return [format_patologia(p) for p in patologias], 200
        except Exception:
            logger.exception("Error obteniendo patologías")
            return {'message': 'No se pudieron obtener las patologías'}, 500

    @permission_required('manage_catalog')
    @admin_ns.expect(patologia_model)
    def post(self):
        """Crear una patología"""
        data = request.get_json(silent=True)
        nombre = data.get('nombre') if isinstance(data, dict) else None
        if not isinstance(nombre, str) or not nombre.strip():
            return {'message': 'Falta el campo obligatorio: nombre'}, 400
        nombre = nombre.strip()

        if Patologia.query.filter_by(nombre=nombre).first():
            return {'message': f"La patología '{nombre}' ya existe"}, 400

        try:
            patologia = Patologia(nombre=nombre)
            db.session.add(patologia)
            db.session.commit()
            logger.info(f"Created patologia {patologia.id} ({nombre})")
            return {'message': 'Patología creada', 'patologia': format_patologia(patologia)}, 201
        except IntegrityError:
            db.session.rollback()
            return {'message': f"La patología '{nombre}' ya existe"}, 400
        except Exception:
            db.session.rollback()
            logger.exception("Error creando patología")
            return {'message': 'Error al crear la patología.'}, 500


@admin_ns.route('/patologias/<int:patologia_id>')
class AdminPatologiaResource(Resource):
    @permission_required('manage_catalog')
    def delete(self, patologia_id):
        """Eliminar una patología que no esté en uso"""
        try:
            patologia = db.session.get(Patologia, patologia_id)
            if not patologia:
                return {'message': 'Patología no encontrada'}, 404
            if CarritoItem.query.filter_by(patologia_id=patologia_id).first() or \
                    Cita.query.filter_by(patologia_id=patologia_id).first():
                return {'message': 'No se puede eliminar: la patología está en uso.'}, 400
            db.session.delete(patologia)
            db.session.commit()
            logger.info(f"Deleted patologia {patologia_id}")
            return {'message': 'Patología eliminada'}, 200
        except Exception:
            db.session.rollback()
            logger.exception(f"Error eliminando patología {patologia_id}")
            return {'message': 'Error al eliminar la patología.'}, 500


@admin_ns.route('/horarios')
class AdminHorarioList(Resource):
    @permission_required('manage_catalog')
    def get(self):
        """Listar horarios"""
        try:
            horarios = Horario.query.order_by(Horario.hora).all()
            return [format_horario(h) for h in horarios], 200
        except Exception:
            logger.exception("Error obteniendo horarios")
            return {'message': 'No se pudieron obtener los horarios'}, 500

    @permission_required('manage_catalog')
    @admin_ns.expect(horario_model)
    def post(self):
        """Crear un horario"""
        data = request.get_json(silent=True)
        if not isinstance(data, dict) or 'hora' not in data:
            return {'message': 'Falta el campo obligatorio: hora'}, 400
        try:
            hora = parse_time(data['hora'])
        except ValueError as ve:
            return {'message': str(ve)}, 400

        if Horario.query.filter_by(hora=hora).first():
            return {'message': f"El horario {hora.strftime('%H:%M')} ya existe"}, 400

        try:
            horario = Horario(hora=hora)
            db.session.add(horario)
            db.session.commit()
            logger.info(f"Created horario {horario.id} ({horario.etiqueta})")
            return {'message': 'Horario creado', 'horario': format_horario(horario)}, 201
        except IntegrityError:
            db.session.rollback()
            return {'message': f"El horario {hora.strftime('%H:%M')} ya existe"}, 400
        except Exception:
            db.session.rollback()
            logger.exception("Error creando horario")
            return {'message': 'Error al crear el horario.'}, 500


@admin_ns.route('/horarios/<int:horario_id>')
class AdminHorarioResource(Resource):
    @permission_required('manage_catalog')
    def delete(self, horario_id):
        """Eliminar un horario que no esté en uso"""
        try:
            horario = db.session.get(Horario, horario_id)
            if not horario:
                return {'message': 'Horario no encontrado'}, 404
            if CarritoItem.query.filter_by(hora_id=horario_id).first() or \
                    Cita.query.filter_by(hora_id=horario_id).first():
                return {'message': 'No se puede eliminar: el horario está en uso.'}, 400
            db.session.delete(horario)
            db.session.commit()
            logger.info(f"Deleted horario {horario_id}")
            return {'message': 'Horario eliminado'}, 200
        except Exception:
            db.session.rollback()
            logger.exception(f"Error eliminando horario {horario_id}")
            return {'message': 'Error al eliminar el horario.'}, 500


# Pricing

@admin_ns.route('/precio')
class AdminPrecio(Resource):
    @permission_required('manage_pricing')
    @admin_ns.expect(precio_model)
    def put(self):
        """Actualizar el precio de la cita"""
        data = request.get_json(silent=True)
        if not isinstance(data, dict) or 'nuevo_precio' not in data:
            return {'message': 'Falta el campo obligatorio: nuevo_precio'}, 400
        try:
            precio = parse_amount(data['nuevo_precio'], 'nuevo_precio')
        except ValueError as ve:
            return {'message': str(ve)}, 400
        try:
            config_service.set_value(Configuracion.PRECIO_CITA, precio)
        except Exception:
            db.session.rollback()
            logger.exception("Error actualizando precio")
            return {'message': 'Error al actualizar el precio.'}, 500
        logger.info(f"precio_cita set to {precio}")
        return {'message': 'Precio actualizado', 'precio': precio}, 200


@admin_ns.route('/iva')
class AdminIva(Resource):
    @permission_required('manage_pricing')
    @admin_ns.expect(iva_model)
    def put(self):
        """Actualizar la tasa de IVA"""
        data = request.get_json(silent=True)
        if not isinstance(data, dict) or 'nuevo_iva' not in data:
            return {'message': 'Falta el campo obligatorio: nuevo_iva'}, 400
        try:
            iva = parse_amount(data['nuevo_iva'], 'nuevo_iva')
        except ValueError as ve:
            return {'message': str(ve)}, 400
        try:
            config_service.set_value(Configuracion.IVA, iva)
        except Exception:
            db.session.rollback()
            logger.exception("Error actualizando IVA")
            return {'message': 'Error al actualizar el IVA.'}, 500
        logger.info(f"iva set to {iva}")
        return {'message': 'IVA actualizado', 'iva': iva}, 200


# Appointments

@admin_ns.route('/citas')
class AdminCitaList(Resource):
    @permission_required('view_all_appointments')
    def get(self):
        """Listar citas confirmadas por fecha y hora"""
        try:
            citas = Cita.query.join(Horario, Cita.hora_id == Horario.id) \
                .order_by(Cita.fecha, Horario.hora).all()
            return [format_cita(c) for c in citas], 200
        except Exception:
            logger.exception("Error obteniendo citas")
            return {'message': 'No se pudieron obtener las citas'}, 500


@admin_ns.route('/citas/<int:cita_id>')
class AdminCitaResource(Resource):
    @permission_required('delete_appointment')
    def delete(self, cita_id):
        """Eliminar una cita confirmada"""
        try:
            cita = db.session.get(Cita, cita_id)
            if not cita:
                return {'message': 'Cita no encontrada'}, 404
            # Its invoice line goes with it through the detalle_factura relationship
            db.session.delete(cita)
            db.session.commit()
            logger.info(f"Deleted cita {cita_id}")
            return {'message': 'Cita eliminada'}, 200
        except Exception:
            db.session.rollback()
            logger.exception(f"Error eliminando cita {cita_id}")
            return {'message': 'Error al eliminar la cita.'}, 500


# Invoices

@admin_ns.route('/facturas')
class AdminFacturaList(Resource):
    @permission_required('view_invoices')
    def get(self):
        """Listar facturas, más recientes primero"""
        try:
            return billing_service.get_all_invoices(), 200
        except Exception:
            logger.exception("Error obteniendo facturas")
            return {'message': 'No se pudieron obtener las facturas'}, 500


@admin_ns.route('/facturas/<int:factura_id>', '/factura/<int:factura_id>')
class AdminFacturaResource(Resource):
    @permission_required('view_invoices')
    def get(self, factura_id):
        """Detalle de una factura con sus citas"""
        try:
            detalle = billing_service.get_invoice_detail(factura_id)
        except Exception:
            logger.exception(f"Error obteniendo factura {factura_id}")
            return {'message': 'No se pudo obtener la factura'}, 500
        if detalle is None:
            return {'message': 'Factura no encontrada'}, 404
        return detalle, 200


# Support

@admin_ns.route('/soporte')
class AdminSoporte(Resource):
    @permission_required('view_support_inbox')
    def get(self):
        """Bandeja de mensajes de soporte, más recientes primero"""
        try:
            mensajes = MensajeSoporte.query.order_by(MensajeSoporte.fecha_envio.desc(),
                                                     MensajeSoporte.id.desc()).all()
            return [format_mensaje(m) for m in mensajes], 200
        except Exception:
            logger.exception("Error obteniendo mensajes de soporte")
            return {'message': 'No se pudieron obtener los mensajes'}, 500
