from flask_restx import Namespace, Resource, fields
from flask import request
from flask_jwt_extended import create_access_token
from sqlalchemy.exc import IntegrityError
import logging
from .. import db, bcrypt
from ..models import Usuario, TipoSangre, Role
from ..utils import parse_date, require_text

auth_ns = Namespace('usuarios', path='/api/usuarios', description='Registro y autenticación de usuarios')

logger = logging.getLogger(__name__)

register_model = auth_ns.model('Registro', {
    'nombres': fields.String(required=True, description='Nombres'),
    'apellidos': fields.String(required=True, description='Apellidos'),
    'telefono': fields.String(description='Teléfono'),
    'email': fields.String(required=True, description='Correo electrónico'),
    'fecha_nacimiento': fields.String(description='Fecha de nacimiento (YYYY-MM-DD)'),
    'tipo_sangre_id': fields.Integer(description='ID del tipo de sangre'),
    'usuario': fields.String(required=True, description='Nombre de usuario'),
    'contrasena': fields.String(required=True, description='Contraseña')
})

login_model = auth_ns.model('Login', {
    'usuario': fields.String(required=True, description='Nombre de usuario'),
    'contrasena': fields.String(required=True, description='Contraseña')
})

REQUIRED_FIELDS = ('nombres', 'apellidos', 'email', 'usuario', 'contrasena')


def issue_token(user):
    return create_access_token(
        identity=str(user.id),
        additional_claims={'id': user.id, 'rol': user.rol.value}
    )


@auth_ns.route('/tipos-sangre')
class TiposSangre(Resource):
    def get(self):
        """Listar tipos de sangre (público)"""
        try:
            tipos = TipoSangre.query.order_by(TipoSangre.id).all()
            return [{'id': t.id, 'tipo': t.tipo} for t in tipos], 200
        except Exception:
            logger.exception("Error obteniendo tipos de sangre")
            return {'message': 'No se pudieron obtener los tipos de sangre'}, 500


@auth_ns.route('/registrar')
class Register(Resource):
    @auth_ns.expect(register_model)
    def post(self):
        """Registrar un nuevo usuario"""
        data = request.get_json(silent=True)
        if not isinstance(data, dict) or not require_text(data, REQUIRED_FIELDS):
            return {'message': f'Faltan campos obligatorios: {", ".join(REQUIRED_FIELDS)}'}, 400
        telefono = data.get('telefono')
        if telefono is not None and not isinstance(telefono, str):
            return {'message': 'El teléfono debe ser texto'}, 400

        fecha_nacimiento = None
        if data.get('fecha_nacimiento'):
            try:
                fecha_nacimiento = parse_date(data['fecha_nacimiento'])
            except ValueError as ve:
                return {'message': str(ve)}, 400

        tipo_sangre_id = data.get('tipo_sangre_id')
        if tipo_sangre_id is not None:
            if not isinstance(tipo_sangre_id, int) or isinstance(tipo_sangre_id, bool):
                return {'message': 'Tipo de sangre no válido'}, 400
            try:
                tipo_sangre = db.session.get(TipoSangre, tipo_sangre_id)
            except Exception:
                logger.exception("Error validando tipo de sangre")
                return {'message': 'Error al registrar el usuario.'}, 500
            if tipo_sangre is None:
                return {'message': 'Tipo de sangre no válido'}, 400

        new_user = Usuario(
            nombres=data['nombres'],
            apellidos=data['apellidos'],
            telefono=telefono,
            email=data['email'],
            fecha_nacimiento=fecha_nacimiento,
            tipo_sangre_id=tipo_sangre_id,
            usuario=data['usuario'],
            contrasena=bcrypt.generate_password_hash(data['contrasena']).decode('utf-8'),
            rol=Role.USUARIO
        )

        try:
            db.session.add(new_user)
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            return {'message': 'El nombre de usuario ya está registrado.'}, 400
        except Exception:
            db.session.rollback()
            logger.exception("Error registrando usuario")
            return {'message': 'Error al registrar el usuario.'}, 500

        logger.info(f"Registered usuario {new_user.usuario} (id {new_user.id})")
        return {'message': 'Usuario registrado'}, 200


@auth_ns.route('/existe/<string:usuario>')
class UsuarioExiste(Resource):
    def get(self, usuario):
        """Comprobar si un nombre de usuario ya existe"""
        try:
            existe = Usuario.query.filter_by(usuario=usuario).first() is not None
            return {'existe': existe}, 200
        except Exception:
            logger.exception("Error comprobando usuario")
            return {'message': 'Error al comprobar el usuario.'}, 500


@auth_ns.route('/login')
class Login(Resource):
    @auth_ns.expect(login_model)
    def post(self):
        """Iniciar sesión"""
        data = request.get_json(silent=True)
        if not isinstance(data, dict) or not require_text(data, ('usuario', 'contrasena')):
            return {'message': 'Faltan campos obligatorios: usuario, contrasena'}, 400

        try:
            user = Usuario.query.filter_by(usuario=data['usuario']).first()
            if not user:
                return {'message': 'Usuario no encontrado'}, 404

            if not bcrypt.check_password_hash(user.contrasena, data['contrasena']):
                return {'message': 'Contraseña incorrecta'}, 401

            token = issue_token(user)
        except Exception:
            logger.exception("Error en login")
            return {'message': 'Error al iniciar sesión.'}, 500

        logger.info(f"Usuario {user.usuario} logged in")
        return {
            'token': token,
            'usuario': {
                'nombres': user.nombres
            }
        }, 200
