import enum
from clinica import db


class Role(enum.Enum):
    ADMIN = 'admin'
    USUARIO = 'usuario'


class TipoSangre(db.Model):
    __tablename__ = 'tipos_sangre'
    id = db.Column(db.Integer, primary_key=True)
    tipo = db.Column(db.String(5), unique=True, nullable=False)

    def __repr__(self):
        return f'<TipoSangre {self.tipo}>'


class Usuario(db.Model):
    __tablename__ = 'usuarios'
    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    nombres = db.Column(db.String(100), nullable=False)
    apellidos = db.Column(db.String(100), nullable=False)
    telefono = db.Column(db.String(20))
    email = db.Column(db.String(120), nullable=False)
    fecha_nacimiento = db.Column(db.Date)
    tipo_sangre_id = db.Column(db.Integer, db.ForeignKey('tipos_sangre.id'), nullable=True)
    usuario = db.Column(db.String(50), unique=True, nullable=False)
    contrasena = db.Column(db.String(200), nullable=False)
    rol = db.Column(db.Enum(Role, values_callable=lambda roles: [r.value for r in roles]),
                    nullable=False, default=Role.USUARIO)
    tipo_sangre = db.relationship('TipoSangre', lazy=True)

    @property
    def nombre_completo(self):
        return f'{self.nombres} {self.apellidos}'.strip()

    def __repr__(self):
        return f'<Usuario {self.usuario} ({self.rol})>'
