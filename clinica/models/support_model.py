from datetime import datetime

from clinica import db

class MensajeSoporte(db.Model):
    __tablename__ = 'soporte'
    id = db.Column(db.Integer, primary_key=True)
    usuario_id = db.Column(db.Integer, db.ForeignKey('usuarios.id'), nullable=False)
    asunto = db.Column(db.String(200), nullable=False)
    mensaje = db.Column(db.Text, nullable=False)
    fecha_envio = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    usuario = db.relationship('Usuario', backref=db.backref('mensajes_soporte', lazy=True))

    def __repr__(self):
        return f'<MensajeSoporte {self.id} from Usuario {self.usuario_id}>'
