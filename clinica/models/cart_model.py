from clinica import db


class CarritoItem(db.Model):
    __tablename__ = 'carrito'
    __table_args__ = (
        db.UniqueConstraint('usuario_id', 'fecha', 'hora_id', name='uq_carrito_usuario_fecha_hora'),
    )
    id = db.Column(db.Integer, primary_key=True)
    usuario_id = db.Column(db.Integer, db.ForeignKey('usuarios.id'), nullable=False)
    patologia_id = db.Column(db.Integer, db.ForeignKey('patologias.id'), nullable=False)
    fecha = db.Column(db.Date, nullable=False)
    hora_id = db.Column(db.Integer, db.ForeignKey('horarios.id'), nullable=False)
    usuario = db.relationship('Usuario', backref=db.backref('carrito', lazy=True))
    patologia = db.relationship('Patologia', lazy='joined')
    horario = db.relationship('Horario', lazy='joined')

    def __repr__(self):
        return f'<CarritoItem {self.id} of Usuario {self.usuario_id}>'
