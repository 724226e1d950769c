from clinica import db


class Cita(db.Model):
    __tablename__ = 'citas'
    # A slot (date + time) can only be confirmed once across all users
    __table_args__ = (
        db.UniqueConstraint('fecha', 'hora_id', name='uq_citas_fecha_hora'),
    )
    id = db.Column(db.Integer, primary_key=True)
    usuario_id = db.Column(db.Integer, db.ForeignKey('usuarios.id'), nullable=False)
    patologia_id = db.Column(db.Integer, db.ForeignKey('patologias.id'), nullable=False)
    fecha = db.Column(db.Date, nullable=False)
    hora_id = db.Column(db.Integer, db.ForeignKey('horarios.id'), nullable=False)
    precio = db.Column(db.Float, nullable=False)
    usuario = db.relationship('Usuario', backref=db.backref('citas', lazy=True))
    patologia = db.relationship('Patologia', lazy='joined')
    horario = db.relationship('Horario', lazy='joined')

    def __repr__(self):
        return f'<Cita {self.id} {self.fecha} by Usuario {self.usuario_id}>'
