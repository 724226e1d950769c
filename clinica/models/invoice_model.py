from datetime import datetime
from clinica import db

# Association table for Facturas and Citas (one line per checked-out appointment)
detalle_factura = db.Table('detalle_factura',
    db.Column('factura_id', db.Integer, db.ForeignKey('facturas.id'), primary_key=True),
    db.Column('cita_id', db.Integer, db.ForeignKey('citas.id'), primary_key=True)
)


class Factura(db.Model):
    __tablename__ = 'facturas'
    id = db.Column(db.Integer, primary_key=True)
    usuario_id = db.Column(db.Integer, db.ForeignKey('usuarios.id'), nullable=False)
    fecha = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    subtotal = db.Column(db.Float, nullable=False)
    iva = db.Column(db.Float, nullable=False)
    total = db.Column(db.Float, nullable=False)
    usuario = db.relationship('Usuario', backref=db.backref('facturas', lazy=True))
    citas = db.relationship('Cita', secondary=detalle_factura, lazy='subquery',
                            backref=db.backref('facturas', lazy=True))

    def __repr__(self):
        return f'<Factura {self.id} by Usuario {self.usuario_id}>'
