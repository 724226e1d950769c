from clinica import db


class Patologia(db.Model):
    __tablename__ = 'patologias'
    id = db.Column(db.Integer, primary_key=True)
    nombre = db.Column(db.String(100), unique=True, nullable=False)

    def __repr__(self):
        return f'<Patologia {self.nombre}>'


class Horario(db.Model):
    __tablename__ = 'horarios'
    id = db.Column(db.Integer, primary_key=True)
    hora = db.Column(db.Time, unique=True, nullable=False)

    @property
    def etiqueta(self):
        return self.hora.strftime('%H:%M')

    def __repr__(self):
        return f'<Horario {self.etiqueta}>'


class Configuracion(db.Model):
    """Global key-value settings (precio_cita, iva). One row per key."""
    __tablename__ = 'configuracion'
    clave = db.Column(db.String(50), primary_key=True)
    valor = db.Column(db.String(100), nullable=False)

    PRECIO_CITA = 'precio_cita'
    IVA = 'iva'

    def __repr__(self):
        return f'<Configuracion {self.clave}={self.valor}>'
