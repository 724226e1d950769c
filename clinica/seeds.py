"""
Reference data seed — runs on app startup, only inserts what is missing.
"""
import logging

from clinica import db
from clinica.models import Configuracion, TipoSangre

logger = logging.getLogger(__name__)

TIPOS_SANGRE = ['A+', 'A-', 'B+', 'B-', 'AB+', 'AB-', 'O+', 'O-']


def seed_defaults(config):
    existing = {t.tipo for t in TipoSangre.query.all()}
    missing = [tipo for tipo in TIPOS_SANGRE if tipo not in existing]
    for tipo in missing:
        db.session.add(TipoSangre(tipo=tipo))

    defaults = {
        Configuracion.PRECIO_CITA: config.get('DEFAULT_PRECIO_CITA', '20'),
        Configuracion.IVA: config.get('DEFAULT_IVA', '0.15'),
    }
    for clave, valor in defaults.items():
        if db.session.get(Configuracion, clave) is None:
            db.session.add(Configuracion(clave=clave, valor=str(valor)))
            logger.info(f"Seeded configuracion {clave}={valor}")

    db.session.commit()
    if missing:
        logger.info(f"Seeded {len(missing)} tipos de sangre")
