from .user_model import Role, TipoSangre, Usuario
from .catalog_model import Patologia, Horario, Configuracion
from .cart_model import CarritoItem
from .appointment_model import Cita
from .invoice_model import Factura, detalle_factura
from .support_model import MensajeSoporte
