# clinica/routes/__init__.py
from .auth_routes import auth_ns
from .catalog_routes import patologia_ns, horario_ns, precio_ns, configuracion_ns
from .cart_routes import cart_ns, citas_ns
from .billing_routes import billing_ns
from .support_routes import support_ns
from .admin_routes import admin_ns


def register_namespaces(api):
    api.add_namespace(auth_ns)
    api.add_namespace(patologia_ns)
    api.add_namespace(horario_ns)
    api.add_namespace(precio_ns)
    api.add_namespace(configuracion_ns)
    api.add_namespace(cart_ns)
    api.add_namespace(citas_ns)
    api.add_namespace(billing_ns)
    api.add_namespace(support_ns)
    api.add_namespace(admin_ns)
