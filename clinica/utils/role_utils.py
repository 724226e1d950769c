# clinica/utils/role_utils.py
from clinica.models.user_model import Role

# Dictionary with permissions for each role
ROLE_PERMISSIONS = {
    Role.USUARIO: {
        'actions': [
            'manage_own_cart', 'checkout', 'send_support_message'
        ]
    },
    Role.ADMIN: {
        'actions': [
            'manage_own_cart', 'checkout', 'send_support_message',
            'view_all_users', 'delete_user', 'manage_catalog', 'manage_pricing',
            'view_all_appointments', 'delete_appointment', 'view_invoices',
            'view_support_inbox'
        ]
    }
}


def parse_role(value):
    """Map a role claim to the Role enum, or None if it is not a known role"""
    if isinstance(value, Role):
        return value
    try:
        return Role(value)
    except ValueError:
        return None


def get_role_permissions(role):
    """Get permissions for a role; unknown roles get none"""
    role = parse_role(role)
    if role is None:
        return {'actions': []}
    return ROLE_PERMISSIONS[role]


def can_perform_action(role, action):
    """Check if a role can perform a specific action"""
    return action in get_role_permissions(role)['actions']


def get_user_data(user):
    """Return public user data (never the password hash)"""
    if not user:
        return None
    return {
        'id': user.id,
        'nombres': user.nombres,
        'apellidos': user.apellidos,
        'telefono': user.telefono,
        'email': user.email,
        'fecha_nacimiento': user.fecha_nacimiento.isoformat() if user.fecha_nacimiento else None,
        'tipo_sangre': user.tipo_sangre.tipo if user.tipo_sangre else None,
        'usuario': user.usuario,
        'rol': user.rol.value
    }
