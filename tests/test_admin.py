import pytest

from clinica.models import Usuario
from conftest import auth, register
from test_cart import add
from test_checkout import checkout

ADMIN_ROUTES = [
    ('get', '/api/admin/usuarios'),
    ('delete', '/api/admin/usuarios/1'),
    ('get', '/api/admin/patologias'),
    ('post', '/api/admin/patologias'),
    ('delete', '/api/admin/patologias/1'),
    ('get', '/api/admin/horarios'),
    ('post', '/api/admin/horarios'),
    ('delete', '/api/admin/horarios/1'),
    ('get', '/api/admin/citas'),
    ('delete', '/api/admin/citas/1'),
    ('put', '/api/admin/precio'),
    ('put', '/api/admin/iva'),
    ('get', '/api/admin/facturas'),
    ('get', '/api/admin/facturas/1'),
    ('get', '/api/admin/factura/1'),
    ('get', '/api/admin/soporte'),
]


@pytest.mark.parametrize('method,url', ADMIN_ROUTES)
def test_non_admin_is_forbidden(client, user_token, method, url):
    resp = getattr(client, method)(url, json={'nombre': 'x', 'hora': '11:00', 'nuevo_precio': 1, 'nuevo_iva': 0.1},
                                   headers=auth(user_token))
    assert resp.status_code == 403


def test_list_appointments_ordered_by_date_then_time(client, user_token, admin_token):
    add(client, user_token, fecha='2024-05-02', hora_id=1)
    add(client, user_token, fecha='2024-05-01', hora_id=3)
    add(client, user_token, fecha='2024-05-01', hora_id=1)
    checkout(client, user_token, 60, 9, 69)

    resp = client.get('/api/admin/citas', headers=auth(admin_token))
    assert resp.status_code == 200
    citas = resp.get_json()
    assert [(c['fecha'], c['hora']) for c in citas] == [
        ('2024-05-01', '08:00'), ('2024-05-01', '10:00'), ('2024-05-02', '08:00')
    ]
    assert all(c['usuario'] == 'ana' for c in citas)


def test_delete_appointment(client, user_token, admin_token):
    add(client, user_token)
    checkout(client, user_token)
    cita_id = client.get('/api/admin/citas', headers=auth(admin_token)).get_json()[0]['id']

    resp = client.delete(f'/api/admin/citas/{cita_id}', headers=auth(admin_token))
    assert resp.status_code == 200
    assert client.get('/api/admin/citas', headers=auth(admin_token)).get_json() == []
    assert client.delete(f'/api/admin/citas/{cita_id}', headers=auth(admin_token)).status_code == 404

    # the slot is free again
    assert add(client, user_token).status_code == 200


def test_invoice_list_and_detail(client, user_token, admin_token):
    add(client, user_token, hora_id=1)
    add(client, user_token, hora_id=2)
    factura_id = checkout(client, user_token, 40, 6, 46).get_json()['factura_id']

    facturas = client.get('/api/admin/facturas', headers=auth(admin_token)).get_json()
    assert len(facturas) == 1
    assert facturas[0]['usuario'] == 'ana'
    assert facturas[0]['total'] == 46

    for url in (f'/api/admin/facturas/{factura_id}', f'/api/admin/factura/{factura_id}'):
        resp = client.get(url, headers=auth(admin_token))
        assert resp.status_code == 200
        detalle = resp.get_json()
        assert detalle['cliente'] == 'Ana Pérez'
        assert (detalle['subtotal'], detalle['iva'], detalle['total']) == (40, 6, 46)
        assert [(d['hora'], d['precio']) for d in detalle['detalles']] == [('08:00', 20), ('09:00', 20)]

    assert client.get('/api/admin/facturas/999', headers=auth(admin_token)).status_code == 404


def test_invoice_detail_keeps_totals_after_vat_change(client, user_token, admin_token):
    add(client, user_token)
    factura_id = checkout(client, user_token, 20, 3, 23).get_json()['factura_id']
    client.put('/api/admin/iva', json={'nuevo_iva': 0.5}, headers=auth(admin_token))

    detalle = client.get(f'/api/admin/facturas/{factura_id}', headers=auth(admin_token)).get_json()
    assert detalle['iva'] == 3
    assert detalle['total'] == 23


def test_list_users_hides_password(client, user_token, admin_token):
    usuarios = client.get('/api/admin/usuarios', headers=auth(admin_token)).get_json()
    assert {u['usuario'] for u in usuarios} == {'ana', 'admin'}
    assert all('contrasena' not in u for u in usuarios)


def test_delete_user(client, admin_token):
    register(client, usuario='temporal')
    user_id = Usuario.query.filter_by(usuario='temporal').first().id
    resp = client.delete(f'/api/admin/usuarios/{user_id}', headers=auth(admin_token))
    assert resp.status_code == 200
    assert client.get('/api/usuarios/existe/temporal').get_json() == {'existe': False}
    assert client.delete(f'/api/admin/usuarios/{user_id}', headers=auth(admin_token)).status_code == 404


def test_delete_user_with_history_or_self_is_rejected(client, user_token, admin_token):
    add(client, user_token)
    checkout(client, user_token)
    ana = Usuario.query.filter_by(usuario='ana').first()
    admin = Usuario.query.filter_by(usuario='admin').first()

    assert client.delete(f'/api/admin/usuarios/{ana.id}', headers=auth(admin_token)).status_code == 400
    assert client.delete(f'/api/admin/usuarios/{admin.id}', headers=auth(admin_token)).status_code == 400
