from clinica.models import CarritoItem
from conftest import auth


def add(client, token, patologia_id=3, fecha='2024-05-01', hora_id=2):
    return client.post('/api/carrito', json={'patologia_id': patologia_id, 'fecha': fecha, 'hora_id': hora_id},
                       headers=auth(token))


def test_add_and_list_cart(client, user_token):
    resp = add(client, user_token)
    assert resp.status_code == 200

    resp = client.get('/api/carrito', headers=auth(user_token))
    assert resp.status_code == 200
    items = resp.get_json()
    assert len(items) == 1
    assert items[0]['patologia'] == 'Pediatría'
    assert items[0]['fecha'] == '2024-05-01'
    assert items[0]['hora'] == '09:00'


def test_same_slot_twice_in_own_cart_is_rejected(client, user_token):
    assert add(client, user_token).status_code == 200
    resp = add(client, user_token, patologia_id=1)
    assert resp.status_code == 400
    assert CarritoItem.query.count() == 1


def test_slot_already_confirmed_is_rejected_for_everyone(client, user_token, other_token):
    assert add(client, user_token).status_code == 200
    resp = client.post('/api/facturar', json={'subtotal': 20, 'iva': 3, 'total': 23}, headers=auth(user_token))
    assert resp.status_code == 200

    resp = add(client, other_token)
    assert resp.status_code == 400
    resp = add(client, user_token)
    assert resp.status_code == 400


def test_add_validates_payload(client, user_token):
    resp = client.post('/api/carrito', json={'fecha': '2024-05-01'}, headers=auth(user_token))
    assert resp.status_code == 400
    resp = add(client, user_token, fecha='mañana')
    assert resp.status_code == 400
    resp = add(client, user_token, patologia_id=999)
    assert resp.status_code == 404
    resp = add(client, user_token, hora_id=999)
    assert resp.status_code == 404


def test_remove_from_cart_by_date_and_time_label(client, user_token):
    add(client, user_token)
    resp = client.delete('/api/carrito/eliminar', json={'fecha': '2024-05-01', 'hora': '09:00'},
                         headers=auth(user_token))
    assert resp.status_code == 200
    assert client.get('/api/carrito', headers=auth(user_token)).get_json() == []


def test_remove_missing_entry_is_404_and_cart_unchanged(client, user_token):
    add(client, user_token)
    resp = client.delete('/api/carrito/eliminar', json={'fecha': '2024-05-02', 'hora': '09:00'},
                         headers=auth(user_token))
    assert resp.status_code == 404
    resp = client.delete('/api/carrito/eliminar', json={'fecha': '2024-05-01', 'hora': '17:00'},
                         headers=auth(user_token))
    assert resp.status_code == 404
    assert len(client.get('/api/carrito', headers=auth(user_token)).get_json()) == 1


def test_carts_are_per_user(client, user_token, other_token):
    add(client, user_token)
    assert add(client, other_token).status_code == 200
    assert len(client.get('/api/carrito', headers=auth(other_token)).get_json()) == 1

    resp = client.get('/api/carrito/usuario', headers=auth(user_token))
    assert resp.status_code == 200
    assert resp.get_json() == [{'fecha': '2024-05-01', 'hora': '09:00'}]


def test_occupied_slots_are_public(client, user_token):
    assert client.get('/api/citas/ocupadas').get_json() == []
    add(client, user_token, hora_id=3)
    add(client, user_token, hora_id=1)
    client.post('/api/facturar', json={'subtotal': 40, 'iva': 6, 'total': 46}, headers=auth(user_token))

    resp = client.get('/api/citas/ocupadas')
    assert resp.status_code == 200
    assert resp.get_json() == [
        {'fecha': '2024-05-01', 'hora': '08:00'},
        {'fecha': '2024-05-01', 'hora': '10:00'},
    ]


def test_unique_constraint_rejects_duplicate_that_skips_the_check(client, user_token, monkeypatch):
    from sqlalchemy.orm import Query

    assert add(client, user_token).status_code == 200
    # Simulate a concurrent request whose existence checks saw nothing
    monkeypatch.setattr(Query, 'first', lambda self: None)
    resp = add(client, user_token)
    monkeypatch.undo()

    assert resp.status_code == 400
    assert resp.get_json() == {'message': 'El horario ya no está disponible.'}
    assert CarritoItem.query.count() == 1


def test_cart_rejects_non_object_body(client, user_token):
    resp = client.post('/api/carrito', json=[3, '2024-05-01', 2], headers=auth(user_token))
    assert resp.status_code == 400
    resp = client.delete('/api/carrito/eliminar', json=['2024-05-01', '09:00'], headers=auth(user_token))
    assert resp.status_code == 400


def test_remove_rejects_date_given_as_time(client, user_token):
    add(client, user_token)
    resp = client.delete('/api/carrito/eliminar', json={'fecha': '2024-05-01', 'hora': '2024-05-01'},
                         headers=auth(user_token))
    assert resp.status_code == 400
    assert len(client.get('/api/carrito', headers=auth(user_token)).get_json()) == 1
