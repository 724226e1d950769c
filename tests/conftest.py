from datetime import time

import pytest

from clinica import create_app, db, bcrypt
from clinica.config import TestingConfig
from clinica.models import Usuario, Role, Patologia, Horario


@pytest.fixture
def app():
    app = create_app(TestingConfig)
    with app.app_context():
        db.session.add_all([
            Patologia(nombre='Cardiología'),
            Patologia(nombre='Dermatología'),
            Patologia(nombre='Pediatría'),
            Horario(hora=time(8, 0)),
            Horario(hora=time(9, 0)),
            Horario(hora=time(10, 0)),
        ])
        db.session.commit()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def register(client, usuario='ana', contrasena='secreto1', **extra):
    payload = {
        'nombres': extra.pop('nombres', 'Ana'),
        'apellidos': extra.pop('apellidos', 'Pérez'),
        'telefono': '0999999999',
        'email': f'{usuario}@example.com',
        'fecha_nacimiento': '1990-04-12',
        'tipo_sangre_id': 1,
        'usuario': usuario,
        'contrasena': contrasena,
    }
    payload.update(extra)
    return client.post('/api/usuarios/registrar', json=payload)


def login(client, usuario='ana', contrasena='secreto1'):
    return client.post('/api/usuarios/login', json={'usuario': usuario, 'contrasena': contrasena})


@pytest.fixture
def user_token(client):
    assert register(client).status_code == 200
    return login(client).get_json()['token']


@pytest.fixture
def other_token(client):
    assert register(client, usuario='luis', nombres='Luis').status_code == 200
    return login(client, usuario='luis').get_json()['token']


@pytest.fixture
def admin_token(app, client):
    admin = Usuario(
        nombres='Admin',
        apellidos='Clínica',
        email='admin@example.com',
        usuario='admin',
        contrasena=bcrypt.generate_password_hash('admin123').decode('utf-8'),
        rol=Role.ADMIN
    )
    db.session.add(admin)
    db.session.commit()
    return login(client, usuario='admin', contrasena='admin123').get_json()['token']


def auth(token):
    return {'Authorization': token}


def horario_id(label):
    hora = time.fromisoformat(label)
    return Horario.query.filter_by(hora=hora).first().id


def patologia_id(nombre):
    return Patologia.query.filter_by(nombre=nombre).first().id
