import pytest

from tests.conftest import crear_usuario, iniciar_sesion

@pytest.mark.parametrize(
    "role, destino",
    [
        ("usuario", "/dashboard/cliente"),
        ("cliente", "/dashboard/cliente"),
        ("propietario", "/dashboard/propietario"),
        ("admin", "/dashboard/admin"),
    ],
)
def test_dashboard_redirige_segun_el_rol(client, db, role, destino):
    iniciar_sesion(client, crear_usuario(db, f"{role}@juegamas.com", role=role))
    response = client.get("/dashboard", follow_redirects=False)
    assert response.status_code == 307
    assert response.headers["location"] == destino

def test_panel_devuelve_el_contexto_de_sesion(client, propietario):
    iniciar_sesion(client, propietario)
    response = client.get("/dashboard/propietario")
    assert response.status_code == 200
    data = response.json()
    assert data["panel"] == "propietario"
    assert data["user"]["id"] == propietario.id

def test_panel_cliente(client, usuario):
    iniciar_sesion(client, usuario)
    assert client.get("/dashboard/cliente").json()["panel"] == "cliente"

def test_paginas_de_acceso_denegado(client):
    response = client.get("/unauthorized")
    assert response.status_code == 200
    assert "text/html" in response.headers["content-type"]
    assert "Iniciar sesión" in response.text
    assert "Acceso prohibido" in client.get("/forbidden").text

def test_health(client):
    data = client.get("/health").json()
    assert data["status"] == "healthy"
