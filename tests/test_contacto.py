from juegamas.models import MensajeContacto
from tests.conftest import iniciar_sesion

MENSAJE = {
    "nombre": "Lucía Pérez",
    "email": "lucia@juegamas.com",
    "asunto": "Registro de cancha",
    "mensaje": "Quisiera saber cómo registrar mi complejo deportivo.",
}

def test_enviar_mensaje(client, db, usuario):
    iniciar_sesion(client, usuario)
    response = client.post("/api/contacto", json=MENSAJE)
    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["message"] == "Mensaje recibido correctamente"
    assert data["data"]["leido"] is False
    assert db.query(MensajeContacto).count() == 1

def test_mensaje_demasiado_corto(client, usuario):
    iniciar_sesion(client, usuario)
    response = client.post("/api/contacto", json=dict(MENSAJE, mensaje="Hola"))
    assert response.status_code == 400
    assert response.json()["details"][0]["campo"] == "mensaje"

def test_el_endpoint_de_contacto_no_es_publico(client):
    assert client.post("/api/contacto", json=MENSAJE).status_code == 401
