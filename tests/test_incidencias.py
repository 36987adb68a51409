import pytest

from juegamas.crud import incidencias as crud_incidencias
from juegamas.models import Incidencia
from tests.conftest import crear_espacio, crear_reserva, crear_usuario, iniciar_sesion

@pytest.fixture
def reserva(db, usuario, propietario):
    return crear_reserva(db, usuario, crear_espacio(db, propietario))

def reportar(client, **campos):
    datos = {
        "tipo": "problema_espacio",
        "asunto": "Luces apagadas",
        "descripcion": "La cancha no tenía iluminación a las 20:00",
    }
    datos.update(campos)
    return client.post("/api/incidencias", json=datos)

def test_reportar_incidencia(client, usuario, reserva):
    iniciar_sesion(client, usuario)
    response = reportar(client, reserva_id=reserva.id, archivos_adjuntos=["https://img.juegamas.com/foto.jpg"])
    assert response.status_code == 201
    data = response.json()
    assert data["success"] is True
    assert data["incidencia"]["estado"] == "pendiente"
    assert data["incidencia"]["reserva_id"] == reserva.id
    assert data["incidencia"]["archivos_adjuntos"] == ["https://img.juegamas.com/foto.jpg"]

def test_reportar_con_reserva_ajena(client, db, reserva):
    otro = crear_usuario(db, "otro@juegamas.com")
    iniciar_sesion(client, otro)
    assert reportar(client, reserva_id=reserva.id).status_code == 404

def test_reportar_con_tipo_invalido(client, usuario):
    iniciar_sesion(client, usuario)
    assert reportar(client, tipo="queja").status_code == 400

def test_listado_y_filtros(client, usuario):
    iniciar_sesion(client, usuario)
    reportar(client)
    reportar(client, tipo="sugerencia", asunto="Más horarios")

    data = client.get("/api/incidencias").json()
    assert data["total"] == 2
    data = client.get("/api/incidencias", params={"tipo": "sugerencia"}).json()
    assert [i["asunto"] for i in data["incidencias"]] == ["Más horarios"]

def test_detalle_solo_del_propio_usuario(client, db, usuario):
    iniciar_sesion(client, usuario)
    incidencia_id = reportar(client).json()["incidencia"]["id"]
    assert client.get(f"/api/incidencias/{incidencia_id}").status_code == 200

    iniciar_sesion(client, crear_usuario(db, "otro@juegamas.com"))
    assert client.get(f"/api/incidencias/{incidencia_id}").status_code == 404

def test_actualizar_incidencia(client, usuario):
    iniciar_sesion(client, usuario)
    incidencia_id = reportar(client).json()["incidencia"]["id"]
    response = client.put(
        f"/api/incidencias/{incidencia_id}",
        json={"descripcion": "Ya volvió la luz a las 20:30"},
    )
    assert response.status_code == 200
    assert response.json()["incidencia"]["descripcion"] == "Ya volvió la luz a las 20:30"
    assert response.json()["incidencia"]["asunto"] == "Luces apagadas"

def test_actualizar_con_descripcion_nula(client, db, usuario):
    iniciar_sesion(client, usuario)
    incidencia_id = reportar(client).json()["incidencia"]["id"]
    response = client.put(f"/api/incidencias/{incidencia_id}", json={"descripcion": None})
    assert response.status_code == 400
    assert response.json()["details"][0]["campo"] == "descripcion"

    db.expire_all()
    assert db.get(Incidencia, incidencia_id).descripcion == "La cancha no tenía iluminación a las 20:00"

def test_error_al_actualizar_responde_500(client, usuario, monkeypatch):
    iniciar_sesion(client, usuario)
    incidencia_id = reportar(client).json()["incidencia"]["id"]

    def falla(db, incidencia, cambios):
        raise RuntimeError("sin conexión")

    monkeypatch.setattr(crud_incidencias, "update_incidencia", falla)
    response = client.put(f"/api/incidencias/{incidencia_id}", json={"descripcion": "Otra descripción"})
    assert response.status_code == 500
    assert response.json() == {"error": "Ocurrió un error al actualizar la incidencia"}

def test_cerrar_incidencia(client, usuario):
    iniciar_sesion(client, usuario)
    incidencia_id = reportar(client).json()["incidencia"]["id"]
    response = client.post(f"/api/incidencias/{incidencia_id}/cerrar")
    assert response.status_code == 200
    assert response.json()["incidencia"]["estado"] == "cerrada"

    # Una incidencia cerrada no se vuelve a cerrar
    assert client.post(f"/api/incidencias/{incidencia_id}/cerrar").status_code == 400

def test_no_se_cierra_una_incidencia_resuelta(client, db, usuario):
    incidencia = Incidencia(
        usuario_id=usuario.id, tipo="otro", asunto="Consulta", descripcion="Resuelta", estado="resuelta",
    )
    db.add(incidencia)
    db.commit()

    iniciar_sesion(client, usuario)
    assert client.post(f"/api/incidencias/{incidencia.id}/cerrar").status_code == 400

def test_estadisticas_por_estado(client, db, usuario):
    for estado in ("pendiente", "pendiente", "en_revision", "resuelta", "cerrada"):
        db.add(Incidencia(usuario_id=usuario.id, tipo="otro", asunto="A", descripcion="B", estado=estado))
    db.commit()

    iniciar_sesion(client, usuario)
    assert client.get("/api/incidencias/estadisticas").json() == {
        "total": 5, "pendientes": 2, "en_revision": 1, "resueltas": 1, "cerradas": 1,
    }
