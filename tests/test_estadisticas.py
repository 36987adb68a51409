from unittest.mock import MagicMock

from sqlalchemy import text

from juegamas.crud import estadisticas as crud_estadisticas
from tests.conftest import crear_espacio, iniciar_sesion

def insertar(db, tabla, **valores):
    columnas = ", ".join(f'"{c}"' for c in valores)
    parametros = ", ".join(f":p{i}" for i in range(len(valores)))
    db.execute(
        text(f"INSERT INTO {tabla} ({columnas}) VALUES ({parametros})"),
        {f"p{i}": v for i, v in enumerate(valores.values())},
    )
    db.commit()

class TestEstadisticasEspacio:
    def test_espacio_inexistente(self, client, propietario):
        iniciar_sesion(client, propietario)
        response = client.get("/api/espacios/9999/estadisticas")
        assert response.status_code == 404
        assert response.json() == {"error": "No se encontraron estadísticas para este espacio"}

    def test_error_en_la_funcion_de_base_de_datos(self, client, db, propietario):
        # SQLite no tiene obtener_estadisticas_espacio: la consulta falla
        espacio = crear_espacio(db, propietario)
        iniciar_sesion(client, propietario)
        assert client.get(f"/api/espacios/{espacio.id}/estadisticas").status_code == 404

    def test_valores_nulos_se_reemplazan(self):
        db = MagicMock()
        db.execute.return_value.mappings.return_value.first.return_value = {
            "reservas_hoy": None,
            "ganancias_dia": 150000,
            "cancha_popular": None,
            "horario_popular": "18:00",
        }
        assert crud_estadisticas.get_estadisticas_espacio(db, 1) == {
            "reservas_hoy": 0,
            "ganancias_dia": 150000,
            "cancha_popular": "No disponible",
            "horario_popular": "18:00",
        }

    def test_funcion_sin_filas(self):
        db = MagicMock()
        db.execute.return_value.mappings.return_value.first.return_value = None
        resultado = crud_estadisticas.get_estadisticas_espacio(db, 1)
        assert resultado["reservas_hoy"] == 0
        assert resultado["horario_popular"] == "No disponible"

def test_estadisticas_mensuales_devuelve_el_mes_mas_reciente(client, db, propietario):
    espacio = crear_espacio(db, propietario)
    base = {"espacio_id": espacio.id, "espacio_nombre": espacio.nombre, "propietario_id": propietario.id}
    insertar(db, "vista_estadisticas_mensuales", **base, **{"año": 2024, "mes": 12, "reservas_totales": 40})
    insertar(db, "vista_estadisticas_mensuales", **base, **{"año": 2025, "mes": 1, "reservas_totales": 12})

    iniciar_sesion(client, propietario)
    response = client.get(f"/api/espacios/{espacio.id}/estadisticas/mensuales")
    assert response.status_code == 200
    data = response.json()
    assert data["año"] == 2025
    assert data["reservas_totales"] == 12

def test_estadisticas_mensuales_sin_datos(client, db, propietario):
    espacio = crear_espacio(db, propietario)
    iniciar_sesion(client, propietario)
    assert client.get(f"/api/espacios/{espacio.id}/estadisticas/mensuales").status_code == 404

def test_ocupacion(client, db, propietario):
    espacio = crear_espacio(db, propietario)
    insertar(
        db, "vista_ocupacion_espacios",
        espacio_id=espacio.id, espacio_nombre=espacio.nombre, propietario_id=propietario.id,
        total_horarios_disponibles=70, total_reservas_semana=21, porcentaje_ocupacion=30.0,
    )
    iniciar_sesion(client, propietario)
    response = client.get(f"/api/espacios/{espacio.id}/ocupacion")
    assert response.status_code == 200
    assert response.json()["porcentaje_ocupacion"] == 30.0

def test_ocupacion_sin_datos(client, db, propietario):
    espacio = crear_espacio(db, propietario)
    iniciar_sesion(client, propietario)
    response = client.get(f"/api/espacios/{espacio.id}/ocupacion")
    assert response.status_code == 404
    assert response.json() == {"error": "No se encontraron datos de ocupación para este espacio"}

def test_tendencias(client, db, propietario):
    espacio = crear_espacio(db, propietario)
    for dia in (5, 1, 3):
        insertar(db, "vista_tendencias_dias", espacio_id=espacio.id, dia_semana=dia, total_reservas=dia * 2)
    for hora, total in [("08:00", 1), ("09:00", 7), ("10:00", 3), ("18:00", 9), ("19:00", 8), ("20:00", 2)]:
        insertar(db, "vista_tendencias_horas", espacio_id=espacio.id, hora_inicio=hora, total_reservas=total)

    iniciar_sesion(client, propietario)
    data = client.get(f"/api/espacios/{espacio.id}/tendencias").json()
    assert [d["dia_semana"] for d in data["dias"]] == [1, 3, 5]
    assert [h["hora_inicio"] for h in data["horas"]] == ["18:00", "19:00", "09:00", "10:00", "20:00"]

def test_tendencias_con_error_devuelve_listas_vacias(client, db, propietario):
    espacio = crear_espacio(db, propietario)
    db.execute(text("DROP TABLE vista_tendencias_horas"))
    db.commit()
    iniciar_sesion(client, propietario)
    assert client.get(f"/api/espacios/{espacio.id}/tendencias").json() == {"dias": [], "horas": []}

def test_resumen_propietario(client, db, propietario):
    insertar(
        db, "vista_resumen_propietario",
        propietario_id=propietario.id, propietario_nombre=propietario.nombre,
        total_espacios=2, ganancias_totales=500000, total_reservas=25, reservas_hoy=3,
    )
    iniciar_sesion(client, propietario)
    response = client.get("/api/propietario/resumen")
    assert response.status_code == 200
    assert response.json()["total_espacios"] == 2

def test_resumen_propietario_sin_datos(client, propietario):
    iniciar_sesion(client, propietario)
    response = client.get("/api/propietario/resumen")
    assert response.status_code == 404
    assert response.json() == {"error": "No se encontró información de resumen para este propietario"}
