from juegamas.core.security import AUTH_COOKIE, verify_token
from tests.conftest import PASSWORD, iniciar_sesion

def test_login_correcto_fija_cookie(client, usuario):
    response = client.post("/api/auth/login", json={"email": usuario.email, "password": PASSWORD})
    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "Inicio de sesión correcto"
    assert data["user"]["email"] == usuario.email
    assert "password_hash" not in data["user"]

    cookie = response.headers["set-cookie"]
    assert f"{AUTH_COOKIE}=" in cookie
    assert "HttpOnly" in cookie
    assert "samesite=strict" in cookie.lower()
    assert "Max-Age=604800" in cookie
    assert "Path=/" in cookie
    assert verify_token(response.cookies[AUTH_COOKIE])["userId"] == usuario.id

def test_login_con_contrasenia_incorrecta(client, usuario):
    response = client.post("/api/auth/login", json={"email": usuario.email, "password": "incorrecta"})
    assert response.status_code == 401
    assert response.json() == {"error": "Email o contraseña incorrectos"}

def test_login_con_email_inexistente_da_el_mismo_mensaje(client, usuario):
    response = client.post("/api/auth/login", json={"email": "nadie@juegamas.com", "password": PASSWORD})
    assert response.status_code == 401
    assert response.json() == {"error": "Email o contraseña incorrectos"}

def test_login_con_datos_invalidos(client):
    response = client.post("/api/auth/login", json={"email": "no-es-email", "password": ""})
    assert response.status_code == 400
    data = response.json()
    assert data["error"] == "Datos inválidos"
    assert {d["campo"] for d in data["details"]} == {"email", "password"}

def test_registro_crea_usuario_y_sesion(client):
    response = client.post(
        "/api/auth/register",
        json={"email": "nuevo@juegamas.com", "password": "clave123", "nombre": "Nuevo Usuario"},
    )
    assert response.status_code == 201
    data = response.json()
    assert data["user"]["role"] == "usuario"
    assert AUTH_COOKIE in response.cookies

    login = client.post("/api/auth/login", json={"email": "nuevo@juegamas.com", "password": "clave123"})
    assert login.status_code == 200

def test_registro_como_propietario(client):
    response = client.post(
        "/api/auth/register",
        json={"email": "duenio@juegamas.com", "password": "clave123", "nombre": "Dueño", "role": "propietario"},
    )
    assert response.status_code == 201
    assert response.json()["user"]["role"] == "propietario"

def test_registro_con_email_repetido_responde_500(client, usuario):
    response = client.post(
        "/api/auth/register",
        json={"email": usuario.email, "password": "clave123", "nombre": "Repetido"},
    )
    assert response.status_code == 500
    assert response.json() == {"error": "Error al registrar el usuario"}

def test_registro_con_contrasenia_corta(client):
    response = client.post(
        "/api/auth/register",
        json={"email": "corto@juegamas.com", "password": "123", "nombre": "Corto"},
    )
    assert response.status_code == 400

def test_logout_elimina_cookie(client, usuario):
    iniciar_sesion(client, usuario)
    response = client.post("/api/auth/logout")
    assert response.status_code == 200
    assert response.json() == {"message": "Sesión cerrada correctamente"}
    assert f'{AUTH_COOKIE}=""' in response.headers["set-cookie"] or "Max-Age=0" in response.headers["set-cookie"]

def test_verify_devuelve_usuario_actual(client, propietario):
    iniciar_sesion(client, propietario)
    response = client.get("/api/auth/verify")
    assert response.status_code == 200
    data = response.json()
    assert data["authenticated"] is True
    assert data["user"]["email"] == propietario.email

def test_verify_con_email_internacional(client):
    response = client.post(
        "/api/auth/register",
        json={"email": "用户@example.com", "password": "clave123", "nombre": "Usuario Internacional"},
    )
    assert response.status_code == 201

    response = client.get("/api/auth/verify")
    assert response.status_code == 200
    assert response.json()["authenticated"] is True
    assert response.json()["user"]["nombre"] == "Usuario Internacional"

def test_verify_sin_cookie(client):
    assert client.get("/api/auth/verify").status_code == 401
