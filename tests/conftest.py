# =============================================================================
# tests/conftest.py - Configuración de pytest
# =============================================================================
# - Fija las variables de entorno ANTES de importar la aplicación
# - Base de datos SQLite en memoria compartida (StaticPool)
# - Tablas sustitutas de las vistas de estadísticas de Postgres
# - Almacenamiento Supabase con un cliente falso
# =============================================================================

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET", "clave-de-pruebas")
os.environ.setdefault("JWT_EXPIRY", "7d")
os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from datetime import date, time

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import (
    Column, Date, Float, Integer, MetaData, Numeric, String, Table, Time, create_engine,
)
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from juegamas.core.security import AUTH_COOKIE, get_password_hash, token_para_usuario
from juegamas.database import Base, get_db
from juegamas.main import app
from juegamas.models import (
    CaracteristicaEspacio, EspacioDeportivo, ImagenEspacio, Reserva, Usuario,
)
from juegamas.services.supabase_storage import SupabaseStorage, get_storage

PASSWORD = "secreto123"

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# =============================================================================
# Sustitutos de las vistas y tablas externas
# =============================================================================

vistas = MetaData()

Table(
    "vista_estadisticas_espacios", vistas,
    Column("id", Integer, primary_key=True),
    Column("puntuacion_promedio", Float),
    Column("total_resenas", Integer),
)
Table(
    "vista_estadisticas_mensuales", vistas,
    Column("espacio_id", Integer),
    Column("espacio_nombre", String),
    Column("propietario_id", Integer),
    Column("año", Integer),
    Column("mes", Integer),
    Column("reservas_totales", Integer),
    Column("dias_con_reservas", Integer),
    Column("ganancias_mes", Numeric(10, 2)),
    Column("puntuacion_promedio", Float),
)
Table(
    "vista_ocupacion_espacios", vistas,
    Column("espacio_id", Integer),
    Column("espacio_nombre", String),
    Column("propietario_id", Integer),
    Column("total_horarios_disponibles", Integer),
    Column("total_reservas_semana", Integer),
    Column("porcentaje_ocupacion", Float),
)
Table(
    "vista_tendencias_dias", vistas,
    Column("espacio_id", Integer),
    Column("espacio_nombre", String),
    Column("propietario_id", Integer),
    Column("dia_semana", Integer),
    Column("total_reservas", Integer),
    Column("total_ganancias", Float),
)
Table(
    "vista_tendencias_horas", vistas,
    Column("espacio_id", Integer),
    Column("espacio_nombre", String),
    Column("propietario_id", Integer),
    Column("hora_inicio", String),
    Column("total_reservas", Integer),
)
Table(
    "vista_resumen_propietario", vistas,
    Column("propietario_id", Integer),
    Column("propietario_nombre", String),
    Column("total_espacios", Integer),
    Column("ganancias_totales", Float),
    Column("total_reservas", Integer),
    Column("reservas_hoy", Integer),
    Column("ganancias_hoy", Float),
    Column("reservas_proxima_semana", Integer),
    Column("calificacion_promedio", Float),
)
Table(
    "suscripciones", vistas,
    Column("id", Integer, primary_key=True),
    Column("estado", String(20)),
)

# =============================================================================
# Almacenamiento falso
# =============================================================================

class FakeBucket:
    def __init__(self, nombre, registro):
        self.nombre = nombre
        self.registro = registro

    def upload(self, path, content, options=None):
        self.registro.setdefault(self.nombre, {})[path] = content

    def get_public_url(self, path):
        return f"https://test-project.supabase.co/storage/v1/object/public/{self.nombre}/{path}"

    def remove(self, paths):
        for path in paths:
            self.registro.get(self.nombre, {}).pop(path)

class FakeStorageApi:
    def __init__(self):
        self.archivos = {}

    def from_(self, bucket):
        return FakeBucket(bucket, self.archivos)

class FakeSupabaseClient:
    def __init__(self):
        self.storage = FakeStorageApi()

# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    vistas.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        vistas.drop_all(bind=engine)
        Base.metadata.drop_all(bind=engine)

@pytest.fixture
def storage():
    return SupabaseStorage(client=FakeSupabaseClient())

@pytest.fixture
def client(db, storage):
    def override_get_db():
        session = TestingSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_storage] = lambda: storage
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()

def crear_usuario(db, email, role="usuario", nombre="Usuario de prueba", password=PASSWORD):
    usuario = Usuario(
        email=email,
        nombre=nombre,
        password_hash=get_password_hash(password),
        role=role,
    )
    db.add(usuario)
    db.commit()
    db.refresh(usuario)
    return usuario

def iniciar_sesion(client, usuario):
    """Coloca la cookie authToken del usuario en el cliente de pruebas."""
    client.cookies.set(AUTH_COOKIE, token_para_usuario(usuario))
    return client

@pytest.fixture
def usuario(db):
    return crear_usuario(db, "cliente@juegamas.com", nombre="Carla Cliente")

@pytest.fixture
def propietario(db):
    return crear_usuario(db, "propietario@juegamas.com", role="propietario", nombre="Pedro Propietario")

@pytest.fixture
def admin(db):
    return crear_usuario(db, "admin@juegamas.com", role="admin", nombre="Ana Admin")

def crear_espacio(db, propietario, **campos):
    datos = {
        "nombre": "Cancha Central",
        "tipo": "Fútbol",
        "descripcion": "Cancha de césped sintético",
        "direccion": "Av. Siempre Viva 742",
        "ciudad": "La Paz",
        "precio_base": 0,
        "precio_hora": 20000,
        "capacidad_min": 10,
        "capacidad_max": 14,
        "duracion_turno": 60,
        "estado_espacio": "activo",
    }
    datos.update(campos)
    espacio = EspacioDeportivo(propietario_id=propietario.id, **datos)
    db.add(espacio)
    db.commit()
    db.refresh(espacio)
    return espacio

@pytest.fixture
def espacios(db, propietario):
    """Tres espacios activos con precios por hora distintos y uno pendiente."""
    baratos = crear_espacio(db, propietario, nombre="Cancha Barata", precio_hora=5000, ciudad="El Alto")
    medio = crear_espacio(db, propietario, nombre="Cancha Media", precio_hora=30000, tipo="Tenis")
    caro = crear_espacio(db, propietario, nombre="Cancha Premium", precio_hora=80000, capacidad_min=20)
    pendiente = crear_espacio(db, propietario, nombre="Cancha Nueva", estado_espacio="pendiente")

    db.add(CaracteristicaEspacio(espacio_id=medio.id, nombre="vestuarios", valor="si"))
    db.add(ImagenEspacio(espacio_id=medio.id, url="https://img.juegamas.com/media.jpg", orden=0))
    db.commit()
    return {"baratos": baratos, "medio": medio, "caro": caro, "pendiente": pendiente}

def crear_reserva(db, usuario, espacio, **campos):
    datos = {
        "codigo_reserva": f"R-{usuario.id}-{espacio.id}-{campos.get('fecha', date(2030, 1, 1)).toordinal()}",
        "fecha": date(2030, 1, 1),
        "hora_inicio": time(18, 0),
        "hora_fin": time(19, 0),
        "precio_total": 20000,
        "estado": "confirmada",
    }
    datos.update(campos)
    reserva = Reserva(usuario_id=usuario.id, espacio_id=espacio.id, **datos)
    db.add(reserva)
    db.commit()
    db.refresh(reserva)
    return reserva
