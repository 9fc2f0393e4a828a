# validador/demo_validacion.py
"""
Demo Interactiva: Hoja de Referencia de Validación de Datos.

Arquitectura: Composition Root (Consumer)
Responsabilidad: Mostrar, con ejemplos ejecutables, la API pública del validador.

Cada sección es una función independiente que imprime el ejemplo y devuelve
su resultado, de modo que los tests comprueban que la demo dice la verdad.

Secciones:
1. Definición de modelos y coerción de tipos
2. Restricciones de campos
3. Validadores de campo y de modelo
4. Uniones discriminadas
5. Serialización (model_dump / model_dump_json)
6. Configuración del modelo
7. Manejo de errores
8. Entrada JSON y TypeAdapter
"""
import datetime as dt
import sys
from enum import Enum
from pathlib import Path
from typing import Annotated, Literal, Optional, Union

# === Configuración de Path para Imports ===
SCRIPT_ROOT = Path(__file__).parent
sys.path.append(str(SCRIPT_ROOT / "src"))

from validador import (  # noqa: E402
    BaseModel,
    ConfigDict,
    CustomError,
    Field,
    TypeAdapter,
    ValidationError,
    computed_field,
    field_serializer,
    field_validator,
    model_validator,
)


def titulo(texto: str):
    print(f"\n{'=' * 60}\n📘 {texto}\n{'=' * 60}")


# === 1. Definición de Modelos ===


class Usuario(BaseModel):
    nombre: str
    edad: int
    email: str
    activo: bool = True
    etiquetas: list[str] = Field(default_factory=list)


def seccion_modelos() -> Usuario:
    titulo("1. Modelos y coerción de tipos")
    usuario = Usuario(nombre="Ana", edad="30", email="ana@ejemplo.com", activo="yes")
    print(f"   Usuario(edad='30') -> edad={usuario.edad!r} ({type(usuario.edad).__name__})")
    print(f"   Campos asignados: {sorted(usuario.model_fields_set)}")
    print(f"   repr: {usuario!r}")
    return usuario


# === 2. Restricciones de Campos ===


class Producto(BaseModel):
    nombre: str = Field(min_length=2, max_length=50)
    precio: float = Field(gt=0, description="Precio unitario en euros")
    stock: int = Field(default=0, ge=0)
    sku: str = Field(pattern=r"^[A-Z]{3}-\d{4}$")
    descuento: Annotated[int, Field(ge=0, le=100, multiple_of=5)] = 0


def seccion_restricciones() -> ValidationError:
    titulo("2. Restricciones de campos")
    producto = Producto(nombre="Teclado", precio=49.9, sku="TEC-0001", descuento=15)
    print(f"   ✅ {producto}")
    try:
        Producto(nombre="X", precio=-1, sku="abc", descuento=7)
    except ValidationError as exc:
        print(f"   ❌ {exc.error_count()} errores acumulados (no solo el primero):")
        for error in exc.errors():
            print(f"      {'.'.join(map(str, error['loc'])):<10} {error['type']:<25} {error['msg']}")
        return exc
    raise AssertionError("Producto inválido aceptado")


# === 3. Validadores ===


class Registro(BaseModel):
    usuario: str
    password: str = Field(min_length=8)
    password_confirmacion: str

    @field_validator("usuario", mode="before")
    @classmethod
    def normalizar_usuario(cls, v):
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("usuario")
    @classmethod
    def sin_espacios(cls, v: str) -> str:
        if " " in v:
            raise ValueError("el usuario no puede contener espacios")
        return v

    @model_validator(mode="after")
    def passwords_coinciden(self):
        if self.password != self.password_confirmacion:
            raise ValueError("las contraseñas no coinciden")
        return self


def seccion_validadores() -> tuple[Registro, ValidationError]:
    titulo("3. Validadores de campo y de modelo")
    registro = Registro(usuario="  ANA  ", password="secreto123", password_confirmacion="secreto123")
    print(f"   before + after: usuario='  ANA  ' -> {registro.usuario!r}")
    try:
        Registro(usuario="ana", password="secreto123", password_confirmacion="otro12345")
    except ValidationError as exc:
        print(f"   ❌ model_validator(after): {exc.errors()[0]['msg']}")
        return registro, exc
    raise AssertionError("Registro inválido aceptado")


# === 4. Uniones Discriminadas ===


class Gato(BaseModel):
    tipo: Literal["gato"]
    vidas: int = 7


class Perro(BaseModel):
    tipo: Literal["perro"]
    ladra: bool = True


class Duenio(BaseModel):
    nombre: str
    mascota: Annotated[Union[Gato, Perro], Field(discriminator="tipo")]


def seccion_uniones() -> list:
    titulo("4. Uniones discriminadas")
    duenio = Duenio(nombre="Luis", mascota={"tipo": "perro", "ladra": "no"})
    print(f"   tipo='perro' -> {type(duenio.mascota).__name__}: {duenio.mascota}")
    errores = []
    for mascota in ({"tipo": "pez"}, {"vidas": 3}):
        try:
            Duenio(nombre="Luis", mascota=mascota)
        except ValidationError as exc:
            error = exc.errors()[0]
            print(f"   ❌ {mascota} -> {error['type']}: {error['msg']}")
            errores.append(error)
    return [duenio, *errores]


# === 5. Serialización ===


class Estado(str, Enum):
    BORRADOR = "borrador"
    PUBLICADO = "publicado"


class Articulo(BaseModel):
    titulo: str
    autor_id: int = Field(serialization_alias="autorId")
    publicado_en: dt.datetime
    estado: Estado = Estado.BORRADOR
    etiquetas: set[str] = Field(default_factory=set)
    token_interno: str = Field(default="", exclude=True)
    resumen: Optional[str] = None

    @field_serializer("publicado_en")
    def fecha_corta(self, value: dt.datetime) -> str:
        return value.strftime("%Y-%m-%d")

    @computed_field
    @property
    def slug(self) -> str:
        return self.titulo.lower().replace(" ", "-")


def seccion_serializacion() -> dict:
    titulo("5. Serialización")
    articulo = Articulo(
        titulo="Hola Mundo",
        autor_id=7,
        publicado_en="2024-05-01T10:30:00",
        etiquetas=["python"],
        token_interno="secreto",
    )
    resultados = {
        "python": articulo.model_dump(),
        "json": articulo.model_dump(mode="json", by_alias=True, exclude_none=True),
        "include": articulo.model_dump(include={"titulo", "slug"}),
        "exclude_unset": articulo.model_dump(exclude_unset=True, exclude={"publicado_en"}),
        "texto": articulo.model_dump_json(include={"titulo", "estado"}),
    }
    for nombre, valor in resultados.items():
        print(f"   {nombre:<14} {valor}")
    return resultados


# === 6. Configuración ===


class Configuracion(BaseModel):
    model_config = ConfigDict(
        extra="forbid",
        str_strip_whitespace=True,
        validate_assignment=True,
        frozen=False,
    )

    host: str
    puerto: int = Field(default=8080, ge=1, le=65535)


class Punto(BaseModel, frozen=True):
    x: int
    y: int


def seccion_configuracion() -> list:
    titulo("6. Configuración del modelo")
    config = Configuracion(host="  localhost  ")
    print(f"   str_strip_whitespace: {config.host!r}")
    errores = []
    intentos = (
        ("extra='forbid'", lambda: Configuracion(host="h", debug=True)),
        ("validate_assignment", lambda: setattr(config, "puerto", 70000)),
        ("frozen", lambda: setattr(Punto(x=1, y=2), "x", 5)),
    )
    for nombre, intento in intentos:
        try:
            intento()
        except ValidationError as exc:
            error = exc.errors()[0]
            print(f"   ❌ {nombre:<20} {error['type']}: {error['msg']}")
            errores.append(error["type"])
    print(f"   Punto es hashable: {hash(Punto(x=1, y=2)) == hash(Punto(x=1, y=2))}")
    return errores


# === 7. Manejo de Errores ===


class Pedido(BaseModel):
    codigo: str
    cantidad: int

    @field_validator("codigo")
    @classmethod
    def codigo_conocido(cls, v: str) -> str:
        if not v.startswith("PED"):
            raise CustomError("codigo_desconocido", "El código {codigo} no existe", {"codigo": v})
        return v


def seccion_errores() -> ValidationError:
    titulo("7. Manejo de errores")
    try:
        Pedido(codigo="X1", cantidad="muchos")
    except ValidationError as exc:
        print(str(exc))
        print(f"   JSON: {exc.json()}")
        return exc
    raise AssertionError("Pedido inválido aceptado")


# === 8. Entrada JSON y TypeAdapter ===


def seccion_json() -> tuple[Usuario, list[int], ValidationError]:
    titulo("8. Entrada JSON y TypeAdapter")
    usuario = Usuario.model_validate_json('{"nombre": "Eva", "edad": 41, "email": "eva@ejemplo.com"}')
    print(f"   model_validate_json -> {usuario}")
    numeros = TypeAdapter(list[int]).validate_python(["1", 2, 3.0])
    print(f"   TypeAdapter(list[int]) -> {numeros}")
    try:
        Usuario.model_validate_json("{nombre: Eva}")
    except ValidationError as exc:
        print(f"   ❌ {exc.errors()[0]['type']}")
        return usuario, numeros, exc
    raise AssertionError("JSON inválido aceptado")


SECCIONES = (
    seccion_modelos,
    seccion_restricciones,
    seccion_validadores,
    seccion_uniones,
    seccion_serializacion,
    seccion_configuracion,
    seccion_errores,
    seccion_json,
)


def main():
    print("🧪 Hoja de Referencia: Validación Declarativa de Datos")
    for seccion in SECCIONES:
        seccion()
    print("\n✅ Demo completada.")


if __name__ == "__main__":
    main()
