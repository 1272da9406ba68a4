import enum


class Role(str, enum.Enum):
    USER = "user"
    ADMIN = "admin"


class OpportunityStatus(str, enum.Enum):
    CONTACTADO = "contactado"
    EN_PROGRESO = "en_progreso"
    CERRADO = "cerrado"
    PERDIDO = "perdido"

    @property
    def label(self) -> str:
        return ETIQUETAS_ESTADO[self]


class ActivityType(str, enum.Enum):
    LLAMADA = "llamada"
    EMAIL = "email"
    REUNION = "reunion"
    NOTA = "nota"
    PROPUESTA = "propuesta"

    @property
    def label(self) -> str:
        return ETIQUETAS_ACTIVIDAD[self]


class DealershipStatus(str, enum.Enum):
    ACTIVO = "activo"
    INACTIVO = "inactivo"
    PENDIENTE = "pendiente"


# Etiquetas que muestra el cliente móvil; una por cada valor del enum
ETIQUETAS_ESTADO = {
    OpportunityStatus.CONTACTADO: "Contactado",
    OpportunityStatus.EN_PROGRESO: "En Progreso",
    OpportunityStatus.CERRADO: "Cerrado",
    OpportunityStatus.PERDIDO: "Perdido",
}

ETIQUETAS_ACTIVIDAD = {
    ActivityType.LLAMADA: "Llamada",
    ActivityType.EMAIL: "Email",
    ActivityType.REUNION: "Reunión",
    ActivityType.NOTA: "Nota",
    ActivityType.PROPUESTA: "Propuesta",
}


def valores(enum_cls):
    """Guarda en la base el valor del enum ("contactado") y no su nombre."""
    return [miembro.value for miembro in enum_cls]
