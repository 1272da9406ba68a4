"""Errores de dominio de OptimaFlow.

Cada error lleva el código HTTP con el que se expone; ``main`` registra un
único manejador para la clase base.
"""


class OptimaFlowError(Exception):
    status_code = 500

    def __init__(self, mensaje: str):
        super().__init__(mensaje)
        self.mensaje = mensaje


class StoreUnavailable(OptimaFlowError):
    status_code = 503

    def __init__(self, mensaje: str = "Base de datos no disponible"):
        super().__init__(mensaje)


class NotFound(OptimaFlowError):
    status_code = 404

    def __init__(self, entidad: str, identificador):
        super().__init__(f"{entidad} no encontrado: {identificador}")
        self.entidad = entidad
        self.identificador = identificador


class ValidationError(OptimaFlowError):
    status_code = 422


class UpstreamGenerationError(OptimaFlowError):
    status_code = 502
