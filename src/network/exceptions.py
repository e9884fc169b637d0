"""
Excepciones de la red vial.

Los errores de argumentos inválidos (velocidades negativas, duraciones
demasiado cortas, IDs inválidos) se reportan con ``ValueError``.
"""


class NetworkError(Exception):
    """Excepción base para todos los errores de la red vial."""
    pass


class IntersectionNotFoundError(NetworkError, LookupError):
    """Se pidió una intersección que no existe en la red."""
    pass


class RouteNotFoundError(NetworkError, LookupError):
    """Se pidió una ruta que no existe entre dos intersecciones."""
    pass


class DuplicateSensorError(NetworkError):
    """La ruta ya tiene un sensor del mismo tipo."""
    pass


class InvalidOrderError(NetworkError, ValueError):
    """
    El orden de semáforos no es una permutación de las rutas entrantes
    de la intersección, o está vacío.
    """
    pass


class NetworkStateError(NetworkError, RuntimeError):
    """
    La operación no es válida en el estado actual: la ruta ya existe,
    la ruta no tiene cartel de velocidad, o la intersección no tiene
    semáforos.
    """
    pass


class InvalidNetworkError(NetworkError):
    """El texto de una red guardada no respeta el formato."""
    pass
