"""tcpl_scanner: escáner de complejidad ciclomática y dependencias para proyectos PHP."""

__version__ = "0.1.0"
