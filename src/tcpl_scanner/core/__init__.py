"""📦 core/ — Building blocks universales del sistema

✨ ¿Qué pertenece aquí?
   • Value Objects reusables en CUALQUIER dominio (PositiveValue)
   • Helpers genéricos SIN dependencia del análisis de PHP

🚫 ¿Qué NO pertenece aquí?
   • Tokens, clases, métodos o índices de dependencias
   → modules/indexing/domain/
"""
