"""📦 modules/ — Bounded contexts del escáner

• indexing/  → Tokenizer, parser, modelo de clases e índice de dependencias
• interface/ → Menú interactivo (rich) y CLI (argparse)

📚 Cada módulo contiene sus propias capas Clean Architecture:
   • domain/        → Entidades y reglas del subdominio
   • application/   → Casos de uso
   • infrastructure/→ Adaptadores concretos
"""
