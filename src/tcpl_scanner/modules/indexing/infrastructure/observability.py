# src/tcpl_scanner/modules/indexing/infrastructure/observability.py
"""
Configuración centralizada de Logging y Métricas.

Principios SRE:
1. Logs legibles para humanos (Consola).
2. Logs detallados para diagnóstico (Archivo opcional).
3. Eventos estructurados (JSON) con latencia y RAM por operación.
"""

import functools
import json
import logging
import os
import sys
import time
import uuid
from pathlib import Path
from typing import Any, Callable, Optional

import psutil

logger = logging.getLogger("tcpl_scanner")


def configure_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> None:
    """
    Configura el logging con doble destino (Consola + Archivo opcional).
    La consola usa stderr para no mezclarse con los reportes en stdout.
    """
    console_formatter = logging.Formatter(
        "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s", datefmt="%H:%M:%S"
    )
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(console_formatter)
    console_handler.setLevel(level)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Limpiar handlers previos para evitar duplicados
    if root_logger.hasHandlers():
        root_logger.handlers.clear()

    root_logger.addHandler(console_handler)

    if log_file:
        file_formatter = logging.Formatter(
            "%(asctime)s | %(levelname)s | %(name)s | %(funcName)s:%(lineno)d | %(message)s"
        )
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(file_formatter)
        file_handler.setLevel(logging.DEBUG)  # Siempre capturamos todo en disco
        root_logger.addHandler(file_handler)
        logging.debug(f"Logs persistentes en: {log_file}")


# === Decoradores de Métricas (Instrumentation) ===


def measure_time(metric_name: str):
    """
    Decorador para medir latencia de fases del escaneo.
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            start_time = time.perf_counter()
            try:
                return func(*args, **kwargs)
            finally:
                duration = time.perf_counter() - start_time
                logging.getLogger("metrics").info(
                    f"[METRIC] {metric_name} duration={duration:.4f}s"
                )

        return wrapper

    return decorator


class ObservabilityService:

    # Con LOG_FORMAT=PRETTY los eventos se indentan (vista vertical)
    PRETTY_PRINT = os.getenv("LOG_FORMAT") == "PRETTY"

    @staticmethod
    def get_correlation_id() -> str:
        return str(uuid.uuid4())[:8]

    @staticmethod
    def _get_ram_usage_mb() -> float:
        try:
            process = psutil.Process(os.getpid())
            return round(process.memory_info().rss / 1024 / 1024, 2)
        except psutil.Error:
            return 0.0

    @staticmethod
    def log_event(
        event_name: str,
        correlation_id: str,
        payload: dict[str, Any],
        level: str = "INFO",
    ):
        """Emite un log estructurado en JSON."""
        log_entry = {
            "timestamp": time.time(),
            "level": level,
            "event": event_name,
            "correlation_id": correlation_id,
            "data": payload,
        }
        indent = 4 if ObservabilityService.PRETTY_PRINT else None
        msg = json.dumps(log_entry, indent=indent, default=str)

        if level == "ERROR":
            logger.error(msg)
        else:
            logger.info(msg)

    @staticmethod
    def measure_latency(
        operation_name: str,
        summarize: Optional[Callable[[Any], dict[str, Any]]] = None,
    ):
        """
        Emite eventos .started/.completed/.failed con latencia y RAM.
        `summarize(resultado)` añade campos propios al evento .completed.
        """

        def decorator(func: Callable):
            @functools.wraps(func)
            def wrapper(*args, **kwargs):
                start_time = time.time()
                start_ram = ObservabilityService._get_ram_usage_mb()
                correlation_id = ObservabilityService.get_correlation_id()

                target = "unknown"
                for arg in args:
                    if isinstance(arg, (str, Path)):
                        target = str(arg)
                        break

                ObservabilityService.log_event(
                    event_name=f"{operation_name}.started",
                    correlation_id=correlation_id,
                    payload={"target": target, "start_ram_mb": start_ram},
                )

                try:
                    result = func(*args, **kwargs)
                except Exception as e:
                    ObservabilityService.log_event(
                        event_name=f"{operation_name}.failed",
                        correlation_id=correlation_id,
                        payload={
                            "duration_sec": round(time.time() - start_time, 3),
                            "crash_ram_mb": ObservabilityService._get_ram_usage_mb(),
                            "target": target,
                            "error_type": type(e).__name__,
                            "error_msg": str(e),
                        },
                        level="ERROR",
                    )
                    raise

                end_ram = ObservabilityService._get_ram_usage_mb()
                payload = {
                    "duration_sec": round(time.time() - start_time, 3),
                    "end_ram_mb": end_ram,
                    "ram_delta_mb": round(end_ram - start_ram, 2),
                    "target": target,
                    "status": "success",
                }
                if summarize is not None:
                    payload.update(summarize(result))
                ObservabilityService.log_event(
                    event_name=f"{operation_name}.completed",
                    correlation_id=correlation_id,
                    payload=payload,
                )
                return result

            return wrapper

        return decorator
