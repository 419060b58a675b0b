"""
Logging estruturado com structlog.

Em DEBUG os eventos saem coloridos no console; nos demais ambientes saem
como JSON, um por linha, prontos para o Cloud Logging.
"""

import logging
import sys

import structlog

from legalx.core.config import settings

# Bibliotecas do Firestore/gRPC são verbosas em nível DEBUG
_NOISY_LOGGERS = ("google", "grpc", "urllib3", "httpcore")


def setup_logging() -> None:
    """Configura structlog e o logging padrão do Python."""
    level = logging.DEBUG if settings.DEBUG else logging.INFO

    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]

    if settings.DEBUG:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    else:
        processors += [
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
