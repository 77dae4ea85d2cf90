"""
echo-inspector server.

Builds the FastAPI application that hosts the echo routes and runs it with
uvicorn using a dictConfig that routes all logging through the Rich handler.
"""
import os
import time
import copy
from typing import Optional, Dict, Any
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from echo_inspector.utils.logging import logger
from echo_inspector.config import EchoInspectorConfig, expand_path, get_config
from echo_inspector.constants import CONFIG_FILE_ENV
from echo_inspector.version import __version__
from echo_inspector.api.app import create_api_router
from echo_inspector.api.middleware.error import add_error_handlers
from echo_inspector.api.middleware.logging import add_logging_middleware


BASE_LOGGING_CONFIG: Dict[str, Any] = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "access": {
            "()": "uvicorn.logging.AccessFormatter",
            "fmt": '%(levelprefix)s %(client_addr)s - "%(request_line)s" %(status_code)s',
        },
        "file": {
            "format": "%(asctime)s - %(name)s:%(lineno)d - %(levelname)s - %(message)s",
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
    },
    "handlers": {
        "access": {
            "formatter": "access",
            "class": "logging.StreamHandler",
            "stream": "ext://sys.stdout",
        },
        "rich_console": {
            "()": "echo_inspector.utils.logging.formatter.create_rich_console_handler",
        },
    },
    "loggers": {
        "uvicorn": {"handlers": ["rich_console"], "level": "INFO", "propagate": False},
        "uvicorn.error": {"level": "INFO", "propagate": True},
        "uvicorn.access": {"handlers": ["access"], "level": "INFO", "propagate": False},
        "echo_inspector": {
            "handlers": ["rich_console"],
            "level": "INFO",
            "propagate": False,
        },
    },
    "root": {
        "level": "INFO",
        "handlers": ["rich_console"],
    },
}


def build_logging_config(log_level: str = "info", log_file: Optional[str] = None) -> Dict[str, Any]:
    """Build the dictConfig passed to uvicorn.

    Args:
        log_level: Level for the application and root loggers
        log_file: Optional path for a rotating file handler

    Returns:
        Logging configuration dictionary
    """
    config = copy.deepcopy(BASE_LOGGING_CONFIG)
    level = log_level.upper()

    config["root"]["level"] = level
    # Context tables and tracebacks in debug output
    config["handlers"]["rich_console"]["detailed"] = level == "DEBUG"
    config["loggers"]["echo_inspector"]["level"] = level
    # Hide access logs entirely at CRITICAL
    config["loggers"]["uvicorn.access"]["level"] = level if level != "CRITICAL" else "CRITICAL"
    uvicorn_base_level = "DEBUG" if level == "DEBUG" else "INFO"
    config["loggers"]["uvicorn"]["level"] = uvicorn_base_level
    config["loggers"]["uvicorn.error"]["level"] = uvicorn_base_level

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        config["handlers"]["rotating_file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "formatter": "file",
            "filename": log_file,
            "maxBytes": 2 * 1024 * 1024,  # 2 MB
            "backupCount": 5,
            "encoding": "utf-8",
        }
        for name in ("echo_inspector", "uvicorn.access"):
            config["loggers"][name]["handlers"].append("rotating_file")
        config["root"]["handlers"].append("rotating_file")

    return config


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Server lifespan: log startup and shutdown."""
    started = time.time()
    logger.success("echo-inspector started and ready", component="server", operation="startup")
    try:
        yield
    finally:
        logger.shutdown(component="server", duration=time.time() - started)


def create_server(config: Optional[EchoInspectorConfig] = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        config: Configuration to use; the global configuration when None

    Returns:
        Configured FastAPI application
    """
    config = config or get_config()

    app = FastAPI(
        title="echo-inspector",
        description="HTTP request inspector that echoes requests back as JSON or raw HTTP",
        version=__version__,
        lifespan=lifespan,
        debug=config.server.debug,
    )

    # CORSMiddleware answers preflights itself, so it is opt-in: with it
    # enabled OPTIONS requests carrying Origin are no longer echoed
    if config.server.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.server.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    if config.server.access_log:
        add_logging_middleware(app)

    add_error_handlers(app)

    app.include_router(create_api_router(mount_service_routes=config.server.mount_service_routes))

    logger.debug("Application created", component="server", operation="startup")
    return app


def start_server(
    host: Optional[str] = None,
    port: Optional[int] = None,
    workers: Optional[int] = None,
    log_level: Optional[str] = None,
    reload: bool = False,
    config_file: Optional[str] = None,
) -> None:
    """Start the server with uvicorn.

    Args:
        host: Bind host; the configured host when None
        port: Bind port; the configured port when None
        workers: Worker processes; the configured count when None
        log_level: Log level override
        reload: Reload on code changes
        config_file: Config file the workers load their configuration from
    """
    config = get_config()
    server_host = host or config.server.host
    server_port = port or config.server.port
    server_workers = workers or config.server.workers
    final_log_level = (log_level or config.server.log_level).lower()

    logger.set_level(final_log_level)
    logger.startup(__version__, server_host, server_port, component="server")

    # Multiple workers and reload need an import string
    if server_workers > 1 or reload:
        app_target: Any = "echo_inspector.server:create_server"
        factory = True
        # Worker processes build their own app and only see the environment
        if config_file:
            os.environ[CONFIG_FILE_ENV] = os.path.abspath(expand_path(config_file))
    else:
        app_target = create_server(config)
        factory = False

    uvicorn.run(
        app_target,
        host=server_host,
        port=server_port,
        workers=server_workers,
        log_config=build_logging_config(final_log_level, config.server.log_file),
        reload=reload,
        factory=factory,
    )
