"""Observability - Structured logging and metrics"""

import logging
import time
from dataclasses import dataclass, field
from datetime import datetime
from functools import wraps
from typing import Callable, Optional

import json


# ============ Structured Logging ============

class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging"""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.utcnow().isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        # Add extra fields
        if hasattr(record, "extra"):
            log_data.update(record.extra)

        # Add exception info
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


def setup_logging(level: Optional[str] = None, json_format: bool = True) -> logging.Logger:
    """
    Setup structured logging for the package.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR); defaults to settings.log_level
        json_format: Use JSON format for logs

    Returns:
        Configured logger
    """
    if level is None:
        from .db.config import settings
        level = settings.log_level

    logger = logging.getLogger("farm_lookup")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    logger.handlers.clear()

    handler = logging.StreamHandler()
    if json_format:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )

    logger.addHandler(handler)
    return logger


# Global logger
logger = setup_logging()


def log_with_context(**context):
    """Create a logger adapter that attaches context fields to each record"""
    class ContextAdapter(logging.LoggerAdapter):
        def process(self, msg, kwargs):
            kwargs.setdefault("extra", {})
            kwargs["extra"]["extra"] = {**self.extra, **kwargs["extra"].get("extra", {})}
            return msg, kwargs

    return ContextAdapter(logger, context)


# ============ Metrics ============

@dataclass
class Metrics:
    """In-memory metrics collector"""

    # Counters
    resolve_count: int = 0
    search_count: int = 0
    aggregate_count: int = 0
    not_found_count: int = 0
    stale_count: int = 0
    error_count: int = 0

    # Which cascade stage produced each resolution
    resolve_stages: dict[str, int] = field(default_factory=dict)

    # Latency histograms (simplified as lists)
    resolve_latencies: list[float] = field(default_factory=list)
    search_latencies: list[float] = field(default_factory=list)
    aggregate_latencies: list[float] = field(default_factory=list)

    def increment(self, name: str, value: int = 1) -> None:
        """Increment a counter"""
        if hasattr(self, name):
            setattr(self, name, getattr(self, name) + value)

    def record_stage(self, stage: str) -> None:
        """Count a resolution outcome by cascade stage"""
        self.resolve_stages[stage] = self.resolve_stages.get(stage, 0) + 1

    def record_latency(self, name: str, latency_ms: float) -> None:
        """Record a latency measurement"""
        latency_list = getattr(self, f"{name}_latencies", None)
        if latency_list is not None:
            latency_list.append(latency_ms)
            # Keep last 1000 measurements
            if len(latency_list) > 1000:
                latency_list.pop(0)

    def get_percentile(self, name: str, percentile: float) -> Optional[float]:
        """Get percentile from latency histogram"""
        latencies = getattr(self, f"{name}_latencies", [])
        if not latencies:
            return None
        sorted_latencies = sorted(latencies)
        idx = int(len(sorted_latencies) * percentile / 100)
        return sorted_latencies[min(idx, len(sorted_latencies) - 1)]

    def to_dict(self) -> dict:
        """Export metrics as dictionary"""
        return {
            "counters": {
                "resolve_count": self.resolve_count,
                "search_count": self.search_count,
                "aggregate_count": self.aggregate_count,
                "not_found_count": self.not_found_count,
                "stale_count": self.stale_count,
                "error_count": self.error_count,
            },
            "resolve_stages": dict(self.resolve_stages),
            "latencies": {
                "resolve_p50": self.get_percentile("resolve", 50),
                "resolve_p95": self.get_percentile("resolve", 95),
                "resolve_p99": self.get_percentile("resolve", 99),
                "search_p50": self.get_percentile("search", 50),
                "search_p95": self.get_percentile("search", 95),
                "aggregate_p50": self.get_percentile("aggregate", 50),
                "aggregate_p95": self.get_percentile("aggregate", 95),
            },
        }

    def reset(self) -> None:
        """Reset all metrics"""
        self.resolve_count = 0
        self.search_count = 0
        self.aggregate_count = 0
        self.not_found_count = 0
        self.stale_count = 0
        self.error_count = 0
        self.resolve_stages.clear()
        self.resolve_latencies.clear()
        self.search_latencies.clear()
        self.aggregate_latencies.clear()


# Global metrics instance
metrics = Metrics()


# ============ Decorators ============

def track_latency(operation: str):
    """Decorator to track operation latency and count calls"""
    def decorator(func: Callable):
        @wraps(func)
        async def async_wrapper(*args, **kwargs):
            start = time.perf_counter()
            try:
                return await func(*args, **kwargs)
            finally:
                elapsed_ms = (time.perf_counter() - start) * 1000
                metrics.record_latency(operation, elapsed_ms)
                metrics.increment(f"{operation}_count")

        return async_wrapper

    return decorator



# ============ Health Check ============

async def get_health_status(uow) -> dict:
    """
    Get comprehensive health status.

    Args:
        uow: Unit of work

    Returns:
        Health status dict with per-collection record counts
    """
    status = {
        "status": "healthy",
        "timestamp": datetime.utcnow().isoformat(),
        "checks": {},
    }

    try:
        counts = {
            "equipment": await uow.equipment.count(),
            "buildings": await uow.buildings.count(),
            "locations": await uow.locations.count(),
            "maintenance_logs": await uow.maintenance_logs.count(),
        }
        status["checks"]["database"] = {"status": "ok"}
        status["checks"]["data"] = {"status": "ok", **counts}
    except Exception as e:
        status["checks"]["database"] = {"status": "error", "message": str(e)}
        status["status"] = "unhealthy"

    return status
