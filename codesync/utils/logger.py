"""
Structured logging for CodeSync.

Every component logs through a LayerLogger so events share one vocabulary
(decision_made, action_<status>, fallback_triggered, error_occurred,
http_probe, artifact_extracted) and carry the request's trace id.
"""
import logging
import uuid
from contextvars import ContextVar
from typing import Any, Dict, List, Optional

import structlog

from codesync.config import config

trace_id_var: ContextVar[str] = ContextVar("trace_id", default="")

# Field names whose values never reach a log line
SECRET_FIELDS = {"token", "github_token", "authorization"}
MASK = "***"


def _new_trace_id() -> str:
    return uuid.uuid4().hex[:8]


def get_trace_id() -> str:
    """Trace id of the current context, created on first use."""
    trace_id = trace_id_var.get()
    if not trace_id:
        trace_id = _new_trace_id()
        trace_id_var.set(trace_id)
    return trace_id


def set_trace_id(trace_id: Optional[str] = None) -> str:
    """Start a new trace for the current request."""
    trace_id = trace_id or _new_trace_id()
    trace_id_var.set(trace_id)
    return trace_id


def add_trace_id(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    event_dict["trace_id"] = get_trace_id()
    return event_dict


def mask_secrets(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Replace credential values, including inside header dicts."""
    for key, value in event_dict.items():
        if key.lower() in SECRET_FIELDS and value:
            event_dict[key] = MASK
        elif isinstance(value, dict):
            event_dict[key] = {
                k: MASK if k.lower() in SECRET_FIELDS and v else v
                for k, v in value.items()
            }
    return event_dict


def configure_logging(level: Optional[str] = None, fmt: Optional[str] = None):
    """Configure structlog once; JSON lines unless fmt is "console"."""
    level = (level or config.LOG_LEVEL).upper()
    fmt = fmt or config.LOG_FORMAT

    renderer = (
        structlog.processors.JSONRenderer()
        if fmt == "json"
        else structlog.dev.ConsoleRenderer(colors=True)
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            add_trace_id,
            mask_secrets,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level, logging.INFO)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    return structlog.get_logger(name)


class LayerLogger:
    """Logger bound to one component (extractor, bridge, formatter, sync)."""

    def __init__(self, layer_name: str):
        self.layer_name = layer_name
        self.logger = get_logger(layer_name)

    def _emit(self, level: str, event: str, **fields):
        getattr(self.logger, level)(event, layer=self.layer_name, **fields)

    def log_decision(self, decision: str, reason: str, url: Optional[str] = None, **extra):
        """A branch was taken: which one and why."""
        self._emit("info", "decision_made", decision=decision, reason=reason, url=url, **extra)

    def log_action(self, action: str, status: str = "started", **extra):
        self._emit("info", f"action_{status}", action=action, **extra)

    def log_fallback(self, from_source: str, to_source: str, reason: str, **extra):
        """A primary source gave nothing and a secondary one takes over."""
        self._emit(
            "warning",
            "fallback_triggered",
            from_source=from_source,
            to_source=to_source,
            reason=reason,
            **extra,
        )

    def log_error(self, error: str, error_type: str = "unknown", **extra):
        self._emit("error", "error_occurred", error=error, error_type=error_type, **extra)

    def log_http_probe(
        self,
        url: str,
        endpoint: str,
        status_code: Optional[int],
        result: str,
        **extra,
    ):
        """Outcome of a read-only request whose failure is not an error."""
        self._emit(
            "info",
            "http_probe",
            url=url,
            endpoint=endpoint,
            status_code=status_code,
            result=result,
            **extra,
        )

    def log_extraction(
        self,
        platform: str,
        fields_present: List[str],
        fields_missing: List[str],
        **extra,
    ):
        """Which artifact fields an extraction recovered."""
        self._emit(
            "info",
            "artifact_extracted",
            platform=platform,
            fields_present=fields_present,
            fields_missing=fields_missing,
            **extra,
        )


configure_logging()
