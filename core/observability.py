"""Observability Module - Logging, Tracing, and Metrics

This module provides:
1. Structured logging with context
2. Pipeline step tracing, including the input fields a step rejected
3. Latency, success-rate and rejection metrics
"""
import logging
import functools
from typing import Dict, Any, Optional, Callable, List
from dataclasses import dataclass, field
from datetime import datetime

from config.settings import LOG_LEVEL

# Configure structured logging
logging.basicConfig(
    level=getattr(logging, LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s | %(name)s | %(levelname)s | %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)

logger = logging.getLogger("coach")


@dataclass
class StepTrace:
    """
    A single traced pipeline step.

    A step can succeed (no exception) and still reject member input: those
    fields land in rejected_fields, taken from the context's "errors".
    """
    step_name: str
    start_time: datetime = field(default_factory=datetime.now)
    end_time: Optional[datetime] = None
    duration_ms: Optional[float] = None
    success: bool = True
    error: Optional[str] = None
    rejected_fields: List[str] = field(default_factory=list)

    @property
    def rejected(self) -> bool:
        return bool(self.rejected_fields)

    def complete(self, success: bool = True, error: str = None):
        """Mark trace as complete."""
        self.end_time = datetime.now()
        self.duration_ms = (self.end_time - self.start_time).total_seconds() * 1000
        self.success = success
        self.error = error


def error_fields(context: Dict[str, Any], since: int = 0) -> List[str]:
    """Field names of the validation errors in a context, from index `since` on."""
    return [e.get("field") or "unknown" for e in (context.get("errors") or [])[since:]]


@dataclass
class PipelineMetrics:
    """Aggregated metrics for the coaching pipeline."""
    total_steps: int = 0
    successful_steps: int = 0
    failed_steps: int = 0
    rejected_steps: int = 0
    total_latency_ms: float = 0
    step_latencies: Dict[str, List[float]] = field(default_factory=dict)
    rejections_by_field: Dict[str, int] = field(default_factory=dict)

    @property
    def success_rate(self) -> float:
        if self.total_steps == 0:
            return 0.0
        return self.successful_steps / self.total_steps

    @property
    def rejection_rate(self) -> float:
        if self.total_steps == 0:
            return 0.0
        return self.rejected_steps / self.total_steps

    @property
    def avg_latency_ms(self) -> float:
        if self.total_steps == 0:
            return 0.0
        return self.total_latency_ms / self.total_steps

    def record(self, trace: StepTrace):
        self.total_steps += 1
        if trace.success:
            self.successful_steps += 1
        else:
            self.failed_steps += 1

        if trace.rejected:
            self.rejected_steps += 1
            for name in trace.rejected_fields:
                self.rejections_by_field[name] = self.rejections_by_field.get(name, 0) + 1

        if trace.duration_ms is not None:
            self.total_latency_ms += trace.duration_ms
            self.step_latencies.setdefault(trace.step_name, []).append(trace.duration_ms)

    def reset(self):
        self.total_steps = 0
        self.successful_steps = 0
        self.failed_steps = 0
        self.rejected_steps = 0
        self.total_latency_ms = 0
        self.step_latencies = {}
        self.rejections_by_field = {}

    def summary(self) -> Dict[str, Any]:
        step_avg = {
            name: sum(latencies) / len(latencies)
            for name, latencies in self.step_latencies.items()
            if latencies
        }
        return {
            "total_steps": self.total_steps,
            "failed_steps": self.failed_steps,
            "rejected_steps": self.rejected_steps,
            "success_rate": f"{self.success_rate:.1%}",
            "rejection_rate": f"{self.rejection_rate:.1%}",
            "rejections_by_field": dict(self.rejections_by_field),
            "avg_latency_ms": f"{self.avg_latency_ms:.0f}ms",
            "step_avg_latency": step_avg,
        }


# Global metrics instance
metrics = PipelineMetrics()


class Tracer:
    """Context manager for tracing a pipeline step."""

    def __init__(self, step_name: str):
        self.trace = StepTrace(step_name=step_name)

    def __enter__(self):
        logger.info(f"▶ {self.trace.step_name} started")
        return self.trace

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type:
            self.trace.complete(success=False, error=str(exc_val))
            logger.error(f"✖ {self.trace.step_name} failed: {exc_val}")
        else:
            self.trace.complete(success=True)
            if self.trace.rejected:
                logger.info(
                    f"✔ {self.trace.step_name} completed in {self.trace.duration_ms:.0f}ms, "
                    f"rejected: {', '.join(self.trace.rejected_fields)}"
                )
            else:
                logger.info(f"✔ {self.trace.step_name} completed in {self.trace.duration_ms:.0f}ms")

        metrics.record(self.trace)
        return False  # Don't suppress exceptions


def trace_agent(func: Callable) -> Callable:
    """
    Decorator to trace an agent's run(context) under the agent's class name.

    Errors the agent appends to context["errors"] are recorded on the trace.
    """
    @functools.wraps(func)
    def wrapper(self, *args, **kwargs):
        context = args[0] if args else kwargs.get('context')
        before = len((context or {}).get("errors") or [])
        with Tracer(self.__class__.__name__) as trace:
            result = func(self, *args, **kwargs)
            if isinstance(result, dict):
                trace.rejected_fields = error_fields(result, since=before)
            return result
    return wrapper


def log_context(context: Dict[str, Any], stage: str):
    """Log context at a specific pipeline stage."""
    logger.debug(f"[{stage}] Context keys: {list(context.keys())}")

    if "metrics" in context:
        m = context["metrics"]
        logger.debug(f"[{stage}] BMI: {m.get('bmi')} ({m.get('bmi_category')}), BMR: {m.get('bmr')}")

    if context.get("errors"):
        logger.debug(f"[{stage}] Errors: {context['errors']}")


def get_metrics_summary() -> Dict[str, Any]:
    """Get current metrics summary for dashboard/API."""
    return metrics.summary()
