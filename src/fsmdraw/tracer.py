"""
Hierarchical runtime tracing for fsmdraw.

Nested spans with timing plus one-off events, written to stderr and
optionally to a file, as text or JSON lines. Disabled unless configured,
so traced geometry calls cost a single flag check on the hot path.
"""

import functools
import json
import sys
import time
from contextlib import contextmanager
from datetime import datetime

import numpy as np
from pydantic import BaseModel


class TracerConfig:
    """Output settings for the tracer."""

    def __init__(self):
        self.enabled = False
        self.level = "INFO"
        self.file_path = None
        self.json_output = False
        self._file_handle = None

    def configure(self, enabled=False, level="INFO", file_path=None, json_output=False):
        """Apply new settings, reopening the trace file if one is given."""
        self.close()
        self.enabled = enabled
        self.level = level.upper()
        self.file_path = file_path
        self.json_output = json_output

        if file_path and enabled:
            self._file_handle = open(file_path, "w", encoding="utf-8")

    def close(self):
        if self._file_handle:
            self._file_handle.close()
            self._file_handle = None


class Tracer:
    """
    Span/event tracer.

    Each span logs a start line, indents everything logged inside it, and
    logs an end line with elapsed milliseconds (or a failure line when
    the body raises).
    """

    LEVELS = {"ERROR": 0, "WARN": 1, "INFO": 2, "DEBUG": 3}

    def __init__(self):
        self.config = TracerConfig()
        self._depth = 0
        self._span_stack = []

    def _should_log(self, level):
        if not self.config.enabled:
            return False
        return self.LEVELS.get(level, 2) <= self.LEVELS.get(self.config.level, 2)

    def _emit(self, line):
        print(line, file=sys.stderr)
        if self.config._file_handle:
            self.config._file_handle.write(line + "\n")
            self.config._file_handle.flush()

    def _write(self, level, module, func, message, meta=None):
        if not self._should_log(level):
            return

        now = datetime.now()
        timestamp = now.strftime("%H:%M:%S.") + f"{now.microsecond // 1000:03d}"
        location = f"{module}:{func}" if func else module

        self._emit(f"{timestamp} {level:<5} {'  ' * self._depth}{location}  {message}")

        if self.config.json_output:
            self._emit(json.dumps({
                "timestamp": timestamp,
                "level": level,
                "depth": self._depth,
                "module": module,
                "function": func,
                "message": message,
                "meta": {k: summarize(v) for k, v in (meta or {}).items()},
            }))

    @contextmanager
    def span(self, name, module="", **meta):
        """Trace the enclosed block as a named, timed span."""
        if not self.config.enabled:
            yield
            return

        start_time = time.perf_counter()
        meta_str = " ".join(f"{k}={summarize(v)}" for k, v in meta.items())
        self._write("INFO", module, name, f"start {meta_str}".strip())
        self._depth += 1
        self._span_stack.append((name, module))

        try:
            yield
        except Exception as e:
            elapsed = (time.perf_counter() - start_time) * 1000
            self._depth -= 1
            self._span_stack.pop()
            self._write("ERROR", module, name,
                        f"failed dt={elapsed:.0f}ms error={type(e).__name__}: {str(e)[:100]}")
            raise

        elapsed = (time.perf_counter() - start_time) * 1000
        self._depth -= 1
        self._span_stack.pop()
        self._write("INFO", module, name, f"end ok dt={elapsed:.0f}ms")

    def event(self, message, level="INFO", **meta):
        """Log a one-off event attributed to the innermost open span."""
        if not self._should_log(level):
            return

        func, module = self._span_stack[-1] if self._span_stack else ("", "")
        meta_str = " ".join(f"{k}={summarize(v)}" for k, v in meta.items())
        self._write(level, module, func, f"{message} {meta_str}".strip(), meta)


def summarize(obj, max_len=200):
    """
    Compact, length-capped description of an object for trace lines.

    Geometry models print their defining numbers; other pydantic models
    print their first few field names.
    """
    try:
        result = _summarize_impl(obj)
    except Exception:
        return f"<{type(obj).__name__}>"
    if len(result) > max_len:
        return result[:max_len - 3] + "..."
    return result


def _fmt_point(p):
    return f"({p[0]:.1f},{p[1]:.1f})"


def _summarize_impl(obj):
    if obj is None:
        return "None"

    type_name = type(obj).__name__

    if isinstance(obj, np.ndarray):
        if obj.shape == (2,):
            return f"vec{_fmt_point(obj)}"
        return f"ndarray({obj.dtype},{'x'.join(str(s) for s in obj.shape)})"

    if isinstance(obj, BaseModel):
        center = getattr(obj, "center", None)
        radius = getattr(obj, "radius", None)
        if center is not None and radius is not None:
            return f"{type_name}(c={_fmt_point(center)},r={radius:.1f})"
        if hasattr(obj, "tip"):
            return f"{type_name}(tip={_fmt_point(obj.tip)})"
        fields = list(type(obj).model_fields.keys())[:3]
        return f"{type_name}(fields={fields}...)"

    if isinstance(obj, str):
        if len(obj) > 50:
            return f"str(len={len(obj)})"
        return repr(obj)

    if isinstance(obj, (list, tuple)):
        if len(obj) == 2 and all(isinstance(v, (int, float)) for v in obj):
            return _fmt_point(obj)
        first = type(obj[0]).__name__ if obj else "?"
        return f"{type_name}(len={len(obj)},first={first})"

    if isinstance(obj, dict):
        keys = ",".join(str(k) for k in list(obj.keys())[:5])
        return f"dict(len={len(obj)},keys=[{keys}])"

    if isinstance(obj, (bool, int, float)):
        return str(obj)

    return f"<{type_name}>"


def trace(label=None):
    """Decorator wrapping a function call in a tracer span."""
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            if not _tracer.config.enabled:
                return func(*args, **kwargs)

            module = func.__module__.split(".")[-1] if func.__module__ else ""
            with _tracer.span(label or func.__name__, module=module):
                return func(*args, **kwargs)

        return wrapper
    return decorator


_tracer = Tracer()


def get_tracer():
    """Get the global tracer instance."""
    return _tracer


def configure_tracer(enabled=False, level="INFO", file_path=None, json_output=False):
    """Configure the global tracer."""
    _tracer.config.configure(
        enabled=enabled,
        level=level,
        file_path=file_path,
        json_output=json_output,
    )


def configure_from(tracing_config):
    """Configure the global tracer from a TracingConfig section."""
    configure_tracer(
        enabled=tracing_config.enabled,
        level=tracing_config.level,
        file_path=tracing_config.file_path,
        json_output=tracing_config.json_output,
    )
