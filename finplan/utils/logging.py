from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import IO, Iterator, Optional

request_id_var: ContextVar[str] = ContextVar("request_id", default="-")
session_id_var: ContextVar[str] = ContextVar("session_id", default="-")
agent_var: ContextVar[str] = ContextVar("agent", default="-")


class ContextFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get()
        record.session_id = session_id_var.get()
        record.agent = agent_var.get()
        return True


class KeyValueFormatter(logging.Formatter):
    """One line per record: ``ts level logger request_id session_id agent msg``."""

    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.now(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z")
        line = (
            f"{ts} level={record.levelname} logger={record.name} "
            f"request_id={getattr(record, 'request_id', '-')} "
            f"session_id={getattr(record, 'session_id', '-')} "
            f"agent={getattr(record, 'agent', '-')} "
            f"msg={record.getMessage()}"
        )
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def setup_logging(level: str = "INFO", stream: Optional[IO[str]] = None) -> None:
    lvl = getattr(logging, level.upper(), logging.INFO)
    root = logging.getLogger()
    root.setLevel(lvl)

    # Streamlit re-executes the app script on every interaction
    root.handlers = []

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setLevel(lvl)
    handler.addFilter(ContextFilter())
    handler.setFormatter(KeyValueFormatter())

    root.addHandler(handler)


def set_log_context(*, request_id: str, session_id: Optional[str] = None, agent: Optional[str] = None) -> None:
    request_id_var.set(request_id)
    if session_id is not None:
        session_id_var.set(session_id)
    if agent is not None:
        agent_var.set(agent)


@contextmanager
def agent_context(agent_name: str) -> Iterator[None]:
    token = agent_var.set(agent_name)
    try:
        yield
    finally:
        agent_var.reset(token)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
