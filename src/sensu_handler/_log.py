from __future__ import annotations

from enum import Enum
from json import dumps
from logging import (WARNING,
                     Formatter,
                     Handler,
                     LogRecord,
                     StreamHandler,
                     getLogger)

from ._constants import LOG_FORMAT, LOG_LEVEL
from ._env_helpers import parse_enum, parse_level

LOG = getLogger('sensu_handler')

_HANDLER: Handler | None = None


class LogFormat(str, Enum):
    JSON = 'json'
    PLAIN = 'plain'


class HandlerJSONFormatter(Formatter):

    def format(self, record: LogRecord) -> str:
        base = {
            'ts': record.created,
            'fn': record.funcName,
            'file': record.filename,
            'lineno': record.lineno,
            'level': record.levelname.lower(),
            'msg': record.getMessage(),
            'logger': record.name,
        }
        if record.stack_info:
            base['stack'] = record.stack_info

        extra = getattr(record, 'sensu_handler', None)
        if extra:
            base['sensu_handler'] = extra
        if record.exc_info:
            base['exc'] = self.formatException(record.exc_info)

        return dumps(base, ensure_ascii=False, default=str)


def configure_logging(level: int | None = None,
                      log_format: LogFormat | None = None,
                      *,
                      reset: bool = False) -> Handler:
    """
    Attach a stderr handler to the package logger, once per process.

    `level` and `log_format` fall back to the ``SENSU_HANDLER_LOG_LEVEL``
    and ``SENSU_HANDLER_LOG_FORMAT`` environment variables.
    """
    global _HANDLER

    if _HANDLER is not None:
        if not reset:
            return _HANDLER
        LOG.removeHandler(_HANDLER)

    if level is None:
        level = parse_level(LOG_LEVEL, default=WARNING)
    if log_format is None:
        log_format = parse_enum(LOG_FORMAT, enum=LogFormat, default=LogFormat.JSON)

    # StreamHandler writes to stderr; stdout belongs to the handler itself
    handler = StreamHandler()
    if log_format is LogFormat.JSON:
        handler.setFormatter(HandlerJSONFormatter())
    else:
        handler.setFormatter(
            Formatter('%(asctime)s %(levelname)s %(name)s: %(message)s'))

    LOG.addHandler(handler)
    LOG.setLevel(level)

    _HANDLER = handler
    return handler
