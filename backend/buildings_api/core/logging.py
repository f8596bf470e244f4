from buildings_api.core.settings import settings
import logging
import logging.config


LOG_FORMAT = '%(asctime)s %(levelname)s [%(name)s] [%(correlation_id)s] %(message)s'

# attributes every LogRecord has, anything else arrived through ``extra=``
_RECORD_ATTRIBUTES = frozenset(logging.makeLogRecord({}).__dict__) | {'message', 'asctime', 'correlation_id', 'taskName'}


class CorrelationIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, 'correlation_id', None):
            record.correlation_id = '-'
        return True


class ExtraFieldsFormatter(logging.Formatter):
    """Appends the fields passed with ``extra=`` as ``key=value`` pairs."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        fields = {key: value for key, value in record.__dict__.items() if key not in _RECORD_ATTRIBUTES}
        if not fields:
            return line
        return line + ' ' + ' '.join(f'{key}={value}' for key, value in fields.items())


def configure_logging(level: str | None = None) -> None:
    logging.config.dictConfig({
        'version': 1,
        'disable_existing_loggers': False,
        'filters': {
            'correlation_id': {'()': CorrelationIdFilter},
        },
        'formatters': {
            'default': {'()': ExtraFieldsFormatter, 'fmt': LOG_FORMAT},
        },
        'handlers': {
            'console': {
                'class': 'logging.StreamHandler',
                'formatter': 'default',
                'filters': ['correlation_id'],
            },
        },
        'loggers': {
            'buildings_api': {
                'handlers': ['console'],
                'level': level or settings.LOG_LEVEL,
                'propagate': False,
            },
        },
    })
