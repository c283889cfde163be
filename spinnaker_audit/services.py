import sys
from concurrent.futures import Future, ThreadPoolExecutor

from google.cloud import logging as cloud_logging
from google.cloud.logging import Resource

from .config import AuditConfig
from .constants import CLOUD_SEVERITIES, DEBUG_MODE, SINK_MAX_WORKERS
from .models import LogEntry

GLOBAL_RESOURCE = Resource(type="global", labels={})


def build_cloud_logger(config: AuditConfig):
    if config.key_filename:
        client = cloud_logging.Client.from_service_account_json(config.key_filename, project=config.project_id)
    else:
        client = cloud_logging.Client(project=config.project_id)
    return client.logger(config.log_name)


class CloudLoggingSink:
    """Envia entradas de auditoria ao Cloud Logging sem bloquear a requisição.

    Cada ``emit`` vira uma tarefa no executor; falhas de escrita são
    reportadas no stderr pelo callback em vez de descartadas.
    """

    def __init__(self, logger, max_workers: int = SINK_MAX_WORKERS):
        self.logger = logger
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="audit-sink")

    @classmethod
    def from_config(cls, config: AuditConfig) -> "CloudLoggingSink":
        return cls(build_cloud_logger(config))

    def _write(self, entry: LogEntry) -> None:
        self.logger.log_struct(
            entry.to_struct(),
            severity=CLOUD_SEVERITIES[entry.severity],
            resource=GLOBAL_RESOURCE,
        )
        if DEBUG_MODE:
            print(f"[DEBUG] Entrada enviada ({entry.severity}): {entry.message}")

    @staticmethod
    def _report_failure(entry: LogEntry, future: Future) -> None:
        exc = future.exception()
        if exc is not None:
            print(f"[ERROR] Falha ao gravar no Cloud Logging: {exc!r} (entrada: {entry.message})", file=sys.stderr)

    def emit(self, entry: LogEntry) -> Future:
        future = self._executor.submit(self._write, entry)
        future.add_done_callback(lambda f: self._report_failure(entry, f))
        return future

    def close(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)
