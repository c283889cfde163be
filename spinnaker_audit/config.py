import json
import os
from dataclasses import dataclass
from typing import Dict, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .constants import (
    AUDIT_CONFIG_FILE,
    AUDIT_LOG_NAME,
    AUDIT_TIMEZONE,
    AUTH_PASSWORD,
    AUTH_USERNAME,
    DEBUG_MODE,
    DEFAULT_LOG_NAME,
    DEFAULT_TIMEZONE,
    GCP_KEY_FILENAME,
    GCP_PROJECT_ID,
)


@dataclass(frozen=True)
class AuditConfig:
    username: str
    password: str
    timezone: str = DEFAULT_TIMEZONE
    project_id: Optional[str] = None
    key_filename: Optional[str] = None
    log_name: str = DEFAULT_LOG_NAME

    def __post_init__(self):
        try:
            ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Timezone desconhecido: {self.timezone}") from exc

    @property
    def tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)


def _load_config_file(file_path: Optional[str]) -> Dict[str, str]:
    if not file_path:
        return {}

    if not os.path.exists(file_path):
        if DEBUG_MODE:
            print(f"[DEBUG] Arquivo de configuração não encontrado: {file_path}")
        return {}

    with open(file_path, 'r', encoding='utf-8') as fp:
        raw = fp.read().strip()
    if not raw:
        return {}

    data = json.loads(raw)
    if not isinstance(data, dict):
        raise ValueError(f"Arquivo de configuração inválido (esperado objeto JSON): {file_path}")
    return {str(k).upper(): v for k, v in data.items() if v is not None}


def load_config(file_path: Optional[str] = AUDIT_CONFIG_FILE) -> AuditConfig:
    """Monta a configuração imutável do processo.

    Variáveis de ambiente têm precedência sobre o arquivo JSON, que usa as
    mesmas chaves do config.json original (USERNAME, PASSWORD, TIMEZONE,
    PROJECT_ID, KEY_FILENAME, LOG_NAME).
    """
    file_values = _load_config_file(file_path)

    def pick(env_value, key, default=None):
        if env_value:
            return env_value
        return file_values.get(key, default)

    username = pick(AUTH_USERNAME, "USERNAME")
    password = pick(AUTH_PASSWORD, "PASSWORD")
    if not username or not password:
        raise ValueError("AUTH_USERNAME e AUTH_PASSWORD são obrigatórios")

    config = AuditConfig(
        username=username,
        password=password,
        timezone=pick(AUDIT_TIMEZONE, "TIMEZONE", DEFAULT_TIMEZONE),
        project_id=pick(GCP_PROJECT_ID, "PROJECT_ID"),
        key_filename=pick(GCP_KEY_FILENAME, "KEY_FILENAME"),
        log_name=pick(AUDIT_LOG_NAME, "LOG_NAME", DEFAULT_LOG_NAME),
    )
    if DEBUG_MODE:
        print(f"[DEBUG] Config carregada: tz={config.timezone} project={config.project_id} log={config.log_name}")
    return config
