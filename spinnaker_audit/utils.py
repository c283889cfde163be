import json
from datetime import datetime, timezone
from typing import Callable, Optional
from zoneinfo import ZoneInfo

from .constants import TIMESTAMP_FORMAT, UNKNOWN_USER


def format_timestamp(epoch_millis, tz: ZoneInfo) -> str:
    # created/timestamp chegam como string numérica em milissegundos
    seconds = float(epoch_millis) / 1000.0
    moment = datetime.fromtimestamp(seconds, tz=timezone.utc).astimezone(tz)
    return moment.strftime(TIMESTAMP_FORMAT)


def make_timestamp_formatter(tz: ZoneInfo) -> Callable[[object], str]:
    def _format(epoch_millis) -> str:
        return format_timestamp(epoch_millis, tz)
    return _format


def to_json(value) -> str:
    return json.dumps(value, separators=(',', ':'), ensure_ascii=False)


def resolve_user(execution: Optional[dict]) -> str:
    """Usuário responsável pela execução.

    O ``runAsUser`` do trigger tem precedência sobre o usuário autenticado.
    """
    if not execution:
        return UNKNOWN_USER

    user = (execution.get('authentication') or {}).get('user') or UNKNOWN_USER
    run_as_user = (execution.get('trigger') or {}).get('runAsUser')
    if run_as_user:
        user = run_as_user
    return user
