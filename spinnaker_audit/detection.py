from typing import Any, Callable, NamedTuple, Optional

from . import formatters
from .constants import DEBUG_MODE, SPINNAKER_EVENT_NAME, UNKNOWN_USER
from .errors import ValidationError
from .models import LogEntry, SpinnakerEvent
from .utils import resolve_user

MALFORMED_BODY_MESSAGE = "Spinnaker audit log request body is malformed."
UNKNOWN_TIME = UNKNOWN_USER


class Rule(NamedTuple):
    name: str
    matches: Callable[[SpinnakerEvent], bool]
    build: Callable[[SpinnakerEvent], LogEntry]


def _is_manual_judgment(event: SpinnakerEvent, event_type: str) -> bool:
    stage = event.stage_details
    return (
        not event.standalone
        and bool(stage)
        and stage.get('type') == 'manualJudgment'
        and event.event_type == event_type
    )


def _is_stage_starting(event: SpinnakerEvent) -> bool:
    if event.event_type != 'orca:stage:starting':
        return False
    return not event.context['stageDetails'].get('isSynthetic')


def _is_pipeline_canceled(event: SpinnakerEvent) -> bool:
    return event.event_type == 'orca:pipeline:failed' and bool(event.execution.get('canceled'))


# Ordem importa: a primeira regra que casar vence
RULES = (
    Rule('jenkins_build',
         lambda e: e.source == 'igor' and e.event_type == 'build',
         formatters.format_jenkins_build),
    Rule('docker_push',
         lambda e: e.source == 'igor' and e.event_type == 'docker',
         formatters.format_docker_push),
    Rule('git_webhook',
         lambda e: e.event_type == 'git',
         formatters.format_git_webhook),
    Rule('stage_starting',
         lambda e: _is_stage_starting(e) and not e.standalone,
         formatters.format_stage_starting),
    Rule('adhoc_stage_starting',
         lambda e: _is_stage_starting(e) and e.standalone,
         formatters.format_adhoc_stage_starting),
    Rule('pipeline_starting',
         lambda e: e.event_type == 'orca:pipeline:starting',
         formatters.format_pipeline_starting),
    Rule('pipeline_canceled',
         _is_pipeline_canceled,
         formatters.format_pipeline_canceled),
    Rule('pipeline_complete',
         lambda e: e.event_type == 'orca:pipeline:complete',
         formatters.format_pipeline_complete),
    Rule('judgment_stop',
         lambda e: _is_manual_judgment(e, 'orca:stage:failed'),
         formatters.format_judgment_stop),
    Rule('judgment_continue',
         lambda e: _is_manual_judgment(e, 'orca:stage:complete'),
         formatters.format_judgment_continue),
    Rule('task_failed',
         lambda e: e.event_type == 'orca:task:failed' and not e.standalone,
         formatters.format_task_failed),
    Rule('adhoc_task_failed',
         lambda e: e.event_type == 'orca:task:failed' and e.standalone,
         formatters.format_adhoc_task_failed),
)


def validate_envelope(body: Any) -> dict:
    if not isinstance(body, dict):
        raise ValidationError(MALFORMED_BODY_MESSAGE)
    if body.get('eventName') != SPINNAKER_EVENT_NAME or body.get('payload') is None:
        raise ValidationError(MALFORMED_BODY_MESSAGE)
    return body['payload']


def _format_created(created, format_ts: Callable[[Any], str]) -> str:
    if created is None or created == '':
        return UNKNOWN_TIME
    try:
        return format_ts(created)
    except (ValueError, TypeError, OverflowError, OSError):
        # data inválida vira n/a
        return UNKNOWN_TIME


def parse_event(payload: dict, format_ts: Callable[[Any], str]) -> SpinnakerEvent:
    details = payload['details']
    content = payload['content']
    execution = content.get('execution')
    created = details.get('created')

    return SpinnakerEvent(
        source=details.get('source'),
        event_type=details.get('type'),
        content=content,
        execution=execution,
        context=content.get('context'),
        user=resolve_user(execution),
        created_at=_format_created(created, format_ts),
        format_timestamp=format_ts,
    )


def detect_rule(event: SpinnakerEvent) -> Optional[Rule]:
    for rule in RULES:
        if rule.matches(event):
            return rule
    return None


def classify_event(body: Any, format_ts: Callable[[Any], str]) -> Optional[LogEntry]:
    """Transforma o corpo do webhook em uma entrada de auditoria.

    Retorna ``None`` quando nenhuma regra se aplica ao evento. Campos
    aninhados ausentes (``execution``, ``context``, ``stageDetails``) em um
    tipo que depende deles propagam a exceção para o chamador.
    """
    payload = validate_envelope(body)
    event = parse_event(payload, format_ts)

    rule = detect_rule(event)
    if rule is None:
        if DEBUG_MODE:
            print(f"[DEBUG] Nenhuma regra para source={event.source} type={event.event_type}")
        return None

    if DEBUG_MODE:
        print(f"[DEBUG] Regra selecionada: {rule.name}")
    return rule.build(event)
