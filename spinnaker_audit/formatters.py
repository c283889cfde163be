from .constants import MESSAGE_PREFIX, SEVERITY_ERROR, SEVERITY_INFO, SEVERITY_WARNING
from .models import LogEntry, SpinnakerEvent
from .utils import to_json


def _message(body: str, timestamp: str) -> str:
    return f"{MESSAGE_PREFIX}{body} at {timestamp}."


def _reason_segment(reason) -> str:
    return f' for reason "{reason}"' if reason else ''


def _pipeline_entry(event: SpinnakerEvent, message: str, severity: str = SEVERITY_INFO) -> LogEntry:
    execution = event.execution
    return LogEntry(
        message=message,
        severity=severity,
        application=execution.get('application'),
        pipeline=execution.get('name'),
    )


def format_jenkins_build(event: SpinnakerEvent) -> LogEntry:
    project = event.content['project']
    last_build = project['lastBuild']
    # usa o timestamp do próprio build, não o do envelope
    build_timestamp = event.format_timestamp(last_build['timestamp'])
    result = last_build.get('result')

    if result == 'SUCCESS':
        body = f"Jenkins project {project['name']} successfully completed build #{last_build['number']}"
        return LogEntry(message=_message(body, build_timestamp), severity=SEVERITY_INFO)

    body = f"Jenkins project {project['name']} build #{last_build['number']} finished with status {result}"
    return LogEntry(message=_message(body, build_timestamp), severity=SEVERITY_ERROR)


def format_docker_push(event: SpinnakerEvent) -> LogEntry:
    content = event.content
    body = (
        f"Docker tag {content.get('tag')} was pushed to repository {content.get('repository')} "
        f"in registry {content.get('registry')}"
    )
    return LogEntry(message=_message(body, event.created_at), severity=SEVERITY_INFO)


def format_git_webhook(event: SpinnakerEvent) -> LogEntry:
    content = event.content
    body = (
        f"Received webhook for project {content.get('slug')} in org {content.get('repoProject')} "
        f"from {event.source} at commit {content.get('hash')} on branch {content.get('branch')}"
    )
    return LogEntry(message=_message(body, event.created_at), severity=SEVERITY_INFO)


def format_stage_starting(event: SpinnakerEvent) -> LogEntry:
    stage = event.context['stageDetails']
    execution = event.execution
    body = (
        f"User {event.user} executed operation {stage.get('name')} (of type {stage.get('type')}) "
        f"via pipeline {execution['name']} of application {execution['application']}"
    )
    return _pipeline_entry(event, _message(body, event.created_at))


def format_adhoc_stage_starting(event: SpinnakerEvent) -> LogEntry:
    execution = event.execution
    operation = execution['stages'][0]['type']
    body = (
        f"User {event.user} executed ad-hoc operation {operation} ({execution.get('description')})"
        f"{_reason_segment(event.context.get('reason'))}"
    )
    return LogEntry(message=_message(body, event.created_at), severity=SEVERITY_INFO)


def format_pipeline_starting(event: SpinnakerEvent) -> LogEntry:
    execution = event.execution
    trigger = execution['trigger']
    parameters = trigger.get('parameters')
    parameters_segment = f" (with parameters {to_json(parameters)})" if parameters else ''
    body = (
        f"User {event.user} executed pipeline {execution['name']} of application {execution['application']} "
        f"via {trigger.get('type')} trigger{parameters_segment}"
    )
    return _pipeline_entry(event, _message(body, event.created_at))


def format_pipeline_canceled(event: SpinnakerEvent) -> LogEntry:
    execution = event.execution
    canceled_by = execution.get('canceledBy')

    if canceled_by:
        body = (
            f"User {canceled_by} canceled pipeline {execution['name']} of application {execution['application']}"
            f"{_reason_segment(execution.get('cancellationReason'))}"
        )
        return _pipeline_entry(event, _message(body, event.created_at), SEVERITY_WARNING)

    body = f"Pipeline {execution['name']} of application {execution['application']} failed"
    return _pipeline_entry(event, _message(body, event.created_at), SEVERITY_ERROR)


def format_pipeline_complete(event: SpinnakerEvent) -> LogEntry:
    execution = event.execution
    body = f"Pipeline {execution['name']} of application {execution['application']} completed"
    return _pipeline_entry(event, _message(body, event.created_at))


def format_judgment_stop(event: SpinnakerEvent) -> LogEntry:
    context = event.context
    body = (
        f"User {context.get('lastModifiedBy')} judged stage {context['stageDetails'].get('name')} "
        f"of pipeline {event.execution['name']} to stop"
    )
    return _pipeline_entry(event, _message(body, event.created_at), SEVERITY_WARNING)


def format_judgment_continue(event: SpinnakerEvent) -> LogEntry:
    # sem atributos e sem severidade explícita, igual ao comportamento original
    context = event.context
    execution = event.execution
    judgment_input = context.get('judgmentInput')
    judgment_segment = f' (judgment "{judgment_input}" was selected)' if judgment_input else ''
    body = (
        f"User {context.get('lastModifiedBy')} judged stage {context['stageDetails'].get('name')} "
        f"of pipeline {execution['name']} of application {execution['application']} to continue{judgment_segment}"
    )
    return LogEntry(message=_message(body, event.created_at))


def _failure_reason_segment(context: dict) -> str:
    errors = ((context.get('exception') or {}).get('details') or {}).get('errors')
    if errors and errors[0]:
        return f" due to {to_json(errors)}"
    return ''


def format_task_failed(event: SpinnakerEvent) -> LogEntry:
    context = event.context
    stage = context['stageDetails']
    execution = event.execution
    body = (
        f"Operation {stage.get('name')} (of type {stage.get('type')}) of pipeline {execution['name']} "
        f"of application {execution['application']} failed{_failure_reason_segment(context)}"
    )
    return _pipeline_entry(event, _message(body, event.created_at), SEVERITY_ERROR)


def format_adhoc_task_failed(event: SpinnakerEvent) -> LogEntry:
    context = event.context
    body = f"Ad-hoc operation {context['stageDetails'].get('type')} failed{_failure_reason_segment(context)}"
    return LogEntry(message=_message(body, event.created_at), severity=SEVERITY_ERROR)
