from typing import Any, Callable, Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from .constants import SEVERITY_INFO

Severity = Literal["info", "warning", "error", "debug"]


class LogEntry(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    message: str = Field(..., min_length=1)
    severity: Severity = SEVERITY_INFO
    application: Optional[str] = None
    pipeline: Optional[str] = None

    def to_struct(self) -> Dict[str, Any]:
        return self.model_dump(include={'message', 'application', 'pipeline'}, exclude_none=True)


class SpinnakerEvent(BaseModel):
    """Visão do payload do echo já com os campos derivados."""

    model_config = ConfigDict(frozen=True)

    source: Optional[str] = None
    event_type: Optional[str] = None
    content: Dict[str, Any] = Field(default_factory=dict)
    execution: Optional[Dict[str, Any]] = None
    context: Optional[Dict[str, Any]] = None
    user: str
    created_at: str
    format_timestamp: Callable[[Any], str]

    @property
    def standalone(self) -> bool:
        return bool(self.content.get('standalone'))

    @property
    def stage_details(self) -> Optional[Dict[str, Any]]:
        if not self.context:
            return None
        return self.context.get('stageDetails')
