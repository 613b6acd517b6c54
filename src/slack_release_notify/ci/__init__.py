"""GitHub Actions runner integration."""

from slack_release_notify.ci.context import ActionContext, RunnerEnv, load_event_payload
from slack_release_notify.ci.outputs import StepOutputs, set_failed

__all__ = [
    "ActionContext",
    "RunnerEnv",
    "StepOutputs",
    "load_event_payload",
    "set_failed",
]
