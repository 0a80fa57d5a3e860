"""Sequential workflow execution.

Steps run strictly in order. Each step sees the successful results of the
steps before it and the shared context they published. A step that raises
or times out is recorded as a failed response and execution continues.
"""

from ..cancellation import CancellationToken, call_with_timeout
from ..config import Settings, get_settings
from ..exceptions import StepTimeoutError
from ..models import AgentRequest, AgentResponse
from ..retry import with_retry
from .events import CoordinationEvent, CoordinationEvents
from .workflow import AgentWorkflow, CoordinatedResponse, WorkflowStep


def build_contextual_request(step: WorkflowStep, results: CoordinatedResponse) -> AgentRequest:
    """Append prior step results and shared context to a step's request."""
    text = step.request.input

    if results.responses:
        text += "\n\nPrevious Results:\n"
        for name, response in results.responses.items():
            if response.success and response.has_result:
                text += f"{name}: {response.result}\n"

    shared = results.execution_context.shared_results
    if shared:
        text += "\n\nShared Context:\n"
        for key, value in shared.items():
            text += f"{key}: {value}\n"

    return step.request.with_input(text)


class WorkflowExecutor:
    """Runs an AgentWorkflow and collects the step responses."""

    def __init__(
        self,
        settings: Settings | None = None,
        events: CoordinationEvents | None = None,
    ):
        self.settings = settings or get_settings()
        self.events = events or CoordinationEvents()

    def execute(
        self,
        workflow: AgentWorkflow,
        cancellation: CancellationToken | None = None,
    ) -> CoordinatedResponse:
        """Execute every step of ``workflow`` in order.

        Execution stops early when a step sets ``should_terminate_workflow``
        or when ``cancellation`` is triggered between steps.
        """
        results = CoordinatedResponse()

        for step in workflow.steps:
            if cancellation is not None and cancellation.is_cancelled:
                results.cancelled = True
                break

            request = build_contextual_request(step, results)
            self.events.emit(
                CoordinationEvent.STEP_STARTED,
                workflow_id=workflow.workflow_id,
                step=step.name,
                agent_id=step.assigned_agent.agent_id,
                coordinated=step.requires_coordination,
            )

            try:
                response = self._run_step(step, request)
            except Exception as e:
                response = AgentResponse.failure(
                    f"Step execution failed: {e}",
                    agent_id=step.assigned_agent.agent_id,
                    error_type=type(e).__name__,
                )
                self.events.emit(
                    CoordinationEvent.STEP_FAILED,
                    workflow_id=workflow.workflow_id,
                    step=step.name,
                    error=str(e),
                )
            else:
                self.events.emit(
                    CoordinationEvent.STEP_COMPLETED,
                    workflow_id=workflow.workflow_id,
                    step=step.name,
                    success=response.success,
                    confidence=response.confidence,
                )

            results.responses[step.name] = response
            results.execution_context.update_from_response(step.name, response)

            if response.should_terminate_workflow:
                results.terminated_early = True
                results.terminated_at = step.name
                self.events.emit(
                    CoordinationEvent.WORKFLOW_TERMINATED,
                    workflow_id=workflow.workflow_id,
                    step=step.name,
                )
                break

        return results

    def _run_step(self, step: WorkflowStep, request: AgentRequest) -> AgentResponse:
        agent = step.assigned_agent

        @with_retry(
            max_retries=self.settings.max_step_retries,
            initial_delay=self.settings.retry_initial_delay,
            retry_on=(Exception,),
            # a timed-out call keeps running in its abandoned thread
            give_up_on=(StepTimeoutError,),
        )
        def attempt() -> AgentResponse:
            def call() -> AgentResponse:
                if step.requires_coordination:
                    return agent.coordinate(request, list(step.collaborators))
                return agent.process(request)
            return call_with_timeout(call, self.settings.step_timeout, operation=step.name)

        response = attempt()
        if not isinstance(response, AgentResponse):
            raise TypeError(
                f"agent {agent.agent_id} returned {type(response).__name__}, not AgentResponse"
            )
        return response
