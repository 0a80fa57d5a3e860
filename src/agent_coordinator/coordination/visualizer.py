import re

from .workflow import AgentWorkflow, CoordinatedResponse


def _label(text: str) -> str:
    return text.replace('"', "'")


def _node_id(text: str) -> str:
    return re.sub(r"\W", "_", text)


class WorkflowVisualizer:
    def __init__(self, workflow: AgentWorkflow):
        self.workflow = workflow

    def generate_mermaid_graph(self, results: CoordinatedResponse | None = None) -> str:
        """
        Generates a Mermaid flowchart of the workflow's steps in execution order.

        When ``results`` is given, steps are styled by outcome and steps that
        never ran are marked as skipped.
        """
        graph = ["graph TD"]
        graph.append(f'    Request["{_label(self.workflow.name)}"]')

        previous = "Request"
        for i, step in enumerate(self.workflow.steps, start=1):
            node = f"Step_{i}"
            graph.append(
                f'    {node}["{_label(step.name)}<br/>{_label(step.assigned_agent.agent_id)}"]'
            )
            graph.append(f"    {previous} --> {node}")
            for collaborator in step.collaborators:
                graph.append(
                    f'    {node} -.->|coordinates| Agent_{i}_{_node_id(collaborator.agent_id)}'
                    f'["{_label(collaborator.agent_id)}"]'
                )
            previous = node

        graph.append("    Synthesis[Synthesis]")
        graph.append(f"    {previous} --> Synthesis")

        if results is not None:
            graph.extend(self._outcome_styles(results))
        return "\n".join(graph)

    def _outcome_styles(self, results: CoordinatedResponse) -> list[str]:
        lines = [
            "    classDef succeeded fill:#d4edda,stroke:#28a745",
            "    classDef failed fill:#f8d7da,stroke:#dc3545",
            "    classDef skipped fill:#eeeeee,stroke:#999999,stroke-dasharray: 4",
        ]
        for i, step in enumerate(self.workflow.steps, start=1):
            response = results.responses.get(step.name)
            if response is None:
                outcome = "skipped"
            elif response.success:
                outcome = "succeeded"
            else:
                outcome = "failed"
            lines.append(f"    class Step_{i} {outcome}")
        return lines
