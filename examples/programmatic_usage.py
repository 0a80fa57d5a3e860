import os
from dotenv import load_dotenv

# Import the necessary components
from agent_coordinator import (
    CoordinationEvent,
    ComplexAgentRequest,
    LLMInferenceService,
    OptimizationTarget,
    PerformanceLevel,
    PerformanceProfile,
    SecurityLevel,
    SecurityRequirements,
    create_coordinator,
)
from agent_coordinator.agents import (
    create_performance_agent,
    create_platform_agent,
    create_quality_agent,
    create_security_agent,
)
from agent_coordinator.clients.together import TogetherClient
from agent_coordinator.coordination import WorkflowVisualizer
from agent_coordinator.logging import setup_logging

# Load environment variables (API keys)
load_dotenv()


# Example of an event listener, e.g. for forwarding progress to a UI
def print_progress(event: CoordinationEvent, fields: dict) -> None:
    if event in (CoordinationEvent.STEP_STARTED, CoordinationEvent.STEP_COMPLETED):
        print(f"[{event.value}] {fields.get('step')}")


def main():
    setup_logging("INFO")

    # 1. Initialize the LLM Client
    # You can choose any provider you have keys for

    # Example: Using OpenAI
    # client = OpenAIClient(model="gpt-4o")

    # Example: Using Together AI
    api_key = os.getenv("TOGETHER_API_KEY")
    if not api_key:
        print("Please set TOGETHER_API_KEY in .env")
        return

    client = TogetherClient(api_key=api_key, model="meta-llama/Meta-Llama-3.1-70B-Instruct-Turbo")

    # 2. Wrap the client as the inference oracle shared by the coordinator and agents
    inference = LLMInferenceService(client)

    # 3. Pick the agents you want the coordinator to schedule
    # Leave agents out entirely to get every built-in specialist
    agents = [
        create_security_agent(inference),
        create_performance_agent(inference),
        create_platform_agent(inference, platforms=("web", "android")),
        create_quality_agent(inference),
    ]
    coordinator = create_coordinator(inference, agents=agents)
    coordinator.events.subscribe(print_progress)

    # 4. Describe the task
    request = ComplexAgentRequest(
        description="Generate a login endpoint with password hashing and rate limiting",
        target_platforms=("web", "android"),
        performance_requirements=PerformanceProfile(
            primary_target=OptimizationTarget.PERFORMANCE,
            minimum_acceptable_level=PerformanceLevel.HIGH,
        ),
        security_requirements=SecurityRequirements(level=SecurityLevel.HIGH),
    )

    # Optional: preview the plan before running it
    workflow = coordinator.create_workflow(agents, request)
    print(WorkflowVisualizer(workflow).generate_mermaid_graph())

    # 5. Run the coordination
    response = coordinator.coordinate_complex_task(request)
    if response.success:
        print(f"Confidence: {response.confidence:.2f}")
        print(response.result)
    else:
        print(f"Coordination failed: {response.error_message}")

if __name__ == "__main__":
    main()
