from abc import ABC, abstractmethod

from app.processor.models import WorkflowState


class PipelineStep(ABC):
    """One user-gated stage. Runs against a copy of the workflow state."""

    name: str = ""

    @abstractmethod
    def run(self, context: WorkflowState) -> WorkflowState:
        raise NotImplementedError
